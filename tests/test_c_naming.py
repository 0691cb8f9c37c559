"""Test the C identifier resolver."""

import pytest

from schema_codegen.codegen.core.naming import NameCategory
from schema_codegen.codegen.languages.c.naming import C_RESERVED_WORDS, CNamingRules

DIGIT_NAMES = ["1abc", "200Response", "3d_model", "9"]


class TestReservedWords:
    """Test reserved word detection and escaping."""

    def test_lookup_is_case_sensitive(self, naming):
        """Test only the exact keyword spelling is reserved."""
        assert naming.is_reserved_word("int")
        assert naming.is_reserved_word("_Bool")
        assert not naming.is_reserved_word("Int")
        assert not naming.is_reserved_word("pet")

    def test_escape_prefixes_underscore(self, naming):
        """Test default escaping prefixes an underscore."""
        assert naming.escape_reserved_word("int") == "_int"

    def test_escape_uses_mapping_first(self):
        """Test an explicit mapping wins over the default escape."""
        naming = CNamingRules(reserved_words_mappings={"int": "integer_value"})
        assert naming.escape_reserved_word("int") == "integer_value"
        assert naming.to_var_name("int") == "integer_value"
        assert naming.escape_reserved_word("long") == "_long"

    def test_reserved_table_is_immutable(self, naming):
        """Test lookup tables cannot be changed at runtime."""
        assert isinstance(C_RESERVED_WORDS, frozenset)
        with pytest.raises(TypeError):
            naming.reserved_words_mappings["int"] = "x"

    @pytest.mark.parametrize("word", sorted(C_RESERVED_WORDS))
    def test_reserved_word_never_survives(self, naming, word):
        """Test no resolved identifier is a reserved word left unchanged."""
        assert naming.to_var_name(word) != word
        assert naming.to_param_name(word) != word
        assert naming.to_model_name(word) != word
        assert naming.to_operation_id(word) != word
        assert not naming.is_reserved_word(naming.to_var_name(word))
        assert not naming.is_reserved_word(naming.to_model_name(word))


class TestEscapeText:
    """Test text escaping for generated literals."""

    def test_whitespace_collapsed(self, naming):
        """Test control whitespace becomes spaces."""
        assert naming.escape_text("a\tb\nc\rd") == "a b c d"

    def test_backslash_and_double_quote(self, naming):
        """Test backslashes and double quotes are escaped."""
        assert naming.escape_text('say "hi"') == 'say \\"hi\\"'
        assert naming.escape_text("a\\b") == "a\\\\b"

    def test_single_quote_removed(self, naming):
        """Test single quotes are dropped."""
        assert naming.escape_text("O'Brien") == "OBrien"

    def test_unsafe_markers_rewritten(self, naming):
        """Test block comment markers are neutralized."""
        assert naming.escape_text("=begin x =end") == "=_begin x =_end"

    def test_none_passthrough(self, naming):
        """Test a missing text stays missing."""
        assert naming.escape_text(None) is None


class TestVariableAndParameterNames:
    """Test variable and parameter naming."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("PhoneNumber", "phone_number"),
            ("petId", "pet_id"),
            ("ID", "id"),
            ("pet-name", "pet_name"),
            ("int", "_int"),
            ("2fa", "_2fa"),
            ("$", "value"),
        ],
    )
    def test_to_var_name(self, naming, raw, expected):
        """Test variable names are snake_case and legal."""
        assert naming.to_var_name(raw) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("petId", "petId"),
            ("api-key", "api_key"),
            ("auto", "_auto"),
            ("1st", "_1st"),
        ],
    )
    def test_to_param_name(self, naming, raw, expected):
        """Test parameter names keep their case."""
        assert naming.to_param_name(raw) == expected


class TestModelNames:
    """Test model type and file naming."""

    def test_plain_model(self, naming):
        """Test a regular schema name is snake_cased."""
        assert naming.to_model_name("PhoneNumber") == "phone_number"
        assert len(naming.diagnostics) == 0

    def test_prefix_and_suffix(self):
        """Test prefix and suffix are joined with underscores."""
        naming = CNamingRules(model_name_prefix="oa", model_name_suffix="v1")
        assert naming.to_model_name("Pet") == "oa_pet_v1"

    def test_reserved_model_renamed(self, naming):
        """Test a reserved model name is renamed with a diagnostic."""
        assert naming.to_model_name("int") == "model_int"

        [diagnostic] = naming.diagnostics.for_category(NameCategory.MODEL_TYPE)
        assert diagnostic.original == "int"
        assert diagnostic.replacement == "model_int"
        assert diagnostic.reason == "reserved word"

    def test_digit_model_renamed(self, naming):
        """Test a numeric-prefixed model name is renamed with a diagnostic."""
        assert naming.to_model_name("200Response") == "model_200_response"

        [diagnostic] = list(naming.diagnostics)
        assert diagnostic.replacement == "model_200_response"
        assert diagnostic.reason == "model name starts with number"

    def test_file_names(self, naming):
        """Test model file, doc and test file names."""
        assert naming.to_model_filename("PhoneNumber") == "phone_number"
        assert naming.to_model_doc_filename("PhoneNumber") == "phone_number"
        assert naming.to_model_test_filename("PhoneNumber") == "test-phone-number"

    def test_model_file_matches_type_name(self, naming):
        """Test file name and type name agree for the same schema."""
        for name in ["Pet", "OrderStatus", "int", "1abc", "pet-store"]:
            assert naming.to_model_filename(name) == naming.to_model_name(name)

    def test_model_import(self, naming):
        """Test the include directive for a model header."""
        assert naming.to_model_import("pet") == '#include "../model/pet.h"'

    def test_model_import_mapping(self):
        """Test an import mapping replaces the header name."""
        naming = CNamingRules(import_mappings={"pet": "vendor_pet"})
        assert naming.to_model_import("pet") == '#include "../model/vendor_pet.h"'
        assert naming.to_model_import("tag") == '#include "../model/tag.h"'


class TestApiNames:
    """Test API naming."""

    def test_empty_name_is_default(self, naming):
        """Test an empty tag maps to the default API name."""
        assert naming.to_api_name("") == "DefaultApi"

    @pytest.mark.parametrize(
        "raw, expected",
        [("pet", "PetAPI"), ("pet_store", "PetStoreAPI"), ("pet-store", "PetStoreAPI")],
    )
    def test_api_name(self, naming, raw, expected):
        """Test API names are camelized with the API suffix."""
        assert naming.to_api_name(raw) == expected
        assert naming.to_api_filename(raw) == expected

    @pytest.mark.parametrize("raw", ["pet", "store", "user_account", "Default"])
    def test_name_and_filename_agree(self, naming, raw):
        """Test API name and file name agree when the name has no dashes."""
        assert naming.to_api_name(raw) == naming.to_api_filename(raw)
        assert naming.to_api_doc_filename(raw) == naming.to_api_name(raw)

    def test_test_filename(self, naming):
        """Test API test file names are hyphenated."""
        assert naming.to_api_test_filename("pet") == "test-PetAPI"
        assert naming.to_api_test_filename("user_account") == "test-UserAccountAPI"

    def test_api_import(self, naming):
        """Test the API import path uses the api package."""
        assert naming.to_api_import("pet") == "api/PetAPI"
        assert CNamingRules(api_package="src/api").to_api_import("pet") == "src/api/PetAPI"


class TestOperationIds:
    """Test operation id naming."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("getPetById", "getPetById"),
            ("get-pet", "getPet"),
            ("list pets", "listPets"),
            ("GetPet", "getPet"),
        ],
    )
    def test_plain_ids(self, naming, raw, expected):
        """Test ids are sanitized and lower camelized."""
        assert naming.to_operation_id(raw) == expected
        assert len(naming.diagnostics) == 0

    def test_reserved_id(self, naming):
        """Test a reserved id gets the call prefix and a diagnostic."""
        assert naming.to_operation_id("return") == "callReturn"

        [diagnostic] = naming.diagnostics.for_category(NameCategory.OPERATION_ID)
        assert diagnostic.reason == "reserved word"
        assert diagnostic.replacement == "callReturn"

    def test_digit_id(self, naming):
        """Test a numeric-prefixed id gets the call prefix and a diagnostic."""
        assert naming.to_operation_id("123abc") == "call123abc"

        [diagnostic] = list(naming.diagnostics)
        assert diagnostic.reason == "starting with a number"


class TestEnumNames:
    """Test enum value, member and type naming."""

    @pytest.mark.parametrize(
        "value, datatype, expected",
        [
            ("available", "char", "available"),
            ("sold-out", "char", "sold_out"),
            ("int", "char", "_int"),
            ("1st", "char", "_1st"),
            ("it's", "char", "its"),
            ("5", "int", "5"),
            ("2.5", "Float", "2.5"),
        ],
    )
    def test_enum_value(self, naming, value, datatype, expected):
        """Test enum values are escaped for their datatype."""
        assert naming.to_enum_value(value, datatype) == expected

    @pytest.mark.parametrize(
        "name, datatype, expected",
        [
            ("-1", "Integer", "MINUS_1"),
            ("2.5", "Integer", "2_DOT_5"),
            ("-1.5", "double", "MINUS_1_DOT_5"),
            ("+3", "int", "PLUS_3"),
            ("available", "char", "AVAILABLE"),
            ("sold out", "char", "SOLDOUT"),
            ("_private_", "char", "PRIVATE"),
            ("1st", "char", "_1ST"),
        ],
    )
    def test_enum_var_name(self, naming, name, datatype, expected):
        """Test enum member names."""
        assert naming.to_enum_var_name(name, datatype) == expected

    def test_empty_enum_var_name(self, naming):
        """Test an empty member name maps to the sentinel."""
        assert naming.to_enum_var_name("", "char") == "EMPTY"
        assert naming.to_enum_var_name("", "int") == "EMPTY"

    @pytest.mark.parametrize(
        "name, expected",
        [("status", "STATUS"), ("int", "MODELINT"), ("2fa", "MODEL2FA")],
    )
    def test_enum_name_follows_model_name(self, naming, name, expected):
        """Test enum type names derive from the model name."""
        assert naming.to_enum_name(name) == expected


class TestDigitPrefixedNames:
    """Test digit-prefixed inputs never produce digit-prefixed identifiers."""

    @pytest.mark.parametrize("name", DIGIT_NAMES)
    def test_never_starts_with_digit(self, naming, name):
        """Test model, operation, variable and enum names are legal."""
        resolved = [
            naming.to_model_name(name),
            naming.to_operation_id(name),
            naming.to_var_name(name),
            naming.to_enum_name(name),
            naming.to_enum_var_name(name, "char"),
        ]
        for identifier in resolved:
            assert not identifier[0].isdigit(), identifier


class TestDiagnosticsListener:
    """Test rename diagnostics reach subscribers."""

    def test_listener_receives_renames(self, naming):
        """Test a subscribed listener is notified for each rename."""
        received = []
        naming.diagnostics.subscribe(received.append)

        naming.to_model_name("int")
        naming.to_operation_id("9lives")
        naming.to_model_name("Pet")

        assert [d.category for d in received] == [
            NameCategory.MODEL_TYPE,
            NameCategory.OPERATION_ID,
        ]
