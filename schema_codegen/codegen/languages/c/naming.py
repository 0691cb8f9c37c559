"""
C-specific naming rules.

Handles C reserved words and the naming conventions of the generated
C client: snake_case variables and models, ``<Name>API`` api files,
hyphenated unit-test files and upper-case enum members.
"""

from types import MappingProxyType
from typing import Mapping, Optional

from ....logging_config import get_logger
from ...core.naming import (
    UPPERCASE_ONLY_PATTERN,
    NameCategory,
    NamingRules,
    camelize,
    sanitize_name,
    starts_with_digit,
    underscore,
)

logger = get_logger(__name__)


# C reserved keywords (https://en.cppreference.com/w/c/keyword)
C_RESERVED_WORDS = frozenset(
    {
        "auto",
        "break",
        "case",
        "char",
        "const",
        "continue",
        "default",
        "do",
        "double",
        "else",
        "enum",
        "extern",
        "float",
        "for",
        "goto",
        "if",
        "inline",
        "int",
        "long",
        "register",
        "remove",
        "restrict",
        "return",
        "short",
        "signed",
        "sizeof",
        "static",
        "struct",
        "switch",
        "typedef",
        "union",
        "unsigned",
        "void",
        "volatile",
        "while",
        "_Alignas",
        "_Alignof",
        "_Atomic",
        "_Bool",
        "_Complex",
        "_Generic",
        "_Imaginary",
        "_Noreturn",
        "_Static_assert",
        "_Thread_local",
    }
)

# Enum datatypes whose values are emitted as bare numeric literals
NUMERIC_ENUM_DATATYPES = frozenset(
    {"Integer", "Float", "int", "short", "long", "float", "double"}
)

DEFAULT_API_NAME = "DefaultApi"
API_SUFFIX = "API"
EMPTY_ENUM_VAR_NAME = "EMPTY"
MODEL_INCLUDE_TEMPLATE = '#include "../model/{name}.h"'


class CNamingRules(NamingRules):
    """Identifier resolver for the C client generator."""

    def __init__(
        self,
        reserved_words_mappings: Optional[Mapping[str, str]] = None,
        import_mappings: Optional[Mapping[str, str]] = None,
        model_name_prefix: str = "",
        model_name_suffix: str = "",
        api_package: str = "api",
    ):
        """
        Initialize the C naming rules.

        Args:
            reserved_words_mappings: Explicit replacements for reserved words
            import_mappings: Model name -> header name overrides for includes
            model_name_prefix: Prefix joined to every model name with ``_``
            model_name_suffix: Suffix joined to every model name with ``_``
            api_package: Root used when building api import paths
        """
        super().__init__()
        self.reserved_words = C_RESERVED_WORDS
        self.reserved_words_mappings = MappingProxyType(
            dict(reserved_words_mappings or {})
        )
        self.import_mappings = MappingProxyType(dict(import_mappings or {}))
        self.model_name_prefix = model_name_prefix or ""
        self.model_name_suffix = model_name_suffix or ""
        self.api_package = api_package

    # Reserved words and escaping

    def is_reserved_word(self, name: str) -> bool:
        return name in self.reserved_words

    def escape_reserved_word(self, name: str) -> str:
        if name in self.reserved_words_mappings:
            return self.reserved_words_mappings[name]
        return f"_{name}"

    def _needs_escape(self, name: str) -> bool:
        return self.is_reserved_word(name) or starts_with_digit(name)

    def escape_quotation_mark(self, text: str) -> str:
        # single quotes would terminate the generated literal
        return text.replace("'", "")

    def escape_unsafe_characters(self, text: str) -> str:
        return text.replace("=end", "=_end").replace("=begin", "=_begin")

    def escape_text(self, text: str) -> str:
        """Escape text for embedding in generated source and string literals."""
        if text is None:
            return None

        result = text
        for whitespace in ("\t", "\n", "\r"):
            result = result.replace(whitespace, " ")
        result = result.replace("\\", "\\\\").replace('"', '\\"')
        result = self.escape_quotation_mark(result)
        return self.escape_unsafe_characters(result)

    # Variables and parameters

    def to_var_name(self, name: str) -> str:
        name = sanitize_name(name)

        if UPPERCASE_ONLY_PATTERN.match(name):
            name = name.lower()

        name = underscore(name)

        if self._needs_escape(name):
            name = self.escape_reserved_word(name)

        return name

    def to_param_name(self, name: str) -> str:
        if self._needs_escape(name):
            name = self.escape_reserved_word(name)
        return name.replace("-", "_")

    # Models

    def to_model_name(self, name: str) -> str:
        original = name
        name = sanitize_name(name)

        if self.model_name_prefix:
            name = f"{self.model_name_prefix}_{name}"

        if self.model_name_suffix:
            name = f"{name}_{self.model_name_suffix}"

        if self.is_reserved_word(name):
            renamed = "Model" + camelize(name)
            self._renamed(
                NameCategory.MODEL_TYPE, original, underscore(renamed), "reserved word"
            )
            name = renamed

        if starts_with_digit(name):
            renamed = f"model_{name}"
            self._renamed(
                NameCategory.MODEL_TYPE,
                original,
                underscore(renamed),
                "model name starts with number",
            )
            name = renamed

        return underscore(name)

    def to_model_filename(self, name: str) -> str:
        return underscore(self.to_model_name(name))

    def to_model_doc_filename(self, name: str) -> str:
        return self.to_model_name(name)

    def to_model_test_filename(self, name: str) -> str:
        return ("test_" + self.to_model_filename(name)).replace("_", "-")

    def to_model_import(self, name: str) -> str:
        """
        Build the include directive for a model header.

        ``name`` is an already resolved model name; an entry in the import
        mappings replaces it verbatim.
        """
        header = self.import_mappings.get(name, name)
        return MODEL_INCLUDE_TEMPLATE.format(name=header)

    # APIs

    def _api_base_name(self, name: str) -> str:
        return camelize(name.replace("-", "_")) + API_SUFFIX

    def to_api_name(self, name: str) -> str:
        if not name:
            return DEFAULT_API_NAME
        return self._api_base_name(name)

    def to_api_filename(self, name: str) -> str:
        return self._api_base_name(name)

    def to_api_doc_filename(self, name: str) -> str:
        return self.to_api_name(name)

    def to_api_test_filename(self, name: str) -> str:
        return ("test_" + self.to_api_filename(name)).replace("_", "-")

    def to_api_import(self, name: str) -> str:
        return f"{self.api_package}/{self.to_api_filename(name)}"

    def to_operation_id(self, operation_id: str) -> str:
        if self.is_reserved_word(operation_id):
            renamed = camelize(sanitize_name(f"call_{operation_id}"), lower_first=True)
            self._renamed(
                NameCategory.OPERATION_ID, operation_id, renamed, "reserved word"
            )
            return renamed

        if starts_with_digit(operation_id):
            renamed = camelize(sanitize_name(f"call_{operation_id}"), lower_first=True)
            self._renamed(
                NameCategory.OPERATION_ID,
                operation_id,
                renamed,
                "starting with a number",
            )
            return renamed

        return camelize(sanitize_name(operation_id), lower_first=True)

    # Enums

    @staticmethod
    def is_numeric_datatype(datatype: Optional[str]) -> bool:
        return datatype in NUMERIC_ENUM_DATATYPES

    def to_enum_value(self, value: str, datatype: str) -> str:
        value = value.replace("-", "_")

        if self.is_reserved_word(value):
            value = self.escape_reserved_word(value)

        if self.is_numeric_datatype(datatype):
            return value

        if starts_with_digit(value):
            return self.escape_reserved_word(self.escape_text(value))
        return self.escape_text(value)

    def to_enum_var_name(self, name: str, datatype: str) -> str:
        if not name:
            return EMPTY_ENUM_VAR_NAME

        if self.is_numeric_datatype(datatype):
            var_name = name.replace("-", "MINUS_")
            var_name = var_name.replace("+", "PLUS_")
            return var_name.replace(".", "_DOT_")

        enum_name = camelize(sanitize_name(name)).upper()
        return self._finish_enum_name(enum_name)

    def to_enum_name(self, property_name: str) -> str:
        enum_name = camelize(self.to_model_name(property_name)).upper()
        return self._finish_enum_name(enum_name)

    def _finish_enum_name(self, enum_name: str) -> str:
        if enum_name.startswith("_"):
            enum_name = enum_name[1:]
        if enum_name.endswith("_"):
            enum_name = enum_name[:-1]

        if starts_with_digit(enum_name):
            return self.escape_reserved_word(enum_name)
        return enum_name
