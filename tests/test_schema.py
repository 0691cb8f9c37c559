"""Test the schema layer."""

import pytest

from schema_codegen.codegen.core.schema import (
    DEFAULT_TAG,
    ApiDocument,
    SchemaError,
    SchemaIntrospector,
    ref_name,
)

SWAGGER = {
    "swagger": "2.0",
    "info": {"title": "Legacy", "version": 2},
    "paths": {
        "/users/{userId}": {
            "get": {
                "tags": ["user"],
                "parameters": [
                    {
                        "name": "userId",
                        "in": "path",
                        "required": True,
                        "type": "integer",
                        "format": "int64",
                    },
                    {"name": "verbose", "in": "query", "type": "boolean"},
                ],
                "responses": {"200": {"schema": {"$ref": "#/definitions/User"}}},
            },
            "put": {
                "tags": ["user"],
                "operationId": "updateUser",
                "parameters": [
                    {
                        "name": "body",
                        "in": "body",
                        "schema": {"$ref": "#/definitions/User"},
                    }
                ],
                "responses": {"204": {}},
            },
        }
    },
    "definitions": {
        "User": {"type": "object", "properties": {"name": {"type": "string"}}}
    },
}


class TestApiDocument:
    """Test normalizing API descriptions."""

    def test_openapi3(self, petstore):
        """Test an OpenAPI 3 description is parsed."""
        assert petstore.title == "Petstore"
        assert petstore.version == "1.0.0"
        assert set(petstore.schemas) == {
            "Category",
            "Tag",
            "Pet",
            "OrderStatus",
            "Order",
        }
        assert len(petstore.operations) == 5

    def test_operation_details(self, petstore):
        """Test parameters, bodies and responses are attached."""
        ops = {op.operation_id: op for op in petstore.operations}

        get_pet = ops["getPetById"]
        assert get_pet.method == "GET"
        assert get_pet.path == "/pet/{petId}"
        assert [p.name for p in get_pet.parameters] == ["petId"]
        assert get_pet.parameters[0].required
        assert get_pet.response == {"$ref": "#/components/schemas/Pet"}

        add_pet = ops["addPet"]
        assert add_pet.request_body == {"$ref": "#/components/schemas/Pet"}

        delete_pet = ops["deletePet"]
        assert [p.location for p in delete_pet.parameters] == ["path", "header"]
        assert delete_pet.response is None

    def test_untagged_operations_use_default_tag(self, petstore):
        """Test operations without tags are grouped under the default tag."""
        groups = petstore.operations_by_tag()

        assert set(groups) == {"pet", "store", DEFAULT_TAG}
        assert [op.operation_id for op in groups[DEFAULT_TAG]] == ["healthCheck"]
        assert len(groups["pet"]) == 3

    def test_swagger2(self):
        """Test a Swagger 2 description is parsed."""
        document = ApiDocument.from_dict(SWAGGER)

        assert document.version == "2"
        assert set(document.schemas) == {"User"}

        get_user, update_user = document.operations
        assert get_user.operation_id == "get_users_userId"
        assert get_user.parameters[0].schema == {"type": "integer", "format": "int64"}
        assert get_user.response == {"$ref": "#/definitions/User"}
        assert update_user.request_body == {"$ref": "#/definitions/User"}
        assert update_user.parameters == []

    def test_parameter_reference(self):
        """Test shared parameters are resolved by reference."""
        data = {
            "openapi": "3.0.0",
            "info": {"title": "t", "version": "1"},
            "paths": {
                "/items": {
                    "get": {
                        "operationId": "listItems",
                        "parameters": [{"$ref": "#/components/parameters/Limit"}],
                    }
                }
            },
            "components": {
                "parameters": {
                    "Limit": {"name": "limit", "in": "query", "schema": {"type": "integer"}}
                }
            },
        }
        [operation] = ApiDocument.from_dict(data).operations
        assert operation.parameters[0].name == "limit"

    def test_not_a_mapping(self):
        """Test non-object input is rejected."""
        with pytest.raises(SchemaError):
            ApiDocument.from_dict(["not", "a", "dict"])


class TestSchemaIntrospector:
    """Test abstract type and reference resolution."""

    @pytest.mark.parametrize(
        "schema, expected",
        [
            ({"type": "string"}, "string"),
            ({"type": "string", "format": "date"}, "date"),
            ({"type": "string", "format": "date-time"}, "DateTime"),
            ({"type": "string", "format": "binary"}, "file"),
            ({"type": "string", "format": "byte"}, "ByteArray"),
            ({"type": "string", "format": "uuid"}, "UUID"),
            ({"type": "string", "format": "uri"}, "URI"),
            ({"type": "integer"}, "integer"),
            ({"type": "integer", "format": "int64"}, "long"),
            ({"type": "number"}, "number"),
            ({"type": "number", "format": "float"}, "float"),
            ({"type": "number", "format": "double"}, "double"),
            ({"type": "boolean"}, "boolean"),
            ({"type": "array", "items": {}}, "array"),
            ({"type": "object", "additionalProperties": True}, "map"),
            ({"type": "object", "properties": {"a": {}}}, "object"),
            ({"type": ["string", "null"]}, "string"),
            ({"enum": ["a", "b"]}, "string"),
            ({"$ref": "#/components/schemas/Pet"}, "Pet"),
            ({"type": "tuple"}, None),
            (None, None),
        ],
    )
    def test_schema_type(self, schema, expected):
        """Test abstract type keys."""
        assert SchemaIntrospector().get_schema_type(schema) == expected

    def test_referenced_schema(self, petstore_dict):
        """Test following references."""
        introspector = SchemaIntrospector(petstore_dict)

        target = introspector.get_referenced_schema(
            {"$ref": "#/components/schemas/OrderStatus"}
        )
        assert target["enum"] == ["placed", "approved", "delivered"]
        assert introspector.get_referenced_schema({"type": "string"}) is None
        assert introspector.get_referenced_schema(None) is None

    def test_reference_chain(self):
        """Test references to references are followed to the end."""
        introspector = SchemaIntrospector(
            {
                "definitions": {
                    "Alias": {"$ref": "#/definitions/Target"},
                    "Target": {"type": "string", "enum": ["x"]},
                }
            }
        )
        target = introspector.get_referenced_schema({"$ref": "#/definitions/Alias"})
        assert target == {"type": "string", "enum": ["x"]}

    def test_circular_reference(self):
        """Test reference cycles end in None."""
        introspector = SchemaIntrospector(
            {
                "definitions": {
                    "A": {"$ref": "#/definitions/B"},
                    "B": {"$ref": "#/definitions/A"},
                }
            }
        )
        assert introspector.get_referenced_schema({"$ref": "#/definitions/A"}) is None

    def test_external_reference_ignored(self):
        """Test non-local references are not followed."""
        assert SchemaIntrospector({}).resolve_ref("other.yaml#/Pet") is None

    def test_ref_name(self):
        """Test names are taken from the last pointer segment."""
        assert ref_name("#/components/schemas/Pet") == "Pet"
