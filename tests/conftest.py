"""Shared fixtures for the test suite."""

import copy
import subprocess

import pytest

from schema_codegen.codegen.core.schema import ApiDocument, SchemaIntrospector
from schema_codegen.codegen.languages.c.naming import CNamingRules
from schema_codegen.codegen.languages.c.types import CTypeMapper

PETSTORE = {
    "openapi": "3.0.3",
    "info": {
        "title": "Petstore",
        "version": "1.0.0",
        "description": "A sample pet store",
    },
    "paths": {
        "/pet": {
            "post": {
                "tags": ["pet"],
                "operationId": "addPet",
                "summary": "Add a new pet to the store",
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/Pet"}
                        }
                    }
                },
                "responses": {
                    "200": {
                        "description": "ok",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Pet"}
                            }
                        },
                    }
                },
            }
        },
        "/pet/{petId}": {
            "parameters": [
                {
                    "name": "petId",
                    "in": "path",
                    "required": True,
                    "schema": {"type": "integer", "format": "int64"},
                }
            ],
            "get": {
                "tags": ["pet"],
                "operationId": "getPetById",
                "summary": "Find pet by ID",
                "responses": {
                    "200": {
                        "description": "ok",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Pet"}
                            }
                        },
                    },
                    "404": {"description": "not found"},
                },
            },
            "delete": {
                "tags": ["pet"],
                "operationId": "deletePet",
                "parameters": [
                    {"name": "api_key", "in": "header", "schema": {"type": "string"}}
                ],
                "responses": {"400": {"description": "invalid"}},
            },
        },
        "/store/order": {
            "post": {
                "tags": ["store"],
                "operationId": "placeOrder",
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/Order"}
                        }
                    }
                },
                "responses": {
                    "200": {
                        "description": "ok",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Order"}
                            }
                        },
                    }
                },
            }
        },
        "/health": {
            "get": {
                "operationId": "healthCheck",
                "responses": {"204": {"description": "healthy"}},
            }
        },
    },
    "components": {
        "schemas": {
            "Category": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "name": {"type": "string"},
                },
            },
            "Tag": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "name": {"type": "string"},
                },
            },
            "Pet": {
                "type": "object",
                "required": ["name", "photoUrls"],
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "name": {"type": "string", "description": "Name of the pet"},
                    "category": {"$ref": "#/components/schemas/Category"},
                    "photoUrls": {"type": "array", "items": {"type": "string"}},
                    "tags": {
                        "type": "array",
                        "items": {"$ref": "#/components/schemas/Tag"},
                    },
                    "status": {
                        "type": "string",
                        "description": "pet status in the store",
                        "enum": ["available", "pending", "sold"],
                    },
                    "metadata": {
                        "type": "object",
                        "additionalProperties": {"type": "string"},
                    },
                },
            },
            "OrderStatus": {
                "type": "string",
                "enum": ["placed", "approved", "delivered"],
            },
            "Order": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "quantity": {"type": "integer", "default": 1},
                    "price": {"type": "number", "format": "float"},
                    "status": {"$ref": "#/components/schemas/OrderStatus"},
                    "complete": {"type": "boolean", "default": False},
                    "note": {"type": "string", "default": "O'Brien"},
                },
            },
        }
    },
}


@pytest.fixture
def petstore_dict():
    """Fixture providing a raw OpenAPI 3 petstore description."""
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def petstore(petstore_dict):
    """Fixture providing the parsed petstore document."""
    return ApiDocument.from_dict(petstore_dict)


@pytest.fixture
def naming():
    """Fixture providing default C naming rules."""
    return CNamingRules()


@pytest.fixture
def types(naming, petstore_dict):
    """Fixture providing a C type mapper bound to the petstore description."""
    return CTypeMapper(naming, introspector=SchemaIntrospector(petstore_dict))


class FakeRunner:
    """Records formatter invocations instead of spawning processes."""

    def __init__(self, returncode=0, error=None):
        self.returncode = returncode
        self.error = error
        self.calls = []

    def __call__(self, argv, check=False):
        self.calls.append(list(argv))
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(argv, self.returncode)


@pytest.fixture
def fake_runner():
    """Fixture providing a successful fake formatter runner."""
    return FakeRunner()


@pytest.fixture
def make_runner():
    """Fixture providing a factory for fake runners with a chosen outcome."""
    return FakeRunner
