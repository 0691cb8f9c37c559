"""
C-specific type system for code generation.

Maps abstract schema types onto the C client's primitive and container
types, routes everything else through the model naming rules, and builds
property descriptors for templates.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ....logging_config import get_logger
from ...core.schema import PropertyDescriptor, SchemaIntrospector, from_property
from .naming import CNamingRules

logger = get_logger(__name__)


# Abstract schema type -> C type.
# NOTE: "float" -> "double" and "double" -> "float" are kept as the
# generated client has always declared them.
C_TYPE_MAPPING = MappingProxyType(
    {
        "string": "char",
        "char": "char",
        "integer": "int",
        "long": "long",
        "float": "double",
        "double": "float",
        "number": "float",
        "date": "char",
        "DateTime": "char",
        "boolean": "int",
        "file": "binary_t*",
        "binary": "binary_t*",
        "ByteArray": "char",
        "UUID": "char",
        "URI": "char",
        "array": "list",
        "map": "list_t*",
        "date-time": "char",
    }
)

# Model type of object schemas that declare no properties
FREE_FORM_OBJECT = "object"

# Types that are already native and bypass model naming
C_LANGUAGE_PRIMITIVES = frozenset(
    {
        "int",
        "short",
        "long",
        "float",
        "double",
        "char",
        "binary_t*",
        "Object",
        "list_t*",
        "list",
    }
)


class CTypeMapper:
    """
    Resolves schema nodes to C type declarations.

    The lookup tables are fixed at construction; resolving a type never
    mutates them, so one mapper can serve every template of a run.
    """

    def __init__(
        self,
        naming: CNamingRules,
        introspector: Optional[SchemaIntrospector] = None,
        type_mappings: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize with naming rules and the schema introspector.

        Args:
            naming: C naming rules used for generated model type names
            introspector: Upstream schema layer (abstract type, references)
            type_mappings: Overrides merged over the default type mapping
        """
        self.naming = naming
        self.introspector = introspector or SchemaIntrospector()

        mapping = dict(C_TYPE_MAPPING)
        if type_mappings:
            mapping.update(type_mappings)
        self.type_mapping = MappingProxyType(mapping)
        self.primitives = C_LANGUAGE_PRIMITIVES

    def is_primitive_type(self, type_name: Optional[str]) -> bool:
        return type_name in self.primitives

    def resolve_type(self, schema: Optional[Dict[str, Any]]) -> Optional[str]:
        """
        Convert a schema node into its declared C type.

        Returns:
            Type name, or None if the schema layer could not determine any
            abstract type (the caller must treat this as a defect)
        """
        abstract_type = self.introspector.get_schema_type(schema)

        if abstract_type in self.type_mapping:
            type_name = self.type_mapping[abstract_type]
            if type_name in self.primitives:
                return type_name
        elif abstract_type == FREE_FORM_OBJECT and "$ref" not in schema:
            # backed by the supporting model/object.h, never prefixed
            return FREE_FORM_OBJECT
        else:
            type_name = abstract_type

        if type_name is None:
            logger.debug("No type could be resolved for schema %r", schema)
            return None

        return self.naming.to_model_name(type_name)

    def get_type_declaration(self, schema: Optional[Dict[str, Any]]) -> Optional[str]:
        # container element types are rendered by the templates
        return self.resolve_type(schema)

    def to_default_value(self, schema: Dict[str, Any]) -> Optional[str]:
        """Render a schema default as a C initializer, or None for no default."""
        if schema.get("default") is None:
            return None

        default = schema["default"]

        if (
            SchemaIntrospector.is_integer_schema(schema)
            or SchemaIntrospector.is_number_schema(schema)
            or SchemaIntrospector.is_boolean_schema(schema)
        ):
            if isinstance(default, bool):
                return "true" if default else "false"
            return str(default)

        if SchemaIntrospector.is_string_schema(schema):
            return "'" + self.naming.escape_text(str(default)) + "'"

        return None

    def adapt_property(
        self, name: str, schema: Dict[str, Any], required: bool = False
    ) -> PropertyDescriptor:
        """
        Build a property descriptor, flagging references to enum schemas.

        The base extraction only sees inline enums; a property whose
        reference resolves to a schema with an ``enum`` list is an enum too.
        """
        descriptor = from_property(name, schema, self.naming, self, required)

        referenced = self.introspector.get_referenced_schema(schema)
        if referenced is not None and referenced.get("enum") is not None:
            descriptor.is_enum = True

        if descriptor.is_enum:
            descriptor.enum_name = self.naming.to_enum_name(name)

        return descriptor
