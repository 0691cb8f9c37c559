"""
Core schema representation for code generation.

Converts an OpenAPI / Swagger description into a normalized internal
format (operations, parameters and named schemas) that generators can
walk consistently, and answers the schema questions generators ask:
what abstract type a schema has and which schema a reference points to.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from ...logging_config import get_logger

logger = get_logger(__name__)


DEFAULT_TAG = "default"

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

# string formats with their own abstract type
_STRING_FORMAT_TYPES = {
    "date": "date",
    "date-time": "DateTime",
    "binary": "file",
    "byte": "ByteArray",
    "uuid": "UUID",
    "uri": "URI",
}

_NUMBER_FORMAT_TYPES = {
    "float": "float",
    "double": "double",
}


class SchemaError(Exception):
    """Exception raised for malformed API descriptions."""

    pass


def ref_name(ref: str) -> str:
    """Extract the schema name from a ``$ref`` string."""
    return ref.split("/")[-1]


class SchemaIntrospector:
    """Answers type and reference questions about schema nodes."""

    def __init__(self, document: Optional[Dict[str, Any]] = None):
        """
        Initialize introspector.

        Args:
            document: The raw API description used to resolve local references
        """
        self.document = document or {}

    def resolve_ref(self, ref: str) -> Optional[Dict[str, Any]]:
        """Resolve a local JSON pointer reference (``#/a/b``)."""
        if not ref.startswith("#/"):
            logger.debug("Ignoring non-local reference %s", ref)
            return None

        node: Any = self.document
        for part in ref[2:].split("/"):
            part = part.replace("~1", "/").replace("~0", "~")
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]

        return node if isinstance(node, dict) else None

    def get_referenced_schema(
        self, schema: Optional[Dict[str, Any]]
    ) -> Optional[Dict[str, Any]]:
        """
        Follow a ``$ref`` chain to the schema it points to.

        Returns:
            The target schema, or None if the schema is not a reference or
            the reference cannot be resolved
        """
        if not schema or "$ref" not in schema:
            return None

        visited = set()
        current = schema
        while current is not None and "$ref" in current:
            ref = current["$ref"]
            if ref in visited:
                logger.warning("Circular reference detected at %s", ref)
                return None
            visited.add(ref)
            current = self.resolve_ref(ref)

        return current

    def get_schema_type(self, schema: Optional[Dict[str, Any]]) -> Optional[str]:
        """
        Compute the abstract type key of a schema.

        References yield the referenced model name; primitive types yield
        their format-specific key (``DateTime``, ``UUID``, ``long`` ...).
        Returns None if the schema is missing or its type is unknown.
        """
        if schema is None:
            return None

        if "$ref" in schema:
            return ref_name(schema["$ref"])

        schema_type = schema.get("type")
        if isinstance(schema_type, list):
            non_null = [t for t in schema_type if t != "null"]
            schema_type = non_null[0] if non_null else None

        schema_format = schema.get("format")

        if schema_type is None:
            if "items" in schema:
                return "array"
            if self.is_map_schema(schema):
                return "map"
            if "enum" in schema:
                return "string"
            return "object"

        if schema_type == "array":
            return "array"
        if schema_type == "object":
            return "map" if self.is_map_schema(schema) else "object"
        if schema_type == "string":
            return _STRING_FORMAT_TYPES.get(schema_format, "string")
        if schema_type == "integer":
            return "long" if schema_format == "int64" else "integer"
        if schema_type == "number":
            return _NUMBER_FORMAT_TYPES.get(schema_format, "number")
        if schema_type == "boolean":
            return "boolean"

        logger.debug("Unknown schema type %r", schema_type)
        return None

    @staticmethod
    def is_map_schema(schema: Dict[str, Any]) -> bool:
        additional = schema.get("additionalProperties")
        has_additional = isinstance(additional, dict) or additional is True
        return has_additional and not schema.get("properties")

    @staticmethod
    def is_array_schema(schema: Dict[str, Any]) -> bool:
        return schema.get("type") == "array" or "items" in schema

    @staticmethod
    def is_string_schema(schema: Dict[str, Any]) -> bool:
        return schema.get("type") == "string"

    @staticmethod
    def is_integer_schema(schema: Dict[str, Any]) -> bool:
        return schema.get("type") == "integer"

    @staticmethod
    def is_number_schema(schema: Dict[str, Any]) -> bool:
        return schema.get("type") == "number"

    @staticmethod
    def is_boolean_schema(schema: Dict[str, Any]) -> bool:
        return schema.get("type") == "boolean"

    @staticmethod
    def get_inner_schema(schema: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Return the element schema of an array or the value schema of a map."""
        if "items" in schema:
            return schema["items"]
        additional = schema.get("additionalProperties")
        if isinstance(additional, dict):
            return additional
        return None


class TypeResolver(Protocol):
    """What the base property extraction needs from a language type resolver."""

    def resolve_type(self, schema: Optional[Dict[str, Any]]) -> Optional[str]: ...

    def to_default_value(self, schema: Dict[str, Any]) -> Optional[str]: ...

    def is_primitive_type(self, type_name: Optional[str]) -> bool: ...


@dataclass
class PropertyDescriptor:
    """A schema property enriched with everything templates need."""

    name: str
    base_name: str
    var_name: str
    datatype: Optional[str]
    items_type: Optional[str] = None
    default_value: Optional[str] = None
    description: Optional[str] = None
    required: bool = False
    is_enum: bool = False
    enum_values: List[Any] = field(default_factory=list)
    enum_name: Optional[str] = None
    is_container: bool = False
    is_primitive_type: bool = False
    is_model: bool = False


def from_property(
    name: str,
    schema: Dict[str, Any],
    naming: Any,
    types: TypeResolver,
    required: bool = False,
) -> PropertyDescriptor:
    """
    Base property extraction shared by all languages.

    Only inline enums are flagged here; language adapters refine the result.

    Args:
        name: Raw property name
        schema: Property schema (may be a reference)
        naming: NamingRules of the target language
        types: Type resolver of the target language
        required: Whether the owning schema lists the property as required
    """
    datatype = types.resolve_type(schema)
    inner = SchemaIntrospector.get_inner_schema(schema)
    is_container = SchemaIntrospector.is_array_schema(
        schema
    ) or SchemaIntrospector.is_map_schema(schema)

    descriptor = PropertyDescriptor(
        name=name,
        base_name=name,
        var_name=naming.to_var_name(name),
        datatype=datatype,
        items_type=types.resolve_type(inner) if inner is not None else None,
        default_value=types.to_default_value(schema),
        description=schema.get("description"),
        required=required,
        is_container=is_container,
        is_primitive_type=types.is_primitive_type(datatype),
        is_model="$ref" in schema,
    )

    if "enum" in schema:
        descriptor.is_enum = True
        descriptor.enum_values = list(schema["enum"])

    return descriptor


@dataclass
class Parameter:
    """A single operation parameter."""

    name: str
    location: str
    required: bool = False
    schema: Dict[str, Any] = field(default_factory=dict)
    description: Optional[str] = None


@dataclass
class Operation:
    """A single API operation (path + method)."""

    operation_id: str
    method: str
    path: str
    tag: str = ""
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: List[Parameter] = field(default_factory=list)
    request_body: Optional[Dict[str, Any]] = None
    response: Optional[Dict[str, Any]] = None


@dataclass
class ApiDocument:
    """Normalized view of an API description."""

    title: str
    version: str
    description: Optional[str] = None
    schemas: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    operations: List[Operation] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApiDocument":
        """
        Build a document from a parsed OpenAPI 3 or Swagger 2 description.

        Raises:
            SchemaError: If the description is not a mapping
        """
        if not isinstance(data, dict):
            raise SchemaError("API description must be a JSON/YAML object")

        info = data.get("info") or {}
        if "components" in data:
            schemas = (data.get("components") or {}).get("schemas") or {}
        else:
            schemas = data.get("definitions") or {}

        document = cls(
            title=info.get("title", "OpenAPI"),
            version=str(info.get("version", "1.0.0")),
            description=info.get("description"),
            schemas=dict(schemas),
            raw=data,
        )
        document.operations = _parse_operations(data, SchemaIntrospector(data))

        logger.debug(
            "Parsed API description: %d schemas, %d operations",
            len(document.schemas),
            len(document.operations),
        )
        return document

    @property
    def introspector(self) -> SchemaIntrospector:
        return SchemaIntrospector(self.raw)

    def operations_by_tag(self) -> Dict[str, List[Operation]]:
        """Group operations by their first tag; untagged ones go under ``default``."""
        groups: Dict[str, List[Operation]] = {}
        for operation in self.operations:
            groups.setdefault(operation.tag, []).append(operation)
        return groups


def _synthesize_operation_id(method: str, path: str) -> str:
    cleaned = path.replace("{", "").replace("}", "").strip("/").replace("/", "_")
    return f"{method}_{cleaned}" if cleaned else method


def _parse_parameter(
    raw: Dict[str, Any], introspector: SchemaIntrospector
) -> Optional[Parameter]:
    if "$ref" in raw:
        resolved = introspector.resolve_ref(raw["$ref"])
        if resolved is None:
            logger.warning("Unresolvable parameter reference %s", raw["$ref"])
            return None
        raw = resolved

    schema = raw.get("schema")
    if schema is None:
        # Swagger 2 keeps the type on the parameter itself
        schema = {
            key: raw[key]
            for key in ("type", "format", "items", "enum", "default")
            if key in raw
        }

    return Parameter(
        name=raw.get("name", ""),
        location=raw.get("in", "query"),
        required=bool(raw.get("required", False)),
        schema=schema,
        description=raw.get("description"),
    )


def _first_json_schema(content: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not content:
        return None
    for media_type, media in content.items():
        if "json" in media_type and isinstance(media, dict) and "schema" in media:
            return media["schema"]
    for media in content.values():
        if isinstance(media, dict) and "schema" in media:
            return media["schema"]
    return None


def _parse_response(responses: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    for status in sorted(responses):
        if not str(status).startswith("2"):
            continue
        response = responses[status] or {}
        if "schema" in response:
            return response["schema"]
        schema = _first_json_schema(response.get("content"))
        if schema is not None:
            return schema
    return None


def _parse_operations(
    data: Dict[str, Any], introspector: SchemaIntrospector
) -> List[Operation]:
    operations = []

    for path, path_item in (data.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        shared_parameters = path_item.get("parameters", [])

        for method in HTTP_METHODS:
            raw_op = path_item.get(method)
            if not isinstance(raw_op, dict):
                continue

            operation = Operation(
                operation_id=raw_op.get("operationId")
                or _synthesize_operation_id(method, path),
                method=method.upper(),
                path=path,
                tag=(raw_op.get("tags") or [DEFAULT_TAG])[0],
                summary=raw_op.get("summary"),
                description=raw_op.get("description"),
            )

            for raw_param in list(shared_parameters) + raw_op.get("parameters", []):
                param = _parse_parameter(raw_param, introspector)
                if param is None:
                    continue
                if param.location == "body":
                    operation.request_body = param.schema
                else:
                    operation.parameters.append(param)

            if "requestBody" in raw_op:
                body = raw_op["requestBody"] or {}
                if "$ref" in body:
                    body = introspector.resolve_ref(body["$ref"]) or {}
                operation.request_body = _first_json_schema(body.get("content"))

            operation.response = _parse_response(raw_op.get("responses") or {})
            operations.append(operation)

    return operations
