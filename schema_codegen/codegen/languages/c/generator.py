"""
C code generator implementation.

Generates a C client (model and api sources, headers, unit-test stubs and
a README) from an API description. Every identifier and type name is
obtained from CNamingRules / CTypeMapper so the same entity is named the
same way in every file.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, GeneratedFile, GeneratorError
from ...core.schema import ApiDocument, Operation, PropertyDescriptor, ref_name
from .config import API_FOLDER, MODEL_FOLDER, TEST_FOLDER
from .naming import CNamingRules
from .types import FREE_FORM_OBJECT, CTypeMapper

logger = get_logger(__name__)


# C types whose fields are pointers
_POINTER_TYPES = {"char": "char *", "list": "list_t *"}

INLINE_MODEL_REF_ROOT = "#/components/schemas/"


class CGenerator(CodeGenerator):
    """Code generator for C client libraries."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize C generator with configuration."""
        super().__init__(config)

        self._naming = CNamingRules(
            reserved_words_mappings=self.config.reserved_words_mappings,
            import_mappings=self.config.import_mappings,
            model_name_prefix=self.config.model_name_prefix,
            model_name_suffix=self.config.model_name_suffix,
            api_package=self.config.api_package,
        )
        self.types = CTypeMapper(
            self._naming, type_mappings=self.config.type_mappings
        )
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def get_template_directory(self) -> Optional[Path]:
        """Return the C templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        return "c"

    @property
    def file_extension(self) -> str:
        return ".c"

    @property
    def naming(self) -> CNamingRules:
        return self._naming

    def generate(self, document: ApiDocument) -> List[GeneratedFile]:
        """Generate every model, api, unit-test and supporting file."""
        # diagnostics describe a single run
        self._naming.diagnostics.clear()
        self.types.introspector = document.introspector
        self._schemas = self._hoist_inline_models(document.schemas)

        files: List[GeneratedFile] = []
        models = []
        apis = []

        for schema_name, schema in self._schemas.items():
            model = self._build_model_context(schema_name, schema)
            models.append(model)
            files.extend(self._render_model(model))

        for tag, operations in document.operations_by_tag().items():
            api = self._build_api_context(tag, operations)
            apis.append(api)
            files.extend(self._render_api(api))

        common = self._common_context(document, models=models, apis=apis)
        if not any(model["filename"] == FREE_FORM_OBJECT for model in models):
            files.extend(self._render_object_support(common))

        files.append(
            GeneratedFile(
                path=Path("README.md"),
                content=self.render_template("README.md.j2", common),
                file_type="supporting",
            )
        )

        logger.info(
            "Generated %d files (%d models, %d apis)", len(files), len(models), len(apis)
        )
        return files

    def _render_object_support(self, context: Dict[str, Any]) -> List[GeneratedFile]:
        """Render the ``object_t`` type that free-form object schemas resolve to."""
        return [
            GeneratedFile(
                path=Path(MODEL_FOLDER) / f"{FREE_FORM_OBJECT}.h",
                content=self.render_template("object.h.j2", context),
                file_type="supporting",
            ),
            GeneratedFile(
                path=Path(MODEL_FOLDER) / f"{FREE_FORM_OBJECT}.c",
                content=self.render_template("object.c.j2", context),
                file_type="supporting",
            ),
        ]

    # Inline models

    @staticmethod
    def _is_inline_object(schema: Any) -> bool:
        return (
            isinstance(schema, dict)
            and "$ref" not in schema
            and schema.get("type", "object") == "object"
            and isinstance(schema.get("properties"), dict)
            and bool(schema["properties"])
        )

    def _hoist_inline_models(
        self, schemas: Dict[str, Dict[str, Any]]
    ) -> Dict[str, Dict[str, Any]]:
        """
        Give inline object properties their own models.

        An inline object property (or array element) of ``Owner.prop`` becomes
        the model ``Owner_prop`` and the property is replaced by a reference
        to it, so every struct member type has a generated header.
        """
        taken = set(schemas)
        pending = list(schemas.items())
        hoisted: Dict[str, Dict[str, Any]] = {}

        while pending:
            name, schema = pending.pop(0)
            schema = self._hoist_properties(name, schema, pending, taken)
            if "allOf" in schema:
                schema["allOf"] = [
                    part if "$ref" in part
                    else self._hoist_properties(name, part, pending, taken)
                    for part in schema["allOf"]
                ]
            hoisted[name] = schema

        return hoisted

    def _hoist_properties(
        self,
        owner: str,
        schema: Dict[str, Any],
        pending: List[tuple[str, Dict[str, Any]]],
        taken: set,
    ) -> Dict[str, Any]:
        properties = schema.get("properties")
        if not isinstance(properties, dict):
            return dict(schema)

        def hoist(candidate: str, inline: Dict[str, Any]) -> Dict[str, Any]:
            model_name = candidate
            counter = 2
            while model_name in taken:
                model_name = f"{candidate}{counter}"
                counter += 1
            taken.add(model_name)
            pending.append((model_name, inline))
            logger.debug("Inline object in %s hoisted to %s", owner, model_name)
            return {"$ref": f"{INLINE_MODEL_REF_ROOT}{model_name}"}

        rewritten = {}
        for prop_name, prop_schema in properties.items():
            if self._is_inline_object(prop_schema):
                ref = hoist(f"{owner}_{prop_name}", prop_schema)
                if prop_schema.get("description"):
                    ref["description"] = prop_schema["description"]
                rewritten[prop_name] = ref
            elif isinstance(prop_schema, dict) and self._is_inline_object(
                prop_schema.get("items")
            ):
                rewritten[prop_name] = dict(
                    prop_schema, items=hoist(f"{owner}_{prop_name}_inner", prop_schema["items"])
                )
            else:
                rewritten[prop_name] = prop_schema

        return dict(schema, properties=rewritten)

    def _common_context(self, document: ApiDocument, **extra: Any) -> Dict[str, Any]:
        timestamp = None
        if not self.config.hide_generation_timestamp:
            timestamp = datetime.now(timezone.utc).isoformat()

        return {
            "project_name": self.config.project_name,
            "app_name": document.title,
            "app_version": document.version,
            "app_description": document.description,
            "generated_date": timestamp,
            "add_comments": self.config.add_comments,
            **extra,
        }

    # Models

    def _collect_properties(
        self, schema: Dict[str, Any]
    ) -> List[tuple[str, Dict[str, Any], bool]]:
        """Flatten own and ``allOf`` properties into (name, schema, required)."""
        introspector = self.types.introspector
        collected = []
        parts = [schema] + list(schema.get("allOf", []))

        for part in parts:
            if "$ref" in part:
                hoisted = self._schemas.get(ref_name(part["$ref"]))
                part = hoisted or introspector.get_referenced_schema(part) or {}
            required = set(part.get("required", []))
            for name, prop_schema in (part.get("properties") or {}).items():
                collected.append((name, prop_schema, name in required))

        return collected

    def _enum_members(self, values: List[Any], datatype: Optional[str]) -> List[Dict[str, str]]:
        datatype = datatype or ""
        return [
            {
                "name": self._naming.to_enum_var_name(str(value), datatype),
                "value": self._naming.to_enum_value(str(value), datatype),
            }
            for value in values
            if value is not None
        ]

    def _declaration(self, prop: PropertyDescriptor, model_name: str) -> str:
        """C declaration type for a struct member or parameter."""
        if prop.is_enum and not prop.is_model:
            return f"{model_name}_{prop.enum_name.lower()}_e "
        if prop.is_enum and prop.is_model:
            return f"{prop.datatype}_e "
        return self._type_declaration(prop.datatype)

    def _type_declaration(self, type_name: Optional[str]) -> str:
        if type_name is None:
            raise GeneratorError("Cannot declare a value without a resolved type")
        if type_name in _POINTER_TYPES:
            return _POINTER_TYPES[type_name]
        if self.types.is_primitive_type(type_name):
            if type_name.endswith("*"):
                return f"{type_name[:-1]} *"
            return f"{type_name} "
        return f"struct {type_name}_t *"

    def _model_include(self, type_name: Optional[str]) -> Optional[str]:
        if type_name is None or self.types.is_primitive_type(type_name):
            return None
        return self._naming.to_model_import(type_name)

    def _build_model_context(self, schema_name: str, schema: Dict[str, Any]) -> Dict[str, Any]:
        model_name = self._naming.to_model_name(schema_name)
        context: Dict[str, Any] = {
            "schema_name": schema_name,
            "model_name": model_name,
            "filename": self._naming.to_model_filename(schema_name),
            "test_filename": self._naming.to_model_test_filename(schema_name),
            "doc_filename": self._naming.to_model_doc_filename(schema_name),
            "description": schema.get("description"),
            "is_enum": "enum" in schema,
            "enum_members": [],
            "properties": [],
            "includes": [],
        }

        if context["is_enum"]:
            datatype = self.types.resolve_type(schema)
            context["enum_name"] = self._naming.to_enum_name(schema_name)
            context["enum_members"] = self._enum_members(schema["enum"], datatype)
            return context

        includes = []
        for name, prop_schema, required in self._collect_properties(schema):
            prop = self.types.adapt_property(name, prop_schema, required)
            if prop.datatype is None:
                logger.error(
                    "No type could be resolved for %s.%s; property skipped",
                    schema_name,
                    name,
                )
                continue

            entry = {
                "descriptor": prop,
                "declaration": self._declaration(prop, model_name),
                "enum_members": [],
            }
            if prop.is_enum and not prop.is_model:
                entry["enum_members"] = self._enum_members(prop.enum_values, prop.datatype)

            for type_name in (prop.datatype, prop.items_type):
                include = self._model_include(type_name)
                if include and include not in includes:
                    includes.append(include)

            context["properties"].append(entry)

        context["includes"] = includes
        return context

    def _render_model(self, model: Dict[str, Any]) -> List[GeneratedFile]:
        context = {"model": model, "add_comments": self.config.add_comments}
        filename = model["filename"]
        return [
            GeneratedFile(
                path=Path(MODEL_FOLDER) / f"{filename}.h",
                content=self.render_template("model.h.j2", context),
                file_type="model",
            ),
            GeneratedFile(
                path=Path(MODEL_FOLDER) / f"{filename}.c",
                content=self.render_template("model.c.j2", context),
                file_type="model",
            ),
            GeneratedFile(
                path=Path(TEST_FOLDER) / f"{model['test_filename']}.c",
                content=self.render_template("model_test.c.j2", context),
                file_type="model-test",
            ),
        ]

    # APIs

    def _build_operation_context(self, operation: Operation) -> Dict[str, Any]:
        params = []
        includes = []

        for param in operation.parameters:
            type_name = self.types.resolve_type(param.schema)
            if type_name is None:
                logger.error(
                    "No type could be resolved for parameter %s of %s",
                    param.name,
                    operation.operation_id,
                )
                continue
            params.append(
                {
                    "name": self._naming.to_param_name(param.name),
                    "base_name": param.name,
                    "location": param.location,
                    "required": param.required,
                    "description": param.description,
                    "declaration": self._type_declaration(type_name),
                }
            )
            include = self._model_include(type_name)
            if include:
                includes.append(include)

        if operation.request_body is not None:
            body_type = self.types.resolve_type(operation.request_body)
            if body_type is not None:
                params.append(
                    {
                        "name": self._naming.to_param_name(body_type),
                        "base_name": "body",
                        "location": "body",
                        "required": True,
                        "description": None,
                        "declaration": self._type_declaration(body_type),
                    }
                )
                include = self._model_include(body_type)
                if include:
                    includes.append(include)

        return_type = self.types.resolve_type(operation.response)
        if return_type is not None:
            include = self._model_include(return_type)
            if include:
                includes.append(include)

        return {
            "operation_id": self._naming.to_operation_id(operation.operation_id),
            "method": operation.method,
            "path": operation.path,
            "summary": operation.summary,
            "description": operation.description,
            "params": params,
            "return_declaration": (
                self._type_declaration(return_type) if return_type else "void "
            ),
            "includes": includes,
        }

    def _build_api_context(self, tag: str, operations: List[Operation]) -> Dict[str, Any]:
        ops = [self._build_operation_context(op) for op in operations]

        includes = []
        for op in ops:
            for include in op["includes"]:
                if include not in includes:
                    includes.append(include)

        return {
            "tag": tag,
            "api_name": self._naming.to_api_name(tag),
            "filename": self._naming.to_api_filename(tag),
            "test_filename": self._naming.to_api_test_filename(tag),
            "doc_filename": self._naming.to_api_doc_filename(tag),
            "import_path": self._naming.to_api_import(tag),
            "operations": ops,
            "includes": includes,
        }

    def _render_api(self, api: Dict[str, Any]) -> List[GeneratedFile]:
        context = {"api": api, "add_comments": self.config.add_comments}
        filename = api["filename"]
        return [
            GeneratedFile(
                path=Path(API_FOLDER) / f"{filename}.h",
                content=self.render_template("api.h.j2", context),
                file_type="api",
            ),
            GeneratedFile(
                path=Path(API_FOLDER) / f"{filename}.c",
                content=self.render_template("api.c.j2", context),
                file_type="api",
            ),
            GeneratedFile(
                path=Path(TEST_FOLDER) / f"{api['test_filename']}.c",
                content=self.render_template("api_test.c.j2", context),
                file_type="api-test",
            ),
        ]


def create_c_generator(config: Optional[Dict[str, Any]] = None) -> CGenerator:
    """Create a C generator with default configuration plus overrides."""
    from .config import get_c_config

    return CGenerator(get_c_config(**(config or {})))
