"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import (
    CodeGenerator,
    GeneratedFile,
    GeneratorError,
    GenerationResult,
    generate_code,
    write_generated_files,
)
from .schema import (
    ApiDocument,
    Operation,
    Parameter,
    PropertyDescriptor,
    SchemaError,
    SchemaIntrospector,
    from_property,
)
from .naming import (
    DiagnosticLog,
    NameCategory,
    NamingDiagnostic,
    NamingRules,
    camelize,
    sanitize_name,
    underscore,
)
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine
from .postprocess import POST_PROCESS_ENV_VAR, PostProcessHook

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratedFile",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    "write_generated_files",
    # Schema layer
    "ApiDocument",
    "Operation",
    "Parameter",
    "PropertyDescriptor",
    "SchemaError",
    "SchemaIntrospector",
    "from_property",
    # Naming utilities - language-agnostic
    "DiagnosticLog",
    "NameCategory",
    "NamingDiagnostic",
    "NamingRules",
    "camelize",
    "sanitize_name",
    "underscore",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    # Post-processing
    "POST_PROCESS_ENV_VAR",
    "PostProcessHook",
]
