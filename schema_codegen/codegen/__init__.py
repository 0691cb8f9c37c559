"""
Schema Codegen Code Generation Module

Generates client code in various languages from API descriptions.
"""

from typing import Any, Dict, Optional

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    is_language_supported,
    list_supported_languages,
)
from .core.generator import (
    CodeGenerator,
    GeneratedFile,
    GenerationResult,
    generate_code,
    write_generated_files,
)
from .core.schema import ApiDocument, PropertyDescriptor, SchemaIntrospector
from .core.config import GeneratorConfig, ConfigManager, load_config
from .core.postprocess import PostProcessHook

# Version info
__version__ = "0.1.0"


def generate_client(
    document: Dict[str, Any],
    language: str = "c",
    config: Optional[Dict[str, Any]] = None,
) -> GenerationResult:
    """
    Generate client code from a parsed API description.

    Args:
        document: OpenAPI 3 or Swagger 2 document as a dict
        language: Target language name
        config: Generator configuration overrides

    Returns:
        GenerationResult with generated files (nothing is written to disk)
    """
    api_document = ApiDocument.from_dict(document)
    generator = get_generator(language, config)
    return generate_code(generator, api_document)


__all__ = [
    # Registry
    "GeneratorRegistry",
    "RegistryError",
    "get_generator",
    "get_registry",
    "is_language_supported",
    "list_supported_languages",
    # Generation
    "CodeGenerator",
    "GeneratedFile",
    "GenerationResult",
    "generate_code",
    "write_generated_files",
    "generate_client",
    # Schema layer
    "ApiDocument",
    "PropertyDescriptor",
    "SchemaIntrospector",
    # Configuration
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    # Post-processing
    "PostProcessHook",
]
