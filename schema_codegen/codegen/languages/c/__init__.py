"""
C code generator module.

Generates C client sources, headers and unit-test stubs from API descriptions.
"""

from .generator import CGenerator, create_c_generator
from .naming import C_RESERVED_WORDS, CNamingRules
from .types import C_LANGUAGE_PRIMITIVES, C_TYPE_MAPPING, CTypeMapper
from .config import C_DEFAULTS, get_c_config

__all__ = [
    # Generator
    "CGenerator",
    "create_c_generator",
    # Naming
    "CNamingRules",
    "C_RESERVED_WORDS",
    # Types
    "CTypeMapper",
    "C_TYPE_MAPPING",
    "C_LANGUAGE_PRIMITIVES",
    # Configuration
    "C_DEFAULTS",
    "get_c_config",
]
