"""
Language-specific code generators.

This module contains generators for different programming languages.
"""

from .c import CGenerator, create_c_generator

__all__ = ["CGenerator", "create_c_generator"]
