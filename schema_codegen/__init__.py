"""
Schema Codegen - C client generation from OpenAPI descriptions.
"""

from .codegen import __version__, generate_client
from .logging_config import get_logger, setup_logging
from .utils import SpecLoaderError, load_spec

__all__ = [
    "__version__",
    "generate_client",
    "get_logger",
    "setup_logging",
    "SpecLoaderError",
    "load_spec",
]
