"""
C-specific configuration defaults and presets.
"""

from typing import Any, Dict

from ...core.config import GeneratorConfig, load_config


C_DEFAULTS: Dict[str, Any] = {
    "output_dir": "generated-code/c",
    "project_name": "openapi_client",
    "api_package": "api",
    "hide_generation_timestamp": True,
    "add_comments": True,
}

# Output sub-directories of the generated client
API_FOLDER = "api"
MODEL_FOLDER = "model"
TEST_FOLDER = "unit-test"

# Prefix every model to keep generated types out of a host project's namespace
NAMESPACED_CONFIG = {
    "model_name_prefix": "oa",
}

# Keep generated sources as rendered
NO_POST_PROCESS_CONFIG = {
    "post_process_command": "",
}


def get_c_config(**overrides: Any) -> GeneratorConfig:
    """Load the C configuration with keyword overrides applied."""
    return load_config("c", custom_config=overrides or None)
