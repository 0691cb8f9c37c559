"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ...logging_config import get_logger
from .postprocess import POST_PROCESS_ENV_VAR

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    output_dir: str = "generated-code/c"
    project_name: str = "openapi_client"

    # Naming settings
    model_name_prefix: str = ""
    model_name_suffix: str = ""
    api_package: str = "api"
    reserved_words_mappings: Dict[str, str] = field(default_factory=dict)
    import_mappings: Dict[str, str] = field(default_factory=dict)

    # Type handling
    type_mappings: Dict[str, str] = field(default_factory=dict)

    # Output content
    hide_generation_timestamp: bool = True
    add_comments: bool = True

    # Post-processing (None: read from the environment)
    post_process_command: Optional[str] = None

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    def resolve_post_process_command(
        self, environ: Optional[Dict[str, str]] = None
    ) -> Optional[str]:
        """Return the configured formatter command, falling back to the environment."""
        if self.post_process_command is not None:
            return self.post_process_command or None
        if environ is None:
            environ = os.environ
        return environ.get(POST_PROCESS_ENV_VAR, "").strip() or None


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        from ..languages.c.config import C_DEFAULTS

        self._configs["c"] = dict(C_DEFAULTS)

    def get_config(
        self,
        language: str = "c",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        base_config = dict(self._configs.get(language, {}))

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def list_languages(self) -> list[str]:
        """Get list of languages with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate a configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        for label, value in (
            ("model_name_prefix", config.model_name_prefix),
            ("model_name_suffix", config.model_name_suffix),
        ):
            if value and not value.replace("_", "a").isalnum():
                warnings.append(f"Invalid {label}: {value}")

        for label, mapping in (
            ("reserved_words_mappings", config.reserved_words_mappings),
            ("import_mappings", config.import_mappings),
            ("type_mappings", config.type_mappings),
        ):
            if not isinstance(mapping, dict):
                warnings.append(f"{label} must be an object")
                continue
            for key, value in mapping.items():
                if not isinstance(value, str):
                    warnings.append(f"{label}[{key!r}] must be a string")

        if not config.project_name:
            warnings.append("project_name must not be empty")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = "c",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)
