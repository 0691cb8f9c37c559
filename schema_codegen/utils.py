"""Utility functions for loading API descriptions.

This module provides functions for loading OpenAPI / Swagger descriptions
(JSON or YAML) from files and URLs with proper error handling.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests
import yaml

from .logging_config import get_logger

logger = get_logger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


class SpecLoaderError(Exception):
    """Custom exception for API description loading errors."""

    pass


def parse_spec_text(text: str, source: str, yaml_hint: bool = False) -> Any:
    """Parse description text as JSON, falling back to YAML.

    Args:
        text: Raw document text.
        source: Source description used in error messages.
        yaml_hint: Try YAML first.

    Raises:
        SpecLoaderError: If the text is neither valid JSON nor valid YAML.
    """
    if not yaml_hint:
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            logger.debug("%s is not JSON, trying YAML", source)

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SpecLoaderError(f"Invalid JSON/YAML in {source}: {e}") from e

    if not isinstance(data, dict):
        raise SpecLoaderError(f"API description in {source} must be an object")
    return data


def load_spec_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Load an API description from a local file.

    Args:
        file_path: Path to the JSON or YAML file.

    Returns:
        Tuple of (source description, parsed data).

    Raises:
        FileNotFoundError: If file doesn't exist.
        SpecLoaderError: If file cannot be read or parsed.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load API description from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise SpecLoaderError(f"Error reading file {file_path}: {e}") from e

    data = parse_spec_text(
        text, str(file_path), yaml_hint=file_path.suffix.lower() in YAML_SUFFIXES
    )
    logger.info(f"Successfully loaded API description from {file_path}")
    return str(file_path), data


def load_spec_from_url(url: str, timeout: int = 30) -> tuple[str, Any]:
    """Load an API description from a URL.

    Args:
        url: URL to fetch the description from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed data).

    Raises:
        SpecLoaderError: If URL is invalid, request fails, or the body can't be parsed.
    """
    logger.debug(f"Attempting to load API description from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise SpecLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise SpecLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise SpecLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise SpecLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}", exc_info=True)
        raise SpecLoaderError(f"Request error for URL {url}: {e}") from e

    content_type = response.headers.get("content-type", "").lower()
    yaml_hint = "yaml" in content_type or parsed_url.path.endswith(YAML_SUFFIXES)

    data = parse_spec_text(response.text, url, yaml_hint=yaml_hint)
    logger.info(f"Successfully loaded API description from {url}")
    return url, data


def load_spec(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, Any]:
    """Load an API description from either a file or URL.

    Raises:
        SpecLoaderError: If neither or both parameters are provided, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        logger.error("Neither file_path nor url provided")
        raise SpecLoaderError("Either file_path or url must be provided")

    if file_path and url:
        logger.error("Both file_path and url provided")
        raise SpecLoaderError("Cannot specify both file_path and url")

    if file_path:
        return load_spec_from_file(file_path)
    return load_spec_from_url(url, timeout)
