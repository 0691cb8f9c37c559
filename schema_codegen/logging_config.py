"""Logging configuration for schema_codegen.

All modules obtain their logger through :func:`get_logger` so that a single
call to :func:`setup_logging` controls the output of the whole package.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "schema_codegen"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the package root logger.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(level: int | str = logging.WARNING, use_rich: bool = True) -> None:
    """Install a handler on the package root logger.

    Calling this more than once only updates the level.

    Args:
        level: Logging level name or number.
        use_rich: Use a rich handler writing to stderr; plain stream handler otherwise.
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root.setLevel(level)

    if _configured:
        return

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    root.addHandler(handler)
    _configured = True
