"""Command-line entry point for schema-codegen."""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .codegen.cli_integration import add_codegen_args, handle_codegen_command
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="schema-codegen",
        description="Generate a C client library from an OpenAPI description",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schema-codegen petstore.yaml -o out/
  schema-codegen --url https://example.com/openapi.json -o out/ --model-prefix oa
  C_POST_PROCESS_FILE="clang-format -i" schema-codegen petstore.json -o out/
  schema-codegen --list-languages
""",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    add_codegen_args(parser)
    return parser


def main(args: list[str] | None = None) -> int:
    """Parse arguments and run code generation.

    Args:
        args: Argument list, ``sys.argv[1:]`` when omitted.

    Returns:
        Exit code (0 success, 1 input or configuration error, 3 generation error).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    level = logging.DEBUG if parsed.verbose else getattr(logging, parsed.log_level)
    setup_logging(level=level)
    logger.debug("Arguments: %s", parsed)

    try:
        return handle_codegen_command(parsed)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
