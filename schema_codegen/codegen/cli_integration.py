"""
CLI integration for code generation functionality.

Provides the command-line arguments and command handler of the generator.
"""

import argparse
from pathlib import Path
from typing import Any, Dict, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..logging_config import get_logger
from ..utils import SpecLoaderError, load_spec
from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import GenerationResult, generate_code, write_generated_files
from .core.postprocess import PostProcessHook
from .core.schema import ApiDocument, SchemaError
from .registry import RegistryError, get_language_info, get_registry

logger = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_INPUT_ERROR = 1
EXIT_GENERATION_ERROR = 3

# Initialize rich console
console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def add_codegen_args(parser: argparse.ArgumentParser):
    """Add code generation arguments to an argument parser."""
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("spec", nargs="?", help="API description file (JSON or YAML)")
    input_group.add_argument("--url", help="URL to fetch the API description from")

    codegen_group = parser.add_argument_group("code generation")
    codegen_group.add_argument(
        "--language", "-l", default="c", help="Target language (default: c)"
    )
    codegen_group.add_argument(
        "--output", "-o", metavar="DIR", help="Output directory for generated files"
    )
    codegen_group.add_argument(
        "--config", metavar="FILE", help="JSON configuration file for code generation"
    )
    codegen_group.add_argument("--project-name", metavar="NAME", help="Project name")
    codegen_group.add_argument(
        "--model-prefix", metavar="PREFIX", help="Prefix joined to every model name"
    )
    codegen_group.add_argument(
        "--model-suffix", metavar="SUFFIX", help="Suffix joined to every model name"
    )
    codegen_group.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't generate comments in output code",
    )
    codegen_group.add_argument(
        "--no-post-process",
        action="store_true",
        help="Skip the C_POST_PROCESS_FILE formatter",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported target languages and exit",
    )
    info_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show generation details"
    )


def _build_config(args: argparse.Namespace, language: str) -> GeneratorConfig:
    overrides: Dict[str, Any] = {}
    if args.output:
        overrides["output_dir"] = args.output
    if args.project_name:
        overrides["project_name"] = args.project_name
    if args.model_prefix:
        overrides["model_name_prefix"] = args.model_prefix
    if args.model_suffix:
        overrides["model_name_suffix"] = args.model_suffix
    if args.no_comments:
        overrides["add_comments"] = False
    if args.no_post_process:
        overrides["post_process_command"] = ""

    return load_config(language, custom_config=overrides, config_file=args.config)


def _list_languages() -> int:
    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for language in get_registry().list_languages():
        info = get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {language}", info["file_extension"], info["class"], aliases)

    console.print(table)
    return EXIT_SUCCESS


def _print_summary(result: GenerationResult, output_dir: Path, verbose: bool):
    for warning in result.warnings:
        console.print(f"[yellow]⚠️ {warning}[/yellow]")

    if result.diagnostics:
        table = Table(title="✏️ Renamed identifiers", box=box.SIMPLE)
        table.add_column("Kind", style="cyan")
        table.add_column("Original", style="red")
        table.add_column("Renamed to", style="green")
        table.add_column("Reason", style="dim")
        for diagnostic in result.diagnostics:
            table.add_row(
                diagnostic.category.value,
                diagnostic.original,
                diagnostic.replacement,
                diagnostic.reason,
            )
        console.print(table)

    if verbose:
        for generated in sorted(result.files, key=lambda f: str(f.path)):
            console.print(f"  [dim]{generated.file_type:>10}[/dim] {generated.path}")

    console.print(
        Panel(
            f"[bold]{len(result.files)}[/bold] files written to [cyan]{output_dir}[/cyan]",
            title="✅ Generation complete",
            border_style="green",
        )
    )


def run_generation(
    document: ApiDocument,
    language: str,
    config: GeneratorConfig,
    hook: Optional[PostProcessHook] = None,
) -> GenerationResult:
    """Generate, write and post-process files for a parsed description."""
    generator = get_registry().create_generator(language, config)
    result = generate_code(generator, document)
    if not result.success:
        return result

    if hook is None:
        hook = PostProcessHook(config.resolve_post_process_command())

    write_generated_files(result.files, Path(config.output_dir), hook)
    return result


def handle_codegen_command(args: argparse.Namespace) -> int:
    """
    Handle code generation command from CLI arguments.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    if args.list_languages:
        return _list_languages()

    try:
        if not (args.spec or args.url):
            raise CLIError("Input source required (SPEC file or --url)")

        registry = get_registry()
        if not registry.is_supported(args.language):
            raise CLIError(
                f"Language '{args.language}' is not supported "
                f"(available: {', '.join(registry.list_languages())})"
            )
        language = registry.canonical_name(args.language)

        config = _build_config(args, language)
        source, data = load_spec(file_path=args.spec, url=args.url)
        document = ApiDocument.from_dict(data)
    except (CLIError, ConfigError, SpecLoaderError, SchemaError, FileNotFoundError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return EXIT_INPUT_ERROR

    console.print(f"📄 Loaded: {source}")

    try:
        result = run_generation(document, language, config)
    except (RegistryError, OSError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return EXIT_GENERATION_ERROR

    if not result.success:
        console.print(f"[red]✗ {result.error_message}[/red]")
        return EXIT_GENERATION_ERROR

    _print_summary(result, Path(config.output_dir), args.verbose)
    return EXIT_SUCCESS
