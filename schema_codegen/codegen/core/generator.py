"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig
from .naming import NamingDiagnostic, NamingRules
from .postprocess import PostProcessHook
from .schema import ApiDocument
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


@dataclass(frozen=True)
class GeneratedFile:
    """One rendered artifact, relative to the output directory."""

    path: Path
    content: str
    file_type: str


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'c')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated sources (e.g., '.c')."""
        pass

    @property
    @abstractmethod
    def naming(self) -> NamingRules:
        """Return the naming rules every identifier is resolved through."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, document: ApiDocument) -> List[GeneratedFile]:
        """
        Generate all artifacts for an API description.

        Each call is one run: rename diagnostics from earlier runs are
        discarded before naming starts.

        Args:
            document: Parsed API description

        Returns:
            Rendered files with paths relative to the output directory
        """
        pass

    def validate_document(self, document: ApiDocument) -> List[str]:
        """
        Validate the description for basic structural issues.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        if not document.schemas and not document.operations:
            warnings.append("API description defines no schemas and no operations")

        seen_ids: Dict[str, str] = {}
        for operation in document.operations:
            key = operation.operation_id
            where = f"{operation.method} {operation.path}"
            if key in seen_ids:
                warnings.append(
                    f"Duplicate operationId '{key}' ({seen_ids[key]} and {where})"
                )
            else:
                seen_ids[key] = where

        return warnings

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: List[GeneratedFile],
        warnings: List[str] = None,
        diagnostics: List[NamingDiagnostic] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Generated files
            warnings: Any warnings from generation
            diagnostics: Corrective renames performed while naming
            metadata: Additional metadata about generation
        """
        self.files = files
        self.warnings = warnings or []
        self.diagnostics = diagnostics or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(files=[])
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, document: ApiDocument) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        document: API description to generate from

    Returns:
        GenerationResult with files, warnings, and metadata
    """
    try:
        warnings = generator.validate_document(document)
        files = generator.generate(document)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "schema_count": len(document.schemas),
            "operation_count": len(document.operations),
            "file_count": len(files),
        }

        return GenerationResult(
            files,
            warnings=warnings,
            diagnostics=list(generator.naming.diagnostics),
            metadata=metadata,
        )

    except Exception as e:
        logger.error("Code generation failed: %s", e, exc_info=True)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)


def write_generated_files(
    files: List[GeneratedFile],
    output_dir: Path,
    hook: Optional[PostProcessHook] = None,
) -> List[Path]:
    """
    Write generated files to disk, post-processing each one after it is written.

    Args:
        files: Files produced by a generator
        output_dir: Root output directory
        hook: Post-generation hook; None disables post-processing

    Returns:
        Absolute paths of the written files
    """
    written = []

    for generated in files:
        path = output_dir / generated.path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(generated.content, encoding="utf-8")
        logger.info("Wrote %s", path)

        if hook is not None:
            hook.after_file_written(path, generated.file_type)

        written.append(path)

    return written
