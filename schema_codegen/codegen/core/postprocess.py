"""
Post-generation hook.

Runs an operator-supplied formatter on every generated C source and
header. The command is read once from ``C_POST_PROCESS_FILE``; a failing
formatter is reported but never aborts generation.
"""

import os
import shlex
import subprocess
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)


POST_PROCESS_ENV_VAR = "C_POST_PROCESS_FILE"

SUPPORTED_FILE_TYPES = frozenset(
    {"supporting", "model", "model-test", "api", "api-test"}
)
SUPPORTED_EXTENSIONS = frozenset({"c", "h"})

Runner = Callable[..., subprocess.CompletedProcess]


class PostProcessHook:
    """Invokes an external formatter on written files."""

    def __init__(self, command: Optional[str] = None, runner: Optional[Runner] = None):
        """
        Initialize the hook.

        Args:
            command: Formatter path, optionally followed by arguments.
                Empty or None disables the hook.
            runner: Callable with the ``subprocess.run`` signature,
                ``subprocess.run`` when omitted
        """
        self.command = command or None
        self._argv = self._split_command(command)
        self._runner = runner or subprocess.run

    @staticmethod
    def _split_command(command: Optional[str]) -> List[str]:
        if not command:
            return []
        try:
            return shlex.split(command)
        except ValueError as e:
            logger.error(
                "Invalid post-processing command (%s), post-processing disabled: %s",
                command,
                e,
            )
            return []

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        runner: Optional[Runner] = None,
    ) -> "PostProcessHook":
        """Create a hook configured from ``C_POST_PROCESS_FILE``."""
        if environ is None:
            environ = os.environ
        return cls(environ.get(POST_PROCESS_ENV_VAR, "").strip(), runner=runner)

    @property
    def enabled(self) -> bool:
        return bool(self._argv)

    def should_process(self, file: Path, file_type: str) -> bool:
        if not self.enabled:
            return False
        if file_type not in SUPPORTED_FILE_TYPES:
            return False
        return file.suffix.lstrip(".") in SUPPORTED_EXTENSIONS

    def after_file_written(
        self, file: Union[str, Path, None], file_type: str
    ) -> Optional[bool]:
        """
        Post-process a written file.

        Blocks until the formatter exits.

        Returns:
            True on exit code 0, False on failure, None if the file was skipped
        """
        if file is None:
            return None

        file = Path(file)
        if not self.should_process(file, file_type):
            return None

        argv = self._argv + [str(file)]
        command = " ".join(argv)

        try:
            completed = self._runner(argv, check=False)
        except Exception as e:
            logger.error("Error running the command (%s). Exception: %s", command, e)
            return False

        if completed.returncode != 0:
            logger.error(
                "Error running the command (%s). Exit code: %s",
                command,
                completed.returncode,
            )
            return False

        logger.info("Successfully executed: %s", command)
        return True
