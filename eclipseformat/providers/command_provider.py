"""
External command provider.

Pipes content through any formatter that reads source on stdin and
writes the result to stdout (e.g. ``google-java-format -``).
"""

from __future__ import annotations

import shlex
import shutil
import subprocess
from typing import List, Optional, Sequence, Union

from .base import TransformProvider
from .provider_registry import register_provider
from ..errors import PathNotFoundError, TransformError
from ..logging_utils import LOG
from ..shared import FormatterSettings

DEFAULT_TIMEOUT = 120.0


@register_provider
class CommandProvider(TransformProvider):
    """
    Format content with an arbitrary stdin/stdout command.

    The settings are not passed to the command; configure the command
    itself through its own arguments.
    """

    NAME = "command"
    DESCRIPTION = "Pipe content through an external formatter command (stdin -> stdout)"

    def __init__(
        self,
        command: Optional[Union[str, Sequence[str]]] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        if isinstance(command, str):
            command = shlex.split(command)
        self.command: List[str] = list(command or [])
        self.timeout = timeout

    def check_available(self) -> None:
        if not self.command:
            raise ValueError("The command provider requires --formatter-command")
        if shutil.which(self.command[0]) is None:
            raise PathNotFoundError(f"Formatter command not found: {self.command[0]}")

    def transform(self, content: str, settings: FormatterSettings) -> str:
        if not self.command:
            raise TransformError("No formatter command configured")

        LOG.debug("Executing formatter command: %s", " ".join(self.command))
        try:
            completed = subprocess.run(
                self.command,
                # bytes in and out so line endings survive untouched
                input=content.encode("utf-8"),
                check=True,
                capture_output=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as e:
            message = (e.stderr or b"").decode("utf-8", errors="replace").strip() or f"exit status {e.returncode}"
            raise TransformError(f"Formatter command failed: {message}") from e
        except subprocess.TimeoutExpired as e:
            raise TransformError(f"Formatter command timed out after {self.timeout:g}s") from e
        except OSError as e:
            raise TransformError(f"Could not launch formatter command: {e}") from e

        try:
            return completed.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TransformError(f"Formatter command produced invalid UTF-8: {e}") from e
