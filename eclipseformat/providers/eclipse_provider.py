"""
Eclipse headless formatter provider.

Runs Eclipse's JavaCodeFormatter application on a scratch copy of the
content, using the loaded settings written out as a .prefs file.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

from .base import TransformProvider
from .provider_registry import register_provider
from ..errors import PathNotFoundError, TransformError
from ..logging_utils import LOG
from ..shared import FormatterSettings

ECLIPSE_EXECUTABLE_ENV = "ECLIPSE_FORMATTER_EXECUTABLE"
FORMATTER_APPLICATION = "org.eclipse.jdt.core.JavaCodeFormatter"
DEFAULT_TIMEOUT = 120.0


def _escape_property(text: str, is_key: bool) -> str:
    """Escape ``text`` for a java.util.Properties file."""
    out: List[str] = []
    for ch in text:
        if ch == "\\":
            out.append("\\\\")
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif is_key and ch in "=: ":
            out.append("\\" + ch)
        elif ord(ch) > 0xFF:
            out.extend("\\u%04x" % unit for unit in _utf16_units(ch))
        else:
            out.append(ch)
    return "".join(out)


def _utf16_units(ch: str) -> List[int]:
    data = ch.encode("utf-16-be")
    return [int.from_bytes(data[i:i + 2], "big") for i in range(0, len(data), 2)]


def write_prefs(settings: FormatterSettings, path: Path) -> Path:
    """
    Write ``settings`` as an Eclipse preferences (.prefs) file.
    """
    lines = ["eclipse.preferences.version=1"]
    for key in sorted(settings.values):
        lines.append(
            f"{_escape_property(key, is_key=True)}={_escape_property(settings.values[key], is_key=False)}"
        )
    path.write_text("\n".join(lines) + "\n", encoding="latin-1")
    return path


@register_provider
class EclipseProvider(TransformProvider):
    """
    Format Java source with a local Eclipse installation.

    The executable is taken from the ``executable`` argument, then the
    ECLIPSE_FORMATTER_EXECUTABLE environment variable, then ``eclipse``
    on PATH.
    """

    NAME = "eclipse"
    DESCRIPTION = "Eclipse headless JavaCodeFormatter (requires a local Eclipse install)"

    def __init__(self, executable: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT):
        self.executable = executable or os.environ.get(ECLIPSE_EXECUTABLE_ENV) or "eclipse"
        self.timeout = timeout

    def _resolve_executable(self) -> Optional[str]:
        found = shutil.which(self.executable)
        if found:
            return found
        candidate = Path(self.executable).expanduser()
        if candidate.is_file():
            return str(candidate)
        return None

    def check_available(self) -> None:
        if self._resolve_executable() is None:
            raise PathNotFoundError(
                f"Eclipse executable not found: {self.executable} "
                f"(use --eclipse or set {ECLIPSE_EXECUTABLE_ENV})"
            )

    def build_command(self, workdir: Path, prefs: Path, source: Path) -> List[str]:
        executable = self._resolve_executable() or self.executable
        return [
            executable,
            "-nosplash",
            "-application", FORMATTER_APPLICATION,
            "-data", str(workdir / "workspace"),
            "-quiet",
            "-config", str(prefs),
            str(source),
        ]

    def transform(self, content: str, settings: FormatterSettings) -> str:
        with tempfile.TemporaryDirectory(prefix="eclipseformat-") as tmp:
            workdir = Path(tmp)
            # JavaCodeFormatter only picks up files with a .java suffix
            source = workdir / "Source.java"
            with source.open("w", encoding="utf-8", newline="") as f:
                f.write(content)
            prefs = write_prefs(settings, workdir / "org.eclipse.jdt.core.prefs")

            cmd = self.build_command(workdir, prefs, source)
            LOG.debug("Executing Eclipse formatter: %s", " ".join(cmd))
            try:
                subprocess.run(
                    cmd,
                    check=True,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                )
            except subprocess.CalledProcessError as e:
                message = (e.stderr or e.stdout or "").strip() or f"exit status {e.returncode}"
                raise TransformError(f"Eclipse formatter failed: {message}") from e
            except subprocess.TimeoutExpired as e:
                raise TransformError(f"Eclipse formatter timed out after {self.timeout:g}s") from e
            except OSError as e:
                raise TransformError(f"Could not launch Eclipse formatter: {e}") from e

            with source.open("r", encoding="utf-8", newline="") as f:
                return f.read()
