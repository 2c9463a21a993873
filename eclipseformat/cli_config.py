"""
CLI configuration data structures.

Defines UserConfig, produced by the gather phase, and ExecutionPlan,
produced by the prepare phase and consumed by the execute phase.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .gateway import TransformGateway
from .logging_utils import VERBOSITY_NORMAL, VERBOSITY_VERBOSE
from .providers import DEFAULT_PROVIDER
from .shared import DEFAULT_EXTENSION, FormatterSettings
from .walker import BatchWalker

DEFAULT_CONFIG_FILE = "eclipse-format.xml"
DEFAULT_TIMEOUT = 120.0


@dataclass
class UserConfig:
    """Configuration gathered from user input."""

    target: Path  # File or directory to format
    config_file: Path = Path(DEFAULT_CONFIG_FILE)  # Eclipse XML profile

    # Run mode
    dry_run: bool = False
    recursive: bool = False

    # File selection and formatting engine
    extension: str = DEFAULT_EXTENSION
    provider: str = DEFAULT_PROVIDER
    eclipse: Optional[str] = None  # Eclipse executable (eclipse provider)
    formatter_command: Optional[str] = None  # stdin/stdout command (command provider)
    timeout: float = DEFAULT_TIMEOUT

    # Output settings
    verbose: bool = False
    debug: bool = False
    log_file: Optional[str] = None

    @property
    def verbosity(self) -> int:
        return VERBOSITY_VERBOSE if (self.verbose or self.debug) else VERBOSITY_NORMAL


@dataclass
class ExecutionPlan:
    """Validated, ready-to-run state built from a UserConfig."""

    config: UserConfig
    settings: FormatterSettings
    gateway: TransformGateway
    walker: BatchWalker
