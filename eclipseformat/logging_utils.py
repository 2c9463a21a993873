"""
Logging helpers for eclipseformat.

Defines the package logger and simple utilities for configuring
console and optional file logging.
"""

from __future__ import annotations

import logging
from typing import List, Optional

LOG = logging.getLogger("eclipseformat")

# Verbosity levels
VERBOSITY_NORMAL = 1   # Action lines only (default)
VERBOSITY_VERBOSE = 2  # Configuration, per-file decisions and totals

def setup_logging(debug: bool, log_file: Optional[str] = None, verbosity: int = VERBOSITY_NORMAL) -> None:
    """
    Setup logging with verbosity control.

    Console output goes to stderr, which is the diagnostic stream for
    the CLI.

    Args:
        debug: Debug flag (overrides verbosity to VERBOSITY_VERBOSE)
        log_file: Optional log file path
        verbosity: Verbosity level (1=normal, 2=verbose)
    """
    if debug:
        verbosity = VERBOSITY_VERBOSE

    if verbosity >= VERBOSITY_VERBOSE:
        level = logging.DEBUG
        console_format = "%(levelname)s: %(message)s"
    else:
        level = logging.INFO
        console_format = "%(message)s"

    # Check if handlers are already configured (e.g., by pytest)
    # If so, just update the level on existing handlers
    if logging.root.handlers:
        for handler in logging.root.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(level)
                handler.setFormatter(logging.Formatter(console_format))
        logging.root.setLevel(level)
    else:
        handlers: List[logging.Handler] = []

        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(logging.Formatter(console_format))
        handlers.append(console)

        logging.basicConfig(level=level, handlers=handlers, force=True)

    # Optional file output
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # always full detail in file
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logging.root.addHandler(file_handler)
        # File gets DEBUG even when the console stays at INFO
        logging.root.setLevel(logging.DEBUG)

def fmt_summary(processed: int, changed: int, errors: int, dry_run: bool) -> str:
    """
    Compact one-line summary of a batch run.
    """
    verb = "would change" if dry_run else "changed"
    parts: List[str] = [f"{processed} processed", f"{changed} {verb}"]
    if errors:
        parts.append(f"{errors} failed")
    return ", ".join(parts)
