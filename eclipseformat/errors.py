"""
Exception types for eclipseformat.

Failures that stop a run from starting (bad target, bad config) are fatal.
Failures scoped to a single file are counted and reported at the end.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .shared import RunSummary


class EclipseFormatError(Exception):
    """Base class for all errors raised by eclipseformat."""


class PathNotFoundError(EclipseFormatError, FileNotFoundError):
    """Target, config file or formatter executable does not exist."""


class ConfigParseError(EclipseFormatError, ValueError):
    """The formatter settings document could not be parsed."""


class TransformError(EclipseFormatError):
    """The transform provider rejected the content."""


class PartialFailure(EclipseFormatError):
    """
    One or more files failed during a batch run.

    The run still processed every other file; ``summary`` holds the
    final counters.
    """

    def __init__(self, summary: "RunSummary"):
        self.summary = summary
        super().__init__(
            f"{summary.error_count} file(s) failed "
            f"({summary.processed_count} processed, {summary.changed_count} changed)"
        )


class UnknownProviderError(EclipseFormatError, ValueError):
    """No transform provider is registered under the requested name."""
