"""
Base interface for transform providers.

Defines the contract for pluggable formatting engines.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from ..shared import FormatterSettings


class TransformProvider(ABC):
    """
    Abstract base class for transform providers.

    A provider turns source text into formatted source text. It is
    treated as a black box: callers only compare its output with its
    input.

    Subclasses set ``NAME`` (the identifier used by ``--provider``) and
    ``DESCRIPTION`` as class attributes, so they can be listed without
    being constructed.
    """

    NAME: ClassVar[str] = ""
    DESCRIPTION: ClassVar[str] = ""

    @abstractmethod
    def transform(self, content: str, settings: FormatterSettings) -> str:
        """
        Format ``content`` according to ``settings``.

        Args:
            content: Source text, never empty or whitespace-only
            settings: Opaque formatter settings

        Returns:
            The formatted text

        Raises:
            TransformError: If the content cannot be formatted
        """
        ...

    def check_available(self) -> None:
        """
        Verify the provider can run in this environment.

        Override this method for providers that depend on external tools.

        Raises:
            PathNotFoundError: If a required executable is missing
        """
        ...
