"""
Transform gateway.

Applies a transform provider to a piece of content with a fail-soft
contract: a provider error never escapes, the original content is
returned instead.
"""

from __future__ import annotations

from typing import Callable, Optional

from .errors import TransformError
from .providers.base import TransformProvider
from .shared import FormatterSettings, TransformResult

DiagnosticsSink = Callable[[TransformError], None]


class TransformGateway:
    """
    Wraps a TransformProvider and its settings.

    Args:
        provider: The formatting engine
        settings: Settings handed to the provider on every call
        diagnostics: Optional callback receiving swallowed TransformErrors
    """

    def __init__(
        self,
        provider: TransformProvider,
        settings: Optional[FormatterSettings] = None,
        diagnostics: Optional[DiagnosticsSink] = None,
    ):
        self.provider = provider
        self.settings = settings if settings is not None else FormatterSettings()
        self.diagnostics = diagnostics

    def apply(self, content: str) -> TransformResult:
        """
        Transform ``content``.

        Empty and whitespace-only content is returned as-is without
        calling the provider. If the provider raises TransformError the
        original content is returned with ``changed=False``.
        """
        # str.strip() also treats Unicode spaces such as U+00A0 as blank
        if not content.strip():
            return TransformResult.unchanged(content)

        try:
            transformed = self.provider.transform(content, self.settings)
        except TransformError as e:
            if self.diagnostics is not None:
                self.diagnostics(e)
            return TransformResult.unchanged(content)

        return TransformResult.compare(content, transformed)
