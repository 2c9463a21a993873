"""
Identity provider.

Returns content unchanged. Handy for checking which files a run would
touch and whether the settings profile loads.
"""

from __future__ import annotations

from .base import TransformProvider
from .provider_registry import register_provider
from ..shared import FormatterSettings


@register_provider
class IdentityProvider(TransformProvider):

    NAME = "identity"
    DESCRIPTION = "Leave content unchanged (selection and config check only)"

    def transform(self, content: str, settings: FormatterSettings) -> str:
        return content
