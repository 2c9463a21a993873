"""
Transform provider interfaces and implementations.

Importing this package registers the built-in providers.
"""

from __future__ import annotations

from .base import TransformProvider
from .command_provider import CommandProvider
from .eclipse_provider import EclipseProvider
from .identity_provider import IdentityProvider
from .provider_registry import (
    describe_providers,
    get_provider,
    provider_names,
    register_provider,
    unregister_provider,
)

DEFAULT_PROVIDER = EclipseProvider.NAME

__all__ = [
    "TransformProvider",
    "EclipseProvider",
    "CommandProvider",
    "IdentityProvider",
    "DEFAULT_PROVIDER",
    "describe_providers",
    "get_provider",
    "provider_names",
    "register_provider",
    "unregister_provider",
]
