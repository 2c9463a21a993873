"""
Name-keyed lookup of transform providers.

Only classes are stored. A provider is constructed when a run asks for
it, with that run's options, so listing or registering providers never
reads the environment or probes for executables.
"""

from __future__ import annotations

from typing import Dict, List, Tuple, Type

from .base import TransformProvider
from ..errors import UnknownProviderError

_PROVIDERS: Dict[str, Type[TransformProvider]] = {}


def register_provider(provider_class: Type[TransformProvider]) -> Type[TransformProvider]:
    """
    Make ``provider_class`` selectable by its ``NAME``.

    Returns the class unchanged so it can be used as a decorator. A later
    registration under the same name replaces the earlier one.
    """
    if not provider_class.NAME:
        raise ValueError(f"{provider_class.__name__} does not define NAME")
    _PROVIDERS[provider_class.NAME] = provider_class
    return provider_class


def unregister_provider(name: str) -> None:
    _PROVIDERS.pop(name, None)


def provider_names() -> List[str]:
    return sorted(_PROVIDERS)


def describe_providers() -> List[Tuple[str, str]]:
    """(name, description) pairs, sorted by name."""
    return [(name, _PROVIDERS[name].DESCRIPTION) for name in provider_names()]


def get_provider(name: str, **options) -> TransformProvider:
    """
    Construct the provider registered as ``name``.

    Raises:
        UnknownProviderError: If no provider has that name
    """
    provider_class = _PROVIDERS.get(name)
    if provider_class is None:
        raise UnknownProviderError(
            f"Unknown provider: {name} (available: {', '.join(provider_names())})"
        )
    return provider_class(**options)
