# eclipseformat/__init__.py

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("eclipse-format-cli")
except PackageNotFoundError:
    __version__ = "dev"

from .errors import (
    EclipseFormatError,
    PathNotFoundError,
    ConfigParseError,
    TransformError,
    PartialFailure,
    UnknownProviderError,
)
from .shared import (
    FileCandidate,
    PathKind,
    TransformResult,
    RunSummary,
    FormatterSettings,
    extension_predicate,
)
from .settings_loader import load_settings
from .gateway import TransformGateway
from .walker import BatchWalker

__all__ = [
    "__version__",
    "EclipseFormatError",
    "PathNotFoundError",
    "ConfigParseError",
    "TransformError",
    "PartialFailure",
    "UnknownProviderError",
    "FileCandidate",
    "PathKind",
    "TransformResult",
    "RunSummary",
    "FormatterSettings",
    "extension_predicate",
    "load_settings",
    "TransformGateway",
    "BatchWalker",
]
