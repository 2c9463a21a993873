"""
Shared models.

Defines the data structures passed between the settings loader, the
transform gateway and the batch walker, plus the default file
eligibility rule.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

# ------------------------- Models -------------------------

class PathKind(str, Enum):
    File = "file"
    Directory = "directory"


@dataclass(frozen=True)
class FileCandidate:
    path: Path
    kind: PathKind

    @property
    def is_file(self) -> bool:
        return self.kind == PathKind.File


@dataclass(frozen=True)
class TransformResult:
    """
    Outcome of transforming one file's content.

    ``changed`` is always ``content != original``.
    """
    content: str
    changed: bool

    @classmethod
    def compare(cls, original: str, content: str) -> "TransformResult":
        return cls(content=content, changed=content != original)

    @classmethod
    def unchanged(cls, original: str) -> "TransformResult":
        return cls(content=original, changed=False)


@dataclass
class RunSummary:
    """
    Counters accumulated over a single batch run.
    """
    processed_count: int = 0
    changed_count: int = 0
    error_count: int = 0
    changed_files: List[Path] = field(default_factory=list)
    errors: Dict[Path, str] = field(default_factory=dict)

    def record_processed(self) -> None:
        self.processed_count += 1

    def record_changed(self, path: Path) -> None:
        self.changed_count += 1
        self.changed_files.append(path)

    def record_error(self, path: Path, message: str) -> None:
        self.error_count += 1
        self.errors[path] = message

    @property
    def ok(self) -> bool:
        return self.error_count == 0


@dataclass(frozen=True)
class FormatterSettings:
    """
    Immutable formatter settings handed through to the transform provider.

    The values are never interpreted by the gateway or the walker.
    """
    values: Mapping[str, str] = field(default_factory=dict)
    source: Optional[Path] = None

    def __post_init__(self) -> None:
        # Freeze a private copy so callers cannot mutate it later
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.values.get(key, default)

    def as_dict(self) -> Dict[str, str]:
        return dict(self.values)

    def __len__(self) -> int:
        return len(self.values)


# ------------------------- Eligibility -------------------------

EligibilityPredicate = Callable[[Path], bool]

DEFAULT_EXTENSION = ".java"


def normalize_extension(extension: str) -> str:
    """Return ``extension`` lower-cased with a single leading dot."""
    extension = extension.strip().lower()
    if not extension:
        raise ValueError("Extension must not be empty")
    if not extension.startswith("."):
        extension = "." + extension
    return extension


def extension_predicate(extension: str = DEFAULT_EXTENSION) -> EligibilityPredicate:
    """
    Build a predicate that accepts paths whose name ends with ``extension``.

    The comparison is case-insensitive, so ``Foo.JAVA`` matches ``.java``.
    """
    suffix = normalize_extension(extension)

    def _is_eligible(path: Path) -> bool:
        return path.name.lower().endswith(suffix)

    return _is_eligible
