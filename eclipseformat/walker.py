"""
Batch walker.

Drives the transform gateway over a single file or a directory tree,
writing, reporting or skipping each file according to the run mode,
and accumulates the outcome in a RunSummary.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import Callable, Iterator, Optional, Union

from .errors import PartialFailure, PathNotFoundError
from .gateway import TransformGateway
from .logging_utils import LOG
from .shared import (
    EligibilityPredicate,
    FileCandidate,
    PathKind,
    RunSummary,
    extension_predicate,
)

ListingErrorHandler = Callable[[Path, OSError], None]


def read_text(path: Path) -> str:
    """Read ``path`` as UTF-8 without translating line endings."""
    with path.open("r", encoding="utf-8", newline="") as f:
        return f.read()


def write_atomic(path: Path, content: str) -> None:
    """
    Replace ``path`` with ``content``.

    The content goes to a temporary file in the same directory which is
    then renamed over the original, so readers see either the old or the
    new file, never a partial one. Permission bits are preserved.
    Symlinks are written through: the link stays and its target is
    replaced.
    """
    real = path.resolve()
    mode = stat.S_IMODE(real.stat().st_mode)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{real.name}.", suffix=".tmp", dir=real.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, real)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def iter_candidates(
    root: Path,
    recursive: bool,
    on_error: Optional[ListingErrorHandler] = None,
) -> Iterator[FileCandidate]:
    """
    Yield the files and directories below ``root``.

    Entries are visited depth-first in name order. Without ``recursive``
    only the immediate children of ``root`` are yielded. Symlinked
    directories are reported but not descended into.
    """
    if root.is_file():
        yield FileCandidate(root, PathKind.File)
        return

    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as e:
        if on_error is None:
            raise
        on_error(root, e)
        return

    for entry in entries:
        if entry.is_dir():
            yield FileCandidate(entry, PathKind.Directory)
            if recursive and not entry.is_symlink():
                yield from iter_candidates(entry, recursive, on_error)
        elif entry.is_file():
            yield FileCandidate(entry, PathKind.File)


class BatchWalker:
    """
    Applies a TransformGateway to every eligible file under a root.

    Args:
        gateway: Gateway wrapping the transform provider
        is_eligible: Predicate selecting files to transform
            (defaults to case-insensitive ``.java`` suffix match)
    """

    def __init__(self, gateway: TransformGateway, is_eligible: Optional[EligibilityPredicate] = None):
        self.gateway = gateway
        self.is_eligible = is_eligible or extension_predicate()

    def run(self, root: Union[str, Path], recursive: bool = False, dry_run: bool = False) -> RunSummary:
        """
        Transform every eligible file under ``root``.

        Args:
            root: File or directory to process
            recursive: Descend into subdirectories
            dry_run: Only count files that would change, never write

        Returns:
            RunSummary with the final counters

        Raises:
            PathNotFoundError: If ``root`` does not exist
            PartialFailure: If any file failed; carries the summary
        """
        root = Path(root)
        if not root.exists():
            raise PathNotFoundError(f"Target does not exist: {root.absolute()}")

        summary = RunSummary()

        def _listing_failed(path: Path, error: OSError) -> None:
            LOG.error("Error reading directory %s: %s", path.absolute(), error)
            summary.record_error(path, str(error))

        if root.is_dir():
            LOG.debug("Formatting directory: %s", root.absolute())

        for candidate in iter_candidates(root, recursive, on_error=_listing_failed):
            if not candidate.is_file:
                continue
            if not self.is_eligible(candidate.path):
                LOG.debug("Skipping non-matching file: %s", candidate.path.absolute())
                continue
            self._process_file(candidate.path, dry_run, summary)

        if summary.error_count:
            raise PartialFailure(summary)
        return summary

    def _process_file(self, path: Path, dry_run: bool, summary: RunSummary) -> None:
        summary.record_processed()
        display = path.absolute()
        LOG.debug("Formatting file: %s", display)

        try:
            original = read_text(path)
            result = self.gateway.apply(original)
            if result.changed and not dry_run:
                write_atomic(path, result.content)
        except Exception as e:
            LOG.error("Error formatting %s: %s", display, e)
            summary.record_error(path, str(e))
            return

        if result.changed:
            summary.record_changed(path)
            if dry_run:
                LOG.info("[DRY RUN] Would format: %s", display)
            else:
                LOG.info("Formatted: %s", display)
        elif dry_run:
            LOG.debug("[DRY RUN] No changes needed: %s", display)
        else:
            LOG.debug("No changes needed: %s", display)
