"""Tests for the batch walker."""

import logging
import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

import eclipseformat.walker
from eclipseformat.errors import PartialFailure, PathNotFoundError
from eclipseformat.gateway import TransformGateway
from eclipseformat.shared import PathKind, extension_predicate
from eclipseformat.walker import BatchWalker, iter_candidates, read_text, write_atomic

from conftest import RejectingProvider


def snapshot(root: Path) -> dict:
    return {p: p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}


class TestRunScenarios:
    """End-to-end behaviour of BatchWalker.run."""

    def test_single_file_is_formatted(self, tmp_path, spacing_gateway):
        foo = tmp_path / "Foo.java"
        foo.write_text("public class Foo{}", encoding="utf-8")

        summary = BatchWalker(spacing_gateway).run(tmp_path, recursive=True, dry_run=False)

        assert (summary.processed_count, summary.changed_count, summary.error_count) == (1, 1, 0)
        assert foo.read_text(encoding="utf-8") == "public class Foo {}"
        assert summary.changed_files == [foo]

    def test_file_root_is_processed_directly(self, tmp_path, spacing_gateway):
        foo = tmp_path / "Foo.java"
        foo.write_text("class Foo{}", encoding="utf-8")

        summary = BatchWalker(spacing_gateway).run(foo)

        assert summary.processed_count == 1
        assert summary.changed_count == 1

    def test_ineligible_file_root_is_a_no_op(self, tmp_path, spacing_gateway, spacing_provider):
        readme = tmp_path / "README.md"
        readme.write_text("class Readme{}", encoding="utf-8")

        summary = BatchWalker(spacing_gateway).run(readme)

        assert summary.processed_count == 0
        assert summary.changed_count == 0
        assert spacing_provider.calls == []
        assert readme.read_text(encoding="utf-8") == "class Readme{}"

    def test_missing_root_raises_before_any_io(self, tmp_path, spacing_gateway):
        with pytest.raises(PathNotFoundError, match="does not exist"):
            BatchWalker(spacing_gateway).run(tmp_path / "missing")

    def test_empty_file_is_processed_but_not_changed(self, tmp_path, spacing_gateway, spacing_provider):
        (tmp_path / "Empty.java").write_text("", encoding="utf-8")

        summary = BatchWalker(spacing_gateway).run(tmp_path)

        assert summary.processed_count == 1
        assert summary.changed_count == 0
        assert spacing_provider.calls == []

    def test_empty_directory(self, tmp_path, spacing_gateway):
        summary = BatchWalker(spacing_gateway).run(tmp_path, recursive=True)
        assert (summary.processed_count, summary.changed_count, summary.error_count) == (0, 0, 0)


class TestRecursion:
    """Recursive vs non-recursive traversal."""

    def test_non_recursive_processes_only_immediate_children(self, java_tree, spacing_gateway):
        summary = BatchWalker(spacing_gateway).run(java_tree, recursive=False)

        assert summary.processed_count == 2  # A.java, B.JAVA
        assert summary.changed_count == 1
        assert (java_tree / "sub" / "C.java").read_text(encoding="utf-8") == "class C{}"

    def test_recursive_processes_subtree(self, java_tree, spacing_gateway):
        summary = BatchWalker(spacing_gateway).run(java_tree, recursive=True)

        assert summary.processed_count == 3
        assert summary.changed_count == 2
        assert (java_tree / "sub" / "C.java").read_text(encoding="utf-8") == "class C {}"

    def test_traversal_order_is_lexicographic_depth_first(self, tmp_path):
        for rel in ["b/Z.java", "a/Y.java", "M.java", "a/c/X.java", "C.java"]:
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(rel, encoding="utf-8")

        files = [
            c.path.relative_to(tmp_path).as_posix()
            for c in iter_candidates(tmp_path, recursive=True)
            if c.kind == PathKind.File
        ]

        assert files == ["C.java", "M.java", "a/Y.java", "a/c/X.java", "b/Z.java"]

    def test_iter_candidates_reports_directories(self, java_tree):
        kinds = {c.path.name: c.kind for c in iter_candidates(java_tree, recursive=False)}
        assert kinds["sub"] == PathKind.Directory
        assert kinds["A.java"] == PathKind.File

    def test_symlinked_directories_are_not_followed(self, tmp_path, spacing_gateway):
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "Out.java").write_text("class Out{}", encoding="utf-8")
        root = tmp_path / "root"
        root.mkdir()
        try:
            (root / "link").symlink_to(outside, target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

        summary = BatchWalker(spacing_gateway).run(root, recursive=True)

        assert summary.processed_count == 0
        assert (outside / "Out.java").read_text(encoding="utf-8") == "class Out{}"


class TestDryRun:
    """Dry-run never mutates the tree."""

    def test_dry_run_leaves_files_byte_identical(self, java_tree, spacing_gateway):
        before = snapshot(java_tree)

        summary = BatchWalker(spacing_gateway).run(java_tree, recursive=True, dry_run=True)

        assert summary.changed_count == 2
        assert snapshot(java_tree) == before

    def test_dry_run_logs_would_format(self, java_tree, spacing_gateway, caplog):
        with caplog.at_level(logging.INFO, logger="eclipseformat"):
            BatchWalker(spacing_gateway).run(java_tree, dry_run=True)

        assert f"[DRY RUN] Would format: {(java_tree / 'A.java').absolute()}" in caplog.text
        assert "Formatted:" not in caplog.text

    def test_dry_run_never_writes(self, java_tree, spacing_gateway):
        with patch("eclipseformat.walker.write_atomic") as mock_write:
            BatchWalker(spacing_gateway).run(java_tree, recursive=True, dry_run=True)
        mock_write.assert_not_called()


class TestEligibility:
    """Ineligible files are never read or counted."""

    def test_ineligible_files_are_never_read(self, java_tree, spacing_gateway):
        read_paths = []

        def recording_read(path):
            read_paths.append(path.name)
            return read_text(path)

        with patch("eclipseformat.walker.read_text", side_effect=recording_read):
            BatchWalker(spacing_gateway).run(java_tree, recursive=True)

        assert "notes.txt" not in read_paths
        assert sorted(read_paths) == ["A.java", "B.JAVA", "C.java"]
        assert (java_tree / "notes.txt").read_text(encoding="utf-8") == "class Notes{}"

    def test_custom_extension(self, java_tree, spacing_gateway):
        walker = BatchWalker(spacing_gateway, extension_predicate("txt"))

        summary = walker.run(java_tree, recursive=True)

        assert summary.processed_count == 1
        assert (java_tree / "notes.txt").read_text(encoding="utf-8") == "class Notes {}"
        assert (java_tree / "A.java").read_text(encoding="utf-8") == "public class A{}"

    def test_skips_are_logged_at_debug(self, java_tree, spacing_gateway, caplog):
        with caplog.at_level(logging.DEBUG, logger="eclipseformat"):
            BatchWalker(spacing_gateway).run(java_tree)
        assert "Skipping non-matching file" in caplog.text


class TestIdempotence:
    """Repeated runs converge."""

    def test_second_run_changes_nothing(self, java_tree, spacing_gateway):
        walker = BatchWalker(spacing_gateway)
        walker.run(java_tree, recursive=True)
        after_first = snapshot(java_tree)

        summary = walker.run(java_tree, recursive=True)

        assert summary.changed_count == 0
        assert snapshot(java_tree) == after_first

    def test_line_endings_are_preserved(self, tmp_path, spacing_gateway):
        crlf = tmp_path / "Win.java"
        crlf.write_bytes(b"class Win{\r\n}\r\n")

        summary = BatchWalker(spacing_gateway).run(tmp_path)

        assert summary.changed_count == 1
        assert crlf.read_bytes() == b"class Win {\r\n}\r\n"


class TestErrorContainment:
    """Per-file failures are counted and do not stop the run."""

    def test_write_failure_does_not_stop_siblings(self, java_tree, spacing_gateway):
        real_write = eclipseformat.walker.write_atomic

        def flaky_write(path, content):
            if path.name == "A.java":
                raise PermissionError(13, "Permission denied", str(path))
            real_write(path, content)

        with patch("eclipseformat.walker.write_atomic", side_effect=flaky_write):
            with pytest.raises(PartialFailure) as exc_info:
                BatchWalker(spacing_gateway).run(java_tree, recursive=True)

        summary = exc_info.value.summary
        assert summary.error_count == 1
        assert summary.processed_count == 3
        assert summary.changed_count == 1
        assert (java_tree / "A.java").read_text(encoding="utf-8") == "public class A{}"
        assert (java_tree / "sub" / "C.java").read_text(encoding="utf-8") == "class C {}"
        assert "Permission denied" in summary.errors[java_tree / "A.java"]

    def test_undecodable_file_is_an_error(self, tmp_path, spacing_gateway, caplog):
        (tmp_path / "Bad.java").write_bytes(b"class Bad{\xff\xfe}")
        (tmp_path / "Good.java").write_text("class Good{}", encoding="utf-8")

        with pytest.raises(PartialFailure) as exc_info:
            BatchWalker(spacing_gateway).run(tmp_path)

        assert exc_info.value.summary.error_count == 1
        assert exc_info.value.summary.changed_count == 1
        assert "Error formatting" in caplog.text
        assert "Bad.java" in caplog.text

    def test_transform_error_is_not_a_file_error(self, tmp_path):
        (tmp_path / "Broken.java").write_text("class broken{", encoding="utf-8")
        (tmp_path / "Fine.java").write_text("class fine{}", encoding="utf-8")
        gateway = TransformGateway(RejectingProvider())

        summary = BatchWalker(gateway).run(tmp_path)

        assert summary.error_count == 0
        assert summary.processed_count == 2
        assert summary.changed_count == 1
        assert (tmp_path / "Broken.java").read_text(encoding="utf-8") == "class broken{"

    def test_partial_failure_message_includes_counts(self, tmp_path, spacing_gateway):
        (tmp_path / "Bad.java").write_bytes(b"\xff")

        with pytest.raises(PartialFailure, match=r"1 file\(s\) failed"):
            BatchWalker(spacing_gateway).run(tmp_path)


class TestWriteAtomic:
    """Tests for the temp-file-and-rename writer."""

    def test_replaces_content_and_leaves_no_temp_files(self, tmp_path):
        target = tmp_path / "X.java"
        target.write_text("old", encoding="utf-8")

        write_atomic(target, "new")

        assert target.read_text(encoding="utf-8") == "new"
        assert [p.name for p in tmp_path.iterdir()] == ["X.java"]

    def test_preserves_permission_bits(self, tmp_path):
        target = tmp_path / "X.java"
        target.write_text("old", encoding="utf-8")
        os.chmod(target, 0o640)

        write_atomic(target, "new")

        assert stat.S_IMODE(target.stat().st_mode) == 0o640

    def test_failed_replace_keeps_original_and_cleans_up(self, tmp_path):
        target = tmp_path / "X.java"
        target.write_text("old", encoding="utf-8")

        with patch("eclipseformat.walker.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                write_atomic(target, "new")

        assert target.read_text(encoding="utf-8") == "old"
        assert [p.name for p in tmp_path.iterdir()] == ["X.java"]

    def test_writes_through_symlink(self, tmp_path):
        real = tmp_path / "Real.java"
        real.write_text("old", encoding="utf-8")
        link = tmp_path / "Link.java"
        try:
            link.symlink_to(real)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

        write_atomic(link, "new")

        assert link.is_symlink()
        assert real.read_text(encoding="utf-8") == "new"


class TestSymlinkedFiles:
    """Symlinked source files are formatted in place of their target."""

    def test_symlinked_file_keeps_link_and_formats_target(self, tmp_path, spacing_gateway):
        shared = tmp_path / "real" / "Shared.java"
        shared.parent.mkdir()
        shared.write_text("class Shared{}", encoding="utf-8")
        src = tmp_path / "src"
        src.mkdir()
        link = src / "Link.java"
        try:
            link.symlink_to(shared)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

        summary = BatchWalker(spacing_gateway).run(src)

        assert summary.changed_count == 1
        assert link.is_symlink()
        assert shared.read_text(encoding="utf-8") == "class Shared {}"
        assert [p.name for p in src.iterdir()] == ["Link.java"]
