"""Tests for the read-only filesystem walk."""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path

import pytest

from doomctl.infrastructure.filesystem import iter_files, read_metadata
from tests.conftest import DAY, make_file


@pytest.fixture
def tree(scan_root: Path) -> Path:
    make_file(scan_root / "b.txt")
    make_file(scan_root / "a.txt")
    make_file(scan_root / "sub" / "c.log")
    make_file(scan_root / "sub" / "deeper" / "d.tmp")
    return scan_root


def _names(paths: list[Path], root: Path) -> list[str]:
    return [p.relative_to(root).as_posix() for p in paths]


class TestIterFiles:
    def test_recursive_sorted(self, tree: Path) -> None:
        assert _names(list(iter_files(tree)), tree) == [
            "a.txt",
            "b.txt",
            "sub/c.log",
            "sub/deeper/d.tmp",
        ]

    def test_non_recursive(self, tree: Path) -> None:
        assert _names(list(iter_files(tree, recursive=False)), tree) == ["a.txt", "b.txt"]

    def test_empty_dir(self, scan_root: Path) -> None:
        assert list(iter_files(scan_root)) == []

    def test_skips_symlinks_by_default(self, tree: Path, tmp_path: Path) -> None:
        outside = make_file(tmp_path / "outside" / "e.bin")
        os.symlink(outside, tree / "link.bin")
        os.symlink(outside.parent, tree / "linkdir")
        assert "link.bin" not in _names(list(iter_files(tree)), tree)
        assert not any(n.startswith("linkdir") for n in _names(list(iter_files(tree)), tree))

    def test_follows_symlinks_when_asked(self, tree: Path, tmp_path: Path) -> None:
        outside = make_file(tmp_path / "outside" / "e.bin")
        os.symlink(outside, tree / "link.bin")
        os.symlink(outside.parent, tree / "linkdir")
        names = _names(list(iter_files(tree, follow_symlinks=True)), tree)
        assert "link.bin" in names
        assert "linkdir/e.bin" in names

    def test_link_to_ancestor_does_not_loop(self, scan_root: Path) -> None:
        make_file(scan_root / "a" / "f.tmp")
        os.symlink(scan_root, scan_root / "a" / "loop")
        files = list(iter_files(scan_root, follow_symlinks=True))
        assert _names(files, scan_root) == ["a/f.tmp"]

    def test_two_links_to_one_directory_walk_it_once(
        self, scan_root: Path, tmp_path: Path
    ) -> None:
        make_file(tmp_path / "shared" / "g.bin")
        os.symlink(tmp_path / "shared", scan_root / "first")
        os.symlink(tmp_path / "shared", scan_root / "second")
        files = list(iter_files(scan_root, follow_symlinks=True))
        assert _names(files, scan_root) == ["first/g.bin"]

    def test_never_modifies(self, tree: Path) -> None:
        before = {p: p.stat().st_mtime for p in tree.rglob("*") if p.is_file()}
        list(iter_files(tree))
        after = {p: p.stat().st_mtime for p in tree.rglob("*") if p.is_file()}
        assert before == after


class TestReadMetadata:
    def test_size_and_age(self, scan_root: Path, now: float) -> None:
        path = make_file(scan_root / "big.bin", size=2048, age_days=3, now=now)
        meta = read_metadata(path, now=now)
        assert meta.name == "big.bin"
        assert meta.size_bytes == 2048
        assert meta.path == path
        assert abs(meta.age - timedelta(days=3)) < timedelta(seconds=1)

    def test_future_mtime_is_age_zero(self, scan_root: Path, now: float) -> None:
        path = make_file(scan_root / "future.txt", age_days=-1, now=now)
        assert read_metadata(path, now=now).age == timedelta(0)

    def test_defaults_to_current_time(self, scan_root: Path) -> None:
        path = make_file(scan_root / "old.txt", age_days=10)
        age = read_metadata(path).age
        assert timedelta(seconds=10 * DAY - 60) < age < timedelta(seconds=10 * DAY + 60)

    def test_missing_file_raises(self, scan_root: Path) -> None:
        with pytest.raises(OSError):
            read_metadata(scan_root / "gone.txt")
