"""Filesystem walk feeding the rule engine.

INVARIANT: read-only.  This module stats files; it never deletes,
moves, or rewrites anything.
"""

from __future__ import annotations

import os
import time
from collections.abc import Iterator
from datetime import timedelta
from pathlib import Path

from doomctl.domain.rules import FileMetadata


def iter_files(
    root: Path,
    *,
    recursive: bool = True,
    follow_symlinks: bool = False,
) -> Iterator[Path]:
    """Yield regular files under *root* in sorted order.

    Symlinked files and directories are skipped unless *follow_symlinks*.
    When following, each directory is walked once no matter how many
    links reach it, so a link back to an ancestor cannot loop.
    Unreadable directories are skipped silently by ``os.walk``.
    """
    if not recursive:
        for path in sorted(root.iterdir()):
            if path.is_symlink() and not follow_symlinks:
                continue
            if path.is_file():
                yield path
        return

    seen: set[tuple[int, int]] = set()
    for dirpath, dirnames, filenames in os.walk(root, followlinks=follow_symlinks):
        if follow_symlinks:
            try:
                st = os.stat(dirpath)
            except OSError:
                dirnames.clear()
                continue
            identity = (st.st_dev, st.st_ino)
            if identity in seen:
                dirnames.clear()
                continue
            seen.add(identity)
        dirnames.sort()
        base = Path(dirpath)
        for filename in sorted(filenames):
            path = base / filename
            if path.is_symlink() and not follow_symlinks:
                continue
            if path.is_file():
                yield path


def read_metadata(path: Path, *, now: float | None = None) -> FileMetadata:
    """Stat *path* into :class:`FileMetadata`.

    Age is measured from the last modification time.  Files modified in
    the future get age zero.

    Raises:
        OSError: If the file vanished or cannot be stat'ed.
    """
    st = path.stat()
    reference = time.time() if now is None else now
    age_seconds = max(0.0, reference - st.st_mtime)
    return FileMetadata(
        name=path.name,
        size_bytes=st.st_size,
        age=timedelta(seconds=age_seconds),
        path=path,
    )
