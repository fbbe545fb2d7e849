"""ScanService: walk ``doom_path`` and plan which files the rules would delete.

The walk is sequential; stat and rule evaluation run on a thread pool.
Rules are frozen, so workers share the rule set without locking.

INVARIANT: scanning is read-only.  The result is a candidate list; no
file is removed.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Iterable, Iterator
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any

import structlog

from doomctl.domain.rules import FileMetadata, RuleSet
from doomctl.infrastructure.filesystem import iter_files, read_metadata
from doomctl.services.base import BaseService
from doomctl.services.result import ServiceResult

logger = logging.getLogger(__name__)
log = structlog.get_logger(__name__)

# In-flight evaluations per worker thread.
_WINDOW_PER_WORKER = 4

_Evaluation = Future[tuple[FileMetadata, list[int]]]


def _evaluate(path: Path, rules: RuleSet, now: float) -> tuple[FileMetadata, list[int]]:
    meta = read_metadata(path, now=now)
    if not rules.should_delete(meta):
        return meta, []
    return meta, rules.matching(meta)


def _windowed(
    pool: Executor,
    paths: Iterable[Path],
    rules: RuleSet,
    now: float,
    window: int,
) -> Iterator[tuple[Path, _Evaluation]]:
    """Submit an evaluation per path, yielding futures in walk order.

    At most *window* evaluations are pending at once; the walk only
    advances as the caller consumes results.
    """
    pending: deque[tuple[Path, _Evaluation]] = deque()
    for path in paths:
        pending.append((path, pool.submit(_evaluate, path, rules, now)))
        if len(pending) >= window:
            yield pending.popleft()
    while pending:
        yield pending.popleft()


def _candidate(meta: FileMetadata, matched: list[int]) -> dict[str, Any]:
    return {
        "path": str(meta.path),
        "name": meta.name,
        "size_bytes": meta.size_bytes,
        "age_seconds": round(meta.age.total_seconds(), 3),
        "rules": matched,
    }


class ScanService(BaseService):
    """Evaluate the job's rule set over every file under ``doom_path``."""

    def scan(
        self,
        *,
        workers: int = 4,
        recursive: bool = True,
        follow_symlinks: bool = False,
        now: float | None = None,
    ) -> ServiceResult:
        """Return deletion candidates, sorted by path.

        Args:
            workers: Thread pool size for stat + evaluation.
            recursive: Descend into subdirectories.
            follow_symlinks: Include symlinked files and directories.
            now: Reference timestamp for ages (default: current time).
        """
        op = "scan"
        root = self._options.doom_path
        if not root.is_dir():
            return ServiceResult.failure(
                op, "PATH_NOT_FOUND", f"Scan root is not a directory: {root}", path=str(root)
            )

        reference = time.time() if now is None else now
        rules = self._options.rules
        warnings: list[str] = []
        candidates: list[dict[str, Any]] = []
        scanned = 0
        started = time.perf_counter()

        try:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                paths = iter_files(root, recursive=recursive, follow_symlinks=follow_symlinks)
                window = workers * _WINDOW_PER_WORKER
                for path, future in _windowed(pool, paths, rules, reference, window):
                    try:
                        meta, matched = future.result()
                    except OSError as exc:
                        logger.debug("Skipping %s", path, exc_info=True)
                        warnings.append(f"Skipped {path}: {exc.strerror or exc}")
                        continue
                    scanned += 1
                    if matched:
                        log.debug("scan.candidate", path=str(path), rules=matched)
                        candidates.append(_candidate(meta, matched))
        except OSError as exc:
            return ServiceResult.failure(
                op, "SCAN_FAILED", f"Cannot read {root}: {exc}", path=str(root)
            )

        candidates.sort(key=lambda item: item["path"])
        reclaimable = sum(item["size_bytes"] for item in candidates)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        log.info(
            "scan.complete",
            doom_path=str(root),
            scanned=scanned,
            matched=len(candidates),
            reclaimable_bytes=reclaimable,
            duration_ms=duration_ms,
        )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "doom_path": str(root),
                "policy": str(rules.policy),
                "rule_count": len(rules),
                "scanned": scanned,
                "count": len(candidates),
                "reclaimable_bytes": reclaimable,
                "items": candidates,
            },
            warnings=warnings,
            meta={"workers": workers, "duration_ms": duration_ms},
        )
