"""structlog configuration for doomctl.

Two stderr output modes:
- Human (default): colored console output
- JSON (--log-json): structured JSON lines

With *export_dir*, JSON lines are also appended to ``doomctl.log`` in
that directory (the job's ``doom_export``).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

EXPORT_LOG_FILENAME = "doomctl.log"


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    export_dir: Path | None = None,
) -> Path | None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer on stderr.
        export_dir: Directory receiving an exported JSON log file.

    Returns:
        The export log file path, or None when export is off or the
        directory is not writable.
    """
    doom_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    def _formatter(final: structlog.types.Processor) -> structlog.stdlib.ProcessorFormatter:
        return structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                final,
            ],
        )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(renderer))
    handler.setLevel(doom_level)

    root_logger = logging.getLogger()
    for old in root_logger.handlers:
        if isinstance(old, logging.FileHandler):
            old.close()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    doom_logger = logging.getLogger("doomctl")
    doom_logger.setLevel(doom_level)

    if export_dir is None:
        return None

    export_path = export_dir / EXPORT_LOG_FILENAME
    try:
        file_handler = logging.FileHandler(export_path, encoding="utf-8")
    except OSError as exc:
        doom_logger.warning("Log export disabled, cannot open %s: %s", export_path, exc)
        return None
    file_handler.setFormatter(_formatter(structlog.processors.JSONRenderer()))
    file_handler.setLevel(logging.INFO)
    root_logger.addHandler(file_handler)
    doom_logger.setLevel(min(doom_level, logging.INFO))
    return export_path
