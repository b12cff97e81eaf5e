"""Loguru logging configuration.

Plain-text stderr logging with a configurable level and an optional
rotating log file when a ``log_dir`` is provided.  Publish and retract
outcomes are logged with ``json_output=True`` bound; with ``json_outcomes``
enabled those records go to stderr as JSON lines instead of text, so CI
jobs can pick them up.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"


def _is_outcome(record) -> bool:
    return bool(record["extra"].get("json_output", False))


def setup_logging(log_level: str = "INFO", log_dir: str | None = None, json_outcomes: bool = False) -> None:
    """Configure Loguru sinks.

    Args:
        log_level: Minimum log level to emit.
        log_dir: Optional directory for log files.  When set, a rotating
            file sink is added (rotated every 24 hours, retained 7 days).
        json_outcomes: Emit outcome records as serialized JSON on stderr.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format=_LOG_FORMAT,
        serialize=False,
        filter=(lambda record: not _is_outcome(record)) if json_outcomes else None,
    )
    if json_outcomes:
        logger.add(
            sys.stderr,
            level=log_level.upper(),
            serialize=True,
            filter=_is_outcome,
        )

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "gallery-publisher.log",
            level=log_level.upper(),
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )
