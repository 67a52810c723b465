"""Application-layer helpers: logging setup and multi-version runs."""

import logging

import structlog

from .batch import (
    VersionBatchStats,
    cleanup_results,
    compute_batch_stats,
    process_versions,
    timed_process_versions,
)


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    """Configure structlog for application logging.

    Args:
        level: Standard logging level name
        json: Render JSON lines instead of the colored console format
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(level=numeric_level, format="%(message)s")

    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


__all__ = [
    "VersionBatchStats",
    "cleanup_results",
    "compute_batch_stats",
    "configure_logging",
    "process_versions",
    "timed_process_versions",
]
