"""Process every version of a definition for one source file.

Versions run one after another; a failing version does not stop the
rest. Callers wanting parallelism can call Processor.process per version
from their own workers, each call is independent.

Usage:
    results = process_versions(AvatarDefinition(), (SourceFile.from_path("me.png"), user_id))
    stats = compute_batch_stats(results)
    print(f"{stats.produced} produced, {stats.failed} failed")
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

import structlog

from filecast.domain.model import ProcessResult
from filecast.domain.protocols import Definition, ProcessingContext
from filecast.processing.processor import Processor

__all__ = [
    "VersionBatchStats",
    "cleanup_results",
    "compute_batch_stats",
    "process_versions",
    "timed_process_versions",
]

logger = structlog.get_logger(__name__)


@dataclass
class VersionBatchStats:
    """Summary of a process_versions run.

    Attributes:
        total: Number of versions processed
        produced: Versions that yielded a file
        skipped: Versions that yielded no output on purpose
        failed: Versions that returned an error
        duration_s: Wall time for the whole run
    """

    total: int = 0
    produced: int = 0
    skipped: int = 0
    failed: int = 0
    duration_s: float = 0.0


def process_versions(
    definition: Definition,
    context: ProcessingContext,
    versions: Sequence[str] | None = None,
    processor: Processor | None = None,
) -> dict[str, ProcessResult]:
    """Process ``versions`` (default: ``definition.versions()``) in order.

    Raises:
        MissingExecutableError: Propagated immediately; the environment is
            broken and later versions would fail the same way
        ValueError: If no versions are given and the definition has none
    """
    if versions is None:
        list_versions = getattr(definition, "versions", None)
        if list_versions is None:
            raise ValueError("Pass versions explicitly or give the definition a versions() method")
        versions = list(list_versions())

    processor = processor or Processor()
    results: dict[str, ProcessResult] = {}
    for version in versions:
        results[version] = processor.process(definition, version, context)

    failed = [name for name, result in results.items() if not result.success]
    if failed:
        logger.warning("Some versions failed", failed=failed, total=len(results))
    return results


def compute_batch_stats(
    results: Mapping[str, ProcessResult],
    duration_s: float = 0.0,
) -> VersionBatchStats:
    stats = VersionBatchStats(total=len(results), duration_s=duration_s)
    for result in results.values():
        if not result.success:
            stats.failed += 1
        elif result.file is None:
            stats.skipped += 1
        else:
            stats.produced += 1
    return stats


def cleanup_results(
    results: Mapping[str, ProcessResult],
    keep: Iterable[str] = (),
) -> list[str]:
    """Delete temp files of every version not listed in ``keep``.

    Removes each result's temp output and its temporary source copy.
    A kept version still loses its source copy unless the copy is its
    output. Files the pipeline did not create (e.g. NoAction results)
    are left alone.

    Returns the names of versions whose output files were removed.
    """
    keep = set(keep)
    removed: list[str] = []
    for version, result in results.items():
        kept = result.file if version in keep else None
        if result.source is not None and (kept is None or kept.path != result.source.path):
            result.source.cleanup()
        if version in keep or result.file is None:
            continue
        if result.file.cleanup():
            removed.append(version)
    return removed


def timed_process_versions(
    definition: Definition,
    context: ProcessingContext,
    versions: Sequence[str] | None = None,
    processor: Processor | None = None,
) -> tuple[dict[str, ProcessResult], VersionBatchStats]:
    """process_versions plus its stats, including elapsed time."""
    start = time.perf_counter()
    results = process_versions(definition, context, versions, processor)
    return results, compute_batch_stats(results, time.perf_counter() - start)
