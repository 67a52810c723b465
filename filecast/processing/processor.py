"""Process one version of a file through its definition's transform.

Usage:
    from filecast.processing import process
    from filecast.domain import SourceFile

    result = process(AvatarDefinition(), "thumb", (SourceFile.from_path("me.png"), None))
    if result.success and result.file is not None:
        print(result.file.path)

Flow: resolve the descriptor, short-circuit NoAction and Skip, materialize
the source, execute, package. Only MissingExecutableError is raised;
every other failure comes back inside the ProcessResult.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from filecast.domain.exceptions import SourceIOError, UnrecognizedTransformError
from filecast.domain.model import NoAction, ProcessResult, Skip, coerce_descriptor
from filecast.domain.protocols import Definition, ProcessingContext
from filecast.processing.executor import TransformExecutor
from filecast.processing.materializer import SourceMaterializer
from filecast.processing.resolver import resolve_transform
from filecast.processing.tempfiles import default_temp_dir

if TYPE_CHECKING:
    from filecast.config.schema import AppConfig

__all__ = ["Processor", "process"]

logger = structlog.get_logger(__name__)


class Processor:
    """Wires the resolver, materializer and executor together.

    Args:
        temp_dir: Directory for materialized sources and outputs
        search_path: PATH-style string used to find external programs
    """

    def __init__(self, temp_dir: Path | None = None, search_path: str | None = None) -> None:
        self.temp_dir = Path(temp_dir) if temp_dir is not None else default_temp_dir()
        self.search_path = search_path
        self.materializer = SourceMaterializer(self.temp_dir)
        self.executor = TransformExecutor(self.temp_dir, search_path=search_path)

    @classmethod
    def from_config(cls, config: AppConfig) -> Processor:
        return cls(temp_dir=config.temp_dir, search_path=config.search_path)

    def process(
        self,
        definition: Definition,
        version: str,
        context: ProcessingContext,
    ) -> ProcessResult:
        """Produce ``version`` of the file in ``context``.

        Args:
            definition: Object providing ``transform(version, context)``
            version: Version name, e.g. "thumb"
            context: ``(source_file, scope)`` pair handed to the definition

        Returns:
            ProcessResult. ``file`` is the original handle for NoAction,
            None for Skip, a new temp file for shell transforms, and the
            callback's value for Custom. When a binary source had to be
            written to disk, ``source`` holds that temporary copy.

        Raises:
            MissingExecutableError: If a shell transform names a program
                that is not installed
        """
        source, _scope = context
        raw = resolve_transform(definition, version, context)

        try:
            descriptor = coerce_descriptor(raw, version)
        except UnrecognizedTransformError as exc:
            logger.warning("Unrecognized transform", version=version, shape=exc.context.get("shape"))
            return ProcessResult.failure(exc)

        if isinstance(descriptor, (NoAction, Skip)):
            logger.debug("Short-circuit transform", version=version, kind=type(descriptor).__name__)
            return self.executor.execute(descriptor, source)

        try:
            materialized = self.materializer.materialize(source)
        except SourceIOError as exc:
            logger.warning("Could not materialize source", version=version, file_name=source.file_name)
            return ProcessResult.failure(exc)

        logger.debug(
            "Executing transform",
            version=version,
            kind=type(descriptor).__name__,
            file_name=source.file_name,
        )
        if materialized is source:
            return self.executor.execute(descriptor, materialized)

        try:
            result = self.executor.execute(descriptor, materialized)
        except Exception:
            # The copy is unreachable once this raises.
            materialized.cleanup()
            raise
        return result.with_source(materialized)


_default_processor: Processor | None = None


def process(definition: Definition, version: str, context: ProcessingContext) -> ProcessResult:
    """Convenience wrapper around a shared default Processor."""
    global _default_processor
    if _default_processor is None:
        _default_processor = Processor()
    return _default_processor.process(definition, version, context)
