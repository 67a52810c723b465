"""Make sure a SourceFile exists on the local filesystem."""

from __future__ import annotations

import tempfile
from pathlib import Path

import structlog

from filecast.domain.exceptions import SourceIOError
from filecast.domain.model import SourceFile
from filecast.processing.tempfiles import default_temp_dir

__all__ = ["MAX_PREFIX_CHARS", "SourceMaterializer"]

logger = structlog.get_logger(__name__)

# Leaves room for the random part and the extension within NAME_MAX.
MAX_PREFIX_CHARS = 64


class SourceMaterializer:
    """Resolve a SourceFile to a concrete path.

    Path-backed files are returned untouched. Binary-backed files are
    written to a new file in ``temp_dir`` whose name keeps the original
    extension and the start of the stem. The copy is never deleted here;
    cleanup belongs to the caller (see ``ProcessResult.cleanup``).

    Args:
        temp_dir: Directory for temporary copies (default: platform temp dir)
    """

    def __init__(self, temp_dir: Path | None = None) -> None:
        self.temp_dir = Path(temp_dir) if temp_dir is not None else default_temp_dir()

    def materialize(self, file: SourceFile) -> SourceFile:
        """Return ``file`` with ``path`` set.

        Raises:
            SourceIOError: If the temporary copy cannot be written
        """
        if file.path is not None:
            return file

        name = Path(file.file_name)
        prefix = f"{name.stem[:MAX_PREFIX_CHARS]}_".replace("/", "_")
        try:
            with tempfile.NamedTemporaryFile(
                prefix=prefix,
                suffix=name.suffix,
                dir=self.temp_dir,
                delete=False,
            ) as handle:
                handle.write(file.binary or b"")
        except OSError as exc:
            raise SourceIOError.from_os_error(file.file_name, self.temp_dir, exc) from exc

        logger.debug("Materialized binary source", file_name=file.file_name, path=handle.name)
        return file.with_path(Path(handle.name), is_temp=True)
