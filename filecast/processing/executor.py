"""Run a transform descriptor against a materialized source file.

Dispatches over the closed set of descriptor variants:

- NoAction: the source handle itself is the result
- Skip: empty success
- ShellTemplate / ShellTemplateFn / ShellArgsFn: external program writing
  to a freshly generated temp path
- Custom: the callback's return value is the result

Usage:
    executor = TransformExecutor(temp_dir=Path("/tmp/work"))
    result = executor.execute(ShellTemplate("convert", "-strip -thumbnail 10x10"), file)
    if result.success:
        print(result.file.path)
"""

from __future__ import annotations

import subprocess
from pathlib import Path

import structlog

from filecast.domain.exceptions import (
    ConversionError,
    FilecastError,
    MissingExecutableError,
    UnrecognizedTransformError,
)
from filecast.domain.model import (
    SHELL_DESCRIPTORS,
    Custom,
    NoAction,
    ProcessResult,
    ShellArgsFn,
    ShellTemplate,
    ShellTemplateFn,
    Skip,
    SourceFile,
)
from filecast.processing.command import resolve_command
from filecast.processing.packager import package_custom, package_output
from filecast.processing.references import load_reference
from filecast.processing.tempfiles import default_temp_dir, generate_temp_path

__all__ = ["TransformExecutor"]

logger = structlog.get_logger(__name__)


class TransformExecutor:
    """Executes transform descriptors.

    Stateless apart from its configuration; every shell run gets its own
    output path, so one executor can serve concurrent callers.

    Args:
        temp_dir: Directory for generated output files
        search_path: PATH-style string used to find programs
            (default: the process PATH)
    """

    def __init__(self, temp_dir: Path | None = None, search_path: str | None = None) -> None:
        self.temp_dir = Path(temp_dir) if temp_dir is not None else default_temp_dir()
        self.search_path = search_path

    def execute(self, descriptor: object, file: SourceFile) -> ProcessResult:
        """Apply ``descriptor`` to ``file``.

        Shell and custom variants need ``file.path`` to be set; run the
        file through SourceMaterializer first.

        Returns:
            ProcessResult with the produced file, None for Skip, or the error

        Raises:
            MissingExecutableError: If a shell variant names an unknown program
        """
        if isinstance(descriptor, NoAction):
            return ProcessResult.ok(file)

        if isinstance(descriptor, Skip):
            return ProcessResult.ok(None)

        if isinstance(descriptor, SHELL_DESCRIPTORS):
            self._require_path(file)
            return self._run_shell(descriptor, file)

        if isinstance(descriptor, Custom):
            self._require_path(file)
            return self._run_custom(descriptor, file)

        return ProcessResult.failure(UnrecognizedTransformError.from_value(descriptor))

    def output_path_for(
        self,
        descriptor: ShellTemplate | ShellTemplateFn | ShellArgsFn,
        file: SourceFile,
    ) -> Path:
        """Fresh temp path with the override extension or the source's."""
        extension = descriptor.extension
        if extension is None:
            extension = Path(file.file_name).suffix
        return generate_temp_path(self.temp_dir, extension)

    def _run_shell(
        self,
        descriptor: ShellTemplate | ShellTemplateFn | ShellArgsFn,
        file: SourceFile,
    ) -> ProcessResult:
        output_path = self.output_path_for(descriptor, file)

        try:
            command = resolve_command(
                descriptor,
                str(file.path),
                str(output_path),
                search_path=self.search_path,
            )
        except UnrecognizedTransformError as exc:
            return ProcessResult.failure(exc)

        logger.debug("Running converter", program=command.program, args=list(command.args))

        try:
            completed = subprocess.run(
                command.argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as exc:
            logger.warning("Converter failed to start", program=command.program, error=str(exc))
            return ProcessResult.failure(ConversionError.from_spawn_error(command.display(), exc))

        output = (completed.stdout or b"").decode(errors="replace")
        if completed.returncode != 0:
            logger.warning(
                "Converter failed",
                program=command.program,
                exit_code=completed.returncode,
                file_name=file.file_name,
            )
            return ProcessResult.failure(
                ConversionError.from_process(
                    command.display(),
                    completed.returncode,
                    output,
                    output_path=output_path,
                )
            )

        logger.info("Converter finished", program=command.program, output=str(output_path))
        return package_output(file, output_path)

    def _run_custom(self, descriptor: Custom, file: SourceFile) -> ProcessResult:
        callback = descriptor.callback
        if isinstance(callback, str):
            callback = load_reference(callback)

        logger.debug("Running custom transform", callback=getattr(callback, "__name__", repr(callback)))
        try:
            value = callback(file, dict(descriptor.params))
        except MissingExecutableError:
            raise
        except FilecastError as exc:
            return ProcessResult.failure(exc)
        return package_custom(value)

    @staticmethod
    def _require_path(file: SourceFile) -> None:
        if file.path is None:
            raise ValueError(f"'{file.file_name}' must be materialized before execution")
