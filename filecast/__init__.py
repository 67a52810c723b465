"""filecast: derive file versions through external converters or custom functions."""

from filecast.domain import (
    ConversionError,
    Custom,
    FilecastError,
    MissingExecutableError,
    NoAction,
    ProcessResult,
    ShellArgsFn,
    ShellTemplate,
    ShellTemplateFn,
    Skip,
    SourceFile,
    SourceIOError,
    UnrecognizedTransformError,
)
from filecast.processing import Processor, process

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "Custom",
    "FilecastError",
    "MissingExecutableError",
    "NoAction",
    "ProcessResult",
    "Processor",
    "ShellArgsFn",
    "ShellTemplate",
    "ShellTemplateFn",
    "Skip",
    "SourceFile",
    "SourceIOError",
    "UnrecognizedTransformError",
    "__version__",
    "process",
]
