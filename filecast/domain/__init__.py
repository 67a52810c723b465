"""Dependency-free domain models, protocols and errors for filecast."""

from .exceptions import (
    ConfigurationError,
    ConversionError,
    FilecastError,
    MissingExecutableError,
    SourceIOError,
    UnrecognizedTransformError,
)
from .model import (
    SHELL_DESCRIPTORS,
    Custom,
    ExecutableCommand,
    NoAction,
    ProcessResult,
    ShellArgsFn,
    ShellTemplate,
    ShellTemplateFn,
    Skip,
    SourceFile,
    TransformDescriptor,
    coerce_descriptor,
    normalize_extension,
)
from .protocols import (
    CustomCallback,
    Definition,
    ProcessingContext,
    VersionedDefinition,
)

__all__ = [
    "ConfigurationError",
    "ConversionError",
    "Custom",
    "CustomCallback",
    "Definition",
    "ExecutableCommand",
    "FilecastError",
    "MissingExecutableError",
    "NoAction",
    "ProcessResult",
    "ProcessingContext",
    "SHELL_DESCRIPTORS",
    "ShellArgsFn",
    "ShellTemplate",
    "ShellTemplateFn",
    "Skip",
    "SourceFile",
    "SourceIOError",
    "TransformDescriptor",
    "UnrecognizedTransformError",
    "VersionedDefinition",
    "coerce_descriptor",
    "normalize_extension",
]
