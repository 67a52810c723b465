"""File transformation pipeline: resolve, materialize, execute, package."""

from .command import build_args, resolve_command, resolve_executable, tokenize
from .executor import TransformExecutor
from .materializer import SourceMaterializer
from .packager import package_custom, package_output
from .processor import Processor, process
from .references import load_reference
from .resolver import resolve_transform
from .tempfiles import default_temp_dir, generate_temp_path

__all__ = [
    "Processor",
    "SourceMaterializer",
    "TransformExecutor",
    "build_args",
    "default_temp_dir",
    "generate_temp_path",
    "load_reference",
    "package_custom",
    "package_output",
    "process",
    "resolve_command",
    "resolve_executable",
    "resolve_transform",
    "tokenize",
]
