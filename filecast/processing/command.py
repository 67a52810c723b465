"""Turn shell-style descriptors into resolved argument vectors.

Tokenization follows ``shlex.split`` in POSIX mode: whitespace separates
tokens, single and double quotes group, backslash escapes the next
character. Nothing is ever handed to a shell, so metacharacters such as
``|`` or ``;`` reach the program verbatim.
"""

from __future__ import annotations

import shlex
import shutil
from collections.abc import Sequence

from filecast.domain.exceptions import MissingExecutableError, UnrecognizedTransformError
from filecast.domain.model import (
    ExecutableCommand,
    ShellArgsFn,
    ShellTemplate,
    ShellTemplateFn,
)

__all__ = ["build_args", "resolve_command", "resolve_executable", "tokenize"]


def tokenize(template: str) -> list[str]:
    """Split an argument string into tokens.

    Raises:
        UnrecognizedTransformError: If the template has unbalanced quotes
    """
    try:
        return shlex.split(template)
    except ValueError as exc:
        raise UnrecognizedTransformError(
            "Malformed argument template",
            cause=exc,
            context={"template": template},
            suggestions=["Balance the quotes in the argument template"],
        ) from exc


def _args_list(built: str | Sequence[str]) -> list[str]:
    if isinstance(built, str):
        return tokenize(built)
    return [str(arg) for arg in built]


def build_args(
    descriptor: ShellTemplate | ShellTemplateFn | ShellArgsFn,
    input_path: str,
    output_path: str,
) -> list[str]:
    """Arguments (without the program) for a shell descriptor.

    For ``ShellTemplate`` the paths wrap the tokenized template, so paths
    containing spaces stay single arguments. The function variants place
    the paths themselves; a string result is tokenized and a sequence is
    used as-is, whichever variant produced it.
    """
    if isinstance(descriptor, ShellTemplate):
        return [input_path, *tokenize(descriptor.args), output_path]

    built = descriptor.build(input_path, output_path)
    if not isinstance(built, (str, list, tuple)):
        raise UnrecognizedTransformError(
            f"Argument builder for '{descriptor.program}' returned {type(built).__name__}",
            context={"program": descriptor.program, "returned": type(built).__name__},
            suggestions=["Return an argument string or a list of arguments"],
        )
    return _args_list(built)


def resolve_executable(program: str, search_path: str | None = None) -> str:
    """Absolute path of ``program``.

    Raises:
        MissingExecutableError: If ``program`` is not on the search path
    """
    executable = shutil.which(program, path=search_path)
    if executable is None:
        raise MissingExecutableError.for_program(program, search_path)
    return executable


def resolve_command(
    descriptor: ShellTemplate | ShellTemplateFn | ShellArgsFn,
    input_path: str,
    output_path: str,
    search_path: str | None = None,
) -> ExecutableCommand:
    args = build_args(descriptor, input_path, output_path)
    executable = resolve_executable(descriptor.program, search_path)
    return ExecutableCommand(program=descriptor.program, args=tuple(args), executable=executable)
