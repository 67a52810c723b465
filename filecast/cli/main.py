"""filecast command line entry point."""

from __future__ import annotations

import typer

from filecast.cli.commands import register_process, register_versions

app = typer.Typer(
    name="filecast",
    help="Produce derived versions of files with external converters or custom functions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

register_process(app)
register_versions(app)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
