from __future__ import annotations

from typing import Annotated

import typer

from filecast.cli.helpers import fail, load_definition
from filecast.domain.exceptions import FilecastError


def register_versions(app: typer.Typer) -> None:
    @app.command("versions", rich_help_panel="Processing")
    def versions_cmd(
        definition: Annotated[
            str,
            typer.Argument(..., metavar="MODULE:DEFINITION", help="Definition to inspect"),
        ],
    ) -> None:
        """List the versions a definition declares."""
        try:
            target = load_definition(definition)
        except FilecastError as exc:
            raise fail(exc, code=2) from exc

        list_versions = getattr(target, "versions", None)
        if list_versions is None:
            typer.echo(f"Error: {definition} does not declare versions()", err=True)
            raise typer.Exit(code=2)

        for version in list_versions():
            typer.echo(version)
