from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from filecast.app import configure_logging
from filecast.cli.helpers import fail, load_cli_config, load_definition
from filecast.domain.exceptions import FilecastError
from filecast.domain.model import SourceFile
from filecast.processing import Processor


def register_process(app: typer.Typer) -> None:
    @app.command("process", rich_help_panel="Processing")
    def process_cmd(
        definition: Annotated[
            str,
            typer.Argument(..., metavar="MODULE:DEFINITION", help="Definition to load"),
        ],
        version: Annotated[str, typer.Argument(..., help="Version name, e.g. thumb")],
        file: Annotated[Path, typer.Argument(..., metavar="FILE", help="Source file")],
        scope: Annotated[
            str | None,
            typer.Option("--scope", "-s", help="Opaque scope passed to the definition"),
        ] = None,
        temp_dir: Annotated[
            Path | None,
            typer.Option("--temp-dir", metavar="DIR", help="Directory for temporary output"),
        ] = None,
        config_path: Annotated[
            Path | None,
            typer.Option("--config", "-c", metavar="PATH", help="Config file (TOML)"),
        ] = None,
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ) -> None:
        if not file.exists():
            typer.echo(f"Error: file not found: {file}", err=True)
            raise typer.Exit(code=2)

        try:
            config = load_cli_config(config_path, temp_dir)
            configure_logging("DEBUG" if verbose else config.log_level, json=config.log_format == "json")
            target = load_definition(definition)
        except FilecastError as exc:
            raise fail(exc, code=2) from exc

        processor = Processor.from_config(config)
        try:
            result = processor.process(target, version, (SourceFile.from_path(file), scope))
        except FilecastError as exc:
            raise fail(exc, code=2) from exc

        if result.error is not None:
            raise fail(result.error)

        if result.file is None:
            typer.echo("skipped")
            return
        typer.echo(str(result.file.path) if result.file.path else result.file.file_name)
