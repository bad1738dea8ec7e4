"""Doctor command: show what each source declares."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.local_fs import LocalFileSystem
from cli.ui_components import build_sources_table
from core.config import CheckerSettings
from core.errors import ConfigCheckError
from core.services.config_reader import read_snapshot

app = typer.Typer(no_args_is_help=True, help="Inspect the raw values and the active configuration.")

_console = Console()
_err_console = Console(stderr=True)


def _settings_table(settings: CheckerSettings) -> Table:
    table = Table(title="Active settings")
    table.add_column("Setting", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    for name, value in settings.model_dump().items():
        table.add_row(name, str(value))
    return table


@app.command()
def run(
    root: Path = typer.Option(
        Path("."),
        "--root",
        "-r",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Project root containing the manifest and configuration file.",
    ),
    show_settings: bool = typer.Option(False, "--settings", help="Also print the active settings."),
) -> None:
    """Print the version declared by each source, without validating it."""

    settings = CheckerSettings()
    try:
        snapshot = read_snapshot(root, settings=settings, fs=LocalFileSystem())
    except ConfigCheckError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=2) from exc

    rows: list[tuple[str, str | None]] = [
        (f"{settings.manifest_filename}:{settings.primary_field}", snapshot.primary_version),
        (f"{settings.manifest_filename}:{settings.secondary_field}", snapshot.secondary_version),
        (f"{settings.config_filename}:{settings.config_key}", snapshot.config_version),
        (f"{settings.manifest_filename}:{settings.constraint_field}", snapshot.constraint),
        (
            "release file",
            str(snapshot.artifact_path.relative_to(root)) if snapshot.artifact_path else None,
        ),
    ]
    _console.print(build_sources_table(snapshot, rows))

    if show_settings:
        _console.print(_settings_table(settings))
