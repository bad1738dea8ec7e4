"""pm-sync command-line interface.

`check` is the entry point used by CI: it exits 0 when every version source
agrees, 1 when any diagnostic was produced and 2 when a required file is
missing or unreadable.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import export_result_json, result_to_json
from adapters.local_fs import LocalFileSystem
from cli import doctor
from cli.ui_components import build_diagnostics_table, build_summary_panel, print_banner
from core.config import CheckerSettings
from core.errors import ConfigCheckError
from core.services.config_reader import read_snapshot
from core.services.consistency_validator import validate_snapshot

app = typer.Typer(
    no_args_is_help=True,
    help="Check that package-manager versions agree across manifest, config and release file.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

EXIT_DIAGNOSTICS = 1
EXIT_FATAL = 2


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


@app.command()
def check(
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
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON on stdout."),
    report: Path | None = typer.Option(
        None,
        "--report",
        help="Also write the JSON result to this file.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Validate every version source and report all problems found."""

    _configure_logging(verbose)
    settings = CheckerSettings()
    fs = LocalFileSystem()

    try:
        snapshot = read_snapshot(root, settings=settings, fs=fs)
    except ConfigCheckError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=EXIT_FATAL) from exc

    result = validate_snapshot(snapshot, settings=settings, fs=fs)

    if report is not None:
        export_result_json(result=result, output_path=report)

    if as_json:
        typer.echo(result_to_json(result))
    else:
        print_banner(_console)
        if result.success:
            _console.print(build_summary_panel(snapshot, settings.tool_name))
        else:
            _console.print(build_diagnostics_table(result))
            _console.print(f"[red]{len(result.diagnostics)} problem(s) found.[/red]")

    if not result.success:
        raise typer.Exit(code=EXIT_DIAGNOSTICS)


def run() -> None:
    app()
