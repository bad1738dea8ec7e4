"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from rendering details.
- Lets `check` and `doctor` share tables and panels.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ConfigSnapshot, ValidationResult


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in JSON mode)."""

    title = Text("PM-SYNC", style="bold cyan")
    subtitle = Text("Package-manager version consistency", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_diagnostics_table(result: ValidationResult) -> Table:
    table = Table(title="Diagnostics")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Check", style="red", no_wrap=True)
    table.add_column("Details", style="white")
    for index, diagnostic in enumerate(result.diagnostics, start=1):
        table.add_row(str(index), diagnostic.code.label(), diagnostic.message)
    return table


def build_sources_table(snapshot: ConfigSnapshot, labels: list[tuple[str, str | None]]) -> Table:
    """Table of raw values as read, without judging them."""

    table = Table(title=f"Sources in {snapshot.root}")
    table.add_column("Source", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    for label, value in labels:
        table.add_row(label, value if value is not None else "[dim]-[/dim]")
    return table


def build_summary_panel(snapshot: ConfigSnapshot, tool_name: str) -> Panel:
    """Panel shown when every check passed."""

    body = Text()
    body.append("All configuration checks passed\n\n", style="bold green")
    body.append(f"- Package manager: {tool_name}@{snapshot.primary_version}\n")
    body.append(f"- Secondary pin:   {snapshot.secondary_version}\n")
    body.append(f"- Config file:     {snapshot.config_version}\n")
    body.append(f"- Requirement:     {snapshot.constraint}")
    if snapshot.artifact_path is not None:
        body.append(f"\n- Release file:    {snapshot.artifact_path.name}", style="dim")
    return Panel(body, title=Text("OK", style="bold green"), border_style="green")
