"""Rich terminal reporter — per-item entropy table and run summary."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from xtentropy.scanner.models import ScanReport

# Entropy bands (bits per byte) used to colour values
_BANDS = (
    (7.5, "bold red"),
    (6.0, "yellow"),
    (0.0, "green"),
)


def _entropy_cell(text: str) -> Text:
    value = float(text)
    style = next(s for floor, s in _BANDS if value >= floor)
    return Text(text, style=style)


def render(
    report: ScanReport,
    *,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print annotations to the terminal using Rich."""
    console = console or Console()

    if not report.annotations:
        console.print()
        console.print("[dim]No items were annotated.[/dim]")
    else:
        console.print()
        table = Table(
            title="Shannon Entropy",
            title_style="bold",
            border_style="dim",
        )
        table.add_column("Volume", style="magenta")
        table.add_column("Item", style="cyan", min_width=20)
        table.add_column("ID", justify="right", style="dim")
        table.add_column("Entropy", justify="right")

        for ann in report.annotations:
            table.add_row(ann.volume, ann.item_name, str(ann.item_id), _entropy_cell(ann.text))
        console.print(table)

    if show_summary:
        _print_summary(console, report)

    console.print()
    if report.aborted:
        console.print("[bold red]❌ Run aborted — see messages above.[/bold red]")
    elif report.cancelled:
        console.print("[bold yellow]⚠️  Stopped before all items were scored.[/bold yellow]")


def _print_summary(console: Console, report: ScanReport) -> None:
    console.print()
    console.print(f"[dim]Volumes:[/dim]       {len(report.volumes)}")
    console.print(f"[dim]Items:[/dim]         {report.total_items}")
    console.print(f"[dim]Annotated:[/dim]     {report.total_annotations}")
    console.print(f"[dim]Messages:[/dim]      {len(report.messages)}")
    console.print(f"[dim]Duration:[/dim]      {report.scan_duration_ms:.0f}ms")
