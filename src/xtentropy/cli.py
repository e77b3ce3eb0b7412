"""xt-entropy CLI — Typer application with scan, init, and about commands."""

from __future__ import annotations

import logging
import signal
import threading
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from xtentropy import __version__

app = typer.Typer(
    name="xtentropy",
    help="Annotate evidence items with their Shannon entropy.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _configure_logging(debug: bool) -> None:
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    evidence: Path = typer.Argument(..., help="Evidence directory, one subdirectory per volume"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .xtentropy.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    operation: Optional[str] = typer.Option(None, "--operation", help="Host operation: rvs | dbc"),
    max_item_bytes: Optional[int] = typer.Option(
        None, "--max-item-bytes", help="Skip items larger than this many bytes (0 = no limit)",
    ),
    no_progress: bool = typer.Option(False, "--no-progress", help="Hide the progress bar"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
) -> None:
    """Compute the entropy of every item below EVIDENCE."""
    from xtentropy.config.loader import ConfigError, load_config
    from xtentropy.config.schema import OPERATION_CODES
    from xtentropy.host.directory import DirectoryHost, HostError
    from xtentropy.output import json_report, terminal
    from xtentropy.scanner.session import SessionError, run_session

    _configure_logging(debug)

    # --- Load config ---
    try:
        cfg = load_config(evidence, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if format:
        if format not in ("terminal", "json"):
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if operation:
        if operation not in OPERATION_CODES:
            console.print(f"[bold red]Invalid operation:[/bold red] {operation}")
            raise typer.Exit(code=2)
        cfg.scan.operation = operation  # type: ignore[assignment]
    if max_item_bytes is not None:
        if max_item_bytes < 0:
            console.print(f"[bold red]Invalid item limit:[/bold red] {max_item_bytes}")
            raise typer.Exit(code=2)
        cfg.scan.max_item_bytes = max_item_bytes
    if no_progress or cfg.output.format == "json":
        cfg.scan.show_progress = False

    # --- Open evidence ---
    try:
        host = DirectoryHost(evidence, console=console, show_progress=cfg.scan.show_progress)
    except HostError as exc:
        console.print(f"[bold red]Evidence error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if verbose or debug:
        console.print(f"[dim]Evidence root: {host.root}[/dim]")
        console.print(f"[dim]Volumes: {len(host.volumes)}[/dim]")
        console.print(f"[dim]Operation: {cfg.scan.operation}[/dim]")

    # --- Run, stopping cooperatively on Ctrl-C ---
    previous = None
    if threading.current_thread() is threading.main_thread():
        previous = signal.signal(signal.SIGINT, lambda signum, frame: host.request_stop())
    try:
        report = run_session(host, cfg)
    except SessionError as exc:
        console.print(f"[bold red]Session error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)

    if debug:
        console.print(f"[dim]Scan duration: {report.scan_duration_ms:.0f}ms[/dim]")

    # --- Output ---
    report_text: Optional[str] = None
    if cfg.output.format == "terminal":
        terminal.render(report, show_summary=cfg.output.show_summary)
    else:
        report_text = json_report.render(report)
        print(report_text)

    if output:
        if report_text is None:
            report_text = json_report.render(report)
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")

    # --- Exit code ---
    if report.aborted or report.cancelled:
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    directory: Path = typer.Argument(Path("."), help="Where to write .xtentropy.toml"),
) -> None:
    """Generate a starter .xtentropy.toml."""
    from xtentropy.config.defaults import DEFAULT_TOML
    from xtentropy.config.loader import CONFIG_FILENAME

    config_path = directory / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── about ─────────────────────────────────────────────────────────────────────


@app.command()
def about() -> None:
    """Show the extension banner."""
    from xtentropy.scanner.coordinator import ScanCoordinator

    print(ScanCoordinator.about())


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"xtentropy {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """xt-entropy — Shannon entropy annotations for forensic evidence."""
