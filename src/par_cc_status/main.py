"""Main CLI interface for PAR CC Status."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __application_binary__, __application_title__, __version__
from .config import Config, config_to_yaml, debug_from_env, load_config
from .models import InsideWindow
from .statusline_manager import StatusLineManager
from .windows import DAILY_WINDOWS, describe_outside, format_minutes

app = typer.Typer(
    name=__application_binary__,
    help=f"{__application_title__} - single-line session status for Claude Code",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    """Configure logging; debug output goes to stderr only."""
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
            force=True,
        )
    else:
        logging.basicConfig(level=logging.ERROR, format="%(message)s", force=True)


def _initialize_config(config_file: Path | None, debug: bool) -> Config:
    """Set up logging, then load config so its problems can be reported."""
    early_debug = debug or debug_from_env()
    _configure_logging(early_debug)
    config = load_config(config_file)
    if debug and not config.debug:
        config = config.model_copy(update={"debug": True})
    if config.debug != early_debug:
        _configure_logging(config.debug)
    logger.debug(f"{__application_title__} {__version__}")
    return config


def _get_config(ctx: typer.Context) -> Config:
    config = ctx.obj
    if isinstance(config, Config):
        return config
    return _initialize_config(None, False)


def _render(config: Config) -> None:
    """Read the Claude Code JSON from stdin and write the status line."""
    raw_input = "" if sys.stdin.isatty() else sys.stdin.read()
    manager = StatusLineManager(config)
    sys.stdout.write(manager.get_status_line_for_request(raw_input))
    sys.stdout.flush()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to configuration file")
    ] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Write diagnostic output to stderr")] = False,
) -> None:
    """Render the status line from the JSON on stdin (default command)."""
    ctx.obj = _initialize_config(config_file, debug)
    if ctx.invoked_subcommand is None:
        _render(ctx.obj)


@app.command()
def render(ctx: typer.Context) -> None:
    """Render the status line from the JSON on stdin."""
    _render(_get_config(ctx))


@app.command()
def windows(ctx: typer.Context) -> None:
    """Show the usage windows and where the current time falls."""
    config = _get_config(ctx)
    manager = StatusLineManager(config)
    info = manager.describe_windows()
    status = info["status"]

    table = Table(title="Usage Windows", show_header=True, header_style="bold")
    table.add_column("Window", style="cyan")
    table.add_column("Duration", justify="right")
    table.add_column("Current", justify="center")
    for window in DAILY_WINDOWS:
        current = isinstance(status, InsideWindow) and status.window == window
        table.add_row(window.label, format_minutes(window.duration), "●" if current else "")
    console.print(table)

    clock = info["clock"]
    console.print(f"Clock: {clock.timestamp:%H:%M} ({clock.minutes} minutes since midnight)")
    if isinstance(status, InsideWindow):
        console.print(
            f"Elapsed: {format_minutes(status.elapsed_minutes)}  "
            f"Remaining: {format_minutes(status.remaining_minutes)}  "
            f"Progress: {status.progress}%"
        )
    else:
        console.print(describe_outside(status))

    estimate = info["estimate"]
    if estimate is not None:
        console.print(
            f"Tokens: ~{estimate.estimated_tokens:,} ({estimate.percentage}%) "
            f"from {estimate.source.value}, activity {info['activity_bytes']:,} bytes"
        )
    console.print(f"Status: {info['window'].text}", markup=False)


@app.command("config")
def show_config(ctx: typer.Context) -> None:
    """Print the effective configuration as YAML."""
    typer.echo(config_to_yaml(_get_config(ctx)), nl=False)


@app.command()
def version() -> None:
    """Show the version."""
    typer.echo(f"{__application_title__} {__version__}")
