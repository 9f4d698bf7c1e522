"""
hlclock CLI
Commands: now, receive, inspect, compare
"""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box
from rich.markup import escape

from hlclock.clock import ClockConfig, HLCError, HybridLogicalClock, NodeId
from hlclock.config.settings import settings

app = typer.Typer(
    name="hlclock",
    help="hlclock — hybrid logical clock timestamps",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log clock transitions"),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _clock(node: Optional[str], resume: Optional[str]) -> HybridLogicalClock:
    """Build a clock from settings, optionally resumed from a packed timestamp."""
    config = ClockConfig.from_settings(settings)
    node_id = NodeId(node or settings.node_id)
    previous = None
    if resume:
        # Parse with a throwaway clock of the same node; resuming validates it again
        previous = HybridLogicalClock(node_id, config).unpack(resume)
    return HybridLogicalClock(node_id, config, previous=previous)


def _fail(e: HLCError):
    console.print(f"[red]{type(e).__name__}:[/] {escape(str(e))}")
    raise typer.Exit(1)


# ── now ───────────────────────────────────────────────────────────────────────

@app.command()
def now(
    node: Optional[str] = typer.Option(None, "--node", "-n", help="Node id (default: HLC_NODE_ID)"),
    resume: Optional[str] = typer.Option(None, "--resume", "-r", help="Last packed timestamp of this node"),
):
    """Issue a timestamp for a local event."""
    try:
        clock = _clock(node, resume)
        console.print(clock.issue_local_event_packed(), highlight=False)
    except HLCError as e:
        _fail(e)


# ── receive ───────────────────────────────────────────────────────────────────

@app.command()
def receive(
    packed: str = typer.Argument(..., help="Packed timestamp from another node"),
    node: Optional[str] = typer.Option(None, "--node", "-n", help="Node id (default: HLC_NODE_ID)"),
    resume: Optional[str] = typer.Option(None, "--resume", "-r", help="Last packed timestamp of this node"),
):
    """Merge a remote timestamp and print the resulting local timestamp."""
    try:
        clock = _clock(node, resume)
        console.print(clock.receive_packed_and_repack(packed), highlight=False)
    except HLCError as e:
        _fail(e)


# ── inspect ───────────────────────────────────────────────────────────────────

@app.command()
def inspect(packed: str = typer.Argument(..., help="Packed timestamp")):
    """Show the fields of a packed timestamp."""
    config = ClockConfig.from_settings(settings)
    try:
        ts = HybridLogicalClock(settings.node_id, config).unpack(packed)
    except HLCError as e:
        _fail(e)

    table = Table(box=box.ROUNDED, show_header=False)
    table.add_column("", style="dim")
    table.add_column("", style="cyan")
    table.add_row("Logical time", ts.logical_time.isoformat())
    table.add_row("Counter", f"{ts.counter} (max {config.max_counter})")
    table.add_row("Node", str(ts.node))
    console.print(Panel(table, title=packed, border_style="cyan"))


# ── compare ───────────────────────────────────────────────────────────────────

@app.command()
def compare(
    first: str = typer.Argument(..., help="Packed timestamp A"),
    second: str = typer.Argument(..., help="Packed timestamp B"),
):
    """Print <, = or > for the causal order of two packed timestamps."""
    clock = HybridLogicalClock(settings.node_id, ClockConfig.from_settings(settings))
    try:
        a, b = clock.unpack(first), clock.unpack(second)
    except HLCError as e:
        _fail(e)
    console.print({-1: "<", 0: "=", 1: ">"}[a.compare_to(b)], highlight=False)


if __name__ == "__main__":
    app()
