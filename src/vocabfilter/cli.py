"""CLI entry point for the vocab filter tools.

Provides commands:
  - tui: Launch the interactive filter view
  - actions: List the filter actions and their notification policy
  - apply: Run a sequence of actions against the configured defaults
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from vocabfilter.actions import ACTION_TABLE, Action
from vocabfilter.config import FilterConfig, resolve_config
from vocabfilter.controller import FilterController

app = typer.Typer(
    help="Vocab Filter - observable list filter with commit-driven queries",
    rich_markup_mode="rich",
)
console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help="JSON config with default criteria and categories (default: $VOCABFILTER_CONFIG)",
    ),
]


def _load(config_path: Path | None) -> FilterConfig:
    try:
        return resolve_config(config_path)
    except FileNotFoundError:
        console.print(f"[red]Error:[/red] Config file not found: {config_path}")
        raise typer.Exit(code=1)
    except (json.JSONDecodeError, ValueError) as e:
        console.print(f"[red]Error:[/red] Invalid config: {e}")
        raise typer.Exit(code=1)


@app.command()
def tui(config: ConfigOption = None) -> None:
    """Launch the interactive vocab filter view."""
    from vocabfilter.tui import run_tui

    run_tui(config=_load(config))


@app.command()
def actions() -> None:
    """List filter actions, their effect and whether they emit FilterChanged."""
    table = Table(title="Filter Actions")
    table.add_column("Action", style="cyan")
    table.add_column("Description")
    table.add_column("Writes", justify="center")
    table.add_column("Emits", justify="center")

    for action, policy in ACTION_TABLE.items():
        table.add_row(
            action.value,
            policy.description,
            "yes" if policy.effect is not None else "-",
            "yes" if policy.emits else "no",
        )
    console.print(table)


@app.command()
def apply(
    names: Annotated[list[str], typer.Argument(help="Actions to run, in order")],
    config: ConfigOption = None,
) -> None:
    """Run actions against the default criteria and report notifications."""
    try:
        sequence = [Action.from_name(name) for name in names]
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    controller = FilterController(_load(config).to_criteria())
    field_events: list = []
    filter_events: list = []
    controller.state.subscribe(field_events.append)
    controller.subscribe(filter_events.append)

    for action in sequence:
        result = controller.apply(action)
        changed = ", ".join(result.changed_fields) or "-"
        console.print(f"[cyan]{action.value}[/cyan] changed={changed}")

    filters = controller.state.snapshot().to_filter_strings()
    console.print(
        f"\nfield notifications: {len(field_events)}  "
        f"filter notifications: {len(filter_events)}"
    )
    console.print(f"filters: {' '.join(filters) if filters else '(none)'}")
