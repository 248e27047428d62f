"""List and review-queue command handlers for AniQueue CLI.

Positions shown to the user are 1-based; the store works with 0-based
indexes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from aniqueue.cli.common.context import get_cli_context
from aniqueue.cli.json_formatter import emit_json, format_json_output
from aniqueue.cli.match_handler import open_store
from aniqueue.config import get_config
from aniqueue.shared.constants import CLICommands, CLIDefaults

logger = logging.getLogger(__name__)


def handle_list_command(data_dir: Path | None = None) -> int:
    """Show the anime list."""
    store = open_store(get_config(), data_dir)

    if get_cli_context().is_json_output_enabled():
        emit_json(
            format_json_output(
                success=True,
                command=CLICommands.LIST,
                data={"entries": [entry.model_dump(mode="json") for entry in store.entries]},
            )
        )
        return 0

    console = Console()
    if not store.entries:
        console.print("[yellow]Your list is empty.[/yellow]")
        return 0

    table = Table(title="Anime List")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="green")
    table.add_column("Year", justify="right")
    table.add_column("AniList ID", justify="right", style="blue")
    table.add_column("From input", style="cyan")

    for position, entry in enumerate(store.entries, start=1):
        table.add_row(
            str(position),
            entry.title,
            str(entry.season_year) if entry.season_year else "-",
            str(entry.id),
            entry.raw_input,
        )

    console.print(table)
    return 0


def handle_queue_command(
    data_dir: Path | None = None,
    top: int = CLIDefaults.QUEUE_PREVIEW_CANDIDATES,
) -> int:
    """Show the review queue with the top candidates of each item."""
    store = open_store(get_config(), data_dir)

    if get_cli_context().is_json_output_enabled():
        items = []
        for position, item in enumerate(store.queue, start=1):
            data = item.model_dump(mode="json")
            data["position"] = position
            data["candidates"] = data["candidates"][:top]
            items.append(data)
        emit_json(format_json_output(success=True, command=CLICommands.QUEUE, data={"queue": items}))
        return 0

    console = Console()
    if not store.queue:
        console.print("[green]The review queue is empty.[/green]")
        return 0

    for position, item in enumerate(store.queue, start=1):
        console.print(f"[bold]{position}.[/bold] [cyan]{item.raw}[/cyan] ({item.match_type.value})")
        if not item.candidates:
            console.print("    [red]no candidates[/red]")
            continue
        for candidate_position, candidate in enumerate(item.candidates[:top], start=1):
            year = f" ({candidate.season_year})" if candidate.season_year else ""
            console.print(f"    {candidate_position}) {candidate.title}{year}  [dim]{candidate.score:.2f}[/dim]")

    return 0


def handle_approve_command(
    position: int,
    candidate_position: int = 1,
    data_dir: Path | None = None,
) -> int:
    """Approve a candidate of a queued item and save the library."""
    store = open_store(get_config(), data_dir)
    raw = store.queue[position - 1].raw if 0 < position <= len(store.queue) else None
    entry = store.approve(position - 1, candidate_position - 1)
    store.save()

    if get_cli_context().is_json_output_enabled():
        emit_json(
            format_json_output(
                success=True,
                command=CLICommands.APPROVE,
                data={
                    "raw": raw,
                    "added": entry.model_dump(mode="json") if entry else None,
                    "already_listed": entry is None,
                },
            )
        )
        return 0

    console = Console()
    if entry is None:
        console.print(f"[yellow]Already in your list; removed '{raw}' from the queue.[/yellow]")
    else:
        console.print(f"[green]Added[/green] {entry.title} (for '{raw}')")
    return 0


def handle_discard_command(position: int, data_dir: Path | None = None) -> int:
    """Drop a queued item and save the library."""
    store = open_store(get_config(), data_dir)
    item = store.discard(position - 1)
    store.save()

    if get_cli_context().is_json_output_enabled():
        emit_json(
            format_json_output(
                success=True,
                command=CLICommands.DISCARD,
                data={"discarded": item.model_dump(mode="json")},
            )
        )
        return 0

    Console().print(f"Discarded '{item.raw}'")
    return 0
