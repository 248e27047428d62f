"""Match command handler for AniQueue CLI.

Reads the pasted list, runs the batch matcher against AniList, prints the
outcome, and files the results into the anime list and review queue.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import aiohttp
from rich.console import Console
from rich.table import Table

from aniqueue.cli.common.context import get_cli_context
from aniqueue.cli.json_formatter import emit_json, format_json_output
from aniqueue.config import Settings, get_config
from aniqueue.core.matching.batch import BatchOutcome, match_lines, split_lines
from aniqueue.core.matching.factory import build_engine
from aniqueue.core.matching.models import MatchType
from aniqueue.library import IngestSummary, LibraryStore
from aniqueue.shared.constants import CLICommands, CLIDefaults

logger = logging.getLogger(__name__)

_TYPE_STYLES = {
    MatchType.AUTO: "green",
    MatchType.REVIEW: "yellow",
    MatchType.NO_MATCH: "red",
}


def handle_match_command(
    source: Path | None,
    *,
    dry_run: bool = False,
    data_dir: Path | None = None,
) -> int:
    """Handle the match command.

    Args:
        source: Input file; None or "-" reads stdin
        dry_run: Skip updating the library
        data_dir: Override for the storage directory

    Returns:
        Exit code (0 unless every line failed)
    """
    context = get_cli_context()
    settings = get_config()

    lines = split_lines(_read_source(source))
    logger.info("Matching %d lines", len(lines))

    outcome = asyncio.run(_run_batch(settings, lines))

    ingest: IngestSummary | None = None
    if not dry_run and outcome.results:
        store = open_store(settings, data_dir)
        ingest = store.ingest(outcome.results)
        store.save()

    if context.is_json_output_enabled():
        _emit_match_json(outcome, ingest)
    else:
        _print_match_results(outcome, ingest, Console())

    if outcome.failures and not outcome.results:
        return 1
    return 0


def open_store(settings: Settings, data_dir: Path | None = None) -> LibraryStore:
    """Open and load the library store, honouring a --data-dir override."""
    storage = settings.storage
    return LibraryStore(
        data_dir or storage.data_dir,
        list_file=storage.list_file,
        queue_file=storage.queue_file,
    ).load()


def _read_source(source: Path | None) -> str:
    if source is None or str(source) == CLIDefaults.STDIN_MARKER:
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


async def _run_batch(settings: Settings, lines: list[str]) -> BatchOutcome:
    async with aiohttp.ClientSession() as session:
        engine = build_engine(settings, session=session)
        return await match_lines(engine, lines)


def _emit_match_json(outcome: BatchOutcome, ingest: IngestSummary | None) -> None:
    emit_json(
        format_json_output(
            success=not (outcome.failures and not outcome.results),
            command=CLICommands.MATCH,
            data={
                "summary": outcome.summary(),
                "results": [result.to_dict() for result in outcome.results],
                "failures": [
                    {
                        "raw": failure.raw,
                        "error_code": failure.error.code.value,
                        "message": failure.error.message,
                    }
                    for failure in outcome.failures
                ],
                "library": ingest.to_dict() if ingest else None,
            },
            warnings=[f"{failure.raw}: {failure.error.message}" for failure in outcome.failures],
        )
    )


def _print_match_results(
    outcome: BatchOutcome,
    ingest: IngestSummary | None,
    console: Console,
) -> None:
    if not outcome.results and not outcome.failures:
        console.print("[yellow]No input lines to match.[/yellow]")
        return

    if outcome.results:
        table = Table(title="Match Results")
        table.add_column("Input", style="cyan")
        table.add_column("Type")
        table.add_column("Best match", style="green")
        table.add_column("Score", justify="right")
        table.add_column("Searched as", style="dim")

        for result in outcome.results:
            style = _TYPE_STYLES[result.match_type]
            best_title = result.best.record.display_title if result.best else "-"
            score = f"{result.best.score:.2f}" if result.best else "-"
            phrase = result.search_phrase + (" (refined)" if result.refined else "")
            table.add_row(
                result.raw,
                f"[{style}]{result.match_type.value}[/{style}]",
                best_title,
                score,
                phrase,
            )

        console.print(table)

    for failure in outcome.failures:
        console.print(f"[red]Failed:[/red] {failure.raw} ({failure.error.message})")

    summary = outcome.summary()
    console.print(
        f"auto: {summary[MatchType.AUTO.value]}, "
        f"review: {summary[MatchType.REVIEW.value]}, "
        f"no-match: {summary[MatchType.NO_MATCH.value]}, "
        f"failed: {summary['failed']}"
    )

    if ingest is not None:
        console.print(
            f"Added {ingest.added} to your list "
            f"({ingest.duplicates} already listed), {ingest.queued} queued for review."
        )
