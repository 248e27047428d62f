"""JSON-file persistence for the anime list and the review queue.

Automatic matches go straight into the list; everything the matcher was
not sure about waits in the queue until the user approves a candidate or
discards the line.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from aniqueue.core.matching.models import MatchResult, MatchType
from aniqueue.library.models import LibraryState, ListEntry, QueueItem
from aniqueue.shared.constants import FileSystem
from aniqueue.shared.errors import DomainError, ErrorCode, ErrorContext, InfrastructureError

logger = logging.getLogger(__name__)

_ENTRIES = TypeAdapter(list[ListEntry])
_QUEUE = TypeAdapter(list[QueueItem])


@dataclass
class IngestSummary:
    """What ``LibraryStore.ingest`` did with one batch of results."""

    added: int = 0
    duplicates: int = 0
    queued: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"added": self.added, "duplicates": self.duplicates, "queued": self.queued}


class LibraryStore:
    """Anime list and review queue backed by two JSON files.

    Args:
        data_dir: Directory holding the files
        list_file: Anime list file name
        queue_file: Review queue file name
    """

    def __init__(
        self,
        data_dir: Path,
        list_file: str = FileSystem.LIST_FILE,
        queue_file: str = FileSystem.QUEUE_FILE,
    ) -> None:
        self.data_dir = Path(data_dir)
        self.list_path = self.data_dir / list_file
        self.queue_path = self.data_dir / queue_file
        self.state = LibraryState()

    @property
    def entries(self) -> list[ListEntry]:
        return self.state.entries

    @property
    def queue(self) -> list[QueueItem]:
        return self.state.queue

    def load(self) -> LibraryStore:
        """Read both files; a missing or corrupt file loads as empty."""
        self.state = LibraryState(
            entries=self._read(self.list_path, _ENTRIES),
            queue=self._read(self.queue_path, _QUEUE),
        )
        logger.debug(
            "Loaded library: %d entries, %d queued",
            len(self.state.entries),
            len(self.state.queue),
        )
        return self

    def save(self) -> None:
        """Write both files.

        Raises:
            InfrastructureError: If a file cannot be written
        """
        self._write(self.list_path, [entry.model_dump(mode="json") for entry in self.entries])
        self._write(self.queue_path, [item.model_dump(mode="json") for item in self.queue])

    def has_entry(self, catalog_id: int) -> bool:
        return any(entry.id == catalog_id for entry in self.entries)

    def ingest(self, results: Iterable[MatchResult]) -> IngestSummary:
        """Add automatic matches to the list and queue everything else."""
        summary = IngestSummary()

        for result in results:
            if result.match_type is MatchType.AUTO and result.best is not None:
                if self.has_entry(result.best.record.id):
                    logger.debug("'%s' is already in the list (id=%d)", result.raw, result.best.record.id)
                    summary.duplicates += 1
                    continue
                self.entries.append(ListEntry.from_record(result.best.record, result.raw))
                summary.added += 1
            else:
                self.queue.append(QueueItem.from_result(result))
                summary.queued += 1

        logger.info(
            "Ingested results: %d added, %d duplicates, %d queued",
            summary.added,
            summary.duplicates,
            summary.queued,
        )
        return summary

    def approve(self, queue_index: int, candidate_index: int = 0) -> ListEntry | None:
        """Accept one candidate of a queued item.

        Returns:
            The new list entry, or None when the title was already listed

        Raises:
            DomainError: If either index is out of range
        """
        item = self._queue_item(queue_index, "approve")
        try:
            entry = item.to_entry(candidate_index)
        except IndexError as e:
            raise DomainError(
                code=ErrorCode.CANDIDATE_NOT_FOUND,
                message=f"Queue item {queue_index} has no candidate {candidate_index}",
                context=ErrorContext(
                    operation="approve",
                    additional_data={
                        "queue_index": queue_index,
                        "candidate_index": candidate_index,
                        "candidates": len(item.candidates),
                    },
                ),
                original_error=e,
            ) from e

        del self.queue[queue_index]
        if self.has_entry(entry.id):
            logger.info("'%s' is already in the list; queue item removed", entry.title)
            return None

        self.entries.append(entry)
        logger.info("Approved '%s' for '%s'", entry.title, item.raw)
        return entry

    def discard(self, queue_index: int) -> QueueItem:
        """Remove a queued item without adding anything.

        Raises:
            DomainError: If the index is out of range
        """
        item = self._queue_item(queue_index, "discard")
        del self.queue[queue_index]
        logger.info("Discarded '%s'", item.raw)
        return item

    def _queue_item(self, queue_index: int, operation: str) -> QueueItem:
        if not 0 <= queue_index < len(self.queue):
            raise DomainError(
                code=ErrorCode.QUEUE_ITEM_NOT_FOUND,
                message=f"No review queue item at index {queue_index}",
                context=ErrorContext(
                    operation=operation,
                    additional_data={"queue_index": queue_index, "queue_size": len(self.queue)},
                ),
            )
        return self.queue[queue_index]

    def _read(self, path: Path, adapter: TypeAdapter[Any]) -> list[Any]:
        if not path.exists():
            return []

        try:
            with open(path, encoding="utf-8") as f:
                return adapter.validate_python(json.load(f))
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Ignoring unreadable library file %s: %s", path, e)
            return []

    def _write(self, path: Path, data: list[dict[str, Any]]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise InfrastructureError(
                code=ErrorCode.FILE_WRITE_ERROR,
                message=f"Failed to write {path}: {e}",
                context=ErrorContext(file_path=str(path), operation="save_library"),
                original_error=e,
            ) from e

        logger.debug("Saved %d records to %s", len(data), path)


__all__ = ["IngestSummary", "LibraryStore"]
