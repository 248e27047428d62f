"""The user's anime list and review queue."""

from .models import LibraryState, ListEntry, QueuedCandidate, QueueItem
from .store import IngestSummary, LibraryStore

__all__ = [
    "IngestSummary",
    "LibraryState",
    "LibraryStore",
    "ListEntry",
    "QueueItem",
    "QueuedCandidate",
]
