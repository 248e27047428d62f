"""Storage configuration model for the anime list and review queue."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from aniqueue.shared.constants import FileSystem


class StorageSettings(BaseModel):
    """Where the library store keeps its JSON files."""

    data_dir: Path = Field(
        default_factory=lambda: Path.home() / FileSystem.HOME_DIR,
        description="Directory for the anime list and review queue",
    )
    list_file: str = Field(default=FileSystem.LIST_FILE, description="Anime list file name")
    queue_file: str = Field(default=FileSystem.QUEUE_FILE, description="Review queue file name")

    @property
    def list_path(self) -> Path:
        return self.data_dir / self.list_file

    @property
    def queue_path(self) -> Path:
        return self.data_dir / self.queue_file


__all__ = ["StorageSettings"]
