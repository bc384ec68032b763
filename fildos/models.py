"""Domain records shared by the ledger, storage and tool layers."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from .types import Address, ContentId, Filename, Tag


class FolderType(str, Enum):
    """Folder category chosen at mint time."""

    PERSONAL = "personal"
    WORK = "work"
    AGENT = "agent"


class Folder(BaseModel):
    """Folder record as stored in the registry."""

    id: int = Field(ge=0)
    name: str = Field(min_length=1)
    folder_type: FolderType
    is_public: bool = False
    owner: Address
    created_at: int
    """Unix timestamp (seconds) of the mint."""

    @property
    def created_at_iso(self) -> str:
        return _iso(self.created_at)


class FileRecord(BaseModel):
    """File reference appended to a folder."""

    content_id: ContentId
    filename: Filename
    tags: list[Tag] = Field(default_factory=list)
    timestamp: int
    owner: Address

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, tags: list[str]) -> list[str]:
        # Tags form a set; keep first-seen order for stable output
        return list(dict.fromkeys(tags))

    @property
    def timestamp_iso(self) -> str:
        return _iso(self.timestamp)


class TransactionReceipt(BaseModel):
    """Receipt for a ledger-mutating transaction."""

    tx_hash: str
    folder_id: int | None = None
    """Set for mints: the registry-assigned handle of the new folder."""


class StorageSession(BaseModel):
    """Dataset state for an owner address."""

    dataset_exists: bool
    fee_required: bool


class UploadedInfo(BaseModel):
    """What is known about an upload so far. Fields fill in phase by phase."""

    file_name: str | None = None
    file_size: int | None = None
    content_id: str | None = None
    tx_hash: str | None = None

    def merge(self, other: UploadedInfo) -> UploadedInfo:
        """Overlay ``other`` on this info without letting nulls erase values."""
        updates = other.model_dump(exclude_none=True)
        return self.model_copy(update=updates)


class UploadProgress(BaseModel):
    """Single progress event delivered to a progress sink."""

    progress: int = Field(ge=0, le=100)
    status: str
    uploaded_info: UploadedInfo | None = None


ProgressSink = Callable[[UploadProgress], None]


class UploadRecord(BaseModel):
    """Final result of a successful upload."""

    file_name: str
    file_size: int = Field(ge=0)
    content_id: ContentId
    tx_hash: str | None = None


def _iso(timestamp: int) -> str:
    return (
        datetime.fromtimestamp(timestamp, tz=timezone.utc)
        .isoformat()
        .replace("+00:00", "Z")
    )
