"""In-memory storage backend.

Walks through the same event sequence a networked backend produces, without
leaving the process. Content identifiers are derived from a SHA-256 of the
bytes, so identical bytes always map to the same identifier.
"""

from __future__ import annotations

import base64
import hashlib
import itertools
import time

from .base import DataSet, EventSink, StorageBackend, StorageSessionHandle, StoredPiece
from .events import (
    PieceAdded,
    PieceConfirmed,
    ProviderSelected,
    SessionCreationProgress,
    SessionCreationStarted,
    SessionResolved,
    UploadComplete,
)

PROVIDER_ID = "memory-provider"
PROVIDER_NAME = "In-memory provider"

# Multibase "b" (base32) followed by a piece-style codec prefix
CONTENT_ID_PREFIX = "baga6ea4seaq"


def content_id_for(data: bytes) -> str:
    """Deterministic content identifier for ``data``."""
    digest = hashlib.sha256(data).digest()
    return CONTENT_ID_PREFIX + base64.b32encode(digest).decode().lower().rstrip("=")


def _tx_hash(seed: str) -> str:
    return "0x" + hashlib.sha256(seed.encode()).hexdigest()


class InMemorySession(StorageSessionHandle):
    """Session writing into one in-memory dataset."""

    def __init__(self, backend: InMemoryStorageBackend, data_set: DataSet):
        self._backend = backend
        self._data_set = data_set

    @property
    def data_set_id(self) -> str:
        return self._data_set.id

    async def upload(self, data: bytes, on_event: EventSink) -> StoredPiece:
        content_id = content_id_for(data)
        self._backend.pieces[content_id] = bytes(data)
        on_event(UploadComplete(content_id=content_id))

        on_event(PieceAdded(tx_hash=self._backend.next_tx_hash()))
        self._backend.data_set_pieces.setdefault(self._data_set.id, []).append(content_id)
        on_event(PieceConfirmed())

        return StoredPiece(content_id=content_id)


class InMemoryStorageBackend(StorageBackend):
    """Storage network held in process memory."""

    def __init__(self) -> None:
        self.data_sets: dict[str, list[DataSet]] = {}
        self.pieces: dict[str, bytes] = {}
        self.data_set_pieces: dict[str, list[str]] = {}
        self.creation_fees_paid = 0
        self._ids = itertools.count(1)
        self._nonce = itertools.count()

    def next_tx_hash(self) -> str:
        return _tx_hash(f"memory:{next(self._nonce)}")

    async def find_sessions(self, address: str) -> list[DataSet]:
        return list(self.data_sets.get(address.lower(), []))

    async def create_session(
        self,
        address: str,
        *,
        with_creation_fee: bool,
        on_event: EventSink,
    ) -> StorageSessionHandle:
        existing = self.data_sets.get(address.lower())
        if existing:
            data_set = existing[0]
            on_event(SessionResolved(session_id=data_set.id))
        else:
            started = time.monotonic()
            on_event(SessionCreationStarted(tx_hash=self.next_tx_hash()))
            if with_creation_fee:
                self.creation_fees_paid += 1
            data_set = DataSet(
                id=str(next(self._ids)),
                owner=address,
                provider_id=PROVIDER_ID,
            )
            self.data_sets[address.lower()] = [data_set]
            on_event(SessionCreationProgress(transaction_success=True))
            elapsed_ms = int((time.monotonic() - started) * 1000)
            on_event(
                SessionCreationProgress(
                    transaction_success=True,
                    server_confirmed=True,
                    elapsed_ms=elapsed_ms,
                )
            )

        on_event(ProviderSelected(provider_id=PROVIDER_ID, provider_name=PROVIDER_NAME))
        return InMemorySession(self, data_set)
