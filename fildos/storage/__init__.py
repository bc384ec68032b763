"""Content-addressed storage: backends, session negotiation and uploads.

Note: Backends talk to the storage network; everything else in FilDOS only
sees the ``StorageBackend`` interface and the event stream it emits.
"""

from .base import DataSet, EventSink, StorageBackend, StorageSessionHandle, StoredPiece
from .events import (
    PieceAdded,
    PieceConfirmed,
    ProviderSelected,
    SessionCreationProgress,
    SessionCreationStarted,
    SessionResolved,
    StorageEvent,
    UploadComplete,
)
from .memory import InMemoryStorageBackend, content_id_for
from .orchestrator import UploadOrchestrator
from .session import StorageSessionManager

__all__ = [
    "DataSet",
    "EventSink",
    "InMemoryStorageBackend",
    "PieceAdded",
    "PieceConfirmed",
    "ProviderSelected",
    "SessionCreationProgress",
    "SessionCreationStarted",
    "SessionResolved",
    "StorageBackend",
    "StorageEvent",
    "StorageSessionHandle",
    "StorageSessionManager",
    "StoredPiece",
    "UploadComplete",
    "UploadOrchestrator",
    "content_id_for",
]
