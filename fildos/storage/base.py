"""Storage backend interface.

A storage backend owns provider-bound datasets ("sessions") per address and
moves bytes into them. Provider protocols live outside this package.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from pydantic import BaseModel

from ..types import ContentId
from .events import StorageEvent

EventSink = Callable[[StorageEvent], None]


class DataSet(BaseModel):
    """Provider-bound logical storage container for an address."""

    id: str
    owner: str
    provider_id: str


class StoredPiece(BaseModel):
    """Result of a finished upload."""

    content_id: ContentId


class StorageSessionHandle(ABC):
    """A negotiated session bound to one dataset and provider."""

    @property
    @abstractmethod
    def data_set_id(self) -> str:
        """Dataset this session writes into."""

    @abstractmethod
    async def upload(self, data: bytes, on_event: EventSink) -> StoredPiece:
        """Transfer ``data`` and register it in the dataset.

        Emits ``UploadComplete``, then ``PieceAdded`` and ``PieceConfirmed``.
        """


class StorageBackend(ABC):
    """Entry point to a storage network."""

    @abstractmethod
    async def find_sessions(self, address: str) -> list[DataSet]:
        """Datasets already created for ``address``."""

    @abstractmethod
    async def create_session(
        self,
        address: str,
        *,
        with_creation_fee: bool,
        on_event: EventSink,
    ) -> StorageSessionHandle:
        """Resolve an existing dataset or create a new one.

        Emits ``SessionResolved`` when reusing, or ``SessionCreationStarted``
        followed by ``SessionCreationProgress`` events when creating, and
        ``ProviderSelected`` once a provider is bound.
        """
