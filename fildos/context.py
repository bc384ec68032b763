"""Service context.

Owns every long-lived collaborator of a FilDOS process: the ledger client,
the storage backend, the dataset lookup cache and the search client. It is
built once at startup and handed to the tool dispatcher.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from .config import FilDOSConfig
from .errors import BackendUnavailableError, NotInitializedError
from .folders import FolderRegistry
from .ledger import InMemoryLedger, LedgerClient
from .ownership import OwnershipGate
from .search import SearchClient
from .storage import (
    InMemoryStorageBackend,
    StorageBackend,
    StorageSessionManager,
    UploadOrchestrator,
)

logger = logging.getLogger(__name__)

StorageFactory = Callable[[], Awaitable[StorageBackend]]


class FilDOSContext:
    """
    Collaborators shared by all tool calls.

    The storage backend is created lazily by ``storage_factory`` on the first
    upload. ``ensure_storage()`` reuses a bound backend and reports a factory
    failure as ``BackendUnavailableError``; it never confuses the two.
    """

    def __init__(
        self,
        config: FilDOSConfig,
        ledger: LedgerClient,
        *,
        storage: StorageBackend | None = None,
        storage_factory: StorageFactory | None = None,
        search: SearchClient | None = None,
    ):
        self.config = config
        self.ledger = ledger
        self.search = search or SearchClient(
            str(config.ai_service_url), timeout=config.search_timeout
        )
        self.gate = OwnershipGate(ledger, config.address)
        self.folders = FolderRegistry(ledger, self.gate, config.provenance_tag)
        self.sessions = StorageSessionManager(storage)
        self._storage = storage
        self._storage_factory = storage_factory

    @property
    def address(self) -> str:
        """Operating address."""
        return self.config.address

    @property
    def storage(self) -> StorageBackend | None:
        """Bound storage backend, if any."""
        return self._storage

    async def ensure_storage(self) -> StorageBackend:
        """
        Return the bound storage backend, creating it on first use.

        Raises:
            NotInitializedError: No backend bound and no factory configured
            BackendUnavailableError: The factory failed
        """
        if self._storage is not None:
            return self._storage
        if self._storage_factory is None:
            raise NotInitializedError("Storage backend not initialized")

        try:
            backend = await self._storage_factory()
        except Exception as e:
            logger.error(f"Storage backend initialization failed: {e}")
            raise BackendUnavailableError(f"Storage initialization failed: {e}") from e

        self._storage = backend
        self.sessions.bind(backend)
        logger.info("Storage backend initialized")
        return backend

    async def orchestrator(self) -> UploadOrchestrator:
        """Upload orchestrator bound to the storage backend."""
        backend = await self.ensure_storage()
        return UploadOrchestrator(backend, self.sessions)

    def reset(self) -> None:
        """
        Drop cached storage state.

        A backend created by the factory is released and will be created
        again on the next upload; an injected backend stays bound.
        """
        if self._storage_factory is not None:
            self._storage = None
            self.sessions.bind(None)
        else:
            self.sessions.reset()

    async def close(self) -> None:
        """Release network resources."""
        await self.search.close()

    async def __aenter__(self) -> FilDOSContext:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()


def create_context(config: FilDOSConfig) -> FilDOSContext:
    """Context backed by the in-memory ledger and storage backend."""
    ledger = InMemoryLedger(
        config.address,
        balances={config.address: config.initial_balance_wei},
    )

    async def memory_storage() -> StorageBackend:
        return InMemoryStorageBackend()

    return FilDOSContext(config, ledger, storage_factory=memory_storage)
