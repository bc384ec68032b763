"""Storage session manager.

Answers "does this address already have a dataset?" before an upload, which
decides whether the upload must carry a dataset creation fee.

Concurrent first uploads for the same address both see "no dataset" and both
pay the fee. The backend's own session resolution serializes the actual
creation, so the duplicate fee is the only cost and no lock is taken here.
"""

import logging

from ..errors import BackendUnavailableError, NotInitializedError
from ..models import StorageSession
from .base import StorageBackend

logger = logging.getLogger(__name__)


class StorageSessionManager:
    """Per-process dataset lookup with a positive-result cache."""

    def __init__(self, backend: StorageBackend | None = None) -> None:
        self._backend = backend
        self._known: set[str] = set()

    def bind(self, backend: StorageBackend | None) -> None:
        """Attach a (new) backend. Cached lookups belong to the old one."""
        self._backend = backend
        self._known.clear()

    async def ensure_session(self, address: str) -> StorageSession:
        """
        Look up datasets for ``address``.

        Addresses with a dataset are remembered for the process lifetime;
        addresses without one are queried again on every call.

        Raises:
            NotInitializedError: No backend bound
            BackendUnavailableError: Dataset query failed
        """
        if self._backend is None:
            raise NotInitializedError("Storage backend not initialized")

        key = address.lower()
        if key in self._known:
            return StorageSession(dataset_exists=True, fee_required=False)

        try:
            data_sets = await self._backend.find_sessions(address)
        except Exception as e:
            raise BackendUnavailableError(f"Dataset lookup failed: {e}") from e

        exists = len(data_sets) > 0
        if exists:
            self._known.add(key)
        logger.debug(
            "Dataset lookup",
            extra={"address": address, "dataset_exists": exists},
        )
        return StorageSession(dataset_exists=exists, fee_required=not exists)

    def mark_ready(self, address: str) -> None:
        """Record that ``address`` now has a dataset."""
        self._known.add(address.lower())

    def reset(self) -> None:
        """Forget every cached lookup."""
        self._known.clear()
