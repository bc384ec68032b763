"""In-memory ledger.

Behaves like the folder registry contract: sequential folder handles starting
at 1, owner-only ``add_file`` and per-signer tag search. Used for local runs
and tests.
"""

from __future__ import annotations

import hashlib
import itertools
import time

from ..errors import FolderNotFoundError, LedgerError
from ..models import FileRecord, Folder, FolderType, TransactionReceipt
from .base import LedgerClient


class InMemoryLedger(LedgerClient):
    """Folder registry held in process memory."""

    def __init__(
        self,
        address: str,
        balances: dict[str, int] | None = None,
    ):
        self._address = address
        self._folders: dict[int, Folder] = {}
        self._files: dict[int, list[FileRecord]] = {}
        self._ids = itertools.count(1)
        self._nonce = itertools.count()
        self._balances = {k.lower(): v for k, v in (balances or {}).items()}

    @property
    def address(self) -> str:
        return self._address

    def set_balance(self, address: str, wei: int) -> None:
        """Set the native balance reported for ``address``."""
        self._balances[address.lower()] = wei

    def _tx_hash(self) -> str:
        seed = f"{self._address}:{next(self._nonce)}".encode()
        return "0x" + hashlib.sha256(seed).hexdigest()

    def _folder(self, folder_id: int) -> Folder:
        folder = self._folders.get(folder_id)
        if folder is None:
            raise FolderNotFoundError(folder_id)
        return folder

    async def mint_folder(self, name: str, folder_type: FolderType) -> TransactionReceipt:
        folder_id = next(self._ids)
        self._folders[folder_id] = Folder(
            id=folder_id,
            name=name,
            folder_type=folder_type,
            owner=self._address,
            created_at=int(time.time()),
        )
        self._files[folder_id] = []
        return TransactionReceipt(tx_hash=self._tx_hash(), folder_id=folder_id)

    async def get_folder_data(self, folder_id: int) -> Folder:
        return self._folder(folder_id)

    async def add_file(
        self,
        folder_id: int,
        content_id: str,
        filename: str,
        tags: list[str],
    ) -> TransactionReceipt:
        folder = self._folder(folder_id)
        # Same rule the registry contract enforces on-chain
        if folder.owner.lower() != self._address.lower():
            raise LedgerError(f"Transaction reverted: not the owner of folder {folder_id}")

        self._files[folder_id].append(
            FileRecord(
                content_id=content_id,
                filename=filename,
                tags=tags,
                timestamp=int(time.time()),
                owner=self._address,
            )
        )
        return TransactionReceipt(tx_hash=self._tx_hash())

    async def get_files(self, folder_id: int) -> list[FileRecord]:
        self._folder(folder_id)
        return list(self._files[folder_id])

    async def owner_of(self, folder_id: int) -> str:
        return self._folder(folder_id).owner

    async def get_folders_owned_by(self, owner: str) -> list[int]:
        return [
            folder.id
            for folder in self._folders.values()
            if folder.owner.lower() == owner.lower()
        ]

    async def search_by_tag(self, tag: str) -> list[FileRecord]:
        matches: list[FileRecord] = []
        for folder_id in await self.get_folders_owned_by(self._address):
            matches.extend(f for f in self._files[folder_id] if tag in f.tags)
        return matches

    async def balance_of(self, address: str) -> int:
        return self._balances.get(address.lower(), 0)
