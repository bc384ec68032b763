"""Ledger client interface.

The ledger is the folder/file registry: a folder is a token owned by an
address, and files are appended to it. Contract bindings live outside this
package; anything implementing ``LedgerClient`` can be plugged into a
``FilDOSContext``.
"""

from abc import ABC, abstractmethod

from ..models import FileRecord, Folder, FolderType, TransactionReceipt


class LedgerClient(ABC):
    """Async read/write access to folder and file records.

    Implementations raise ``FolderNotFoundError`` for unknown folder handles
    and ``LedgerError`` for any other failed read or rejected transaction.
    """

    @property
    @abstractmethod
    def address(self) -> str:
        """Operating address that signs ledger transactions."""

    @abstractmethod
    async def mint_folder(self, name: str, folder_type: FolderType) -> TransactionReceipt:
        """Mint a folder owned by the operating address.

        The receipt's ``folder_id`` carries the registry-assigned handle.
        """

    @abstractmethod
    async def get_folder_data(self, folder_id: int) -> Folder:
        """Fetch a folder record."""

    @abstractmethod
    async def add_file(
        self,
        folder_id: int,
        content_id: str,
        filename: str,
        tags: list[str],
    ) -> TransactionReceipt:
        """Append a file record to a folder."""

    @abstractmethod
    async def get_files(self, folder_id: int) -> list[FileRecord]:
        """List file records of a folder in append order."""

    @abstractmethod
    async def owner_of(self, folder_id: int) -> str:
        """Address that owns a folder."""

    @abstractmethod
    async def get_folders_owned_by(self, owner: str) -> list[int]:
        """Handles of all folders owned by ``owner``."""

    @abstractmethod
    async def search_by_tag(self, tag: str) -> list[FileRecord]:
        """Files carrying ``tag`` across the operating address's folders."""

    @abstractmethod
    async def balance_of(self, address: str) -> int:
        """Native balance of ``address`` in wei."""
