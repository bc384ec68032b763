"""Folder registry mutations: minting folders and attaching files."""

import logging
from pathlib import PurePosixPath

from .errors import NotOwnerError
from .ledger import LedgerClient
from .models import FolderType, TransactionReceipt
from .ownership import OwnershipGate

logger = logging.getLogger(__name__)

DEFAULT_PROVENANCE_TAG = "uploaded-via-mcp"


def derive_tags(file_name: str, provenance_tag: str = DEFAULT_PROVENANCE_TAG) -> list[str]:
    """
    Tags recorded for an attached file.

    The lower-cased extension (when the name has one) followed by the
    provenance tag. ``"Report.PDF"`` gives ``["pdf", "uploaded-via-mcp"]``.
    """
    extension = PurePosixPath(file_name).suffix.lstrip(".").lower()
    tags = [extension] if extension else []
    tags.append(provenance_tag)
    return list(dict.fromkeys(tags))


class FolderRegistry:
    """Writes folder and file records to the ledger."""

    def __init__(
        self,
        ledger: LedgerClient,
        gate: OwnershipGate,
        provenance_tag: str = DEFAULT_PROVENANCE_TAG,
    ):
        self._ledger = ledger
        self._gate = gate
        self._provenance_tag = provenance_tag

    async def create_folder(self, name: str, folder_type: FolderType) -> TransactionReceipt:
        """Mint a folder owned by the operating address."""
        receipt = await self._ledger.mint_folder(name, folder_type)
        logger.info(
            f"Folder '{name}' minted with ID {receipt.folder_id}",
            extra={"tx_hash": receipt.tx_hash},
        )
        return receipt

    def tags_for(self, file_name: str, extra_tags: list[str] | None = None) -> list[str]:
        tags = derive_tags(file_name, self._provenance_tag)
        return list(dict.fromkeys(tags + list(extra_tags or [])))

    async def attach_file(
        self,
        folder_id: int,
        content_id: str,
        file_name: str,
        extra_tags: list[str] | None = None,
        caller_address: str | None = None,
    ) -> TransactionReceipt:
        """
        Append a file reference to a folder.

        Not idempotent: attaching the same content twice appends two records.

        Raises:
            NotOwnerError: Caller does not own the folder; nothing is written
            LedgerError: The ledger rejected the transaction
        """
        if not await self._gate.is_owner(folder_id, caller_address):
            raise NotOwnerError(folder_id)

        tags = self.tags_for(file_name, extra_tags)
        logger.info(f"Adding file {file_name} to folder {folder_id}...")
        receipt = await self._ledger.add_file(folder_id, content_id, file_name, tags)
        logger.info(f"File added to folder {folder_id}. TX: {receipt.tx_hash}")
        return receipt
