"""Folder ownership gate."""

import logging

from .ledger import LedgerClient

logger = logging.getLogger(__name__)


class OwnershipGate:
    """
    Checks that an address controls a folder before it is mutated.

    Fails closed: a folder that does not exist, or a ledger that cannot be
    read, yields ``False`` rather than an error. The caller is a chat agent
    and gets a uniform denial.
    """

    def __init__(self, ledger: LedgerClient, default_address: str):
        self._ledger = ledger
        self._default_address = default_address

    async def is_owner(self, folder_id: int, caller_address: str | None = None) -> bool:
        """Return True if ``caller_address`` (default: operating address) owns the folder."""
        address = caller_address or self._default_address
        try:
            owner = await self._ledger.owner_of(folder_id)
        except Exception as e:
            logger.warning(
                f"Error validating ownership of folder {folder_id}: {e}",
                extra={"folder_id": folder_id, "caller": address},
            )
            return False
        return owner.lower() == address.lower()
