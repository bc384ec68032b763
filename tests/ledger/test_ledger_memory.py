"""Tests for the in-memory ledger."""

import pytest

from fildos.errors import FolderNotFoundError, LedgerError
from fildos.ledger import InMemoryLedger
from fildos.models import FolderType

ADDRESS = "0x" + "a1" * 20
OTHER = "0x" + "b2" * 20


class TestMintFolder:
    """Test folder minting."""

    @pytest.mark.asyncio
    async def test_ids_are_sequential_from_one(self):
        ledger = InMemoryLedger(ADDRESS)

        first = await ledger.mint_folder("Receipts", FolderType.PERSONAL)
        second = await ledger.mint_folder("Work", FolderType.WORK)

        assert first.folder_id == 1
        assert second.folder_id == 2
        assert first.tx_hash != second.tx_hash
        assert first.tx_hash.startswith("0x")

    @pytest.mark.asyncio
    async def test_folder_type_round_trips(self):
        ledger = InMemoryLedger(ADDRESS)
        receipt = await ledger.mint_folder("Receipts", FolderType.PERSONAL)

        folder = await ledger.get_folder_data(receipt.folder_id)

        assert folder.folder_type == FolderType.PERSONAL
        assert folder.folder_type.value == "personal"
        assert folder.name == "Receipts"
        assert folder.owner == ADDRESS
        assert folder.is_public is False

    @pytest.mark.asyncio
    async def test_unknown_folder_raises(self):
        ledger = InMemoryLedger(ADDRESS)

        with pytest.raises(FolderNotFoundError):
            await ledger.get_folder_data(99)
        with pytest.raises(FolderNotFoundError):
            await ledger.owner_of(99)
        with pytest.raises(FolderNotFoundError):
            await ledger.get_files(99)


class TestAddFile:
    """Test file appends."""

    @pytest.mark.asyncio
    async def test_append_order_is_kept(self):
        ledger = InMemoryLedger(ADDRESS)
        folder_id = (await ledger.mint_folder("F", FolderType.AGENT)).folder_id

        await ledger.add_file(folder_id, "cid-1", "a.txt", ["txt"])
        await ledger.add_file(folder_id, "cid-2", "b.pdf", ["pdf"])

        files = await ledger.get_files(folder_id)
        assert [f.content_id for f in files] == ["cid-1", "cid-2"]
        assert files[0].owner == ADDRESS

    @pytest.mark.asyncio
    async def test_duplicate_content_appends_twice(self):
        ledger = InMemoryLedger(ADDRESS)
        folder_id = (await ledger.mint_folder("F", FolderType.AGENT)).folder_id

        await ledger.add_file(folder_id, "cid-1", "a.txt", [])
        await ledger.add_file(folder_id, "cid-1", "a.txt", [])

        assert len(await ledger.get_files(folder_id)) == 2

    @pytest.mark.asyncio
    async def test_foreign_folder_is_rejected(self):
        other_ledger = InMemoryLedger(OTHER)
        folder_id = (await other_ledger.mint_folder("Theirs", FolderType.WORK)).folder_id
        # Same registry state, different signer
        other_ledger._address = ADDRESS

        with pytest.raises(LedgerError, match="not the owner"):
            await other_ledger.add_file(folder_id, "cid", "a.txt", [])


class TestQueries:
    """Test ownership, tag search and balances."""

    @pytest.mark.asyncio
    async def test_folders_owned_by_is_case_insensitive(self):
        ledger = InMemoryLedger(ADDRESS)
        await ledger.mint_folder("A", FolderType.PERSONAL)
        await ledger.mint_folder("B", FolderType.PERSONAL)

        assert await ledger.get_folders_owned_by(ADDRESS.upper().replace("0X", "0x")) == [1, 2]
        assert await ledger.get_folders_owned_by(OTHER) == []

    @pytest.mark.asyncio
    async def test_search_by_tag(self):
        ledger = InMemoryLedger(ADDRESS)
        first = (await ledger.mint_folder("A", FolderType.PERSONAL)).folder_id
        second = (await ledger.mint_folder("B", FolderType.PERSONAL)).folder_id
        await ledger.add_file(first, "cid-1", "a.txt", ["txt", "uploaded-via-mcp"])
        await ledger.add_file(second, "cid-2", "b.pdf", ["pdf", "uploaded-via-mcp"])

        txt = await ledger.search_by_tag("txt")
        provenance = await ledger.search_by_tag("uploaded-via-mcp")

        assert [f.content_id for f in txt] == ["cid-1"]
        assert len(provenance) == 2

    @pytest.mark.asyncio
    async def test_balance_defaults_to_zero(self):
        ledger = InMemoryLedger(ADDRESS, balances={ADDRESS: 5})

        assert await ledger.balance_of(ADDRESS.upper().replace("0X", "0x")) == 5
        assert await ledger.balance_of(OTHER) == 0

        ledger.set_balance(OTHER, 7)
        assert await ledger.balance_of(OTHER) == 7
