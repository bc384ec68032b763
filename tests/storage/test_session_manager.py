"""Tests for the storage session manager."""

from unittest import mock

import pytest

from fildos.errors import BackendUnavailableError, NotInitializedError
from fildos.storage import DataSet, StorageSessionManager

ADDRESS = "0x" + "a1" * 20


def make_backend(data_sets=None):
    backend = mock.AsyncMock()
    backend.find_sessions.return_value = data_sets or []
    return backend


class TestEnsureSession:
    """Test StorageSessionManager.ensure_session."""

    @pytest.mark.asyncio
    async def test_no_dataset_requires_fee(self):
        manager = StorageSessionManager(make_backend())

        session = await manager.ensure_session(ADDRESS)

        assert session.dataset_exists is False
        assert session.fee_required is True

    @pytest.mark.asyncio
    async def test_existing_dataset_needs_no_fee(self):
        backend = make_backend([DataSet(id="1", owner=ADDRESS, provider_id="p")])
        manager = StorageSessionManager(backend)

        session = await manager.ensure_session(ADDRESS)

        assert session.dataset_exists is True
        assert session.fee_required is False

    @pytest.mark.asyncio
    async def test_positive_lookup_is_cached(self):
        backend = make_backend([DataSet(id="1", owner=ADDRESS, provider_id="p")])
        manager = StorageSessionManager(backend)

        await manager.ensure_session(ADDRESS)
        await manager.ensure_session(ADDRESS.upper().replace("0X", "0x"))

        backend.find_sessions.assert_called_once()

    @pytest.mark.asyncio
    async def test_negative_lookup_is_repeated(self):
        backend = make_backend()
        manager = StorageSessionManager(backend)

        await manager.ensure_session(ADDRESS)
        await manager.ensure_session(ADDRESS)

        assert backend.find_sessions.call_count == 2

    @pytest.mark.asyncio
    async def test_mark_ready_skips_lookup(self):
        backend = make_backend()
        manager = StorageSessionManager(backend)

        manager.mark_ready(ADDRESS)
        session = await manager.ensure_session(ADDRESS)

        assert session.fee_required is False
        backend.find_sessions.assert_not_called()

    @pytest.mark.asyncio
    async def test_reset_clears_cache(self):
        backend = make_backend()
        manager = StorageSessionManager(backend)
        manager.mark_ready(ADDRESS)

        manager.reset()
        session = await manager.ensure_session(ADDRESS)

        assert session.fee_required is True
        backend.find_sessions.assert_called_once()

    @pytest.mark.asyncio
    async def test_lookup_failure_raises_backend_unavailable(self):
        backend = mock.AsyncMock()
        backend.find_sessions.side_effect = TimeoutError("rpc timeout")
        manager = StorageSessionManager(backend)

        with pytest.raises(BackendUnavailableError, match="rpc timeout"):
            await manager.ensure_session(ADDRESS)

    @pytest.mark.asyncio
    async def test_without_backend_raises_not_initialized(self):
        with pytest.raises(NotInitializedError):
            await StorageSessionManager().ensure_session(ADDRESS)

    @pytest.mark.asyncio
    async def test_bind_replaces_backend_and_cache(self):
        first = make_backend([DataSet(id="1", owner=ADDRESS, provider_id="p")])
        second = make_backend()
        manager = StorageSessionManager(first)
        await manager.ensure_session(ADDRESS)

        manager.bind(second)
        session = await manager.ensure_session(ADDRESS)

        assert session.fee_required is True
        second.find_sessions.assert_called_once()
