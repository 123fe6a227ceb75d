"""
tests/test_supabase_gateway.py
───────────────────────────────
SupabaseGateway against a mocked supabase-py ``AsyncClient``.

The PostgREST query builder is chainable (``table().select().eq()...``), so
the mock returns the same builder from every chain method and only
``execute`` is awaited.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from core.config import Settings
from core.errors import EntityNotFound, GatewayError, GatewayNotReady
from data_engine.coordinator import DataCoordinator
from data_engine.query_cache import QueryCache
from data_engine.supabase_gateway import SupabaseGateway
from schemas.entities import BusinessCategory


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def _mock_client(data=None, error: Exception = None) -> MagicMock:
    client = MagicMock()
    query = client.table.return_value
    for method in ("select", "eq", "limit", "insert", "upsert"):
        getattr(query, method).return_value = query
    if error is not None:
        query.execute = AsyncMock(side_effect=error)
    else:
        query.execute = AsyncMock(return_value=SimpleNamespace(data=data))
    return client


_ENTREPRENEUR_ROW = {
    "id": "abc-123",
    "full_name": "Asha Patil",
    "age": 23,
    "gender": "female",
    "contact_info": "asha@example.org",
    "village": "Rampur",
    "panchayat": "Rampur Gram",
    "district": "Nashik",
    "state": "Maharashtra",
    "business_category": "agriculture",
    "skills": ["farming", "drip irrigation"],
    "bio": "Millet farmer.",
}


class TestReadiness:
    def test_not_ready_without_client(self) -> None:
        assert SupabaseGateway(_settings()).is_ready is False

    async def test_connect_without_credentials_stays_not_ready(self) -> None:
        gateway = SupabaseGateway(_settings(SUPABASE_URL="", SUPABASE_KEY=""))
        assert await gateway.connect() is False
        assert gateway.is_ready is False

    async def test_connect_builds_client(self) -> None:
        settings = _settings(SUPABASE_URL="https://x.supabase.co", SUPABASE_KEY="key")
        fake = MagicMock()
        with patch(
            "data_engine.supabase_gateway.create_supabase_client",
            AsyncMock(return_value=fake),
        ) as factory:
            gateway = SupabaseGateway(settings)
            assert await gateway.connect() is True

        factory.assert_awaited_once_with(settings)
        assert gateway.is_ready is True

    async def test_connect_failure_is_logged_not_raised(self) -> None:
        settings = _settings(SUPABASE_URL="https://x.supabase.co", SUPABASE_KEY="key")
        with patch(
            "data_engine.supabase_gateway.create_supabase_client",
            AsyncMock(side_effect=RuntimeError("dns")),
        ):
            gateway = SupabaseGateway(settings)
            assert await gateway.connect() is False
        assert gateway.is_ready is False

    async def test_calls_before_connect_raise_not_ready(self) -> None:
        gateway = SupabaseGateway(_settings())
        with pytest.raises(GatewayNotReady):
            await gateway.list_success_stories()


class TestReconnect:
    """A failed connect is retried until the store answers."""

    async def test_first_attempt_fails_second_succeeds(self) -> None:
        settings = _settings(SUPABASE_URL="https://x.supabase.co", SUPABASE_KEY="key")
        client = _mock_client(data=[_ENTREPRENEUR_ROW])
        with patch(
            "data_engine.supabase_gateway.create_supabase_client",
            AsyncMock(side_effect=[RuntimeError("dns"), client]),
        ):
            gateway = SupabaseGateway(settings)
            coordinator = DataCoordinator(gateway, QueryCache())
            assert await gateway.connect() is False
            assert await coordinator.list_entrepreneurs() == []

            assert await gateway.keep_connecting(initial_delay=0, max_delay=0) is True

        assert gateway.connect_attempts == 2
        assert coordinator.is_ready is True
        rows = await coordinator.list_entrepreneurs()
        assert [e.id for e in rows] == ["abc-123"]

    async def test_delay_doubles_up_to_cap(self) -> None:
        settings = _settings(SUPABASE_URL="https://x.supabase.co", SUPABASE_KEY="key")
        failures = [RuntimeError("dns")] * 4
        with patch(
            "data_engine.supabase_gateway.create_supabase_client",
            AsyncMock(side_effect=[*failures, MagicMock()]),
        ), patch("data_engine.supabase_gateway.asyncio.sleep", AsyncMock()) as sleep:
            gateway = SupabaseGateway(settings)
            assert await gateway.keep_connecting(initial_delay=1.0, max_delay=3.0) is True

        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0, 3.0, 3.0]
        assert gateway.connect_attempts == 5

    async def test_gives_up_without_credentials(self) -> None:
        gateway = SupabaseGateway(_settings(SUPABASE_URL="", SUPABASE_KEY=""))
        assert await gateway.keep_connecting(initial_delay=0) is False
        assert gateway.connect_attempts == 0


class TestReads:
    async def test_list_entrepreneurs_parses_rows(self) -> None:
        client = _mock_client(data=[_ENTREPRENEUR_ROW])
        gateway = SupabaseGateway(_settings(), client=client)

        rows = await gateway.list_entrepreneurs()

        client.table.assert_called_once_with("entrepreneurs")
        client.table.return_value.select.assert_called_once_with("*")
        assert rows[0].id == "abc-123"
        assert rows[0].business_category is BusinessCategory.agriculture

    async def test_empty_table(self) -> None:
        gateway = SupabaseGateway(_settings(), client=_mock_client(data=None))
        assert await gateway.list_community_posts() == []

    async def test_get_entrepreneur_filters_by_principal(self) -> None:
        client = _mock_client(data=[_ENTREPRENEUR_ROW])
        gateway = SupabaseGateway(_settings(), client=client)

        person = await gateway.get_entrepreneur("abc-123")

        client.table.return_value.eq.assert_called_once_with("id", "abc-123")
        assert person.full_name == "Asha Patil"

    async def test_get_entrepreneur_missing(self) -> None:
        gateway = SupabaseGateway(_settings(), client=_mock_client(data=[]))
        with pytest.raises(EntityNotFound):
            await gateway.get_entrepreneur("ghost")

    async def test_transport_error_is_wrapped(self) -> None:
        boom = ConnectionError("reset by peer")
        gateway = SupabaseGateway(_settings(), client=_mock_client(error=boom))

        with pytest.raises(GatewayError) as info:
            await gateway.list_training_resources()

        assert info.value.__cause__ is boom

    async def test_malformed_row_is_gateway_error(self) -> None:
        gateway = SupabaseGateway(_settings(), client=_mock_client(data=[{"id": 1, "title": "x"}]))
        with pytest.raises(GatewayError):
            await gateway.list_success_stories()


class TestWrites:
    async def test_insert_omits_store_assigned_id(self, make_story) -> None:
        client = _mock_client(data=[])
        gateway = SupabaseGateway(_settings(), client=client)

        await gateway.add_success_story(make_story(id=42))

        client.table.assert_called_once_with("success_stories")
        (row,), _ = client.table.return_value.insert.call_args
        assert "id" not in row
        assert row["category"] == "food"

    async def test_register_upserts_on_principal(self, make_entrepreneur) -> None:
        client = _mock_client(data=[])
        gateway = SupabaseGateway(_settings(), client=client)

        await gateway.register_entrepreneur(make_entrepreneur(id="abc-123"))

        upsert = client.table.return_value.upsert
        upsert.assert_called_once()
        (row,), kwargs = upsert.call_args
        assert row["id"] == "abc-123"
        assert kwargs == {"on_conflict": "id"}

    async def test_write_error_is_wrapped(self, make_post) -> None:
        gateway = SupabaseGateway(_settings(), client=_mock_client(error=RuntimeError("RLS")))
        with pytest.raises(GatewayError, match="community_posts"):
            await gateway.add_community_post(make_post())
