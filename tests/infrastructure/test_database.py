"""Tests for request-scoped database sessions."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from catalog_api.infrastructure import database


@pytest.fixture
def session(monkeypatch) -> MagicMock:
    """Stub session handed out by the session factory."""
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.execute = AsyncMock()

    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=session)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    monkeypatch.setattr(database, "async_session_factory", factory)
    return session


class TestGetSession:
    """Tests for the get_session dependency."""

    @pytest.mark.asyncio
    async def test_commits_after_handler(self, session: MagicMock) -> None:
        dependency = database.get_session()

        assert await dependency.__anext__() is session
        with pytest.raises(StopAsyncIteration):
            await dependency.__anext__()

        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rolls_back_when_handler_raises(self, session: MagicMock) -> None:
        dependency = database.get_session()
        await dependency.__anext__()

        with pytest.raises(RuntimeError):
            await dependency.athrow(RuntimeError("handler failed"))

        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_ping_runs_select_one(session: MagicMock) -> None:
    await database.ping(session)

    (statement,) = session.execute.await_args.args
    assert str(statement) == "SELECT 1"
