"""Tests for the scheduled broadcast dispatch task."""

from contextlib import asynccontextmanager
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from netadmin.modules.communications.tasks import DISPATCH_ACTOR, _dispatch_scheduled_messages_async


def _session_factory(session):
    @asynccontextmanager
    async def _factory():
        yield session

    return _factory


def _mock_session():
    session = AsyncMock()

    @asynccontextmanager
    async def _nested():
        yield

    session.begin_nested = MagicMock(side_effect=_nested)
    return session


@pytest.mark.asyncio
async def test_dispatch_sends_each_due_message():
    session = _mock_session()
    svc = MagicMock()
    svc.get_pending_scheduled_messages = AsyncMock(
        return_value=[SimpleNamespace(id="m1"), SimpleNamespace(id="m2")]
    )
    svc.send_message = AsyncMock()

    with (
        patch("netadmin.modules.communications.tasks.async_session", _session_factory(session)),
        patch("netadmin.modules.communications.service.AdminMessageService", return_value=svc),
    ):
        stats = await _dispatch_scheduled_messages_async()

    assert stats == {"checked": 2, "sent": 2, "errors": 0}
    assert [c.args[0] for c in svc.send_message.await_args_list] == ["m1", "m2"]
    assert all(c.args[1] is DISPATCH_ACTOR for c in svc.send_message.await_args_list)
    assert DISPATCH_ACTOR.user_id == "system"
    session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_dispatch_counts_failures_and_continues():
    session = _mock_session()
    svc = MagicMock()
    svc.get_pending_scheduled_messages = AsyncMock(
        return_value=[SimpleNamespace(id="bad"), SimpleNamespace(id="good")]
    )
    svc.send_message = AsyncMock(side_effect=[RuntimeError("db down"), None])

    with (
        patch("netadmin.modules.communications.tasks.async_session", _session_factory(session)),
        patch("netadmin.modules.communications.service.AdminMessageService", return_value=svc),
    ):
        stats = await _dispatch_scheduled_messages_async()

    assert stats == {"checked": 2, "sent": 1, "errors": 1}


def test_task_is_registered_with_beat_schedule():
    from celery_app import celery

    assert "netadmin.modules.communications.tasks.dispatch_scheduled_messages" in celery.tasks
    entry = celery.conf.beat_schedule["dispatch-scheduled-messages"]
    assert entry["task"] == "netadmin.modules.communications.tasks.dispatch_scheduled_messages"
