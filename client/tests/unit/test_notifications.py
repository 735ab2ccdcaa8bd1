import asyncio

import pytest

from tracker.domain.social.models import Severity
from tracker.domain.social.notifications import NotificationCenter
from tracker.infra.storage import StorageKeys


@pytest.mark.asyncio
async def test_keeps_five_newest(store, scheduler):
    center = NotificationCenter(store, scheduler, ttl_seconds=0)
    for idx in range(7):
        await center.add(f"message {idx}")

    assert [item.message for item in center.items] == [f"message {idx}" for idx in (6, 5, 4, 3, 2)]
    stored = await store.get_json(StorageKeys.NOTIFICATIONS)
    assert len(stored) == 5


@pytest.mark.asyncio
async def test_notifications_expire(store, scheduler):
    center = NotificationCenter(store, scheduler, ttl_seconds=0.02)
    await center.add("Friend removed successfully", Severity.SUCCESS)
    assert len(center.items) == 1

    await asyncio.sleep(0.08)

    assert center.items == []
    assert await store.get_json(StorageKeys.NOTIFICATIONS) == []


@pytest.mark.asyncio
async def test_dismiss_and_severity(store, scheduler):
    center = NotificationCenter(store, scheduler, ttl_seconds=0)
    note = await center.add("Emergency alert sent to all friends", "error")
    assert note.severity is Severity.ERROR

    await center.dismiss(note.id)
    await center.dismiss("unknown")
    assert center.items == []


@pytest.mark.asyncio
async def test_hydrate_loads_stored_notifications(store, scheduler):
    await store.set_json(
        StorageKeys.NOTIFICATIONS,
        [{"id": "1", "message": "hello", "type": "info", "timestamp": "2026-01-01T00:00:00+00:00"}],
    )
    center = NotificationCenter(store, scheduler, ttl_seconds=0)
    items = await center.hydrate()
    assert [item.message for item in items] == ["hello"]


@pytest.mark.asyncio
async def test_hydrate_skips_corrupt_records(store, scheduler):
    await store.set_json(
        StorageKeys.NOTIFICATIONS,
        [None, "stale", {"id": "n1", "message": "Request sent", "type": "success", "timestamp": "t"}],
    )
    center = NotificationCenter(store, scheduler, ttl_seconds=0)

    items = await center.hydrate()

    assert [(item.id, item.severity) for item in items] == [("n1", Severity.SUCCESS)]
