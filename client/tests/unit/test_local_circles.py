import pytest

from tracker.domain.social.circles import LocalCirclesStore
from tracker.domain.social.exceptions import CircleInvalid
from tracker.domain.social.mirror import FriendsMirror


@pytest.mark.asyncio
async def test_members_are_snapshots(store):
    friends = FriendsMirror(store)
    kofi = await friends.add_friend({"name": "Kofi", "contact": "kofi@example.com"})
    circles = LocalCirclesStore(store)

    circle = await circles.create("Family", [kofi], description="  home  ")
    kofi.name = "Kofi Renamed"

    stored = await circles.get(circle.id)
    assert stored.description == "home"
    assert [(m.id, m.name, m.contact) for m in stored.members] == [(kofi.id, "Kofi", "kofi@example.com")]


@pytest.mark.asyncio
async def test_create_requires_name_and_members(store):
    circles = LocalCirclesStore(store)
    with pytest.raises(CircleInvalid):
        await circles.create("  ", [{"id": "1", "name": "A"}])
    with pytest.raises(CircleInvalid):
        await circles.create("Work", [])


@pytest.mark.asyncio
async def test_list_and_delete(store):
    circles = LocalCirclesStore(store)
    first = await circles.create("Work", [{"id": "1", "name": "A", "contact": "a@example.com"}])
    await circles.create("Gym", [{"id": "2", "name": "B"}])

    assert [c.name for c in await circles.list()] == ["Work", "Gym"]
    assert await circles.delete(first.id) is True
    assert await circles.delete(first.id) is False
    assert [c.name for c in await circles.list()] == ["Gym"]
