import asyncio

import pytest

from tracker.domain.social import contacts
from tracker.domain.social.exceptions import (
    ContactAlreadyTracked,
    InvalidContact,
    RequestAlreadyPending,
    RequestNotFound,
)
from tracker.domain.social.mirror import FriendsMirror
from tracker.domain.social.models import ContactType
from tracker.domain.social.notifications import NotificationCenter
from tracker.domain.social.requests import PendingRequestsMirror
from tracker.infra.storage import StorageKeys


@pytest.fixture
def friends(store):
    return FriendsMirror(store)


@pytest.fixture
def notifications(store, scheduler):
    return NotificationCenter(store, scheduler, ttl_seconds=0)


@pytest.fixture
def pending(store, friends, notifications):
    return PendingRequestsMirror(store, friends, notifications)


@pytest.mark.parametrize(
    "contact,valid,kind",
    [
        ("kofi@example.com", True, ContactType.EMAIL),
        ("+233 20 123 4567", True, ContactType.PHONE),
        ("(020) 123-4567", True, ContactType.PHONE),
        ("12345", False, ContactType.PHONE),
        ("not an email", False, ContactType.PHONE),
    ],
)
def test_contact_classification(contact, valid, kind):
    assert contacts.validate_contact(contact) is valid
    assert contacts.classify_contact(contact) is kind


def test_display_name_from_contact():
    assert contacts.display_name_for("kofi.mensah@example.com", ContactType.EMAIL) == "kofimensah"
    assert contacts.display_name_for("+233201234567", ContactType.PHONE) == "Friend 4567"


@pytest.mark.asyncio
async def test_send_request_records_pending_entry(pending, store, notifications):
    request = await pending.send_request("  kofi@example.com ")

    assert request.contact == "kofi@example.com"
    assert request.contact_type is ContactType.EMAIL
    assert request.status.value == "pending"
    stored = await store.get_json(StorageKeys.PENDING_REQUESTS)
    assert stored[0]["contactType"] == "email"
    assert notifications.items[0].message == "Request sent to kofi@example.com via email"


@pytest.mark.asyncio
async def test_send_request_guards(pending, friends):
    with pytest.raises(InvalidContact):
        await pending.send_request("nope")

    await friends.add_friend({"name": "Ama", "contact": "ama@example.com"})
    with pytest.raises(ContactAlreadyTracked):
        await pending.send_request("ama@example.com")

    await pending.send_request("+233 20 123 4567")
    with pytest.raises(RequestAlreadyPending):
        await pending.send_request("+233 20 123 4567")


@pytest.mark.asyncio
async def test_accept_converts_request_into_friend(pending, friends, notifications):
    request = await pending.send_request("+233 20 123 4567")

    friend = await pending.accept(request.id)

    assert friend.name == "Friend 4567"
    assert friend.is_online is True
    assert pending.requests == []
    assert [f.contact for f in friends.friends] == ["+233 20 123 4567"]
    assert notifications.items[0].message == "Friend 4567 accepted your request!"


@pytest.mark.asyncio
async def test_reject_removes_without_adding_friend(pending, friends):
    request = await pending.send_request("ama@example.com")

    await pending.reject(request.id)

    assert pending.requests == []
    assert friends.friends == []
    with pytest.raises(RequestNotFound):
        await pending.reject(request.id)


@pytest.mark.asyncio
async def test_hydrate_restores_requests(pending, store, friends):
    await pending.send_request("ama@example.com")

    restored = PendingRequestsMirror(store, friends)
    requests = await restored.hydrate()
    assert [req.contact for req in requests] == ["ama@example.com"]


@pytest.mark.asyncio
async def test_hydrate_skips_corrupt_records(store, friends):
    await store.set_json(
        StorageKeys.PENDING_REQUESTS,
        ["junk", 7, {"id": 1, "contact": "a@example.com", "contactType": "email"}],
    )

    requests = await PendingRequestsMirror(store, friends).hydrate()

    assert [(req.id, req.contact) for req in requests] == [("1", "a@example.com")]


@pytest.mark.asyncio
async def test_accept_and_resend_race_leaves_no_pending_duplicate(pending, friends):
    request = await pending.send_request("ama@example.com")

    results = await asyncio.gather(
        pending.accept(request.id),
        pending.send_request("ama@example.com"),
        return_exceptions=True,
    )

    assert results[0].contact == "ama@example.com"
    assert isinstance(results[1], (ContactAlreadyTracked, RequestAlreadyPending))
    assert pending.requests == []
    assert [f.contact for f in friends.friends] == ["ama@example.com"]
