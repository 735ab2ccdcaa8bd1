"""Pending tracking requests kept on the device until accepted or rejected."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional

from tracker.domain.social import contacts
from tracker.domain.social.exceptions import (
	ContactAlreadyTracked,
	InvalidContact,
	RequestAlreadyPending,
	RequestNotFound,
)
from tracker.domain.social.mirror import FriendsMirror
from tracker.domain.social.models import ContactType, Friend, PendingRequest, Severity, TimeIdFactory, utcnow_iso
from tracker.domain.social.notifications import NotificationCenter
from tracker.infra.storage import KeyValueStore, StorageKeys

logger = logging.getLogger(__name__)


class PendingRequestsMirror:
	def __init__(
		self,
		store: KeyValueStore,
		friends: FriendsMirror,
		notifications: Optional[NotificationCenter] = None,
		*,
		id_factory: Optional[Callable[[], str]] = None,
	) -> None:
		self.store = store
		self.friends = friends
		self.notifications = notifications
		self._new_id = id_factory or TimeIdFactory()
		self._requests: List[PendingRequest] = []
		self._lock = asyncio.Lock()

	@property
	def requests(self) -> List[PendingRequest]:
		return list(self._requests)

	async def _notify(self, message: str, severity: Severity) -> None:
		if self.notifications is not None:
			await self.notifications.add(message, severity)

	async def _persist(self) -> None:
		await self.store.set_json(StorageKeys.PENDING_REQUESTS, [req.to_record() for req in self._requests])

	async def hydrate(self) -> List[PendingRequest]:
		stored = await self.store.get_json(StorageKeys.PENDING_REQUESTS, default=[])
		async with self._lock:
			self._requests = []
			for record in stored if isinstance(stored, list) else []:
				try:
					self._requests.append(PendingRequest.from_record(record))
				except (KeyError, TypeError, ValueError):
					logger.warning("skipping malformed pending request record")
			return self.requests

	async def send_request(self, contact: str) -> PendingRequest:
		contact = (contact or "").strip()
		if not contacts.validate_contact(contact):
			raise InvalidContact()
		async with self._lock:
			if self.friends.find_by_contact(contact) is not None:
				raise ContactAlreadyTracked()
			if any(req.contact == contact for req in self._requests):
				raise RequestAlreadyPending()
			request = PendingRequest(
				id=self._new_id(),
				contact=contact,
				contact_type=contacts.classify_contact(contact),
				sent_at=utcnow_iso(),
			)
			self._requests.append(request)
			await self._persist()
		channel = "email" if request.contact_type is ContactType.EMAIL else "SMS"
		await self._notify(f"Request sent to {contact} via {channel}", Severity.SUCCESS)
		return request

	def _take(self, request_id: str) -> PendingRequest:
		request = next((req for req in self._requests if req.id == str(request_id)), None)
		if request is None:
			raise RequestNotFound()
		self._requests = [req for req in self._requests if req.id != request.id]
		return request

	async def accept(self, request_id: str) -> Optional[Friend]:
		"""Turn a pending request into a tracked friend."""
		# The friend is added before the lock is released so a concurrent
		# send_request for the same contact sees it as tracked.
		async with self._lock:
			request = self._take(request_id)
			await self._persist()
			name = contacts.display_name_for(request.contact, request.contact_type)
			friend = await self.friends.add_friend(
				{"name": name, "contact": request.contact, "isOnline": True, "lastActive": "Just now"}
			)
		if friend is None:
			# Tracked in the meantime; keep the existing entry.
			return self.friends.find_by_contact(request.contact)
		await self._notify(f"{friend.name} accepted your request!", Severity.SUCCESS)
		return friend

	async def reject(self, request_id: str) -> PendingRequest:
		async with self._lock:
			request = self._take(request_id)
			await self._persist()
			return request

	async def clear(self) -> None:
		async with self._lock:
			self._requests = []
			await self.store.remove(StorageKeys.PENDING_REQUESTS)


__all__ = ["PendingRequestsMirror"]
