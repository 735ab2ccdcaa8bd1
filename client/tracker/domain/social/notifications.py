"""Transient notifications: newest first, capped, self-expiring."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional

from tracker.domain.social.models import Notification, Severity, TimeIdFactory, utcnow_iso
from tracker.infra.scheduler import Scheduler
from tracker.infra.storage import KeyValueStore, StorageKeys

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5
DEFAULT_TTL_SECONDS = 5.0


class NotificationCenter:
	def __init__(
		self,
		store: KeyValueStore,
		scheduler: Scheduler,
		*,
		limit: int = DEFAULT_LIMIT,
		ttl_seconds: float = DEFAULT_TTL_SECONDS,
		id_factory: Optional[Callable[[], str]] = None,
	) -> None:
		self.store = store
		self.scheduler = scheduler
		self.limit = max(1, int(limit))
		self.ttl_seconds = ttl_seconds
		self._new_id = id_factory or TimeIdFactory()
		self._items: List[Notification] = []
		self._lock = asyncio.Lock()

	@property
	def items(self) -> List[Notification]:
		return list(self._items)

	def _expire_later(self, notification: Notification) -> None:
		if self.ttl_seconds <= 0:
			return
		self.scheduler.later(
			f"notification:{notification.id}",
			self.ttl_seconds,
			lambda: self.dismiss(notification.id),
		)

	async def _persist(self) -> None:
		await self.store.set_json(StorageKeys.NOTIFICATIONS, [item.to_record() for item in self._items])

	async def hydrate(self) -> List[Notification]:
		stored = await self.store.get_json(StorageKeys.NOTIFICATIONS, default=[])
		async with self._lock:
			self._items = []
			for record in stored if isinstance(stored, list) else []:
				try:
					self._items.append(Notification.from_record(record))
				except (KeyError, TypeError, ValueError):
					logger.warning("skipping malformed notification record")
			self._items = self._items[: self.limit]
		for item in self._items:
			self._expire_later(item)
		return self.items

	async def add(self, message: str, severity: Severity | str = Severity.INFO) -> Notification:
		notification = Notification(
			id=self._new_id(),
			message=message,
			severity=Severity(severity),
			timestamp=utcnow_iso(),
		)
		async with self._lock:
			self._items = [notification, *self._items][: self.limit]
			await self._persist()
		self._expire_later(notification)
		return notification

	async def dismiss(self, notification_id: str) -> None:
		async with self._lock:
			remaining = [item for item in self._items if item.id != notification_id]
			if len(remaining) == len(self._items):
				return
			self._items = remaining
			await self._persist()

	async def clear(self) -> None:
		async with self._lock:
			self._items = []
			await self.store.remove(StorageKeys.NOTIFICATIONS)


__all__ = ["NotificationCenter"]
