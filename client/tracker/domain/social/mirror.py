"""Local friends mirror: in-memory list persisted to device storage.

Each mutation is applied and written under one lock and the write is awaited
before the call returns, so memory and storage never drift apart.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Callable, List, Mapping, Optional

from tracker.domain.social.geo import DEFAULT_RADIUS, random_nearby_coords
from tracker.domain.social.models import Friend, TimeIdFactory
from tracker.infra.storage import KeyValueStore, StorageKeys

logger = logging.getLogger(__name__)


class FriendsMirror:
	def __init__(
		self,
		store: KeyValueStore,
		*,
		base_lat: Optional[float] = None,
		base_lng: Optional[float] = None,
		radius: float = DEFAULT_RADIUS,
		rng: Optional[random.Random] = None,
		id_factory: Optional[Callable[[], str]] = None,
		key: str = StorageKeys.FRIENDS,
	) -> None:
		self.store = store
		self.base_lat = base_lat
		self.base_lng = base_lng
		self.radius = radius
		self.rng = rng
		self.key = key
		self._new_id = id_factory or TimeIdFactory()
		self._friends: List[Friend] = []
		self._lock = asyncio.Lock()
		self.loaded = False

	@property
	def friends(self) -> List[Friend]:
		return list(self._friends)

	def get(self, friend_id: str) -> Optional[Friend]:
		return next((f for f in self._friends if f.id == str(friend_id)), None)

	def find_by_contact(self, contact: str) -> Optional[Friend]:
		return next((f for f in self._friends if f.contact == contact), None)

	async def hydrate(self) -> List[Friend]:
		"""Load the stored list once; unreadable entries are skipped."""
		async with self._lock:
			stored = await self.store.get_json(self.key, default=[])
			friends: List[Friend] = []
			for record in stored if isinstance(stored, list) else []:
				try:
					friends.append(Friend.from_record(record))
				except (KeyError, TypeError, ValueError):
					logger.warning("skipping malformed friend record")
			self._friends = friends
			self.loaded = True
			return self.friends

	async def _persist(self) -> None:
		await self.store.set_json(self.key, [friend.to_record() for friend in self._friends])

	async def add_friend(
		self,
		friend: Mapping[str, Any],
		base_lat: Optional[float] = None,
		base_lng: Optional[float] = None,
	) -> Optional[Friend]:
		"""Add a friend unless one with the same contact exists; returns None on duplicates."""
		contact = str(friend.get("contact") or "").strip()
		async with self._lock:
			if any(existing.contact == contact for existing in self._friends):
				logger.info("friend with this contact already tracked")
				return None
			lat = friend.get("latitude")
			lng = friend.get("longitude")
			if lat is None or lng is None:
				lat, lng = random_nearby_coords(
					self.base_lat if base_lat is None else base_lat,
					self.base_lng if base_lng is None else base_lng,
					radius=self.radius,
					rng=self.rng,
				)
			created = Friend(
				id=self._new_id(),
				name=str(friend.get("name") or contact),
				contact=contact,
				is_online=bool(friend.get("isOnline", friend.get("is_online", False))),
				last_active=friend.get("lastActive") or friend.get("last_active"),
				latitude=float(lat),
				longitude=float(lng),
			)
			self._friends.insert(0, created)
			await self._persist()
			return created

	async def remove_friend(self, friend_id: str) -> bool:
		"""Drop a friend by id; unknown ids leave the list untouched."""
		async with self._lock:
			remaining = [f for f in self._friends if f.id != str(friend_id)]
			if len(remaining) == len(self._friends):
				return False
			self._friends = remaining
			await self._persist()
			return True

	async def update_friend_location(self, friend_id: str, latitude: float, longitude: float) -> Optional[Friend]:
		async with self._lock:
			friend = self.get(friend_id)
			if friend is None:
				return None
			friend.latitude = float(latitude)
			friend.longitude = float(longitude)
			await self._persist()
			return friend

	async def clear(self) -> None:
		async with self._lock:
			self._friends = []
			await self.store.remove(self.key)


__all__ = ["FriendsMirror"]
