"""JSON key-value storage over the Redis proxy.

Every value is stored as a JSON string under a flat key, mirroring the
device-local storage layout the mobile screens use.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional

from tracker.infra.redis import RedisProxy, redis_client
from tracker.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


class StorageKeys:
	FRIENDS = "@FriendTracking:peopleYouTrack"
	PENDING_REQUESTS = "@FriendTracking:pendingRequests"
	NOTIFICATIONS = "@FriendTracking:notifications"
	USE_REMOTE_DATA = "@Tracker78:useRemoteData"
	LOCAL_CIRCLES = "localCircles"
	CURRENT_USER = "currentUser"
	SESSION_ID = "sessionId"
	AUTH_TOKEN = "authToken"

	IDENTITY = (CURRENT_USER, SESSION_ID, AUTH_TOKEN)
	FRIEND_TRACKING = (FRIENDS, PENDING_REQUESTS, NOTIFICATIONS)
	ALL = (
		FRIENDS,
		PENDING_REQUESTS,
		NOTIFICATIONS,
		USE_REMOTE_DATA,
		LOCAL_CIRCLES,
		CURRENT_USER,
		SESSION_ID,
		AUTH_TOKEN,
	)


class KeyValueStore:
	"""Async JSON store; `namespace` prefixes keys so several devices can share one Redis."""

	def __init__(self, client: RedisProxy | None = None, *, namespace: str = "") -> None:
		self._client = client if client is not None else redis_client
		self._namespace = namespace

	def _key(self, key: str) -> str:
		return f"{self._namespace}{key}" if self._namespace else key

	async def get_raw(self, key: str) -> Optional[str]:
		value = await self._client.get(self._key(key))
		if isinstance(value, bytes):
			return value.decode("utf-8")
		return value

	async def set_raw(self, key: str, value: str) -> None:
		await self._client.set(self._key(key), value)
		obs_metrics.inc_mirror_write(key)

	async def get_json(self, key: str, default: Any = None) -> Any:
		raw = await self.get_raw(key)
		if raw is None:
			return default
		try:
			return json.loads(raw)
		except json.JSONDecodeError:
			logger.warning("discarding corrupt value for key=%s", key)
			return default

	async def set_json(self, key: str, value: Any) -> None:
		await self.set_raw(key, json.dumps(value, separators=(",", ":")))

	async def remove(self, key: str) -> None:
		await self._client.delete(self._key(key))

	async def multi_remove(self, keys: Iterable[str]) -> None:
		names = [self._key(key) for key in keys]
		if names:
			await self._client.delete(*names)

	async def clear(self) -> None:
		"""Remove every key the client layer knows about."""
		await self.multi_remove(StorageKeys.ALL)


__all__ = ["KeyValueStore", "StorageKeys"]
