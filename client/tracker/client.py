"""Composition root wiring settings, storage, gateway, facades and mirrors."""

from __future__ import annotations

import logging
import random
from typing import Optional

import httpx
import redis.asyncio as redis

from tracker import obs
from tracker.api import (
	CirclesAPI,
	FriendRequestsAPI,
	FriendsAPI,
	Listing,
	LocationAPI,
	LocationSharingAPI,
	UserSearchAPI,
)
from tracker.domain.identity import IdentityResolver
from tracker.domain.social import (
	FriendsMirror,
	LocalCirclesStore,
	NotificationCenter,
	PendingRequestsMirror,
	Preferences,
	clear_all_local_data,
)
from tracker.infra.gateway import Gateway
from tracker.infra.redis import RedisProxy, redis_client
from tracker.infra.scheduler import Scheduler
from tracker.infra.storage import KeyValueStore
from tracker.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class TrackerClient:
	def __init__(
		self,
		config: Settings,
		store: KeyValueStore,
		http: httpx.AsyncClient,
		*,
		owns_http: bool = False,
		rng: Optional[random.Random] = None,
	) -> None:
		self.config = config
		self.store = store
		self.http = http
		self._owns_http = owns_http
		self.scheduler = Scheduler()

		self.gateway = Gateway(config, store, http)
		self.identity = IdentityResolver(self.gateway, store)

		self.friend_requests = FriendRequestsAPI(self.gateway)
		self.friends_api = FriendsAPI(self.gateway)
		self.users = UserSearchAPI(self.gateway)
		self.circles_api = CirclesAPI(self.gateway)
		self.location_sharing = LocationSharingAPI(self.gateway)
		self.locations = LocationAPI(self.gateway)

		self.preferences = Preferences(store)
		self.notifications = NotificationCenter(
			store,
			self.scheduler,
			limit=config.notification_limit,
			ttl_seconds=config.notification_ttl_seconds,
		)
		self.friends = FriendsMirror(
			store,
			base_lat=config.default_base_lat,
			base_lng=config.default_base_lng,
			radius=config.nearby_radius_deg,
			rng=rng,
		)
		self.pending = PendingRequestsMirror(store, self.friends, self.notifications)
		self.local_circles = LocalCirclesStore(store)
		self.remote_pending: Listing = Listing()

	@classmethod
	def create(
		cls,
		config: Optional[Settings] = None,
		*,
		http: Optional[httpx.AsyncClient] = None,
		redis_conn: Optional[redis.Redis | RedisProxy] = None,
		rng: Optional[random.Random] = None,
	) -> "TrackerClient":
		config = config or default_settings
		owns_http = http is None
		http = http or httpx.AsyncClient(timeout=config.request_timeout_seconds)
		store = KeyValueStore(redis_conn if redis_conn is not None else redis_client)
		return cls(config, store, http, owns_http=owns_http, rng=rng)

	async def start(self) -> None:
		"""Hydrate the local mirrors from device storage."""
		if not self.config.is_dev():
			obs.init(self.config)
		await self.friends.hydrate()
		await self.pending.hydrate()
		await self.notifications.hydrate()

	async def refresh_pending_requests(self) -> Listing:
		"""One polling step: pull backend requests when remote data is enabled."""
		if not await self.preferences.use_remote_data():
			return self.remote_pending
		self.remote_pending = await self.friend_requests.list_pending()
		return self.remote_pending

	async def refresh_friend_locations(self) -> int:
		"""Copy backend coordinates onto mirrored friends; returns how many moved."""
		if not await self.preferences.use_remote_data():
			return 0
		latest = await self.locations.get_friends_latest()
		moved = 0
		for entry in latest:
			if not isinstance(entry, dict):
				continue
			friend_id = entry.get("friendId") or entry.get("userId")
			lat = entry.get("latitude")
			lng = entry.get("longitude")
			if friend_id is None or lat is None or lng is None:
				continue
			if await self.friends.update_friend_location(str(friend_id), lat, lng) is not None:
				moved += 1
		return moved

	def start_polling(self) -> None:
		self.scheduler.every("friend-requests", self.config.poll_requests_seconds, self._poll_requests)
		self.scheduler.every("friend-locations", self.config.poll_locations_seconds, self._poll_locations)

	async def stop_polling(self) -> None:
		await self.scheduler.cancel("friend-requests")
		await self.scheduler.cancel("friend-locations")

	async def _poll_requests(self) -> None:
		await self.refresh_pending_requests()

	async def _poll_locations(self) -> None:
		await self.refresh_friend_locations()

	async def clear_local_data(self) -> None:
		await clear_all_local_data(self.store)
		await self.friends.hydrate()
		await self.pending.hydrate()
		await self.notifications.hydrate()

	async def aclose(self) -> None:
		await self.scheduler.shutdown()
		if self._owns_http:
			await self.http.aclose()


__all__ = ["TrackerClient"]
