"""Location and location-sharing facades."""

from __future__ import annotations

from typing import Any, Dict, Optional

from tracker.api.base import Facade, Listing, _parse
from tracker.api.schemas import LocationUpdate
from tracker.infra.errors import error_from_response


class LocationSharingAPI(Facade):
	resource = "location-sharing"

	async def enable(self, friend_id: str) -> Dict[str, Any]:
		return await self._call("enable", "enable location sharing", self._url(friend_id, "enable"), method="POST")

	async def disable(self, friend_id: str) -> Dict[str, Any]:
		return await self._call("disable", "disable location sharing", self._url(friend_id, "disable"), method="POST")

	async def list_sharing_with_me(self) -> Listing:
		return await self._list(
			"list_sharing_with_me",
			"fetch shared locations",
			self._url("with-me"),
			absent_ok=True,
		)


class LocationAPI(Facade):
	resource = "locations"

	async def update_mine(self, latitude: float, longitude: float, circle_id: Optional[str] = None) -> Dict[str, Any]:
		payload = self._payload("update_mine", LocationUpdate, latitude=latitude, longitude=longitude, circle_id=circle_id)
		return await self._call("update_mine", "update location", self._url("update"), method="POST", json=payload)

	async def get_user_latest(self, user_id: str) -> Optional[Dict[str, Any]]:
		"""Latest location of one user, or None when the user has never reported one."""
		response = await self._send("get_user_latest", self._url(user_id, "latest"))
		if response.status_code == 404:
			return None
		if not response.is_success:
			raise error_from_response(response, "locations.get_user_latest", "fetch user location")
		payload = _parse(response)
		if isinstance(payload, dict) and isinstance(payload.get("documents"), list):
			documents = payload["documents"]
			return documents[0] if documents else None
		return payload or None

	async def get_circle_locations(self, circle_id: str) -> Listing:
		return await self._list(
			"get_circle_locations",
			"fetch circle locations",
			self._url("circle", circle_id),
			envelope=("locations",),
		)

	async def get_friends_latest(self) -> Listing:
		return await self._list(
			"get_friends_latest",
			"fetch friends locations",
			self._url("friends"),
			envelope=("locations",),
			absent_ok=True,
		)


__all__ = ["LocationAPI", "LocationSharingAPI"]
