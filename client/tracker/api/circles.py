"""Circle (group) facade."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping

from tracker.api.base import Facade, Listing
from tracker.api.schemas import CircleCreate, CircleJoin, CircleMembersUpdate


class CirclesAPI(Facade):
	resource = "circles"

	async def create(
		self,
		name: str,
		description: str = "",
		members: Iterable[Mapping[str, Any]] = (),
	) -> Dict[str, Any]:
		payload = self._payload(
			"create",
			CircleCreate,
			name=name.strip(),
			description=description.strip(),
			members=[dict(member) for member in members],
		)
		return await self._call("create", "create circle", self._url(), method="POST", json=payload)

	async def join_by_code(self, code: str) -> Dict[str, Any]:
		payload = self._payload("join_by_code", CircleJoin, code=code.strip())
		return await self._call("join_by_code", "join circle", self._url("join"), method="POST", json=payload)

	async def add_members(self, circle_id: str, members: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
		"""Replace the circle's member snapshots (id, name, contact)."""
		payload = self._payload("add_members", CircleMembersUpdate, members=[dict(member) for member in members])
		return await self._call("add_members", "add member", self._url(circle_id), method="PATCH", json=payload)

	async def list_members(self, circle_id: str) -> Listing:
		return await self._list(
			"list_members",
			"fetch circle members",
			self._url(circle_id, "members"),
			envelope=("members",),
		)

	async def leave(self, circle_id: str) -> Any:
		return await self._call("leave", "leave circle", self._url(circle_id, "leave"), method="POST")

	async def list_mine(self) -> Listing:
		return await self._list("list_mine", "fetch circles", self._url(), envelope=("circles",))


__all__ = ["CirclesAPI"]
