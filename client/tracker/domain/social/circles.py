"""Circles kept on the device; members are snapshots, not live friend references."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from tracker.domain.social.exceptions import CircleInvalid
from tracker.domain.social.models import Circle, CircleMember, Friend, TimeIdFactory
from tracker.infra.storage import KeyValueStore, StorageKeys

MemberSource = Union[Friend, Mapping[str, Any]]


class LocalCirclesStore:
	def __init__(self, store: KeyValueStore, *, id_factory: Optional[Callable[[], str]] = None) -> None:
		self.store = store
		self._new_id = id_factory or TimeIdFactory()
		self._lock = asyncio.Lock()

	async def list(self) -> List[Circle]:
		stored = await self.store.get_json(StorageKeys.LOCAL_CIRCLES, default=[])
		return [Circle.from_record(record) for record in stored if isinstance(record, dict)] if isinstance(stored, list) else []

	async def _save(self, circles: List[Circle]) -> None:
		await self.store.set_json(StorageKeys.LOCAL_CIRCLES, [circle.to_record() for circle in circles])

	async def create(
		self,
		name: str,
		members: Iterable[MemberSource],
		description: str = "",
		created_by: Optional[str] = None,
	) -> Circle:
		name = (name or "").strip()
		if not name:
			raise CircleInvalid("name_required")
		snapshot = [CircleMember.snapshot(member) for member in members]
		if not snapshot:
			raise CircleInvalid("members_required")
		circle = Circle(
			id=self._new_id(),
			name=name,
			description=(description or "").strip(),
			created_by=created_by,
			members=snapshot,
		)
		async with self._lock:
			circles = await self.list()
			circles.append(circle)
			await self._save(circles)
		return circle

	async def get(self, circle_id: str) -> Optional[Circle]:
		return next((circle for circle in await self.list() if circle.id == str(circle_id)), None)

	async def delete(self, circle_id: str) -> bool:
		async with self._lock:
			circles = await self.list()
			remaining = [circle for circle in circles if circle.id != str(circle_id)]
			if len(remaining) == len(circles):
				return False
			await self._save(remaining)
			return True


__all__ = ["LocalCirclesStore"]
