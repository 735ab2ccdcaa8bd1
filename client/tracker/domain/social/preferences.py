"""User preferences stored on the device."""

from __future__ import annotations

from tracker.infra.storage import KeyValueStore, StorageKeys


class Preferences:
	def __init__(self, store: KeyValueStore) -> None:
		self.store = store

	async def use_remote_data(self) -> bool:
		"""Local mode is the default until the user opts into backend data."""
		return bool(await self.store.get_json(StorageKeys.USE_REMOTE_DATA, default=False))

	async def set_use_remote_data(self, enabled: bool) -> None:
		await self.store.set_json(StorageKeys.USE_REMOTE_DATA, bool(enabled))


async def clear_all_local_data(store: KeyValueStore) -> None:
	"""Forget tracked friends, pending requests and notifications."""
	await store.multi_remove(StorageKeys.FRIEND_TRACKING)
