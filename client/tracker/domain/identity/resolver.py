"""Resolve the signed-in user, live first and from the local cache second."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from tracker.domain.identity.models import User
from tracker.infra.errors import ApiError
from tracker.infra.gateway import Gateway
from tracker.infra.storage import KeyValueStore, StorageKeys

logger = logging.getLogger(__name__)


class IdentityResolver:
	"""Never raises: a missing identity is the normal logged-out state."""

	def __init__(self, gateway: Gateway, store: KeyValueStore) -> None:
		self.gateway = gateway
		self.store = store

	async def _fetch_account(self) -> Optional[Dict[str, Any]]:
		response = await self.gateway.authenticated_fetch(
			self.gateway.identity_url("account"),
			route="identity.account",
		)
		if not response.is_success:
			logger.info("account lookup returned status=%s", response.status_code)
			return None
		payload = response.json()
		if not isinstance(payload, dict):
			return None
		await self.store.set_json(StorageKeys.CURRENT_USER, payload)
		return payload

	async def _cached_account(self) -> Optional[Dict[str, Any]]:
		try:
			cached = await self.store.get_json(StorageKeys.CURRENT_USER)
		except Exception:
			logger.warning("reading cached account failed", exc_info=True)
			return None
		return cached if isinstance(cached, dict) else None

	async def _resolve(self) -> Optional[Dict[str, Any]]:
		try:
			account = await self._fetch_account()
		except ApiError as exc:
			logger.warning("account lookup failed kind=%s: %s", exc.kind.value, exc.message)
			account = None
		except Exception:
			logger.warning("account lookup failed", exc_info=True)
			account = None
		if account is not None:
			return account
		return await self._cached_account()

	async def get_current_user(self) -> Optional[User]:
		account = await self._resolve()
		if not account:
			return None
		return User.from_record(account)

	async def get_current_user_id(self) -> Optional[str]:
		user = await self.get_current_user()
		return user.id if user else None

	async def is_authenticated(self) -> bool:
		return await self.get_current_user_id() is not None

	async def store_session(self, account: Dict[str, Any], token: str, session_id: Optional[str] = None) -> Optional[User]:
		"""Persist the identity returned by a login or signup."""
		await self.store.set_json(StorageKeys.CURRENT_USER, account)
		await self.store.set_json(StorageKeys.AUTH_TOKEN, token)
		if session_id:
			await self.store.set_json(StorageKeys.SESSION_ID, session_id)
		return User.from_record(account)

	async def logout(self) -> None:
		await self.store.multi_remove(StorageKeys.IDENTITY)


__all__ = ["IdentityResolver"]
