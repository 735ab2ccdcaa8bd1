"""Authenticated request gateway.

All outbound HTTP goes through `Gateway.authenticated_fetch`. It attaches the
project and bearer headers, turns transport failures into `NetworkError`, and
on a 401 drops the cached identity before raising `AuthenticationError`.
Every other status is handed back untouched for the facade to interpret.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import httpx

from tracker.infra.errors import AuthenticationError, NetworkError
from tracker.infra.storage import KeyValueStore, StorageKeys
from tracker.obs import logging as obs_logging
from tracker.obs import metrics as obs_metrics
from tracker.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackendStatus:
	status: str
	message: str


@dataclass(frozen=True)
class BackendInfo:
	base_url: str
	endpoints: Dict[str, str] = field(default_factory=dict)


class Gateway:
	"""Thin wrapper around an `httpx.AsyncClient` bound to one backend."""

	def __init__(self, config: Settings, store: KeyValueStore, http: httpx.AsyncClient) -> None:
		self.config = config
		self.store = store
		self.http = http

	def url(self, *segments: Any) -> str:
		"""Join path segments onto the application backend base URL."""
		path = "/".join(str(segment).strip("/") for segment in segments)
		return f"{self.config.api_base_url}/{path}"

	def identity_url(self, *segments: Any) -> str:
		path = "/".join(str(segment).strip("/") for segment in segments)
		return f"{self.config.identity_base_url}/{path}"

	async def _headers(self, extra: Optional[Mapping[str, str]]) -> Dict[str, str]:
		headers: Dict[str, str] = dict(extra or {})
		headers["X-Appwrite-Project"] = self.config.project_id
		headers["Content-Type"] = "application/json"
		token = await self.store.get_json(StorageKeys.AUTH_TOKEN)
		if token and "Authorization" not in headers:
			headers["Authorization"] = f"Bearer {token}"
		return headers

	async def invalidate_identity(self) -> None:
		await self.store.multi_remove(StorageKeys.IDENTITY)
		obs_metrics.inc_auth_invalidation()

	async def authenticated_fetch(
		self,
		url: str,
		*,
		method: str = "GET",
		json: Any = None,
		params: Optional[Mapping[str, Any]] = None,
		headers: Optional[Mapping[str, str]] = None,
		route: Optional[str] = None,
	) -> httpx.Response:
		route_label = route or "unlabelled"
		request_id = uuid.uuid4().hex
		tokens = obs_logging.bind_context(request_id=request_id, route=route_label)
		try:
			request_headers = await self._headers(headers)
			request_headers.setdefault("X-Request-Id", request_id)
			return await self._dispatch(url, method, json, params, request_headers, route)
		finally:
			obs_logging.reset_context(tokens)

	async def _dispatch(
		self,
		url: str,
		method: str,
		json: Any,
		params: Optional[Mapping[str, Any]],
		headers: Dict[str, str],
		route: Optional[str],
	) -> httpx.Response:
		route_label = route or "unlabelled"
		started = time.perf_counter()
		try:
			response = await self.http.request(
				method,
				url,
				json=json,
				params=params,
				headers=headers,
				timeout=self.config.request_timeout_seconds,
			)
		except httpx.TransportError as exc:
			obs_metrics.observe_request(route_label, method, "error", time.perf_counter() - started)
			logger.error("request failed method=%s: %s", method, exc)
			raise NetworkError(str(exc) or exc.__class__.__name__, verb=route) from exc

		obs_metrics.observe_request(route_label, method, response.status_code, time.perf_counter() - started)
		if response.status_code == 401:
			logger.warning("authentication rejected; clearing cached identity")
			await self.invalidate_identity()
			raise AuthenticationError(verb=route)
		return response

	async def check_backend_status(self) -> BackendStatus:
		"""Unauthenticated probe of the backend health endpoint."""
		try:
			response = await self.http.get(
				self.url("health"),
				headers={"Content-Type": "application/json"},
				timeout=self.config.request_timeout_seconds,
			)
		except httpx.TransportError:
			return BackendStatus(status="offline", message="Backend is not accessible. Please check if the server is running.")
		if response.is_success:
			return BackendStatus(status="online", message="Backend is running")
		return BackendStatus(status="error", message=f"Backend responded with {response.status_code}")

	def backend_info(self) -> BackendInfo:
		names = {
			"health": "health",
			"auth": "auth",
			"users": "users",
			"friends": "friends",
			"locations": "locations",
			"circles": "circles",
			"friendRequests": "friend-requests",
			"locationSharing": "location-sharing",
		}
		return BackendInfo(
			base_url=self.config.api_base_url,
			endpoints={name: self.url(path) for name, path in names.items()},
		)


__all__ = ["BackendInfo", "BackendStatus", "Gateway"]
