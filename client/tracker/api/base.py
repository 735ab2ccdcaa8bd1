"""Shared plumbing for the domain facades."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Type

import httpx
from pydantic import ValidationError

from tracker.api.schemas import RequestPayload
from tracker.infra.errors import ClientError, ErrorKind, error_from_response
from tracker.infra.gateway import Gateway
from tracker.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


class Listing(list):
	"""A list result that remembers whether the backend actually served it.

	An absent endpoint yields an empty listing with ``available`` False, which
	compares equal to ``[]`` but is distinguishable from a truly empty answer.
	"""

	def __init__(self, items: Iterable[Any] = (), *, available: bool = True, reason: Optional[ErrorKind] = None) -> None:
		super().__init__(items)
		self.available = available
		self.reason = reason

	@classmethod
	def unavailable(cls) -> "Listing":
		return cls((), available=False, reason=ErrorKind.NOT_IMPLEMENTED)


def _items(payload: Any, *keys: str) -> list:
	"""Accept either a bare JSON array or an envelope such as ``{"documents": [...]}``."""
	if isinstance(payload, list):
		return payload
	if isinstance(payload, dict):
		for key in keys + ("items", "documents", "data"):
			value = payload.get(key)
			if isinstance(value, list):
				return value
	return []


class Facade:
	"""Base class: build URL, call the gateway, branch on success."""

	resource: str = ""

	def __init__(self, gateway: Gateway) -> None:
		self.gateway = gateway

	def _url(self, *segments: Any) -> str:
		return self.gateway.url(self.resource, *segments)

	def _payload(self, verb: str, model: Type[RequestPayload], **fields: Any) -> dict:
		"""Validate a request body; bad input is a client error, raised before any request."""
		try:
			return model(**fields).to_json()
		except ValidationError as exc:
			first = exc.errors()[0]
			location = ".".join(str(part) for part in first.get("loc", ())) or "payload"
			raise ClientError(
				f"Invalid {location}: {first.get('msg', 'validation failed')}",
				verb=f"{self.resource}.{verb}",
			) from exc

	async def _send(
		self,
		verb: str,
		url: str,
		*,
		method: str = "GET",
		json: Any = None,
		params: Optional[Mapping[str, Any]] = None,
	) -> httpx.Response:
		return await self.gateway.authenticated_fetch(
			url,
			method=method,
			json=json,
			params=params,
			route=f"{self.resource}.{verb}",
		)

	async def _call(
		self,
		verb: str,
		action: str,
		url: str,
		*,
		method: str = "GET",
		json: Any = None,
		params: Optional[Mapping[str, Any]] = None,
	) -> Any:
		response = await self._send(verb, url, method=method, json=json, params=params)
		if not response.is_success:
			raise error_from_response(response, f"{self.resource}.{verb}", action)
		return _parse(response)

	async def _list(
		self,
		verb: str,
		action: str,
		url: str,
		*,
		params: Optional[Mapping[str, Any]] = None,
		envelope: tuple[str, ...] = (),
		absent_ok: bool = False,
	) -> Listing:
		"""GET a collection; with ``absent_ok`` a 404 means the endpoint is not deployed yet."""
		response = await self._send(verb, url, params=params)
		if absent_ok and response.status_code == 404:
			logger.info("endpoint %s.%s absent; returning unavailable listing", self.resource, verb)
			obs_metrics.inc_stub_fallback(f"{self.resource}.{verb}")
			return Listing.unavailable()
		if not response.is_success:
			raise error_from_response(response, f"{self.resource}.{verb}", action)
		return Listing(_items(_parse(response), *envelope))


def _parse(response: httpx.Response) -> Any:
	if not response.content:
		return None
	try:
		return response.json()
	except ValueError:
		return None


__all__ = ["Facade", "Listing"]
