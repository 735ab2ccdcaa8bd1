"""Typed errors surfaced by the gateway and the domain facades.

The error kind is fixed where the failure originates; callers branch on
`exc.kind` (or the subclass) and never on message text.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import httpx


class ErrorKind(str, Enum):
	"""Failure categories the UI distinguishes."""

	AUTH = "auth"
	NOT_FOUND = "not_found"
	SERVER = "server"
	NETWORK = "network"
	CLIENT = "client"
	NOT_IMPLEMENTED = "not_implemented"


class ApiError(Exception):
	"""Base class for client data layer errors."""

	kind: ErrorKind = ErrorKind.CLIENT

	def __init__(
		self,
		message: str,
		*,
		status: Optional[int] = None,
		verb: Optional[str] = None,
		payload: Any = None,
	) -> None:
		super().__init__(message)
		self.message = message
		self.status = status
		self.verb = verb
		self.payload = payload


class AuthenticationError(ApiError):
	kind = ErrorKind.AUTH

	def __init__(self, message: str = "Authentication failed - please log in again", **kwargs: Any) -> None:
		kwargs.setdefault("status", 401)
		super().__init__(message, **kwargs)


class NotFoundError(ApiError):
	kind = ErrorKind.NOT_FOUND


class ServerError(ApiError):
	kind = ErrorKind.SERVER


class NetworkError(ApiError):
	kind = ErrorKind.NETWORK


class ClientError(ApiError):
	kind = ErrorKind.CLIENT


def _server_message(response: httpx.Response) -> Optional[str]:
	try:
		body = response.json()
	except ValueError:
		return None
	if isinstance(body, dict):
		for field in ("message", "error", "detail"):
			value = body.get(field)
			if isinstance(value, str) and value.strip():
				return value.strip()
	return None


def error_from_response(response: httpx.Response, verb: str, action: Optional[str] = None) -> ApiError:
	"""Build the typed error for a non-2xx response.

	The message is ``"Failed to <action>: <server message or status>"``.
	"""
	detail = _server_message(response) or str(response.status_code)
	message = f"Failed to {action or verb}: {detail}"
	status = response.status_code
	if status == 401:
		return AuthenticationError(status=status, verb=verb)
	if status == 404:
		cls: type[ApiError] = NotFoundError
	elif status >= 500:
		cls = ServerError
	else:
		cls = ClientError
	return cls(message, status=status, verb=verb)


@dataclass(frozen=True)
class ErrorDescription:
	kind: ErrorKind
	message: str


_USER_MESSAGES = {
	ErrorKind.AUTH: "Please log in again",
	ErrorKind.NOT_FOUND: "Resource not found",
	ErrorKind.SERVER: "Server error, please try again",
	ErrorKind.NETWORK: "Network error, please check your connection",
	ErrorKind.CLIENT: "Request could not be completed",
	ErrorKind.NOT_IMPLEMENTED: "This feature is not available yet",
}


_NETWORK_FAILURES = (httpx.TransportError, asyncio.TimeoutError, TimeoutError, ConnectionError)


def describe_error(exc: BaseException) -> ErrorDescription:
	"""Map an exception to the user-facing message for its kind.

	Errors that carry an `ErrorKind` (ours and the local domain errors) keep it.
	Only transport failures and timeouts count as network errors; anything
	else is reported as a client-side failure.
	"""
	kind = getattr(exc, "kind", None)
	if not isinstance(kind, ErrorKind):
		kind = ErrorKind.NETWORK if isinstance(exc, _NETWORK_FAILURES) else ErrorKind.CLIENT
	return ErrorDescription(kind=kind, message=_USER_MESSAGES[kind])


__all__ = [
	"ApiError",
	"AuthenticationError",
	"ClientError",
	"ErrorDescription",
	"ErrorKind",
	"NetworkError",
	"NotFoundError",
	"ServerError",
	"describe_error",
	"error_from_response",
]
