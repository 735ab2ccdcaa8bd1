"""Domain-level exceptions for local friend tracking."""

from __future__ import annotations

from tracker.infra.errors import ErrorKind


class SocialError(Exception):
    """Base class for local friend-tracking errors."""

    kind: ErrorKind = ErrorKind.CLIENT
    reason: str = "unknown"

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or self.reason)
        if reason:
            self.reason = reason


class InvalidContact(SocialError):
    reason = "invalid_contact"


class ContactConflict(SocialError):
    reason = "conflict"


class ContactAlreadyTracked(ContactConflict):
    reason = "already_tracking"


class RequestAlreadyPending(ContactConflict):
    reason = "request_pending"


class RequestNotFound(SocialError):
    reason = "not_found"


class CircleInvalid(SocialError):
    reason = "invalid_circle"
