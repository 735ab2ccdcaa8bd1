"""Domain models for the local friend-tracking mirror.

Records are persisted as JSON objects with the camelCase keys the mobile
screens read, so `to_record`/`from_record` own the key mapping.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Mapping, Optional


class ContactType(str, Enum):
	EMAIL = "email"
	PHONE = "phone"


class RequestStatus(str, Enum):
	"""Only pending requests are ever persisted; accept/reject remove them."""

	PENDING = "pending"


class Severity(str, Enum):
	INFO = "info"
	SUCCESS = "success"
	WARNING = "warning"
	ERROR = "error"


def _opt_float(value: Any) -> Optional[float]:
	if value is None or value == "":
		return None
	return float(value)


def utcnow_iso() -> str:
	return datetime.now(timezone.utc).isoformat()


class TimeIdFactory:
	"""Millisecond-timestamp identifiers, bumped to stay unique within one process."""

	def __init__(self) -> None:
		self._last = 0

	def __call__(self) -> str:
		candidate = int(time.time() * 1000)
		if candidate <= self._last:
			candidate = self._last + 1
		self._last = candidate
		return str(candidate)


@dataclass(slots=True)
class Friend:
	id: str
	name: str
	contact: str
	is_online: bool = False
	last_active: Optional[str] = None
	latitude: Optional[float] = None
	longitude: Optional[float] = None

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "Friend":
		return cls(
			id=str(record["id"]),
			name=str(record.get("name") or ""),
			contact=str(record.get("contact") or ""),
			is_online=bool(record.get("isOnline", False)),
			last_active=record.get("lastActive") or record.get("time"),
			latitude=_opt_float(record.get("latitude")),
			longitude=_opt_float(record.get("longitude")),
		)

	def to_record(self) -> dict:
		return {
			"id": self.id,
			"name": self.name,
			"contact": self.contact,
			"isOnline": self.is_online,
			"lastActive": self.last_active,
			"latitude": self.latitude,
			"longitude": self.longitude,
		}


@dataclass(slots=True)
class PendingRequest:
	id: str
	contact: str
	contact_type: ContactType
	sent_at: str
	status: RequestStatus = RequestStatus.PENDING

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "PendingRequest":
		return cls(
			id=str(record["id"]),
			contact=str(record["contact"]),
			contact_type=ContactType(record.get("contactType", "phone")),
			sent_at=str(record.get("sentAt") or ""),
			status=RequestStatus(record.get("status", "pending")),
		)

	def to_record(self) -> dict:
		return {
			"id": self.id,
			"contact": self.contact,
			"contactType": self.contact_type.value,
			"sentAt": self.sent_at,
			"status": self.status.value,
		}


@dataclass(slots=True, frozen=True)
class CircleMember:
	"""Snapshot of a friend taken when the circle was created."""

	id: str
	name: str
	contact: Optional[str] = None

	@classmethod
	def snapshot(cls, friend: "Friend | Mapping[str, Any]") -> "CircleMember":
		if isinstance(friend, Friend):
			return cls(id=friend.id, name=friend.name, contact=friend.contact)
		return cls(id=str(friend["id"]), name=str(friend.get("name") or ""), contact=friend.get("contact"))

	def to_record(self) -> dict:
		return {"id": self.id, "name": self.name, "contact": self.contact}


@dataclass(slots=True)
class Circle:
	id: str
	name: str
	description: str = ""
	created_by: Optional[str] = None
	created_at: str = field(default_factory=utcnow_iso)
	members: List[CircleMember] = field(default_factory=list)

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "Circle":
		return cls(
			id=str(record["id"]),
			name=str(record.get("name") or ""),
			description=str(record.get("description") or ""),
			created_by=record.get("createdBy"),
			created_at=str(record.get("createdAt") or ""),
			members=[CircleMember.snapshot(member) for member in record.get("members") or []],
		)

	def to_record(self) -> dict:
		return {
			"id": self.id,
			"name": self.name,
			"description": self.description,
			"createdBy": self.created_by,
			"createdAt": self.created_at,
			"members": [member.to_record() for member in self.members],
		}


@dataclass(slots=True)
class Notification:
	id: str
	message: str
	severity: Severity
	timestamp: str

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "Notification":
		return cls(
			id=str(record["id"]),
			message=str(record.get("message") or ""),
			severity=Severity(record.get("type", "info")),
			timestamp=str(record.get("timestamp") or ""),
		)

	def to_record(self) -> dict:
		return {"id": self.id, "message": self.message, "type": self.severity.value, "timestamp": self.timestamp}
