"""Identity models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(slots=True)
class User:
	"""The signed-in account as reported by the identity provider."""

	id: str
	email: Optional[str] = None
	name: Optional[str] = None

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> Optional["User"]:
		user_id = record.get("$id") or record.get("id")
		if not user_id:
			return None
		return cls(
			id=str(user_id),
			email=record.get("email") or None,
			name=record.get("name") or None,
		)
