"""Pydantic request payloads sent to the application backend."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestPayload(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	def to_json(self) -> dict:
		return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FriendRequestCreate(RequestPayload):
	user_id: str = Field(..., serialization_alias="userId", min_length=1)


class FriendCreate(RequestPayload):
	name: str = Field(..., min_length=1)
	contact: str = Field(..., min_length=1)
	contact_type: Literal["email", "phone"] = Field(..., serialization_alias="contactType")
	added_by: Optional[str] = Field(default=None, serialization_alias="addedBy")


class CircleMemberPayload(RequestPayload):
	id: str
	name: str
	contact: Optional[str] = None


class CircleCreate(RequestPayload):
	name: str = Field(..., min_length=1)
	description: str = ""
	members: List[CircleMemberPayload] = Field(default_factory=list)


class CircleMembersUpdate(RequestPayload):
	members: List[CircleMemberPayload] = Field(..., min_length=1)


class CircleJoin(RequestPayload):
	code: str = Field(..., min_length=1)


class LocationUpdate(RequestPayload):
	latitude: float = Field(..., ge=-90.0, le=90.0)
	longitude: float = Field(..., ge=-180.0, le=180.0)
	circle_id: Optional[str] = Field(default=None, serialization_alias="circleId")
	timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
