"""Facades for friend requests, friends and user search."""

from __future__ import annotations

from typing import Any, Dict, Optional

from tracker.api.base import Facade, Listing
from tracker.api.schemas import FriendCreate, FriendRequestCreate


class FriendRequestsAPI(Facade):
	resource = "friend-requests"

	async def send(self, user_id: str) -> Dict[str, Any]:
		payload = self._payload("send", FriendRequestCreate, user_id=user_id)
		return await self._call("send", "send friend request", self._url(), method="POST", json=payload)

	async def list_pending(self) -> Listing:
		return await self._list("list_pending", "fetch pending requests", self._url("pending"), absent_ok=True)

	async def accept(self, request_id: str) -> Dict[str, Any]:
		return await self._call("accept", "accept friend request", self._url(request_id, "accept"), method="POST")

	async def reject(self, request_id: str) -> Dict[str, Any]:
		return await self._call("reject", "reject friend request", self._url(request_id, "reject"), method="POST")


class FriendsAPI(Facade):
	resource = "friends"

	async def add(
		self,
		name: str,
		contact: str,
		contact_type: str,
		added_by: Optional[str] = None,
	) -> Dict[str, Any]:
		payload = self._payload("add", FriendCreate, name=name, contact=contact, contact_type=contact_type, added_by=added_by)
		return await self._call("add", "add friend", self._url(), method="POST", json=payload)

	async def list_for_user(self, user_id: str) -> Listing:
		return await self._list(
			"list_for_user",
			"fetch friends",
			self._url(),
			params={"userId": user_id},
			envelope=("friends",),
		)

	async def remove(self, friend_id: str) -> Any:
		return await self._call("remove", "remove friend", self._url(friend_id), method="DELETE")


class UserSearchAPI(Facade):
	resource = "users"

	async def search(self, term: str) -> Listing:
		term = (term or "").strip()
		if not term:
			return Listing()
		return await self._list(
			"search",
			"search users",
			self._url("search"),
			params={"q": term},
			envelope=("users",),
			absent_ok=True,
		)

	async def get_profile(self, user_id: str) -> Dict[str, Any]:
		return await self._call("get_profile", "fetch user profile", self._url(user_id))


__all__ = ["FriendRequestsAPI", "FriendsAPI", "UserSearchAPI"]
