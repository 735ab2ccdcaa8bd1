"""Domain facades over the application backend."""

from .base import Facade, Listing  # noqa: F401
from .circles import CirclesAPI  # noqa: F401
from .locations import LocationAPI, LocationSharingAPI  # noqa: F401
from .social import FriendRequestsAPI, FriendsAPI, UserSearchAPI  # noqa: F401
