"""Local friend-tracking domain exports."""

from .circles import LocalCirclesStore  # noqa: F401
from .contacts import classify_contact, validate_contact  # noqa: F401
from .geo import random_nearby_coords  # noqa: F401
from .mirror import FriendsMirror  # noqa: F401
from .models import (  # noqa: F401
	Circle,
	CircleMember,
	ContactType,
	Friend,
	Notification,
	PendingRequest,
	Severity,
)
from .notifications import NotificationCenter  # noqa: F401
from .preferences import Preferences, clear_all_local_data  # noqa: F401
from .requests import PendingRequestsMirror  # noqa: F401
