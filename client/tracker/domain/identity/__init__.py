"""Identity domain exports."""

from .models import User  # noqa: F401
from .resolver import IdentityResolver  # noqa: F401
