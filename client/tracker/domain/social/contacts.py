"""Contact string validation and classification."""

from __future__ import annotations

import re

from tracker.domain.social.models import ContactType

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^\+?[\d\s\-\(\)]{10,}$")


def validate_contact(contact: str) -> bool:
	contact = (contact or "").strip()
	return bool(_EMAIL_RE.match(contact) or _PHONE_RE.match(contact))


def classify_contact(contact: str) -> ContactType:
	"""Anything that is not an email is treated as a phone number."""
	return ContactType.EMAIL if _EMAIL_RE.match((contact or "").strip()) else ContactType.PHONE


def display_name_for(contact: str, contact_type: ContactType) -> str:
	if contact_type is ContactType.EMAIL:
		local = contact.split("@", 1)[0]
		return re.sub(r"[^a-zA-Z0-9]", "", local) or contact
	return f"Friend {contact[-4:]}"
