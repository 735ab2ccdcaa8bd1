"""Observability package bootstrap."""

from __future__ import annotations

from tracker.obs import logging as obs_logging
from tracker.settings import Settings

_initialised = False


def init(config: Settings) -> None:
	global _initialised
	if _initialised:
		return
	obs_logging.configure_logging(config)
	_initialised = True


__all__ = ["init"]
