"""Cancellable timers for polling loops and delayed callbacks."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Awaitable, Callable, Dict, Optional, TypeVar

from tracker.infra.errors import NetworkError

logger = logging.getLogger(__name__)

Callback = Callable[[], Awaitable[None]]
T = TypeVar("T")


class PeriodicTask:
	"""Run `callback` every `interval` seconds until cancelled."""

	def __init__(self, name: str, interval: float, callback: Callback) -> None:
		self.name = name
		self.interval = max(0.01, float(interval))
		self.callback = callback
		self._task: Optional[asyncio.Task] = None

	@property
	def running(self) -> bool:
		return self._task is not None and not self._task.done()

	def start(self) -> "PeriodicTask":
		if not self.running:
			self._task = asyncio.create_task(self._loop(), name=f"poll:{self.name}")
		return self

	async def cancel(self) -> None:
		task = self._task
		self._task = None
		if task is None:
			return
		task.cancel()
		with suppress(asyncio.CancelledError):
			await task

	async def _loop(self) -> None:
		while True:
			await asyncio.sleep(self.interval)
			try:
				await self.callback()
			except asyncio.CancelledError:
				raise
			except Exception:
				logger.exception("periodic task %s iteration failed", self.name)


class Scheduler:
	"""Registry of named timers so a screen can tear all of them down at once."""

	def __init__(self) -> None:
		self._periodic: Dict[str, PeriodicTask] = {}
		self._delayed: Dict[str, asyncio.Task] = {}

	def every(self, name: str, interval: float, callback: Callback) -> PeriodicTask:
		existing = self._periodic.get(name)
		if existing and existing.running:
			return existing
		task = PeriodicTask(name, interval, callback).start()
		self._periodic[name] = task
		return task

	def later(self, name: str, delay: float, callback: Callback) -> asyncio.Task:
		"""Schedule a one-shot callback; rescheduling a name replaces the old timer."""
		previous = self._delayed.pop(name, None)
		if previous is not None:
			previous.cancel()

		async def _run() -> None:
			try:
				await asyncio.sleep(max(0.0, delay))
				await callback()
			except asyncio.CancelledError:
				raise
			except Exception:
				logger.exception("delayed task %s failed", name)
			finally:
				if self._delayed.get(name) is task:
					self._delayed.pop(name, None)

		task = asyncio.create_task(_run(), name=f"later:{name}")
		self._delayed[name] = task
		return task

	def is_scheduled(self, name: str) -> bool:
		periodic = self._periodic.get(name)
		if periodic is not None and periodic.running:
			return True
		delayed = self._delayed.get(name)
		return delayed is not None and not delayed.done()

	async def cancel(self, name: str) -> None:
		periodic = self._periodic.pop(name, None)
		if periodic is not None:
			await periodic.cancel()
		delayed = self._delayed.pop(name, None)
		if delayed is not None:
			delayed.cancel()
			with suppress(asyncio.CancelledError):
				await delayed

	async def shutdown(self) -> None:
		"""Cancel every timer (used on teardown/tests)."""
		periodic = list(self._periodic.values())
		delayed = list(self._delayed.values())
		self._periodic.clear()
		self._delayed.clear()
		for task in periodic:
			await task.cancel()
		for task in delayed:
			task.cancel()
		for task in delayed:
			with suppress(asyncio.CancelledError):
				await task


async def with_timeout(awaitable: Awaitable[T], seconds: float, *, label: str = "operation") -> T:
	"""Race an awaitable against a fixed timeout."""
	try:
		return await asyncio.wait_for(awaitable, timeout=seconds)
	except asyncio.TimeoutError as exc:
		raise NetworkError(f"{label} timeout", verb=label) from exc


__all__ = ["PeriodicTask", "Scheduler", "with_timeout"]
