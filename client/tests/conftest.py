import json
import sys
from pathlib import Path
from typing import Callable, List

import httpx
import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis

# Ensure the client package is importable when tests run from repo root
CLIENT_ROOT = Path(__file__).resolve().parents[1]
if str(CLIENT_ROOT) not in sys.path:
	sys.path.insert(0, str(CLIENT_ROOT))

from tracker.infra.gateway import Gateway
from tracker.infra.scheduler import Scheduler
from tracker.infra.storage import KeyValueStore, StorageKeys
from tracker.settings import Settings

API = "https://backend.test/api"
IDENTITY = "https://identity.test/v1"


@pytest_asyncio.fixture(autouse=True)
async def fake_redis():
	from tracker.infra.redis import redis_client, set_redis_client
	original = redis_client.client
	client = FakeRedis(decode_responses=True)
	set_redis_client(client)
	try:
		yield client
	finally:
		set_redis_client(original)
		await client.flushall()


@pytest.fixture
def test_settings():
	return Settings().model_copy(
		update={
			"api_base_url": API,
			"identity_base_url": IDENTITY,
			"project_id": "proj-test",
			"request_timeout_seconds": 2.0,
			"environment": "test",
			"notification_ttl_seconds": 0.05,
			"poll_requests_seconds": 0.02,
		}
	)


@pytest.fixture
def store():
	return KeyValueStore()


@pytest_asyncio.fixture
async def scheduler():
	sched = Scheduler()
	try:
		yield sched
	finally:
		await sched.shutdown()


class Backend:
	"""Scriptable backend behind an httpx.MockTransport; records every request."""

	def __init__(self) -> None:
		self.requests: List[httpx.Request] = []
		self.routes: dict = {}
		self.fallback: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(404, json={"message": "no route"})

	def on(self, method: str, url: str, status: int = 200, body=None, exc: Exception | None = None):
		self.routes[(method.upper(), url)] = (status, body, exc)
		return self

	def handler(self, request: httpx.Request) -> httpx.Response:
		self.requests.append(request)
		key = (request.method, f"{request.url.scheme}://{request.url.host}{request.url.path}")
		if key not in self.routes:
			return self.fallback(request)
		status, body, exc = self.routes[key]
		if exc is not None:
			raise exc
		if body is None:
			return httpx.Response(status)
		return httpx.Response(status, json=body)

	@property
	def last(self) -> httpx.Request:
		return self.requests[-1]

	def last_json(self):
		return json.loads(self.last.content)


@pytest.fixture
def backend():
	return Backend()


@pytest_asyncio.fixture
async def http(backend):
	async with httpx.AsyncClient(transport=httpx.MockTransport(backend.handler)) as client:
		yield client


@pytest.fixture
def gateway(test_settings, store, http):
	return Gateway(test_settings, store, http)


@pytest_asyncio.fixture
async def signed_in(store):
	await store.set_json(StorageKeys.CURRENT_USER, {"$id": "user-1", "email": "ama@example.com", "name": "Ama"})
	await store.set_json(StorageKeys.AUTH_TOKEN, "tok-123")
	await store.set_json(StorageKeys.SESSION_ID, "sess-1")
	return "user-1"
