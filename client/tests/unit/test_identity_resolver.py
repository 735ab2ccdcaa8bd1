import httpx
import pytest

from tracker.api import CirclesAPI
from tracker.domain.identity import IdentityResolver
from tracker.infra.errors import AuthenticationError
from tracker.infra.storage import StorageKeys

IDENTITY = "https://identity.test/v1"
API = "https://backend.test/api"


@pytest.fixture
def resolver(gateway, store):
    return IdentityResolver(gateway, store)


@pytest.mark.asyncio
async def test_live_account_is_cached(resolver, backend, store):
    backend.on("GET", f"{IDENTITY}/account", body={"$id": "acc-9", "email": "yaw@example.com", "name": "Yaw"})

    assert await resolver.get_current_user_id() == "acc-9"

    cached = await store.get_json(StorageKeys.CURRENT_USER)
    assert cached["$id"] == "acc-9"
    user = await resolver.get_current_user()
    assert user.email == "yaw@example.com"


@pytest.mark.asyncio
async def test_falls_back_to_cache_when_provider_unreachable(resolver, backend, signed_in):
    backend.on("GET", f"{IDENTITY}/account", exc=httpx.ConnectError("offline"))

    assert await resolver.get_current_user_id() == "user-1"
    assert await resolver.is_authenticated() is True


@pytest.mark.asyncio
async def test_no_session_resolves_to_none(resolver, backend):
    backend.on("GET", f"{IDENTITY}/account", exc=httpx.ConnectError("offline"))

    assert await resolver.get_current_user_id() is None
    assert await resolver.is_authenticated() is False


@pytest.mark.asyncio
async def test_401_from_any_facade_logs_the_user_out(resolver, gateway, backend, signed_in):
    backend.on("GET", f"{API}/circles/c1/members", status=401)
    backend.on("GET", f"{IDENTITY}/account", status=401)

    with pytest.raises(AuthenticationError):
        await CirclesAPI(gateway).list_members("c1")

    assert await resolver.is_authenticated() is False
    assert await resolver.get_current_user_id() is None


@pytest.mark.asyncio
async def test_non_success_account_lookup_uses_cache(resolver, backend, signed_in):
    backend.on("GET", f"{IDENTITY}/account", status=503)
    assert await resolver.get_current_user_id() == "user-1"


@pytest.mark.asyncio
async def test_store_session_and_logout(resolver, store, backend):
    backend.on("GET", f"{IDENTITY}/account", exc=httpx.ConnectError("offline"))
    user = await resolver.store_session({"$id": "u-5", "email": "afia@example.com"}, "tok-5", "sess-5")

    assert user.id == "u-5"
    assert await store.get_json(StorageKeys.AUTH_TOKEN) == "tok-5"
    assert await resolver.is_authenticated() is True

    await resolver.logout()
    assert await resolver.is_authenticated() is False
