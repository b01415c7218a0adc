import json

import httpx
import pytest

from toona_admin_sdk.auth_store import AuthStore
from toona_admin_sdk.clients import AuthClient
from toona_admin_sdk.exceptions import ResponseParseError, SessionExpiredError
from toona_admin_sdk.session import SessionGuard


async def test_login_establishes_session(make_http, guard, auth_store, tmp_path) -> None:
    guard.logout()
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"token": "fresh", "user": {"id": 3, "nomUser": "Marie Kamga", "roles": ["ADMIN"]}},
        )

    client = AuthClient(http=make_http(handler))

    session = await client.login("secret", email="marie@example.com")

    assert session.token == "fresh"
    assert session.identity.display_name == "Marie Kamga"
    assert json.loads(seen[0].content) == {"password": "secret", "email": "marie@example.com"}
    assert "Authorization" not in seen[0].headers
    assert SessionGuard(AuthStore(base_dir=tmp_path)).token == "fresh"


async def test_login_requires_an_identifier(make_http) -> None:
    client = AuthClient(http=make_http(lambda request: httpx.Response(200, json={})))

    with pytest.raises(ValueError):
        await client.login("secret")


async def test_login_rejects_non_object_body(make_http) -> None:
    client = AuthClient(http=make_http(lambda request: httpx.Response(200, json=["token"])))

    with pytest.raises(ResponseParseError):
        await client.login("secret", numero="699887766")


async def test_me_returns_identity(make_http) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": 42, "prenom": "Admin", "nom": "Toona", "role": "SUPER_ADMIN"})

    identity = await AuthClient(http=make_http(handler)).me()

    assert seen[0].url.path == "/api/user/connecter"
    assert seen[0].headers["Authorization"] == "Bearer tok-123"
    assert identity.id == "42"
    assert identity.display_name == "Admin Toona"


async def test_me_rejects_body_without_identity(make_http) -> None:
    client = AuthClient(http=make_http(lambda request: httpx.Response(200, json={"ok": True})))

    with pytest.raises(ResponseParseError) as caught:
        await client.me()

    assert caught.value.code == "UNEXPECTED_SHAPE"


async def test_login_rejects_body_without_token(make_http, guard) -> None:
    client = AuthClient(http=make_http(lambda request: httpx.Response(200, json={"message": "ok"})))

    with pytest.raises(ResponseParseError):
        await client.login("secret", email="admin@toona.cm")


async def test_me_with_expired_token_ends_session(make_http, guard) -> None:
    client = AuthClient(http=make_http(lambda request: httpx.Response(401, json={"error": "Token expiré"})))

    with pytest.raises(SessionExpiredError):
        await client.me()

    assert guard.is_authenticated() is False


def test_logout_clears_store(make_http, guard, auth_store) -> None:
    client = AuthClient(http=make_http(lambda request: httpx.Response(200, json={})))

    client.logout()

    assert guard.token is None
    assert auth_store.raw() == {}
