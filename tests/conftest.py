from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from toona_admin_sdk.auth_store import AuthStore
from toona_admin_sdk.config import ClientConfig
from toona_admin_sdk.events import ErrorChannel, ErrorEvent
from toona_admin_sdk.http_client import HttpClient
from toona_admin_sdk.models import Identity
from toona_admin_sdk.session import SessionGuard

BASE_URL = "http://toona.test"


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL, debounce_ms=0, validator_delay_ms=0)


@pytest.fixture
def auth_store(tmp_path: Path) -> AuthStore:
    return AuthStore(base_dir=tmp_path)


@pytest.fixture
def navigations() -> list[str]:
    return []


@pytest.fixture
def guard(auth_store: AuthStore, navigations: list[str]) -> SessionGuard:
    guard = SessionGuard(auth_store, login_route="#/login", navigate=navigations.append)
    guard.establish("tok-123", Identity(id="42", display_name="Admin Toona", role="SUPER_ADMIN"))
    return guard


@pytest.fixture
def errors() -> ErrorChannel:
    return ErrorChannel()


@pytest.fixture
def events(errors: ErrorChannel) -> list[ErrorEvent]:
    received: list[ErrorEvent] = []
    errors.subscribe(received.append)
    return received


@pytest.fixture
def make_http(config: ClientConfig, guard: SessionGuard, errors: ErrorChannel):
    def _make(handler: Callable, **kwargs) -> HttpClient:
        http = HttpClient(
            config=config,
            guard=guard,
            errors=errors,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )
        return http

    return _make
