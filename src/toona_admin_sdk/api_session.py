from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

import httpx

from .auth_store import AuthStore
from .clients.auth import AuthClient
from .config import ClientConfig
from .events import ErrorChannel
from .fallback import FallbackProvider
from .http_client import HttpClient
from .logging_setup import set_level
from .models import EndpointDescriptor
from .query_controller import ListingEndpoint, QueryController
from .resolver import EntityResolver, group_resolver
from .session import Navigator, SessionGuard
from .validator import EndpointValidator


@dataclass
class ApiSession:
    """Wires one guard, one error channel and one transport for the whole process."""

    config: ClientConfig
    auth_store: AuthStore | None = None
    errors: ErrorChannel = field(default_factory=ErrorChannel)
    navigate: Navigator | None = None
    transport: httpx.AsyncBaseTransport | None = None
    guard: SessionGuard = field(init=False)
    http: HttpClient = field(init=False)
    fallback: FallbackProvider = field(init=False)

    def __post_init__(self) -> None:
        set_level(self.config.log_level)
        self.guard = SessionGuard(
            self.auth_store or AuthStore(),
            login_route=self.config.login_route,
            navigate=self.navigate,
        )
        self.http = HttpClient(config=self.config, guard=self.guard, errors=self.errors, transport=self.transport)
        self.fallback = FallbackProvider(min_search_length=self.config.min_search_length)

    async def __aenter__(self) -> "ApiSession":
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http)

    def group_resolver(self, **kwargs: Any) -> EntityResolver:
        return group_resolver(self.http, **kwargs)

    def listing(self, endpoint: ListingEndpoint, **kwargs: Any) -> QueryController:
        kwargs.setdefault("fallback", self.fallback)
        return QueryController.from_config(self.http, endpoint, **kwargs)

    def endpoint_validator(self, routes: Sequence[EndpointDescriptor] | None = None) -> EndpointValidator:
        return EndpointValidator(self.http, routes, delay_seconds=self.config.validator_delay_seconds)
