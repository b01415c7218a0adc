from __future__ import annotations

import logging
from collections.abc import Callable

from .auth_store import AuthStore
from .logging_setup import get_logger, log_event
from .models import Identity, SessionData

logger = get_logger("toona_admin_sdk.session")

Navigator = Callable[[str], None]


class SessionGuard:
    """Owns the credential. Transport reads it on every call; only this class writes it."""

    def __init__(
        self,
        auth_store: AuthStore | None = None,
        *,
        login_route: str = "#/login",
        navigate: Navigator | None = None,
    ) -> None:
        self.auth_store = auth_store or AuthStore()
        self.login_route = login_route
        self._navigate = navigate
        self._session: SessionData | None = self.auth_store.load()
        self.expired_reason: str | None = None

    @property
    def token(self) -> str | None:
        return self._session.token if self._session else None

    @property
    def identity(self) -> Identity | None:
        return self._session.identity if self._session else None

    def is_authenticated(self) -> bool:
        return self._session is not None

    def establish(self, token: str, identity: Identity) -> SessionData:
        session = SessionData(token=token, identity=identity)
        self._session = session
        self.expired_reason = None
        self.auth_store.save(session)
        log_event(logger, "session", "establish", "success", user_id=identity.id, role=identity.role)
        return session

    def logout(self) -> None:
        self._drop()
        log_event(logger, "session", "logout", "success")

    def expire(self, reason: str) -> None:
        """Forced session death: clear both persisted keys, then go to the login route."""
        self._drop()
        self.expired_reason = reason
        log_event(logger, "session", "expire", "redirect", level=logging.WARNING, reason=reason, route=self.login_route)
        if self._navigate:
            self._navigate(self.login_route)

    def authorization_header(self) -> dict[str, str]:
        token = self.token
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def _drop(self) -> None:
        self._session = None
        self.auth_store.clear()
