from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ResponseParseError
from ..models import Identity, LoginResponse, SessionData
from .base import BaseClient


class AuthClient(BaseClient):
    async def login(self, password: str, *, numero: str | None = None, email: str | None = None) -> SessionData:
        if not numero and not email:
            raise ValueError("login needs a phone number or an email")
        payload = {"password": password}
        if numero:
            payload["numero"] = numero
        if email:
            payload["email"] = email
        data = await self._request("POST", "/auth", json_body=payload)
        if not isinstance(data, dict):
            raise ResponseParseError(code="UNEXPECTED_SHAPE", message="Expected login response to be a JSON object", body=data, path="/auth")
        try:
            token = LoginResponse.model_validate(data)
        except PydanticValidationError as exc:
            raise ResponseParseError(code="UNEXPECTED_SHAPE", message="Login response has no token or user", body=data, path="/auth") from exc
        return self.http.guard.establish(token.token, token.user)

    async def me(self) -> Identity:
        data = await self._request("GET", "/user/connecter")
        try:
            return Identity.model_validate(data)
        except PydanticValidationError as exc:
            raise ResponseParseError(
                code="UNEXPECTED_SHAPE",
                message="Current user response is not an identity",
                body=data,
                path="/user/connecter",
            ) from exc

    def logout(self) -> None:
        self.http.guard.logout()
