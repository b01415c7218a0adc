from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir
from pydantic import ValidationError as PydanticValidationError

from .models import Identity, SessionData

TOKEN_KEY = "toona_admin_token"
IDENTITY_KEY = "toona_admin_user"
SESSION_KEYS = (TOKEN_KEY, IDENTITY_KEY)


@dataclass
class AuthStore:
    """Durable two-key store for the bearer token and the serialized identity."""

    app_name: str = "toona"
    filename: str = "session.json"
    base_dir: Path | None = None

    @property
    def path(self) -> Path:
        root = Path(self.base_dir) if self.base_dir else Path(user_data_dir(self.app_name, "Toona"))
        return root / self.filename

    def save(self, session: SessionData) -> None:
        target = self.path
        target.parent.mkdir(parents=True, exist_ok=True)
        record = {TOKEN_KEY: session.token, IDENTITY_KEY: session.identity.model_dump_json()}
        target.write_text(json.dumps(record, indent=2), encoding="utf-8")
        if os.name != "nt":
            target.chmod(0o600)

    def load(self) -> SessionData | None:
        record = self._read()
        if record is None:
            return None
        # token without identity (or the reverse) is not a session
        if not record.get(TOKEN_KEY) or not record.get(IDENTITY_KEY):
            self.clear()
            return None
        try:
            identity = Identity.model_validate_json(record[IDENTITY_KEY])
        except PydanticValidationError:
            self.clear()
            return None
        return SessionData(token=record[TOKEN_KEY], identity=identity)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

    def raw(self) -> dict[str, str]:
        return {key: value for key, value in (self._read() or {}).items() if key in SESSION_KEYS}

    def _read(self) -> dict[str, Any] | None:
        if not self.path.exists():
            return None
        try:
            record = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            self.clear()
            return None
        if not isinstance(record, dict):
            self.clear()
            return None
        return record
