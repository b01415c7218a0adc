from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from dotenv import load_dotenv

N = TypeVar("N", int, float)

TRUTHY = {"1", "true", "yes", "on"}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    api_prefix: str = "/api"
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    verify_ssl: bool = True
    debounce_ms: int = 500
    min_search_length: int = 2
    validator_delay_ms: int = 200
    login_route: str = "#/login"
    log_level: str = "INFO"

    @property
    def api_root(self) -> str:
        prefix = self.api_prefix.strip("/")
        base = self.api_base_url.rstrip("/")
        return f"{base}/{prefix}" if prefix else base

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000

    @property
    def validator_delay_seconds(self) -> float:
        return self.validator_delay_ms / 1000


def _env_text(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def _env_number(name: str, default: N, cast: Callable[[str], N], *, minimum: N, strict: bool = False) -> N:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        value = default
    else:
        try:
            value = cast(raw.strip())
        except ValueError as exc:
            kind = "an integer" if cast is int else "a number"
            raise ConfigError(f"Invalid {name}: expected {kind}, got {raw!r}") from exc
    too_small = value <= minimum if strict else value < minimum
    if too_small:
        bound = f"> {minimum}" if strict else f">= {minimum}"
        raise ConfigError(f"Invalid {name}: expected {bound}, got {value}")
    return value


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build the client config from TOONA_* variables, letting an optional .env file fill gaps."""
    load_dotenv(env_file)

    env_name = _env_text("TOONA_ENV", "dev")
    api_base_url = _env_text(f"TOONA_API_BASE_URL_{env_name.upper()}") or _env_text("TOONA_API_BASE_URL")
    if not api_base_url:
        raise ConfigError("Missing required config values: TOONA_API_BASE_URL")

    read_timeout = _env_number("TOONA_TIMEOUT_SECONDS", 15.0, float, minimum=0.0, strict=True)
    connect_timeout = _env_number(
        "TOONA_CONNECT_TIMEOUT_SECONDS", min(read_timeout, 5.0), float, minimum=0.0, strict=True
    )

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        api_prefix=_env_text("TOONA_API_PREFIX", "/api"),
        connect_timeout_seconds=connect_timeout,
        read_timeout_seconds=max(read_timeout, connect_timeout),
        verify_ssl=_env_text("TOONA_VERIFY_SSL", "true").lower() in TRUTHY,
        debounce_ms=_env_number("TOONA_DEBOUNCE_MS", 500, int, minimum=0),
        min_search_length=_env_number("TOONA_MIN_SEARCH_LENGTH", 2, int, minimum=1),
        validator_delay_ms=_env_number("TOONA_VALIDATOR_DELAY_MS", 200, int, minimum=0),
        login_route=_env_text("TOONA_LOGIN_ROUTE", "#/login"),
        log_level=_env_text("TOONA_LOG_LEVEL", "INFO").upper(),
    )
