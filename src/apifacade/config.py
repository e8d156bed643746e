# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for apifacade."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any

DEFAULT_HEADERS: dict[str, str] = {"Content-type": "application/json"}


class AuthScheme(str, Enum):
    NONE = "none"
    KEY = "key"
    BEARER = "bearer"

    @classmethod
    def parse(cls, value: AuthScheme | str | None) -> AuthScheme:
        """Accept an enum member or a scheme name in any casing."""
        if isinstance(value, AuthScheme):
            return value
        if value is None or not str(value).strip():
            return cls.NONE
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown auth scheme: {value!r}") from None


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ApiOptions:
    """Install-time options for the request façade. Timeout is in milliseconds; 0 disables it."""

    base_path: str = ""
    api_key: str = ""
    auth_type: AuthScheme = AuthScheme.NONE
    default_headers: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS), hash=False)
    store_last_data_pulled: bool = True
    store_loading_state: bool = True
    timeout: int = 10000
    retry: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "auth_type", AuthScheme.parse(self.auth_type))
        object.__setattr__(self, "default_headers", dict(self.default_headers or {}))
        if self.retry < 0:
            raise ValueError(f"retry must be >= 0, got {self.retry}")
        if self.timeout < 0:
            raise ValueError(f"timeout must be >= 0 ms, got {self.timeout}")

    @property
    def timeout_seconds(self) -> float | None:
        return self.timeout / 1000.0 if self.timeout else None

    @classmethod
    def from_env(cls) -> ApiOptions:
        """Create options from environment variables (evaluated at call time)."""
        defaults = cls()
        retry = _int_env("APIFACADE_RETRY", defaults.retry)
        timeout = _int_env("APIFACADE_TIMEOUT_MS", defaults.timeout)
        try:
            auth_type = AuthScheme.parse(os.getenv("APIFACADE_AUTH_TYPE", defaults.auth_type.value))
        except ValueError:
            auth_type = defaults.auth_type
        return cls(
            base_path=os.getenv("APIFACADE_BASE_PATH", defaults.base_path),
            api_key=os.getenv("APIFACADE_API_KEY", defaults.api_key),
            auth_type=auth_type,
            store_last_data_pulled=_bool_env("APIFACADE_STORE_LAST_DATA", defaults.store_last_data_pulled),
            store_loading_state=_bool_env("APIFACADE_STORE_LOADING", defaults.store_loading_state),
            timeout=timeout if timeout >= 0 else defaults.timeout,
            retry=retry if retry >= 0 else defaults.retry,
        )


def merge_options(base: ApiOptions | None = None, **overrides: Any) -> ApiOptions:
    """
    Layer keyword overrides onto `base` (or the defaults).

    None-valued overrides are ignored so optional flags can be passed straight through.
    """
    known = {f.name for f in fields(ApiOptions)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise TypeError(f"Unknown option(s): {', '.join(unknown)}")
    filtered = {key: value for key, value in overrides.items() if value is not None}
    current = base or ApiOptions()
    return replace(current, **filtered) if filtered else current


def load_options() -> ApiOptions:
    """Load options from environment with sensible defaults."""
    return ApiOptions.from_env()


__all__ = ["DEFAULT_HEADERS", "ApiOptions", "AuthScheme", "load_options", "merge_options"]
