# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP adapter abstraction and factory."""

from __future__ import annotations

from typing import Any, Protocol

from ..config import ApiOptions
from .models import ApiResponse


class HttpAdapter(Protocol):
    """Minimal protocol for issuing one blocking HTTP request per call."""

    def request(self, method: str, url: str, **kwargs: Any) -> ApiResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


class AsyncHttpAdapter(Protocol):
    """Minimal protocol for issuing one awaitable HTTP request per call."""

    async def request(self, method: str, url: str, **kwargs: Any) -> ApiResponse: ...

    async def aclose(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_adapter(options: ApiOptions, *, asynchronous: bool = True) -> HttpAdapter | AsyncHttpAdapter:
    """Factory for the default httpx-backed adapter."""
    from .httpx_client import AsyncHttpxAdapter, HttpxAdapter

    if asynchronous:
        return AsyncHttpxAdapter(options)
    return HttpxAdapter(options)
