# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed adapter implementations."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import ApiOptions
from .client import AsyncHttpAdapter, HttpAdapter
from .headers import build_auth_header, merge_headers
from .models import ApiResponse

logger = logging.getLogger(__name__)


def build_client_kwargs(options: ApiOptions) -> dict[str, Any]:
    """Keyword arguments shared by the sync and async httpx clients."""
    return {
        "base_url": options.base_path,
        "headers": merge_headers(options.default_headers, build_auth_header(options.auth_type, options.api_key)),
        "timeout": options.timeout_seconds,
    }


class HttpxAdapter(HttpAdapter):
    """Synchronous httpx adapter: one request per call, non-2xx raises."""

    def __init__(self, options: ApiOptions | None = None, client: httpx.Client | None = None):
        self.options = options or ApiOptions()
        self._client = client or httpx.Client(**build_client_kwargs(self.options))

    def request(self, method: str, url: str, **kwargs: Any) -> ApiResponse:
        logger.debug("%s %s", method.upper(), url)
        response = self._client.request(method.upper(), url, **kwargs)
        response.raise_for_status()
        return ApiResponse.from_httpx(response)

    def close(self) -> None:
        self._client.close()


class AsyncHttpxAdapter(AsyncHttpAdapter):
    """Asynchronous httpx adapter: one request per call, non-2xx raises."""

    def __init__(self, options: ApiOptions | None = None, client: httpx.AsyncClient | None = None):
        self.options = options or ApiOptions()
        self._client = client or httpx.AsyncClient(**build_client_kwargs(self.options))

    async def request(self, method: str, url: str, **kwargs: Any) -> ApiResponse:
        logger.debug("%s %s", method.upper(), url)
        response = await self._client.request(method.upper(), url, **kwargs)
        response.raise_for_status()
        return ApiResponse.from_httpx(response)

    async def aclose(self) -> None:
        await self._client.aclose()
