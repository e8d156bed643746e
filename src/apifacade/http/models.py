# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP response model returned by adapters and, unmodified, by the façade."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

Headers = dict[str, str]


def _request_of(response: httpx.Response) -> httpx.Request | None:
    try:
        return response.request
    except RuntimeError:
        return None


def _decode_payload(response: httpx.Response) -> Any:
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "").lower()
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


@dataclass
class ApiResponse:
    """Response payload plus the status metadata callers commonly need."""

    data: Any = None
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    url: str | None = None
    method: str | None = None
    raw: httpx.Response | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> ApiResponse:
        """Build from an httpx response; JSON bodies are decoded, others kept as text."""
        request = _request_of(response)
        return cls(
            data=_decode_payload(response),
            status_code=response.status_code,
            headers=dict(response.headers),
            url=str(request.url) if request is not None else None,
            method=request.method if request is not None else None,
            raw=response,
        )
