# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP adapter exports."""

from .adapters import AsyncStubAdapter, RecordedCall, StubAdapter
from .client import AsyncHttpAdapter, HttpAdapter, create_default_adapter
from .headers import build_auth_header, merge_headers
from .httpx_client import AsyncHttpxAdapter, HttpxAdapter, build_client_kwargs
from .models import ApiResponse, Headers

__all__ = [
    "ApiResponse",
    "AsyncHttpAdapter",
    "AsyncHttpxAdapter",
    "AsyncStubAdapter",
    "Headers",
    "HttpAdapter",
    "HttpxAdapter",
    "RecordedCall",
    "StubAdapter",
    "build_auth_header",
    "build_client_kwargs",
    "create_default_adapter",
    "merge_headers",
]
