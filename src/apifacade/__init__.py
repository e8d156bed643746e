# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
apifacade package entrypoint.

A thin request façade over an httpx-backed adapter. Every verb call goes
through one wrapper that tracks a shared loading flag, retries failures
immediately a bounded number of times, and caches the last received payload.
"""

from .config import ApiOptions, AuthScheme, load_options, merge_options
from .errors import ApiFacadeError, ErrorCategory, FeatureDisabledError, categorize_exception
from .facade import ApiFacade, SyncApiFacade, install
from .http import (
    ApiResponse,
    AsyncHttpAdapter,
    AsyncHttpxAdapter,
    HttpAdapter,
    HttpxAdapter,
    build_auth_header,
    create_default_adapter,
)
from .log import setup_logging
from .state import SharedState
from .version import __version__

__all__ = [
    "ApiFacade",
    "ApiFacadeError",
    "ApiOptions",
    "ApiResponse",
    "AsyncHttpAdapter",
    "AsyncHttpxAdapter",
    "AuthScheme",
    "ErrorCategory",
    "FeatureDisabledError",
    "HttpAdapter",
    "HttpxAdapter",
    "SharedState",
    "SyncApiFacade",
    "build_auth_header",
    "categorize_exception",
    "create_default_adapter",
    "install",
    "load_options",
    "merge_options",
    "setup_logging",
    "__version__",
]
