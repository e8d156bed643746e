# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ApiFacadeError(Exception):
    """Base class for errors raised by apifacade itself (never by the transport)."""


class FeatureDisabledError(ApiFacadeError):
    """Raised when reading shared state whose tracking option was disabled at install time."""

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"The {option} option is disabled")


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    HTTP_STATUS = "HTTP_STATUS"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def _exception_chain(exc: BaseException, limit: int = 8):
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen and len(seen) < limit:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.HTTPStatusError):
        return ErrorCategory.HTTP_STATUS

    # httpx wraps TLS and DNS failures in ConnectError; look down the cause chain first.
    chain = list(_exception_chain(exc))
    if any(isinstance(item, (ssl_module.SSLError, ssl_module.CertificateError)) for item in chain):
        return ErrorCategory.SSL_ERROR

    if any(isinstance(item, (socket.gaierror, socket.herror)) for item in chain):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def describe_exception(exc: BaseException) -> str:
    """Short human-readable description used in retry logs and the CLI."""
    category = categorize_exception(exc)
    if category is ErrorCategory.HTTP_STATUS:
        response = getattr(exc, "response", None)
        status = getattr(response, "status_code", None)
        return f"HTTP {status}" if status is not None else "HTTP error"
    detail = str(exc) or type(exc).__name__
    return f"{category.value}: {detail}"


__all__ = [
    "ApiFacadeError",
    "ErrorCategory",
    "FeatureDisabledError",
    "categorize_exception",
    "describe_exception",
]
