# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Programmable adapters for tests and offline use."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Union

from .client import AsyncHttpAdapter, HttpAdapter
from .models import ApiResponse

Outcome = Union[ApiResponse, BaseException]


@dataclass
class RecordedCall:
    method: str
    url: str
    kwargs: dict[str, Any] = field(default_factory=dict)


class _OutcomeSequence:
    def __init__(self, outcomes: Iterable[Outcome] | None = None):
        self._outcomes: list[Outcome] = list(outcomes or [])
        self.calls: list[RecordedCall] = []

    def add(self, outcome: Outcome) -> None:
        self._outcomes.append(outcome)

    def _next(self, method: str, url: str, kwargs: dict[str, Any]) -> ApiResponse:
        self.calls.append(RecordedCall(method=method.upper(), url=url, kwargs=dict(kwargs)))
        if not self._outcomes:
            raise RuntimeError("No stubbed outcome configured")
        # The last outcome repeats once the sequence is exhausted.
        outcome = self._outcomes[min(len(self.calls) - 1, len(self._outcomes) - 1)]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def call_count(self) -> int:
        return len(self.calls)


class StubAdapter(_OutcomeSequence, HttpAdapter):
    """Deterministic, programmable HttpAdapter for tests."""

    def request(self, method: str, url: str, **kwargs: Any) -> ApiResponse:
        return self._next(method, url, kwargs)

    def close(self) -> None:
        return None


class AsyncStubAdapter(_OutcomeSequence, AsyncHttpAdapter):
    """Deterministic, programmable AsyncHttpAdapter for tests."""

    async def request(self, method: str, url: str, **kwargs: Any) -> ApiResponse:
        return self._next(method, url, kwargs)

    async def aclose(self) -> None:
        return None
