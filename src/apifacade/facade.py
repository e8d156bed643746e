# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request façade: loading tracking, immediate retry and last-payload caching around an adapter."""

from __future__ import annotations

import logging
from contextlib import suppress
from typing import Any

from .config import ApiOptions, merge_options
from .errors import describe_exception
from .http.client import AsyncHttpAdapter, HttpAdapter, create_default_adapter
from .http.models import ApiResponse
from .state import SharedState

logger = logging.getLogger(__name__)


def _log_retry(method: str, attempts: int, retry: int, exc: Exception) -> None:
    logger.warning("%s failed (%s); retrying (%d/%d)", method, describe_exception(exc), attempts, retry)


def _log_final_failure(method: str, attempts: int, exc: Exception) -> None:
    logger.warning("%s failed after %d attempt(s): %s", method, attempts + 1, describe_exception(exc))


def _log_success(method: str, attempts: int) -> None:
    if attempts:
        logger.info("%s succeeded after %d retr%s", method, attempts, "y" if attempts == 1 else "ies")


class _FacadeBase:
    """Accessors shared by the async and threaded façades."""

    def __init__(self, options: ApiOptions, state: SharedState | None = None):
        self.options = options
        self.state = state or SharedState(options)

    @property
    def last_data_pulled(self) -> Any:
        """Payload of the most recent successful call; raises FeatureDisabledError when caching is off."""
        return self.state.last_data_pulled

    @property
    def is_loading(self) -> bool:
        """Shared loading flag; raises FeatureDisabledError when tracking is off."""
        return self.state.is_loading

    @property
    def in_flight(self) -> int:
        """Number of wrapper invocations that have not yet returned or raised."""
        return self.state.in_flight

    # camelCase aliases for UI-binding code
    @property
    def lastDataPulled(self) -> Any:  # noqa: N802
        return self.last_data_pulled

    @property
    def isLoading(self) -> bool:  # noqa: N802
        return self.is_loading


class ApiFacade(_FacadeBase):
    """
    Façade for asyncio callers.

    Each verb forwards its arguments unchanged to the adapter, retrying immediately
    up to `options.retry` extra times. The adapter's response is returned as-is and
    the final failure is re-raised as-is.
    """

    def __init__(
        self,
        options: ApiOptions | None = None,
        adapter: AsyncHttpAdapter | None = None,
        state: SharedState | None = None,
    ):
        options = options or ApiOptions()
        super().__init__(options, state)
        self.adapter = adapter or create_default_adapter(options, asynchronous=True)

    async def request(self, method: str, *args: Any, **kwargs: Any) -> ApiResponse:
        verb = method.upper()
        self.state.begin()
        try:
            attempts = 0
            while True:
                try:
                    response = await self.adapter.request(verb, *args, **kwargs)
                except Exception as exc:
                    if attempts < self.options.retry:
                        attempts += 1
                        _log_retry(verb, attempts, self.options.retry, exc)
                        continue
                    _log_final_failure(verb, attempts, exc)
                    raise
                finally:
                    self.state.end_attempt()
                if self.options.store_last_data_pulled:
                    self.state.record(response.data)
                _log_success(verb, attempts)
                return response
        finally:
            self.state.finish()

    async def get(self, *args: Any, **kwargs: Any) -> ApiResponse:
        return await self.request("GET", *args, **kwargs)

    async def post(self, *args: Any, **kwargs: Any) -> ApiResponse:
        return await self.request("POST", *args, **kwargs)

    async def put(self, *args: Any, **kwargs: Any) -> ApiResponse:
        return await self.request("PUT", *args, **kwargs)

    async def delete(self, *args: Any, **kwargs: Any) -> ApiResponse:
        return await self.request("DELETE", *args, **kwargs)

    async def patch(self, *args: Any, **kwargs: Any) -> ApiResponse:
        return await self.request("PATCH", *args, **kwargs)

    async def aclose(self) -> None:
        with suppress(Exception):
            if hasattr(self.adapter, "aclose"):
                await self.adapter.aclose()

    async def __aenter__(self) -> ApiFacade:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


class SyncApiFacade(_FacadeBase):
    """Blocking façade with the same retry and state semantics; safe to share across threads."""

    def __init__(
        self,
        options: ApiOptions | None = None,
        adapter: HttpAdapter | None = None,
        state: SharedState | None = None,
    ):
        options = options or ApiOptions()
        super().__init__(options, state)
        self.adapter = adapter or create_default_adapter(options, asynchronous=False)

    def request(self, method: str, *args: Any, **kwargs: Any) -> ApiResponse:
        verb = method.upper()
        self.state.begin()
        try:
            attempts = 0
            while True:
                try:
                    response = self.adapter.request(verb, *args, **kwargs)
                except Exception as exc:
                    if attempts < self.options.retry:
                        attempts += 1
                        _log_retry(verb, attempts, self.options.retry, exc)
                        continue
                    _log_final_failure(verb, attempts, exc)
                    raise
                finally:
                    self.state.end_attempt()
                if self.options.store_last_data_pulled:
                    self.state.record(response.data)
                _log_success(verb, attempts)
                return response
        finally:
            self.state.finish()

    def get(self, *args: Any, **kwargs: Any) -> ApiResponse:
        return self.request("GET", *args, **kwargs)

    def post(self, *args: Any, **kwargs: Any) -> ApiResponse:
        return self.request("POST", *args, **kwargs)

    def put(self, *args: Any, **kwargs: Any) -> ApiResponse:
        return self.request("PUT", *args, **kwargs)

    def delete(self, *args: Any, **kwargs: Any) -> ApiResponse:
        return self.request("DELETE", *args, **kwargs)

    def patch(self, *args: Any, **kwargs: Any) -> ApiResponse:
        return self.request("PATCH", *args, **kwargs)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.adapter, "close"):
                self.adapter.close()

    def __enter__(self) -> SyncApiFacade:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


def install(
    app: Any = None,
    *,
    adapter: AsyncHttpAdapter | HttpAdapter | None = None,
    asynchronous: bool = True,
    options: ApiOptions | None = None,
    **overrides: Any,
) -> ApiFacade | SyncApiFacade:
    """
    Build a façade from merged options and attach it to `app`.

    Hosts with a `state` namespace (Starlette/FastAPI) get `app.state.api`; any other
    host object gets `app.api`. Passing no app just returns the façade.
    """
    merged = merge_options(options, **overrides)
    facade: ApiFacade | SyncApiFacade
    if asynchronous:
        facade = ApiFacade(merged, adapter=adapter)  # type: ignore[arg-type]
    else:
        facade = SyncApiFacade(merged, adapter=adapter)  # type: ignore[arg-type]

    if app is not None:
        target = getattr(app, "state", None)
        setattr(target if target is not None else app, "api", facade)
        logger.debug("Installed %s on %s", type(facade).__name__, type(app).__name__)
    return facade


__all__ = ["ApiFacade", "SyncApiFacade", "install"]
