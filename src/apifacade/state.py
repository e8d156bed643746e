# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Shared state owned by one installed façade.

`is_loading` and `last_data_pulled` are single fields shared by every call made
through the façade, not per-request values. Overlapping calls race on them: an
early attempt of one call can clear `is_loading` while another call is still
waiting on the network, and whichever call finishes last owns
`last_data_pulled`. `in_flight` counts whole invocations and is the reliable
signal when calls overlap.
"""

from __future__ import annotations

import threading
from typing import Any

from .config import ApiOptions
from .errors import FeatureDisabledError


class SharedState:
    """Mutable fields behind the façade; every write is taken under a lock."""

    def __init__(self, options: ApiOptions):
        self.options = options
        self._lock = threading.Lock()
        self._last_data_pulled: Any = None
        self._is_loading = False
        self._in_flight = 0

    @property
    def last_data_pulled(self) -> Any:
        if not self.options.store_last_data_pulled:
            raise FeatureDisabledError("store_last_data_pulled")
        return self._last_data_pulled

    @property
    def is_loading(self) -> bool:
        if not self.options.store_loading_state:
            raise FeatureDisabledError("store_loading_state")
        return self._is_loading

    @property
    def in_flight(self) -> int:
        return self._in_flight

    def begin(self) -> None:
        """Mark the start of one wrapper invocation."""
        with self._lock:
            self._in_flight += 1
            if self.options.store_loading_state:
                self._is_loading = True

    def record(self, data: Any) -> None:
        """Cache the payload of a successful attempt."""
        if not self.options.store_last_data_pulled:
            return
        with self._lock:
            self._last_data_pulled = data

    def end_attempt(self) -> None:
        """Cleanup after every attempt, including ones that will be retried."""
        if not self.options.store_loading_state:
            return
        with self._lock:
            self._is_loading = False

    def finish(self) -> None:
        """Mark the end of one wrapper invocation."""
        with self._lock:
            self._in_flight = max(0, self._in_flight - 1)


__all__ = ["SharedState"]
