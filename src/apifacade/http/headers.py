# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header construction utilities.

HTTP header field names are case-insensitive (RFC 9110), so merging a caller's
`content-type` over the default `Content-type` must replace rather than duplicate it.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..config import AuthScheme


def build_auth_header(scheme: AuthScheme | str | None, credential: str | None) -> dict[str, str]:
    """Return the Authorization header for `scheme`, or an empty dict for `none`."""
    resolved = AuthScheme.parse(scheme)
    value = credential or ""
    if resolved is AuthScheme.KEY:
        return {"Authorization": f"key={value}"}
    if resolved is AuthScheme.BEARER:
        return {"Authorization": f"Bearer {value}"}
    return {}


def merge_headers(*mappings: Mapping[str, str] | None) -> dict[str, str]:
    """
    Merge header mappings left to right.

    A later name replaces an earlier one regardless of casing; the later casing wins.
    """
    merged: dict[str, str] = {}
    names: dict[str, str] = {}
    for mapping in mappings:
        if not mapping:
            continue
        for key, value in mapping.items():
            if key is None:
                continue
            name = str(key).strip()
            if not name:
                continue
            lower = name.lower()
            previous = names.get(lower)
            if previous is not None and previous != name:
                merged.pop(previous, None)
            names[lower] = name
            merged[name] = "" if value is None else str(value)
    return merged


__all__ = ["build_auth_header", "merge_headers"]
