from __future__ import annotations

"""
apifacade, a request façade with loading tracking, retry and payload caching.
Copyright (C) 2025  Theori Inc.

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as published
by the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

"""apifacade CLI."""

import argparse
import json
import sys
from typing import Any

from ..config import ApiOptions, AuthScheme, load_options, merge_options
from ..errors import describe_exception
from ..facade import SyncApiFacade
from ..http.client import HttpAdapter
from ..log import setup_logging

CLI_TEXT_TRUNCATION_BYTES = 4096
METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")


def _parse_header(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"Header must look like NAME:VALUE, got {raw!r}")
    return name.strip(), value.strip()


def _parse_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"--data is not valid JSON: {exc}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Issue one request through the apifacade wrapper")
    parser.add_argument("method", type=str.upper, choices=METHODS, help="HTTP verb")
    parser.add_argument("path", help="Request path (joined onto --base-path) or absolute URL")
    parser.add_argument("--base-path", help="Base address prefixed to the path")
    parser.add_argument("--api-key", help="Credential used to build the Authorization header")
    parser.add_argument(
        "--auth-type",
        choices=[scheme.value for scheme in AuthScheme],
        type=str.lower,
        help="Authorization header scheme",
    )
    parser.add_argument(
        "--header",
        action="append",
        type=_parse_header,
        default=[],
        metavar="NAME:VALUE",
        help="Extra per-request header (repeatable)",
    )
    parser.add_argument("--data", type=_parse_json, help="JSON request body")
    parser.add_argument("--retry", type=int, help="Additional attempts after the first failure")
    parser.add_argument("--timeout", type=int, help="Per-attempt timeout in milliseconds")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the payload as JSON instead of plain text",
    )
    parser.add_argument("--log-level", help="Logging level (default from APIFACADE_LOG_LEVEL)")
    return parser


def _truncate_text_bytes(text: str, max_bytes: int) -> str:
    raw = text.encode("utf-8")
    if len(raw) <= max_bytes:
        return text
    suffix = "...[truncated]"
    suffix_bytes = suffix.encode("utf-8")
    keep = max_bytes - len(suffix_bytes)
    if keep <= 0:
        return suffix_bytes[:max_bytes].decode("utf-8", errors="ignore")
    prefix = raw[:keep].decode("utf-8", errors="ignore")
    return prefix + suffix


def _print_json(data: Any) -> None:
    json.dump(data, sys.stdout, indent=2, sort_keys=True, default=str)
    sys.stdout.write("\n")


def _print_text(data: Any) -> None:
    if data is None:
        return
    text = data if isinstance(data, str) else json.dumps(data, indent=2, sort_keys=True, default=str)
    print(_truncate_text_bytes(text, CLI_TEXT_TRUNCATION_BYTES))


def options_from_args(args: argparse.Namespace, base: ApiOptions | None = None) -> ApiOptions:
    return merge_options(
        base or load_options(),
        base_path=args.base_path,
        api_key=args.api_key,
        auth_type=args.auth_type,
        retry=args.retry,
        timeout=args.timeout,
    )


def main(argv: list[str] | None = None, *, adapter: HttpAdapter | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        options = options_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    kwargs: dict[str, Any] = {}
    if args.header:
        kwargs["headers"] = dict(args.header)
    if args.data is not None:
        kwargs["json"] = args.data

    with SyncApiFacade(options, adapter=adapter) as api:
        try:
            response = api.request(args.method, args.path, **kwargs)
        except Exception as exc:  # noqa: BLE001
            print(f"error: {describe_exception(exc)}", file=sys.stderr)
            return 1

    if args.json:
        _print_json(response.data)
    else:
        _print_text(response.data)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
