from __future__ import annotations

import calendar
import typing as tp
from email.utils import formatdate, parsedate_tz
from typing import Iterable


def parse_date(date: str) -> tp.Optional[int]:
    parsed = parsedate_tz(date)
    if parsed is None:
        return None
    timestamp = calendar.timegm(parsed[:6])
    return timestamp


def generate_http_date(timeval: tp.Optional[float] = None) -> str:
    """
    Generate a Date header value for HTTP responses.
    Returns date in RFC 1123 format (required by HTTP/1.1).

    Example output: 'Sun, 26 Oct 2025 12:34:56 GMT'
    """
    return formatdate(timeval=timeval, localtime=False, usegmt=True)


def parse_int(value: str) -> tp.Optional[int]:
    """Parse delta-seconds (ASCII digits only), return None if invalid."""
    value = value.strip()
    if not (value.isascii() and value.isdigit()):
        return None
    return min(int(value), 2147483647)


def collect_body(body: tp.Any) -> bytes:
    """
    Join an opaque response body into bytes.

    Accepts ``None``, ``bytes``, ``str`` or a synchronous iterable of
    ``bytes``/``str`` chunks.
    """
    if body is None:
        return b""
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, Iterable):
        return b"".join(chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk) for chunk in body)
    raise TypeError(f"Cannot collect a body of type {type(body).__name__!r}")

