from __future__ import annotations

import logging
from typing import AsyncIterator, Iterable, Iterator, List, Tuple, Union

import httpx

from hoard._headers import Headers
from hoard._response import CachedResponse

__all__ = ("from_httpx", "to_httpx")

logger = logging.getLogger("hoard.integrations.httpx")


def from_httpx(response: httpx.Response) -> CachedResponse:
    """
    Convert an httpx.Response into a CachedResponse.

    The already read content is used when available, otherwise the
    response's stream is passed through without being read.
    """
    body: Union[bytes, Iterator[bytes], AsyncIterator[bytes]]
    try:
        body = response.content
    except httpx.ResponseNotRead:
        logger.debug("Response was not read, passing its stream through")
        if isinstance(response.stream, Iterable):
            body = iter(response.stream)
        else:
            body = response.stream.__aiter__()  # type: ignore[union-attr]

    headers = Headers({})
    for key, value in response.headers.multi_items():
        headers.add(key, value)

    return CachedResponse(response.status_code, headers, body)


def to_httpx(response: CachedResponse) -> httpx.Response:
    """
    Convert a CachedResponse into an httpx.Response.

    Multi-value headers are emitted as repeated header lines.
    """
    status, headers, body = response.to_tuple()

    header_list: List[Tuple[str, str]] = [
        (key, value) for key, values in headers.raw.items() for value in values
    ]

    if body is None:
        return httpx.Response(status_code=status, headers=header_list)
    return httpx.Response(status_code=status, headers=header_list, content=body)
