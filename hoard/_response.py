from __future__ import annotations

import logging
import time
from typing import Any, AsyncIterable, Iterable, Mapping, Optional, Tuple, Union

from typing_extensions import Self

from hoard._exceptions import ImmutableResponseError
from hoard._headers import Headers, HeaderValue
from hoard._response_headers import ResponseHeaders
from hoard._utils import generate_http_date

__all__ = ("Body", "CachedResponse")

logger = logging.getLogger("hoard.response")

Body = Union[bytes, str, Iterable[bytes], AsyncIterable[bytes], None]


class CachedResponse(ResponseHeaders):
    """
    An HTTP response as seen by a caching layer.

    Holds the status code, a :class:`Headers` mapping and an opaque body,
    together with the time the response was captured. The body is passed
    through untouched, it is never read or buffered.

    The header mapping passed in is always copied, so the response owns its
    headers and later changes to the caller's mapping are not visible here.
    A ``Date`` header is added from the capture time when missing.

    ``created_at`` defaults to the current time. Pass it explicitly when
    rebuilding a response from storage, so that :meth:`activate` reports
    the age relative to the original capture.

    Once :meth:`freeze` is called neither the headers nor the ``status``,
    ``headers`` and ``body`` attributes can be changed, and every attempt
    raises :class:`ImmutableResponseError`.

    Example:
    ```python
    stored = CachedResponse(200, {"Content-Type": "text/plain"}, [b"hi"]).freeze()

    # later, on a cache hit
    response = stored.copy().activate()
    status, headers, body = response.to_tuple()
    ```
    """

    def __init__(
        self,
        status: int,
        headers: Optional[Mapping[str, HeaderValue]] = None,
        body: Body = None,
        *,
        created_at: Optional[float] = None,
    ) -> None:
        self._frozen = False
        self._created_at = time.time() if created_at is None else created_at
        self.status = status
        self.headers = Headers(headers)
        self.body = body

        if "date" not in self.headers:
            self.headers["Date"] = generate_http_date(self._created_at)
            logger.debug("Added missing Date header: %s", self.headers["Date"])

    @property
    def created_at(self) -> float:
        return self._created_at

    @property
    def age(self) -> int:
        """Whole seconds elapsed since the response was captured, never negative."""
        return max(0, int(time.time() - self._created_at))

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(name, default)

    def set(self, name: str, value: HeaderValue) -> None:
        self.headers[name] = value

    def activate(self) -> Self:
        """
        Prepare a stored response to be served for a new request.

        Sets the ``Age`` header to the number of whole seconds elapsed
        since the response was captured. Calling it again recomputes it.
        """
        age = self.age
        self.headers["Age"] = str(age)
        logger.debug("Activated response with Age: %d", age)
        return self

    def copy(self) -> Self:
        """
        Duplicate the response.

        The duplicate shares the status and the body reference but owns an
        independent copy of the headers. The capture time is kept, so the
        duplicate ages from the same moment as the original. It is never
        frozen.
        """
        logger.debug("Duplicating response")
        return type(self)(self.status, self.headers, self.body, created_at=self._created_at)

    def to_tuple(self) -> Tuple[int, Headers, Body]:
        return self.status, self.headers, self.body

    def freeze(self) -> Self:
        if self._frozen:
            return self
        self.headers.freeze()
        object.__setattr__(self, "_frozen", True)
        logger.debug("Froze response")
        return self

    def __getitem__(self, name: str) -> str:
        return self.headers[name]

    def __setitem__(self, name: str, value: HeaderValue) -> None:
        self.headers[name] = value

    def __delitem__(self, name: str) -> None:
        del self.headers[name]

    def __contains__(self, name: object) -> bool:
        return name in self.headers

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise ImmutableResponseError(f"Cannot set {name!r} on a frozen response")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if self._frozen:
            raise ImmutableResponseError(f"Cannot delete {name!r} from a frozen response")
        super().__delattr__(name)

    def __copy__(self) -> Self:
        return self.copy()

    def __repr__(self) -> str:
        state = " frozen" if self._frozen else ""
        return f"<{type(self).__name__} [{self.status}]{state}>"
