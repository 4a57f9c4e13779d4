from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from hoard._headers import CacheControl, parse_cache_control, parse_vary
from hoard._utils import parse_date

if TYPE_CHECKING:
    from hoard._headers import Headers

__all__ = ("ResponseHeaders",)


class ResponseHeaders:
    """
    Read-only helpers over a response's status code and header mapping.

    Classes mixing this in must provide ``status`` and ``headers``. Nothing
    here decides whether a response is fresh or may be stored; the helpers
    only expose the values such a decision is made from.
    """

    status: int
    headers: "Headers"

    @property
    def cache_control(self) -> CacheControl:
        return parse_cache_control(self._header_text("Cache-Control"))

    @property
    def max_age(self) -> Optional[int]:
        return self.cache_control.max_age

    @property
    def s_maxage(self) -> Optional[int]:
        return self.cache_control.s_maxage

    @property
    def date(self) -> Optional[int]:
        return self._header_timestamp("Date")

    @property
    def expires(self) -> Optional[int]:
        return self._header_timestamp("Expires")

    @property
    def last_modified(self) -> Optional[int]:
        return self._header_timestamp("Last-Modified")

    @property
    def etag(self) -> Optional[str]:
        return self._header_text("ETag")

    @property
    def vary(self) -> List[str]:
        return parse_vary(self._header_text("Vary"))

    @property
    def is_validateable(self) -> bool:
        """Whether the response carries a validator usable in a conditional request."""
        return "etag" in self.headers or "last-modified" in self.headers

    @property
    def is_private(self) -> bool:
        return bool(self.cache_control.private)

    @property
    def is_public(self) -> bool:
        return self.cache_control.public

    @property
    def is_no_store(self) -> bool:
        return self.cache_control.no_store

    @property
    def is_no_cache(self) -> bool:
        return bool(self.cache_control.no_cache)

    @property
    def must_revalidate(self) -> bool:
        cache_control = self.cache_control
        return cache_control.must_revalidate or cache_control.proxy_revalidate

    def freshness_lifetime(self, shared: bool = True) -> Optional[int]:
        """
        Explicit freshness lifetime in seconds (RFC 9111, Section 4.2.1).

        The first match wins: ``s-maxage`` (shared caches only), ``max-age``,
        then ``Expires`` minus ``Date``. Returns ``None`` when the response
        carries no explicit expiration time or the dates cannot be parsed.
        """
        cache_control = self.cache_control

        if shared and cache_control.s_maxage is not None:
            return cache_control.s_maxage

        if cache_control.max_age is not None:
            return cache_control.max_age

        expires = self.expires
        date = self.date
        if expires is None or date is None:
            return None
        return max(0, expires - date)

    @property
    def is_informational(self) -> bool:
        return 100 <= self.status < 200

    @property
    def is_successful(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_redirect(self) -> bool:
        return self.status in (301, 302, 303, 307, 308)

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status < 600

    @property
    def is_not_modified(self) -> bool:
        return self.status == 304

    def _header_text(self, name: str) -> Optional[str]:
        value = self.headers.get(name)
        return value if isinstance(value, str) else None

    def _header_timestamp(self, name: str) -> Optional[int]:
        value = self._header_text(name)
        if value is None:
            return None
        return parse_date(value)
