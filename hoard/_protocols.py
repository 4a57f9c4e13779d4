from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from hoard._headers import CacheControl, HeaderValue

__all__ = ("HeaderAccessor", "ResponseHeaderAccessor")


@runtime_checkable
class HeaderAccessor(Protocol):
    """Generic access to a response's headers."""

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]: ...

    def set(self, name: str, value: HeaderValue) -> None: ...

    def __getitem__(self, name: str) -> str: ...

    def __setitem__(self, name: str, value: HeaderValue) -> None: ...

    def __delitem__(self, name: str) -> None: ...

    def __contains__(self, name: object) -> bool: ...


@runtime_checkable
class ResponseHeaderAccessor(Protocol):
    """Response-specific views over the same header mapping."""

    @property
    def cache_control(self) -> CacheControl: ...

    @property
    def etag(self) -> Optional[str]: ...

    @property
    def last_modified(self) -> Optional[int]: ...

    @property
    def date(self) -> Optional[int]: ...

    @property
    def expires(self) -> Optional[int]: ...

    @property
    def vary(self) -> List[str]: ...

    @property
    def is_validateable(self) -> bool: ...

    def freshness_lifetime(self, shared: bool = True) -> Optional[int]: ...
