from __future__ import annotations

import string
from typing import (
    Any,
    Dict,
    Iterator,
    List,
    Mapping,
    MutableMapping,
    Optional,
    Union,
)

from hoard._exceptions import ImmutableResponseError
from hoard._utils import parse_int

__all__ = (
    "CacheControl",
    "Headers",
    "HeaderValue",
    "parse_cache_control",
    "parse_vary",
)

HeaderValue = Union[str, List[str]]

MAX_DELTA_SECONDS = 2147483647

# RFC 7230 Section 3.2.6
TCHAR = frozenset("!#$%&'*+-.^_`|~" + string.digits + string.ascii_letters)
OWS = (" ", "\t")


class Headers(MutableMapping[str, str]):
    """
    Case-insensitive, ordered, multi-value HTTP header mapping.

    Names are stored lower-cased and are yielded lower-cased by iteration,
    :attr:`raw` and therefore by the three-part representation of a
    response; transports that need canonical casing must restore it.

    Reading a header joins its values with ``", "``; assigning overwrites
    every previous value, use :meth:`add` to append one. Values are stored
    as given, only lists and tuples are expanded into several values.
    """

    def __init__(self, headers: Optional[Mapping[str, HeaderValue]] = None) -> None:
        self._frozen = False
        self._headers: Dict[str, List[Any]] = {}
        if headers is None:
            return
        if isinstance(headers, Headers):
            self._headers = headers.raw
            return
        for key, value in headers.items():
            self._headers.setdefault(key.lower(), []).extend(_as_list(value))

    @property
    def raw(self) -> Dict[str, List[str]]:
        return {key: values[:] for key, values in self._headers.items()}

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def get_list(self, key: str) -> Optional[List[str]]:
        values = self._headers.get(key.lower())
        return None if values is None else values[:]

    def add(self, key: str, value: str) -> None:
        self._check_mutable()
        self._headers.setdefault(key.lower(), []).append(value)

    def copy(self) -> "Headers":
        return Headers(self)

    def freeze(self) -> None:
        self._frozen = True

    def _check_mutable(self) -> None:
        if self._frozen:
            raise ImmutableResponseError("Cannot modify frozen headers")

    def __getitem__(self, key: str) -> str:
        values = self._headers[key.lower()]
        if len(values) == 1:
            return values[0]  # type: ignore[no-any-return]
        return ", ".join(str(value) for value in values)

    def __setitem__(self, key: str, value: HeaderValue) -> None:  # type: ignore[override]
        self._check_mutable()
        self._headers[key.lower()] = _as_list(value)

    def __delitem__(self, key: str) -> None:
        self._check_mutable()
        del self._headers[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._headers

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __copy__(self) -> "Headers":
        return self.copy()

    def __repr__(self) -> str:
        return f"Headers({self._headers!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Headers):
            return self._headers == other._headers
        if isinstance(other, Mapping):
            return self._headers == Headers(other)._headers
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]


def _as_list(value: Any) -> List[Any]:
    # values are not validated, anything but a list or tuple is one value
    return list(value) if isinstance(value, (list, tuple)) else [value]


def parse_vary(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [name.strip() for name in value.split(",") if name.strip()]


class CacheControl:
    """
    Cache-Control directives of a response (RFC 9111, Section 5.2.2).

    Unset values are ``None`` or ``False``. ``no_cache`` and ``private``
    are ``True`` when present without field names, or the list of field
    names they apply to.
    """

    def __init__(self) -> None:
        self.max_age: Optional[int] = None
        self.s_maxage: Optional[int] = None
        self.max_stale: Optional[int] = None
        self.min_fresh: Optional[int] = None
        self.stale_if_error: Optional[int] = None
        self.stale_while_revalidate: Optional[int] = None

        self.no_store: bool = False
        self.no_transform: bool = False
        self.only_if_cached: bool = False
        self.must_revalidate: bool = False
        self.must_understand: bool = False
        self.proxy_revalidate: bool = False
        self.public: bool = False
        self.immutable: bool = False

        self.no_cache: Union[bool, List[str]] = False
        self.private: Union[bool, List[str]] = False

        # unrecognized directives, kept verbatim
        self.extensions: List[str] = []

    def __repr__(self) -> str:
        fields = [
            f"{name}={value!r}" if not isinstance(value, bool) else name
            for name, value in vars(self).items()
            if name != "extensions" and value is not None and value is not False
        ]
        fields.extend(self.extensions)
        return f"<{type(self).__name__} {', '.join(fields)}>"


_DELTA_DIRECTIVES = {
    "max-age": "max_age",
    "s-maxage": "s_maxage",
    "max-stale": "max_stale",
    "min-fresh": "min_fresh",
    "stale-if-error": "stale_if_error",
    "stale-while-revalidate": "stale_while_revalidate",
}

_FLAG_DIRECTIVES = {
    "no-store": "no_store",
    "no-transform": "no_transform",
    "only-if-cached": "only_if_cached",
    "must-revalidate": "must_revalidate",
    "must-understand": "must_understand",
    "proxy-revalidate": "proxy_revalidate",
    "public": "public",
    "immutable": "immutable",
}

_FIELD_LIST_DIRECTIVES = {
    "no-cache": "no_cache",
    "private": "private",
}


def _parse_field_names(value: str) -> List[str]:
    return ["-".join(part.capitalize() for part in name.strip().split("-")) for name in value.split(",") if name.strip()]


def _unquote(raw: str) -> tuple[int, Optional[str]]:
    """
    Read a quoted-string from the start of ``raw``.

    Returns the number of characters consumed and the unescaped value,
    or ``(0, None)`` when the closing quote is missing.
    """
    buf: List[str] = []
    i = 1
    while i < len(raw):
        char = raw[i]
        if char == '"':
            return i + 1, "".join(buf)
        if char == "\\":
            if i + 1 >= len(raw):
                break
            buf.append(raw[i + 1])
            i += 2
            continue
        buf.append(char)
        i += 1
    return 0, None


def _apply_directive(cc: CacheControl, token: str, value: Optional[str]) -> None:
    if token in _DELTA_DIRECTIVES:
        if value is None:
            # max-stale without a value accepts any staleness
            if token == "max-stale":
                cc.max_stale = MAX_DELTA_SECONDS
            return
        setattr(cc, _DELTA_DIRECTIVES[token], parse_int(value))
    elif token in _FIELD_LIST_DIRECTIVES:
        setattr(cc, _FIELD_LIST_DIRECTIVES[token], True if value is None else _parse_field_names(value))
    elif token in _FLAG_DIRECTIVES and value is None:
        setattr(cc, _FLAG_DIRECTIVES[token], True)
    else:
        cc.extensions.append(token if value is None else f"{token}={value}")


def parse_cache_control(value: Optional[str]) -> CacheControl:
    """
    Parse a Cache-Control header value.

    The parser is lenient: malformed directives are skipped and invalid
    numbers become ``None``. Commas inside quoted values are kept, so
    ``no-cache="Set-Cookie, Authorization"`` yields both field names.

    Examples:
        >>> cc = parse_cache_control("public, max-age=3600")
        >>> cc.public, cc.max_age
        (True, 3600)
        >>> parse_cache_control('private="Set-Cookie"').private
        ['Set-Cookie']
    """
    cc = CacheControl()
    if not value:
        return cc

    i = 0
    length = len(value)
    while i < length:
        while i < length and value[i] in (" ", "\t", ","):
            i += 1
        if i >= length:
            break

        j = i
        while j < length and value[j] in TCHAR:
            j += 1
        if j == i:
            # not a token character, skip it
            i += 1
            continue
        token = value[i:j].lower()

        while j < length and value[j] in OWS:
            j += 1

        if j >= length or value[j] != "=":
            _apply_directive(cc, token, None)
            i = j
            continue

        k = j + 1
        while k < length and value[k] in OWS:
            k += 1
        if k >= length:
            break

        if value[k] == '"':
            eaten, unquoted = _unquote(value[k:])
            if unquoted is None:
                break
            _apply_directive(cc, token, unquoted)
            i = k + eaten
            continue

        end = k
        while end < length and value[end] not in (" ", "\t", ","):
            end += 1
        _apply_directive(cc, token, value[k:end])
        i = end

    return cc
