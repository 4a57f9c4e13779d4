from __future__ import annotations

import pytest

from hoard import Headers, ImmutableResponseError, parse_cache_control
from hoard._headers import parse_vary


class TestHeaders:
    def test_lookup_is_case_insensitive(self) -> None:
        headers = Headers({"Content-Type": "text/plain"})

        assert headers["content-type"] == "text/plain"
        assert headers["CONTENT-TYPE"] == "text/plain"
        assert "Content-type" in headers
        assert list(headers) == ["content-type"]

    def test_multiple_values_are_joined(self) -> None:
        headers = Headers({"Cache-Control": ["public", "max-age=60"]})

        assert headers["cache-control"] == "public, max-age=60"
        assert headers.get_list("Cache-Control") == ["public", "max-age=60"]

    def test_same_name_with_different_case_is_merged(self) -> None:
        headers = Headers({"X-Foo": "a", "x-foo": "b"})

        assert headers.get_list("x-foo") == ["a", "b"]
        assert len(headers) == 1

    def test_set_overwrites_and_add_appends(self) -> None:
        headers = Headers({"Vary": "Accept"})

        headers["vary"] = "Accept-Encoding"
        assert headers.get_list("Vary") == ["Accept-Encoding"]

        headers.add("Vary", "Origin")
        assert headers["Vary"] == "Accept-Encoding, Origin"

    def test_get_list_returns_copy(self) -> None:
        headers = Headers({"X-Foo": "a"})

        values = headers.get_list("X-Foo")
        assert values is not None
        values.append("b")

        assert headers.get_list("X-Foo") == ["a"]
        assert headers.get_list("X-Missing") is None

    def test_delete(self) -> None:
        headers = Headers({"X-Foo": "a"})

        del headers["x-FOO"]

        assert "X-Foo" not in headers
        with pytest.raises(KeyError):
            del headers["X-Foo"]

    def test_copy_is_independent(self) -> None:
        headers = Headers({"X-Foo": "a"})
        duplicate = headers.copy()

        duplicate.add("X-Foo", "b")
        headers["X-Bar"] = "c"

        assert headers.get_list("X-Foo") == ["a"]
        assert "X-Bar" not in duplicate

    def test_freeze(self) -> None:
        headers = Headers({"X-Foo": "a"})
        headers.freeze()

        with pytest.raises(ImmutableResponseError):
            headers["X-Foo"] = "b"
        with pytest.raises(ImmutableResponseError):
            headers.add("X-Foo", "b")
        with pytest.raises(ImmutableResponseError):
            del headers["X-Foo"]
        with pytest.raises(ImmutableResponseError):
            headers.update({"X-Bar": "c"})
        with pytest.raises(ImmutableResponseError):
            headers.pop("X-Foo")

        assert headers.raw == {"x-foo": ["a"]}
        assert not headers.copy().is_frozen

    def test_equality(self) -> None:
        headers = Headers({"Content-Type": "text/plain"})

        assert headers == Headers({"content-type": "text/plain"})
        assert headers == {"CONTENT-TYPE": "text/plain"}
        assert headers != {"Content-Type": "text/html"}

    def test_empty(self) -> None:
        assert len(Headers()) == 0
        assert len(Headers({})) == 0

    def test_non_string_values_are_stored_as_one_value(self) -> None:
        headers = Headers({"Content-Length": 5, "X-Raw": b"abc", "X-Pair": ("a", "b")})  # type: ignore[dict-item]

        assert headers["content-length"] == 5
        assert headers.get_list("x-raw") == [b"abc"]
        assert headers["x-pair"] == "a, b"

        headers["Content-Length"] = 7  # type: ignore[assignment]
        assert headers.get_list("Content-Length") == [7]

    def test_names_are_exposed_lower_cased(self) -> None:
        headers = Headers({"Content-Type": "text/plain"})

        assert headers.raw == {"content-type": ["text/plain"]}


class TestCacheControl:
    def test_empty(self) -> None:
        cc = parse_cache_control(None)

        assert cc.max_age is None
        assert cc.no_cache is False
        assert cc.no_store is False
        assert parse_cache_control("").extensions == []

    def test_flags_and_values(self) -> None:
        cc = parse_cache_control("public, max-age=3600, s-maxage=7200, must-revalidate")

        assert cc.public is True
        assert cc.max_age == 3600
        assert cc.s_maxage == 7200
        assert cc.must_revalidate is True

    def test_directive_names_are_case_insensitive(self) -> None:
        cc = parse_cache_control("No-Store, MAX-AGE=10")

        assert cc.no_store is True
        assert cc.max_age == 10

    def test_whitespace_around_equals(self) -> None:
        assert parse_cache_control("max-age = 15").max_age == 15

    def test_quoted_value(self) -> None:
        assert parse_cache_control('max-age="20"').max_age == 20

    def test_invalid_numbers_become_none(self) -> None:
        assert parse_cache_control("max-age=abc").max_age is None
        assert parse_cache_control("max-age=-1").max_age is None

    def test_only_ascii_digits_are_accepted(self) -> None:
        assert parse_cache_control("max-age=1_0").max_age is None
        assert parse_cache_control("max-age=+5").max_age is None
        assert parse_cache_control("max-age=\u0661\u0662").max_age is None

    def test_large_numbers_are_capped(self) -> None:
        assert parse_cache_control("max-age=9999999999999").max_age == 2147483647

    def test_field_names(self) -> None:
        cc = parse_cache_control('no-cache="set-cookie, authorization", private')

        assert cc.no_cache == ["Set-Cookie", "Authorization"]
        assert cc.private is True

    def test_max_stale_without_value(self) -> None:
        assert parse_cache_control("max-stale").max_stale == 2147483647

    def test_extensions(self) -> None:
        cc = parse_cache_control("community=UCI, foo")

        assert cc.extensions == ["community=UCI", "foo"]

    def test_unterminated_quote_stops_parsing(self) -> None:
        cc = parse_cache_control('public, private="set-cookie')

        assert cc.public is True
        assert cc.private is False

    def test_repr(self) -> None:
        cc = parse_cache_control("public, max-age=0, foo")

        assert repr(cc) == "<CacheControl max_age=0, public, foo>"


def test_parse_vary() -> None:
    assert parse_vary("Accept, Accept-Encoding ,Origin") == ["Accept", "Accept-Encoding", "Origin"]
    assert parse_vary(None) == []
    assert parse_vary("") == []
