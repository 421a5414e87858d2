from __future__ import annotations

import pytest

from vim_bufname.bufname import (
    Bufname,
    BufnameError,
    InvalidExprError,
    InvalidSchemeError,
    MalformedBufnameError,
    format,
    parse,
)

WORKTREE = "/absolute/path/to/worktree"


def test_parse_rejects_literal_unusable_characters() -> None:
    with pytest.raises(InvalidExprError, match="contains unusable characters"):
        parse("denops:///<>|?*")


@pytest.mark.parametrize(
    "text",
    [
        "denops0number://absolute/path/to/worktree",
        "denops+plus://absolute/path/to/worktree",
        "denops-minus://absolute/path/to/worktree",
        "denops.dot://absolute/path/to/worktree",
        "denops_underscore://absolute/path/to/worktree",
        "DENOPS://absolute/path/to/worktree",
    ],
)
def test_parse_rejects_unusable_scheme(text: str) -> None:
    with pytest.raises(InvalidSchemeError, match="contains unusable characters"):
        parse(text)


@pytest.mark.parametrize("text", ["denops", "denops:/absolute", "://absolute", ""])
def test_parse_rejects_missing_scheme_separator(text: str) -> None:
    with pytest.raises(MalformedBufnameError):
        parse(text)


def test_errors_share_a_base_and_keep_the_value() -> None:
    with pytest.raises(BufnameError) as excinfo:
        parse("denops.dot:///a")

    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.value == "denops.dot"


def test_parse_plain_expr() -> None:
    assert parse("denops:///absolute/path/to/worktree") == Bufname(
        scheme="denops", expr=WORKTREE
    )


def test_parse_decodes_percent_encoded_expr() -> None:
    assert parse("denops:///%3C%3E%7C%3F%2A") == Bufname(scheme="denops", expr="/<>|?*")


def test_parse_decodes_delimiters_in_expr() -> None:
    bufname = parse("denops:///hello%3Bworld%23hello")

    assert bufname.expr == "/hello;world#hello"
    assert bufname.params is None
    assert bufname.fragment is None


def test_parse_with_params() -> None:
    bufname = parse("denops:///absolute/path/to/worktree;foo=foo&bar=bar&bar=bar")

    assert bufname.expr == WORKTREE
    assert bufname.params == {"foo": "foo", "bar": ("bar", "bar")}
    assert list(bufname.params or {}) == ["foo", "bar"]
    assert bufname.fragment is None


def test_parse_decodes_percent_encoded_params() -> None:
    bufname = parse("denops:///absolute/path/to/worktree;foo=%3C%3E%7C%3F%2A")

    assert bufname.params == {"foo": "<>|?*"}


def test_parse_params_without_value() -> None:
    bufname = parse("denops:///a;flag&key=")

    assert bufname.params == {"flag": "", "key": ""}


def test_parse_with_fragment() -> None:
    bufname = parse("denops:///absolute/path/to/worktree#Hello World.md")

    assert bufname == Bufname(scheme="denops", expr=WORKTREE, fragment="Hello World.md")


def test_parse_decodes_percent_encoded_fragment() -> None:
    bufname = parse("denops:///absolute/path/to/worktree#%3C%3E%7C%3F%2A")

    assert bufname.fragment == "<>|?*"


def test_parse_fragment_keeps_later_delimiters() -> None:
    bufname = parse("denops:///a#b;c#d")

    assert bufname.expr == "/a"
    assert bufname.params is None
    assert bufname.fragment == "b;c#d"


def test_parse_with_params_and_fragment() -> None:
    bufname = parse(
        "denops:///absolute/path/to/worktree;foo=foo&bar=bar&bar=bar#Hello World.md"
    )

    assert bufname == Bufname(
        scheme="denops",
        expr=WORKTREE,
        params={"foo": "foo", "bar": ["bar", "bar"]},
        fragment="Hello World.md",
    )


def test_parse_treats_empty_segments_as_absent() -> None:
    bufname = parse("denops:///a;#")

    assert bufname == Bufname(scheme="denops", expr="/a")
    assert bufname.params is None
    assert bufname.fragment is None


@pytest.mark.parametrize(
    "bufname",
    [
        Bufname(scheme="denops", expr=WORKTREE),
        Bufname(scheme="denops", expr="/<>|?*"),
        Bufname(scheme="denops", expr="/hello;world#hello"),
        Bufname(scheme="denops", expr="/100%25 done+more"),
        Bufname(scheme="gin", expr="C:\\Users\\日本\tx\n"),
        Bufname(scheme="denops", expr="", fragment="only fragment"),
        Bufname(
            scheme="denops",
            expr="/a",
            params={"q": "a b+c", "k&": ["=", ";", "#", "%"]},
            fragment="#frag;ment%",
        ),
    ],
)
def test_parse_inverts_format(bufname: Bufname) -> None:
    assert parse(format(bufname)) == bufname


def test_classmethod_parse_delegates() -> None:
    assert Bufname.parse("denops:///a#b") == Bufname(
        scheme="denops", expr="/a", fragment="b"
    )
