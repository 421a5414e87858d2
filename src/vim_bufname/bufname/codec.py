"""Conversion between ``Bufname`` values and buffer-name strings.

    denops:///absolute/path;foo=foo&bar=bar&bar=bar#Hello World.md
    ^^^^^^   ^^^^^^^^^^^^^^ ^^^^^^^^^^^^^^^^^^^^^^^ ^^^^^^^^^^^^^^
    scheme   expr           params                  fragment

``expr`` and ``fragment`` keep ``/`` and spaces literal but never carry a
raw ``<>|?*;#%`` or control character. Params are form encoded.
"""

from __future__ import annotations

import re
from typing import Optional

from vim_bufname.runtime.telemetry import span

from .charset import (
    contains_unusable,
    decode_component,
    decode_params,
    encode_component,
    encode_params,
    is_valid_scheme,
)
from .errors import InvalidExprError, InvalidSchemeError, MalformedBufnameError
from .models import Bufname, Params

BUFNAME_PATTERN = re.compile(
    r"^(?P<scheme>[^:]+)://(?P<expr>[^;#]*)(?:;(?P<params>[^#]*))?(?:#(?P<fragment>.*))?$",
    re.DOTALL,
)


def validate_scheme(scheme: str) -> str:
    if not is_valid_scheme(scheme):
        raise InvalidSchemeError(scheme)
    return scheme


def format(bufname: Bufname) -> str:
    """Return the buffer-name string for ``bufname``.

    Raises ``InvalidSchemeError`` when the scheme is not ``[a-z]+``.
    """

    with span("bufname::format", component="bufname") as handle:
        handle.add_metadata("scheme", bufname.scheme)
        validate_scheme(bufname.scheme)
        text = f"{bufname.scheme}://{encode_component(bufname.expr)}"
        if bufname.params:
            handle.add_metadata("params", len(bufname.params))
            text += f";{encode_params(bufname.params)}"
        if bufname.fragment:
            text += f"#{encode_component(bufname.fragment)}"
        return text


def parse(text: str) -> Bufname:
    """Return the ``Bufname`` encoded in ``text``.

    Raises ``InvalidExprError`` for literal ``<>|?*`` anywhere in ``text``,
    ``MalformedBufnameError`` when there is no ``<scheme>://`` prefix and
    ``InvalidSchemeError`` when the scheme is not ``[a-z]+``.
    """

    with span("bufname::parse", component="bufname") as handle:
        if contains_unusable(text):
            raise InvalidExprError(text)
        match = BUFNAME_PATTERN.match(text)
        if match is None:
            raise MalformedBufnameError(text)

        scheme = validate_scheme(match.group("scheme"))
        handle.add_metadata("scheme", scheme)

        params: Optional[Params] = None
        raw_params = match.group("params")
        if raw_params:
            params = decode_params(raw_params)

        fragment: Optional[str] = None
        raw_fragment = match.group("fragment")
        if raw_fragment:
            fragment = decode_component(raw_fragment)

        return Bufname(
            scheme=scheme,
            expr=decode_component(match.group("expr")),
            params=params,
            fragment=fragment,
        )


__all__ = [
    "BUFNAME_PATTERN",
    "format",
    "parse",
    "validate_scheme",
]
