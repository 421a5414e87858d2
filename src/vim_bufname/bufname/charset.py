"""Character classes and percent-encoding shared by ``format`` and ``parse``."""

from __future__ import annotations

import re
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple
from urllib.parse import parse_qsl, unquote, urlencode

from .models import ParamValue

# Vim on Windows refuses these in a buffer name.
UNUSABLE_CHARACTERS = "<>|?*"
# Separate expr from params and params from fragment.
DELIMITER_CHARACTERS = ";#"
CONTROL_CHARACTERS = "".join(chr(code) for code in range(0x20)) + "\x7f"
# Escaped in expr and fragment. ``%`` is included so decoding is lossless.
COMPONENT_ESCAPES = UNUSABLE_CHARACTERS + DELIMITER_CHARACTERS + "%" + CONTROL_CHARACTERS

SCHEME_PATTERN = re.compile(r"[a-z]+")


def _char_class(characters: Iterable[str]) -> re.Pattern[str]:
    body = "".join(f"\\x{ord(char):02x}" for char in characters)
    return re.compile(f"[{body}]")


_UNUSABLE_RE = _char_class(UNUSABLE_CHARACTERS)
_COMPONENT_RE = _char_class(COMPONENT_ESCAPES)


def _percent(match: re.Match[str]) -> str:
    return "".join(f"%{byte:02X}" for byte in match.group(0).encode("utf-8"))


def is_valid_scheme(scheme: str) -> bool:
    return SCHEME_PATTERN.fullmatch(scheme) is not None


def contains_unusable(text: str) -> bool:
    """Return ``True`` when ``text`` holds a literal ``<>|?*``.

    Percent-encoded forms such as ``%3C`` are not literal occurrences.
    """

    return _UNUSABLE_RE.search(text) is not None


def encode_component(text: str) -> str:
    """Percent-encode the characters an expr or fragment must not carry raw."""

    return _COMPONENT_RE.sub(_percent, text)


def decode_component(text: str) -> str:
    return unquote(text, encoding="utf-8")


def iter_param_pairs(params: Mapping[str, ParamValue]) -> Iterator[Tuple[str, str]]:
    for key, value in params.items():
        if isinstance(value, str):
            yield key, value
        else:
            for item in value:
                yield key, item


def encode_params(params: Mapping[str, ParamValue]) -> str:
    """Serialize params as ``k=v`` pairs joined by ``&``.

    Sequence values yield one pair per element, in order. Keys and values
    use form encoding, so ``<>|?*;#&=%`` never appear raw.
    """

    return urlencode(list(iter_param_pairs(params)))


def decode_params(raw: str) -> Dict[str, ParamValue]:
    """Inverse of ``encode_params``.

    A key seen once maps to a string; a repeated key maps to a tuple of all
    its values in order of appearance.
    """

    collected: Dict[str, List[str]] = {}
    for key, value in parse_qsl(raw, keep_blank_values=True):
        collected.setdefault(key, []).append(value)
    return {
        key: values[0] if len(values) == 1 else tuple(values)
        for key, values in collected.items()
    }


__all__ = [
    "UNUSABLE_CHARACTERS",
    "DELIMITER_CHARACTERS",
    "CONTROL_CHARACTERS",
    "COMPONENT_ESCAPES",
    "SCHEME_PATTERN",
    "is_valid_scheme",
    "contains_unusable",
    "encode_component",
    "decode_component",
    "iter_param_pairs",
    "encode_params",
    "decode_params",
]
