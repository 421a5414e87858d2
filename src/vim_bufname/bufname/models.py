"""Structured buffer identity."""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

# A param is either a single value or an ordered run of repeated values.
ParamValue = Union[str, Tuple[str, ...]]
Params = Mapping[str, ParamValue]
ParamsInput = Mapping[str, Union[str, Sequence[Optional[str]], None]]


def _normalize_value(key: str, value: Any) -> Optional[ParamValue]:
    if value is None or isinstance(value, str):
        return value
    if not isinstance(value, (list, tuple)):
        raise TypeError(
            f"Param '{key}' must be a string or a list of strings, "
            f"not {type(value).__name__}"
        )
    items = []
    for item in value:
        if item is None:
            continue
        if not isinstance(item, str):
            raise TypeError(
                f"Param '{key}' holds a {type(item).__name__}; only strings are allowed"
            )
        items.append(item)
    if not items:
        return None
    if len(items) == 1:
        return items[0]
    return tuple(items)


def normalize_params(params: Optional[ParamsInput]) -> Optional[Params]:
    """Drop absent values and freeze the rest, preserving key order.

    ``None`` values (and ``None`` entries inside lists) are removed, a list
    with one entry collapses to that entry, and an empty result becomes
    ``None``.
    """

    if params is None:
        return None
    cleaned = {}
    for key, value in params.items():
        if not isinstance(key, str):
            raise TypeError(f"Param keys must be strings, not {type(key).__name__}")
        normalized = _normalize_value(key, value)
        if normalized is not None:
            cleaned[key] = normalized
    if not cleaned:
        return None
    return MappingProxyType(cleaned)


@dataclass(frozen=True, slots=True, eq=False)
class Bufname:
    """Buffer identity: ``<scheme>://<expr>[;<params>][#<fragment>]``.

    The scheme is checked when formatting, not here, so an invalid identity
    can still be held and inspected.
    """

    scheme: str
    expr: str
    params: Optional[Params] = None
    fragment: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", normalize_params(self.params))
        if not self.fragment:
            object.__setattr__(self, "fragment", None)

    def _key(self) -> Tuple[Any, ...]:
        # params order is significant: it is the order pairs are emitted in
        params = tuple(self.params.items()) if self.params else None
        return (self.scheme, self.expr, params, self.fragment)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bufname):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return self.format()

    @classmethod
    def parse(cls, text: str) -> "Bufname":
        from .codec import parse

        return parse(text)

    def format(self) -> str:
        from .codec import format

        return format(self)

    def get_param(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of ``key``, or its first value when repeated."""

        if not self.params or key not in self.params:
            return default
        value = self.params[key]
        return value if isinstance(value, str) else value[0]

    def get_params(self, key: str) -> Tuple[str, ...]:
        """Return every value of ``key`` in order (empty when absent)."""

        if not self.params or key not in self.params:
            return ()
        value = self.params[key]
        return (value,) if isinstance(value, str) else value

    def replace(self, **changes: Any) -> "Bufname":
        return replace(self, **changes)


__all__ = [
    "Bufname",
    "ParamValue",
    "Params",
    "ParamsInput",
    "normalize_params",
]
