"""Exceptions raised by the buffer-name codec."""

from __future__ import annotations


class BufnameError(ValueError):
    """Base class for rejected buffer identities and buffer names."""

    def __init__(self, message: str, *, value: str | None = None) -> None:
        super().__init__(message)
        self.value = value


class InvalidSchemeError(BufnameError):
    """Raised when a scheme holds anything other than ``a``-``z``."""

    def __init__(self, scheme: str) -> None:
        super().__init__(
            f"Scheme '{scheme}' contains unusable characters. "
            "Only lowercase alphabets are allowed.",
            value=scheme,
        )


class InvalidExprError(BufnameError):
    """Raised when a buffer name holds literal ``<>|?*`` characters."""

    def __init__(self, expr: str) -> None:
        super().__init__(
            f"Expression '{expr}' contains unusable characters. "
            "Vim (on Windows) does not support '<>|?*' in a buffer name.",
            value=expr,
        )


class MalformedBufnameError(BufnameError):
    """Raised when a string lacks the ``<scheme>://`` prefix."""

    def __init__(self, text: str) -> None:
        super().__init__(
            f"Expression '{text}' does not follow the buffer name format "
            "'<scheme>://<expr>[;<params>][#<fragment>]'.",
            value=text,
        )


__all__ = [
    "BufnameError",
    "InvalidSchemeError",
    "InvalidExprError",
    "MalformedBufnameError",
]
