"""Buffer identities and their buffer-name string form."""

from .charset import (
    COMPONENT_ESCAPES,
    DELIMITER_CHARACTERS,
    UNUSABLE_CHARACTERS,
    contains_unusable,
    decode_component,
    encode_component,
)
from .codec import format, parse, validate_scheme
from .errors import (
    BufnameError,
    InvalidExprError,
    InvalidSchemeError,
    MalformedBufnameError,
)
from .models import Bufname, Params, ParamValue, normalize_params

__all__ = [
    "Bufname",
    "Params",
    "ParamValue",
    "normalize_params",
    "format",
    "parse",
    "validate_scheme",
    "BufnameError",
    "InvalidSchemeError",
    "InvalidExprError",
    "MalformedBufnameError",
    "COMPONENT_ESCAPES",
    "DELIMITER_CHARACTERS",
    "UNUSABLE_CHARACTERS",
    "contains_unusable",
    "encode_component",
    "decode_component",
]
