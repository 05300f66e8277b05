"""ason - backend-agnostic JSON encoder/decoder combinators."""

from __future__ import annotations

from ason.api import (
    decode,
    decode_or_fail,
    decoding,
    encode,
    encoding,
    error_to_string,
    parse,
    parse_or_fail,
)
from ason.config import BackendConfig, DuplicateKeys
from ason.decode import Decode
from ason.encode import Encode
from ason.errors import (
    ArrayError,
    BackendError,
    DecodeError,
    DecodeFailure,
    FieldError,
    NotFound,
    OrError,
    TypeMismatch,
    ValidationError,
)
from ason.protocols import NO_DEFAULT, DecodeBackend, Decoder, EncodeBackend, Encoder

__version__: str = "0.1.0"
__all__: list[str] = [
    "NO_DEFAULT",
    "ArrayError",
    "BackendConfig",
    "BackendError",
    "Decode",
    "DecodeBackend",
    "DecodeError",
    "DecodeFailure",
    "Decoder",
    "DuplicateKeys",
    "Encode",
    "EncodeBackend",
    "Encoder",
    "FieldError",
    "NotFound",
    "OrError",
    "TypeMismatch",
    "ValidationError",
    "decode",
    "decode_or_fail",
    "decoding",
    "encode",
    "encoding",
    "error_to_string",
    "parse",
    "parse_or_fail",
]
