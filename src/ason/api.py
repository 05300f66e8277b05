"""Public API over the standard-library backend.

``encoding`` and ``decoding`` are ready-made ``Encode`` / ``Decode``
instances; the module-level functions are shortcuts for their entry points.
Both instances are stateless and safe to share.

Example::

    from ason import decoding as D, encoding as E, encode, parse

    person = D.pair(D.string, D.field("age", D.int, default=0))
    parse(person, '["Ada", {}]')                 # <Success: ('Ada', 0)>
    encode(E.list(E.int), [1, 2, 3])             # '[1, 2, 3]'
"""

from __future__ import annotations

from typing import TypeVar

from ason.backends.stdlib import JsonValue, StdlibDecodeBackend, StdlibEncodeBackend
from ason.decode import Decode
from ason.encode import Encode
from ason.errors import DecodeResult, error_to_string
from ason.protocols import Decoder, Encoder

__all__ = [
    "decode",
    "decode_or_fail",
    "decoding",
    "encode",
    "encoding",
    "error_to_string",
    "parse",
    "parse_or_fail",
]

T = TypeVar("T")

encoding: Encode[JsonValue] = Encode(StdlibEncodeBackend())
decoding: Decode[JsonValue] = Decode(StdlibDecodeBackend())


def encode(encoder: Encoder[T, JsonValue], value: T) -> str:
    """Encode ``value`` with ``encoder`` and print it as JSON text."""
    return encoding.encode(encoder, value)


def parse(decoder: Decoder[JsonValue, T], text: str | bytes) -> DecodeResult[T]:
    """Parse JSON text and decode the root node with ``decoder``.

    Returns:
        ``Success(value)`` or ``Failure(error)``; malformed text is a
        ``Failure(BackendError(...))``.
    """
    return decoding.parse(decoder, text)


def decode(decoder: Decoder[JsonValue, T], node: JsonValue) -> DecodeResult[T]:
    """Decode an already parsed node (skips parsing)."""
    return decoding.decode(decoder, node)


def parse_or_fail(decoder: Decoder[JsonValue, T], text: str | bytes) -> T:
    """Parse and decode, raising ``DecodeFailure`` with the rendered error."""
    return decoding.parse_or_fail(decoder, text)


def decode_or_fail(decoder: Decoder[JsonValue, T], node: JsonValue) -> T:
    """Decode a node, raising ``DecodeFailure`` with the rendered error."""
    return decoding.decode_or_fail(decoder, node)
