"""EncodeBackend and DecodeBackend Protocols: the backend extension point.

A backend binds the combinators to one concrete node type.  It supplies the
primitive encoders/decoders, the structural combinators built directly on
node construction and inspection, and the text boundary (``encode`` and
``parse``).  Everything else lives in ``ason.encode.Encode`` and
``ason.decode.Decode``, which wrap any conforming backend.

Backends conform structurally; no inheritance is required::

    from ason.backends import StdlibDecodeBackend
    from ason.protocols import DecodeBackend

    assert isinstance(StdlibDecodeBackend(), DecodeBackend)  # True
"""

from __future__ import annotations

import builtins
from collections.abc import Callable, Iterable, Mapping, Sequence
from enum import Enum
from typing import Any, Literal, Protocol, TypeAlias, TypeVar, runtime_checkable

from ason.errors import DecodeResult

__all__ = [
    "NO_DEFAULT",
    "DecodeBackend",
    "Decoder",
    "EncodeBackend",
    "Encoder",
    "Fields",
]

NodeT = TypeVar("NodeT")
T = TypeVar("T")
U = TypeVar("U")

Encoder: TypeAlias = Callable[[T], NodeT]
Decoder: TypeAlias = Callable[[NodeT], DecodeResult[T]]

# Ordered field entries of an object; a Mapping is accepted wherever an
# encoder consumes them.
Fields: TypeAlias = Iterable[tuple[str, T]] | Mapping[str, T]


class _NoDefault(Enum):
    NO_DEFAULT = "NO_DEFAULT"

    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Literal[_NoDefault.NO_DEFAULT] = _NoDefault.NO_DEFAULT


@runtime_checkable
class EncodeBackend(Protocol[NodeT]):
    """Structural protocol for encode backends.

    Every encoder is total over its input type.  ``obj`` and ``dict`` build
    object nodes from ordered field entries; ``list`` and ``array`` preserve
    element order.
    """

    def encode(self, encoder: Encoder[T, NodeT], value: T) -> str: ...

    def null(self, value: None = None) -> NodeT: ...

    def json(self, value: NodeT) -> NodeT: ...

    def bool(self, value: builtins.bool) -> NodeT: ...

    def int(self, value: builtins.int) -> NodeT: ...

    def float(self, value: builtins.float) -> NodeT: ...

    def string(self, value: str) -> NodeT: ...

    def list(self, encoder: Encoder[T, NodeT]) -> Encoder[builtins.list[T], NodeT]: ...

    def array(self, encoder: Encoder[T, NodeT]) -> Encoder[Sequence[T], NodeT]: ...

    def nullable(self, encoder: Encoder[T, NodeT]) -> Encoder[T | None, NodeT]: ...

    def singleton(self, encoder: Encoder[T, NodeT]) -> Encoder[T, NodeT]: ...

    def obj(self, fields: Fields[NodeT]) -> NodeT: ...

    def dict(self, encoder: Encoder[T, NodeT]) -> Encoder[Fields[T], NodeT]: ...


@runtime_checkable
class DecodeBackend(Protocol[NodeT]):
    """Structural protocol for decode backends.

    Decoders never raise for malformed input: every failure is a
    ``DecodeError`` inside ``Failure``.  Structural combinators are fail-fast
    and wrap the first child failure with its location (``FieldError`` or
    ``ArrayError``).
    """

    def parse(self, decoder: Decoder[NodeT, T], text: str | bytes) -> DecodeResult[T]: ...

    def null(self, node: NodeT) -> DecodeResult[None]: ...

    def json(self, node: NodeT) -> DecodeResult[NodeT]: ...

    def bool(self, node: NodeT) -> DecodeResult[builtins.bool]: ...

    def int(self, node: NodeT) -> DecodeResult[builtins.int]: ...

    def float(self, node: NodeT) -> DecodeResult[builtins.float]: ...

    def string(self, node: NodeT) -> DecodeResult[str]: ...

    def list(self, decoder: Decoder[NodeT, T]) -> Decoder[NodeT, builtins.list[T]]: ...

    def array(self, decoder: Decoder[NodeT, T]) -> Decoder[NodeT, tuple[T, ...]]: ...

    def singleton(self, decoder: Decoder[NodeT, T]) -> Decoder[NodeT, T]: ...

    def pair(
        self, decoder_a: Decoder[NodeT, T], decoder_b: Decoder[NodeT, U]
    ) -> Decoder[NodeT, tuple[T, U]]: ...

    def field(
        self, name: str, decoder: Decoder[NodeT, T], default: Any = NO_DEFAULT
    ) -> Decoder[NodeT, T]: ...

    def obj(self, node: NodeT) -> DecodeResult[builtins.list[tuple[str, NodeT]]]: ...

    def dict(
        self, decoder: Decoder[NodeT, T]
    ) -> Decoder[NodeT, builtins.list[tuple[str, T]]]: ...

    def nullable(self, decoder: Decoder[NodeT, T]) -> Decoder[NodeT, T | None]: ...

    def is_null(self, node: NodeT) -> builtins.bool: ...

    def is_bool(self, node: NodeT) -> builtins.bool: ...

    def is_int(self, node: NodeT) -> builtins.bool: ...

    def is_float(self, node: NodeT) -> builtins.bool: ...

    def is_string(self, node: NodeT) -> builtins.bool: ...

    def is_array(self, node: NodeT) -> builtins.bool: ...

    def is_obj(self, node: NodeT) -> builtins.bool: ...
