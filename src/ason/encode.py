"""Encode: extension layer over any EncodeBackend.

Wraps a backend and re-exposes every primitive it provides, plus the
combinators derivable from those primitives alone.  Any object satisfying the
``EncodeBackend`` Protocol gets the extension layer for free::

    from ason.backends import StdlibEncodeBackend
    from ason.encode import Encode

    E = Encode(StdlibEncodeBackend())
    point = E.map(lambda p: [p.x, p.y], E.list(E.float))
    E.encode(point, Point(1.0, 2.0))   # '[1.0, 2.0]'
"""

from __future__ import annotations

import builtins
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from ason.protocols import Encoder, EncodeBackend, Fields

__all__ = ["Encode"]

NodeT = TypeVar("NodeT")
T = TypeVar("T")
U = TypeVar("U")


class Encode(Generic[NodeT]):
    """Encoder combinators bound to one backend.

    Args:
        backend: Any ``EncodeBackend``-conformant object.
    """

    def __init__(self, backend: EncodeBackend[NodeT]) -> None:
        self._backend = backend

    def __repr__(self) -> str:
        return f"Encode({self._backend!r})"

    @property
    def backend(self) -> EncodeBackend[NodeT]:
        return self._backend

    # ------------------------------------------------------------------
    # Backend primitives
    # ------------------------------------------------------------------

    def encode(self, encoder: Encoder[T, NodeT], value: T) -> str:
        return self._backend.encode(encoder, value)

    def null(self, value: None = None) -> NodeT:
        return self._backend.null(value)

    def json(self, value: NodeT) -> NodeT:
        return self._backend.json(value)

    def bool(self, value: builtins.bool) -> NodeT:
        return self._backend.bool(value)

    def int(self, value: builtins.int) -> NodeT:
        return self._backend.int(value)

    def float(self, value: builtins.float) -> NodeT:
        return self._backend.float(value)

    def string(self, value: str) -> NodeT:
        return self._backend.string(value)

    def list(self, encoder: Encoder[T, NodeT]) -> Encoder[builtins.list[T], NodeT]:
        return self._backend.list(encoder)

    def array(self, encoder: Encoder[T, NodeT]) -> Encoder[Sequence[T], NodeT]:
        return self._backend.array(encoder)

    def nullable(self, encoder: Encoder[T, NodeT]) -> Encoder[T | None, NodeT]:
        return self._backend.nullable(encoder)

    def singleton(self, encoder: Encoder[T, NodeT]) -> Encoder[T, NodeT]:
        return self._backend.singleton(encoder)

    def obj(self, fields: Fields[NodeT]) -> NodeT:
        return self._backend.obj(fields)

    def dict(self, encoder: Encoder[T, NodeT]) -> Encoder[Fields[T], NodeT]:
        return self._backend.dict(encoder)

    # ------------------------------------------------------------------
    # Derived combinators
    # ------------------------------------------------------------------

    def map(self, f: Callable[[U], T], encoder: Encoder[T, NodeT]) -> Encoder[U, NodeT]:
        """Reuse ``encoder`` for another type by transforming values first."""

        def encode_mapped(value: U) -> NodeT:
            return encoder(f(value))

        return encode_mapped
