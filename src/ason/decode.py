"""Decode: extension layer over any DecodeBackend.

Wraps a backend and re-exposes every primitive it provides, plus the
combinators derivable from those primitives alone: ``map``, ``map_option``,
alternation (``or_``), ``ignore`` and the ``decode`` / ``*_or_fail`` entry
points.  Any object satisfying the ``DecodeBackend`` Protocol gets the
extension layer for free.

Example::

    from ason.backends import StdlibDecodeBackend
    from ason.decode import Decode

    D = Decode(StdlibDecodeBackend())
    age = D.field("age", D.int, default=0)
    D.parse(age, '{"name": "Ada"}')        # <Success: 0>
    D.parse(age, '{"age": "old"}')         # <Failure: FieldError(name='age', cause=TypeMismatch(...))>
"""

from __future__ import annotations

import builtins
from collections.abc import Callable
from functools import partial
from typing import Any, Generic, TypeVar

from returns.result import Failure, Success
from structlog import get_logger

from ason.errors import (
    DecodeError,
    DecodeResult,
    OrError,
    ValidationError,
    error_to_string,
    unwrap_or_raise,
)
from ason.protocols import NO_DEFAULT, DecodeBackend, Decoder

__all__ = ["Decode"]

logger = get_logger()

NodeT = TypeVar("NodeT")
T = TypeVar("T")
U = TypeVar("U")


class Decode(Generic[NodeT]):
    """Decoder combinators bound to one backend.

    The wrapper holds no state besides the backend, so one instance can be
    shared freely (including across threads).

    Args:
        backend: Any ``DecodeBackend``-conformant object.
    """

    def __init__(self, backend: DecodeBackend[NodeT]) -> None:
        self._backend = backend
        self.log = logger.new(backend=type(backend).__name__)

    def __repr__(self) -> str:
        return f"Decode({self._backend!r})"

    @property
    def backend(self) -> DecodeBackend[NodeT]:
        return self._backend

    # ------------------------------------------------------------------
    # Backend primitives
    # ------------------------------------------------------------------

    def parse(self, decoder: Decoder[NodeT, T], text: str | bytes) -> DecodeResult[T]:
        return self._backend.parse(decoder, text)

    def null(self, node: NodeT) -> DecodeResult[None]:
        return self._backend.null(node)

    def json(self, node: NodeT) -> DecodeResult[NodeT]:
        return self._backend.json(node)

    def bool(self, node: NodeT) -> DecodeResult[builtins.bool]:
        return self._backend.bool(node)

    def int(self, node: NodeT) -> DecodeResult[builtins.int]:
        return self._backend.int(node)

    def float(self, node: NodeT) -> DecodeResult[builtins.float]:
        return self._backend.float(node)

    def string(self, node: NodeT) -> DecodeResult[str]:
        return self._backend.string(node)

    def list(self, decoder: Decoder[NodeT, T]) -> Decoder[NodeT, builtins.list[T]]:
        return self._backend.list(decoder)

    def array(self, decoder: Decoder[NodeT, T]) -> Decoder[NodeT, tuple[T, ...]]:
        return self._backend.array(decoder)

    def singleton(self, decoder: Decoder[NodeT, T]) -> Decoder[NodeT, T]:
        return self._backend.singleton(decoder)

    def pair(
        self, decoder_a: Decoder[NodeT, T], decoder_b: Decoder[NodeT, U]
    ) -> Decoder[NodeT, tuple[T, U]]:
        return self._backend.pair(decoder_a, decoder_b)

    def field(
        self, name: str, decoder: Decoder[NodeT, T], default: Any = NO_DEFAULT
    ) -> Decoder[NodeT, T]:
        return self._backend.field(name, decoder, default=default)

    def obj(self, node: NodeT) -> DecodeResult[builtins.list[tuple[str, NodeT]]]:
        return self._backend.obj(node)

    def dict(
        self, decoder: Decoder[NodeT, T]
    ) -> Decoder[NodeT, builtins.list[tuple[str, T]]]:
        return self._backend.dict(decoder)

    def nullable(self, decoder: Decoder[NodeT, T]) -> Decoder[NodeT, T | None]:
        return self._backend.nullable(decoder)

    def is_null(self, node: NodeT) -> builtins.bool:
        return self._backend.is_null(node)

    def is_bool(self, node: NodeT) -> builtins.bool:
        return self._backend.is_bool(node)

    def is_int(self, node: NodeT) -> builtins.bool:
        return self._backend.is_int(node)

    def is_float(self, node: NodeT) -> builtins.bool:
        return self._backend.is_float(node)

    def is_string(self, node: NodeT) -> builtins.bool:
        return self._backend.is_string(node)

    def is_array(self, node: NodeT) -> builtins.bool:
        return self._backend.is_array(node)

    def is_obj(self, node: NodeT) -> builtins.bool:
        return self._backend.is_obj(node)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def decode(self, decoder: Decoder[NodeT, T], node: NodeT) -> DecodeResult[T]:
        """Apply ``decoder`` to an already parsed node."""
        return decoder(node)

    def decode_or_fail(self, decoder: Decoder[NodeT, T], node: NodeT) -> T:
        """Like ``decode`` but raise ``DecodeFailure`` on failure.

        Meant for the edges of a program; never call it inside a decoder.
        """
        return self._unwrap(decoder(node))

    def parse_or_fail(self, decoder: Decoder[NodeT, T], text: str | bytes) -> T:
        """Like ``parse`` but raise ``DecodeFailure`` on failure."""
        return self._unwrap(self.parse(decoder, text))

    def _unwrap(self, result: DecodeResult[T]) -> T:
        if isinstance(result, Failure):
            self.log.debug("decode failed", error=error_to_string(result.failure()))
        return unwrap_or_raise(result)

    @staticmethod
    def error_to_string(error: DecodeError) -> str:
        return error_to_string(error)

    # ------------------------------------------------------------------
    # Derived combinators
    # ------------------------------------------------------------------

    def ignore(self, node: NodeT) -> DecodeResult[None]:
        """Accept any node and discard it."""
        return Success(None)

    def map(self, f: Callable[[T], U], decoder: Decoder[NodeT, T]) -> Decoder[NodeT, U]:
        """Decode with ``decoder`` then transform the value with ``f``."""

        def decode_mapped(node: NodeT) -> DecodeResult[U]:
            return decoder(node).map(f)

        return decode_mapped

    def map_option(
        self,
        f: Callable[[T], U | None],
        decoder: Decoder[NodeT, T],
        reason: str = "map_option",
    ) -> Decoder[NodeT, U]:
        """Decode then transform with ``f``, rejecting values ``f`` maps to None.

        A rejection is a ``ValidationError(reason)``: the node had the right
        shape but an unacceptable value.
        """

        def accept(value: T) -> DecodeResult[U]:
            mapped = f(value)
            if mapped is None:
                return Failure(ValidationError(reason))
            return Success(mapped)

        def decode_checked(node: NodeT) -> DecodeResult[U]:
            return decoder(node).bind(accept)

        return decode_checked

    def or_(self, first: Decoder[NodeT, T], second: Decoder[NodeT, T]) -> Decoder[NodeT, T]:
        """Try ``first``; only if it fails, try ``second`` on the same node.

        When both fail the result is ``OrError(first_error, second_error)``,
        keeping the diagnostics of both branches.
        """

        def decode_either(node: NodeT) -> DecodeResult[T]:
            match first(node):
                case Success() as success:
                    return success
                case Failure(first_error):
                    return second(node).alt(partial(OrError, first_error))

        return decode_either  # type: ignore[return-value]
