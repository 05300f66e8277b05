"""Standard-library backends: nodes are native Python JSON values.

A node is ``None``, ``bool``, ``int``, ``float``, ``str``, a ``list`` of nodes
or a ``dict`` mapping field names to nodes.  Text is parsed and printed with
the standard-library ``json`` module, so this backend needs no third-party
dependency and is always importable.

Objects keep insertion order.  When a parsed document repeats a field name,
``BackendConfig.duplicate_keys`` decides which occurrence survives (the first
one by default, matching field lookup semantics).

Example::

    from ason.backends import StdlibDecodeBackend

    backend = StdlibDecodeBackend()
    backend.parse(backend.field("age", backend.int), '{"age": 42}')
    # <Success: 42>
"""

from __future__ import annotations

import builtins
import json
from collections.abc import Callable, Mapping, Sequence
from functools import partial
from typing import Any, TypeAlias, TypeVar

from returns.result import Failure, Success
from structlog import get_logger

from ason.config import BackendConfig, DuplicateKeys
from ason.errors import (
    ArrayError,
    BackendError,
    DecodeResult,
    FieldError,
    NotFound,
    TypeMismatch,
)
from ason.protocols import NO_DEFAULT, Decoder, Encoder, Fields

__all__ = ["JsonValue", "StdlibDecodeBackend", "StdlibEncodeBackend"]

logger = get_logger()

# Type alias for the node type of this backend
JsonValue: TypeAlias = dict[str, Any] | list[Any] | str | int | float | bool | None

T = TypeVar("T")
U = TypeVar("U")


def _keep_first(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for name, value in pairs:
        obj.setdefault(name, value)
    return obj


def _reject_duplicates(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for name, value in pairs:
        if name in obj:
            raise ValueError(f"duplicate field {name!r}")
        obj[name] = value
    return obj


def _reject_constant(constant: str) -> Any:
    raise ValueError(f"non-finite number {constant} is not allowed")


_OBJECT_HOOKS: dict[DuplicateKeys, Callable[[list[tuple[str, Any]]], dict[str, Any]]] = {
    DuplicateKeys.FIRST: _keep_first,
    DuplicateKeys.LAST: dict,
    DuplicateKeys.ERROR: _reject_duplicates,
}


class StdlibEncodeBackend:
    """Encode backend producing native Python JSON values.

    Satisfies the ``EncodeBackend`` Protocol structurally.  Scalar encoders
    coerce their input to the node kind they promise (``float(1)`` is encoded
    as ``1.0``), so a value always decodes back with the matching decoder.

    Args:
        config: Printing options.  Defaults to ``BackendConfig()``.
    """

    def __init__(self, config: BackendConfig | None = None) -> None:
        self._config: BackendConfig = config if config is not None else BackendConfig()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(config={self._config!r})"

    @property
    def config(self) -> BackendConfig:
        return self._config

    # ------------------------------------------------------------------
    # Text boundary
    # ------------------------------------------------------------------

    def encode(self, encoder: Encoder[T, JsonValue], value: T) -> str:
        """Encode ``value`` and print the resulting node as JSON text."""
        return self._dumps(encoder(value))

    def _dumps(self, node: JsonValue) -> str:
        return json.dumps(
            node,
            indent=self._config.indent,
            sort_keys=self._config.sort_keys,
            ensure_ascii=self._config.ensure_ascii,
            allow_nan=self._config.allow_nan,
        )

    # ------------------------------------------------------------------
    # Primitive encoders
    # ------------------------------------------------------------------

    def null(self, value: None = None) -> JsonValue:
        return None

    def json(self, value: JsonValue) -> JsonValue:
        return value

    def bool(self, value: builtins.bool) -> JsonValue:
        return bool(value)

    def int(self, value: builtins.int) -> JsonValue:
        return int(value)

    def float(self, value: builtins.float) -> JsonValue:
        return float(value)

    def string(self, value: str) -> JsonValue:
        return value

    # ------------------------------------------------------------------
    # Structural encoders
    # ------------------------------------------------------------------

    def list(self, encoder: Encoder[T, JsonValue]) -> Encoder[builtins.list[T], JsonValue]:
        def encode_list(values: builtins.list[T]) -> JsonValue:
            return [encoder(value) for value in values]

        return encode_list

    def array(self, encoder: Encoder[T, JsonValue]) -> Encoder[Sequence[T], JsonValue]:
        def encode_array(values: Sequence[T]) -> JsonValue:
            return [encoder(value) for value in values]

        return encode_array

    def nullable(self, encoder: Encoder[T, JsonValue]) -> Encoder[T | None, JsonValue]:
        def encode_nullable(value: T | None) -> JsonValue:
            return None if value is None else encoder(value)

        return encode_nullable

    def singleton(self, encoder: Encoder[T, JsonValue]) -> Encoder[T, JsonValue]:
        def encode_singleton(value: T) -> JsonValue:
            return [encoder(value)]

        return encode_singleton

    def obj(self, fields: Fields[JsonValue]) -> JsonValue:
        """Build an object node from ordered entries.

        A node is a ``dict`` and cannot hold a name twice: the first entry of a
        repeated name wins and later ones are dropped from the printed text.
        """
        entries = fields.items() if isinstance(fields, Mapping) else fields
        node: builtins.dict[str, JsonValue] = {}
        for name, value in entries:
            node.setdefault(name, value)
        return node

    def dict(self, encoder: Encoder[T, JsonValue]) -> Encoder[Fields[T], JsonValue]:
        """Encode every value with ``encoder``; repeated names collapse as in ``obj``."""

        def encode_dict(fields: Fields[T]) -> JsonValue:
            entries = fields.items() if isinstance(fields, Mapping) else fields
            return self.obj((name, encoder(value)) for name, value in entries)

        return encode_dict


class StdlibDecodeBackend:
    """Decode backend over native Python JSON values.

    Satisfies the ``DecodeBackend`` Protocol structurally.  ``bool`` is
    checked before ``int`` everywhere because ``bool`` subclasses ``int`` in
    Python: ``True`` is never accepted by the ``int`` decoder.

    Args:
        config: Parsing options.  Defaults to ``BackendConfig()``.
    """

    def __init__(self, config: BackendConfig | None = None) -> None:
        self._config: BackendConfig = config if config is not None else BackendConfig()
        self.log = logger.new(backend=type(self).__name__)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(config={self._config!r})"

    @property
    def config(self) -> BackendConfig:
        return self._config

    # ------------------------------------------------------------------
    # Text boundary
    # ------------------------------------------------------------------

    def parse(self, decoder: Decoder[JsonValue, T], text: str | bytes) -> DecodeResult[T]:
        """Parse ``text`` and apply ``decoder`` to the root node.

        A parser fault (malformed text, a rejected duplicate field, nesting
        beyond the interpreter's recursion limit) is returned as
        ``BackendError`` rather than raised.
        """
        try:
            node = self._loads(text)
        except (ValueError, RecursionError) as exc:
            self.log.debug("parse failed", exc=repr(exc))
            return Failure(BackendError(exc))
        return decoder(node)

    def _loads(self, text: str | bytes) -> JsonValue:
        kwargs: builtins.dict[str, Any] = {
            "object_pairs_hook": _OBJECT_HOOKS[self._config.duplicate_keys],
        }
        if not self._config.allow_nan:
            kwargs["parse_constant"] = _reject_constant
        return json.loads(text, **kwargs)  # type: ignore[no-any-return]

    # ------------------------------------------------------------------
    # Primitive decoders
    # ------------------------------------------------------------------

    def null(self, node: JsonValue) -> DecodeResult[None]:
        if self.is_null(node):
            return Success(None)
        return Failure(TypeMismatch("null"))

    def json(self, node: JsonValue) -> DecodeResult[JsonValue]:
        return Success(node)

    def bool(self, node: JsonValue) -> DecodeResult[builtins.bool]:
        if self.is_bool(node):
            return Success(node)  # type: ignore[arg-type]
        return Failure(TypeMismatch("bool"))

    def int(self, node: JsonValue) -> DecodeResult[builtins.int]:
        if self.is_int(node):
            return Success(node)  # type: ignore[arg-type]
        return Failure(TypeMismatch("int"))

    def float(self, node: JsonValue) -> DecodeResult[builtins.float]:
        if self.is_float(node):
            return Success(node)  # type: ignore[arg-type]
        if self._config.int_as_float and self.is_int(node):
            return Success(float(node))  # type: ignore[arg-type]
        return Failure(TypeMismatch("float"))

    def string(self, node: JsonValue) -> DecodeResult[str]:
        if self.is_string(node):
            return Success(node)  # type: ignore[arg-type]
        return Failure(TypeMismatch("string"))

    # ------------------------------------------------------------------
    # Structural decoders
    # ------------------------------------------------------------------

    def list(self, decoder: Decoder[JsonValue, T]) -> Decoder[JsonValue, builtins.list[T]]:
        def decode_list(node: JsonValue) -> DecodeResult[builtins.list[T]]:
            if not isinstance(node, list):
                return Failure(TypeMismatch("array"))
            items: builtins.list[T] = []
            for index, item in enumerate(node):
                match decoder(item):
                    case Success(value):
                        items.append(value)
                    case Failure(error):
                        return Failure(ArrayError(index, error))
            return Success(items)

        return decode_list

    def array(self, decoder: Decoder[JsonValue, T]) -> Decoder[JsonValue, tuple[T, ...]]:
        decode_list = self.list(decoder)

        def decode_array(node: JsonValue) -> DecodeResult[tuple[T, ...]]:
            return decode_list(node).map(tuple)

        return decode_array

    def singleton(self, decoder: Decoder[JsonValue, T]) -> Decoder[JsonValue, T]:
        def decode_singleton(node: JsonValue) -> DecodeResult[T]:
            if not isinstance(node, list):
                return Failure(TypeMismatch("array"))
            if len(node) != 1:
                return Failure(TypeMismatch("array of one element", context="singleton"))
            return decoder(node[0]).alt(partial(ArrayError, 0))

        return decode_singleton

    def pair(
        self, decoder_a: Decoder[JsonValue, T], decoder_b: Decoder[JsonValue, U]
    ) -> Decoder[JsonValue, tuple[T, U]]:
        def decode_pair(node: JsonValue) -> DecodeResult[tuple[T, U]]:
            if not isinstance(node, list) or len(node) != 2:
                return Failure(TypeMismatch("array of two elements", context="pair"))
            second = node[1]
            return (
                decoder_a(node[0])
                .alt(partial(ArrayError, 0))
                .bind(
                    lambda a: decoder_b(second)
                    .alt(partial(ArrayError, 1))
                    .map(lambda b: (a, b))
                )
            )

        return decode_pair

    def field(
        self, name: str, decoder: Decoder[JsonValue, T], default: Any = NO_DEFAULT
    ) -> Decoder[JsonValue, T]:
        """Decode field ``name`` of an object node with ``decoder``.

        A null value counts as missing: with a ``default`` the default is
        returned without calling ``decoder``, otherwise the field fails with
        ``NotFound``.

        The default is returned as is, not copied, so every decoded value
        shares it.  Pass an immutable default (a tuple rather than a list).
        """

        def decode_field(node: JsonValue) -> DecodeResult[T]:
            if not isinstance(node, dict):
                return Failure(FieldError(name, TypeMismatch("object")))
            value = node.get(name)
            if value is None:
                if default is NO_DEFAULT:
                    return Failure(FieldError(name, NotFound()))
                return Success(default)
            return decoder(value).alt(partial(FieldError, name))

        return decode_field

    def obj(self, node: JsonValue) -> DecodeResult[builtins.list[tuple[str, JsonValue]]]:
        """Return the entries of an object node in document order.

        Repeated names were already resolved by the parser according to
        ``BackendConfig.duplicate_keys``, so each name appears once.
        """
        if not isinstance(node, dict):
            return Failure(TypeMismatch("object"))
        return Success(list(node.items()))

    def dict(
        self, decoder: Decoder[JsonValue, T]
    ) -> Decoder[JsonValue, builtins.list[tuple[str, T]]]:
        """Decode every field value with ``decoder``, failing on the first error.

        Only the occurrence of a repeated name kept by the parser is decoded;
        use ``DuplicateKeys.ERROR`` to reject such documents instead.
        """

        def decode_dict(node: JsonValue) -> DecodeResult[builtins.list[tuple[str, T]]]:
            if not isinstance(node, dict):
                return Failure(TypeMismatch("object"))
            entries: builtins.list[tuple[str, T]] = []
            for name, item in node.items():
                match decoder(item):
                    case Success(value):
                        entries.append((name, value))
                    case Failure(error):
                        return Failure(FieldError(name, error))
            return Success(entries)

        return decode_dict

    def nullable(self, decoder: Decoder[JsonValue, T]) -> Decoder[JsonValue, T | None]:
        def decode_nullable(node: JsonValue) -> DecodeResult[T | None]:
            if node is None:
                return Success(None)
            return decoder(node)

        return decode_nullable

    # ------------------------------------------------------------------
    # Kind predicates
    # ------------------------------------------------------------------

    def is_null(self, node: JsonValue) -> builtins.bool:
        return node is None

    def is_bool(self, node: JsonValue) -> builtins.bool:
        return isinstance(node, bool)

    def is_int(self, node: JsonValue) -> builtins.bool:
        # bool MUST be excluded: bool subclasses int
        return isinstance(node, int) and not isinstance(node, bool)

    def is_float(self, node: JsonValue) -> builtins.bool:
        return isinstance(node, float)

    def is_string(self, node: JsonValue) -> builtins.bool:
        return isinstance(node, str)

    def is_array(self, node: JsonValue) -> builtins.bool:
        return isinstance(node, list)

    def is_obj(self, node: JsonValue) -> builtins.bool:
        return isinstance(node, dict)
