"""Structured decode errors and their path-qualified rendering.

Every failure a decoder reports is one of the frozen dataclasses below.
Structural combinators wrap the failure of a child in a ``FieldError`` or an
``ArrayError``, so the rendered message reads as a breadcrumb trail from the
decode root to the failing node::

    field "items": element at index 1: expected int

Errors are plain values carried inside ``returns.result.Failure``.  The only
exception type is ``DecodeFailure``, raised by the ``*_or_fail`` helpers at the
edge of a program.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias, TypeVar, assert_never, final

from returns.result import Failure, Result, Success

__all__ = [
    "ArrayError",
    "BackendError",
    "DecodeError",
    "DecodeFailure",
    "DecodeResult",
    "FieldError",
    "NotFound",
    "OrError",
    "TypeMismatch",
    "ValidationError",
    "error_to_string",
    "unwrap_or_raise",
]


class _BaseDecodeError:
    __slots__ = ()

    @final
    def to_result(self) -> DecodeResult[Any]:
        return Failure(self)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return error_to_string(self)  # type: ignore[arg-type]


@dataclass(slots=True, frozen=True)
class FieldError(_BaseDecodeError):
    """Decoding the value of object field ``name`` failed with ``cause``."""

    name: str
    cause: DecodeError


@dataclass(slots=True, frozen=True)
class ArrayError(_BaseDecodeError):
    """Decoding the array element at ``index`` failed with ``cause``."""

    index: int
    cause: DecodeError


@dataclass(slots=True, frozen=True)
class TypeMismatch(_BaseDecodeError):
    """The node's kind (or shape) is not ``expected``.

    ``context`` is optional free text naming the combinator that ran the
    check, e.g. ``"pair"`` for an array of the wrong length.
    """

    expected: str
    context: str | None = None


@dataclass(slots=True, frozen=True)
class OrError(_BaseDecodeError):
    """Both branches of an alternation failed."""

    first: DecodeError
    second: DecodeError


@dataclass(slots=True, frozen=True)
class NotFound(_BaseDecodeError):
    """A required object field is absent or null."""


@dataclass(slots=True, frozen=True)
class ValidationError(_BaseDecodeError):
    """A ``map_option`` transform rejected an otherwise well-typed value."""

    reason: str


@dataclass(slots=True, frozen=True)
class BackendError(_BaseDecodeError):
    """The backend's own parser raised ``exception``."""

    exception: Exception


DecodeError: TypeAlias = (
    FieldError
    | ArrayError
    | TypeMismatch
    | OrError
    | NotFound
    | ValidationError
    | BackendError
)

T = TypeVar("T")
DecodeResult: TypeAlias = Result[T, DecodeError]


def error_to_string(error: DecodeError) -> str:
    """Render ``error`` as a single path-qualified message.

    Breadcrumbs are emitted outermost first.  The function is pure: the same
    error always renders to the same string.

    Example::

        >>> error_to_string(FieldError("age", TypeMismatch("int")))
        'field "age": expected int'
    """
    match error:
        case FieldError(name, cause):
            return f'field "{name}": {error_to_string(cause)}'
        case ArrayError(index, cause):
            return f"element at index {index}: {error_to_string(cause)}"
        case TypeMismatch(expected, None):
            return f"expected {expected}"
        case TypeMismatch(expected, context):
            return f"in {context}: expected {expected}"
        case OrError(first, second):
            return (
                f"both decoders failed: {error_to_string(first)}; "
                f"{error_to_string(second)}"
            )
        case NotFound():
            return "missing"
        case ValidationError(reason):
            return f"validation failed: {reason}"
        case BackendError(exception):
            return f"{type(exception).__name__}: {exception}"
        case _:
            assert_never(error)


@final
class DecodeFailure(ValueError):
    """Raised by ``decode_or_fail`` / ``parse_or_fail``.

    The message is exactly ``error_to_string(error)``; the structured error is
    kept on ``.error`` for callers that want to inspect it.
    """

    def __init__(self, error: DecodeError) -> None:
        super().__init__(error_to_string(error))
        self.error = error


def unwrap_or_raise(result: DecodeResult[T]) -> T:
    match result:
        case Success(value):
            return value  # type: ignore[no-any-return]
        case Failure(error):
            raise DecodeFailure(error)
        case _:
            assert_never(result)  # type: ignore[arg-type]
