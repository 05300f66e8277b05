"""Tests for the Decode extension layer.

Covers:
- Primitives are delegated to the wrapped backend unchanged
- map: transforms successes, passes failures through untouched
- map_option: None becomes ValidationError, distinct from TypeMismatch
- or_: first success wins, second branch runs only after a failure,
  both failures are kept in OrError
- ignore, decode
- decode_or_fail / parse_or_fail raise DecodeFailure with the rendered message
- Any Protocol-conformant backend gets the extension layer
"""

from __future__ import annotations

from typing import Any

import pytest
from returns.result import Failure, Success

from ason.backends import StdlibDecodeBackend
from ason.decode import Decode
from ason.errors import (
    ArrayError,
    BackendError,
    DecodeFailure,
    FieldError,
    NotFound,
    OrError,
    TypeMismatch,
    ValidationError,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def D() -> Decode[Any]:  # noqa: N802
    return Decode(StdlibDecodeBackend())


# ---------------------------------------------------------------------------
# Delegation
# ---------------------------------------------------------------------------


class TestDelegation:
    def test_backend_property(self) -> None:
        backend = StdlibDecodeBackend()
        assert Decode(backend).backend is backend

    def test_primitives_match_backend(self, D: Decode[Any]) -> None:  # noqa: N803
        backend = D.backend
        for node in [None, True, 1, 1.5, "s", [1], {"a": 1}]:
            assert D.int(node) == backend.int(node)
            assert D.string(node) == backend.string(node)
            assert D.is_obj(node) == backend.is_obj(node)

    def test_field_default_is_forwarded(self, D: Decode[Any]) -> None:  # noqa: N803
        assert D.field("x", D.int, default=9)({}) == Success(9)
        assert D.field("x", D.int)({}) == Failure(FieldError("x", NotFound()))

    def test_repr_names_backend(self, D: Decode[Any]) -> None:  # noqa: N803
        assert "StdlibDecodeBackend" in repr(D)


# ---------------------------------------------------------------------------
# map / map_option
# ---------------------------------------------------------------------------


class TestMap:
    def test_map_success(self, D: Decode[Any]) -> None:  # noqa: N803
        assert D.map(str.upper, D.string)("abc") == Success("ABC")

    def test_map_failure_unchanged(self, D: Decode[Any]) -> None:  # noqa: N803
        calls: list[object] = []
        decoder = D.map(calls.append, D.string)
        assert decoder(1) == Failure(TypeMismatch("string"))
        assert calls == []

    def test_map_inside_structure_keeps_path(self, D: Decode[Any]) -> None:  # noqa: N803
        decoder = D.field("n", D.map(lambda n: n * 2, D.int))
        assert decoder({"n": 2}) == Success(4)
        assert decoder({"n": "2"}) == Failure(FieldError("n", TypeMismatch("int")))


class TestMapOption:
    @staticmethod
    def positive(n: int) -> int | None:
        return n if n > 0 else None

    def test_accepted(self, D: Decode[Any]) -> None:  # noqa: N803
        assert D.map_option(self.positive, D.int)(3) == Success(3)

    def test_rejected_is_validation_error(self, D: Decode[Any]) -> None:  # noqa: N803
        result = D.map_option(self.positive, D.int)(-3)
        assert result == Failure(ValidationError("map_option"))

    def test_custom_reason(self, D: Decode[Any]) -> None:  # noqa: N803
        result = D.map_option(self.positive, D.int, reason="must be positive")(0)
        assert result == Failure(ValidationError("must be positive"))

    def test_type_error_is_not_validation_error(self, D: Decode[Any]) -> None:  # noqa: N803
        result = D.map_option(self.positive, D.int)("3")
        assert result == Failure(TypeMismatch("int"))

    def test_falsy_values_are_accepted(self, D: Decode[Any]) -> None:  # noqa: N803
        assert D.map_option(lambda s: s, D.string)("") == Success("")
        assert D.map_option(lambda n: n, D.int)(0) == Success(0)

    def test_path_added_only_by_enclosing_structure(self, D: Decode[Any]) -> None:  # noqa: N803
        decoder = D.list(D.map_option(self.positive, D.int))
        assert decoder([1, 0]) == Failure(ArrayError(1, ValidationError("map_option")))


# ---------------------------------------------------------------------------
# or_
# ---------------------------------------------------------------------------


class TestOr:
    def test_first_branch(self, D: Decode[Any]) -> None:  # noqa: N803
        assert D.or_(D.int, D.map(len, D.string))(5) == Success(5)

    def test_second_branch(self, D: Decode[Any]) -> None:  # noqa: N803
        assert D.or_(D.int, D.map(len, D.string))("hello") == Success(5)

    def test_both_fail(self, D: Decode[Any]) -> None:  # noqa: N803
        result = D.or_(D.int, D.string)(True)
        assert result == Failure(OrError(TypeMismatch("int"), TypeMismatch("string")))

    def test_second_not_run_when_first_succeeds(self, D: Decode[Any]) -> None:  # noqa: N803
        def boom(node: object) -> Any:
            raise AssertionError("second branch must not run")

        assert D.or_(D.int, boom)(1) == Success(1)

    def test_first_runs_before_second(self, D: Decode[Any]) -> None:  # noqa: N803
        order: list[str] = []

        def first(node: object) -> Any:
            order.append("first")
            return D.int(node)

        def second(node: object) -> Any:
            order.append("second")
            return D.string(node)

        D.or_(first, second)(None)
        assert order == ["first", "second"]

    def test_nested_or_keeps_every_cause(self, D: Decode[Any]) -> None:  # noqa: N803
        decoder = D.or_(D.or_(D.int, D.string), D.bool)
        result = decoder(None)
        assert result == Failure(
            OrError(OrError(TypeMismatch("int"), TypeMismatch("string")), TypeMismatch("bool"))
        )


# ---------------------------------------------------------------------------
# ignore / decode / *_or_fail
# ---------------------------------------------------------------------------


class TestEntryPoints:
    @pytest.mark.parametrize("node", [None, 1, "x", [1], {"a": 1}])
    def test_ignore(self, D: Decode[Any], node: object) -> None:  # noqa: N803
        assert D.ignore(node) == Success(None)

    def test_ignore_as_field(self, D: Decode[Any]) -> None:  # noqa: N803
        assert D.field("marker", D.ignore)({"marker": [1, 2]}) == Success(None)
        assert D.field("marker", D.ignore)({}) == Failure(FieldError("marker", NotFound()))

    def test_decode(self, D: Decode[Any]) -> None:  # noqa: N803
        assert D.decode(D.list(D.int), [1, 2]) == Success([1, 2])

    def test_decode_or_fail_success(self, D: Decode[Any]) -> None:  # noqa: N803
        assert D.decode_or_fail(D.int, 3) == 3

    def test_decode_or_fail_message(self, D: Decode[Any]) -> None:  # noqa: N803
        with pytest.raises(DecodeFailure) as exc_info:
            D.decode_or_fail(D.field("age", D.int), {"age": "x"})
        assert str(exc_info.value) == 'field "age": expected int'
        assert exc_info.value.error == FieldError("age", TypeMismatch("int"))

    def test_parse_or_fail_success(self, D: Decode[Any]) -> None:  # noqa: N803
        assert D.parse_or_fail(D.pair(D.int, D.string), '[1, "a"]') == (1, "a")

    def test_parse_or_fail_on_malformed_text(self, D: Decode[Any]) -> None:  # noqa: N803
        with pytest.raises(DecodeFailure) as exc_info:
            D.parse_or_fail(D.int, "[")
        assert isinstance(exc_info.value.error, BackendError)
        assert str(exc_info.value) == D.error_to_string(exc_info.value.error)

    def test_error_to_string(self, D: Decode[Any]) -> None:  # noqa: N803
        assert D.error_to_string(ArrayError(1, NotFound())) == "element at index 1: missing"


# ---------------------------------------------------------------------------
# Custom backends
# ---------------------------------------------------------------------------


class _UpperCaseBackend(StdlibDecodeBackend):
    """A backend whose string decoder upper-cases everything it reads."""

    def string(self, node: Any) -> Any:
        return super().string(node).map(str.upper)


class TestCustomBackend:
    def test_extension_layer_uses_backend_primitives(self) -> None:
        D = Decode(_UpperCaseBackend())  # noqa: N806
        decoder = D.or_(D.int, D.map(lambda s: s + "!", D.string))
        assert D.parse(decoder, '"hi"') == Success("HI!")
