"""pytest plugin for ason.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any, TypeVar

import pytest
from returns.result import Failure, Success

from ason import api
from ason.decode import Decode
from ason.encode import Encode
from ason.errors import error_to_string
from ason.protocols import Decoder, Encoder

__all__ = ["assert_round_trip", "check_round_trip"]

T = TypeVar("T")


def check_round_trip(
    value: T,
    encoder: Encoder[T, Any],
    decoder: Decoder[Any, T],
    encoding: Encode[Any] | None = None,
    decoding: Decode[Any] | None = None,
) -> None:
    """Assert that ``value`` survives encode -> print -> parse -> decode.

    Args:
        value:    The typed value to round-trip.
        encoder:  Encoder for ``value``.
        decoder:  Decoder expected to reproduce ``value``.
        encoding: Encode instance to print with.  Defaults to ``api.encoding``.
        decoding: Decode instance to parse with.  Defaults to ``api.decoding``.

    Raises:
        AssertionError: When decoding fails (the message carries the rendered,
            path-qualified error) or produces a different value.
    """
    encoding = encoding if encoding is not None else api.encoding
    decoding = decoding if decoding is not None else api.decoding
    text = encoding.encode(encoder, value)
    match decoding.parse(decoder, text):
        case Success(decoded):
            if decoded != value:
                raise AssertionError(
                    f"round trip changed the value:\n"
                    f"  original: {value!r}\n"
                    f"  decoded:  {decoded!r}\n"
                    f"  text:     {text}"
                )
        case Failure(error):
            raise AssertionError(
                f"round trip failed to decode: {error_to_string(error)}\n"
                f"  original: {value!r}\n"
                f"  text:     {text}"
            )


@pytest.fixture(scope="session")
def assert_round_trip() -> Any:
    """Fixture that returns ``check_round_trip``.

    The fixture is session-scoped because the returned callable is stateless.

    Usage in tests::

        def test_points(assert_round_trip):
            from ason import decoding as D, encoding as E

            assert_round_trip([1, 2], E.list(E.int), D.list(D.int))

    Returns:
        ``check_round_trip(value, encoder, decoder, encoding=None, decoding=None)``.
    """
    return check_round_trip
