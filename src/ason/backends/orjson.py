"""Orjson backends: native Python JSON values parsed and printed by orjson.

Node handling is shared with the standard-library backends; only the text
boundary changes.  ``orjson`` is imported lazily inside ``__init__`` so the
base install (no orjson) never triggers an ``ImportError`` at module level.

orjson keeps the last occurrence of a repeated field, indents only by two
spaces, always prints UTF-8 and rejects ``NaN``.  The default configuration
reflects that, and incompatible options are rejected at construction.

Numbers are limited to what orjson can represent.  Printing a non-finite
float or an integer outside the 64-bit range raises ``ValueError``, as the
standard-library backend does for ``NaN`` under ``allow_nan=False``.  Parsing
an integer literal outside that range yields a ``float`` node, so the ``int``
decoder rejects it with ``TypeMismatch``.

Install the optional dependency with::

    pip install ason[orjson]

Example::

    from ason.backends.orjson import OrjsonDecodeBackend

    backend = OrjsonDecodeBackend()
    backend.parse(backend.list(backend.int), b"[1, 2, 3]")
    # <Success: [1, 2, 3]>
"""

from __future__ import annotations

import math
from typing import Any

from ason.backends.stdlib import JsonValue, StdlibDecodeBackend, StdlibEncodeBackend
from ason.config import BackendConfig, DuplicateKeys

__all__ = ["ORJSON_DEFAULTS", "OrjsonDecodeBackend", "OrjsonEncodeBackend"]

ORJSON_DEFAULTS = BackendConfig(duplicate_keys=DuplicateKeys.LAST, allow_nan=False)


def _import_orjson(cls_name: str) -> Any:
    try:
        import orjson
    except ImportError as exc:
        raise ImportError(
            f"orjson is required for {cls_name}. "
            "Install with: pip install ason[orjson]"
        ) from exc
    return orjson


def _check_config(config: BackendConfig) -> None:
    if config.duplicate_keys is not DuplicateKeys.LAST:
        msg = f"orjson keeps the last duplicate field, got duplicate_keys={config.duplicate_keys!r}"
        raise ValueError(msg)
    if config.indent not in (None, 2):
        msg = f"orjson indents by 2 spaces only, got indent={config.indent}"
        raise ValueError(msg)
    if config.ensure_ascii:
        msg = "orjson always prints UTF-8, ensure_ascii=True is not supported"
        raise ValueError(msg)
    if config.allow_nan:
        msg = "orjson rejects NaN and Infinity, allow_nan=True is not supported"
        raise ValueError(msg)


_INT64_MIN = -(2**63)
_UINT64_MAX = 2**64 - 1


def _check_numbers(node: JsonValue) -> None:
    # orjson prints non-finite floats as null and raises TypeError on big ints
    if isinstance(node, float):
        if not math.isfinite(node):
            msg = f"Out of range float values are not JSON compliant: {node!r}"
            raise ValueError(msg)
    elif isinstance(node, int) and not isinstance(node, bool):
        if not _INT64_MIN <= node <= _UINT64_MAX:
            msg = f"orjson cannot print integers outside the 64-bit range, got {node}"
            raise ValueError(msg)
    elif isinstance(node, list):
        for item in node:
            _check_numbers(item)
    elif isinstance(node, dict):
        for item in node.values():
            _check_numbers(item)


class OrjsonEncodeBackend(StdlibEncodeBackend):
    """Encode backend printing with ``orjson.dumps``.

    ``encode`` raises ``ValueError`` for a non-finite float or an integer
    outside the 64-bit range instead of printing ``null`` or letting
    orjson's ``TypeError`` escape.

    Args:
        config: Printing options.  Defaults to ``ORJSON_DEFAULTS``.

    Raises:
        ImportError: If ``orjson`` is not installed.
        ValueError: If ``config`` asks for something orjson cannot do.
    """

    def __init__(self, config: BackendConfig | None = None) -> None:
        self._orjson = _import_orjson(type(self).__name__)
        config = config if config is not None else ORJSON_DEFAULTS
        _check_config(config)
        super().__init__(config)

    def _dumps(self, node: JsonValue) -> str:
        option = 0
        if self._config.indent == 2:
            option |= self._orjson.OPT_INDENT_2
        if self._config.sort_keys:
            option |= self._orjson.OPT_SORT_KEYS
        _check_numbers(node)
        # orjson.dumps returns bytes
        return self._orjson.dumps(node, option=option).decode("utf-8")  # type: ignore[no-any-return]


class OrjsonDecodeBackend(StdlibDecodeBackend):
    """Decode backend parsing with ``orjson.loads``.

    ``orjson.JSONDecodeError`` subclasses ``ValueError``, so parser faults
    surface as ``BackendError`` exactly as with the standard-library backend.
    Integer literals outside the 64-bit range are read as ``float`` nodes.

    Args:
        config: Parsing options.  Defaults to ``ORJSON_DEFAULTS``.

    Raises:
        ImportError: If ``orjson`` is not installed.
        ValueError: If ``config`` asks for something orjson cannot do.
    """

    def __init__(self, config: BackendConfig | None = None) -> None:
        self._orjson = _import_orjson(type(self).__name__)
        config = config if config is not None else ORJSON_DEFAULTS
        _check_config(config)
        super().__init__(config)

    def _loads(self, text: str | bytes) -> JsonValue:
        return self._orjson.loads(text)  # type: ignore[no-any-return]
