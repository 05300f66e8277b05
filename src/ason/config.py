"""BackendConfig and DuplicateKeys for backend configuration.

BackendConfig is a frozen (immutable) dataclass holding the options a backend
needs to parse and print text.  The combinators themselves take no
configuration; only the edges (text in, text out) and the ``float`` decoder
consult it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["BackendConfig", "DuplicateKeys"]


class DuplicateKeys(StrEnum):
    """What a backend's parser does when an object repeats a field name.

    - FIRST: keep the first occurrence (matches field lookup semantics).
    - LAST:  keep the last occurrence.
    - ERROR: reject the document as a parse fault.
    """

    FIRST = auto()
    LAST = auto()
    ERROR = auto()


@dataclass(frozen=True, slots=True)
class BackendConfig:
    """Immutable configuration shared by the bundled backends.

    Attributes:
        duplicate_keys: Policy for repeated names in a parsed object.
        int_as_float: When True, the ``float`` decoder also accepts int nodes
            and returns them as ``float``.  Default False (an int node is a
            type mismatch, as ``1`` and ``1.0`` are distinct node kinds).
        indent: Indentation used by ``encode``.  ``None`` prints compactly.
        sort_keys: Sort object keys when printing.
        ensure_ascii: Escape non-ASCII characters when printing.
        allow_nan: Accept and emit ``NaN`` / ``Infinity``.
    """

    duplicate_keys: DuplicateKeys = DuplicateKeys.FIRST
    int_as_float: bool = False
    indent: int | None = None
    sort_keys: bool = False
    ensure_ascii: bool = False
    allow_nan: bool = True

    def __post_init__(self) -> None:
        # Accept plain strings ("first", "last", "error") as well as members.
        try:
            policy = DuplicateKeys(self.duplicate_keys)
        except ValueError:
            msg = (
                "duplicate_keys must be one of "
                f"{[m.value for m in DuplicateKeys]}, got {self.duplicate_keys!r}"
            )
            raise ValueError(msg) from None
        object.__setattr__(self, "duplicate_keys", policy)
        if self.indent is not None and self.indent < 0:
            msg = f"indent must be None or >= 0, got {self.indent}"
            raise ValueError(msg)
