"""Tests for BackendConfig frozen dataclass and DuplicateKeys StrEnum.

Covers:
- DuplicateKeys has exactly three lowercase values
- Default values
- Immutability (FrozenInstanceError on assignment)
- duplicate_keys accepts plain strings and rejects unknown policies
- indent must be None or >= 0
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from ason.config import BackendConfig, DuplicateKeys

# ---------------------------------------------------------------------------
# DuplicateKeys
# ---------------------------------------------------------------------------


class TestDuplicateKeys:
    def test_has_exactly_three_members(self) -> None:
        assert len(list(DuplicateKeys)) == 3

    def test_values(self) -> None:
        assert DuplicateKeys.FIRST == "first"
        assert DuplicateKeys.LAST == "last"
        assert DuplicateKeys.ERROR == "error"

    def test_is_str_subclass(self) -> None:
        assert isinstance(DuplicateKeys.FIRST, str)


# ---------------------------------------------------------------------------
# BackendConfig
# ---------------------------------------------------------------------------


class TestBackendConfigDefaults:
    def test_defaults(self) -> None:
        config = BackendConfig()
        assert config.duplicate_keys is DuplicateKeys.FIRST
        assert config.int_as_float is False
        assert config.indent is None
        assert config.sort_keys is False
        assert config.ensure_ascii is False
        assert config.allow_nan is True

    def test_equal_configs_compare_equal(self) -> None:
        assert BackendConfig() == BackendConfig()


class TestBackendConfigValidation:
    def test_string_policy_is_coerced(self) -> None:
        config = BackendConfig(duplicate_keys="last")  # type: ignore[arg-type]
        assert config.duplicate_keys is DuplicateKeys.LAST

    def test_unknown_policy_rejected(self) -> None:
        with pytest.raises(ValueError, match="duplicate_keys"):
            BackendConfig(duplicate_keys="merge")  # type: ignore[arg-type]

    def test_negative_indent_rejected(self) -> None:
        with pytest.raises(ValueError, match="indent"):
            BackendConfig(indent=-1)

    def test_zero_indent_accepted(self) -> None:
        assert BackendConfig(indent=0).indent == 0


class TestBackendConfigImmutability:
    def test_cannot_assign(self) -> None:
        config = BackendConfig()
        with pytest.raises(FrozenInstanceError):
            config.indent = 2  # type: ignore[misc]
