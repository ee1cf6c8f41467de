"""
Unit Tests for Field Changes.
"""

import pytest

from cardbox.backend.core.field_change import (
    CLEAR,
    UNSET,
    Clear,
    SetValue,
    Unset,
    resolve,
)


class TestMarkers:
    """Tests for the Unset and Clear markers."""

    def test_unset_is_singleton(self):
        assert Unset() is UNSET

    def test_clear_is_singleton(self):
        assert Clear() is CLEAR

    def test_markers_are_distinct(self):
        assert UNSET is not CLEAR

    def test_repr(self):
        assert repr(UNSET) == "UNSET"
        assert repr(CLEAR) == "CLEAR"


class TestSetValue:
    """Tests for SetValue."""

    def test_equality_by_value(self):
        assert SetValue("a") == SetValue("a")
        assert SetValue("a") != SetValue("b")

    def test_is_frozen(self):
        change = SetValue(1)
        with pytest.raises(AttributeError):
            change.value = 2

    def test_falsy_values_are_still_set(self):
        """Empty values are still values, not clears."""
        assert resolve(SetValue("")) == ""
        assert resolve(SetValue([])) == []


class TestResolve:
    """Tests for resolve."""

    def test_set_value_resolves_to_value(self):
        assert resolve(SetValue(["a", "b"])) == ["a", "b"]

    def test_clear_resolves_to_none(self):
        assert resolve(CLEAR) is None

    def test_unset_has_no_value(self):
        with pytest.raises(ValueError, match="Unset"):
            resolve(UNSET)
