"""Tests for integer lifting into the Goldilocks field."""

import numpy as np

from primitives.field import FF, GOLDILOCKS_PRIME, field_to_ints, to_field


def test_to_field_keeps_non_negative_values() -> None:
    """Non-negative ints map to themselves."""
    result = to_field([0, 1, 2, 12345])
    assert np.array_equal(result, FF([0, 1, 2, 12345]))


def test_to_field_wraps_negative_values() -> None:
    """Negative ints map to p - |v|."""
    result = to_field([-1, -2])
    assert np.array_equal(field_to_ints(result), np.array([GOLDILOCKS_PRIME - 1, GOLDILOCKS_PRIME - 2], dtype=np.uint64))


def test_negative_selector_cancels() -> None:
    """-2 lifted into FF behaves as the additive inverse of 2."""
    assert to_field([-2])[0] + FF(2) == FF(0)


def test_to_field_empty() -> None:
    """Empty input returns empty output."""
    assert len(to_field([])) == 0
