"""Goldilocks field GF(p) used by the constraint system.

Uses galois library for all field arithmetic. FF is the field type; witness
values and gate selectors are lifted into FF arrays so a whole circuit can be
checked with a handful of vectorized operations.
"""

from typing import Sequence

import galois
import numpy as np

# --- Field Construction ---

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

FF = galois.GF(GOLDILOCKS_PRIME)
"""Base field GF(p) - Goldilocks prime field."""


# --- Integer Lifting ---
# Gate selectors are small signed integers (-2..2). numpy cannot reduce them
# modulo p in int64 since p > 2^63, so negatives are mapped by hand.


def to_field(values: Sequence[int]) -> FF:
    """Lift a sequence of (possibly negative) Python ints into an FF array.

    Args:
        values: Integers with |v| < p

    Returns:
        FF array with values[i] mod p
    """
    signed = np.asarray(values, dtype=np.int64)
    lifted = signed.astype(np.uint64)
    negative = signed < 0
    if negative.any():
        lifted[negative] = np.uint64(GOLDILOCKS_PRIME) - (-signed[negative]).astype(np.uint64)
    return FF(lifted)


def field_to_ints(values: FF) -> np.ndarray:
    """Return the canonical integer representatives of an FF array."""
    return values.view(np.ndarray)
