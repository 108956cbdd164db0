"""Primitives - Field arithmetic and the native Keccak-f[1600] reference."""

from primitives.field import (
    FF,
    GOLDILOCKS_PRIME,
    field_to_ints,
    to_field,
)
from primitives.keccak import (
    LANE_BITS,
    RHO_OFFSETS,
    ROUND_CONSTANTS,
    ROUNDS,
    keccak_f1600,
    keccak_round,
    sha3_256,
)

__all__ = [
    # Field
    "FF",
    "GOLDILOCKS_PRIME",
    "to_field",
    "field_to_ints",
    # Keccak reference
    "LANE_BITS",
    "ROUNDS",
    "ROUND_CONSTANTS",
    "RHO_OFFSETS",
    "keccak_round",
    "keccak_f1600",
    "sha3_256",
]
