"""Circuit gadgets: boolean wires, Keccak-f[1600] and SHA3-256.

Usage:
    from constraints import ConstraintSystem
    from gadgets import alloc_bytes, digest_bytes, sha3_256

    cs = ConstraintSystem()
    digest = sha3_256(cs, alloc_bytes(cs, b"abc"))
    assert digest_bytes(digest).hex().startswith("3a985da7")
    assert cs.is_satisfied()
"""

from .boolean import FALSE, TRUE, AllocatedBit, Boolean
from .keccak import (
    STATE_BITS,
    KeccakState,
    chi,
    iota,
    keccak_f1600,
    keccak_round,
    pi,
    rho,
    theta,
)
from .sha3 import (
    CAPACITY,
    DIGEST_BITS,
    RATE,
    absorb,
    alloc_bytes,
    bits_to_bytes,
    bytes_to_bits,
    digest_bytes,
    enforce_digest,
    pad10_1,
    sha3_256,
    squeeze,
)

__all__ = [
    # Boolean wires
    "AllocatedBit",
    "Boolean",
    "TRUE",
    "FALSE",
    # Keccak-f[1600]
    "STATE_BITS",
    "KeccakState",
    "theta",
    "rho",
    "pi",
    "chi",
    "iota",
    "keccak_round",
    "keccak_f1600",
    # SHA3-256
    "RATE",
    "CAPACITY",
    "DIGEST_BITS",
    "pad10_1",
    "absorb",
    "squeeze",
    "sha3_256",
    "bytes_to_bits",
    "bits_to_bytes",
    "alloc_bytes",
    "digest_bytes",
    "enforce_digest",
]
