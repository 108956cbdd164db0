"""SHA3-256 gadget.

Proves in-circuit that 256 digest wires are SHA3-256 of the preimage wires:

    input wires -> M || 01 -> pad10*1 -> absorb (XOR + Keccak-f) per block -> squeeze

Bit order at the boundary follows FIPS 202 (Appendix B.1): bytes are taken in
order and each byte contributes its bits least-significant first. The digest
uses the same convention, so bits_to_bytes(digest) is the standard digest.

Sponge parameters are fixed for 256-bit output: capacity 512, rate 1088 bits
(17 lanes).

Reference: https://nvlpubs.nist.gov/nistpubs/FIPS/NIST.FIPS.202.pdf
"""

import logging
from typing import List, Optional, Sequence

from constraints.system import ConstraintSystem
from gadgets.boolean import FALSE, TRUE, Boolean
from gadgets.keccak import STATE_BITS, KeccakState, keccak_f1600

logger = logging.getLogger(__name__)

# --- Sponge Parameters ---

DIGEST_BITS = 256
CAPACITY = 2 * DIGEST_BITS
RATE = STATE_BITS - CAPACITY

# SHA-3 domain separation suffix "01" (FIPS 202 section 6.1)
DOMAIN_SUFFIX = (FALSE, TRUE)


# --- Padding ---

def pad10_1(bits: Sequence[Boolean]) -> List[Boolean]:
    """Apply pad10*1 so the length becomes a multiple of RATE.

    Appends a 1, the fewest 0s possible, then a final 1. The result length is
    the smallest multiple of RATE that is >= len(bits) + 2; when len(bits) + 2
    is already a multiple the two 1s are adjacent.

    Only constant wires are added, so padding costs no constraints.

    Args:
        bits: Message wires of any length

    Returns:
        New list of padded wires
    """
    padded = list(bits)
    padded.append(TRUE)
    padded.extend([FALSE] * ((RATE - 1 - len(padded) % RATE) % RATE))
    padded.append(TRUE)
    return padded


# --- Sponge ---

def absorb(cs: ConstraintSystem, state: KeccakState, padded: Sequence[Boolean]) -> KeccakState:
    """XOR each RATE-bit block into the first 17 lanes and permute.

    Args:
        cs: Constraint system receiving the gates
        state: Sponge state before absorbing
        padded: Output of pad10_1

    Returns:
        State after the last permutation
    """
    assert len(padded) % RATE == 0, f"Padded length {len(padded)} is not a multiple of {RATE}"

    n_blocks = len(padded) // RATE
    for i in range(n_blocks):
        block = padded[i * RATE:(i + 1) * RATE]
        with cs.namespace(f"block {i}"):
            flat = state.to_bits()
            with cs.namespace("absorb"):
                for j, wire in enumerate(block):
                    flat[j] = Boolean.xor(cs, flat[j], wire)
            state = keccak_f1600(cs, KeccakState.from_bits(flat))
        logger.debug("Absorbed block %d/%d, %d gates so far", i + 1, n_blocks, cs.num_constraints)
    return state


def squeeze(state: KeccakState) -> List[Boolean]:
    """First DIGEST_BITS bits of the rate: lanes (0,0), (1,0), (2,0), (3,0)."""
    return state.to_bits()[:DIGEST_BITS]


def sha3_256(cs: ConstraintSystem, input_bits: Sequence[Boolean]) -> List[Boolean]:
    """Constrain the SHA3-256 digest of input_bits.

    Args:
        cs: Constraint system receiving the gates
        input_bits: Preimage wires in FIPS 202 bit order

    Returns:
        The 256 digest wires

    Raises:
        SynthesisError: Propagated from the constraint system
    """
    with cs.namespace("sha3_256"):
        padded = pad10_1(list(input_bits) + list(DOMAIN_SUFFIX))
        state = absorb(cs, KeccakState.zero(), padded)
        digest = squeeze(state)
    logger.debug(
        "sha3_256 over %d input bits: %d blocks, %d gates, %d variables",
        len(input_bits), len(padded) // RATE, cs.num_constraints, cs.num_variables,
    )
    return digest


# --- Bit/Byte Conversion ---

def bytes_to_bits(data: bytes) -> List[bool]:
    """Expand bytes to bits, least-significant bit of each byte first."""
    return [bool((byte >> i) & 1) for byte in data for i in range(8)]


def bits_to_bytes(bits: Sequence[bool]) -> bytes:
    """Inverse of bytes_to_bits; len(bits) must be a multiple of 8."""
    if len(bits) % 8 != 0:
        raise ValueError(f"Bit length {len(bits)} is not a multiple of 8")
    return bytes(
        sum(int(bits[8 * i + j]) << j for j in range(8))
        for i in range(len(bits) // 8)
    )


def alloc_bytes(cs: ConstraintSystem, data: Optional[bytes], n_bytes: Optional[int] = None,
                public: bool = False) -> List[Boolean]:
    """Allocate witness wires for a byte string.

    With data=None, n_bytes wires are allocated without values (shape-only
    synthesis).
    """
    if data is None:
        assert n_bytes is not None, "n_bytes is required when data is None"
        return [Boolean.alloc(cs, None, public) for _ in range(8 * n_bytes)]
    return [Boolean.alloc(cs, bit, public) for bit in bytes_to_bits(data)]


def digest_bytes(digest: Sequence[Boolean]) -> Optional[bytes]:
    """Witness value of digest wires as bytes, or None if unknown."""
    values = [wire.get_value() for wire in digest]
    if any(v is None for v in values):
        return None
    return bits_to_bytes(values)


def enforce_digest(cs: ConstraintSystem, digest: Sequence[Boolean], expected: Optional[bytes]) -> List[Boolean]:
    """Expose the expected digest as public inputs and bind digest to it.

    Returns:
        The public input wires
    """
    if expected is not None and len(expected) != DIGEST_BITS // 8:
        raise ValueError(f"Expected a {DIGEST_BITS // 8}-byte digest, got {len(expected)} bytes")
    with cs.namespace("public digest"):
        public = alloc_bytes(cs, expected, n_bytes=DIGEST_BITS // 8, public=True)
        for computed, claimed in zip(digest, public):
            Boolean.enforce_equal(cs, computed, claimed)
    return public
