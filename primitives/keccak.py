"""Native Keccak-f[1600] on 64-bit integer lanes.

Reference implementation of FIPS 202 used to cross-check the circuit: each
step is exposed on its own so intermediate states can be compared after every
theta/rho/pi/chi/iota, not only after a full round.

State layout: a list of 25 lanes, lane (x, y) at index x + 5*y. Bit z of a
lane is (lane >> z) & 1, i.e. z = 0 is the least-significant bit.

References:
    https://nvlpubs.nist.gov/nistpubs/FIPS/NIST.FIPS.202.pdf
    https://keccak.team/keccak_specs_summary.html
"""

from typing import List

# --- Constants ---

LANE_BITS = 64
ROUNDS = 24
LANE_MASK = (1 << LANE_BITS) - 1

# Iota constants, one per round
ROUND_CONSTANTS: List[int] = [
    0x0000000000000001, 0x0000000000008082, 0x800000000000808A,
    0x8000000080008000, 0x000000000000808B, 0x0000000080000001,
    0x8000000080008081, 0x8000000000008009, 0x000000000000008A,
    0x0000000000000088, 0x0000000080008009, 0x000000008000000A,
    0x000000008000808B, 0x800000000000008B, 0x8000000000008089,
    0x8000000000008003, 0x8000000000008002, 0x8000000000000080,
    0x000000000000800A, 0x800000008000000A, 0x8000000080008081,
    0x8000000000008080, 0x0000000080000001, 0x8000000080008008,
]

# Rho rotation offsets indexed by x + 5*y
RHO_OFFSETS: List[int] = [
    0,  1,  62, 28, 27,
    36, 44, 6,  55, 20,
    3,  10, 43, 25, 39,
    41, 45, 15, 21, 8,
    18, 2,  61, 56, 14,
]

# SHA3-256 sponge parameters in bytes
_RATE_BYTES = 136
_DIGEST_BYTES = 32


def rol64(value: int, shift: int) -> int:
    """Rotate a 64-bit lane left by shift positions."""
    shift %= LANE_BITS
    return ((value << shift) | (value >> (LANE_BITS - shift))) & LANE_MASK


# --- Step Mappings ---

def theta(lanes: List[int]) -> List[int]:
    c = [lanes[x] ^ lanes[x + 5] ^ lanes[x + 10] ^ lanes[x + 15] ^ lanes[x + 20] for x in range(5)]
    d = [c[(x - 1) % 5] ^ rol64(c[(x + 1) % 5], 1) for x in range(5)]
    return [lanes[i] ^ d[i % 5] for i in range(25)]


def rho(lanes: List[int]) -> List[int]:
    return [rol64(lanes[i], RHO_OFFSETS[i]) for i in range(25)]


def pi(lanes: List[int]) -> List[int]:
    """Move lane (x, y) to (y, 2x + 3y mod 5)."""
    out = [0] * 25
    for y in range(5):
        for x in range(5):
            out[y + 5 * ((2 * x + 3 * y) % 5)] = lanes[x + 5 * y]
    return out


def chi(lanes: List[int]) -> List[int]:
    out = [0] * 25
    for y in range(5):
        for x in range(5):
            a = lanes[x + 5 * y]
            b = lanes[(x + 1) % 5 + 5 * y]
            c = lanes[(x + 2) % 5 + 5 * y]
            out[x + 5 * y] = a ^ (~b & LANE_MASK & c)
    return out


def iota(lanes: List[int], round_index: int) -> List[int]:
    out = list(lanes)
    out[0] ^= ROUND_CONSTANTS[round_index]
    return out


# --- Permutation ---

def keccak_round(lanes: List[int], round_index: int) -> List[int]:
    """Apply one round: theta, rho, pi, chi, iota."""
    return iota(chi(pi(rho(theta(lanes)))), round_index)


def keccak_f1600(lanes: List[int]) -> List[int]:
    """Apply all 24 rounds of Keccak-f[1600]."""
    assert len(lanes) == 25, f"Expected 25 lanes, got {len(lanes)}"
    for round_index in range(ROUNDS):
        lanes = keccak_round(lanes, round_index)
    return lanes


# --- Sponge ---

def sha3_256(data: bytes) -> bytes:
    """Byte-oriented SHA3-256 over the reference permutation."""
    padded = bytearray(data)
    padded.append(0x06)
    padded.extend(b"\x00" * ((-len(padded)) % _RATE_BYTES))
    padded[-1] |= 0x80

    lanes = [0] * 25
    for offset in range(0, len(padded), _RATE_BYTES):
        block = padded[offset:offset + _RATE_BYTES]
        for i in range(_RATE_BYTES // 8):
            lanes[i] ^= int.from_bytes(block[8 * i:8 * i + 8], "little")
        lanes = keccak_f1600(lanes)

    return b"".join(lane.to_bytes(8, "little") for lane in lanes[:4])[:_DIGEST_BYTES]
