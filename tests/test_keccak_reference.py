"""Tests for the native Keccak-f[1600] reference and its constant tables."""

import hashlib
import random

import pytest

from primitives.keccak import (
    LANE_MASK,
    RHO_OFFSETS,
    ROUND_CONSTANTS,
    chi,
    iota,
    keccak_f1600,
    keccak_round,
    pi,
    rho,
    rol64,
    sha3_256,
    theta,
)
from test_vectors import KECCAK_F_ZERO_STATE_LANES, RHO_TABLE, SHA3_256_VECTORS


def _rc_bit(t: int) -> int:
    """LFSR output rc(t) from FIPS 202 Algorithm 5."""
    if t % 255 == 0:
        return 1
    r = [1, 0, 0, 0, 0, 0, 0, 0]
    for _ in range(t % 255):
        r = [0] + r
        r[0] ^= r[8]
        r[4] ^= r[8]
        r[5] ^= r[8]
        r[6] ^= r[8]
        r = r[:8]
    return r[0]


class TestConstants:
    """Constant tables match their defining rules."""

    def test_round_constants_from_lfsr(self) -> None:
        for round_index, rc in enumerate(ROUND_CONSTANTS):
            expected = 0
            for j in range(7):
                expected |= _rc_bit(j + 7 * round_index) << ((1 << j) - 1)
            assert rc == expected, f"round {round_index}"

    def test_rho_offsets_match_table(self) -> None:
        """All 25 offsets match the published table."""
        for y in range(5):
            for x in range(5):
                assert RHO_OFFSETS[x + 5 * y] == RHO_TABLE[y][x], f"lane ({x}, {y})"

    def test_rho_offsets_from_triangular_numbers(self) -> None:
        """Offsets follow (t+1)(t+2)/2 mod 64 along the (x, y) -> (y, 2x+3y) walk."""
        expected = [0] * 25
        x, y = 1, 0
        for t in range(24):
            expected[x + 5 * y] = ((t + 1) * (t + 2) // 2) % 64
            x, y = y, (2 * x + 3 * y) % 5
        assert RHO_OFFSETS == expected


class TestSteps:
    """Step mappings on integer lanes."""

    def test_rol64(self) -> None:
        assert rol64(1, 1) == 2
        assert rol64(1 << 63, 1) == 1
        assert rol64(0x0123456789ABCDEF, 0) == 0x0123456789ABCDEF
        assert rol64(0x0123456789ABCDEF, 64) == 0x0123456789ABCDEF

    def test_theta_of_zero_is_zero(self) -> None:
        assert theta([0] * 25) == [0] * 25

    def test_pi_moves_lanes(self) -> None:
        lanes = list(range(25))
        out = pi(lanes)
        for y in range(5):
            for x in range(5):
                assert out[y + 5 * ((2 * x + 3 * y) % 5)] == lanes[x + 5 * y]
        assert out[0] == 0

    def test_chi_on_single_lane(self) -> None:
        """Lane (1, 0) set alone: chi keeps it and sets lane (4, 0)."""
        lanes = [0] * 25
        lanes[1] = LANE_MASK
        out = chi(lanes)
        # x=0: a0 ^ (~a1 & a2) = 0; x=4: a4 ^ (~a0 & a1) = all ones
        assert out[0] == 0
        assert out[4] == LANE_MASK
        assert out[1] == LANE_MASK

    def test_iota_only_touches_lane_zero(self) -> None:
        out = iota([0] * 25, 3)
        assert out[0] == ROUND_CONSTANTS[3]
        assert out[1:] == [0] * 24

    def test_round_composition(self) -> None:
        rng = random.Random(7)
        lanes = [rng.getrandbits(64) for _ in range(25)]
        assert keccak_round(lanes, 5) == iota(chi(pi(rho(theta(lanes)))), 5)

    def test_permutation_of_zero_state(self) -> None:
        out = keccak_f1600([0] * 25)
        assert out[:4] == KECCAK_F_ZERO_STATE_LANES


class TestSha3:
    """Byte-oriented sponge over the reference permutation."""

    @pytest.mark.parametrize("message", list(SHA3_256_VECTORS))
    def test_nist_vectors(self, message: bytes) -> None:
        assert sha3_256(message).hex() == SHA3_256_VECTORS[message]

    @pytest.mark.parametrize("length", [1, 135, 136, 137, 271, 272, 500])
    def test_matches_hashlib(self, length: int) -> None:
        message = bytes((i * 31 + 7) % 256 for i in range(length))
        assert sha3_256(message) == hashlib.sha3_256(message).digest()
