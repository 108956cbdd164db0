"""Keccak-f[1600] permutation as a boolean circuit.

The 1600-bit state is an arena of wire handles, a numpy object array indexed
A[x, y, z] (lane (x, y), bit z, z = 0 least significant). Steps return a new
KeccakState; wires themselves are never modified.

Gate cost per round on a fully allocated state:
    theta: 5*64*4 (column parity) + 5*64 (D) + 1600 (apply) = 3200
    rho:   0, a rotation is np.roll over the lane's wire handles
    pi:    0, lane handles move to new coordinates
    chi:   1600 AND (negation folded in) + 1600 XOR = 3200
    iota:  0, XOR with a constant bit is a negation
Constant wires are folded, so a state that is partly constant (such as the
capacity lanes before the first permutation) costs less.
"""

import logging
from typing import Iterable, List, Optional

import numpy as np

from constraints.system import ConstraintSystem
from gadgets.boolean import FALSE, Boolean
from primitives.keccak import LANE_BITS, RHO_OFFSETS, ROUND_CONSTANTS, ROUNDS

logger = logging.getLogger(__name__)

STATE_BITS = 25 * LANE_BITS


# --- State Matrix ---

class KeccakState:
    """5x5 matrix of 64-wire lanes.

    Flattened (FIPS 202) order puts bit (x, y, z) at position 64*(x + 5y) + z,
    so lanes are scanned x-first within each row y.
    """

    def __init__(self, wires: np.ndarray) -> None:
        assert wires.shape == (5, 5, LANE_BITS), f"Invalid state shape {wires.shape}"
        self.wires = wires

    @classmethod
    def zero(cls) -> "KeccakState":
        wires = np.empty((5, 5, LANE_BITS), dtype=object)
        wires.fill(FALSE)
        return cls(wires)

    @classmethod
    def from_bits(cls, bits: Iterable[Boolean]) -> "KeccakState":
        bits = list(bits)
        assert len(bits) == STATE_BITS, f"Expected {STATE_BITS} bits, got {len(bits)}"
        flat = np.empty(STATE_BITS, dtype=object)
        flat[:] = bits
        # reshape gives [y, x, z]; swap to [x, y, z]
        return cls(flat.reshape(5, 5, LANE_BITS).transpose(1, 0, 2).copy())

    @classmethod
    def from_lanes(cls, lanes: List[int]) -> "KeccakState":
        """Constant state from 25 integer lanes in x + 5y order."""
        wires = np.empty((5, 5, LANE_BITS), dtype=object)
        for y in range(5):
            for x in range(5):
                wires[x, y] = lane_constant(lanes[x + 5 * y])
        return cls(wires)

    def to_bits(self) -> List[Boolean]:
        return list(self.wires.transpose(1, 0, 2).reshape(STATE_BITS))

    def lane(self, x: int, y: int) -> List[Boolean]:
        return list(self.wires[x, y])

    def __getitem__(self, key):
        return self.wires[key]

    def lane_values(self) -> Optional[List[int]]:
        """Witness values as 25 integer lanes in x + 5y order, or None if unknown."""
        lanes = []
        for y in range(5):
            for x in range(5):
                value = lane_value(self.wires[x, y])
                if value is None:
                    return None
                lanes.append(value)
        return lanes

    def num_constant_wires(self) -> int:
        return sum(1 for w in self.wires.flat if w.is_constant())


def lane_constant(value: int) -> np.ndarray:
    """Constant lane wires for a 64-bit integer, z = 0 first."""
    lane = np.empty(LANE_BITS, dtype=object)
    for z in range(LANE_BITS):
        lane[z] = Boolean.constant((value >> z) & 1)
    return lane


def lane_value(lane: Iterable[Boolean]) -> Optional[int]:
    value = 0
    for z, wire in enumerate(lane):
        bit = wire.get_value()
        if bit is None:
            return None
        value |= int(bit) << z
    return value


# --- Step Mappings ---

def theta(cs: ConstraintSystem, state: KeccakState) -> KeccakState:
    """A[x,y,z] ^= C[x-1,z] ^ C[x+1,z-1], C[x,z] = parity of column (x, z)."""
    a = state.wires
    c = np.empty((5, LANE_BITS), dtype=object)
    d = np.empty((5, LANE_BITS), dtype=object)
    out = np.empty_like(a)

    with cs.namespace("theta"):
        for x in range(5):
            for z in range(LANE_BITS):
                c[x, z] = Boolean.xor_many(cs, a[x, :, z])
        for x in range(5):
            for z in range(LANE_BITS):
                d[x, z] = Boolean.xor(cs, c[(x - 1) % 5, z], c[(x + 1) % 5, (z - 1) % LANE_BITS])
        for x in range(5):
            for y in range(5):
                for z in range(LANE_BITS):
                    out[x, y, z] = Boolean.xor(cs, a[x, y, z], d[x, z])

    return KeccakState(out)


def rho(state: KeccakState) -> KeccakState:
    """Rotate lane (x, y) left by RHO_OFFSETS[x + 5y]; relabeling only."""
    out = np.empty_like(state.wires)
    for x in range(5):
        for y in range(5):
            # np.roll(lane, n)[z] == lane[z - n], a left rotation by n
            out[x, y] = np.roll(state.wires[x, y], RHO_OFFSETS[x + 5 * y])
    return KeccakState(out)


def pi(state: KeccakState) -> KeccakState:
    """Move lane (x, y) to (y, 2x + 3y mod 5); relabeling only."""
    out = np.empty_like(state.wires)
    for x in range(5):
        for y in range(5):
            out[y, (2 * x + 3 * y) % 5] = state.wires[x, y]
    return KeccakState(out)


def chi(cs: ConstraintSystem, state: KeccakState) -> KeccakState:
    """A[x,y,z] ^= NOT A[x+1,y,z] AND A[x+2,y,z]."""
    a = state.wires
    out = np.empty_like(a)

    with cs.namespace("chi"):
        for y in range(5):
            for x in range(5):
                for z in range(LANE_BITS):
                    masked = Boolean.and_(cs, a[(x + 1) % 5, y, z].not_(), a[(x + 2) % 5, y, z])
                    out[x, y, z] = Boolean.xor(cs, a[x, y, z], masked)

    return KeccakState(out)


def iota(state: KeccakState, round_index: int) -> KeccakState:
    """XOR the round constant into lane (0, 0) by negating the set bits."""
    assert 0 <= round_index < ROUNDS, f"Round index {round_index} out of range"
    out = state.wires.copy()
    rc = ROUND_CONSTANTS[round_index]
    for z in range(LANE_BITS):
        if (rc >> z) & 1:
            out[0, 0, z] = out[0, 0, z].not_()
    return KeccakState(out)


# --- Permutation ---

def keccak_round(cs: ConstraintSystem, state: KeccakState, round_index: int) -> KeccakState:
    """One round of Keccak-f[1600]: theta, rho, pi, chi, iota in that order."""
    with cs.namespace(f"round {round_index}"):
        state = theta(cs, state)
        state = rho(state)
        state = pi(state)
        state = chi(cs, state)
        state = iota(state, round_index)
    return state


def keccak_f1600(cs: ConstraintSystem, state: KeccakState) -> KeccakState:
    """Apply the 24-round Keccak-f[1600] permutation to the state wires."""
    start = cs.num_constraints
    with cs.namespace("keccak_f1600"):
        for round_index in range(ROUNDS):
            state = keccak_round(cs, state, round_index)
    logger.debug("keccak_f1600: %d gates", cs.num_constraints - start)
    return state
