"""Boolean wires and their constrained logic operations.

A Boolean is one of:
- a constant (no variable, no constraints),
- an allocated bit x,
- the negation of an allocated bit, 1 - x.

Negation never allocates anything, and operations with a constant operand are
folded. XOR, AND and OR of two non-constant wires each cost exactly one gate:
both operands are affine in their variables (s*x + k with s = +-1, k in {0, 1}),
so the product of two operands fits the single qM term of a gate.

Gate forms (x, y the operand variables, c the output):
    XOR: c = u + v - 2uv
    AND: c = uv
where u = s1*x + k1 and v = s2*y + k2.
"""

from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Optional, Tuple

from constraints.system import ONE, ConstraintSystem, SynthesisError


@dataclass(frozen=True)
class AllocatedBit:
    """A variable constrained to be 0 or 1."""
    index: int
    value: Optional[bool]

    @classmethod
    def alloc(cls, cs: ConstraintSystem, value: Optional[bool], public: bool = False) -> "AllocatedBit":
        """Allocate a witness bit and enforce x*x - x = 0.

        Raises:
            ValueError: If value is not a boolean (or 0/1)
        """
        if value is not None and value not in (0, 1):
            raise ValueError(f"Boolean witness must be 0 or 1, got {value!r}")
        raw = None if value is None else int(value)
        index = cs.alloc_input(raw) if public else cs.alloc(raw)
        cs.enforce_gate(index, index, ONE, q_l=-1, q_m=1, annotation="booleanity")
        return cls(index, None if value is None else bool(value))


@dataclass(frozen=True)
class Boolean:
    """A constant, an allocated bit, or a negated allocated bit."""
    bit: Optional[AllocatedBit] = None
    negated: bool = False
    constant_value: bool = False

    # --- Construction ---

    @staticmethod
    def constant(value: bool) -> "Boolean":
        return TRUE if value else FALSE

    @staticmethod
    def alloc(cs: ConstraintSystem, value: Optional[bool], public: bool = False) -> "Boolean":
        return Boolean(AllocatedBit.alloc(cs, value, public))

    # --- Inspection ---

    def is_constant(self) -> bool:
        return self.bit is None

    def get_value(self) -> Optional[bool]:
        if self.bit is None:
            return self.constant_value
        if self.bit.value is None:
            return None
        return self.bit.value != self.negated

    def _affine(self) -> Tuple[int, int, int]:
        """Return (variable, s, k) such that the wire equals s*variable + k."""
        if self.bit is None:
            return ONE, 0, int(self.constant_value)
        if self.negated:
            return self.bit.index, -1, 1
        return self.bit.index, 1, 0

    def _same_variable(self, other: "Boolean") -> bool:
        return (
            self.bit is not None
            and other.bit is not None
            and self.bit.index == other.bit.index
        )

    # --- Operations ---

    def not_(self) -> "Boolean":
        if self.bit is None:
            return Boolean.constant(not self.constant_value)
        return Boolean(self.bit, not self.negated)

    @staticmethod
    def xor(cs: ConstraintSystem, a: "Boolean", b: "Boolean") -> "Boolean":
        if a.is_constant():
            return b.not_() if a.constant_value else b
        if b.is_constant():
            return a.not_() if b.constant_value else a
        if a._same_variable(b):
            return Boolean.constant(a.negated != b.negated)

        x, s1, k1 = a._affine()
        y, s2, k2 = b._affine()
        va, vb = a.get_value(), b.get_value()
        value = None if va is None or vb is None else va != vb

        return _gate_output(
            cs, x, y, value,
            q_l=s1 - 2 * s1 * k2,
            q_r=s2 - 2 * s2 * k1,
            q_m=-2 * s1 * s2,
            q_c=k1 + k2 - 2 * k1 * k2,
            annotation="xor",
        )

    @staticmethod
    def and_(cs: ConstraintSystem, a: "Boolean", b: "Boolean") -> "Boolean":
        if a.is_constant():
            return b if a.constant_value else FALSE
        if b.is_constant():
            return a if b.constant_value else FALSE
        if a._same_variable(b):
            return a if a.negated == b.negated else FALSE

        x, s1, k1 = a._affine()
        y, s2, k2 = b._affine()
        va, vb = a.get_value(), b.get_value()
        value = None if va is None or vb is None else va and vb

        return _gate_output(
            cs, x, y, value,
            q_l=s1 * k2,
            q_r=s2 * k1,
            q_m=s1 * s2,
            q_c=k1 * k2,
            annotation="and",
        )

    @staticmethod
    def or_(cs: ConstraintSystem, a: "Boolean", b: "Boolean") -> "Boolean":
        # a OR b = NOT(NOT a AND NOT b)
        return Boolean.and_(cs, a.not_(), b.not_()).not_()

    @staticmethod
    def xor_many(cs: ConstraintSystem, wires: Iterable["Boolean"]) -> "Boolean":
        """XOR of any number of wires (FALSE for none)."""
        return reduce(lambda acc, w: Boolean.xor(cs, acc, w), wires, FALSE)

    @staticmethod
    def enforce_equal(cs: ConstraintSystem, a: "Boolean", b: "Boolean") -> None:
        """Constrain a == b.

        Raises:
            SynthesisError: If both are constants with different values
        """
        if a.is_constant() and b.is_constant():
            if a.constant_value != b.constant_value:
                raise SynthesisError("enforce_equal on unequal constants is unsatisfiable")
            return

        x, s1, k1 = a._affine()
        y, s2, k2 = b._affine()
        cs.enforce_gate(x, y, ONE, q_l=s1, q_r=-s2, q_c=k1 - k2, annotation="equal")


def _gate_output(
    cs: ConstraintSystem,
    x: int,
    y: int,
    value: Optional[bool],
    q_l: int,
    q_r: int,
    q_m: int,
    q_c: int,
    annotation: str,
) -> Boolean:
    """Allocate c and enforce q_l*x + q_r*y + q_m*x*y + q_c - c = 0.

    The gate pins c to a boolean function of boolean inputs, so no separate
    booleanity constraint is needed for c.
    """
    index = cs.alloc(None if value is None else int(value))
    cs.enforce_gate(x, y, index, q_l=q_l, q_r=q_r, q_o=-1, q_m=q_m, q_c=q_c, annotation=annotation)
    return Boolean(AllocatedBit(index, value))


TRUE = Boolean(constant_value=True)
FALSE = Boolean(constant_value=False)
