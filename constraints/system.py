"""Append-only constraint system for boolean circuits over Goldilocks.

Every constraint is a single gate of the form

    qL*a + qR*b + qO*c + qM*a*b + qC = 0

over three variable slots (a, b, c), the same selector layout used by
PLONK-style arithmetizations. Variable 0 is fixed to 1 and fills unused slots.

Gadgets only ever allocate new variables and append gates; nothing is edited
or retracted. Witness values are tracked alongside the shape so the whole
system can be checked in one vectorized pass (see which_is_unsatisfied).

Example:
    cs = ConstraintSystem()
    a = cs.alloc(1)
    b = cs.alloc(0)
    c = cs.alloc(1)
    # a XOR b = c  <=>  a + b - c - 2ab = 0
    cs.enforce_gate(a, b, c, q_l=1, q_r=1, q_o=-1, q_m=-2, annotation="xor")
    assert cs.is_satisfied()
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from primitives.field import FF, field_to_ints, to_field

logger = logging.getLogger(__name__)

ONE = 0
"""Index of the variable constrained to the constant 1."""


# --- Errors ---

class SynthesisError(Exception):
    """Raised when a circuit cannot be synthesized."""


class VariableLimitExceeded(SynthesisError):
    """Raised when allocation would exceed ConstraintSystemConfig.max_variables."""


class AssignmentMissing(SynthesisError):
    """Raised when a witness value is required but was never provided."""


# --- Configuration ---

@dataclass
class ConstraintSystemConfig:
    """Configuration for a ConstraintSystem.

    Attributes:
        max_variables: Upper bound on allocated variables (including ONE)
        record_annotations: Keep the namespace path of every gate so the
            satisfaction checker can name the failing one
    """
    max_variables: int = 1 << 24
    record_annotations: bool = True


# --- Constraint System ---

class ConstraintSystem:
    """Variables, witness values and gates of one circuit under construction."""

    def __init__(self, config: Optional[ConstraintSystemConfig] = None) -> None:
        self.config = config or ConstraintSystemConfig()

        self._values: List[Optional[int]] = [1]
        self._public: List[int] = []

        # Gate columns, one entry per gate
        self._a: List[int] = []
        self._b: List[int] = []
        self._c: List[int] = []
        self._q_l: List[int] = []
        self._q_r: List[int] = []
        self._q_o: List[int] = []
        self._q_m: List[int] = []
        self._q_c: List[int] = []
        self._annotations: List[Tuple[str, str]] = []

        self._path: List[str] = []
        self._path_str = ""

    # --- Sizes ---

    @property
    def num_variables(self) -> int:
        return len(self._values)

    @property
    def num_inputs(self) -> int:
        return len(self._public)

    @property
    def num_constraints(self) -> int:
        return len(self._q_l)

    # --- Allocation ---

    def alloc(self, value: Optional[int]) -> int:
        """Allocate a private witness variable.

        Args:
            value: Witness value, or None when synthesizing without a witness

        Returns:
            Index of the new variable

        Raises:
            VariableLimitExceeded: If the variable budget is exhausted
        """
        if len(self._values) >= self.config.max_variables:
            raise VariableLimitExceeded(
                f"Cannot allocate variable {len(self._values)}: "
                f"limit is {self.config.max_variables} (at '{self._path_str}')"
            )
        self._values.append(value)
        return len(self._values) - 1

    def alloc_input(self, value: Optional[int]) -> int:
        """Allocate a public input variable."""
        index = self.alloc(value)
        self._public.append(index)
        return index

    def get_value(self, index: int) -> Optional[int]:
        return self._values[index]

    def set_value(self, index: int, value: Optional[int]) -> None:
        """Overwrite a witness value.

        Only useful for testing that gadgets reject a bad witness: gates are
        not re-evaluated.
        """
        assert index != ONE, "The ONE variable is fixed"
        self._values[index] = value

    def public_inputs(self) -> List[Optional[int]]:
        return [self._values[i] for i in self._public]

    # --- Gates ---

    def enforce_gate(
        self,
        a: int,
        b: int,
        c: int,
        q_l: int = 0,
        q_r: int = 0,
        q_o: int = 0,
        q_m: int = 0,
        q_c: int = 0,
        annotation: str = "",
    ) -> None:
        """Append the gate q_l*a + q_r*b + q_o*c + q_m*a*b + q_c = 0."""
        self._a.append(a)
        self._b.append(b)
        self._c.append(c)
        self._q_l.append(q_l)
        self._q_r.append(q_r)
        self._q_o.append(q_o)
        self._q_m.append(q_m)
        self._q_c.append(q_c)
        if self.config.record_annotations:
            self._annotations.append((self._path_str, annotation))

    @contextmanager
    def namespace(self, name: str) -> Iterator["ConstraintSystem"]:
        """Prefix annotations of gates created inside the block with name."""
        self._path.append(name)
        self._path_str = "/".join(self._path)
        try:
            yield self
        finally:
            self._path.pop()
            self._path_str = "/".join(self._path)

    def annotation(self, gate_index: int) -> str:
        if not self.config.record_annotations:
            return f"gate {gate_index}"
        path, name = self._annotations[gate_index]
        return "/".join(part for part in (path, name) if part) or f"gate {gate_index}"

    # --- Satisfaction ---

    def _witness(self) -> FF:
        missing = [i for i, v in enumerate(self._values) if v is None]
        if missing:
            raise AssignmentMissing(
                f"{len(missing)} variables have no witness value (first: {missing[0]})"
            )
        return FF(np.asarray(self._values, dtype=np.uint64))

    def residuals(self) -> FF:
        """Evaluate every gate on the current witness.

        Returns:
            FF array with one entry per gate; zero where the gate holds

        Raises:
            AssignmentMissing: If any variable has no value
        """
        w = self._witness()
        if not self._q_l:
            return FF.Zeros(0)

        a = w[np.asarray(self._a, dtype=np.int64)]
        b = w[np.asarray(self._b, dtype=np.int64)]
        c = w[np.asarray(self._c, dtype=np.int64)]

        return (
            to_field(self._q_l) * a
            + to_field(self._q_r) * b
            + to_field(self._q_o) * c
            + to_field(self._q_m) * a * b
            + to_field(self._q_c)
        )

    def which_is_unsatisfied(self) -> Optional[str]:
        """Return the annotation of the first violated gate, or None."""
        failing = np.flatnonzero(field_to_ints(self.residuals()))
        if failing.size == 0:
            return None
        first = int(failing[0])
        logger.warning(
            "%d of %d gates unsatisfied, first is %s",
            failing.size, self.num_constraints, self.annotation(first),
        )
        return self.annotation(first)

    def is_satisfied(self) -> bool:
        return self.which_is_unsatisfied() is None
