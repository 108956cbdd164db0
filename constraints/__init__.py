"""Constraint system used by the circuit gadgets.

Provides variable allocation, gate accumulation and satisfaction checking over
the Goldilocks field. Gadgets in the gadgets package build on this module.
"""

from .system import (
    ONE,
    AssignmentMissing,
    ConstraintSystem,
    ConstraintSystemConfig,
    SynthesisError,
    VariableLimitExceeded,
)

__all__ = [
    "ONE",
    "ConstraintSystem",
    "ConstraintSystemConfig",
    "SynthesisError",
    "VariableLimitExceeded",
    "AssignmentMissing",
]
