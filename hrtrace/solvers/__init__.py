"""Adaptive steppers and step-size control."""

from hrtrace.solvers.base import Stepper, StepResult, StepStatus
from hrtrace.solvers.control import StandardControl, Adjustment
from hrtrace.solvers.embedded import EmbeddedStepper

__all__ = [
    "Stepper",
    "StepResult",
    "StepStatus",
    "StandardControl",
    "Adjustment",
    "EmbeddedStepper",
]
