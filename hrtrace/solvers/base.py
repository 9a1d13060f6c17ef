"""Base stepper interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional
from numpy.typing import NDArray

from hrtrace.core.field import VectorField


class StepStatus(Enum):
    """Outcome of one call to Stepper.step."""
    ACCEPTED = auto()
    NON_FINITE = auto()      # candidate state or error estimate not finite
    STEP_UNDERFLOW = auto()  # shrunk step no longer advances time


@dataclass
class StepResult:
    """Accepted transition, or the untouched state plus a failure status."""

    status: StepStatus
    t: float                 # new time (unchanged on failure)
    y: NDArray               # (D,) new state (unchanged on failure)
    h_used: float            # step that produced y
    h_next: float            # proposed trial step for the following call
    error_ratio: float = 0.0
    rejections: int = 0

    @property
    def accepted(self) -> bool:
        return self.status is StepStatus.ACCEPTED


class Stepper(ABC):
    """Advances a state by one error-controlled step."""

    @abstractmethod
    def step(
        self,
        field: VectorField,
        params: Any,
        t: float,
        y: NDArray,
        h: float,
        t_end: Optional[float] = None,
    ) -> StepResult:
        """
        Advance y from t with trial step h.

        Args:
            field: Right-hand side
            params: Parameter set forwarded to the field
            t: Current time
            y: Current state (D,)
            h: Trial step size
            t_end: Time the step must not pass

        Returns:
            StepResult with the accepted transition or a failure status
        """
        ...
