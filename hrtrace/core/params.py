"""Immutable run configuration."""

from dataclasses import dataclass
from typing import Any
import math
import numpy as np
from numpy.typing import NDArray

from hrtrace import config


@dataclass(frozen=True)
class Tolerances:
    """Absolute and relative tolerance of the local error test."""

    atol: float = config.DEFAULT_ATOL
    rtol: float = config.DEFAULT_RTOL

    def __post_init__(self):
        for name in ("atol", "rtol"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0.0):
                raise ValueError(f"{name} must be a positive finite number, got {value}")

    @property
    def seed_step(self) -> float:
        """Initial trial step, the product of both tolerances."""
        return self.atol * self.rtol


@dataclass(frozen=True)
class ParameterRange:
    """Admissible interval and default of one named control."""

    key: str
    lower: float
    upper: float
    default: float
    label: str = ""

    def __post_init__(self):
        if not self.lower <= self.default <= self.upper:
            raise ValueError(
                f"Default {self.default} of '{self.key}' outside "
                f"[{self.lower}, {self.upper}]"
            )

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def clamp(self, value: float) -> float:
        return min(max(value, self.lower), self.upper)


@dataclass(frozen=True)
class RunRequest:
    """
    Snapshot of everything one integration needs.

    A new request is built for every change of a control value; nothing is
    shared between requests.
    """

    initial_state: tuple[float, ...]
    params: Any
    horizon: float
    max_gap: float = config.DEFAULT_MAX_GAP
    tolerances: Tolerances = Tolerances()

    def __post_init__(self):
        object.__setattr__(
            self, "initial_state", tuple(float(v) for v in self.initial_state)
        )
        validate_run_controls(self.horizon, self.max_gap)

    @property
    def x0(self) -> NDArray:
        """Initial state as a fresh array."""
        return np.array(self.initial_state, dtype=np.float64)


def validate_run_controls(horizon: float, max_gap: float) -> None:
    """
    Check horizon and output gap of a request.

    Raises:
        ValueError: If either value is not a positive finite number
    """
    if not (math.isfinite(horizon) and horizon > 0.0):
        raise ValueError(f"Horizon must be a positive finite number, got {horizon}")
    if not (math.isfinite(max_gap) and max_gap > 0.0):
        raise ValueError(f"Maximum gap must be a positive finite number, got {max_gap}")
