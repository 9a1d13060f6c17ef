"""Step-size control from the embedded error estimate."""

from enum import Enum, auto
import numpy as np
from numpy.typing import NDArray

from hrtrace import config
from hrtrace.core.params import Tolerances


class Adjustment(Enum):
    """Direction of a step-size proposal."""
    DECREASE = auto()  # error too large, step rejected
    UNCHANGED = auto()
    INCREASE = auto()


class StandardControl:
    """
    Mixed absolute/relative tolerance controller.

    The error of component i is measured against D_i = atol + rtol |y_i|.
    With r = max_i |err_i| / D_i a step is rejected for r > 1.1 and the
    step grows for r < 0.5.
    """

    def __init__(
        self,
        tolerances: Tolerances = Tolerances(),
        safety: float = config.SAFETY,
        max_shrink: float = config.MAX_SHRINK,
        max_grow: float = config.MAX_GROW,
    ):
        self.tolerances = tolerances
        self.safety = safety
        self.max_shrink = max_shrink
        self.max_grow = max_grow

    def error_ratio(self, y: NDArray, err: NDArray) -> float:
        """Largest componentwise ratio of error to tolerance."""
        scale = self.tolerances.atol + self.tolerances.rtol * np.abs(y)
        return float(np.max(np.abs(err) / scale))

    def adjust(self, h: float, ratio: float, order: int) -> tuple[float, Adjustment]:
        """
        Propose the next trial step.

        Args:
            h: Step that produced the error estimate
            ratio: Result of error_ratio
            order: Order of the method

        Returns:
            (h_new, adjustment)
        """
        if ratio > config.DECREASE_THRESHOLD:
            factor = self.safety * ratio ** (-1.0 / order)
            return h * max(factor, self.max_shrink), Adjustment.DECREASE

        if ratio < config.INCREASE_THRESHOLD:
            if ratio == 0.0:
                factor = self.max_grow
            else:
                factor = self.safety * ratio ** (-1.0 / (order + 1.0))
                factor = min(max(factor, 1.0), self.max_grow)
            return h * factor, Adjustment.INCREASE

        return h, Adjustment.UNCHANGED
