"""Explicit embedded Runge-Kutta stepper."""

import logging
from typing import Any, Optional
import numpy as np
from numpy.typing import NDArray

from hrtrace import config
from hrtrace.core.field import VectorField
from hrtrace.core.tableau import EmbeddedTableau
from hrtrace.methods.embedded import rkf45
from hrtrace.solvers.base import Stepper, StepResult, StepStatus
from hrtrace.solvers.control import Adjustment, StandardControl

logger = logging.getLogger(__name__)


class EmbeddedStepper(Stepper):
    """Error-controlled steps with an explicit embedded pair.

    Rejected trials are retried with the controller's shrunk step until one
    is accepted, a non-finite value appears, or the step underflows.
    """

    def __init__(
        self,
        control: Optional[StandardControl] = None,
        tableau: Optional[EmbeddedTableau] = None,
        min_step: float = config.MIN_STEP,
        max_step: float = np.inf,
    ) -> None:
        self.control = control if control is not None else StandardControl()
        self.tableau = tableau if tableau is not None else rkf45()
        self.min_step = min_step
        self.max_step = max_step

    def attempt(
        self,
        field: VectorField,
        params: Any,
        t: float,
        y: NDArray,
        h: float,
    ) -> tuple[NDArray, NDArray]:
        """
        One trial step without acceptance test.

        Returns:
            y_new: Propagated solution at t + h
            err: Local error estimate (D,)
        """
        tab = self.tableau
        A, c = tab.A, tab.c
        k = np.zeros((tab.s, y.size))

        for i in range(tab.s):
            # Y_i = y + h Σ_{j<i} A[i,j] k_j
            y_stage = y.copy()
            for j in range(i):
                if A[i, j] != 0.0:
                    y_stage += h * A[i, j] * k[j]
            k[i] = field.evaluate(t + c[i] * h, y_stage, params)

        y_new = y + h * (tab.b_high @ k)
        err = h * (tab.error_weights @ k)
        return y_new, err

    def step(
        self,
        field: VectorField,
        params: Any,
        t: float,
        y: NDArray,
        h: float,
        t_end: Optional[float] = None,
    ) -> StepResult:
        """Advance until a trial passes the error test (see Stepper.step)."""
        h_trial = min(h, self.max_step)
        rejections = 0

        while True:
            final = t_end is not None and t + h_trial >= t_end
            if final:
                h_trial = t_end - t

            if not t + h_trial > t:
                return self._failure(StepStatus.STEP_UNDERFLOW, t, y, h_trial, rejections)

            y_new, err = self.attempt(field, params, t, y, h_trial)
            if not (np.all(np.isfinite(y_new)) and np.all(np.isfinite(err))):
                return self._failure(StepStatus.NON_FINITE, t, y, h_trial, rejections)

            ratio = self.control.error_ratio(y_new, err)
            h_new, adjustment = self.control.adjust(h_trial, ratio, self.tableau.order)

            if adjustment is Adjustment.DECREASE:
                rejections += 1
                logger.debug(
                    "Rejected step h=%.3e at t=%.6g (ratio %.3g), retrying with h=%.3e",
                    h_trial, t, ratio, h_new,
                )
                if h_new < self.min_step or not t + h_new > t:
                    return self._failure(StepStatus.STEP_UNDERFLOW, t, y, h_new, rejections)
                h_trial = h_new
                continue

            t_new = t_end if final else t + h_trial
            return StepResult(
                status=StepStatus.ACCEPTED,
                t=t_new,
                y=y_new,
                h_used=h_trial,
                h_next=min(h_new, self.max_step),
                error_ratio=ratio,
                rejections=rejections,
            )

    @staticmethod
    def _failure(
        status: StepStatus, t: float, y: NDArray, h: float, rejections: int
    ) -> StepResult:
        return StepResult(
            status=status,
            t=t,
            y=y,
            h_used=0.0,
            h_next=h,
            error_ratio=np.inf,
            rejections=rejections,
        )
