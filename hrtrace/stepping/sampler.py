"""Adaptive integration resampled to a bounded output gap."""

import logging
import math
from typing import Any, Optional
import numpy as np
from numpy.typing import NDArray

from hrtrace.core.field import VectorField
from hrtrace.core.params import RunRequest, Tolerances, validate_run_controls
from hrtrace.solvers.base import Stepper, StepStatus
from hrtrace.solvers.control import StandardControl
from hrtrace.solvers.embedded import EmbeddedStepper
from hrtrace.stepping.hermite import HermiteSegment
from hrtrace.stepping.trajectory import RunStatus, Trajectory, TrajectoryBuffer

logger = logging.getLogger(__name__)


class TrajectorySampler:
    """
    Samples x(t) on [0, horizon] with consecutive samples at most max_gap apart.

    The stepper chooses its own step sizes. Whenever an accepted step is
    longer than max_gap the interval is split into the fewest equal parts
    not exceeding max_gap, and the interior points are filled in by cubic
    Hermite interpolation using the field's derivative at both ends.

    The sample buffer is owned by the sampler and recycled between calls;
    an instance must not be used from several threads at once.
    """

    def __init__(
        self,
        field: VectorField,
        tolerances: Optional[Tolerances] = None,
        stepper: Optional[Stepper] = None,
    ):
        self.field = field
        self._buffer = TrajectoryBuffer(field.dim)
        if stepper is None:
            self.configure(tolerances if tolerances is not None else Tolerances())
        else:
            self.tolerances = tolerances if tolerances is not None else Tolerances()
            self.stepper = stepper

    @property
    def dim(self) -> int:
        return self.field.dim

    def configure(self, tolerances: Tolerances) -> None:
        """
        Control subsequent runs with new tolerances.

        An embedded stepper keeps its tableau, step bounds and controller
        constants; only the controller tolerances change. Any other stepper
        cannot take tolerances and is replaced by a default EmbeddedStepper.
        """
        self.tolerances = tolerances
        stepper = getattr(self, "stepper", None)
        if isinstance(stepper, EmbeddedStepper):
            old = stepper.control
            stepper.control = StandardControl(
                tolerances,
                safety=old.safety,
                max_shrink=old.max_shrink,
                max_grow=old.max_grow,
            )
            return
        if stepper is not None:
            logger.warning(
                "Replacing %s with a default EmbeddedStepper to apply %s",
                type(stepper).__name__, tolerances,
            )
        self.stepper = EmbeddedStepper(control=StandardControl(tolerances))

    def run(self, request: RunRequest) -> Trajectory:
        """Integrate one request snapshot, adopting its tolerances if they differ."""
        if request.tolerances != self.tolerances:
            self.configure(request.tolerances)
        return self.sample(request.x0, request.params, request.horizon, request.max_gap)

    def sample(
        self,
        x0: NDArray,
        params: Any,
        horizon: float,
        max_gap: float,
    ) -> Trajectory:
        """
        Integrate from t = 0 to horizon.

        Args:
            x0: Initial state (D,)
            params: Parameter set forwarded to the field
            horizon: End time, > 0
            max_gap: Largest allowed spacing of output samples, > 0

        Returns:
            Trajectory with status COMPLETE, or TRUNCATED holding the samples
            produced before the stepper failed

        Raises:
            ValueError: If the request itself is invalid
        """
        validate_run_controls(horizon, max_gap)
        x = np.array(x0, dtype=np.float64)
        if x.shape != (self.dim,):
            raise ValueError(
                f"Initial state shape {x.shape} != ({self.dim},)"
            )
        if not np.all(np.isfinite(x)):
            raise ValueError("Initial state must be finite")

        buffer = self._buffer
        buffer.reset(int(2 * horizon / max_gap) + 2)

        t = 0.0
        h = self.tolerances.seed_step
        dx = self.field.evaluate(t, x, params)
        buffer.append(t, x)

        n_steps = 0
        n_interpolated = 0
        status = RunStatus.COMPLETE
        failure = None

        while t < horizon:
            result = self.stepper.step(self.field, params, t, x, h, t_end=horizon)
            if not result.accepted:
                status, failure = RunStatus.TRUNCATED, result.status
                logger.warning(
                    "Integration stopped at t=%.6g of %.6g: %s",
                    t, horizon, result.status.name,
                )
                break

            dx_new = self.field.evaluate(result.t, result.y, params)
            if not np.all(np.isfinite(dx_new)):
                # Endpoint slope is needed for the Hermite fill; end at the last good sample
                status, failure = RunStatus.TRUNCATED, StepStatus.NON_FINITE
                logger.warning(
                    "Integration stopped at t=%.6g of %.6g: %s derivative at t=%.6g",
                    t, horizon, failure.name, result.t,
                )
                break

            n_steps += 1

            dt = result.t - t
            if dt > max_gap:
                n_parts = math.ceil(dt / max_gap)
                segment = HermiteSegment(t, result.t, x, result.y, dx, dx_new)
                times, states = segment.fill(n_parts)
                buffer.extend(times, states)
                n_interpolated += len(times)

            buffer.append(result.t, result.y)
            t, x, dx, h = result.t, result.y, dx_new, result.h_next

        logger.info(
            "Sampled %d points (%d steps, %d interpolated) up to t=%.6g",
            len(buffer), n_steps, n_interpolated, t,
        )
        return buffer.to_trajectory(status, failure)


def compute_trajectory(
    field: VectorField,
    initial_state: NDArray,
    params: Any,
    horizon: float,
    max_gap: float,
    tolerances: Optional[Tolerances] = None,
) -> Trajectory:
    """One-shot sampling with a fresh TrajectorySampler."""
    return TrajectorySampler(field, tolerances).sample(initial_state, params, horizon, max_gap)
