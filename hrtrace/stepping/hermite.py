"""Cubic Hermite reconstruction between two accepted solver samples."""

from dataclasses import dataclass
from typing import Union
import numpy as np
from numpy.typing import NDArray


def hermite_interpolate(
    p: Union[float, NDArray],
    t0: float,
    t1: float,
    x0: NDArray,
    x1: NDArray,
    dx0: NDArray,
    dx1: NDArray,
) -> NDArray:
    """
    Evaluate the cubic Hermite interpolant at normalized offsets p.

    With dt = t1 - t0, dx = x1 - x0:

        x(p) = (1-p) x0 + p x1 + p (1-p) [(1-p) a + p b]
        a = dx0 dt - dx
        b = -dx1 dt + dx

    The form reproduces x0 at p = 0 and x1 at p = 1 exactly, and its
    p-derivative at the ends is dx0 dt and dx1 dt.

    Args:
        p: Scalar offset in [0, 1] or array of offsets (m,)
        t0, t1: Interval endpoints
        x0, x1: States at t0 and t1 (D,)
        dx0, dx1: Derivatives at t0 and t1 (D,)

    Returns:
        (D,) for scalar p, (m, D) for an array of offsets
    """
    dt = t1 - t0
    dx = x1 - x0
    a = dx0 * dt - dx
    b = -dx1 * dt + dx

    scalar = np.ndim(p) == 0
    p_col = np.atleast_1d(np.asarray(p, dtype=np.float64))[:, None]
    q_col = 1.0 - p_col

    x = q_col * x0 + p_col * x1 + p_col * q_col * (q_col * a + p_col * b)
    return x[0] if scalar else x


@dataclass(frozen=True)
class HermiteSegment:
    """One accepted solver interval with derivatives at both ends."""

    t0: float
    t1: float
    x0: NDArray  # (D,)
    x1: NDArray  # (D,)
    dx0: NDArray  # (D,)
    dx1: NDArray  # (D,)

    @property
    def duration(self) -> float:
        return self.t1 - self.t0

    def evaluate(self, p: Union[float, NDArray]) -> NDArray:
        """State at normalized offset(s) p."""
        return hermite_interpolate(p, self.t0, self.t1, self.x0, self.x1, self.dx0, self.dx1)

    def at(self, t: Union[float, NDArray]) -> NDArray:
        """State at absolute time(s) t within [t0, t1]."""
        t_arr = np.asarray(t, dtype=np.float64)
        if np.any(t_arr < self.t0) or np.any(t_arr > self.t1):
            raise ValueError(
                f"Interpolation times must lie within [{self.t0}, {self.t1}]"
            )
        return self.evaluate((t_arr - self.t0) / self.duration)

    def fill(self, n: int) -> tuple[NDArray, NDArray]:
        """
        Interior samples splitting the segment into n equal parts.

        Offsets p = i/n for i = 1..n-1; neither endpoint is included.

        Returns:
            times: (n-1,)
            states: (n-1, D)
        """
        if n < 1:
            raise ValueError(f"Number of parts must be at least 1, got {n}")
        p = np.arange(1, n, dtype=np.float64) / n
        times = self.t0 + p * self.duration
        return times, self.evaluate(p)
