"""Trajectory storage."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional
import numpy as np
from numpy.typing import NDArray

from hrtrace.solvers.base import StepStatus


class RunStatus(Enum):
    """How an integration run ended."""
    COMPLETE = auto()   # reached the horizon
    TRUNCATED = auto()  # stopped early on a stepper failure


@dataclass
class Trajectory:
    """
    Sampled solution of one integration request.

    A run that takes at least one step holds n >= 2 samples. A run whose
    first step fails holds only the initial sample (n == 1) and is
    TRUNCATED; the initial state is never repeated to pad it, since times
    must stay strictly increasing.
    """

    times: NDArray      # (n,) strictly increasing, times[0] == 0
    states: NDArray     # (n, D)
    status: RunStatus = RunStatus.COMPLETE
    failure: Optional[StepStatus] = None  # set when status is TRUNCATED

    def __post_init__(self):
        if len(self.times) != len(self.states):
            raise ValueError(
                f"Times and states must have same length: "
                f"{len(self.times)} != {len(self.states)}"
            )
        if self.states.ndim != 2:
            raise ValueError(f"States must be 2-dimensional, got shape {self.states.shape}")

    def __len__(self) -> int:
        return len(self.times)

    @property
    def dim(self) -> int:
        """State dimension."""
        return self.states.shape[1]

    @property
    def is_complete(self) -> bool:
        return self.status is RunStatus.COMPLETE

    @property
    def final_time(self) -> float:
        return float(self.times[-1])

    def component(self, index: int) -> NDArray:
        """Time series of one state component, shape (n,)."""
        return self.states[:, index]


class TrajectoryBuffer:
    """
    Growable sample storage reused across requests.

    reset() empties the buffer and makes sure the requested capacity is
    allocated; arrays double in size when full. Trajectories produced by
    to_trajectory() own copies of the data.
    """

    def __init__(self, dim: int, capacity: int = 256):
        if dim <= 0:
            raise ValueError(f"Dimension must be positive, got {dim}")
        self.dim = dim
        self._times = np.empty(max(capacity, 1))
        self._states = np.empty((max(capacity, 1), dim))
        self._size = 0

    def __len__(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return self._times.shape[0]

    @property
    def last_time(self) -> float:
        if self._size == 0:
            raise IndexError("Buffer is empty")
        return float(self._times[self._size - 1])

    def reset(self, capacity_hint: int = 0) -> None:
        """Discard all samples, keeping (or enlarging) the allocation."""
        self._size = 0
        if capacity_hint > self.capacity:
            self._times = np.empty(capacity_hint)
            self._states = np.empty((capacity_hint, self.dim))

    def append(self, t: float, x: NDArray) -> None:
        self._reserve(self._size + 1)
        self._times[self._size] = t
        self._states[self._size] = x
        self._size += 1

    def extend(self, times: NDArray, states: NDArray) -> None:
        """Append a block of samples, times (m,) and states (m, D)."""
        m = len(times)
        if m == 0:
            return
        self._reserve(self._size + m)
        self._times[self._size:self._size + m] = times
        self._states[self._size:self._size + m] = states
        self._size += m

    def to_trajectory(
        self,
        status: RunStatus = RunStatus.COMPLETE,
        failure: Optional[StepStatus] = None,
    ) -> Trajectory:
        return Trajectory(
            times=self._times[:self._size].copy(),
            states=self._states[:self._size].copy(),
            status=status,
            failure=failure,
        )

    def _reserve(self, needed: int) -> None:
        if needed <= self.capacity:
            return
        new_capacity = max(needed, 2 * self.capacity)
        times = np.empty(new_capacity)
        states = np.empty((new_capacity, self.dim))
        times[:self._size] = self._times[:self._size]
        states[:self._size] = self._states[:self._size]
        self._times, self._states = times, states
