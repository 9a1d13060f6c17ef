"""Sampling, interpolation and trajectory storage."""

from hrtrace.stepping.trajectory import Trajectory, TrajectoryBuffer, RunStatus
from hrtrace.stepping.hermite import HermiteSegment, hermite_interpolate
from hrtrace.stepping.sampler import TrajectorySampler, compute_trajectory
from hrtrace.stepping.components import (
    enabled_indices,
    select_components,
    peak_amplitude,
)

__all__ = [
    "Trajectory",
    "TrajectoryBuffer",
    "RunStatus",
    "HermiteSegment",
    "hermite_interpolate",
    "TrajectorySampler",
    "compute_trajectory",
    "enabled_indices",
    "select_components",
    "peak_amplitude",
]
