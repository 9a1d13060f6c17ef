"""
hrtrace: bounded-gap trajectory sampling for small ODE systems.

An embedded Runge-Kutta-Fehlberg 4(5) integrator advances the state with
error-controlled adaptive steps; oversized steps are resampled by cubic
Hermite interpolation so that consecutive output samples never lie more
than a fixed maximum gap apart. The Hindmarsh-Rose neuron model is
provided as the default vector field.
"""

__version__ = "0.1.0"

from hrtrace.core.field import VectorField, FunctionField
from hrtrace.core.params import Tolerances, RunRequest
from hrtrace.stepping.trajectory import Trajectory, RunStatus
from hrtrace.stepping.sampler import TrajectorySampler, compute_trajectory
from hrtrace.models.hindmarsh_rose import (
    HindmarshRose,
    HindmarshRoseParams,
    HRComponent,
    request_from_controls,
)

__all__ = [
    "VectorField",
    "FunctionField",
    "Tolerances",
    "RunRequest",
    "Trajectory",
    "RunStatus",
    "TrajectorySampler",
    "compute_trajectory",
    "HindmarshRose",
    "HindmarshRoseParams",
    "HRComponent",
    "request_from_controls",
]
