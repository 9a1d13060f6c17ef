"""Hindmarsh-Rose neuron model.

    dx/dt = x^2 (b - a x) + y - z + I
    dy/dt = c - d x^2 - y
    dz/dt = r (s (x - X) - z)

x is the membrane potential, y the fast (spiking) recovery variable and z
the slow (bursting) adaptation current.
"""

from dataclasses import asdict, dataclass
from enum import Flag
from typing import Mapping, Optional
import numpy as np
from numpy.typing import NDArray

from hrtrace import config
from hrtrace.core.params import ParameterRange, RunRequest, Tolerances


@dataclass(frozen=True)
class HindmarshRoseParams:
    """Model coefficients."""

    a: float = 1.0
    b: float = 2.7
    c: float = 1.0
    d: float = 5.0
    r: float = 1e-2
    s: float = 4.0
    x_rest: float = -1.3   # X
    current: float = 2.9   # I

    # Single-character control keys of the fields that are not named alike
    _KEYS = {"X": "x_rest", "I": "current"}

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "HindmarshRoseParams":
        """Build from control keys 'a', 'b', 'c', 'd', 'r', 's', 'X', 'I'.

        Missing keys keep their defaults; unrelated keys are ignored.
        """
        kwargs = {}
        for key in MODEL_KEYS:
            if key in values:
                kwargs[cls._KEYS.get(key, key)] = float(values[key])
        return cls(**kwargs)

    def as_mapping(self) -> dict[str, float]:
        """Inverse of from_mapping."""
        fields = asdict(self)
        return {key: fields[self._KEYS.get(key, key)] for key in MODEL_KEYS}


class HRComponent(Flag):
    """Visibility bits of the three state components."""
    NONE = 0
    X = 1 << 0  # membrane potential
    Y = 1 << 1  # fast channels, spiking
    Z = 1 << 2  # slow channels, bursting
    ALL = X | Y | Z


COMPONENT_LABELS = {
    HRComponent.X: "x(t) (membrane potential)",
    HRComponent.Y: "y(t) (fast channels, spiking)",
    HRComponent.Z: "z(t) (slow channels, bursting)",
}

DEFAULT_VISIBLE = HRComponent.X


class HindmarshRose:
    """Vector field of the Hindmarsh-Rose model."""

    dim = 3

    def evaluate(self, t: float, state: NDArray, params: HindmarshRoseParams) -> NDArray:
        x, y, z = state
        p = params
        return np.array([
            x * x * (p.b - p.a * x) + y - z + p.current,
            p.c - p.d * x * x - y,
            p.r * (p.s * (x - p.x_rest) - z),
        ])


MODEL_KEYS = ("a", "b", "c", "d", "r", "s", "X", "I")
STATE_KEYS = ("x", "y", "z")
HORIZON_KEY = "t"

HR_CONTROL_RANGES: dict[str, ParameterRange] = {
    rng.key: rng
    for rng in (
        ParameterRange("a", -3.0, 3.0, 1.0),
        ParameterRange("b", 1.0, 5.0, 2.7),
        ParameterRange("c", -3.0, 3.0, 1.0),
        ParameterRange("d", -2.0, 9.0, 5.0),
        ParameterRange("r", 5e-4, 0.04, 1e-2),
        ParameterRange("s", 0.0, 8.0, 4.0),
        ParameterRange("X", -5.0, 2.0, -1.3, "resting potential"),
        ParameterRange("I", -9.0, 9.0, 2.9, "applied current"),
        ParameterRange("x", -9.0, 9.0, 0.0, "initial x"),
        ParameterRange("y", -9.0, 9.0, 0.0, "initial y"),
        ParameterRange("z", -9.0, 9.0, 0.0, "initial z"),
        ParameterRange("t", 20.0, 9e3, 9e2, "integration time"),
    )
}


def default_controls() -> dict[str, float]:
    """Default value of every control."""
    return {key: rng.default for key, rng in HR_CONTROL_RANGES.items()}


def request_from_controls(
    values: Mapping[str, float],
    max_gap: float = config.DEFAULT_MAX_GAP,
    tolerances: Optional[Tolerances] = None,
) -> RunRequest:
    """
    Snapshot a set of control values into a RunRequest.

    Args:
        values: Control values keyed as in HR_CONTROL_RANGES; missing keys
            take their defaults
        max_gap: Largest allowed spacing of output samples
        tolerances: Error tolerances, package defaults if omitted

    Returns:
        RunRequest for the HindmarshRose field

    Raises:
        ValueError: If a value lies outside its control range or a key is unknown
    """
    unknown = set(values) - set(HR_CONTROL_RANGES)
    if unknown:
        raise ValueError(f"Unknown control keys: {sorted(unknown)}")

    merged = default_controls()
    for key, value in values.items():
        rng = HR_CONTROL_RANGES[key]
        if not rng.contains(value):
            raise ValueError(
                f"Control '{key}' = {value} outside [{rng.lower}, {rng.upper}]"
            )
        merged[key] = float(value)

    return RunRequest(
        initial_state=tuple(merged[key] for key in STATE_KEYS),
        params=HindmarshRoseParams.from_mapping(merged),
        horizon=merged[HORIZON_KEY],
        max_gap=max_gap,
        tolerances=tolerances if tolerances is not None else Tolerances(),
    )
