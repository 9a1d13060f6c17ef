"""Component visibility masks.

A mask is any ``enum.Flag`` (or plain int) whose bit ``i`` enables state
component ``i``. The sampler never reads the mask; these helpers let a
renderer pick and scale the enabled components of a finished trajectory.
"""

from enum import Flag
from typing import Union
import numpy as np
from numpy.typing import NDArray

from hrtrace.stepping.trajectory import Trajectory

Mask = Union[Flag, int]


def _bits(mask: Mask) -> int:
    return mask.value if isinstance(mask, Flag) else int(mask)


def enabled_indices(mask: Mask, dim: int) -> list[int]:
    """State indices whose bit is set in mask."""
    bits = _bits(mask)
    return [i for i in range(dim) if bits & (1 << i)]


def select_components(trajectory: Trajectory, mask: Mask) -> NDArray:
    """Columns of the enabled components, shape (n, k)."""
    return trajectory.states[:, enabled_indices(mask, trajectory.dim)]


def peak_amplitude(trajectory: Trajectory, mask: Mask) -> float:
    """
    Largest absolute value over the enabled components.

    Returns 0.0 when no component is enabled or every enabled component is
    identically zero. Callers deriving a display scale by dividing by this
    value must handle that case themselves.
    """
    selected = select_components(trajectory, mask)
    if selected.size == 0:
        return 0.0
    return float(np.max(np.abs(selected)))
