"""Embedded Runge-Kutta pair coefficients."""

from dataclasses import dataclass
from functools import cached_property
import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class EmbeddedTableau:
    """Butcher tableau of an explicit embedded Runge-Kutta pair."""

    A: NDArray       # (s, s) - strictly lower triangular stage coefficients
    b_high: NDArray  # (s,)   - weights of the propagated solution
    b_low: NDArray   # (s,)   - weights of the embedded comparison solution
    c: NDArray       # (s,)   - abscissae
    order: int       # order of the propagated solution
    name: str = "embedded"

    def __post_init__(self):
        s = self.A.shape[0]
        if self.A.shape != (s, s):
            raise ValueError(f"Stage matrix must be square, got {self.A.shape}")
        for label, vec in (("b_high", self.b_high), ("b_low", self.b_low), ("c", self.c)):
            if vec.shape != (s,):
                raise ValueError(f"{label} must have shape ({s},), got {vec.shape}")
        if not np.allclose(self.A, np.tril(self.A, -1)):
            raise ValueError("Stage matrix must be strictly lower triangular")

    @cached_property
    def s(self) -> int:
        """Number of stages."""
        return self.A.shape[0]

    @cached_property
    def error_weights(self) -> NDArray:
        """Weights e such that h Σ e_j k_j estimates the local error."""
        return self.b_high - self.b_low
