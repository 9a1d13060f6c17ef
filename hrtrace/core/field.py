"""Vector field protocol."""

from typing import Any, Callable, Protocol
import numpy as np
from numpy.typing import NDArray


class VectorField(Protocol):
    """Right-hand side of ẋ = f(t, x; params).

    Implementations are pure: the same (t, state, params) always gives the
    same derivative. Numerical pathologies are returned as NaN/Inf, never
    raised.
    """

    @property
    def dim(self) -> int:
        """State dimension D."""
        ...

    def evaluate(self, t: float, state: NDArray, params: Any) -> NDArray:
        """Derivative at (t, state), shape (D,)."""
        ...


class FunctionField:
    """Adapts a plain callable fn(t, state, params) to the VectorField protocol."""

    def __init__(self, fn: Callable[[float, NDArray, Any], NDArray], dim: int):
        if dim <= 0:
            raise ValueError(f"Dimension must be positive, got {dim}")
        self._fn = fn
        self._dim = dim

    @property
    def dim(self) -> int:
        return self._dim

    def evaluate(self, t: float, state: NDArray, params: Any) -> NDArray:
        return np.asarray(self._fn(t, state, params), dtype=np.float64)

    def __repr__(self) -> str:
        return f"FunctionField(fn={self._fn!r}, dim={self._dim})"
