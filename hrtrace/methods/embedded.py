"""Embedded Runge-Kutta tableaux."""

import numpy as np
from hrtrace.core.tableau import EmbeddedTableau


def rkf45() -> EmbeddedTableau:
    """Runge-Kutta-Fehlberg 4(5), advancing with the 5th-order solution."""
    A = np.array([
        [0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
        [1.0/4.0, 0.0, 0.0, 0.0, 0.0, 0.0],
        [3.0/32.0, 9.0/32.0, 0.0, 0.0, 0.0, 0.0],
        [1932.0/2197.0, -7200.0/2197.0, 7296.0/2197.0, 0.0, 0.0, 0.0],
        [439.0/216.0, -8.0, 3680.0/513.0, -845.0/4104.0, 0.0, 0.0],
        [-8.0/27.0, 2.0, -3544.0/2565.0, 1859.0/4104.0, -11.0/40.0, 0.0],
    ])
    b_high = np.array([
        16.0/135.0, 0.0, 6656.0/12825.0, 28561.0/56430.0, -9.0/50.0, 2.0/55.0
    ])
    b_low = np.array([
        25.0/216.0, 0.0, 1408.0/2565.0, 2197.0/4104.0, -1.0/5.0, 0.0
    ])
    c = np.array([0.0, 1.0/4.0, 3.0/8.0, 12.0/13.0, 1.0, 1.0/2.0])
    return EmbeddedTableau(A=A, b_high=b_high, b_low=b_low, c=c, order=5, name="rkf45")


def validate_tableau(tableau: EmbeddedTableau) -> bool:
    """
    Check basic consistency conditions of an embedded pair.

    Args:
        tableau: Pair to validate

    Returns:
        True if A·1 = c and both weight vectors sum to one
    """
    row_sums = tableau.A @ np.ones(tableau.s)
    return (
        np.allclose(row_sums, tableau.c)
        and np.isclose(tableau.b_high.sum(), 1.0)
        and np.isclose(tableau.b_low.sum(), 1.0)
    )
