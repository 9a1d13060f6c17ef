import numpy as np
import pytest

from hrtrace.core.tableau import EmbeddedTableau
from hrtrace.methods.embedded import rkf45, validate_tableau


def test_rkf45_shapes_and_consistency():
    tab = rkf45()

    assert tab.s == 6
    assert tab.order == 5
    assert tab.A.shape == (6, 6)
    assert tab.b_high.shape == (6,)
    assert tab.b_low.shape == (6,)
    assert validate_tableau(tab)

    # Error weights integrate to zero: both solutions agree on constants
    assert np.isclose(tab.error_weights.sum(), 0.0)
    assert np.allclose(tab.error_weights, tab.b_high - tab.b_low)


def test_rkf45_is_fifth_order_on_polynomials():
    """Weights integrate t^k exactly up to k = 4 (quadrature conditions)."""
    tab = rkf45()
    for k in range(5):
        assert np.isclose(tab.b_high @ tab.c ** k, 1.0 / (k + 1))


def test_tableau_rejects_implicit_stage_matrix():
    A = np.array([[0.5, 0.0], [0.5, 0.5]])
    b = np.array([0.5, 0.5])
    c = np.array([0.5, 1.0])

    with pytest.raises(ValueError, match="strictly lower triangular"):
        EmbeddedTableau(A=A, b_high=b, b_low=b, c=c, order=2)


def test_tableau_rejects_mismatched_weights():
    A = np.zeros((2, 2))
    c = np.array([0.0, 1.0])

    with pytest.raises(ValueError, match="b_low"):
        EmbeddedTableau(A=A, b_high=np.array([0.5, 0.5]), b_low=np.array([1.0]), c=c, order=2)


def test_validate_tableau_detects_inconsistent_abscissae():
    tab = rkf45()
    broken = EmbeddedTableau(
        A=tab.A, b_high=tab.b_high, b_low=tab.b_low, c=tab.c + 0.1, order=5
    )
    assert not validate_tableau(broken)
