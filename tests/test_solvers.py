"""Tests for the step-size controller and the embedded stepper."""

import numpy as np
import pytest

from hrtrace.core.field import FunctionField
from hrtrace.core.params import Tolerances
from hrtrace.solvers.base import StepStatus
from hrtrace.solvers.control import Adjustment, StandardControl
from hrtrace.solvers.embedded import EmbeddedStepper


class Decay:
    """dx/dt = -k x"""

    dim = 1

    def __init__(self, k=1.0):
        self.k = k

    def evaluate(self, t, state, params):
        return -self.k * state


def test_error_ratio_uses_mixed_tolerance():
    control = StandardControl(Tolerances(atol=1e-3, rtol=1e-2))
    y = np.array([0.0, 10.0])
    err = np.array([1e-3, 1e-2])

    # Scales are 1e-3 and 1e-3 + 1e-1
    expected = max(1e-3 / 1e-3, 1e-2 / (1e-3 + 1e-1))
    assert np.isclose(control.error_ratio(y, err), expected)


def test_adjust_decreases_with_floor():
    control = StandardControl()

    h_new, adj = control.adjust(1.0, 2.0, order=5)
    assert adj is Adjustment.DECREASE
    assert np.isclose(h_new, 0.9 * 2.0 ** (-1.0 / 5.0))

    h_new, adj = control.adjust(1.0, 1e12, order=5)
    assert adj is Adjustment.DECREASE
    assert np.isclose(h_new, 0.2)


def test_adjust_increases_with_ceiling():
    control = StandardControl()

    h_new, adj = control.adjust(1.0, 0.1, order=5)
    assert adj is Adjustment.INCREASE
    assert np.isclose(h_new, 0.9 * 0.1 ** (-1.0 / 6.0))

    h_new, adj = control.adjust(1.0, 1e-12, order=5)
    assert np.isclose(h_new, 5.0)

    h_new, adj = control.adjust(1.0, 0.0, order=5)
    assert adj is Adjustment.INCREASE
    assert h_new == 5.0


def test_adjust_keeps_step_inside_band():
    control = StandardControl()
    h_new, adj = control.adjust(0.3, 0.8, order=5)
    assert adj is Adjustment.UNCHANGED
    assert h_new == 0.3


def test_attempt_matches_exponential():
    stepper = EmbeddedStepper()
    y_new, err = stepper.attempt(Decay(), None, 0.0, np.array([1.0]), 0.1)

    assert np.isclose(y_new[0], np.exp(-0.1), atol=1e-8)
    assert abs(err[0]) < 1e-6


def test_step_accepts_and_proposes_next():
    stepper = EmbeddedStepper(control=StandardControl(Tolerances(1e-6, 1e-6)))
    result = stepper.step(Decay(), None, 0.0, np.array([1.0]), 0.01)

    assert result.accepted
    assert result.status is StepStatus.ACCEPTED
    assert result.t == pytest.approx(0.01)
    assert result.h_used == pytest.approx(0.01)
    assert result.h_next > result.h_used
    assert np.isclose(result.y[0], np.exp(-0.01), atol=1e-10)


def test_step_retries_internally_after_rejection():
    stepper = EmbeddedStepper(control=StandardControl(Tolerances(1e-8, 1e-8)))
    result = stepper.step(Decay(k=5.0), None, 0.0, np.array([1.0]), 1.0)

    assert result.accepted
    assert result.rejections > 0
    assert result.h_used < 1.0
    assert np.isclose(result.y[0], np.exp(-5.0 * result.t), rtol=1e-6)


def test_step_clips_to_end_time():
    stepper = EmbeddedStepper()
    result = stepper.step(Decay(), None, 0.95, np.array([1.0]), 0.2, t_end=1.0)

    assert result.accepted
    assert result.t == 1.0
    assert result.h_used == pytest.approx(0.05)


def test_step_reports_non_finite_state():
    field = FunctionField(lambda t, x, p: np.array([np.nan]), dim=1)
    stepper = EmbeddedStepper()
    y = np.array([1.0])

    result = stepper.step(field, None, 0.0, y, 0.1)

    assert not result.accepted
    assert result.status is StepStatus.NON_FINITE
    assert result.t == 0.0
    assert result.y is y


def test_step_reports_underflow():
    stepper = EmbeddedStepper(
        control=StandardControl(Tolerances(1e-10, 1e-10)), min_step=0.5
    )
    result = stepper.step(Decay(k=50.0), None, 0.0, np.array([1.0]), 1.0)

    assert result.status is StepStatus.STEP_UNDERFLOW
    assert result.rejections == 1
    assert result.t == 0.0


def test_max_step_caps_proposal():
    field = FunctionField(lambda t, x, p: np.zeros(1), dim=1)
    stepper = EmbeddedStepper(max_step=0.25)

    result = stepper.step(field, None, 0.0, np.array([2.0]), 0.2)

    assert result.accepted
    assert result.h_next == 0.25
    assert result.y[0] == 2.0
