"""Tests for trajectory storage and component selection."""

import numpy as np
import pytest

from hrtrace.models.hindmarsh_rose import HRComponent
from hrtrace.solvers.base import StepStatus
from hrtrace.stepping.components import enabled_indices, peak_amplitude, select_components
from hrtrace.stepping.trajectory import RunStatus, Trajectory, TrajectoryBuffer


def test_trajectory_rejects_length_mismatch():
    with pytest.raises(ValueError, match="same length"):
        Trajectory(times=np.zeros(3), states=np.zeros((2, 1)))


def test_trajectory_properties():
    traj = Trajectory(
        times=np.array([0.0, 0.5, 1.0]),
        states=np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]),
    )
    assert len(traj) == 3
    assert traj.dim == 2
    assert traj.is_complete
    assert traj.failure is None
    assert traj.final_time == 1.0
    assert np.array_equal(traj.component(1), [2.0, 4.0, 6.0])


def test_buffer_grows_past_capacity():
    buf = TrajectoryBuffer(dim=2, capacity=2)
    for i in range(5):
        buf.append(float(i), np.array([i, -i]))

    assert len(buf) == 5
    assert buf.capacity >= 5
    assert buf.last_time == 4.0

    traj = buf.to_trajectory()
    assert np.array_equal(traj.times, np.arange(5.0))
    assert np.array_equal(traj.states[:, 1], -np.arange(5.0))


def test_buffer_extend_block():
    buf = TrajectoryBuffer(dim=1, capacity=1)
    buf.append(0.0, np.array([0.0]))
    buf.extend(np.array([0.1, 0.2, 0.3]), np.array([[1.0], [2.0], [3.0]]))
    buf.extend(np.empty(0), np.empty((0, 1)))

    traj = buf.to_trajectory()
    assert np.allclose(traj.times, [0.0, 0.1, 0.2, 0.3])
    assert np.allclose(traj.states[:, 0], [0.0, 1.0, 2.0, 3.0])


def test_buffer_reset_reuses_storage_and_results_stay_valid():
    buf = TrajectoryBuffer(dim=1, capacity=8)
    buf.append(0.0, np.array([1.0]))
    buf.append(1.0, np.array([2.0]))
    first = buf.to_trajectory(RunStatus.TRUNCATED, StepStatus.NON_FINITE)

    storage = buf._times
    buf.reset(4)
    assert len(buf) == 0
    assert buf._times is storage

    buf.append(0.0, np.array([-7.0]))
    buf.reset(64)
    assert buf.capacity == 64

    assert np.array_equal(first.states[:, 0], [1.0, 2.0])
    assert first.status is RunStatus.TRUNCATED
    assert first.failure is StepStatus.NON_FINITE


def test_empty_buffer_has_no_last_time():
    with pytest.raises(IndexError):
        TrajectoryBuffer(dim=1).last_time


def test_enabled_indices_follow_bits():
    assert enabled_indices(HRComponent.X | HRComponent.Z, 3) == [0, 2]
    assert enabled_indices(HRComponent.ALL, 3) == [0, 1, 2]
    assert enabled_indices(HRComponent.NONE, 3) == []
    assert enabled_indices(0b10, 3) == [1]


def test_select_and_peak_amplitude():
    traj = Trajectory(
        times=np.array([0.0, 1.0]),
        states=np.array([[1.0, -8.0, 0.5], [-3.0, 2.0, 0.25]]),
    )

    assert select_components(traj, HRComponent.X | HRComponent.Z).shape == (2, 2)
    assert peak_amplitude(traj, HRComponent.X) == 3.0
    assert peak_amplitude(traj, HRComponent.ALL) == 8.0
    assert peak_amplitude(traj, HRComponent.NONE) == 0.0


def test_peak_amplitude_of_all_zero_selection_is_zero():
    traj = Trajectory(times=np.array([0.0, 1.0]), states=np.zeros((2, 3)))
    assert peak_amplitude(traj, HRComponent.ALL) == 0.0
