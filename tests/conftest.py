"""Shared pytest fixtures for test suite."""

import numpy as np
import pytest

from rwsat import ResourcePool, ResponseCurve, Tank, WheelConfig


@pytest.fixture
def aligned_orientation():
    """Body control axes aligned with the reference axes."""
    return np.eye(3)


@pytest.fixture
def linear_torque_curve():
    """Full torque when empty, none when saturated."""
    return ResponseCurve(keys=[[0.0, 1.0], [1.0, 0.0]])


@pytest.fixture
def wheel_config(linear_torque_curve):
    """Wheel with 10 N*m per axis and a 10 N*m*s saturation limit."""
    return WheelConfig(
        name="test_wheel",
        max_torque=(10.0, 10.0, 10.0),
        saturation_scale=1.0,
        torque_curve=linear_torque_curve,
    )


@pytest.fixture
def discharge_config(linear_torque_curve):
    """Wheel that can discharge 10% of its limit per second using Mono."""
    return WheelConfig(
        name="discharge_wheel",
        max_torque=(10.0, 10.0, 10.0),
        torque_curve=linear_torque_curve,
        recovery_rate=0.1,
        resources="Mono,1.0",
    )


@pytest.fixture
def mono_pool():
    return ResourcePool([Tank("Mono", 100.0, scope="local")])
