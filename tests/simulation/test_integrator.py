import numpy as np
import pytest

from rwsat import MomentumStore, ResponseCurve
from rwsat.simulation import MomentumIntegrator, decay_toward_zero


@pytest.mark.parametrize(
    "momentum,decay,expected",
    [(5.0, 2.0, 3.0), (-5.0, 2.0, -3.0), (1.0, 2.0, 0.0), (-1.0, 2.0, 0.0), (0.0, 0.0, 0.0)],
)
def test_decay_toward_zero(momentum, decay, expected):
    assert decay_toward_zero(momentum, decay) == pytest.approx(expected)


def make_integrator(bleed=None, momentum=None):
    store = MomentumStore(10.0, momentum=momentum)
    curve = bleed if bleed is not None else ResponseCurve(default=0.0)
    return store, MomentumIntegrator(store, curve, (10.0, 10.0, 10.0))


class TestInputGrowth:
    def test_aligned_input_accumulates_on_matching_reference_axis(self):
        store, integ = make_integrator()
        integ.integrate_input(0.1, np.eye(3), (1.0, 0.0, 0.0), (10.0, 10.0, 10.0))
        assert np.allclose(store.momentum, [1.0, 0.0, 0.0])

    def test_input_is_clipped_to_unit_range(self):
        store, integ = make_integrator()
        integ.integrate_input(0.1, np.eye(3), (2.0, 0.0, -3.0), (10.0, 10.0, 10.0))
        assert np.allclose(store.momentum, [1.0, 0.0, -1.0])

    def test_rotated_orientation_projects_onto_reference_axes(self):
        store, integ = make_integrator()
        # pitch axis points along reference b
        orientation = np.array([[0.0, 1.0, 0.0], [-1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
        integ.integrate_input(0.1, orientation, (1.0, 0.0, 0.0), (10.0, 10.0, 10.0))
        assert np.allclose(store.momentum, [0.0, 1.0, 0.0])

    def test_available_torque_scales_growth(self):
        store, integ = make_integrator()
        integ.integrate_input(0.1, np.eye(3), (1.0, 1.0, 0.0), (5.0, 0.0, 10.0))
        assert np.allclose(store.momentum, [0.5, 0.0, 0.0])

    def test_non_positive_dt_is_no_op(self):
        store, integ = make_integrator()
        integ.integrate_input(0.0, np.eye(3), (1.0, 1.0, 1.0), (10.0, 10.0, 10.0))
        integ.bleed(-1.0, np.eye(3))
        assert store.is_empty


class TestBleed:
    def test_constant_bleed_moves_toward_zero(self):
        store, integ = make_integrator(
            bleed=ResponseCurve(keys=[[0.0, 0.1]]), momentum=(2.0, -2.0, 0.3)
        )
        integ.bleed(0.5, np.eye(3))  # decay = 10 * 0.1 * 0.5
        assert np.allclose(store.momentum, [1.5, -1.5, 0.0])

    def test_empty_bleed_curve_keeps_momentum(self):
        store, integ = make_integrator(momentum=(2.0, -2.0, 0.3))
        integ.bleed(1.0, np.eye(3))
        assert np.allclose(store.momentum, [2.0, -2.0, 0.3])

    def test_step_without_growth_only_bleeds(self):
        store, integ = make_integrator(
            bleed=ResponseCurve(keys=[[0.0, 0.1]]), momentum=(2.0, 0.0, 0.0)
        )
        integ.step(0.5, np.eye(3), (1.0, 1.0, 1.0), (10.0, 10.0, 10.0), grow=False)
        assert np.allclose(store.momentum, [1.5, 0.0, 0.0])

    def test_step_without_decay_only_grows(self):
        store, integ = make_integrator(bleed=ResponseCurve(keys=[[0.0, 0.1]]))
        integ.step(0.1, np.eye(3), (1.0, 0.0, 0.0), (10.0, 10.0, 10.0), decay=False)
        assert np.allclose(store.momentum, [1.0, 0.0, 0.0])
