"""Per-tick momentum accumulation and passive bleed.

Commanded control effort is converted to momentum along each body-frame
control axis and stored against the fixed reference axes. Stored momentum is
then bled back toward zero at a rate shaped by the bleed curve.
"""

from __future__ import annotations

import logging

import numpy as np
import numpy.typing as npt

from ..common import REFERENCE_BASIS, as_basis, as_vector, axis_torque_magnitude
from ..config.curve import ResponseCurve
from .momentum_store import MomentumStore

_logger = logging.getLogger(__name__)


def decay_toward_zero(momentum: float, decay: float) -> float:
    """Move `momentum` toward zero by `decay` without crossing zero."""
    if momentum > decay:
        return momentum - decay
    if momentum < -decay:
        return momentum + decay
    return 0.0


class MomentumIntegrator:
    """Accumulates control input into a MomentumStore and applies bleed.

    Args:
        store: Momentum store updated in place.
        bleed_curve: Saturation fraction -> fraction of nominal torque bled per second.
        nominal_torque: Nominal (pitch, yaw, roll) torque in N*m.
        reference_basis: Reference axes (rows) the store is expressed in.
    """

    def __init__(
        self,
        store: MomentumStore,
        bleed_curve: ResponseCurve,
        nominal_torque: npt.ArrayLike,
        reference_basis: npt.ArrayLike = REFERENCE_BASIS,
    ) -> None:
        self.store = store
        self.bleed_curve = bleed_curve
        self.nominal_torque = np.abs(as_vector(nominal_torque))
        self.reference_basis = as_basis(reference_basis)

    def input_delta(
        self,
        dt: float,
        orientation: npt.ArrayLike,
        control_input: npt.ArrayLike,
        available_torque: npt.ArrayLike,
    ) -> npt.NDArray[np.float64]:
        """Momentum change per reference axis produced by one tick of input."""
        axes = as_basis(orientation)
        commands = np.clip(as_vector(control_input), -1.0, 1.0)
        scalar_deltas = commands * dt * as_vector(available_torque)
        # Each control axis carries its scalar delta along its body direction
        delta_vec = scalar_deltas.dot(axes)
        return self.reference_basis.dot(delta_vec)

    def integrate_input(
        self,
        dt: float,
        orientation: npt.ArrayLike,
        control_input: npt.ArrayLike,
        available_torque: npt.ArrayLike,
    ) -> npt.NDArray[np.float64]:
        """Grow stored momentum from commanded input; returns the applied delta."""
        if dt <= 0:
            return np.zeros(3, dtype=np.float64)
        delta = self.input_delta(dt, orientation, control_input, available_torque)
        self.store.add(delta)
        _logger.debug(
            "Input momentum delta=[%.4e, %.4e, %.4e] -> m=[%.4e, %.4e, %.4e]",
            delta[0],
            delta[1],
            delta[2],
            self.store.momentum[0],
            self.store.momentum[1],
            self.store.momentum[2],
        )
        return delta

    def decay_amounts(
        self, dt: float, orientation: npt.ArrayLike
    ) -> npt.NDArray[np.float64]:
        """Bleed amount for each reference axis over `dt` at the current orientation."""
        decays = np.zeros(3, dtype=np.float64)
        for i in range(3):
            torque_mag = axis_torque_magnitude(
                orientation, self.nominal_torque, self.reference_basis[i]
            )
            rate = self.bleed_curve.evaluate(self.store.saturation_fraction(i))
            decays[i] = torque_mag * rate * dt
        return decays

    def bleed(self, dt: float, orientation: npt.ArrayLike) -> None:
        """Bleed each reference axis toward zero."""
        if dt <= 0:
            return
        decays = self.decay_amounts(dt, orientation)
        for i in range(3):
            self.store.set_axis(
                i, decay_toward_zero(float(self.store.momentum[i]), float(decays[i]))
            )

    def step(
        self,
        dt: float,
        orientation: npt.ArrayLike,
        control_input: npt.ArrayLike,
        available_torque: npt.ArrayLike,
        grow: bool = True,
        decay: bool = True,
    ) -> None:
        """Run one tick: input growth (when `grow`) followed by bleed (when `decay`)."""
        if grow:
            self.integrate_input(dt, orientation, control_input, available_torque)
        if decay:
            self.bleed(dt, orientation)
