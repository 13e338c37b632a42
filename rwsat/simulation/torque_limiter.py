from __future__ import annotations

import numpy as np
import numpy.typing as npt

from ..common import REFERENCE_BASIS, as_basis, as_vector, normalize, project_onto_basis
from ..config.constants import UNCONSTRAINED_RATIO
from ..config.curve import ResponseCurve
from .momentum_store import MomentumStore


def limit_axis_torque(
    weights: npt.NDArray[np.float64],
    curve_values: npt.NDArray[np.float64],
    max_torque: float,
) -> float:
    """Scale a control axis' nominal torque to its worst saturated reference axis.

    Args:
        weights: Projection of the control axis onto each reference axis.
        curve_values: Torque curve value for each reference axis.
        max_torque: Nominal torque of the control axis (N*m).

    Returns:
        Deliverable torque in ``[0, |max_torque|]``.
    """
    ratios = [UNCONSTRAINED_RATIO] * 3
    for i in range(3):
        if weights[i] != 0:
            ratios[i] = abs(curve_values[i] / weights[i])
    scale = min(ratios[0], ratios[1], ratios[2], 1.0)
    nominal = abs(float(max_torque))
    torque = float(np.linalg.norm(weights)) * scale * nominal
    # A non-orthonormal basis can stretch the weight vector; never exceed nominal
    return min(torque, nominal)


class SaturationTorqueLimiter:
    """Torque deliverable per control axis given reference-axis saturation.

    A control axis draws on all three reference-axis stores at once, weighted
    by its alignment with each. The most saturated contributing store is the
    bottleneck, so the whole axis is scaled down to it.
    """

    def __init__(
        self,
        store: MomentumStore,
        torque_curve: ResponseCurve,
        reference_basis: npt.ArrayLike = REFERENCE_BASIS,
    ) -> None:
        self.store = store
        self.torque_curve = torque_curve
        self.reference_basis = as_basis(reference_basis)

    def curve_values(self) -> npt.NDArray[np.float64]:
        """Torque curve value at each reference axis' current saturation."""
        return np.array(
            [
                self.torque_curve.evaluate(self.store.saturation_fraction(i))
                for i in range(3)
            ]
        )

    def available_torque(self, axis: npt.ArrayLike, max_torque: float) -> float:
        """Torque available about one body-frame control axis.

        Args:
            axis: Control axis direction in the reference frame (normalised here).
            max_torque: Nominal torque of that axis (N*m).
        """
        weights = project_onto_basis(normalize(axis), self.reference_basis)
        return limit_axis_torque(weights, self.curve_values(), max_torque)

    def available_torques(
        self, orientation: npt.ArrayLike, nominal_torque: npt.ArrayLike
    ) -> npt.NDArray[np.float64]:
        """Available torque for the pitch, yaw and roll axes of `orientation`."""
        axes = as_basis(orientation)
        nominal = as_vector(nominal_torque)
        curve_values = self.curve_values()
        torques = np.zeros(3, dtype=np.float64)
        for i in range(3):
            weights = project_onto_basis(normalize(axes[i]), self.reference_basis)
            torques[i] = limit_axis_torque(weights, curve_values, nominal[i])
        return torques
