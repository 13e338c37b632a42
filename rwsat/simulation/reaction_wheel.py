from __future__ import annotations

import logging
from typing import Any

import numpy as np
import numpy.typing as npt

from ..common import ControlAxis, WheelState, as_basis, as_vector
from ..config.constants import ATMOSPHERE_DENSITY_THRESHOLD
from ..config.wheel import WheelConfig
from .discharge import DischargeResult, ResourceDischargeCoordinator, ResourceSupply
from .integrator import MomentumIntegrator
from .momentum_store import MomentumState, MomentumStore
from .telemetry import WheelTelemetrySnapshot
from .torque_limiter import SaturationTorqueLimiter

# module logger for optional debug tracing
logger = logging.getLogger(__name__)


def _to_float(val: Any) -> float:
    """Coerce a value to float or raise if it is not numeric."""
    try:
        return float(val)
    except (TypeError, ValueError):
        raise ValueError(f"Expected numeric value, got {val!r}") from None


class SaturatableReactionWheel:
    """Reaction wheel whose torque fades as stored momentum builds up.

    This is not a gyroscopic model. Momentum is bookkeeping attributed to
    three fixed reference axes: commanded input adds to it according to how
    the vehicle's control axes line up with those axes, and it bleeds back
    toward zero over time.

    - Available torque per control axis (pitch, yaw, roll) is limited by the
      most saturated reference axis the control axis draws on.
    - Momentum can be discharged actively by consuming resources from a
      supply; while discharging the wheel hands no torque to the vehicle.
    - Only the three momenta and the decay toggle are persisted; everything
      else is recomputed from configuration by `initialize`.
    """

    def __init__(
        self,
        config: WheelConfig | None = None,
        state: MomentumState | None = None,
        atmospheric_density: float = 0.0,
    ) -> None:
        self.initialize(
            config if config is not None else WheelConfig(),
            state=state,
            atmospheric_density=atmospheric_density,
        )

    def initialize(
        self,
        config: WheelConfig,
        state: MomentumState | None = None,
        atmospheric_density: float = 0.0,
    ) -> None:
        """Derive all non-persisted quantities from `config` and reset runtime state."""
        self.config = config
        self.name = config.name
        self.max_torque = np.abs(np.array(config.max_torque, dtype=np.float64))
        self.saturation_limit = config.saturation_limit
        self.reference_basis = as_basis(config.reference_basis)

        if state is None:
            self.store = MomentumStore(
                self.saturation_limit, clamp_policy=config.momentum_clamp
            )
            self.decay_enabled = True
        else:
            self.store = MomentumStore.from_state(
                state, self.saturation_limit, clamp_policy=config.momentum_clamp
            )
            self.decay_enabled = state.decay_enabled

        self.limiter = SaturationTorqueLimiter(
            self.store, config.torque_curve, self.reference_basis
        )
        self.integrator = MomentumIntegrator(
            self.store, config.bleed_curve, self.max_torque, self.reference_basis
        )
        self.discharge = ResourceDischargeCoordinator.from_config(config)

        self.state = WheelState.ACTIVE
        if (
            not config.settings.default_state_is_active
            and _to_float(atmospheric_density) > ATMOSPHERE_DENSITY_THRESHOLD
        ):
            self.state = WheelState.DISABLED

        # Previous tick's available torque; None until the first step
        self._available: npt.NDArray[np.float64] | None = None
        self.effective_torque = np.zeros(3, dtype=np.float64)
        self.last_discharge: DischargeResult | None = None
        self.sim_time = 0.0
        self._next_log_time = 0.0

        logger.debug(
            "Initialised wheel %s: max_torque=%s saturation_limit=%.4f discharge=%s",
            self.name,
            self.max_torque,
            self.saturation_limit,
            self.can_force_discharge,
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def momentum(self) -> npt.NDArray[np.float64]:
        """Stored momentum per reference axis (copy)."""
        return self.store.momentum.copy()

    @property
    def available_torque(self) -> npt.NDArray[np.float64]:
        """Torque available per control axis as of the last step."""
        if self._available is None:
            return np.zeros(3, dtype=np.float64)
        return self._available.copy()

    @property
    def can_force_discharge(self) -> bool:
        return self.discharge.can_force_discharge

    @property
    def discharge_engaged(self) -> bool:
        return self.discharge.engaged

    @property
    def active(self) -> bool:
        return self.state is WheelState.ACTIVE

    # -------------------------------------------------------------------------
    # Toggles (take effect on the next step)
    # -------------------------------------------------------------------------

    def set_active(self, active: bool) -> None:
        self.state = WheelState.ACTIVE if active else WheelState.DISABLED

    def set_discharge(self, engaged: bool) -> bool:
        """Engage or disengage resource discharge; returns the resulting state."""
        if engaged:
            return self.discharge.engage()
        self.discharge.disengage()
        return False

    def toggle_discharge(self) -> bool:
        return self.set_discharge(not self.discharge.engaged)

    def toggle_decay(self) -> bool:
        self.decay_enabled = not self.decay_enabled
        return self.decay_enabled

    # -------------------------------------------------------------------------
    # Simulation
    # -------------------------------------------------------------------------

    def step(
        self,
        dt: float,
        orientation: npt.ArrayLike,
        control_input: npt.ArrayLike = (0.0, 0.0, 0.0),
        supply: ResourceSupply | None = None,
    ) -> npt.NDArray[np.float64]:
        """Advance the wheel by one fixed tick.

        Args:
            dt: Tick duration (s). Non-positive values leave the wheel untouched.
            orientation: 3x3 array whose rows are the pitch, yaw and roll body
                axes expressed in the reference frame.
            control_input: Pitch, yaw and roll commands in [-1, 1].
            supply: Resource supply used while discharge is engaged.

        Returns:
            Effective torque per control axis (N*m) for the vehicle.
        """
        dt = _to_float(dt)
        if dt <= 0:
            return self.effective_torque.copy()
        axes = as_basis(orientation)
        commands = as_vector(control_input)

        if self._available is None:
            self._available = self.limiter.available_torques(axes, self.max_torque)

        self.last_discharge = None
        discharging = self.discharge.engaged
        if discharging:
            if supply is None:
                self.discharge.disengage("no resource supply")
            else:
                self.last_discharge = self.discharge.step(self.store, dt, supply)

        grow = self.state is WheelState.ACTIVE and not discharging
        self.integrator.step(
            dt, axes, commands, self._available, grow=grow, decay=self.decay_enabled
        )

        self._available = self.limiter.available_torques(axes, self.max_torque)
        if self.discharge.engaged or self.state is not WheelState.ACTIVE:
            self.effective_torque = np.zeros(3, dtype=np.float64)
        else:
            self.effective_torque = self._available.copy()

        self.sim_time += dt
        self._maybe_log_dump()
        return self.effective_torque.copy()

    def _maybe_log_dump(self) -> None:
        settings = self.config.settings
        if not settings.log_dump or self.sim_time < self._next_log_time:
            return
        logger.info(self.telemetry().format_line())
        self._next_log_time = self.sim_time + max(settings.log_interval, 0.0)

    # -------------------------------------------------------------------------
    # Persistence and reporting
    # -------------------------------------------------------------------------

    def save_state(self) -> MomentumState:
        return self.store.to_state(decay_enabled=self.decay_enabled)

    def load_state(self, state: MomentumState) -> None:
        """Restore persisted momenta verbatim."""
        self.store.restore(state)
        self.decay_enabled = state.decay_enabled

    def telemetry(self) -> WheelTelemetrySnapshot:
        fractions = self.store.saturation_fractions()
        return WheelTelemetrySnapshot(
            name=self.name,
            sim_time=self.sim_time,
            state=self.state.name,
            momentum=tuple(float(m) for m in self.store.momentum),
            saturation_fraction=tuple(float(f) for f in fractions),
            saturation_fraction_display=tuple(float(min(f, 1.0)) for f in fractions),
            saturation_limit=self.saturation_limit,
            available_torque=tuple(float(t) for t in self.available_torque),
            effective_torque=tuple(float(t) for t in self.effective_torque),
            max_torque=tuple(float(t) for t in self.max_torque),
            decay_enabled=self.decay_enabled,
            can_force_discharge=self.can_force_discharge,
            discharge_engaged=self.discharge_engaged,
            display_current_torque=self.config.settings.display_current_torque,
        )

    def describe(self) -> str:
        """Human-readable summary of the wheel's capabilities."""
        lines = [
            f"{axis.name.title()} Torque: {self.max_torque[axis]:.1f} N*m"
            for axis in ControlAxis
        ]
        lines += ["", f"Capacity: {self.saturation_limit:.1f} N*m*s"]

        low, high = self.config.bleed_curve.min_max_value()
        if low == high:
            lines.append(f"Bleed Rate: {high * 100:.1f}%")
        else:
            lines.append(f"Bleed Rate:\n\tMin: {low:.1%}\n\tMax: {high:.1%}")

        if self.can_force_discharge:
            lines.append(f"Discharge Rate: {self.config.discharge_rate * 100:.1f}% / s")
            lines.append("")
            lines.append("Requires:")
            for c in self.discharge.consumers:
                if c.rate <= 1:
                    lines.append(f" - {c.resource}: {c.rate * 60:.1f} /min")
                else:
                    lines.append(f" - {c.resource}: {c.rate:.1f} /s")
        return "\n".join(lines)
