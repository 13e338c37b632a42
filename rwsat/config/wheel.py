from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from pydantic import BaseModel, Field, field_validator

from ..common import ClampPolicy
from .curve import ResponseCurve
from .discharge import DischargeThrusterConfig


def compute_saturation_limit(
    nominal_torque: npt.ArrayLike, saturation_scale: float
) -> float:
    """Storable momentum per reference axis: average nominal torque times scale."""
    return float(np.mean(np.asarray(nominal_torque, dtype=float))) * float(
        saturation_scale
    )


class WheelSettings(BaseModel):
    """
    Operator settings shared by the wheel's host, passed per instance.

    Attributes:
        log_dump: Periodically log a telemetry line while stepping.
        log_interval: Simulated seconds between telemetry log lines.
        default_state_is_active: When False, a wheel initialised inside an
            atmosphere starts disabled.
        display_current_torque: Include available torque in telemetry log lines.
    """

    log_dump: bool = False
    log_interval: float = 1.0
    default_state_is_active: bool = True
    display_current_torque: bool = False


class WheelConfig(BaseModel):
    """
    Saturatable reaction wheel configuration.

    Storable momentum per reference axis is the average nominal torque
    multiplied by `saturation_scale`. Available torque and passive bleed are
    shaped by the two response curves; momentum can optionally be discharged
    by consuming resources.
    """

    name: str = Field(default="wheel", description="Wheel identifier")
    # Nominal torque per control axis (pitch, yaw, roll) in N*m
    max_torque: tuple[float, float, float] = Field(
        default=(1.0, 1.0, 1.0),
        description="Nominal torque per control axis (pitch, yaw, roll), N*m",
    )
    saturation_scale: float = Field(
        default=1.0, description="Storable momentum = average torque * scale"
    )
    torque_curve: ResponseCurve = Field(
        default_factory=lambda: ResponseCurve(default=1.0),
        description="Saturation fraction -> fraction of nominal torque",
    )
    bleed_curve: ResponseCurve = Field(
        default_factory=lambda: ResponseCurve(default=0.0),
        description="Saturation fraction -> fraction of nominal torque bled per second",
    )
    momentum_clamp: ClampPolicy = Field(
        default=ClampPolicy.NONE,
        description="Whether stored momentum is hard-clamped to the saturation limit",
    )
    # Reference frame axes (rows) momentum is stored against
    reference_basis: tuple[
        tuple[float, float, float],
        tuple[float, float, float],
        tuple[float, float, float],
    ] = Field(
        default=((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)),
        description="Fixed reference axes a, b, c as unit vectors",
    )
    # Momentum discharge
    recovery_rate: float = Field(
        default=0.0,
        description="Fraction of the saturation limit discharged per second",
    )
    resources: str | None = Field(
        default=None,
        description='Legacy discharge resources, "Name,units_per_s;Name2,units_per_s"',
    )
    discharge_thruster: DischargeThrusterConfig | None = Field(
        default=None, description="Thruster used for resource-driven discharge"
    )
    discharge_applies_reaction: bool = Field(
        default=False,
        description="Report the reactive impulse of discharged momentum",
    )
    discharge_demand_threshold: float = Field(
        default=1e-4, description="Demand fraction below which discharge stops"
    )
    discharge_feasibility_threshold: float = Field(
        default=0.01, description="Feasibility below which discharge aborts"
    )
    settings: WheelSettings = Field(default_factory=WheelSettings)

    @field_validator("max_torque")
    @classmethod
    def validate_torque(
        cls, v: tuple[float, float, float]
    ) -> tuple[float, float, float]:
        """Validate that nominal torques are non-negative."""
        if any(t < 0 for t in v):
            raise ValueError(f"Nominal torques must be non-negative. Got {v}")
        return v

    @field_validator("bleed_curve")
    @classmethod
    def default_bleed_to_zero(cls, v: ResponseCurve) -> ResponseCurve:
        """An empty bleed curve means no bleed, not the torque curve's full scale."""
        if v.is_empty and "default" not in v.model_fields_set:
            return v.model_copy(update={"default": 0.0})
        return v

    @field_validator("reference_basis")
    @classmethod
    def validate_basis(
        cls, v: tuple[tuple[float, float, float], ...]
    ) -> tuple[tuple[float, float, float], ...]:
        """Validate that every reference axis is a unit vector."""
        for axis in v:
            magnitude = np.sqrt(sum(x**2 for x in axis))
            if magnitude < 0.99 or magnitude > 1.01:
                raise ValueError(
                    f"Reference axes must be unit vectors. Got magnitude {magnitude}"
                )
        return v

    @classmethod
    def from_json_file(cls, path: str | Path) -> WheelConfig:
        """Load a wheel configuration from a JSON file."""
        return cls.model_validate_json(Path(path).read_text())

    def to_json_file(self, path: str | Path) -> None:
        """Write the configuration to a JSON file."""
        Path(path).write_text(self.model_dump_json(indent=2))

    @property
    def saturation_limit(self) -> float:
        """Momentum magnitude considered fully saturated on each reference axis."""
        return compute_saturation_limit(self.max_torque, self.saturation_scale)

    @property
    def discharge_rate(self) -> float:
        """Discharge rate in fractions of the saturation limit per second."""
        if self.discharge_thruster is not None:
            return self.discharge_thruster.discharge_rate
        return self.recovery_rate
