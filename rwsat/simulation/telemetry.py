from __future__ import annotations

from dataclasses import dataclass


@dataclass
class WheelTelemetrySnapshot:
    name: str
    sim_time: float
    state: str
    momentum: tuple[float, float, float]
    saturation_fraction: tuple[float, float, float]
    saturation_fraction_display: tuple[float, float, float]
    saturation_limit: float
    available_torque: tuple[float, float, float]
    effective_torque: tuple[float, float, float]
    max_torque: tuple[float, float, float]
    decay_enabled: bool
    can_force_discharge: bool
    discharge_engaged: bool
    display_current_torque: bool = False

    def format_line(self) -> str:
        """Single-line summary used by the periodic log dump.

        Available torque is only included when `display_current_torque` is set.
        """
        m = self.momentum
        line = (
            f"{self.name} t={self.sim_time:.2f}s state={self.state} "
            f"limit={self.saturation_limit:.3f} "
            f"m=[{m[0]:.4f}, {m[1]:.4f}, {m[2]:.4f}] "
        )
        if self.display_current_torque:
            a = self.available_torque
            line += f"avail(p/y/r)=[{a[0]:.3f}, {a[1]:.3f}, {a[2]:.3f}] "
        return line + f"discharge={'on' if self.discharge_engaged else 'off'}"
