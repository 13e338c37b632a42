from pydantic import BaseModel, Field

from ..common import FlowMode


class PropellantConfig(BaseModel):
    """
    One propellant consumed by a momentum discharge thruster.

    The thruster's mass flow is split across propellants in proportion to
    `ratio`, then converted to resource units with `density`.
    """

    name: str = Field(description="Resource identifier in the supply")
    ratio: float = Field(default=1.0, description="Share of total mass flow")
    density: float = Field(
        default=1.0, description="Mass per resource unit (kg/unit)"
    )
    flow_mode: FlowMode = Field(
        default=FlowMode.STACK_PRIORITY_SEARCH,
        description="Supply scope the propellant is drawn from",
    )


class DischargeThrusterConfig(BaseModel):
    """
    Thruster used to remove stored wheel momentum by expending propellant.

    The desired momentum removal rate (N*m*s per second, i.e. a torque) is
    turned into thrust over `lever_arm`, then into mass flow through the
    specific impulse: ``m_dot = (torque / lever_arm) / (isp * g0)``.
    """

    isp: float = Field(default=250.0, description="Specific impulse (s)")
    lever_arm: float = Field(
        default=1.0, description="Moment arm of the thrusters about the CoM (m)"
    )
    discharge_rate: float = Field(
        default=0.05,
        description="Fraction of the saturation limit removed per second",
    )
    propellants: list[PropellantConfig] = Field(
        default_factory=list, description="Propellants consumed by the thruster"
    )
