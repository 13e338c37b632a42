from .common import ClampPolicy, ControlAxis, FlowMode, WheelState
from .config import (
    DischargeThrusterConfig,
    PropellantConfig,
    ResponseCurve,
    WheelConfig,
    WheelSettings,
)
from .simulation import (
    MomentumState,
    MomentumStore,
    ResourceConsumer,
    ResourceDischargeCoordinator,
    ResourcePool,
    SaturatableReactionWheel,
    SaturationTorqueLimiter,
    Tank,
    WheelTelemetrySnapshot,
)

__all__ = [
    "ClampPolicy",
    "ControlAxis",
    "DischargeThrusterConfig",
    "FlowMode",
    "MomentumState",
    "MomentumStore",
    "PropellantConfig",
    "ResourceConsumer",
    "ResourceDischargeCoordinator",
    "ResourcePool",
    "ResponseCurve",
    "SaturatableReactionWheel",
    "SaturationTorqueLimiter",
    "Tank",
    "WheelConfig",
    "WheelSettings",
    "WheelTelemetrySnapshot",
]
