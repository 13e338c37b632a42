from .discharge import (
    DischargeResult,
    ResourceConsumer,
    ResourceDischargeCoordinator,
    ResourceSupply,
    build_resource_consumers,
)
from .integrator import MomentumIntegrator, decay_toward_zero
from .momentum_store import MomentumState, MomentumStore
from .reaction_wheel import SaturatableReactionWheel
from .resource_pool import ResourcePool, Tank
from .telemetry import WheelTelemetrySnapshot
from .torque_limiter import SaturationTorqueLimiter, limit_axis_torque

__all__ = [
    "DischargeResult",
    "MomentumIntegrator",
    "MomentumState",
    "MomentumStore",
    "ResourceConsumer",
    "ResourceDischargeCoordinator",
    "ResourcePool",
    "ResourceSupply",
    "SaturatableReactionWheel",
    "SaturationTorqueLimiter",
    "Tank",
    "WheelTelemetrySnapshot",
    "build_resource_consumers",
    "decay_toward_zero",
    "limit_axis_torque",
]
