from .constants import G0, UNCONSTRAINED_RATIO
from .curve import CurveKey, ResponseCurve
from .discharge import DischargeThrusterConfig, PropellantConfig
from .wheel import WheelConfig, WheelSettings, compute_saturation_limit

__all__ = [
    "CurveKey",
    "DischargeThrusterConfig",
    "G0",
    "PropellantConfig",
    "ResponseCurve",
    "UNCONSTRAINED_RATIO",
    "WheelConfig",
    "WheelSettings",
    "compute_saturation_limit",
]
