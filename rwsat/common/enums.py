from enum import Enum


class WheelState(int, Enum):
    """Reaction wheel operating states"""

    ACTIVE = 0
    DISABLED = 1


class ControlAxis(int, Enum):
    """Control axes, in the order used for every per-axis vector."""

    PITCH = 0
    YAW = 1
    ROLL = 2


class FlowMode(str, Enum):
    """Scope of connected supply a resource may be drawn from."""

    NO_FLOW = "no_flow"
    STACK_PRIORITY_SEARCH = "stack_priority_search"
    STAGE_PRIORITY_FLOW = "stage_priority_flow"
    ALL_VESSEL = "all_vessel"


class ClampPolicy(str, Enum):
    """How stored momentum is bounded relative to the saturation limit."""

    NONE = "none"
    SATURATION_LIMIT = "saturation_limit"
