from .enums import ClampPolicy, ControlAxis, FlowMode, WheelState
from .vector import (
    REFERENCE_BASIS,
    as_basis,
    as_vector,
    axis_torque_magnitude,
    basis_to_vector,
    normalize,
    project_onto_basis,
)

__all__ = [
    "ClampPolicy",
    "ControlAxis",
    "FlowMode",
    "REFERENCE_BASIS",
    "WheelState",
    "as_basis",
    "as_vector",
    "axis_torque_magnitude",
    "basis_to_vector",
    "normalize",
    "project_onto_basis",
]
