"""Resource-driven momentum discharge.

While engaged, the coordinator removes stored momentum at a fixed rate in
exchange for resources drawn from an external supply. A tick is all or
nothing at the computed feasibility: every resource is queried first, the
scarcest one sets the fraction of the nominal draw that can be afforded, and
only then are withdrawals made and momentum removed at that same fraction.

Resource consumers come from one of two configuration forms:

- a discharge thruster (specific impulse, lever arm, propellant mix), where
  the removal torque is converted to mass flow as
  ``m_dot = (torque / lever_arm) / (isp * g0)`` and split across propellants
- a legacy resource string ``"Name,units_per_s;Name2,units_per_s"``

Anything malformed leaves the wheel without discharge capability.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np
import numpy.typing as npt

from ..common import REFERENCE_BASIS, FlowMode, as_basis, basis_to_vector
from ..config.constants import G0, RESOURCE_SHORTFALL_TOLERANCE
from ..config.discharge import DischargeThrusterConfig
from ..config.wheel import WheelConfig
from .momentum_store import MomentumStore

_logger = logging.getLogger(__name__)

# Flow modes ordered from narrowest to widest supply scope
_FLOW_MODE_REACH = (
    FlowMode.NO_FLOW,
    FlowMode.STACK_PRIORITY_SEARCH,
    FlowMode.STAGE_PRIORITY_FLOW,
    FlowMode.ALL_VESSEL,
)


def _wider_flow_mode(a: FlowMode, b: FlowMode) -> FlowMode:
    return max(FlowMode(a), FlowMode(b), key=_FLOW_MODE_REACH.index)


class ResourceSupply(Protocol):
    """Query/withdraw access to the resource pools connected to a wheel."""

    def available(self, resource: str, flow_mode: FlowMode) -> float: ...

    def withdraw(self, resource: str, amount: float, flow_mode: FlowMode) -> float: ...


@dataclass
class ResourceConsumer:
    """A resource drawn during discharge.

    Attributes:
        resource: Resource identifier understood by the supply.
        rate: Units per second consumed at the nominal maximum removal rate.
        flow_mode: Supply scope the resource may be drawn from.
    """

    resource: str
    rate: float
    flow_mode: FlowMode = FlowMode.STACK_PRIORITY_SEARCH


@dataclass
class DischargeResult:
    """Outcome of one discharge tick."""

    demand_fraction: float
    feasibility: float
    removed: npt.NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))
    withdrawn: dict[str, float] = field(default_factory=dict)
    reaction_impulse: npt.NDArray[np.float64] | None = None
    disengaged_reason: str | None = None


def consumers_from_thruster(
    thruster: DischargeThrusterConfig, saturation_limit: float
) -> list[ResourceConsumer]:
    """Derive per-propellant consumption rates from a discharge thruster."""
    problems = []
    if thruster.isp <= 0:
        problems.append(f"isp={thruster.isp}")
    if thruster.lever_arm <= 0:
        problems.append(f"lever_arm={thruster.lever_arm}")
    if not thruster.propellants:
        problems.append("no propellants")
    total_ratio = sum(p.ratio for p in thruster.propellants)
    if thruster.propellants and total_ratio <= 0:
        problems.append(f"propellant ratios sum to {total_ratio}")
    for p in thruster.propellants:
        if p.density <= 0 or p.ratio < 0 or not p.name.strip():
            problems.append(f"propellant {p.name!r} (ratio={p.ratio}, density={p.density})")
    if problems:
        _logger.warning(
            "Malformed discharge thruster (%s); momentum discharge disabled",
            ", ".join(problems),
        )
        return []

    removal_torque = thruster.discharge_rate * saturation_limit  # N*m
    mass_flow = (removal_torque / thruster.lever_arm) / (thruster.isp * G0)  # kg/s
    return [
        ResourceConsumer(
            resource=p.name.strip(),
            rate=mass_flow * (p.ratio / total_ratio) / p.density,
            flow_mode=p.flow_mode,
        )
        for p in thruster.propellants
    ]


def consumers_from_resource_string(resources: str) -> list[ResourceConsumer]:
    """Parse ``"Name,rate;Name2,rate2"``; malformed pairs are skipped."""
    consumers = []
    for pair in resources.split(";"):
        if not pair.strip():
            continue
        name_and_rate = pair.split(",")
        if len(name_and_rate) != 2 or not name_and_rate[0].strip():
            _logger.warning("Ignoring malformed discharge resource entry %r", pair)
            continue
        try:
            rate = float(name_and_rate[1].strip())
        except ValueError:
            rate = 0.0
        consumers.append(ResourceConsumer(resource=name_and_rate[0].strip(), rate=rate))
    return consumers


def build_resource_consumers(config: WheelConfig) -> list[ResourceConsumer]:
    """Resource consumers for a wheel, preferring its discharge thruster."""
    if config.discharge_thruster is not None:
        return consumers_from_thruster(config.discharge_thruster, config.saturation_limit)
    if config.resources:
        return consumers_from_resource_string(config.resources)
    return []


class ResourceDischargeCoordinator:
    """Converts a momentum removal rate into resource withdrawals.

    State machine: disengaged -> engaged on request (only when discharge is
    possible); engaged -> disengaged on request, when resources run short,
    when there is nothing left to remove, or when all momentum reaches zero.
    """

    def __init__(
        self,
        consumers: list[ResourceConsumer],
        saturation_limit: float,
        discharge_rate: float,
        demand_threshold: float = 1e-4,
        feasibility_threshold: float = 0.01,
        reference_basis: npt.ArrayLike = REFERENCE_BASIS,
        applies_reaction: bool = False,
    ) -> None:
        self.consumers = list(consumers)
        self.max_removal_rate = float(discharge_rate) * float(saturation_limit)
        self.demand_threshold = demand_threshold
        self.feasibility_threshold = feasibility_threshold
        self.reference_basis = as_basis(reference_basis)
        self.applies_reaction = applies_reaction
        self.engaged = False

    @classmethod
    def from_config(cls, config: WheelConfig) -> ResourceDischargeCoordinator:
        return cls(
            build_resource_consumers(config),
            saturation_limit=config.saturation_limit,
            discharge_rate=config.discharge_rate,
            demand_threshold=config.discharge_demand_threshold,
            feasibility_threshold=config.discharge_feasibility_threshold,
            reference_basis=config.reference_basis,
            applies_reaction=config.discharge_applies_reaction,
        )

    @property
    def can_force_discharge(self) -> bool:
        return bool(self.consumers) and any(c.rate > 0 for c in self.consumers)

    def engage(self) -> bool:
        """Request discharge; returns whether it is now engaged."""
        if not self.can_force_discharge:
            _logger.warning("Momentum discharge unavailable: no resource consumers")
            return False
        if not self.engaged:
            _logger.info("Momentum discharge engaged")
        self.engaged = True
        return True

    def disengage(self, reason: str = "requested") -> None:
        if self.engaged:
            _logger.info("Momentum discharge halted: %s", reason)
        self.engaged = False

    def step(
        self, store: MomentumStore, dt: float, supply: ResourceSupply
    ) -> DischargeResult | None:
        """Run one discharge tick against `store`; None when not engaged."""
        if not self.engaged or dt <= 0:
            return None

        max_removal = self.max_removal_rate * dt
        if max_removal <= 0:
            self.disengage("discharge rate is zero")
            return DischargeResult(0.0, 0.0, disengaged_reason="discharge rate is zero")

        desired = np.clip(store.momentum, -max_removal, max_removal)
        demand = float(np.sum(np.abs(desired))) / (3 * max_removal)
        if demand < self.demand_threshold:
            reason = "no momentum to remove"
            self.disengage(reason)
            return DischargeResult(demand, 0.0, disengaged_reason=reason)

        # Consumers sharing a resource draw one request from its widest scope
        requests: dict[str, tuple[FlowMode, float]] = {}
        for c in self.consumers:
            request = c.rate * demand * dt
            if request <= 0:
                continue
            flow_mode, total = requests.get(c.resource, (c.flow_mode, 0.0))
            requests[c.resource] = (
                _wider_flow_mode(flow_mode, c.flow_mode),
                total + request,
            )

        # Query every resource before withdrawing any of them
        feasibility = 1.0
        for resource, (flow_mode, request) in requests.items():
            available = max(0.0, float(supply.available(resource, flow_mode)))
            feasibility = min(feasibility, available / request)

        if feasibility < self.feasibility_threshold:
            reason = "lack of resources"
            _logger.warning(
                "Momentum discharge halted due to lack of resources (feasibility %.4f)",
                feasibility,
            )
            self.disengage(reason)
            return DischargeResult(demand, feasibility, disengaged_reason=reason)

        withdrawn: dict[str, float] = {}
        achieved = 1.0
        for resource, (flow_mode, request) in requests.items():
            amount = request * feasibility
            actual = float(supply.withdraw(resource, amount, flow_mode))
            withdrawn[resource] = actual
            if amount > 0:
                achieved = min(achieved, actual / amount)

        reason = None
        scale = feasibility
        if achieved < RESOURCE_SHORTFALL_TOLERANCE:
            reason = "resource withdrawal fell short"
            _logger.warning(
                "Discharge withdrawal delivered %.1f%% of request; scaling removal",
                achieved * 100,
            )
            scale = feasibility * achieved

        removed = desired * scale
        for i in range(3):
            store.set_axis(i, float(store.momentum[i]) - float(removed[i]))

        result = DischargeResult(demand, feasibility, removed=removed, withdrawn=withdrawn)
        if self.applies_reaction:
            result.reaction_impulse = -basis_to_vector(removed, self.reference_basis)

        if reason is None and store.is_empty:
            reason = "momentum fully discharged"
        if reason is not None:
            self.disengage(reason)
            result.disengaged_reason = reason

        _logger.debug(
            "Discharge tick: demand=%.4f feasibility=%.4f removed=%s withdrawn=%s",
            demand,
            feasibility,
            removed,
            withdrawn,
        )
        return result
