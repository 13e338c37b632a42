from __future__ import annotations

import logging
from dataclasses import dataclass

from ..common import FlowMode

logger = logging.getLogger(__name__)

# Tank scopes reachable under each flow mode
_FLOW_SCOPES: dict[FlowMode, tuple[str, ...]] = {
    FlowMode.NO_FLOW: ("local",),
    FlowMode.STACK_PRIORITY_SEARCH: ("local", "stack"),
    FlowMode.STAGE_PRIORITY_FLOW: ("local", "stack", "vessel"),
    FlowMode.ALL_VESSEL: ("local", "stack", "vessel"),
}


@dataclass
class Tank:
    """A quantity of one resource at a given distance from the wheel.

    Attributes:
        resource: Resource identifier.
        amount: Units currently held.
        scope: "local" (same part), "stack" (connected stack) or "vessel".
    """

    resource: str
    amount: float
    scope: str = "local"


class ResourcePool:
    """In-memory resource supply honouring flow-mode scope.

    Withdrawals drain the closest tanks first (local, then stack, then
    vessel) and never take more than is present.
    """

    def __init__(self, tanks: list[Tank] | None = None) -> None:
        self.tanks = list(tanks or [])

    def _reachable(self, resource: str, flow_mode: FlowMode) -> list[Tank]:
        scopes = _FLOW_SCOPES[FlowMode(flow_mode)]
        tanks = [t for t in self.tanks if t.resource == resource and t.scope in scopes]
        return sorted(tanks, key=lambda t: scopes.index(t.scope))

    def available(self, resource: str, flow_mode: FlowMode) -> float:
        """Units of `resource` reachable under `flow_mode`."""
        return sum(max(0.0, t.amount) for t in self._reachable(resource, flow_mode))

    def withdraw(self, resource: str, amount: float, flow_mode: FlowMode) -> float:
        """Withdraw up to `amount` units; returns the amount actually taken."""
        if amount <= 0:
            return 0.0
        remaining = amount
        for tank in self._reachable(resource, flow_mode):
            take = min(max(0.0, tank.amount), remaining)
            tank.amount -= take
            remaining -= take
            if remaining <= 0:
                break
        taken = amount - remaining
        if remaining > 0:
            logger.debug(
                "Pool short of %s: requested %.6f, delivered %.6f",
                resource,
                amount,
                taken,
            )
        return taken

    def total(self, resource: str) -> float:
        """Units of `resource` held across every tank regardless of scope."""
        return sum(t.amount for t in self.tanks if t.resource == resource)
