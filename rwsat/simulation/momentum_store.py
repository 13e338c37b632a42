from __future__ import annotations

import logging

import numpy as np
import numpy.typing as npt
from pydantic import BaseModel

from ..common import ClampPolicy, as_vector

logger = logging.getLogger(__name__)


class MomentumState(BaseModel):
    """Persisted wheel state, restored verbatim on reload."""

    momentum_a: float = 0.0
    momentum_b: float = 0.0
    momentum_c: float = 0.0
    decay_enabled: bool = True


class MomentumStore:
    """Momentum stored against the three fixed reference axes.

    - `momentum` holds ``(m_a, m_b, m_c)`` in N*m*s.
    - `saturation_limit` is the per-axis momentum considered 100% saturated;
      it is fixed at construction.
    - Momentum is not bounded by the limit unless `clamp_policy` is
      ``ClampPolicy.SATURATION_LIMIT``.
    """

    def __init__(
        self,
        saturation_limit: float,
        momentum: npt.ArrayLike | None = None,
        clamp_policy: ClampPolicy = ClampPolicy.NONE,
    ) -> None:
        self.saturation_limit = float(saturation_limit)
        self.clamp_policy = ClampPolicy(clamp_policy)
        self.momentum = (
            as_vector(momentum).copy()
            if momentum is not None
            else np.zeros(3, dtype=np.float64)
        )

    def saturation_fraction(self, axis: int) -> float:
        """Return |m_axis| / saturation_limit, or 0 when the limit is not positive."""
        if self.saturation_limit <= 0:
            return 0.0
        return abs(float(self.momentum[axis])) / self.saturation_limit

    def saturation_fractions(self) -> npt.NDArray[np.float64]:
        return np.array([self.saturation_fraction(i) for i in range(3)])

    def add(self, delta: npt.ArrayLike) -> None:
        """Accumulate a per-reference-axis momentum change."""
        self.momentum = self.momentum + as_vector(delta)
        self._apply_clamp()

    def set_axis(self, axis: int, value: float) -> None:
        self.momentum[axis] = float(value)
        self._apply_clamp()

    @property
    def is_empty(self) -> bool:
        """True when every axis holds exactly zero momentum."""
        return bool(np.all(self.momentum == 0.0))

    def _apply_clamp(self) -> None:
        if self.clamp_policy is not ClampPolicy.SATURATION_LIMIT:
            return
        if self.saturation_limit <= 0:
            return
        clamped = np.clip(self.momentum, -self.saturation_limit, self.saturation_limit)
        if not np.array_equal(clamped, self.momentum):
            logger.debug(
                "Momentum clamped to saturation limit %.4f: %s -> %s",
                self.saturation_limit,
                self.momentum,
                clamped,
            )
        self.momentum = clamped

    def to_state(self, decay_enabled: bool = True) -> MomentumState:
        return MomentumState(
            momentum_a=float(self.momentum[0]),
            momentum_b=float(self.momentum[1]),
            momentum_c=float(self.momentum[2]),
            decay_enabled=decay_enabled,
        )

    def restore(self, state: MomentumState) -> None:
        """Load persisted momenta verbatim, bypassing the clamp."""
        self.momentum = np.array(
            [state.momentum_a, state.momentum_b, state.momentum_c], dtype=np.float64
        )

    @classmethod
    def from_state(
        cls,
        state: MomentumState,
        saturation_limit: float,
        clamp_policy: ClampPolicy = ClampPolicy.NONE,
    ) -> MomentumStore:
        store = cls(saturation_limit, clamp_policy=clamp_policy)
        store.restore(state)
        return store
