"""Response curves mapping saturation fraction to a scale factor.

Two curves drive a saturatable wheel:

- the torque curve: saturation fraction -> fraction of nominal torque still
  deliverable (1.0 when empty)
- the bleed curve: saturation fraction -> fraction of nominal torque bled off
  per second (0.0 when empty)

Keys are ``(time, value)`` pairs, optionally followed by in/out tangents.
Segments whose tangents are not given interpolate linearly; tangents turn a
segment into a cubic Hermite spline. Lookups outside the key domain clamp to
the end keys and results never go negative.

Configuration Example (JSON):
    {
        "torque_curve": {"keys": [[0.0, 1.0], [0.5, 0.6], [1.0, 0.05, -0.2, 0.0]]},
        "bleed_curve": {"keys": [[0.0, 0.01], [1.0, 0.1]]}
    }
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class CurveKey(BaseModel):
    """A single curve key.

    Attributes:
        time: Position in the curve domain (saturation fraction).
        value: Curve value at `time`.
        in_tangent: Slope arriving at the key, or None for the linear slope.
        out_tangent: Slope leaving the key, or None for the linear slope.
    """

    time: float
    value: float
    in_tangent: float | None = None
    out_tangent: float | None = None


class ResponseCurve(BaseModel):
    """Monotone scalar response curve evaluated at a saturation fraction."""

    keys: list[CurveKey] = Field(
        default_factory=list, description="Curve keys, sorted by time on load"
    )
    default: float = Field(
        default=1.0, description="Value returned when the curve has no keys"
    )

    @field_validator("keys", mode="before")
    @classmethod
    def coerce_keys(cls, v: Any) -> Any:
        """Accept keys given as 2- or 4-element sequences."""
        if v is None:
            return []
        keys = []
        for key in v:
            if isinstance(key, (list, tuple)):
                if len(key) not in (2, 4):
                    raise ValueError(
                        f"Curve key needs 2 or 4 numbers (time value [in out]), got {key!r}"
                    )
                names = ("time", "value", "in_tangent", "out_tangent")
                keys.append(dict(zip(names, key)))
            else:
                keys.append(key)
        return keys

    @field_validator("keys")
    @classmethod
    def sort_keys(cls, v: list[CurveKey]) -> list[CurveKey]:
        return sorted(v, key=lambda k: k.time)

    @classmethod
    def from_key_strings(
        cls, keys: list[str], default: float | None = None
    ) -> ResponseCurve:
        """Build a curve from whitespace separated key strings, e.g. ``"0 1 0 0"``.

        `default` is only set when given, so an empty bleed curve built this
        way still falls back to no bleed inside a wheel configuration.
        """
        parsed = []
        for text in keys:
            try:
                parsed.append([float(part) for part in text.split()])
            except ValueError:
                raise ValueError(f"Curve key is not numeric: {text!r}") from None
        if default is None:
            return cls(keys=parsed)
        return cls(keys=parsed, default=default)

    @property
    def is_empty(self) -> bool:
        return not self.keys

    def evaluate(self, fraction: float) -> float:
        """Evaluate the curve at `fraction`, clamped to the key domain.

        Returns:
            Non-negative scale factor.
        """
        if not self.keys:
            return max(0.0, self.default)

        x = float(fraction)
        first, last = self.keys[0], self.keys[-1]
        if len(self.keys) == 1 or x <= first.time:
            return max(0.0, first.value)
        if x >= last.time:
            return max(0.0, last.value)

        # Locate segment [k0, k1] containing x
        for k0, k1 in zip(self.keys, self.keys[1:]):
            if k0.time <= x <= k1.time:
                break
        span = k1.time - k0.time
        if span <= 0:
            return max(0.0, k1.value)

        slope = (k1.value - k0.value) / span
        m0 = k0.out_tangent if k0.out_tangent is not None else slope
        m1 = k1.in_tangent if k1.in_tangent is not None else slope

        # Cubic Hermite basis; reduces to linear interpolation when m0 == m1 == slope
        s = (x - k0.time) / span
        s2 = s * s
        s3 = s2 * s
        h00 = 2 * s3 - 3 * s2 + 1
        h10 = s3 - 2 * s2 + s
        h01 = -2 * s3 + 3 * s2
        h11 = s3 - s2
        value = h00 * k0.value + h10 * span * m0 + h01 * k1.value + h11 * span * m1
        return max(0.0, float(value))

    def min_max_value(self) -> tuple[float, float]:
        """Return the smallest and largest key value (default value when empty)."""
        if not self.keys:
            return self.default, self.default
        values = [k.value for k in self.keys]
        return min(values), max(values)
