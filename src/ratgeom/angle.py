"""Angles in radians."""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction

from ratgeom.precision import HALF_UP, RoundingMode, format_rational, round_to, to_rational


@dataclass(frozen=True)
class Angle:
    """A rational radian value."""

    value: Fraction

    def __post_init__(self):
        object.__setattr__(self, "value", to_rational(self.value))

    def __repr__(self):
        return f"Angle({format_rational(self.value)})"

    @staticmethod
    def normalise(theta, pi, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        """Reduce ``theta`` into ``[0, 2*pi)``.

        ``pi`` supplies pi at ``(oom, rm)``; negative angles are lifted
        by whole turns first.  Applying this twice gives the same value.
        """

        theta = to_rational(theta)
        two_pi = pi.get_two_pi(oom, rm)
        if 0 <= theta < two_pi:
            return theta
        return theta - two_pi * math.floor(theta / two_pi)

    def normalised(self, pi, oom: int, rm: RoundingMode = HALF_UP) -> "Angle":
        return Angle(Angle.normalise(self.value, pi, oom, rm))

    def to_degrees(self, pi, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        """Value in degrees rounded to ``(oom, rm)``."""

        return round_to(self.value * 180 / pi.get_pi(oom - 3, rm), oom, rm)

    @classmethod
    def from_degrees(cls, degrees, pi, oom: int, rm: RoundingMode = HALF_UP) -> "Angle":
        return cls(to_rational(degrees) * pi.get_pi(oom, rm) / 180)


__all__ = ["Angle"]
