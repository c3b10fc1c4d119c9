## exact rational 3 vectors for ratgeom
## Copyright (c) 2020 Richard DeVaul

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""exact rational 3 vectors

A :class:`Vector` is a free direction or offset ``(dx, dy, dz)`` whose
components are :class:`fractions.Fraction` values.  Arithmetic on
vectors is exact; only the operations that need a square root or a
trigonometric function (magnitude, unit vector, angle, rotation) take
an explicit precision ``(oom, rm)``.

Vectors are values: no method modifies the receiver.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import Tuple

from ratgeom.errors import InvalidGeometryError
from ratgeom.precision import (
    HALF_UP,
    RoundingMode,
    acos,
    cos_sin,
    format_rational,
    is_zero,
    round_to,
    sqrt,
    sqrt_exact,
    to_rational,
)

log = logging.getLogger(__name__)

## guard digits used for intermediate values in rounded operations
GUARD = 3


class Vector:
    """A free 3 vector with exact rational components."""

    __slots__ = ("dx", "dy", "dz")

    def __init__(self, dx=0, dy=0, dz=0):
        if isinstance(dx, Vector):
            dx, dy, dz = dx.dx, dx.dy, dx.dz
        self.dx = to_rational(dx)
        self.dy = to_rational(dy)
        self.dz = to_rational(dz)

    @classmethod
    def between(cls, p, q) -> "Vector":
        """Vector from point ``p`` to point ``q``."""
        return q.effective_position() - p.effective_position()

    ## comparison and display

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self.dx == other.dx and self.dy == other.dy and self.dz == other.dz

    def __hash__(self):
        return hash((self.dx, self.dy, self.dz))

    def __repr__(self):
        return "Vector(dx={}, dy={}, dz={})".format(
            format_rational(self.dx), format_rational(self.dy),
            format_rational(self.dz))

    def to_string(self, oom: int, rm: RoundingMode = HALF_UP) -> str:
        """text form with components rounded to ``(oom, rm)``"""
        return "Vector(dx={}, dy={}, dz={})".format(
            *(format_rational(round_to(c, oom, rm)) for c in self))

    def __iter__(self):
        yield self.dx
        yield self.dy
        yield self.dz

    def to_tuple(self) -> Tuple[Fraction, Fraction, Fraction]:
        return (self.dx, self.dy, self.dz)

    def equals(self, other: "Vector", oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """``True`` if every component of ``self - other`` rounds to zero."""
        return (is_zero(self.dx - other.dx, oom, rm)
                and is_zero(self.dy - other.dy, oom, rm)
                and is_zero(self.dz - other.dz, oom, rm))

    def is_zero(self, oom: int | None = None, rm: RoundingMode = HALF_UP) -> bool:
        """Exact test when ``oom`` is ``None``, otherwise at precision."""
        if oom is None:
            return self.dx == 0 and self.dy == 0 and self.dz == 0
        return (is_zero(self.dx, oom, rm) and is_zero(self.dy, oom, rm)
                and is_zero(self.dz, oom, rm))

    def is_reverse(self, other: "Vector", oom: int, rm: RoundingMode = HALF_UP) -> bool:
        return self.equals(-other, oom, rm)

    ## component access

    def get_dx(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return round_to(self.dx, oom, rm)

    def get_dy(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return round_to(self.dy, oom, rm)

    def get_dz(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return round_to(self.dz, oom, rm)

    def direction(self) -> int:
        """Octant of the vector, numbered 1 to 8.

        Octants 1-4 have ``dx >= 0`` and 5-8 ``dx < 0``; within each
        half the order is (+y,+z), (+y,-z), (-y,+z), (-y,-z), where
        zero counts as positive.
        """
        n = 1
        if self.dx < 0:
            n += 4
        if self.dy < 0:
            n += 2
        if self.dz < 0:
            n += 1
        return n

    ## exact arithmetic

    def __add__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.dx + other.dx, self.dy + other.dy, self.dz + other.dz)

    def __sub__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.dx - other.dx, self.dy - other.dy, self.dz - other.dz)

    def __neg__(self):
        return Vector(-self.dx, -self.dy, -self.dz)

    def __mul__(self, s):
        if isinstance(s, Vector):
            return NotImplemented
        s = to_rational(s)
        return Vector(self.dx * s, self.dy * s, self.dz * s)

    __rmul__ = __mul__

    def __truediv__(self, s):
        s = to_rational(s)
        if s == 0:
            raise ZeroDivisionError("vector divided by zero")
        return Vector(self.dx / s, self.dy / s, self.dz / s)

    def reverse(self) -> "Vector":
        return -self

    def dot(self, other: "Vector") -> Fraction:
        """3 vector dot product"""
        return self.dx * other.dx + self.dy * other.dy + self.dz * other.dz

    def cross(self, other: "Vector") -> "Vector":
        """3 vector cross product, ``self`` x ``other``"""
        return Vector(self.dy * other.dz - self.dz * other.dy,
                      self.dz * other.dx - self.dx * other.dz,
                      self.dx * other.dy - self.dy * other.dx)

    def magnitude_squared(self) -> Fraction:
        return self.dot(self)

    ## rounded operations

    def magnitude(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        """length of the vector rounded to ``(oom, rm)``"""
        return sqrt(self.magnitude_squared(), oom, rm)

    def unit_vector(self, oom: int, rm: RoundingMode = HALF_UP) -> "Vector":
        """Vector of length one in the same direction.

        Exact when the magnitude is rational, otherwise each component
        is rounded to ``(oom, rm)``.
        """
        m2 = self.magnitude_squared()
        if m2 == 0:
            raise InvalidGeometryError("the zero vector has no unit vector")
        m = sqrt_exact(m2)
        if m is not None:
            return self / m
        m = sqrt(m2, oom - GUARD, rm)
        return Vector(round_to(self.dx / m, oom, rm),
                      round_to(self.dy / m, oom, rm),
                      round_to(self.dz / m, oom, rm))

    def is_scalar_multiple(self, other: "Vector", oom: int | None = None,
                           rm: RoundingMode = HALF_UP) -> bool:
        """``True`` if ``self`` and ``other`` are parallel.

        Tested exactly when ``oom`` is ``None``, otherwise the cross
        product must round to zero.
        """
        return self.cross(other).is_zero(oom, rm)

    def is_orthogonal(self, other: "Vector", oom: int | None = None,
                      rm: RoundingMode = HALF_UP) -> bool:
        d = self.dot(other)
        if oom is None:
            return d == 0
        return is_zero(d, oom, rm)

    def angle(self, other: "Vector", oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        """angle between two vectors in radians, in ``[0, pi]``"""
        m2 = self.magnitude_squared() * other.magnitude_squared()
        if m2 == 0:
            raise InvalidGeometryError("angle with the zero vector is undefined")
        m = sqrt_exact(m2)
        if m is None:
            m = sqrt(m2, oom - 2 * GUARD, rm)
        return acos(self.dot(other) / m, oom, rm)

    def rotate(self, axis: "Vector", pi, theta, oom: int,
               rm: RoundingMode = HALF_UP) -> "Vector":
        """Rotate about ``axis`` (through the origin) by ``theta`` radians.

        Uses Rodrigues' formula with the right hand rule.  ``pi`` is a
        :class:`~ratgeom.precision.PiProvider` (or numeric context)
        supplying pi at the working precision.  The components of the
        result are rounded to ``(oom, rm)``; a rotation by a whole
        number of turns returns the vector unchanged.
        """
        from ratgeom.angle import Angle  # angle needs no vectors

        if axis.is_zero():
            raise InvalidGeometryError("cannot rotate about the zero vector")
        work = oom - GUARD
        theta = Angle.normalise(theta, pi, work, rm)
        if theta == 0:
            log.debug("rotation of %r is a whole number of turns", self)
            return Vector(self)
        k = axis if axis.magnitude_squared() == 1 else axis.unit_vector(work, rm)
        c, s = cos_sin(theta, work, rm)
        r = self * c + k.cross(self) * s + k * (k.dot(self) * (1 - c))
        return Vector(round_to(r.dx, oom, rm), round_to(r.dy, oom, rm),
                      round_to(r.dz, oom, rm))


Vector.ZERO = Vector(0, 0, 0)
Vector.I = Vector(1, 0, 0)
Vector.J = Vector(0, 1, 0)
Vector.K = Vector(0, 0, 1)

__all__ = ["Vector"]
