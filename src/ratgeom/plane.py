## planes for ratgeom
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

"""infinite planes

A :class:`Plane` is a point ``p`` and a non-zero normal ``n``.  Built
from three points its normal is ``(q - p) x (r - p)``, so the normal
follows the right hand winding of the points and is not rewritten.
:meth:`Plane.canonical` gives the orientation independent form used
when normals from different sources are compared.

A point ``x`` is on the plane at ``(oom, rm)`` when ``n . (x - p)``
rounds to zero.
"""

from __future__ import annotations

import logging
import math
from fractions import Fraction
from typing import Optional, Tuple, Union

from ratgeom.errors import InvalidGeometryError
from ratgeom.line import Line
from ratgeom.point import Point
from ratgeom.precision import (
    HALF_UP,
    RoundingMode,
    format_rational,
    is_zero,
    round_to,
    sign,
    sqrt,
    to_rational,
)
from ratgeom.vector import Vector

log = logging.getLogger(__name__)

PlaneIntersection = Optional[Union[Point, Line, "Plane"]]


class Plane:
    """An infinite plane through ``p`` with normal ``n``."""

    __slots__ = ("p", "n")

    def __init__(self, p: Point, n: Vector):
        if n.is_zero():
            raise InvalidGeometryError("plane normal must be non-zero", {"p": p})
        self.p = p
        self.n = n

    @classmethod
    def from_points(cls, p: Point, q: Point, r: Point) -> "Plane":
        """plane through three non-collinear points"""
        n = (q - p).cross(r - p)
        if n.is_zero():
            raise InvalidGeometryError("plane points are collinear",
                                       {"p": p, "q": q, "r": r})
        return cls(p, n)

    @classmethod
    def from_coefficients(cls, a, b, c, d) -> "Plane":
        """plane ``a*x + b*y + c*z + d = 0``"""
        n = Vector(a, b, c)
        if n.is_zero():
            raise InvalidGeometryError("plane coefficients a, b and c are all zero")
        return cls(Point(n * (-to_rational(d) / n.magnitude_squared())), n)

    def __eq__(self, other):
        if not isinstance(other, Plane):
            return NotImplemented
        return self.p == other.p and self.n == other.n

    def __hash__(self):
        return hash((self.p, self.n))

    def __repr__(self):
        return f"Plane(p={self.p!r}, n={self.n!r})"

    def to_string(self, oom: int, rm: RoundingMode = HALF_UP) -> str:
        return "Plane(p={}, n={})".format(self.p.to_string(oom, rm),
                                          self.n.to_string(oom, rm))

    ## equation form

    def equation_coefficients(self, oom: int | None = None,
                              rm: RoundingMode = HALF_UP) -> Tuple[Fraction, ...]:
        """``(a, b, c, d)`` of ``a*x + b*y + c*z + d = 0``, rounded if ``oom`` given"""
        n = self.n
        coeffs = (n.dx, n.dy, n.dz, -n.dot(self.p.effective_position()))
        if oom is None:
            return coeffs
        return tuple(round_to(c, oom, rm) for c in coeffs)

    def equation_string(self, oom: int, rm: RoundingMode = HALF_UP) -> str:
        a, b, c, d = (format_rational(v) for v in self.equation_coefficients(oom, rm))
        return f"{a} * x + {b} * y + {c} * z + {d} = 0"

    ## orientation

    def canonical(self) -> "Plane":
        """Same plane with the normal pointing to positive z.

        When the normal has no z component positive y is preferred,
        then positive x.
        """
        n = self.n
        lead = n.dz if n.dz != 0 else (n.dy if n.dy != 0 else n.dx)
        return Plane(self.p, -n) if lead < 0 else Plane(self.p, n)

    def reverse(self) -> "Plane":
        """same plane, opposite normal"""
        return Plane(self.p, -self.n)

    ## point queries

    def _height(self, pt: Point) -> Fraction:
        return self.n.dot(pt - self.p)

    def side(self, pt: Point, oom: int, rm: RoundingMode = HALF_UP) -> int:
        """1 on the normal side, -1 on the other, 0 on the plane"""
        return sign(self._height(pt), oom, rm)

    def is_on_same_side(self, a: Point, b: Point, oom: int,
                        rm: RoundingMode = HALF_UP) -> bool:
        """``a`` and ``b`` are not strictly on opposite sides"""
        return self.side(a, oom, rm) * self.side(b, oom, rm) >= 0

    def intersects(self, other, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        if isinstance(other, Point):
            return is_zero(self._height(other), oom, rm)
        return self.get_intersect(other, oom, rm) is not None

    def point_of_projection(self, pt: Point) -> Point:
        """foot of the perpendicular from ``pt``"""
        return pt - self.n * (self._height(pt) / self.n.magnitude_squared())

    ## relations between planes and lines

    def is_parallel(self, other, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """parallel to another plane or to a linear object"""
        if isinstance(other, Plane):
            return self.n.is_scalar_multiple(other.n, oom, rm)
        if isinstance(other, Line):
            return self.n.is_orthogonal(other.v, oom, rm)
        raise TypeError(f"cannot test a plane for parallel with {type(other).__name__}")

    def equals_ignore_orientation(self, other: "Plane", oom: int,
                                  rm: RoundingMode = HALF_UP) -> bool:
        """same set of points, either normal direction"""
        return self.is_parallel(other, oom, rm) and self.intersects(other.p, oom, rm)

    is_coincident = equals_ignore_orientation

    def equals(self, other: "Plane", oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """same set of points and normals pointing the same way"""
        return (self.equals_ignore_orientation(other, oom, rm)
                and self.n.dot(other.n) > 0)

    def is_coplanar_with(self, *points: Point, oom: int,
                         rm: RoundingMode = HALF_UP) -> bool:
        return all(self.intersects(pt, oom, rm) for pt in points)

    @staticmethod
    def is_coplanar(oom: int, rm: RoundingMode, *points: Point) -> bool:
        """``True`` if all ``points`` lie on one plane."""
        from ratgeom.points import plane_of

        plane = plane_of(points, oom, rm)
        if plane is None:
            return True
        return plane.is_coplanar_with(*points, oom=oom, rm=rm)

    ## distance

    def distance_squared(self, other, oom: int | None = None,
                         rm: RoundingMode = HALF_UP) -> Fraction:
        """Squared distance to a point, linear object, plane or shape.

        Exact when ``oom`` is ``None``.
        """
        nn = self.n.magnitude_squared()
        if isinstance(other, Point):
            d2 = self._height(other) ** 2 / nn
        elif isinstance(other, Line):
            d2 = self._linear_distance_squared(other)
        elif isinstance(other, Plane):
            if self.n.is_scalar_multiple(other.n):
                d2 = self._height(other.p) ** 2 / nn
            else:
                d2 = Fraction(0)
        else:
            return other.distance_squared(self, oom, rm)
        if oom is None:
            return d2
        return round_to(d2, oom, rm)

    def _linear_distance_squared(self, line: Line) -> Fraction:
        nv = self.n.dot(line.v)
        h = self._height(line.p)
        nn = self.n.magnitude_squared()
        if nv == 0:
            return h * h / nn
        if line._has_parameter(-h / nv):
            return Fraction(0)
        ends = [line.point_at(t) for t in line._bounds() if math.isfinite(t)]
        return min(self._height(e) ** 2 / nn for e in ends)

    def distance(self, other, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        """distance rounded to ``(oom, rm)``"""
        if isinstance(other, (Point, Line, Plane)):
            return sqrt(self.distance_squared(other), oom, rm)
        return other.distance(self, oom, rm)

    ## intersection

    def get_intersect(self, other, oom: int, rm: RoundingMode = HALF_UP):
        """Intersection with a point, linear object, plane or shape.

        Against a plane the result is ``None`` (parallel), a copy of
        this plane (coincident) or a :class:`Line`.  Against a linear
        object it is ``None``, a :class:`Point` or a copy of the object
        when it lies in the plane.
        """
        if isinstance(other, Point):
            return other.copy() if self.intersects(other, oom, rm) else None
        if isinstance(other, Plane):
            return self._intersect_plane(other, oom, rm)
        if isinstance(other, Line):
            return self._intersect_linear(other, oom, rm)
        return other.get_intersect(self, oom, rm)

    def _intersect_linear(self, line: Line, oom: int, rm: RoundingMode):
        nv = self.n.dot(line.v)
        if is_zero(nv, oom, rm):
            if self.intersects(line.p, oom, rm):
                return type(line)._from_pv(line.p, line.v)
            log.debug("%r parallel to %r", line, self)
            return None
        t = -self._height(line.p) / nv
        pt = line.point_at(t)
        if line._within(pt, oom, rm):
            return pt
        return None

    def _intersect_plane(self, other: "Plane", oom: int, rm: RoundingMode):
        d = self.n.cross(other.n)
        if d.is_zero(oom, rm):
            if self.intersects(other.p, oom, rm):
                return Plane(self.p, self.n)
            log.debug("parallel planes %r, %r", self, other)
            return None
        h1 = self.n.dot(self.p.effective_position())
        h2 = other.n.dot(other.p.effective_position())
        pos = (other.n.cross(d) * h1 + d.cross(self.n) * h2) / d.magnitude_squared()
        return Line(Point(pos), d)

    def get_intersect_planes(self, pl1: "Plane", pl2: "Plane", oom: int,
                             rm: RoundingMode = HALF_UP) -> PlaneIntersection:
        """Common part of three planes.

        ``None``, a :class:`Point`, a :class:`Line`, or a copy of this
        plane when all three coincide.
        """
        first = self._intersect_plane(pl1, oom, rm)
        if first is None:
            return None
        if isinstance(first, Plane):
            return first._intersect_plane(pl2, oom, rm)
        return pl2._intersect_linear(first, oom, rm)

    ## transformation

    def translate(self, v: Vector) -> "Plane":
        return Plane(self.p.translate(v), self.n)

    def rotate(self, axis_line: Line, axis_vector: Vector, pi, theta, oom: int,
               rm: RoundingMode = HALF_UP) -> "Plane":
        return Plane(self.p.rotate(axis_line, axis_vector, pi, theta, oom, rm),
                     self.n.rotate(axis_vector, pi, theta, oom, rm))


Plane.X0 = Plane(Point.ORIGIN, Vector.I)
Plane.Y0 = Plane(Point.ORIGIN, Vector.J)
Plane.Z0 = Plane(Point.ORIGIN, Vector.K)

__all__ = ["Plane", "PlaneIntersection"]
