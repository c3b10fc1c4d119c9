## rectangles for ratgeom
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

"""rectangles

A :class:`Rectangle` with corners ``p, q, r, s`` (in order round the
boundary) is held as the two triangles ``pqr`` and ``rsp``.  Queries
are forwarded to both triangles and the partial results merged into a
single geometry.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import Optional, Tuple

from ratgeom.errors import InvalidGeometryError
from ratgeom.line import Line, LineSegment
from ratgeom.plane import Plane
from ratgeom.point import Point
from ratgeom.points import merge
from ratgeom.precision import HALF_UP, RoundingMode, is_zero, round_to, sign, sqrt
from ratgeom.triangle import Triangle
from ratgeom.vector import Vector

log = logging.getLogger(__name__)

GUARD = 2


class Rectangle:
    """A planar rectangle with corners ``p``, ``q``, ``r``, ``s``."""

    __slots__ = ("pqr", "rsp")

    def __init__(self, p: Point, q: Point, r: Point, s: Point,
                 oom: Optional[int] = None, rm: RoundingMode = HALF_UP):
        """Corners are checked exactly, or at ``(oom, rm)`` when given."""
        if not Rectangle.is_rectangle(p, q, r, s, oom, rm):
            raise InvalidGeometryError("corners do not form a rectangle",
                                       {"p": p, "q": q, "r": r, "s": s})
        self.pqr = Triangle(p, q, r)
        self.rsp = Triangle(r, s, p)

    @classmethod
    def _unchecked(cls, p: Point, q: Point, r: Point, s: Point) -> "Rectangle":
        """rectangle from corners known to be an image of a rectangle"""
        rect = cls.__new__(cls)
        rect.pqr = Triangle(p, q, r)
        rect.rsp = Triangle(r, s, p)
        return rect

    @staticmethod
    def is_rectangle(p: Point, q: Point, r: Point, s: Point,
                     oom: Optional[int] = None, rm: RoundingMode = HALF_UP) -> bool:
        """Opposite sides parallel, adjacent sides perpendicular and
        diagonals of equal length."""
        pq, qr, rs, sp = q - p, r - q, s - r, p - s
        if pq.is_zero() or qr.is_zero() or rs.is_zero() or sp.is_zero():
            return False

        def zero(x):
            return x == 0 if oom is None else is_zero(x, oom, rm)

        return (pq.is_scalar_multiple(rs, oom, rm)
                and qr.is_scalar_multiple(sp, oom, rm)
                and pq.dot(rs) < 0
                and zero(pq.dot(qr))
                and zero((r - p).magnitude_squared() - (s - q).magnitude_squared()))

    @property
    def p(self) -> Point:
        return self.pqr.p

    @property
    def q(self) -> Point:
        return self.pqr.q

    @property
    def r(self) -> Point:
        return self.pqr.r

    @property
    def s(self) -> Point:
        return self.rsp.q

    @property
    def pl(self) -> Plane:
        return self.pqr.pl

    @property
    def triangles(self) -> Tuple[Triangle, Triangle]:
        return (self.pqr, self.rsp)

    def points(self) -> Tuple[Point, Point, Point, Point]:
        return (self.p, self.q, self.r, self.s)

    def edges(self) -> Tuple[LineSegment, ...]:
        p, q, r, s = self.points()
        return (LineSegment(p, q), LineSegment(q, r), LineSegment(r, s), LineSegment(s, p))

    def __eq__(self, other):
        if not isinstance(other, Rectangle):
            return NotImplemented
        return self.points() == other.points()

    def __hash__(self):
        return hash(self.points())

    def __repr__(self):
        return "Rectangle(p={!r}, q={!r}, r={!r}, s={!r})".format(*self.points())

    def to_string(self, oom: int, rm: RoundingMode = HALF_UP) -> str:
        return "Rectangle(p={}, q={}, r={}, s={})".format(
            *(c.to_string(oom, rm) for c in self.points()))

    def equals(self, other: "Rectangle", oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """same corners in any order"""
        if not isinstance(other, Rectangle):
            return False
        mine, theirs = self.points(), other.points()
        return (all(any(a.equals(b, oom, rm) for b in theirs) for a in mine)
                and all(any(b.equals(a, oom, rm) for a in mine) for b in theirs))

    ## measures

    def area(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return sqrt((self.q - self.p).magnitude_squared()
                    * (self.r - self.q).magnitude_squared(), oom, rm)

    def perimeter(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        work = oom - GUARD
        a = sqrt((self.q - self.p).magnitude_squared(), work, rm)
        b = sqrt((self.r - self.q).magnitude_squared(), work, rm)
        return round_to(2 * (a + b), oom, rm)

    def centroid(self) -> Point:
        return Point((self.p.effective_position() + self.r.effective_position()) / 2)

    def aabb(self, oom: int):
        from ratgeom.aabb import AABB
        return AABB.from_points(self.points(), oom)

    ## queries

    def intersects(self, other, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        if isinstance(other, Point):
            return self.pqr.intersects(other, oom, rm) or self.rsp.intersects(other, oom, rm)
        return self.get_intersect(other, oom, rm) is not None

    def contains(self, other, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """``True`` if ``other`` lies strictly inside the rectangle"""
        if isinstance(other, Point):
            if not self.pl.intersects(other, oom, rm):
                return False
            w = self.pqr.winding_normal()
            corners = self.points()
            return all(
                sign((corners[(i + 1) % 4] - corners[i]).cross(other - corners[i]).dot(w),
                     oom, rm) > 0
                for i in range(4))
        if isinstance(other, LineSegment):
            return self.contains(other.p, oom, rm) and self.contains(other.q, oom, rm)
        if isinstance(other, (Triangle, Rectangle)):
            return all(self.contains(c, oom, rm) for c in other.points())
        raise TypeError(f"cannot test containment of {type(other).__name__}")

    def get_intersect(self, other, oom: int, rm: RoundingMode = HALF_UP):
        """Intersection with a point, linear object, plane or triangle.

        A coincident plane returns a copy of the rectangle.
        """
        if isinstance(other, Point):
            return other.copy() if self.intersects(other, oom, rm) else None
        if isinstance(other, Plane) and self.pl.equals_ignore_orientation(other, oom, rm):
            return Rectangle._unchecked(*self.points())
        if isinstance(other, Rectangle):
            parts = [other.get_intersect(t, oom, rm) for t in (self.pqr, self.rsp)]
        elif isinstance(other, (Line, Plane, Triangle)):
            parts = [t.get_intersect(other, oom, rm) for t in (self.pqr, self.rsp)]
        else:
            return other.get_intersect(self, oom, rm)
        log.debug("rectangle parts %r", parts)
        return merge(parts, oom, rm, self.pqr.winding_normal())

    def distance_squared(self, other, oom: int | None = None,
                         rm: RoundingMode = HALF_UP) -> Fraction:
        if isinstance(other, Rectangle):
            d2 = min(other.distance_squared(t) for t in (self.pqr, self.rsp))
        else:
            d2 = min(t.distance_squared(other) for t in (self.pqr, self.rsp))
        return d2 if oom is None else round_to(d2, oom, rm)

    def distance(self, other, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return sqrt(self.distance_squared(other), oom, rm)

    ## transformation

    def translate(self, v: Vector) -> "Rectangle":
        return Rectangle._unchecked(*(c.translate(v) for c in self.points()))

    def rotate(self, axis_line: Line, axis_vector: Vector, pi, theta, oom: int,
               rm: RoundingMode = HALF_UP) -> "Rectangle":
        """Rotated copy.

        Each corner is rounded to ``(oom, rm)``, so the result is a
        rectangle only to within that rounding and is not checked again.
        """
        corners = [c.rotate(axis_line, axis_vector, pi, theta, oom, rm)
                   for c in self.points()]
        return Rectangle._unchecked(*corners)


__all__ = ["Rectangle"]
