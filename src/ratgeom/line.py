## lines, rays and line segments for ratgeom
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

"""lines, rays and line segments

=====================
linear geometry model
=====================

All three linear types store a point ``p`` and a non-zero direction
vector ``v`` and describe the points ``p + t*v``:

* :class:`Line`: any ``t``
* :class:`Ray`: ``t >= 0``
* :class:`LineSegment`: ``0 <= t <= 1``, so ``q = p + v`` is the far
  endpoint

They share one intersection engine.  Two linear objects are first
intersected as infinite lines; the result is then clipped to the
parameter range of both operands, which may reduce a collinear
overlap to a segment, a ray or a single point.

Intersection methods return ``None`` when nothing is shared, otherwise
a :class:`~ratgeom.point.Point`, :class:`LineSegment`, :class:`Ray` or
:class:`Line`.  Queries against planes and solids are delegated to the
other operand's ``get_intersect``.
"""

from __future__ import annotations

import logging
import math
from fractions import Fraction
from typing import List, Optional, Tuple, Union

from ratgeom.errors import InvalidGeometryError
from ratgeom.point import Point
from ratgeom.precision import HALF_UP, RoundingMode, is_zero, round_to, sign, sqrt
from ratgeom.vector import Vector

log = logging.getLogger(__name__)

LinearIntersection = Optional[Union[Point, "LineSegment", "Ray", "Line"]]


class Line:
    """An infinite line through ``p`` with direction ``v``."""

    __slots__ = ("p", "v")

    ## parameter range of the points p + t*v
    LOWER = -math.inf
    UPPER = math.inf

    def __init__(self, p: Point, v: Vector):
        if v.is_zero():
            raise InvalidGeometryError(
                f"{type(self).__name__} direction must be non-zero",
                {"p": p})
        self.p = p
        self.v = v

    @classmethod
    def from_points(cls, p: Point, q: Point):
        """line through ``p`` and ``q``, directed from ``p`` to ``q``"""
        if p == q:
            raise InvalidGeometryError(
                f"{cls.__name__} needs two distinct points", {"p": p})
        return cls(p, q - p)

    @classmethod
    def _from_pv(cls, p: Point, v: Vector):
        obj = cls.__new__(cls)
        obj.p = p
        obj.v = v
        return obj

    @property
    def q(self) -> Point:
        """the point ``p + v``"""
        return self.p + self.v

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.p == other.p and self.v == other.v

    def __hash__(self):
        return hash((type(self).__name__, self.p, self.v))

    def __repr__(self):
        return f"{type(self).__name__}(p={self.p!r}, v={self.v!r})"

    def to_string(self, oom: int, rm: RoundingMode = HALF_UP) -> str:
        return "{}(p={}, v={})".format(type(self).__name__,
                                       self.p.to_string(oom, rm),
                                       self.v.to_string(oom, rm))

    ## parametric helpers

    def point_at(self, t) -> Point:
        return self.p + self.v * t

    def parameter_of(self, pt: Point) -> Fraction:
        """parameter of the projection of ``pt`` onto the infinite line"""
        return (pt - self.p).dot(self.v) / self.v.magnitude_squared()

    def _bounds(self) -> Tuple:
        return (self.LOWER, self.UPPER)

    def _has_parameter(self, t) -> bool:
        return self.LOWER <= t <= self.UPPER

    def _within(self, pt: Point, oom: int, rm: RoundingMode) -> bool:
        """is a point of the infinite line inside the parameter range?"""
        if self.LOWER > -math.inf and sign((pt - self.p).dot(self.v), oom, rm) < 0:
            return False
        if self.UPPER < math.inf and sign((pt - self.q).dot(self.v), oom, rm) > 0:
            return False
        return True

    def as_line(self) -> "Line":
        """the infinite line carrying this object"""
        return Line._from_pv(self.p, self.v)

    ## point queries

    def point_of_projection(self, pt: Point) -> Point:
        """foot of the perpendicular from ``pt`` to the infinite line"""
        return self.point_at(self.parameter_of(pt))

    def closest_point(self, pt: Point) -> Point:
        """point of this object closest to ``pt``"""
        t = self.parameter_of(pt)
        if t < self.LOWER:
            t = self.LOWER
        elif t > self.UPPER:
            t = self.UPPER
        return self.point_at(t)

    def intersects(self, other, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """``True`` if ``other`` (a point or any geometry) meets this object"""
        if isinstance(other, Point):
            if not (other - self.p).cross(self.v).is_zero(oom, rm):
                return False
            return self._within(other, oom, rm)
        return self.get_intersect(other, oom, rm) is not None

    def distance_squared(self, other, oom: int | None = None,
                         rm: RoundingMode = HALF_UP) -> Fraction:
        """Squared distance to a point or another linear object.

        Exact when ``oom`` is ``None``, otherwise rounded.
        """
        if isinstance(other, Point):
            d2 = self.closest_point(other).distance_squared(other)
        elif isinstance(other, Line):
            a, b = _closest_pair(self, other)
            d2 = a.distance_squared(b)
        else:
            return other.distance_squared(self, oom, rm)
        if oom is None:
            return d2
        return round_to(d2, oom, rm)

    def distance(self, other, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        """distance to a point or linear object rounded to ``(oom, rm)``"""
        if isinstance(other, (Point, Line)):
            return sqrt(self.distance_squared(other), oom, rm)
        return other.distance(self, oom, rm)

    ## direction queries

    def is_parallel(self, other, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """parallel to another linear object, or to a plane"""
        if isinstance(other, Line):
            return self.v.is_scalar_multiple(other.v, oom, rm)
        return other.is_parallel(self, oom, rm)

    def is_parallel_to_x0(self, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """parallel to the plane x = 0"""
        return is_zero(self.v.dx, oom, rm)

    def is_parallel_to_y0(self, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """parallel to the plane y = 0"""
        return is_zero(self.v.dy, oom, rm)

    def is_parallel_to_z0(self, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """parallel to the plane z = 0"""
        return is_zero(self.v.dz, oom, rm)

    def equals(self, other: "Line", oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """Same set of points at ``(oom, rm)``."""
        if not isinstance(other, Line) or type(other) is not type(self):
            return False
        return (self.v.is_scalar_multiple(other.v, oom, rm)
                and self.as_line().intersects(other.p, oom, rm))

    def is_collinear_with(self, *points: Point, oom: int,
                          rm: RoundingMode = HALF_UP) -> bool:
        line = self.as_line()
        return all(line.intersects(pt, oom, rm) for pt in points)

    @staticmethod
    def is_collinear(oom: int, rm: RoundingMode, *points: Point) -> bool:
        """``True`` if all ``points`` lie on one line."""
        unique = Point.unique(points, oom, rm)
        if len(unique) < 3:
            return True
        line = Line.from_points(unique[0], unique[1])
        return all(line.intersects(pt, oom, rm) for pt in unique[2:])

    ## intersection

    def get_intersect(self, other, oom: int, rm: RoundingMode = HALF_UP):
        """Intersection with a point, linear object, plane or shape.

        Returns ``None`` or the shared geometry of the lowest correct
        dimension.
        """
        if isinstance(other, Point):
            return other.copy() if self.intersects(other, oom, rm) else None
        if isinstance(other, Line):
            return _intersect_linear(self, other, oom, rm)
        return other.get_intersect(self, oom, rm)

    def line_of_intersection(self, other: "Line", oom: int,
                             rm: RoundingMode = HALF_UP):
        """Shortest connection to another linear object.

        Returns the shared :class:`Point` if they meet, otherwise the
        :class:`LineSegment` from this object to ``other``.
        """
        a, b = _closest_pair(self, other)
        if a.equals(b, oom, rm):
            return a
        return LineSegment(a, b)

    ## transformation

    def translate(self, v: Vector):
        return type(self)._from_pv(self.p.translate(v), self.v)

    def rotate(self, axis_line: "Line", axis_vector: Vector, pi, theta,
               oom: int, rm: RoundingMode = HALF_UP):
        p = self.p.rotate(axis_line, axis_vector, pi, theta, oom, rm)
        v = self.v.rotate(axis_vector, pi, theta, oom, rm)
        return type(self)(p, v)


class Ray(Line):
    """A half line starting at ``p`` heading along ``v``."""

    __slots__ = ()

    LOWER = 0

    def equals(self, other: "Ray", oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """same start point and same sense of direction"""
        if not isinstance(other, Ray):
            return False
        return (self.p.equals(other.p, oom, rm)
                and self.v.is_scalar_multiple(other.v, oom, rm)
                and self.v.dot(other.v) > 0)


class LineSegment(Line):
    """The closed segment from ``p`` to ``q``."""

    __slots__ = ()

    LOWER = 0
    UPPER = 1

    def __init__(self, p: Point, q: Point):
        if p == q:
            raise InvalidGeometryError("line segment endpoints must differ", {"p": p})
        super().__init__(p, q - p)

    @classmethod
    def from_points(cls, p: Point, q: Point) -> "LineSegment":
        return cls(p, q)

    def __repr__(self):
        return f"LineSegment(p={self.p!r}, q={self.q!r})"

    def to_string(self, oom: int, rm: RoundingMode = HALF_UP) -> str:
        return "LineSegment(p={}, q={})".format(self.p.to_string(oom, rm),
                                               self.q.to_string(oom, rm))

    def endpoints(self) -> Tuple[Point, Point]:
        return (self.p, self.q)

    def reverse(self) -> "LineSegment":
        return LineSegment(self.q, self.p)

    def length_squared(self) -> Fraction:
        return self.v.magnitude_squared()

    def length(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return sqrt(self.length_squared(), oom, rm)

    def midpoint(self) -> Point:
        return self.point_at(Fraction(1, 2))

    def equals(self, other: "LineSegment", oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """same endpoints in the same order"""
        if not isinstance(other, LineSegment):
            return False
        return self.p.equals(other.p, oom, rm) and self.q.equals(other.q, oom, rm)

    def equals_ignore_direction(self, other: "LineSegment", oom: int,
                                rm: RoundingMode = HALF_UP) -> bool:
        if not isinstance(other, LineSegment):
            return False
        return (self.equals(other, oom, rm)
                or (self.p.equals(other.q, oom, rm) and self.q.equals(other.p, oom, rm)))

    def aabb(self, oom: int):
        from ratgeom.aabb import AABB
        return AABB.from_points([self.p, self.q], oom)

    def rotate(self, axis_line: Line, axis_vector: Vector, pi, theta,
               oom: int, rm: RoundingMode = HALF_UP) -> "LineSegment":
        return LineSegment(self.p.rotate(axis_line, axis_vector, pi, theta, oom, rm),
                           self.q.rotate(axis_line, axis_vector, pi, theta, oom, rm))


## the shared intersection engine
## ------------------------------

def _intersect_linear(a: Line, b: Line, oom: int, rm: RoundingMode) -> LinearIntersection:
    w = a.v.cross(b.v)
    d = b.p - a.p
    if w.is_zero(oom, rm):
        if not d.cross(a.v).is_zero(oom, rm):
            log.debug("parallel distinct lines: %r, %r", a, b)
            return None
        return _collinear_overlap(a, b, oom, rm)
    if not is_zero(d.dot(w), oom, rm):
        log.debug("skew lines: %r, %r", a, b)
        return None
    t = d.cross(b.v).dot(w) / w.magnitude_squared()
    pt = a.point_at(t)
    if a._within(pt, oom, rm) and b._within(pt, oom, rm):
        return pt
    return None


def _collinear_overlap(a: Line, b: Line, oom: int, rm: RoundingMode) -> LinearIntersection:
    """clip two collinear objects against each other in ``a``'s parameter"""
    vv = a.v.magnitude_squared()
    t0 = (b.p - a.p).dot(a.v) / vv
    s = b.v.dot(a.v) / vv
    mapped = [t0 + s * t for t in b._bounds()]
    lo = max(a.LOWER, min(mapped))
    hi = min(a.UPPER, max(mapped))
    finite_lo = lo > -math.inf
    finite_hi = hi < math.inf
    if finite_lo and finite_hi:
        p_lo = a.point_at(lo)
        p_hi = a.point_at(hi)
        if p_lo.equals(p_hi, oom, rm):
            return p_lo
        if lo > hi:
            return None
        return LineSegment(p_lo, p_hi)
    if finite_lo:
        return Ray(a.point_at(lo), a.v)
    if finite_hi:
        return Ray(a.point_at(hi), -a.v)
    return Line(a.p, a.v)


def _closest_pair(a: Line, b: Line) -> Tuple[Point, Point]:
    """closest points of two linear objects, exactly"""
    w = a.v.cross(b.v)
    if not w.is_zero():
        d = b.p - a.p
        ww = w.magnitude_squared()
        s = d.cross(b.v).dot(w) / ww
        t = d.cross(a.v).dot(w) / ww
        if a._has_parameter(s) and b._has_parameter(t):
            return a.point_at(s), b.point_at(t)
    # otherwise the minimum lies where one parameter sits on a bound
    candidates: List[Tuple[Point, Point]] = []
    for s in a._bounds():
        if math.isfinite(s):
            pa = a.point_at(s)
            candidates.append((pa, b.closest_point(pa)))
    for t in b._bounds():
        if math.isfinite(t):
            pb = b.point_at(t)
            candidates.append((a.closest_point(pb), pb))
    if not candidates:
        return a.p, b.point_of_projection(a.p)
    return min(candidates, key=lambda pair: pair[0].distance_squared(pair[1]))


__all__ = ["Line", "LineSegment", "Ray", "LinearIntersection"]
