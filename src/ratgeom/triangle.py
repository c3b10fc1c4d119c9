## triangles for ratgeom
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

"""triangles

A :class:`Triangle` holds three non-collinear corners ``p``, ``q`` and
``r`` and its own :class:`~ratgeom.plane.Plane` ``pl``.  The plane is
never shared with the caller: building a triangle from a plane copies
it.

Intersections return ``None`` or the shared geometry of the lowest
correct dimension:

* against a line, ray or segment: a point or a segment
* against a plane: a point, a segment or the whole triangle
* against another triangle: a point, a segment, a triangle, or a
  :class:`~ratgeom.convexarea.ConvexArea` when the overlap of two
  coplanar triangles has more than three corners

``intersects`` includes the boundary; ``contains`` is strict and is
false for points on an edge or at a corner.
"""

from __future__ import annotations

import logging
import math
from fractions import Fraction
from typing import List, Optional, Tuple

from ratgeom.errors import InvalidGeometryError
from ratgeom.line import Line, LineSegment
from ratgeom.plane import Plane
from ratgeom.point import Point
from ratgeom.points import geometry_of
from ratgeom.precision import HALF_UP, RoundingMode, round_to, sign, sqrt
from ratgeom.vector import Vector

log = logging.getLogger(__name__)

## guard digits for sums of rounded lengths
GUARD = 3


class Triangle:
    """A planar triangle with corners ``p``, ``q`` and ``r``."""

    __slots__ = ("pl", "p", "q", "r")

    def __init__(self, p: Point, q: Point, r: Point):
        n = (q - p).cross(r - p)
        if n.is_zero():
            raise InvalidGeometryError("triangle corners are collinear",
                                       {"p": p, "q": q, "r": r})
        self.pl = Plane(p, n)
        self.p = p
        self.q = q
        self.r = r

    @classmethod
    def from_plane(cls, pl: Plane, p: Point, q: Point, r: Point, oom: int,
                   rm: RoundingMode = HALF_UP) -> "Triangle":
        """Triangle whose plane keeps the orientation of ``pl``.

        The corners must lie on ``pl`` at ``(oom, rm)``.
        """
        for pt in (p, q, r):
            if not pl.intersects(pt, oom, rm):
                raise InvalidGeometryError("triangle corner is not on the plane",
                                           {"point": pt, "plane": pl})
        t = cls(p, q, r)
        t.pl = Plane(pl.p, pl.n)
        return t

    def __eq__(self, other):
        if not isinstance(other, Triangle):
            return NotImplemented
        return self.p == other.p and self.q == other.q and self.r == other.r

    def __hash__(self):
        return hash((self.p, self.q, self.r))

    def __repr__(self):
        return f"Triangle(p={self.p!r}, q={self.q!r}, r={self.r!r})"

    def to_string(self, oom: int, rm: RoundingMode = HALF_UP) -> str:
        return "Triangle(p={}, q={}, r={})".format(
            *(c.to_string(oom, rm) for c in self.points()))

    ## structure

    def points(self) -> Tuple[Point, Point, Point]:
        return (self.p, self.q, self.r)

    @property
    def pq(self) -> LineSegment:
        return LineSegment(self.p, self.q)

    @property
    def qr(self) -> LineSegment:
        return LineSegment(self.q, self.r)

    @property
    def rp(self) -> LineSegment:
        return LineSegment(self.r, self.p)

    def edges(self) -> Tuple[LineSegment, LineSegment, LineSegment]:
        return (self.pq, self.qr, self.rp)

    def winding_normal(self) -> Vector:
        """``(q - p) x (r - p)``: counter-clockwise corners about this normal"""
        return (self.q - self.p).cross(self.r - self.p)

    def get_opposite(self, edge: LineSegment) -> Point:
        """corner not on ``edge``"""
        ends = set(edge.endpoints())
        for c in self.points():
            if c not in ends:
                return c
        raise InvalidGeometryError("segment is not an edge of the triangle",
                                   {"edge": edge})

    def equals(self, other: "Triangle", oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """same corners in any order"""
        if not isinstance(other, Triangle):
            return False
        return all(any(a.equals(b, oom, rm) for b in other.points())
                   for a in self.points()) and \
            all(any(b.equals(a, oom, rm) for a in self.points())
                for b in other.points())

    ## measures

    def area(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return sqrt(self.winding_normal().magnitude_squared() / 4, oom, rm)

    def perimeter(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return round_to(sum(e.length(oom - GUARD, rm) for e in self.edges()), oom, rm)

    def centroid(self) -> Point:
        return Point((self.p.effective_position() + self.q.effective_position()
                      + self.r.effective_position()) / 3)

    def aabb(self, oom: int):
        from ratgeom.aabb import AABB
        return AABB.from_points(self.points(), oom)

    ## point classification

    def _edge_signs(self, pt: Point, oom: Optional[int], rm: RoundingMode) -> List[int]:
        w = self.winding_normal()
        out = []
        for a, b in ((self.p, self.q), (self.q, self.r), (self.r, self.p)):
            s = (b - a).cross(pt - a).dot(w)
            out.append(((s > 0) - (s < 0)) if oom is None else sign(s, oom, rm))
        return out

    def _covers_projection(self, pt: Point) -> bool:
        """is the projection of ``pt`` on the plane inside or on the triangle?"""
        return all(s >= 0 for s in self._edge_signs(pt, None, HALF_UP))

    def intersects(self, other, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """``True`` if ``other`` (point or geometry) meets the closed triangle"""
        if isinstance(other, Point):
            return (self.pl.intersects(other, oom, rm)
                    and all(s >= 0 for s in self._edge_signs(other, oom, rm)))
        return self.get_intersect(other, oom, rm) is not None

    def contains(self, other, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """``True`` if ``other`` lies strictly inside the triangle"""
        if isinstance(other, Point):
            return (self.pl.intersects(other, oom, rm)
                    and all(s > 0 for s in self._edge_signs(other, oom, rm)))
        if isinstance(other, LineSegment):
            return self.contains(other.p, oom, rm) and self.contains(other.q, oom, rm)
        if isinstance(other, Triangle):
            return all(self.contains(c, oom, rm) for c in other.points())
        raise TypeError(f"cannot test containment of {type(other).__name__}")

    ## intersection

    def get_intersect(self, other, oom: int, rm: RoundingMode = HALF_UP):
        if isinstance(other, Point):
            return other.copy() if self.intersects(other, oom, rm) else None
        if isinstance(other, Line):
            return self._intersect_linear(other, oom, rm)
        if isinstance(other, Plane):
            return self._intersect_plane(other, oom, rm)
        if isinstance(other, Triangle):
            return self._intersect_triangle(other, oom, rm)
        return other.get_intersect(self, oom, rm)

    def _intersect_linear(self, line: Line, oom: int, rm: RoundingMode):
        hit = self.pl.get_intersect(line, oom, rm)
        if hit is None:
            return None
        if isinstance(hit, Point):
            return hit if self.intersects(hit, oom, rm) else None
        return self.clip(line, oom, rm)

    def clip(self, line: Line, oom: int, rm: RoundingMode = HALF_UP):
        """Part of a coplanar linear object inside the triangle.

        Cyrus-Beck clipping of the parameter range against the three
        inward edge normals.
        """
        w = self.winding_normal()
        lo, hi = line._bounds()
        for a, b in ((self.p, self.q), (self.q, self.r), (self.r, self.p)):
            m = w.cross(b - a)
            mv = m.dot(line.v)
            c = m.dot(line.p - a)
            if mv == 0:
                if sign(c, oom, rm) < 0:
                    return None
                continue
            t = -c / mv
            if mv > 0:
                lo = max(lo, t)
            else:
                hi = min(hi, t)
        p_lo = line.point_at(lo)
        p_hi = line.point_at(hi)
        if p_lo.equals(p_hi, oom, rm):
            return p_lo
        if lo > hi:
            return None
        return LineSegment(p_lo, p_hi)

    def _intersect_plane(self, plane: Plane, oom: int, rm: RoundingMode):
        if self.pl.is_parallel(plane, oom, rm):
            if plane.intersects(self.p, oom, rm):
                return Triangle(self.p, self.q, self.r)
            return None
        pts: List[Point] = []
        for edge in self.edges():
            hit = plane.get_intersect(edge, oom, rm)
            if isinstance(hit, Point):
                pts.append(hit)
            elif isinstance(hit, LineSegment):
                pts.extend(hit.endpoints())
        return geometry_of(pts, oom, rm)

    def _intersect_triangle(self, other: "Triangle", oom: int, rm: RoundingMode):
        if self.pl.equals_ignore_orientation(other.pl, oom, rm):
            return self._overlap(other, oom, rm)
        cut = other._intersect_plane(self.pl, oom, rm)
        if cut is None:
            log.debug("%r does not reach the plane of %r", other, self)
            return None
        if isinstance(cut, Point):
            return cut if self.intersects(cut, oom, rm) else None
        if isinstance(cut, Triangle):
            log.debug("%r is coplanar with %r at precision %d", other, self, oom)
            return self._overlap(cut, oom, rm)
        return self.clip(cut, oom, rm)

    def _overlap(self, other: "Triangle", oom: int, rm: RoundingMode):
        """Sutherland-Hodgman clip of coplanar ``other`` by this triangle"""
        w = self.winding_normal()
        poly = list(other.points())
        for a, b in ((self.p, self.q), (self.q, self.r), (self.r, self.p)):
            m = w.cross(b - a)
            poly = _clip_polygon(poly, m, a)
            if not poly:
                return None
        return geometry_of(poly, oom, rm, w)

    ## distance

    def distance_squared(self, other, oom: int | None = None,
                         rm: RoundingMode = HALF_UP) -> Fraction:
        """Squared distance to a point, linear object, plane or triangle.

        Exact when ``oom`` is ``None``.
        """
        if isinstance(other, Point):
            d2 = self._point_distance_squared(other)
        elif isinstance(other, Line):
            d2 = self._linear_distance_squared(other)
        elif isinstance(other, Plane):
            heights = [other.n.dot(c - other.p) for c in self.points()]
            if min(heights) <= 0 <= max(heights):
                d2 = Fraction(0)
            else:
                d2 = min(other.distance_squared(c) for c in self.points())
        elif isinstance(other, Triangle):
            d2 = min([other._linear_distance_squared(e) for e in self.edges()]
                     + [self._linear_distance_squared(e) for e in other.edges()])
        else:
            return other.distance_squared(self, oom, rm)
        if oom is None:
            return d2
        return round_to(d2, oom, rm)

    def _point_distance_squared(self, pt: Point) -> Fraction:
        if self._covers_projection(pt):
            return self.pl.distance_squared(pt)
        return min(e.distance_squared(pt) for e in self.edges())

    def _linear_distance_squared(self, line: Line) -> Fraction:
        w = self.winding_normal()
        nv = w.dot(line.v)
        if nv != 0:
            t = w.dot(self.p - line.p) / nv
            if line._has_parameter(t) and self._covers_projection(line.point_at(t)):
                return Fraction(0)
        candidates = [e.distance_squared(line) for e in self.edges()]
        candidates.extend(self._point_distance_squared(line.point_at(t))
                          for t in line._bounds() if math.isfinite(t))
        return min(candidates)

    def distance(self, other, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return sqrt(self.distance_squared(other), oom, rm)

    ## transformation

    def translate(self, v: Vector) -> "Triangle":
        return Triangle(self.p.translate(v), self.q.translate(v), self.r.translate(v))

    def rotate(self, axis_line: Line, axis_vector: Vector, pi, theta, oom: int,
               rm: RoundingMode = HALF_UP) -> "Triangle":
        return Triangle(*(c.rotate(axis_line, axis_vector, pi, theta, oom, rm)
                          for c in self.points()))


def _clip_polygon(poly: List[Point], m: Vector, a: Point) -> List[Point]:
    """keep the part of ``poly`` where ``m . (x - a) >= 0``, exactly"""
    out: List[Point] = []
    n = len(poly)
    for i in range(n):
        cur = poly[i]
        prev = poly[i - 1]
        dc = m.dot(cur - a)
        dp = m.dot(prev - a)
        if dc >= 0:
            if dp < 0:
                out.append(prev + (cur - prev) * (dp / (dp - dc)))
            out.append(cur)
        elif dp > 0:
            out.append(prev + (cur - prev) * (dp / (dp - dc)))
    return out


__all__ = ["Triangle"]
