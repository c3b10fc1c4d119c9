## axis aligned bounding boxes for ratgeom
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

"""axis aligned bounding boxes

An :class:`AABB` holds ``xmin <= xmax``, ``ymin <= ymax`` and
``zmin <= zmax``.  Built from points at an ``oom`` the minima are
rounded down and the maxima up, so the box always covers its points.

Besides the usual union, intersection and containment tests a box can
produce a viewport (:meth:`AABB.get_viewport`): the rectangle, facing
a viewer at a focal point, that frames the whole box as seen from
there.
"""

from __future__ import annotations

import itertools
import logging
from fractions import Fraction
from typing import Iterable, Optional, Tuple

from ratgeom.errors import InvalidGeometryError
from ratgeom.point import Point
from ratgeom.precision import (
    HALF_UP,
    RoundingMode,
    compare,
    format_rational,
    round_to,
    to_rational,
)
from ratgeom.rectangle import Rectangle
from ratgeom.vector import Vector

log = logging.getLogger(__name__)

FLOOR = RoundingMode.FLOOR
CEILING = RoundingMode.CEILING


class AABB:
    """An axis aligned box."""

    __slots__ = ("xmin", "xmax", "ymin", "ymax", "zmin", "zmax")

    def __init__(self, xmin, xmax, ymin, ymax, zmin, zmax):
        bounds = [to_rational(b) for b in (xmin, xmax, ymin, ymax, zmin, zmax)]
        for axis, lo, hi in zip("xyz", bounds[0::2], bounds[1::2]):
            if lo > hi:
                raise InvalidGeometryError(f"{axis} minimum exceeds maximum",
                                           {"min": lo, "max": hi})
        (self.xmin, self.xmax, self.ymin, self.ymax,
         self.zmin, self.zmax) = bounds

    @classmethod
    def from_points(cls, points: Iterable[Point], oom: int) -> "AABB":
        """smallest box at ``oom`` holding every point"""
        pts = list(points)
        if not pts:
            raise InvalidGeometryError("a bounding box needs at least one point")
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        zs = [p.z for p in pts]
        return cls(round_to(min(xs), oom, FLOOR), round_to(max(xs), oom, CEILING),
                   round_to(min(ys), oom, FLOOR), round_to(max(ys), oom, CEILING),
                   round_to(min(zs), oom, FLOOR), round_to(max(zs), oom, CEILING))

    def bounds(self) -> Tuple[Fraction, ...]:
        return (self.xmin, self.xmax, self.ymin, self.ymax, self.zmin, self.zmax)

    def __eq__(self, other):
        if not isinstance(other, AABB):
            return NotImplemented
        return self.bounds() == other.bounds()

    def __hash__(self):
        return hash(self.bounds())

    def __repr__(self):
        return ("AABB(xMin={}, xMax={}, yMin={}, yMax={}, zMin={}, zMax={})"
                .format(*(format_rational(b) for b in self.bounds())))

    ## rounded access

    def get_xmin(self, oom: int, rm: RoundingMode = FLOOR) -> Fraction:
        return round_to(self.xmin, oom, rm)

    def get_xmax(self, oom: int, rm: RoundingMode = CEILING) -> Fraction:
        return round_to(self.xmax, oom, rm)

    def get_ymin(self, oom: int, rm: RoundingMode = FLOOR) -> Fraction:
        return round_to(self.ymin, oom, rm)

    def get_ymax(self, oom: int, rm: RoundingMode = CEILING) -> Fraction:
        return round_to(self.ymax, oom, rm)

    def get_zmin(self, oom: int, rm: RoundingMode = FLOOR) -> Fraction:
        return round_to(self.zmin, oom, rm)

    def get_zmax(self, oom: int, rm: RoundingMode = CEILING) -> Fraction:
        return round_to(self.zmax, oom, rm)

    def equals(self, other: "AABB", oom: int, rm: RoundingMode = HALF_UP) -> bool:
        return all(compare(a, b, oom, rm) == 0
                   for a, b in zip(self.bounds(), other.bounds()))

    ## geometry

    def centroid(self) -> Point:
        return Point((self.xmin + self.xmax) / 2, (self.ymin + self.ymax) / 2,
                     (self.zmin + self.zmax) / 2)

    def corners(self) -> Tuple[Point, ...]:
        """the eight corners, x varying slowest"""
        return tuple(Point(x, y, z) for x, y, z in itertools.product(
            (self.xmin, self.xmax), (self.ymin, self.ymax), (self.zmin, self.zmax)))

    points = corners

    def translate(self, v: Vector) -> "AABB":
        return AABB(self.xmin + v.dx, self.xmax + v.dx, self.ymin + v.dy,
                    self.ymax + v.dy, self.zmin + v.dz, self.zmax + v.dz)

    ## set operations

    def union(self, other: "AABB", oom: int) -> "AABB":
        """smallest box at ``oom`` holding both boxes"""
        return AABB(round_to(min(self.xmin, other.xmin), oom, FLOOR),
                    round_to(max(self.xmax, other.xmax), oom, CEILING),
                    round_to(min(self.ymin, other.ymin), oom, FLOOR),
                    round_to(max(self.ymax, other.ymax), oom, CEILING),
                    round_to(min(self.zmin, other.zmin), oom, FLOOR),
                    round_to(max(self.zmax, other.zmax), oom, CEILING))

    def is_beyond(self, other: "AABB", oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """``True`` if the boxes are separated along some axis"""
        return (compare(self.xmax, other.xmin, oom, rm) < 0
                or compare(other.xmax, self.xmin, oom, rm) < 0
                or compare(self.ymax, other.ymin, oom, rm) < 0
                or compare(other.ymax, self.ymin, oom, rm) < 0
                or compare(self.zmax, other.zmin, oom, rm) < 0
                or compare(other.zmax, self.zmin, oom, rm) < 0)

    def intersects(self, other, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """box or point overlap, boundaries included"""
        if isinstance(other, Point):
            return (compare(self.xmin, other.x, oom, rm) <= 0
                    and compare(other.x, self.xmax, oom, rm) <= 0
                    and compare(self.ymin, other.y, oom, rm) <= 0
                    and compare(other.y, self.ymax, oom, rm) <= 0
                    and compare(self.zmin, other.z, oom, rm) <= 0
                    and compare(other.z, self.zmax, oom, rm) <= 0)
        return not self.is_beyond(other, oom, rm)

    def contains(self, other, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """``other`` (box, point or shape) lies within the box, boundaries included"""
        if isinstance(other, Point):
            return self.intersects(other, oom, rm)
        if isinstance(other, AABB):
            return (compare(self.xmin, other.xmin, oom, rm) <= 0
                    and compare(other.xmax, self.xmax, oom, rm) <= 0
                    and compare(self.ymin, other.ymin, oom, rm) <= 0
                    and compare(other.ymax, self.ymax, oom, rm) <= 0
                    and compare(self.zmin, other.zmin, oom, rm) <= 0
                    and compare(other.zmax, self.zmax, oom, rm) <= 0)
        return all(self.intersects(p, oom, rm) for p in _corners_of(other))

    def get_intersect(self, other: "AABB", oom: int,
                      rm: RoundingMode = HALF_UP) -> Optional["AABB"]:
        """overlap of two boxes, or ``None``"""
        if not self.intersects(other, oom, rm):
            return None
        lo = [max(a, b) for a, b in zip(self.bounds()[0::2], other.bounds()[0::2])]
        hi = [min(a, b) for a, b in zip(self.bounds()[1::2], other.bounds()[1::2])]
        # boxes that touch within rounding may have lo slightly above hi
        hi = [max(l, h) for l, h in zip(lo, hi)]
        return AABB(lo[0], hi[0], lo[1], hi[1], lo[2], hi[2])

    ## viewing

    def get_viewport(self, pt: Point, v: Vector, oom: int,
                     rm: RoundingMode = HALF_UP) -> Rectangle:
        """Rectangle framing the box as seen from ``pt``.

        The view axis runs from ``pt`` to the centroid; ``v`` gives the
        up direction and must not be parallel to the view axis.  The
        rectangle lies in the plane, perpendicular to the view axis,
        through the corner nearest the viewer.  Its corners are, in
        order, (down, left), (down, right), (up, right), (up, left)
        where right is the view axis crossed with ``v``.
        """
        cv = self.centroid() - pt
        if cv.is_zero():
            raise InvalidGeometryError("viewpoint is at the centre of the box")
        side = cv.cross(v)
        if side.is_zero():
            raise InvalidGeometryError("up vector is parallel to the view axis",
                                       {"v": v})
        corners = self.corners()
        near = min(corners, key=lambda c: (c - pt).dot(cv))
        depth = (near - pt).dot(cv)
        if depth <= 0:
            raise InvalidGeometryError("viewpoint is not in front of the box",
                                       {"pt": pt})
        # no corner is nearer than near, so each ray from pt meets the screen
        projected = [pt + (c - pt) * (depth / (c - pt).dot(cv)) for c in corners]
        up = v - cv * (v.dot(cv) / cv.magnitude_squared())
        uu = up.magnitude_squared()
        ss = side.magnitude_squared()
        a = [(c - near).dot(up) for c in projected]
        b = [(c - near).dot(side) for c in projected]

        def at(ea, eb):
            return near + up * (ea / uu) + side * (eb / ss)

        lo_a, hi_a, lo_b, hi_b = min(a), max(a), min(b), max(b)
        log.debug("viewport from %r spans %s x %s", pt, hi_a - lo_a, hi_b - lo_b)
        return Rectangle(at(lo_a, lo_b), at(lo_a, hi_b), at(hi_a, hi_b), at(hi_a, lo_b))


def _corners_of(geometry):
    if isinstance(geometry, (list, tuple)):
        return geometry
    from ratgeom.line import LineSegment
    if isinstance(geometry, LineSegment):
        return geometry.endpoints()
    return geometry.points()


__all__ = ["AABB"]
