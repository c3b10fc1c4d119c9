## convex planar areas for ratgeom
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

"""convex planar polygons as triangle fans"""

from __future__ import annotations

from fractions import Fraction
from typing import List, Sequence, Tuple

from ratgeom.errors import InvalidGeometryError
from ratgeom.line import Line, LineSegment
from ratgeom.plane import Plane
from ratgeom.point import Point
from ratgeom.points import convex_hull, merge
from ratgeom.precision import HALF_UP, RoundingMode, is_zero, round_to, sign, sqrt
from ratgeom.triangle import Triangle
from ratgeom.vector import Vector

## guard digits for sums of rounded lengths and areas
GUARD = 3


class ConvexArea:
    """A convex polygon held as a fan of triangles sharing its first corner.

    ``corners`` lists the polygon counter-clockwise about the normal of
    the first triangle.
    """

    __slots__ = ("corners", "triangles", "pl")

    def __init__(self, *corners: Point, oom: int | None = None,
                 rm: RoundingMode = HALF_UP):
        """Corners are checked to be coplanar and convex, exactly or at
        ``(oom, rm)`` when given."""
        if len(corners) < 3:
            raise InvalidGeometryError("a convex area needs at least three corners")
        self._build(corners)
        if not self._is_convex(oom, rm):
            raise InvalidGeometryError("corners do not form a convex planar polygon",
                                       {"corners": self.corners})

    def _build(self, corners: Sequence[Point]) -> None:
        self.corners: Tuple[Point, ...] = tuple(corners)
        first = self.corners[0]
        self.triangles: Tuple[Triangle, ...] = tuple(
            Triangle(first, a, b)
            for a, b in zip(self.corners[1:-1], self.corners[2:]))
        self.pl = Plane(self.triangles[0].pl.p, self.triangles[0].pl.n)

    @classmethod
    def _unchecked(cls, corners: Sequence[Point]) -> "ConvexArea":
        area = cls.__new__(cls)
        area._build(corners)
        return area

    def _is_convex(self, oom: int | None, rm: RoundingMode) -> bool:
        """every corner on the plane, every turn and fan triangle counter-clockwise"""
        w = self.triangles[0].winding_normal()
        first = self.corners[0]

        def zero(x):
            return x == 0 if oom is None else is_zero(x, oom, rm)

        def positive(x):
            return x > 0 if oom is None else sign(x, oom, rm) >= 0

        if not all(zero(w.dot(c - first)) for c in self.corners):
            return False
        n = len(self.corners)
        for i in range(n):
            a, b, c = self.corners[i - 1], self.corners[i], self.corners[(i + 1) % n]
            if not positive((b - a).cross(c - b).dot(w)):
                return False
        return all(positive(t.winding_normal().dot(w)) for t in self.triangles)

    @classmethod
    def from_hull(cls, hull: Sequence[Point]) -> "ConvexArea":
        """area from corners already in convex order, not checked again"""
        return cls._unchecked(hull)

    @classmethod
    def from_points(cls, points: Sequence[Point], oom: int,
                    rm: RoundingMode = HALF_UP, normal: Vector | None = None) -> "ConvexArea":
        """convex hull of coplanar ``points``"""
        from ratgeom.points import plane_of

        if normal is None:
            plane = plane_of(points, oom, rm)
            if plane is None:
                raise InvalidGeometryError("points are collinear")
            normal = plane.n
        hull = convex_hull(points, normal, oom, rm)
        return cls(*hull, oom=oom, rm=rm)

    def __eq__(self, other):
        if not isinstance(other, ConvexArea):
            return NotImplemented
        return self.corners == other.corners

    def __hash__(self):
        return hash(self.corners)

    def __repr__(self):
        return "ConvexArea({})".format(", ".join(repr(c) for c in self.corners))

    def points(self) -> Tuple[Point, ...]:
        return self.corners

    def edges(self) -> List[LineSegment]:
        n = len(self.corners)
        return [LineSegment(self.corners[i], self.corners[(i + 1) % n]) for i in range(n)]

    def equals(self, other, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """Same corner set, whatever the start corner and winding."""
        if not isinstance(other, ConvexArea):
            return False
        mine = Point.unique(self.corners, oom, rm)
        theirs = Point.unique(other.corners, oom, rm)
        if len(mine) != len(theirs):
            return False
        return all(any(a.equals(b, oom, rm) for b in theirs) for a in mine)

    def area(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return round_to(sum(t.area(oom - GUARD, rm) for t in self.triangles), oom, rm)

    def perimeter(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return round_to(sum(e.length(oom - GUARD, rm) for e in self.edges()), oom, rm)

    def aabb(self, oom: int):
        from ratgeom.aabb import AABB
        return AABB.from_points(self.corners, oom)

    def intersects(self, other, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        if isinstance(other, Point):
            return any(t.intersects(other, oom, rm) for t in self.triangles)
        return self.get_intersect(other, oom, rm) is not None

    def get_intersect(self, other, oom: int, rm: RoundingMode = HALF_UP):
        """Intersection with a point, linear object, plane or triangle."""
        if isinstance(other, Point):
            return other.copy() if self.intersects(other, oom, rm) else None
        if isinstance(other, Plane) and self.pl.equals_ignore_orientation(other, oom, rm):
            return ConvexArea._unchecked(self.corners)
        if isinstance(other, (Line, Plane, Triangle)):
            results = [t.get_intersect(other, oom, rm) for t in self.triangles]
        else:
            results = [other.get_intersect(t, oom, rm) for t in self.triangles]
        return merge(results, oom, rm, self.triangles[0].winding_normal())

    def distance_squared(self, other, oom: int | None = None,
                         rm: RoundingMode = HALF_UP) -> Fraction:
        d2 = min(t.distance_squared(other) for t in self.triangles)
        return d2 if oom is None else round_to(d2, oom, rm)

    def distance(self, other, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return sqrt(self.distance_squared(other), oom, rm)

    def translate(self, v: Vector) -> "ConvexArea":
        return ConvexArea._unchecked([c.translate(v) for c in self.corners])

    def rotate(self, axis_line: Line, axis_vector: Vector, pi, theta, oom: int,
               rm: RoundingMode = HALF_UP) -> "ConvexArea":
        return ConvexArea._unchecked([c.rotate(axis_line, axis_vector, pi, theta, oom, rm)
                                      for c in self.corners])


__all__ = ["ConvexArea"]
