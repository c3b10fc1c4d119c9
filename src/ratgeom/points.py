## point set utilities for ratgeom
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

"""point set utilities

Helpers shared by the intersection code of the planar and solid
shapes: collinear and coplanar tests over point sets, the convex hull
of coplanar points, and :func:`geometry_of`, which reduces a set of
points to the simplest geometry covering their convex hull
(a :class:`~ratgeom.point.Point`, :class:`~ratgeom.line.LineSegment`,
:class:`~ratgeom.triangle.Triangle` or
:class:`~ratgeom.convexarea.ConvexArea`).
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from ratgeom.line import Line, LineSegment
from ratgeom.point import Point
from ratgeom.precision import HALF_UP, RoundingMode, sign
from ratgeom.vector import Vector


def unique(points: Iterable[Point], oom: int, rm: RoundingMode = HALF_UP) -> List[Point]:
    return Point.unique(points, oom, rm)


def is_collinear(points: Sequence[Point], oom: int, rm: RoundingMode = HALF_UP) -> bool:
    return Line.is_collinear(oom, rm, *points)


def plane_of(points: Sequence[Point], oom: int, rm: RoundingMode = HALF_UP):
    """Plane through the first non-collinear triple, or ``None``."""
    from ratgeom.plane import Plane

    pts = unique(points, oom, rm)
    if len(pts) < 3:
        return None
    p0, p1 = pts[0], pts[1]
    for p2 in pts[2:]:
        n = (p1 - p0).cross(p2 - p0)
        if not n.is_zero(oom, rm):
            return Plane(p0, n)
    return None


def is_coplanar(points: Sequence[Point], oom: int, rm: RoundingMode = HALF_UP) -> bool:
    plane = plane_of(points, oom, rm)
    if plane is None:
        return True
    return all(plane.intersects(p, oom, rm) for p in points)


def extreme_pair(points: Sequence[Point]) -> Tuple[Point, Point]:
    """the two points furthest apart along the line through collinear ``points``"""
    base = points[0]
    d = None
    for p in points[1:]:
        if p != base:
            d = p - base
            break
    if d is None:
        return base, base
    ordered = sorted(points, key=lambda p: (p - base).dot(d))
    return ordered[0], ordered[-1]


def _projector(normal: Vector):
    """2D coordinates in the plane of the dominant normal axis, and
    whether the resulting order must be reversed to run
    counter-clockwise about ``normal``"""
    ax, ay, az = abs(normal.dx), abs(normal.dy), abs(normal.dz)
    if az >= ax and az >= ay:
        return (lambda p: (p.x, p.y)), normal.dz < 0
    if ax >= ay:
        return (lambda p: (p.y, p.z)), normal.dx < 0
    return (lambda p: (p.z, p.x)), normal.dy < 0


def convex_hull(points: Sequence[Point], normal: Vector, oom: int,
                rm: RoundingMode = HALF_UP) -> List[Point]:
    """Convex hull of coplanar points, counter-clockwise about ``normal``.

    Points on hull edges (at ``(oom, rm)``) are dropped.  Uses the
    monotone chain algorithm on a projection of the points.
    """
    project, flip = _projector(normal)
    pts = sorted(unique(points, oom, rm), key=project)
    if len(pts) < 3:
        return list(pts)

    def turn(o, a, b):
        (ou, ov), (au, av), (bu, bv) = project(o), project(a), project(b)
        return sign((au - ou) * (bv - ov) - (av - ov) * (bu - ou), oom, rm)

    lower: List[Point] = []
    for p in pts:
        while len(lower) >= 2 and turn(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)
    upper: List[Point] = []
    for p in reversed(pts):
        while len(upper) >= 2 and turn(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)
    hull = lower[:-1] + upper[:-1]
    if flip:
        hull.reverse()
    return hull


def vertices_of(geometry) -> List[Point]:
    """corner points of a point, segment or planar shape"""
    if geometry is None:
        return []
    if isinstance(geometry, Point):
        return [geometry]
    if isinstance(geometry, LineSegment):
        return [geometry.p, geometry.q]
    return list(geometry.points())


def geometry_of(points: Iterable[Point], oom: int, rm: RoundingMode = HALF_UP,
                normal: Optional[Vector] = None):
    """Simplest geometry spanning the convex hull of coplanar ``points``.

    ``None`` for no points, then a point, a segment, a triangle or a
    convex area.  ``normal`` fixes the winding of planar results.
    """
    from ratgeom.convexarea import ConvexArea
    from ratgeom.triangle import Triangle

    pts = unique(points, oom, rm)
    if not pts:
        return None
    if len(pts) == 1:
        return pts[0]
    if is_collinear(pts, oom, rm):
        a, b = extreme_pair(pts)
        return LineSegment(a, b)
    if normal is None:
        normal = plane_of(pts, oom, rm).n
    hull = convex_hull(pts, normal, oom, rm)
    if len(hull) < 3:
        a, b = extreme_pair(pts)
        return LineSegment(a, b)
    if len(hull) == 3:
        return Triangle(*hull)
    return ConvexArea.from_hull(hull)


def merge(results: Iterable, oom: int, rm: RoundingMode = HALF_UP,
          normal: Optional[Vector] = None):
    """Union of intersection results that together form one convex piece."""
    pts: List[Point] = []
    for r in results:
        pts.extend(vertices_of(r))
    return geometry_of(pts, oom, rm, normal)


__all__ = [
    "convex_hull",
    "extreme_pair",
    "geometry_of",
    "is_collinear",
    "is_coplanar",
    "merge",
    "plane_of",
    "unique",
    "vertices_of",
]
