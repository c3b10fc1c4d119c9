## tetrahedra for ratgeom
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

"""tetrahedra

A :class:`Tetrahedron` is four non-coplanar corners ``p, q, r, s`` with
the triangular faces ``pqr``, ``qsr``, ``spr`` and ``psq``.  A point is
inside when, for every face, it is on the same side of the face plane
as the corner opposite that face (or on the plane itself).

Intersections collect the partial results of every face, add the
corners of the other operand that lie inside the solid, and reduce the
collected points to a point, segment, triangle or convex area.
"""

from __future__ import annotations

import itertools
import logging
import math
from fractions import Fraction
from typing import List, Sequence, Tuple

from ratgeom.convexarea import ConvexArea
from ratgeom.errors import InvalidGeometryError
from ratgeom.line import Line, LineSegment
from ratgeom.plane import Plane
from ratgeom.point import Point
from ratgeom.points import convex_hull, geometry_of, is_coplanar, merge, unique, vertices_of
from ratgeom.precision import HALF_UP, RoundingMode, round_to, sqrt
from ratgeom.rectangle import Rectangle
from ratgeom.triangle import Triangle
from ratgeom.vector import Vector

log = logging.getLogger(__name__)

GUARD = 3


class Tetrahedron:
    """A tetrahedron with corners ``p``, ``q``, ``r`` and ``s``."""

    __slots__ = ("p", "q", "r", "s")

    def __init__(self, p: Point, q: Point, r: Point, s: Point):
        if _triple(p, q, r, s) == 0:
            raise InvalidGeometryError("tetrahedron corners are coplanar",
                                       {"p": p, "q": q, "r": r, "s": s})
        self.p = p
        self.q = q
        self.r = r
        self.s = s

    def __eq__(self, other):
        if not isinstance(other, Tetrahedron):
            return NotImplemented
        return self.points() == other.points()

    def __hash__(self):
        return hash(self.points())

    def __repr__(self):
        return "Tetrahedron(p={!r}, q={!r}, r={!r}, s={!r})".format(*self.points())

    def to_string(self, oom: int, rm: RoundingMode = HALF_UP) -> str:
        return "Tetrahedron(p={}, q={}, r={}, s={})".format(
            *(c.to_string(oom, rm) for c in self.points()))

    def points(self) -> Tuple[Point, Point, Point, Point]:
        return (self.p, self.q, self.r, self.s)

    def edges(self) -> Tuple[LineSegment, ...]:
        p, q, r, s = self.points()
        return (LineSegment(p, q), LineSegment(p, r), LineSegment(p, s),
                LineSegment(q, r), LineSegment(q, s), LineSegment(r, s))

    def equals(self, other: "Tetrahedron", oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """same corners in any order"""
        if not isinstance(other, Tetrahedron):
            return False
        mine, theirs = self.points(), other.points()
        return (all(any(a.equals(b, oom, rm) for b in theirs) for a in mine)
                and all(any(b.equals(a, oom, rm) for a in mine) for b in theirs))

    ## faces

    @property
    def pqr(self) -> Triangle:
        return Triangle(self.p, self.q, self.r)

    @property
    def qsr(self) -> Triangle:
        return Triangle(self.q, self.s, self.r)

    @property
    def spr(self) -> Triangle:
        return Triangle(self.s, self.p, self.r)

    @property
    def psq(self) -> Triangle:
        return Triangle(self.p, self.s, self.q)

    def faces(self) -> Tuple[Triangle, Triangle, Triangle, Triangle]:
        return (self.pqr, self.qsr, self.spr, self.psq)

    def _faces_and_opposites(self) -> List[Tuple[Triangle, Point]]:
        return list(zip(self.faces(), (self.s, self.p, self.q, self.r)))

    ## measures

    def volume(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return round_to(abs(_triple(*self.points())) / 6, oom, rm)

    def area(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        """total surface area"""
        return round_to(sum(f.area(oom - GUARD, rm) for f in self.faces()), oom, rm)

    def centroid(self) -> Point:
        total = Vector.ZERO
        for c in self.points():
            total = total + c.effective_position()
        return Point(total / 4)

    def aabb(self, oom: int):
        from ratgeom.aabb import AABB
        return AABB.from_points(self.points(), oom)

    ## point classification

    def intersects(self, other, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """``True`` if ``other`` (point or geometry) meets the closed solid"""
        if isinstance(other, Point):
            for face, opposite in self._faces_and_opposites():
                side = face.pl.side(other, oom, rm)
                if side != 0 and side != _exact_side(face, opposite):
                    return False
            return True
        return self.get_intersect(other, oom, rm) is not None

    is_intersected_by = intersects

    def contains(self, pt: Point, oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """``True`` if ``pt`` is strictly inside"""
        return all(face.pl.side(pt, oom, rm) == _exact_side(face, opposite)
                   for face, opposite in self._faces_and_opposites())

    def _covers(self, pt: Point) -> bool:
        for face, opposite in self._faces_and_opposites():
            side = _exact_side(face, pt)
            if side != 0 and side != _exact_side(face, opposite):
                return False
        return True

    ## intersection

    def get_intersect(self, other, oom: int, rm: RoundingMode = HALF_UP):
        """Intersection with a point, linear object, plane, planar shape
        or another tetrahedron.

        Two tetrahedra sharing a volume give a :class:`Tetrahedron` when
        the shared solid has four corners, otherwise a tuple of
        tetrahedra that together fill it.
        """
        if isinstance(other, Point):
            return other.copy() if self.intersects(other, oom, rm) else None
        if isinstance(other, Plane):
            for face in self.faces():
                if face.pl.equals_ignore_orientation(other, oom, rm):
                    log.debug("%r lies in the plane of a face", other)
                    return face
            pts: List[Point] = []
            for face in self.faces():
                pts.extend(vertices_of(face.get_intersect(other, oom, rm)))
            return geometry_of(pts, oom, rm, other.n)
        if isinstance(other, Line):
            pts = []
            for face in self.faces():
                pts.extend(vertices_of(face.get_intersect(other, oom, rm)))
            for t in other._bounds():
                if math.isfinite(t):
                    end = other.point_at(t)
                    if self.intersects(end, oom, rm):
                        pts.append(end)
            return geometry_of(pts, oom, rm)
        if isinstance(other, Triangle):
            pts = []
            for face in self.faces():
                pts.extend(vertices_of(face.get_intersect(other, oom, rm)))
            pts.extend(c for c in other.points() if self.intersects(c, oom, rm))
            return geometry_of(pts, oom, rm, other.winding_normal())
        if isinstance(other, (Rectangle, ConvexArea)):
            tris = other.triangles
            return merge([self.get_intersect(t, oom, rm) for t in tris], oom, rm,
                         tris[0].winding_normal())
        if isinstance(other, Tetrahedron):
            return self._intersect_tetrahedron(other, oom, rm)
        raise TypeError(f"cannot intersect a tetrahedron with {type(other).__name__}")

    def _intersect_tetrahedron(self, other: "Tetrahedron", oom: int, rm: RoundingMode):
        if not self.aabb(oom).intersects(other.aabb(oom), oom, rm):
            log.debug("bounding boxes of %r and %r are apart", self, other)
            return None
        pts = [c for c in other.points() if self.intersects(c, oom, rm)]
        pts.extend(c for c in self.points() if other.intersects(c, oom, rm))
        for a, b in ((self, other), (other, self)):
            for edge in a.edges():
                for face in b.faces():
                    pts.extend(vertices_of(face.get_intersect(edge, oom, rm)))
        pts = unique(pts, oom, rm)
        if not pts:
            return None
        if is_coplanar(pts, oom, rm):
            return geometry_of(pts, oom, rm)
        faces = _hull_faces(pts, oom, rm)
        corners = unique([c for _, loop in faces for c in loop], oom, rm)
        if len(corners) == 4:
            return Tetrahedron(*corners)
        apex = corners[0]
        parts = []
        for n, loop in faces:
            if n.dot(apex - loop[0]) == 0:
                continue
            for a, b in zip(loop[1:-1], loop[2:]):
                parts.append(Tetrahedron(apex, loop[0], a, b))
        log.debug("shared solid has %d corners in %d pieces", len(corners), len(parts))
        return tuple(parts)

    ## distance

    def distance_squared(self, other, oom: int | None = None,
                         rm: RoundingMode = HALF_UP) -> Fraction:
        """Squared distance to a point, linear object, plane, planar
        shape or tetrahedron, zero where they meet.

        Exact when ``oom`` is ``None``.
        """
        if isinstance(other, Point):
            if self._covers(other):
                d2 = Fraction(0)
            else:
                d2 = min(f.distance_squared(other) for f in self.faces())
        elif isinstance(other, Line):
            ends = [other.point_at(t) for t in other._bounds() if math.isfinite(t)]
            if any(self._covers(e) for e in ends):
                d2 = Fraction(0)
            else:
                d2 = min(f.distance_squared(other) for f in self.faces())
        elif isinstance(other, Plane):
            heights = [other.n.dot(c - other.p) for c in self.points()]
            if min(heights) <= 0 <= max(heights):
                d2 = Fraction(0)
            else:
                d2 = min(other.distance_squared(c) for c in self.points())
        elif isinstance(other, Triangle):
            if any(self._covers(c) for c in other.points()):
                d2 = Fraction(0)
            else:
                d2 = min(f.distance_squared(other) for f in self.faces())
        elif isinstance(other, (Rectangle, ConvexArea)):
            d2 = min(self.distance_squared(t) for t in other.triangles)
        elif isinstance(other, Tetrahedron):
            if (any(self._covers(c) for c in other.points())
                    or any(other._covers(c) for c in self.points())):
                d2 = Fraction(0)
            else:
                d2 = min(other.distance_squared(f) for f in self.faces())
        else:
            raise TypeError(f"cannot measure from a tetrahedron to {type(other).__name__}")
        return d2 if oom is None else round_to(d2, oom, rm)

    def distance(self, other, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return sqrt(self.distance_squared(other), oom, rm)

    ## transformation

    def translate(self, v: Vector) -> "Tetrahedron":
        return Tetrahedron(*(c.translate(v) for c in self.points()))

    def rotate(self, axis_line: Line, axis_vector: Vector, pi, theta, oom: int,
               rm: RoundingMode = HALF_UP) -> "Tetrahedron":
        return Tetrahedron(*(c.rotate(axis_line, axis_vector, pi, theta, oom, rm)
                             for c in self.points()))


def _triple(p: Point, q: Point, r: Point, s: Point) -> Fraction:
    """six times the signed volume"""
    return (q - p).dot((r - p).cross(s - p))


def _exact_side(face: Triangle, pt: Point) -> int:
    h = face.pl.n.dot(pt - face.p)
    return (h > 0) - (h < 0)


def _hull_faces(pts: Sequence[Point], oom: int,
                rm: RoundingMode) -> List[Tuple[Vector, List[Point]]]:
    """Faces of the convex hull of non-coplanar points.

    Each face is its normal and its corners in convex order.  A plane
    through three of the points bounds the hull when no point lies
    strictly on both of its sides.
    """
    faces = []
    seen = set()
    for i, j, k in itertools.combinations(range(len(pts)), 3):
        n = (pts[j] - pts[i]).cross(pts[k] - pts[i])
        if n.is_zero():
            continue
        heights = [n.dot(p - pts[i]) for p in pts]
        if min(heights) < 0 < max(heights):
            continue
        on = frozenset(m for m, h in enumerate(heights) if h == 0)
        if on in seen:
            continue
        seen.add(on)
        loop = convex_hull([pts[m] for m in sorted(on)], n, oom, rm)
        if len(loop) >= 3:
            faces.append((n, loop))
    return faces


__all__ = ["Tetrahedron"]
