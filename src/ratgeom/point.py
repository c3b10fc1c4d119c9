## points for ratgeom
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

"""exact rational points

A :class:`Point` is stored in two parts, an ``offset`` vector and a
``rel`` (relative) vector; its position is ``offset + rel``.  The split
lets a group of points share a translated frame without touching the
relative part, and :meth:`Point.set_offset` re-expresses a point in a
new frame without moving it.

``translate`` and ``rotate`` return new points.  ``set_offset`` and
``set_rel`` are the only in-place operations and never change the
position.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Iterable, List

from ratgeom.precision import HALF_UP, RoundingMode, format_rational, round_to, sqrt
from ratgeom.vector import Vector


class Point:
    """A position in 3 space."""

    __slots__ = ("offset", "rel")

    def __init__(self, x=0, y=0, z=0):
        if isinstance(x, Point):
            self.offset = x.offset
            self.rel = x.rel
            return
        self.offset = Vector.ZERO
        self.rel = Vector(x) if isinstance(x, Vector) else Vector(x, y, z)

    @classmethod
    def from_vectors(cls, offset: Vector, rel: Vector) -> "Point":
        p = cls.__new__(cls)
        p.offset = offset
        p.rel = rel
        return p

    def copy(self) -> "Point":
        return Point.from_vectors(self.offset, self.rel)

    def effective_position(self) -> Vector:
        """absolute position as a vector from the origin"""
        return self.offset + self.rel

    @property
    def x(self) -> Fraction:
        return self.offset.dx + self.rel.dx

    @property
    def y(self) -> Fraction:
        return self.offset.dy + self.rel.dy

    @property
    def z(self) -> Fraction:
        return self.offset.dz + self.rel.dz

    def get_x(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return round_to(self.x, oom, rm)

    def get_y(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return round_to(self.y, oom, rm)

    def get_z(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return round_to(self.z, oom, rm)

    ## comparison and display

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return self.effective_position() == other.effective_position()

    def __hash__(self):
        return hash(self.effective_position())

    def __repr__(self):
        return "Point(x={}, y={}, z={})".format(
            format_rational(self.x), format_rational(self.y), format_rational(self.z))

    def to_string(self, oom: int, rm: RoundingMode = HALF_UP) -> str:
        return "Point(x={}, y={}, z={})".format(
            format_rational(self.get_x(oom, rm)),
            format_rational(self.get_y(oom, rm)),
            format_rational(self.get_z(oom, rm)))

    def equals(self, other: "Point", oom: int, rm: RoundingMode = HALF_UP) -> bool:
        """``True`` if the positions differ by nothing at ``(oom, rm)``."""
        return self.effective_position().equals(other.effective_position(), oom, rm)

    def is_origin(self, oom: int | None = None, rm: RoundingMode = HALF_UP) -> bool:
        return self.effective_position().is_zero(oom, rm)

    ## arithmetic

    def __add__(self, v):
        if not isinstance(v, Vector):
            return NotImplemented
        return self.translate(v)

    def __sub__(self, other):
        """``p - q`` is the vector from ``q`` to ``p``; ``p - v`` a point"""
        if isinstance(other, Point):
            return self.effective_position() - other.effective_position()
        if isinstance(other, Vector):
            return self.translate(-other)
        return NotImplemented

    def distance_squared(self, p: "Point") -> Fraction:
        return (self - p).magnitude_squared()

    def distance(self, p: "Point", oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        """euclidean distance to ``p`` rounded to ``(oom, rm)``"""
        return sqrt(self.distance_squared(p), oom, rm)

    ## transformation

    def translate(self, v: Vector) -> "Point":
        """new point moved by ``v``; only the offset changes"""
        return Point.from_vectors(self.offset + v, self.rel)

    def set_offset(self, offset: Vector) -> None:
        """Re-express the point relative to ``offset`` without moving it."""
        self.rel = self.rel + (self.offset - offset)
        self.offset = offset

    def set_rel(self, rel: Vector) -> None:
        """Replace the relative part, adjusting the offset to keep position."""
        self.offset = self.offset + (self.rel - rel)
        self.rel = rel

    def rotate(self, axis_line, axis_vector: Vector, pi, theta, oom: int,
               rm: RoundingMode = HALF_UP) -> "Point":
        """Rotate about the axis through ``axis_line.p`` along ``axis_vector``.

        The offset is kept and the relative part replaced, so the
        result is expressed in the same frame as ``self``.
        """
        origin = axis_line.p.effective_position()
        moved = (self.effective_position() - origin).rotate(
            axis_vector, pi, theta, oom, rm)
        return Point.from_vectors(self.offset, moved + origin - self.offset)

    ## queries

    def is_between(self, a: "Point", b: "Point", oom: int,
                   rm: RoundingMode = HALF_UP) -> bool:
        """Is the point in the slab between the planes through ``a`` and
        ``b`` that are perpendicular to ``ab``?"""
        ab = b - a
        if ab.is_zero():
            return self.equals(a, oom, rm)
        return (round_to((self - a).dot(ab), oom, rm) >= 0
                and round_to((self - b).dot(-ab), oom, rm) >= 0)

    def aabb(self, oom: int):
        from ratgeom.aabb import AABB
        return AABB.from_points([self], oom)

    @staticmethod
    def unique(points: Iterable["Point"], oom: int,
               rm: RoundingMode = HALF_UP) -> List["Point"]:
        """Points with duplicates at ``(oom, rm)`` removed, first kept."""
        result: List[Point] = []
        for p in points:
            if not any(p.equals(q, oom, rm) for q in result):
                result.append(p)
        return result


Point.ORIGIN = Point(0, 0, 0)

__all__ = ["Point"]
