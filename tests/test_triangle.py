from fractions import Fraction

import pytest

from ratgeom.convexarea import ConvexArea
from ratgeom.errors import InvalidGeometryError
from ratgeom.line import Line, LineSegment, Ray
from ratgeom.plane import Plane
from ratgeom.point import Point
from ratgeom.points import vertices_of
from ratgeom.triangle import Triangle
from ratgeom.vector import Vector

F = Fraction
OOM = -3


def P(x, y, z):
    return Point(x, y, z)


@pytest.fixture
def tri():
    return Triangle(P(0, 0, 0), P(2, 0, 0), P(0, 2, 0))


class TestConstruction:

    def test_collinear(self):
        with pytest.raises(InvalidGeometryError):
            Triangle(P(0, 0, 0), P(1, 1, 1), P(2, 2, 2))

    def test_plane_follows_winding(self, tri):
        assert tri.pl.n == Vector(0, 0, 4)
        assert tri.winding_normal() == Vector(0, 0, 4)
        flipped = Triangle(tri.p, tri.r, tri.q)
        assert flipped.pl.n == Vector(0, 0, -4)

    def test_from_plane(self):
        pl = Plane(P(0, 0, 0), -Vector.K)
        t = Triangle.from_plane(pl, P(0, 0, 0), P(1, 0, 0), P(0, 1, 0), OOM)
        assert t.pl.n == -Vector.K
        assert t.pl is not pl
        with pytest.raises(InvalidGeometryError):
            Triangle.from_plane(pl, P(0, 0, 0), P(1, 0, 0), P(0, 1, 1), OOM)

    def test_structure(self, tri):
        assert tri.points() == (P(0, 0, 0), P(2, 0, 0), P(0, 2, 0))
        assert tri.pq == LineSegment(P(0, 0, 0), P(2, 0, 0))
        assert len(tri.edges()) == 3
        assert tri.get_opposite(tri.pq) == tri.r
        assert tri.get_opposite(tri.qr) == tri.p
        with pytest.raises(InvalidGeometryError):
            tri.get_opposite(LineSegment(P(5, 5, 5), P(6, 6, 6)))

    def test_equals_ignores_order(self, tri):
        assert tri.equals(Triangle(tri.r, tri.p, tri.q), OOM)
        assert not tri.equals(Triangle(P(0, 0, 0), P(2, 0, 0), P(0, 3, 0)), OOM)


class TestMeasures:

    def test_area_and_perimeter(self, tri):
        assert tri.area(OOM) == 2
        assert tri.perimeter(OOM) == F(6828, 1000)

    def test_centroid(self, tri):
        assert tri.centroid() == P(F(2, 3), F(2, 3), 0)

    def test_aabb(self, tri):
        assert tri.aabb(OOM).bounds() == (0, 2, 0, 2, 0, 0)


class TestContainment:

    def test_contains_is_strict(self):
        t = Triangle(P(0, 0, 0), P(1, 0, 0), P(1, 1, 0))
        assert t.contains(P(F(3, 4), F(1, 2), 0), OOM)
        for corner in t.points():
            assert not t.contains(corner, OOM)
            assert t.intersects(corner, OOM)
        for edge in t.edges():
            assert not t.contains(edge.midpoint(), OOM)
            assert t.intersects(edge.midpoint(), OOM)
        assert not t.contains(P(F(3, 4), F(1, 2), 1), OOM)
        assert not t.intersects(P(2, 2, 0), OOM)

    def test_contains_shapes(self, tri):
        inner = Triangle(P("0.1", "0.1", 0), P(1, "0.1", 0), P("0.1", 1, 0))
        assert tri.contains(inner, OOM)
        assert not inner.contains(tri, OOM)
        assert tri.contains(LineSegment(P("0.5", "0.5", 0), P(1, "0.5", 0)), OOM)
        assert not tri.contains(tri.pq, OOM)
        with pytest.raises(TypeError):
            tri.contains(Plane.Z0, OOM)


class TestPlaneIntersection:

    def test_touching_corner(self):
        t = Triangle(P(0, 0, 0), P(1, 1, 0), P(2, 0, 0))
        assert t.get_intersect(Plane.X0, OOM) == P(0, 0, 0)

    def test_cut_through(self):
        t = Triangle(P(0, 0, 0), P(1, 1, 0), P(2, 0, 0))
        s = t.get_intersect(Plane.X0.translate(Vector.I), OOM)
        assert isinstance(s, LineSegment)
        assert s.equals_ignore_direction(LineSegment(P(1, 0, 0), P(1, 1, 0)), OOM)

    def test_plane_delegates(self):
        t = Triangle(P(0, 0, 0), P(1, 1, 0), P(2, 0, 0))
        assert Plane.X0.get_intersect(t, OOM) == P(0, 0, 0)

    def test_coincident_and_parallel(self, tri):
        same = tri.get_intersect(Plane.Z0, OOM)
        assert isinstance(same, Triangle)
        assert same.equals(tri, OOM)
        assert tri.get_intersect(Plane.Z0.translate(Vector.K), OOM) is None
        assert not tri.intersects(Plane(P(0, 0, -1), Vector(1, 1, 1)), OOM)


class TestLinearIntersection:

    def test_piercing_line(self, tri):
        line = Line(P(F(1, 2), F(1, 2), 5), Vector.K)
        assert tri.get_intersect(line, OOM) == P(F(1, 2), F(1, 2), 0)
        assert line.get_intersect(tri, OOM) == P(F(1, 2), F(1, 2), 0)
        assert tri.get_intersect(Line(P(3, 3, 5), Vector.K), OOM) is None

    def test_short_segment_misses(self, tri):
        s = LineSegment(P(F(1, 2), F(1, 2), 5), P(F(1, 2), F(1, 2), 1))
        assert tri.get_intersect(s, OOM) is None

    def test_parallel_line(self, tri):
        assert tri.get_intersect(Line(P(0, 0, 1), Vector.I), OOM) is None

    def test_coplanar_line_is_clipped(self, tri):
        result = tri.get_intersect(Line(P(0, 1, 0), Vector.I), OOM)
        assert isinstance(result, LineSegment)
        assert result.equals_ignore_direction(LineSegment(P(0, 1, 0), P(1, 1, 0)), OOM)

    def test_coplanar_ray_from_inside(self, tri):
        result = tri.get_intersect(Ray(P(F(1, 2), F(1, 2), 0), Vector.I), OOM)
        assert result.equals(LineSegment(P(F(1, 2), F(1, 2), 0), P(F(3, 2), F(1, 2), 0)), OOM)

    def test_coplanar_line_through_corner(self, tri):
        result = tri.get_intersect(Line(P(2, -1, 0), Vector.J), OOM)
        assert result == P(2, 0, 0)

    def test_coplanar_line_outside(self, tri):
        assert tri.get_intersect(Line(P(0, 3, 0), Vector.I), OOM) is None


class TestTriangleIntersection:

    def test_coplanar_overlap(self):
        a = Triangle(P(1, 0, 0), P(3, 0, 0), P(3, 2, 0))
        b = Triangle(P(2, -3, 0), P(6, 1, 0), P(2, 5, 0))
        result = a.get_intersect(b, OOM)
        assert isinstance(result, ConvexArea)
        expected = ConvexArea(P(2, 0, 0), P(3, 0, 0), P(3, 2, 0), P(2, 1, 0))
        assert result.equals(expected, OOM)
        assert b.get_intersect(a, OOM).equals(expected, OOM)

    def test_coplanar_containment(self, tri):
        inner = Triangle(P("0.1", "0.1", 0), P(1, "0.1", 0), P("0.1", 1, 0))
        assert tri.get_intersect(inner, OOM).equals(inner, OOM)
        assert inner.get_intersect(tri, OOM).equals(inner, OOM)

    def test_coplanar_touching_corner(self, tri):
        other = Triangle(P(2, 0, 0), P(4, 0, 0), P(2, 2, 0))
        assert tri.get_intersect(other, OOM) == P(2, 0, 0)

    def test_nearly_coplanar_overlap(self, tri):
        tilted = Triangle(P(0, 0, 0), P(4, 0, 0), P(0, 4, F(1, 10000)))
        result = tri.get_intersect(tilted, OOM)
        assert isinstance(result, Triangle)
        assert result.equals(tri, OOM)

    def test_tiny_triangle_against_nearly_coplanar_one(self):
        small = Triangle(P(0, 0, 0), P(F(1, 100), 0, 0), P(0, F(1, 100), 0))
        big = Triangle(P(0, 0, 0), P(1000, 0, 0), P(0, 1000, 4))
        result = small.get_intersect(big, OOM)
        assert result is not None
        for c in vertices_of(result):
            assert 0 <= c.x <= F(1, 100)
            assert 0 <= c.y <= F(1, 100)

    def test_coplanar_apart(self, tri):
        other = tri.translate(Vector(5, 0, 0))
        assert tri.get_intersect(other, OOM) is None
        assert not tri.intersects(other, OOM)

    def test_crossing(self, tri):
        upright = Triangle(P(-1, F(1, 2), -1), P(3, F(1, 2), -1), P(1, F(1, 2), 1))
        result = tri.get_intersect(upright, OOM)
        assert isinstance(result, LineSegment)
        expected = LineSegment(P(0, F(1, 2), 0), P(F(3, 2), F(1, 2), 0))
        assert result.equals_ignore_direction(expected, OOM)

    def test_stacked(self, tri):
        assert tri.get_intersect(tri.translate(Vector.K), OOM) is None


class TestDistance:

    def test_points(self, tri):
        assert tri.distance(P(0, 0, 3), OOM) == 3
        assert tri.distance_squared(P(3, 3, 0)) == 8
        assert tri.distance(P(-3, 0, -4), OOM) == 5
        assert tri.distance(P(F(1, 2), F(1, 2), 0), OOM) == 0

    def test_planes(self, tri):
        assert tri.distance(Plane(P(0, 0, -2), Vector.K), OOM) == 2
        assert tri.distance(Plane.X0, OOM) == 0

    def test_lines(self, tri):
        assert tri.distance(Line(P(0, 0, 4), Vector.I), OOM) == 4
        assert tri.distance(Line(P(F(1, 2), F(1, 2), 4), Vector.K), OOM) == 0
        s = LineSegment(P(F(1, 2), F(1, 2), 4), P(F(1, 2), F(1, 2), 1))
        assert tri.distance_squared(s) == 1

    def test_triangles(self, tri):
        assert tri.distance_squared(tri.translate(Vector(0, 0, 5))) == 25
        assert tri.distance(tri.translate(Vector(1, 0, 0)), OOM) == 0


class TestTransform:

    def test_translate(self, tri):
        moved = tri.translate(Vector(1, 1, 1))
        assert moved.points() == (P(1, 1, 1), P(3, 1, 1), P(1, 3, 1))
        assert tri.p == P(0, 0, 0)

    def test_rotate(self, tri, pi):
        axis = Line(P(0, 0, 0), Vector.K)
        turned = tri.rotate(axis, Vector.K, pi, pi.get_pi(-6) / 2, OOM)
        assert turned.equals(Triangle(P(0, 0, 0), P(0, 2, 0), P(-2, 0, 0)), OOM)
