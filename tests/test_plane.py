from fractions import Fraction

import pytest

from ratgeom.errors import InvalidGeometryError
from ratgeom.line import Line, LineSegment, Ray
from ratgeom.plane import Plane
from ratgeom.point import Point
from ratgeom.precision import HALF_UP
from ratgeom.vector import Vector

OOM = -3
O = Point(0, 0, 0)


class TestConstruction:

    def test_from_points_keeps_winding(self):
        pl = Plane.from_points(O, Point(1, 0, 0), Point(0, 1, 0))
        assert pl.n == Vector.K
        pl = Plane.from_points(O, Point(0, 1, 0), Point(1, 0, 0))
        assert pl.n == -Vector.K

    def test_collinear_points(self):
        with pytest.raises(InvalidGeometryError):
            Plane.from_points(O, Point(1, 1, 1), Point(2, 2, 2))

    def test_zero_normal(self):
        with pytest.raises(InvalidGeometryError):
            Plane(O, Vector.ZERO)
        with pytest.raises(InvalidGeometryError):
            Plane.from_coefficients(0, 0, 0, 1)

    def test_from_coefficients(self):
        pl = Plane.from_coefficients(1, 0, 0, -2)
        assert pl.p == Point(2, 0, 0)
        assert pl.equation_coefficients() == (1, 0, 0, -2)

    def test_equation_string(self):
        pl = Plane.from_points(Point(1, -2, 1), Point(4, -2, -2), Point(4, 1, 4))
        assert pl.equation_string(OOM) == "9 * x + -18 * y + 9 * z + -54 = 0"
        pl = Plane.from_points(O, Point(1, 1, 1), Point(1, 0, 0))
        assert pl.equation_string(OOM) == "0 * x + 1 * y + -1 * z + 0 = 0"

    def test_canonical(self):
        assert Plane(O, -Vector.K).canonical().n == Vector.K
        assert Plane(O, -Vector.J).canonical().n == Vector.J
        assert Plane(O, -Vector.I).canonical().n == Vector.I
        assert Plane(O, Vector(1, -1, 0)).canonical().n == Vector(-1, 1, 0)
        assert Plane(O, Vector(-1, -1, 2)).canonical().n == Vector(-1, -1, 2)


class TestPointQueries:

    def test_side(self):
        assert Plane.Z0.side(Point(0, 0, 1), OOM) == 1
        assert Plane.Z0.side(Point(0, 0, -1), OOM) == -1
        assert Plane.Z0.side(Point(5, 5, "0.0001"), OOM) == 0
        assert Plane.Z0.is_on_same_side(Point(0, 0, 1), Point(3, 3, 0), OOM)
        assert not Plane.Z0.is_on_same_side(Point(0, 0, 1), Point(0, 0, -1), OOM)

    def test_intersects_point(self):
        assert Plane.Z0.intersects(Point(7, -2, 0), OOM)
        assert not Plane.Z0.intersects(Point(7, -2, 1), OOM)
        assert Plane.Z0.get_intersect(Point(1, 2, 0), OOM) == Point(1, 2, 0)
        assert Plane.Z0.get_intersect(Point(1, 2, 3), OOM) is None

    def test_projection(self):
        pl = Plane(Point(0, 0, 1), Vector(0, 0, 2))
        assert pl.point_of_projection(Point(3, 4, 7)) == Point(3, 4, 1)

    def test_point_distance(self):
        assert Plane.Z0.distance(Point(1, 2, -3), OOM) == 3
        diagonal = Plane(O, Vector(1, 1, 0))
        assert diagonal.distance_squared(Point(1, 1, 0)) == 2
        assert diagonal.distance(Point(1, 1, 0), OOM) == Fraction(1414, 1000)


class TestRelations:

    def test_parallel(self):
        assert Plane.Z0.is_parallel(Plane(Point(0, 0, 4), Vector(0, 0, -3)), OOM)
        assert not Plane.Z0.is_parallel(Plane.X0, OOM)
        assert Plane.Z0.is_parallel(Line(Point(0, 0, 1), Vector(1, 1, 0)), OOM)
        assert not Plane.Z0.is_parallel(Line(O, Vector(1, 0, 1)), OOM)

    def test_equals(self):
        other = Plane(Point(3, 3, 0), Vector(0, 0, 5))
        assert Plane.Z0.equals(other, OOM)
        assert not Plane.Z0.equals(Plane.Z0.reverse(), OOM)
        assert Plane.Z0.equals_ignore_orientation(Plane.Z0.reverse(), OOM)
        assert Plane.Z0.is_coincident(other, OOM)
        assert not Plane.Z0.equals(Plane(Point(0, 0, 1), Vector.K), OOM)

    def test_coplanar(self):
        pts = [O, Point(1, 0, 0), Point(0, 1, 0), Point(5, 5, 0)]
        assert Plane.is_coplanar(OOM, HALF_UP, *pts)
        assert not Plane.is_coplanar(OOM, HALF_UP, *pts, Point(1, 1, 1))
        assert Plane.is_coplanar(OOM, HALF_UP, O, Point(1, 1, 1), Point(2, 2, 2))
        assert Plane.Z0.is_coplanar_with(*pts, oom=OOM)


class TestDistance:

    def test_planes(self):
        assert Plane.Z0.distance(Plane(Point(1, 1, 5), -Vector.K), OOM) == 5
        assert Plane.Z0.distance(Plane.X0, OOM) == 0

    def test_lines(self):
        assert Plane.Z0.distance(Line(Point(0, 0, 2), Vector.I), OOM) == 2
        assert Plane.Z0.distance(Line(Point(0, 0, 2), Vector(1, 0, 1)), OOM) == 0
        assert Plane.Z0.distance(Ray(Point(0, 0, 2), Vector.K), OOM) == 2
        s = LineSegment(Point(0, 0, 1), Point(0, 0, 3))
        assert Plane.Z0.distance_squared(s) == 1
        assert s.distance(Plane.Z0, OOM) == 1


class TestIntersection:

    def test_coordinate_planes(self):
        result = Plane.X0.get_intersect(Plane.Y0, OOM)
        assert result == Line(Point(0, 0, 0), Vector.K)

    def test_offset_planes(self):
        a = Plane(Point(1, 0, 0), Vector.I)
        b = Plane(Point(0, 2, 0), Vector.J)
        line = a.get_intersect(b, OOM)
        assert line.equals(Line(Point(1, 2, -4), Vector.K), OOM)

    def test_oblique_planes(self):
        a = Plane.from_coefficients(1, 1, 0, -2)
        b = Plane.from_coefficients(0, 1, 1, -3)
        line = a.get_intersect(b, OOM)
        for pt in (line.p, line.q):
            assert a.intersects(pt, OOM)
            assert b.intersects(pt, OOM)

    def test_parallel_and_coincident_planes(self):
        assert Plane.X0.get_intersect(Plane.X0.translate(Vector.I), OOM) is None
        same = Plane.X0.get_intersect(Plane.X0.reverse(), OOM)
        assert isinstance(same, Plane)
        assert same.equals(Plane.X0, OOM)

    def test_lines(self):
        assert Plane.Z0.get_intersect(Line(Point(1, 1, 5), Vector.K), OOM) == Point(1, 1, 0)
        assert Line(Point(1, 1, 5), Vector.K).get_intersect(Plane.Z0, OOM) == Point(1, 1, 0)
        assert Plane.Z0.get_intersect(Ray(Point(1, 1, 5), Vector.K), OOM) is None
        assert Plane.Z0.get_intersect(Ray(Point(1, 1, 5), -Vector.K), OOM) == Point(1, 1, 0)
        assert Plane.Z0.get_intersect(LineSegment(Point(0, 0, 1), Point(0, 0, 3)), OOM) is None
        assert Plane.Z0.get_intersect(Line(Point(0, 0, 1), Vector.I), OOM) is None

    def test_line_in_plane(self):
        line = Line(O, Vector(1, 1, 0))
        assert Plane.Z0.get_intersect(line, OOM) == line
        s = LineSegment(Point(1, 0, 0), Point(2, 3, 0))
        result = Plane.Z0.get_intersect(s, OOM)
        assert isinstance(result, LineSegment)
        assert result.equals(s, OOM)

    def test_three_planes(self):
        assert Plane.X0.get_intersect_planes(Plane.Y0, Plane.Z0, OOM) == O
        shared = Plane(O, Vector(1, 1, 0))
        line = Plane.X0.get_intersect_planes(Plane.Y0, shared, OOM)
        assert isinstance(line, Line)
        assert line.equals(Line(O, Vector.K), OOM)
        assert Plane.Z0.get_intersect_planes(
            Plane.Z0.translate(Vector.K), Plane.X0, OOM) is None


class TestTransform:

    def test_translate(self):
        pl = Plane.Z0.translate(Vector(1, 2, 3))
        assert pl.equals(Plane(Point(0, 0, 3), Vector.K), OOM)
        assert Plane.Z0.p == O

    def test_rotate(self, pi):
        axis = Line(O, Vector.J)
        pl = Plane.X0.rotate(axis, Vector.J, pi, pi.get_pi(-6) / 2, OOM)
        assert pl.equals_ignore_orientation(Plane.Z0, OOM)
        assert pl.n == Vector(0, 0, -1)


def test_parallel_is_symmetric():
    planes = [Plane.X0, Plane.Y0, Plane.Z0, Plane(Point(1, 2, 3), Vector(0, 0, -7)),
              Plane.from_coefficients(1, 1, 1, -1)]
    for a in planes:
        for b in planes:
            assert a.is_parallel(b, OOM) == b.is_parallel(a, OOM)
            if a.is_parallel(b, OOM) and not a.is_coincident(b, OOM):
                assert a.get_intersect(b, OOM) is None
