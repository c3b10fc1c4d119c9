import pytest

from ratgeom.convexarea import ConvexArea
from ratgeom.errors import InvalidGeometryError
from ratgeom.line import Line, LineSegment
from ratgeom.plane import Plane
from ratgeom.point import Point
from ratgeom.tetrahedron import Tetrahedron
from ratgeom.triangle import Triangle
from ratgeom.vector import Vector

OOM = -3


def P(x, y, z=0):
    return Point(x, y, z)


@pytest.fixture
def square():
    return ConvexArea(P(0, 0), P(2, 0), P(2, 2), P(0, 2))


def test_construction(square):
    assert len(square.triangles) == 2
    assert len(square.edges()) == 4
    assert square.points() == (P(0, 0), P(2, 0), P(2, 2), P(0, 2))
    assert square.pl.n == Vector(0, 0, 4)
    with pytest.raises(InvalidGeometryError):
        ConvexArea(P(0, 0), P(1, 0))


def test_from_points(square):
    area = ConvexArea.from_points(
        [P(1, 1), P(0, 2), P(2, 0), P(0, 0), P(2, 2), P(1, 0)], OOM)
    assert area.equals(square, OOM)
    assert len(area.points()) == 4
    with pytest.raises(InvalidGeometryError):
        ConvexArea.from_points([P(0, 0), P(1, 1), P(2, 2)], OOM)


def test_equals_ignores_start_and_winding(square):
    assert square.equals(ConvexArea(P(2, 2), P(0, 2), P(0, 0), P(2, 0)), OOM)
    assert square.equals(ConvexArea(P(0, 2), P(2, 2), P(2, 0), P(0, 0)), OOM)
    assert not square.equals(ConvexArea(P(0, 0), P(2, 0), P(2, 3), P(0, 2)), OOM)


def test_measures(square):
    assert square.area(OOM) == 4
    assert square.perimeter(OOM) == 8
    assert square.aabb(OOM).bounds() == (0, 2, 0, 2, 0, 0)


def test_point_queries(square):
    assert square.intersects(P(1, 1), OOM)
    assert square.intersects(P(2, 1), OOM)
    assert not square.intersects(P(3, 1), OOM)
    assert square.get_intersect(P(1, 1), OOM) == P(1, 1)
    assert square.distance(P(1, 1, 3), OOM) == 3
    assert square.distance(P(4, 1), OOM) == 2


def test_plane_intersection(square):
    cut = square.get_intersect(Plane(P(1, 0), Vector.I), OOM)
    assert isinstance(cut, LineSegment)
    assert cut.equals_ignore_direction(LineSegment(P(1, 0), P(1, 2)), OOM)
    same = square.get_intersect(Plane.Z0, OOM)
    assert same.equals(square, OOM)
    assert square.get_intersect(Plane(P(0, 0, 1), Vector.K), OOM) is None


def test_line_intersection(square):
    assert square.get_intersect(Line(P(1, 1, 5), Vector.K), OOM) == P(1, 1)
    chord = square.get_intersect(Line(P(0, 1), Vector.I), OOM)
    assert chord.equals_ignore_direction(LineSegment(P(0, 1), P(2, 1)), OOM)


def test_triangle_overlap(square):
    tri = Triangle(P(1, 1), P(3, 1), P(1, 3))
    overlap = square.get_intersect(tri, OOM)
    assert isinstance(overlap, ConvexArea)
    assert overlap.equals(ConvexArea(P(1, 1), P(2, 1), P(2, 2), P(1, 2)), OOM)


def test_tetrahedron_overlap(square):
    corner = Tetrahedron(P(0, 0), P(1, 0), P(0, 1), P(0, 0, 1))
    base = Triangle(P(0, 0), P(1, 0), P(0, 1))
    assert square.get_intersect(corner, OOM).equals(base, OOM)
    assert corner.get_intersect(square, OOM).equals(base, OOM)


def test_transform(square, pi):
    moved = square.translate(Vector(0, 0, 1))
    assert moved.points()[2] == P(2, 2, 1)
    turned = square.rotate(Line(P(0, 0), Vector.I), Vector.I, pi,
                           pi.get_pi(-6) / 2, OOM)
    assert turned.equals(ConvexArea(P(0, 0), P(2, 0), P(2, 0, 2), P(0, 0, 2)), OOM)
    assert turned.area(OOM) == 4


def test_corners_must_be_coplanar():
    with pytest.raises(InvalidGeometryError):
        ConvexArea(P(0, 0), P(2, 0), P(2, 2), P(0, 2, 1))
    nearly = ConvexArea(P(0, 0), P(2, 0), P(2, 2), P(0, 2, "0.0001"), oom=OOM)
    assert len(nearly.points()) == 4
    with pytest.raises(InvalidGeometryError):
        ConvexArea(P(0, 0), P(2, 0), P(2, 2), P(0, 2, "0.0001"))


def test_corners_must_be_convex():
    with pytest.raises(InvalidGeometryError):
        ConvexArea(P(0, 0), P(4, 0), P(2, 1), P(4, 4), P(0, 4))
    with pytest.raises(InvalidGeometryError):
        ConvexArea(P(0, 0), P(2, 0), P(0, 2), P(2, 2))
    with pytest.raises(InvalidGeometryError):
        ConvexArea(P(0, 0), P(2, 0), P(3, 1), P(0, 0, 0))
