from ratgeom import points
from ratgeom.convexarea import ConvexArea
from ratgeom.line import LineSegment
from ratgeom.point import Point
from ratgeom.triangle import Triangle
from ratgeom.vector import Vector

OOM = -3


def square(z=0):
    return [Point(0, 0, z), Point(2, 0, z), Point(2, 2, z), Point(0, 2, z)]


def test_plane_of():
    pl = points.plane_of([Point(0, 0, 0), Point(1, 1, 1), Point(1, 0, 0), Point(0, 1, 0)], OOM)
    assert pl is not None
    assert points.plane_of([Point(0, 0, 0), Point(1, 1, 1), Point(2, 2, 2)], OOM) is None
    assert points.plane_of([Point(0, 0, 0), Point(1, 0, 0)], OOM) is None


def test_coplanar_and_collinear():
    assert points.is_coplanar(square(), OOM)
    assert not points.is_coplanar(square() + [Point(1, 1, 1)], OOM)
    assert points.is_collinear([Point(0, 0, 0), Point(1, 2, 3), Point(-1, -2, -3)], OOM)


def test_extreme_pair():
    pts = [Point(1, 0, 0), Point(3, 0, 0), Point(-2, 0, 0), Point(0, 0, 0)]
    assert points.extreme_pair(pts) == (Point(-2, 0, 0), Point(3, 0, 0))


def test_convex_hull_drops_interior_and_edge_points():
    pts = square() + [Point(1, 1, 0), Point(1, 0, 0)]
    hull = points.convex_hull(pts, Vector.K, OOM)
    assert hull == [Point(0, 0, 0), Point(2, 0, 0), Point(2, 2, 0), Point(0, 2, 0)]


def test_convex_hull_winding():
    hull = points.convex_hull(square(), -Vector.K, OOM)
    assert hull == [Point(0, 2, 0), Point(2, 2, 0), Point(2, 0, 0), Point(0, 0, 0)]


def test_convex_hull_in_vertical_plane():
    pts = [Point(0, 0, 0), Point(0, 1, 0), Point(0, 1, 1), Point(0, 0, 1)]
    hull = points.convex_hull(pts, Vector.I, OOM)
    assert len(hull) == 4
    a, b, c = hull[:3]
    assert (b - a).cross(c - b).dot(Vector.I) > 0


def test_geometry_of():
    assert points.geometry_of([], OOM) is None
    assert points.geometry_of([Point(1, 1, 1), Point(1, 1, "1.0001")], OOM) == Point(1, 1, 1)
    s = points.geometry_of([Point(0, 0, 0), Point(2, 0, 0), Point(1, 0, 0)], OOM)
    assert isinstance(s, LineSegment)
    assert s.equals_ignore_direction(LineSegment(Point(0, 0, 0), Point(2, 0, 0)), OOM)
    t = points.geometry_of([Point(0, 0, 0), Point(2, 0, 0), Point(0, 2, 0), Point(1, 0, 0)], OOM)
    assert isinstance(t, Triangle)
    assert t.area(OOM) == 2
    area = points.geometry_of(square(), OOM)
    assert isinstance(area, ConvexArea)
    assert area.area(OOM) == 4


def test_merge():
    halves = [
        Triangle(Point(0, 0, 0), Point(2, 0, 0), Point(2, 2, 0)),
        Triangle(Point(0, 0, 0), Point(2, 2, 0), Point(0, 2, 0)),
    ]
    merged = points.merge(halves, OOM, normal=Vector.K)
    assert isinstance(merged, ConvexArea)
    assert merged.equals(ConvexArea(*square()), OOM)
    assert points.merge([None, Point(1, 1, 1), None], OOM) == Point(1, 1, 1)
    assert points.merge([], OOM) is None
