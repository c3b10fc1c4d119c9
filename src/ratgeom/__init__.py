# -*- coding: utf-8 -*-
"""exact rational 3D geometry with explicit precision control"""

import logging as _logging
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ratgeom")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

from ratgeom.errors import GeometryError, InvalidGeometryError, PrecisionError
from ratgeom.precision import NumericContext, PiProvider, RoundingMode, round_to
from ratgeom.vector import Vector
from ratgeom.point import Point
from ratgeom.line import Line, LineSegment, Ray
from ratgeom.plane import Plane
from ratgeom.triangle import Triangle
from ratgeom.convexarea import ConvexArea
from ratgeom.rectangle import Rectangle
from ratgeom.tetrahedron import Tetrahedron
from ratgeom.aabb import AABB
from ratgeom.angle import Angle

__all__ = [
    "AABB",
    "Angle",
    "ConvexArea",
    "GeometryError",
    "InvalidGeometryError",
    "Line",
    "LineSegment",
    "NumericContext",
    "PiProvider",
    "Plane",
    "Point",
    "PrecisionError",
    "Ray",
    "Rectangle",
    "RoundingMode",
    "Tetrahedron",
    "Triangle",
    "Vector",
    "round_to",
]
