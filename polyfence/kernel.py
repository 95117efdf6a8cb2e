"""Planar polygon predicates and clipping.

Longitude/latitude pairs are treated as plain Cartesian coordinates. That is
only accurate for small shapes away from the poles, but it is what the stored
and exported shapes are built from, so clipped boundaries must be computed
the same way.

All functions accept Shapely geometries or GeoJSON geometry mappings.
"""

from shapely.geometry.base import BaseGeometry

from .core.geometry_utils import GeometryLike, as_geometry


def intersects(a: GeometryLike, b: GeometryLike) -> bool:
    """Return True if the two geometries share at least one point.

    Touching boundaries count as intersecting.

    Examples:
        >>> left = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        >>> right = Polygon([(1, 0), (2, 0), (2, 1), (1, 1)])
        >>> intersects(left, right)
        True
    """
    return as_geometry(a).intersects(as_geometry(b))


def contains(a: GeometryLike, b: GeometryLike) -> bool:
    """Return True if every point of ``b`` lies in or on ``a``.

    Uses the *covers* relation, so a polygon contains itself and a shape
    sharing part of the outer boundary from the inside is still contained.

    Examples:
        >>> outer = Polygon([(0, 0), (10, 0), (10, 10), (0, 10)])
        >>> inner = Polygon([(0, 0), (4, 0), (4, 4), (0, 4)])
        >>> contains(outer, inner), contains(inner, outer)
        (True, False)
    """
    return as_geometry(a).covers(as_geometry(b))


def difference(a: GeometryLike, b: GeometryLike) -> BaseGeometry:
    """Return the part of ``a`` not covered by ``b``.

    The result may be a Polygon, a MultiPolygon when ``b`` cuts ``a`` into
    pieces, a Polygon with a hole when ``b`` sits strictly inside ``a``, or an
    empty geometry. Lower dimensional leftovers can appear in a
    GeometryCollection; callers decide what to do with those.

    Raises:
        shapely.errors.GEOSException: On topology failures in the
            underlying engine (typically invalid input rings).
    """
    return as_geometry(a).difference(as_geometry(b))


__all__ = [
    'intersects',
    'contains',
    'difference',
]
