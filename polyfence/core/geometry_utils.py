"""Common geometry manipulation utilities.

Shapely geometries are the working representation throughout the package;
the helpers here convert GeoJSON-shaped input into them and inspect the
polygonal pieces produced by clipping.
"""

from collections.abc import Mapping
from typing import Any, List, Sequence, Tuple, Union

from shapely.errors import GeometryTypeError
from shapely.geometry import GeometryCollection, MultiPolygon, Polygon, shape
from shapely.geometry.base import BaseGeometry

from .errors import InvalidGeometryError

GeometryLike = Union[BaseGeometry, Mapping]


def as_geometry(geometry: GeometryLike) -> BaseGeometry:
    """Convert a Shapely geometry or GeoJSON mapping to a Shapely geometry.

    A GeoJSON ``Feature`` mapping is unwrapped to its ``geometry`` member.

    Args:
        geometry: Shapely geometry, GeoJSON geometry or GeoJSON feature

    Returns:
        Shapely geometry (the input itself if it already is one)

    Raises:
        InvalidGeometryError: If the mapping is not valid GeoJSON geometry

    Examples:
        >>> geom = as_geometry({'type': 'Polygon',
        ...                     'coordinates': [[[0, 0], [1, 0], [1, 1], [0, 0]]]})
        >>> geom.geom_type
        'Polygon'
    """
    if isinstance(geometry, BaseGeometry):
        return geometry
    if hasattr(geometry, 'geometry') and isinstance(geometry.geometry, BaseGeometry):
        return geometry.geometry
    if not isinstance(geometry, Mapping):
        raise InvalidGeometryError(f"Expected a geometry or GeoJSON mapping, got {type(geometry).__name__}")

    if geometry.get('type') == 'Feature':
        geometry = geometry.get('geometry') or {}

    try:
        return shape(geometry)
    except (GeometryTypeError, KeyError, TypeError, ValueError, AttributeError) as exc:
        raise InvalidGeometryError(f"Invalid GeoJSON geometry: {exc}") from exc


def polygon_parts(geometry: BaseGeometry) -> List[Polygon]:
    """Return the non-empty polygons making up ``geometry``.

    Polygons are returned as a one element list, MultiPolygons are exploded,
    and polygons nested in a GeometryCollection are collected. Anything else
    contributes nothing.
    """
    if isinstance(geometry, Polygon):
        return [] if geometry.is_empty else [geometry]
    if isinstance(geometry, MultiPolygon):
        return [p for p in geometry.geoms if not p.is_empty]
    if isinstance(geometry, GeometryCollection):
        parts = []
        for geom in geometry.geoms:
            parts.extend(polygon_parts(geom))
        return parts
    return []


def is_polygonal(geometry: BaseGeometry) -> bool:
    """True if ``geometry`` is a non-empty Polygon or MultiPolygon."""
    return isinstance(geometry, (Polygon, MultiPolygon)) and not geometry.is_empty


def count_holes(geometry: BaseGeometry) -> int:
    """Count interior rings over all polygon parts of ``geometry``."""
    return sum(len(p.interiors) for p in polygon_parts(geometry))


def close_ring(points: Sequence[Sequence[float]]) -> List[Tuple[float, float]]:
    """Return ``points`` as (x, y) tuples with the first point repeated at the end."""
    ring = [(float(x), float(y)) for x, y in points]
    if ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    return ring


def to_coordinate_lists(coords: Any) -> Any:
    """Recursively turn nested coordinate tuples into lists.

    ``shapely.geometry.mapping`` returns tuples; exported documents use the
    plain JSON array shape.

    Examples:
        >>> to_coordinate_lists(((0.0, 0.0), (1.0, 0.0)))
        [[0.0, 0.0], [1.0, 0.0]]
    """
    if isinstance(coords, (list, tuple)):
        return [to_coordinate_lists(c) for c in coords]
    return coords


__all__ = [
    'GeometryLike',
    'as_geometry',
    'polygon_parts',
    'is_polygonal',
    'count_holes',
    'close_ring',
    'to_coordinate_lists',
]
