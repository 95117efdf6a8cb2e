"""Feature records and shape constructors.

A :class:`Feature` is an immutable tagged geometry. The constructors here
build the finished candidate geometry a drawing front-end hands to the
store: polygons from clicked vertices, rectangles from two dragged corners,
circles from a centre and a radius, and open polylines.
"""

from __future__ import annotations

import math
import secrets
import time
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence

import numpy as np
from shapely.geometry import LineString, MultiPolygon, Polygon, mapping
from shapely.geometry.base import BaseGeometry

from .core.errors import InvalidGeometryError
from .core.geometry_utils import GeometryLike, as_geometry, close_ring, to_coordinate_lists
from .core.types import FeatureType

# Mean earth radius used for circles and distances, in kilometres
EARTH_RADIUS_KM = 6371.0088

DEFAULT_CIRCLE_STEPS = 64


def coerce_feature_type(value) -> FeatureType:
    """Return ``value`` as a :class:`FeatureType`, accepting wire strings.

    Raises:
        InvalidGeometryError: For anything that is not a known type
    """
    try:
        return FeatureType(value)
    except ValueError:
        raise InvalidGeometryError(f"Unknown feature type: {value!r}") from None


def generate_feature_id() -> str:
    """Return a new unique feature id like ``feature_1718000000000_3f9a0c1b2``."""
    return f"feature_{_now_ms()}_{secrets.token_hex(5)[:9]}"


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Feature:
    """An accepted or candidate map shape.

    Attributes:
        id: Unique identifier, never reused
        feature_type: Type tag
        created_at: Creation time in milliseconds since the Unix epoch
        geometry: Polygon or MultiPolygon for area types, LineString otherwise
        properties: Free-form internal fields, read-only; never exported and
            ignored by equality
    """
    id: str
    feature_type: FeatureType
    created_at: int
    geometry: BaseGeometry
    properties: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self):
        # Private read-only copy of whatever mapping was passed in
        object.__setattr__(self, 'properties', MappingProxyType(dict(self.properties)))

    @property
    def is_area(self) -> bool:
        return self.feature_type.is_area

    @property
    def area(self) -> float:
        return self.geometry.area

    def with_geometry(self, geometry: BaseGeometry) -> "Feature":
        """Return a copy of this feature carrying ``geometry``."""
        return replace(self, geometry=geometry)

    def to_geojson(self) -> Dict[str, Any]:
        """Return a GeoJSON Feature mapping with the public properties only."""
        geom = mapping(self.geometry)
        return {
            'type': 'Feature',
            'geometry': {
                'type': geom['type'],
                'coordinates': to_coordinate_lists(geom['coordinates']),
            },
            'properties': {
                'type': self.feature_type.value,
                'id': self.id,
                'createdAt': self.created_at,
            },
        }

    @classmethod
    def from_geojson(cls, data: Mapping[str, Any]) -> "Feature":
        """Build a feature from a GeoJSON Feature mapping.

        Raises:
            InvalidGeometryError: If the type tag is missing or unknown, if
                the geometry does not fit the type, or if ``createdAt`` is
                not an integer timestamp
        """
        properties = data.get('properties') or {}
        feature_type = coerce_feature_type(properties.get('type'))

        geometry = as_geometry(data.get('geometry') or {})
        _check_geometry_type(geometry, feature_type)

        feature_id = properties.get('id')
        if feature_id is None:
            feature_id = generate_feature_id()

        created_at = properties.get('createdAt')
        if created_at is None:
            created_at = _now_ms()
        try:
            created_at = int(created_at)
        except (TypeError, ValueError):
            raise InvalidGeometryError(f"Invalid createdAt: {created_at!r}") from None

        extra = {k: v for k, v in properties.items() if k not in ('type', 'id', 'createdAt')}
        return cls(
            id=feature_id,
            feature_type=feature_type,
            created_at=created_at,
            geometry=geometry,
            properties=extra,
        )


def _check_geometry_type(geometry: BaseGeometry, feature_type: FeatureType) -> None:
    if geometry.is_empty:
        raise InvalidGeometryError(f"Empty geometry for {feature_type.value} feature")
    if feature_type.is_area:
        if not isinstance(geometry, (Polygon, MultiPolygon)):
            raise InvalidGeometryError(
                f"{feature_type.value} features need a Polygon, got {geometry.geom_type}"
            )
    elif not isinstance(geometry, LineString):
        raise InvalidGeometryError(
            f"{feature_type.value} features need a LineString, got {geometry.geom_type}"
        )


def create_feature(
    geometry: GeometryLike,
    feature_type: FeatureType,
    properties: Optional[Mapping[str, Any]] = None,
) -> Feature:
    """Wrap a finished geometry into a new candidate feature.

    Args:
        geometry: Shapely geometry or GeoJSON geometry mapping
        feature_type: Type tag (a :class:`FeatureType` or its string value)
        properties: Optional internal fields to carry along

    Returns:
        Feature with a fresh id and the current timestamp

    Raises:
        InvalidGeometryError: If the geometry kind does not match the type

    Examples:
        >>> square = create_rectangle((0, 0), (1, 1))
        >>> feature = create_feature(square, FeatureType.RECTANGLE)
        >>> feature.id.startswith('feature_')
        True
    """
    feature_type = coerce_feature_type(feature_type)
    geom = as_geometry(geometry)
    _check_geometry_type(geom, feature_type)
    return Feature(
        id=generate_feature_id(),
        feature_type=feature_type,
        created_at=_now_ms(),
        geometry=geom,
        properties=properties or {},
    )


def create_polygon(points: Sequence[Sequence[float]]) -> Polygon:
    """Build a polygon from clicked (lng, lat) vertices.

    The ring is closed automatically. At least three distinct vertices are
    required.

    Raises:
        InvalidGeometryError: With fewer than three distinct vertices
    """
    ring = close_ring(points)
    if len(set(ring)) < 3:
        raise InvalidGeometryError("A polygon needs at least 3 distinct points")
    return Polygon(ring)


def create_rectangle(corner1: Sequence[float], corner2: Sequence[float]) -> Polygon:
    """Build an axis-aligned rectangle from two opposite (lng, lat) corners.

    Examples:
        >>> list(create_rectangle((2, 3), (0, 1)).exterior.coords)
        [(0.0, 1.0), (2.0, 1.0), (2.0, 3.0), (0.0, 3.0), (0.0, 1.0)]
    """
    (lng1, lat1), (lng2, lat2) = corner1, corner2
    min_lng, max_lng = sorted((float(lng1), float(lng2)))
    min_lat, max_lat = sorted((float(lat1), float(lat2)))
    if min_lng == max_lng or min_lat == max_lat:
        raise InvalidGeometryError("Rectangle corners must differ in both longitude and latitude")
    return Polygon([
        (min_lng, min_lat),
        (max_lng, min_lat),
        (max_lng, max_lat),
        (min_lng, max_lat),
        (min_lng, min_lat),
    ])


def create_circle(
    center: Sequence[float],
    radius_km: float,
    steps: int = DEFAULT_CIRCLE_STEPS,
) -> Polygon:
    """Approximate a geodesic circle with a polygon.

    Vertices are destination points at ``radius_km`` from ``center`` on a
    spherical earth, at bearings ``0, -360/steps, -2*360/steps, ...``.

    Args:
        center: (lng, lat) of the centre in degrees
        radius_km: Radius in kilometres, must be positive
        steps: Number of vertices (default: 64)

    Returns:
        Closed polygon with ``steps`` distinct vertices

    Raises:
        InvalidGeometryError: If radius is not positive or steps < 3
    """
    if not radius_km > 0:
        raise InvalidGeometryError(f"Circle radius must be positive, got {radius_km}")
    if steps < 3:
        raise InvalidGeometryError(f"A circle needs at least 3 steps, got {steps}")

    lng, lat = np.radians(center[0]), np.radians(center[1])
    bearings = np.radians(np.arange(steps) * -360.0 / steps)
    angular = radius_km / EARTH_RADIUS_KM

    lat2 = np.arcsin(
        np.sin(lat) * np.cos(angular) + np.cos(lat) * np.sin(angular) * np.cos(bearings)
    )
    lng2 = lng + np.arctan2(
        np.sin(bearings) * np.sin(angular) * np.cos(lat),
        np.cos(angular) - np.sin(lat) * np.sin(lat2),
    )

    coords = np.column_stack([np.degrees(lng2), np.degrees(lat2)])
    return Polygon(close_ring(coords.tolist()))


def create_line_string(points: Sequence[Sequence[float]]) -> LineString:
    """Build an open polyline from clicked (lng, lat) vertices.

    Raises:
        InvalidGeometryError: With fewer than two distinct vertices
    """
    coords = [(float(x), float(y)) for x, y in points]
    if len(set(coords)) < 2:
        raise InvalidGeometryError("A line needs at least 2 distinct points")
    return LineString(coords)


def calculate_distance(point1: Sequence[float], point2: Sequence[float]) -> float:
    """Great-circle (haversine) distance between two (lng, lat) points in km.

    Used by front-ends to turn a drag gesture into a circle radius.
    """
    lng1, lat1 = math.radians(point1[0]), math.radians(point1[1])
    lng2, lat2 = math.radians(point2[0]), math.radians(point2[1])
    d_lat = lat2 - lat1
    d_lng = lng2 - lng1

    a = math.sin(d_lat / 2) ** 2 + math.sin(d_lng / 2) ** 2 * math.cos(lat1) * math.cos(lat2)
    return 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a)) * EARTH_RADIUS_KM


__all__ = [
    'EARTH_RADIUS_KM',
    'DEFAULT_CIRCLE_STEPS',
    'Feature',
    'coerce_feature_type',
    'generate_feature_id',
    'create_feature',
    'create_polygon',
    'create_rectangle',
    'create_circle',
    'create_line_string',
    'calculate_distance',
]
