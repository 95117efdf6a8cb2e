"""Type definitions for polyfence features.

This module defines the closed set of drawable feature types, the ways two
area features can conflict, and the render style attached to each type.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class FeatureStyle:
    """Render style for one feature type.

    Attributes:
        color: Stroke color (hex)
        fill_color: Fill color (hex), ``None`` for unfilled types
        fill_opacity: Fill opacity in [0, 1]
        weight: Stroke width in pixels
        fill: Whether the shape is filled at all
    """
    color: str
    fill_color: Optional[str] = None
    fill_opacity: float = 0.0
    weight: float = 2
    fill: bool = True


class FeatureType(Enum):
    """Kind of shape a user can draw.

    Rectangle and circle are stored as plain polygons; the tag only drives
    style and capacity bookkeeping.

    Attributes:
        POLYGON: Free-form polygon drawn click by click
        RECTANGLE: Axis-aligned rectangle dragged from two corners
        CIRCLE: Polygonal approximation of a geodesic circle
        LINE_STRING: Open polyline, exempt from overlap checks

    Examples:
        >>> FeatureType('lineString')
        <FeatureType.LINE_STRING: 'lineString'>
        >>> FeatureType.CIRCLE.is_area
        True
    """
    POLYGON = 'polygon'
    RECTANGLE = 'rectangle'
    CIRCLE = 'circle'
    LINE_STRING = 'lineString'

    @property
    def is_area(self) -> bool:
        """True for the types that are structurally polygons."""
        if self is FeatureType.LINE_STRING:
            return False
        if self in (FeatureType.POLYGON, FeatureType.RECTANGLE, FeatureType.CIRCLE):
            return True
        raise AssertionError(f"Unhandled feature type: {self!r}")

    @property
    def style(self) -> FeatureStyle:
        """Render style used by map layers and the debug plots."""
        return _STYLES[self]

    @classmethod
    def area_types(cls):
        return tuple(t for t in cls if t.is_area)


_STYLES = {
    FeatureType.POLYGON: FeatureStyle(color='#3388ff', fill_color='#3388ff', fill_opacity=0.3),
    FeatureType.RECTANGLE: FeatureStyle(color='#ff7800', fill_color='#ff7800', fill_opacity=0.3),
    FeatureType.CIRCLE: FeatureStyle(color='#28a745', fill_color='#28a745', fill_opacity=0.3),
    FeatureType.LINE_STRING: FeatureStyle(color='#dc3545', weight=3, fill=False),
}


class ConflictKind(Enum):
    """Relation between a candidate and the first accepted shape it touches.

    Attributes:
        ENCLOSES: Candidate covers the accepted shape entirely
        ENCLOSED_BY: Accepted shape covers the candidate entirely
        PARTIAL: Shapes overlap or touch without containment; the candidate is trimmed
    """
    ENCLOSES = 'encloses'
    ENCLOSED_BY = 'enclosed_by'
    PARTIAL = 'partial'


__all__ = [
    'FeatureStyle',
    'FeatureType',
    'ConflictKind',
]
