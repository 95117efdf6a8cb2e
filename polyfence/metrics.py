"""Shared measurement helpers for polyfence features.

These are read-only checks over accepted shapes: per-feature area and shape
statistics, and the overlap totals used to confirm that no two accepted area
shapes overlap.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable

from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union
from shapely.strtree import STRtree

from .core.geometry_utils import count_holes, polygon_parts
from .features import Feature


def measure_feature(feature: Feature) -> Dict[str, Any]:
    """Return core metrics for ``feature``'s geometry."""
    geometry = feature.geometry
    return {
        "area": geometry.area,
        "length": geometry.length,
        "is_valid": geometry.is_valid,
        "is_empty": geometry.is_empty,
        "parts": len(polygon_parts(geometry)) if feature.is_area else 1,
        "holes": count_holes(geometry),
    }


def total_overlap_area(geometries: Iterable[BaseGeometry]) -> float:
    """Compute the total overlapping area within ``geometries``."""
    geometries = [geom for geom in geometries if geom is not None and not geom.is_empty]
    if len(geometries) < 2:
        return 0.0
    union = unary_union(geometries)
    combined_area = sum(geom.area for geom in geometries)
    return combined_area - union.area


def count_overlaps(features: Iterable[Feature], tolerance: float = 1e-10) -> int:
    """Count pairs of area features whose shared area exceeds ``tolerance``.

    Line strings are ignored. Uses spatial indexing for efficient counting.

    Args:
        features: Features to check
        tolerance: Minimum overlap area to count (default: 1e-10)

    Returns:
        Number of overlapping pairs
    """
    geometries = [f.geometry for f in features if f.is_area]
    if len(geometries) < 2:
        return 0

    tree = STRtree(geometries)
    overlap_count = 0

    for i, geom_i in enumerate(geometries):
        for j in tree.query(geom_i, predicate='intersects'):
            if j <= i:
                continue
            if geom_i.intersection(geometries[j]).area > tolerance:
                overlap_count += 1

    return overlap_count


__all__ = [
    "measure_feature",
    "total_overlap_area",
    "count_overlaps",
]
