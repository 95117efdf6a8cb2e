"""Overlap resolution for newly drawn area shapes.

A candidate area shape is checked against the accepted area shapes in store
order. The first shape it touches decides what happens next:

1. If the candidate covers that shape, or is covered by it, the candidate is
   rejected outright.
2. Otherwise the candidate is clipped to the part outside that shape, the
   shape is dropped from the set still to check, and the search repeats with
   the clipped candidate.

Every pass removes one accepted shape from the working set, so the loop runs
at most once per accepted area shape. Line strings never take part.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from shapely.errors import GEOSException
from shapely.strtree import STRtree

from . import kernel
from .core.errors import FullyEnclosedBy, FullyEncloses, OverlapRejected, UnableToTrim
from .core.geometry_utils import count_holes, is_polygonal
from .core.types import ConflictKind
from .features import Feature

logger = logging.getLogger(__name__)

_AREA_EPS = 1e-9


@dataclass
class Resolution:
    """Outcome of resolving a candidate against the accepted shapes.

    Attributes:
        feature: Candidate carrying its final geometry, ``None`` on rejection
        error: Reason for rejection, ``None`` on success
        trimmed_against: Ids of accepted shapes the candidate was clipped by,
            in the order they were resolved
    """
    feature: Optional[Feature]
    error: Optional[OverlapRejected] = None
    trimmed_against: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.error is None


def find_overlapping_feature(
    candidate: Feature,
    existing: Sequence[Feature],
) -> Optional[Feature]:
    """Return the first area feature in ``existing`` touching ``candidate``.

    Only polygon, rectangle and circle features are considered and the
    candidate itself (same id) is skipped. When several features intersect the
    candidate, the earliest one in ``existing`` wins.

    Args:
        candidate: Shape being admitted
        existing: Accepted shapes in store order

    Returns:
        The conflicting feature, or None if the candidate is clear

    Examples:
        >>> conflict = find_overlapping_feature(candidate, store.features)
        >>> conflict is None  # candidate touches nothing
        True
    """
    area_features = [f for f in existing if f.is_area and f.id != candidate.id]
    if not area_features:
        return None

    # Bounding-box prefilter; exact test below keeps store order
    tree = STRtree([f.geometry for f in area_features])
    for index in sorted(int(i) for i in tree.query(candidate.geometry)):
        other = area_features[index]
        if kernel.intersects(candidate.geometry, other.geometry):
            return other

    return None


def is_fully_enclosed(outer: Feature, inner: Feature) -> bool:
    """True if every point of ``inner`` lies in or on ``outer``."""
    return kernel.contains(outer.geometry, inner.geometry)


def classify_conflict(candidate: Feature, conflicting: Feature) -> ConflictKind:
    """Decide how ``candidate`` relates to an accepted shape it touches.

    Candidate-encloses is tested first, so two identical shapes classify as
    :attr:`ConflictKind.ENCLOSES`.
    """
    if is_fully_enclosed(candidate, conflicting):
        return ConflictKind.ENCLOSES
    if is_fully_enclosed(conflicting, candidate):
        return ConflictKind.ENCLOSED_BY
    return ConflictKind.PARTIAL


def trim_overlapping_feature(
    candidate: Feature,
    conflicting: Feature,
) -> Optional[Feature]:
    """Clip ``candidate`` to the part lying outside ``conflicting``.

    The remainder must be a non-empty Polygon or MultiPolygon without holes;
    anything else (empty result, a sliver negligible next to the candidate,
    leftover lines or points, a hole punched by the other shape) counts as
    untrimmable.

    Args:
        candidate: Shape being admitted
        conflicting: Accepted shape it partially overlaps

    Returns:
        New feature with the clipped geometry, or None if nothing usable is left
    """
    try:
        remainder = kernel.difference(candidate.geometry, conflicting.geometry)
    except GEOSException as exc:
        logger.warning(
            "Clipping %s against %s failed: %s", candidate.id, conflicting.id, exc
        )
        return None

    if not is_polygonal(remainder):
        return None
    # Slivers left by floating point noise, relative to the candidate size
    if remainder.area <= _AREA_EPS * candidate.area:
        return None
    if count_holes(remainder):
        return None

    return candidate.with_geometry(remainder)


def resolve_overlaps(
    candidate: Feature,
    existing: Sequence[Feature],
) -> Resolution:
    """Admit, clip or reject an area candidate against accepted shapes.

    Args:
        candidate: Shape being admitted
        existing: Accepted shapes in store order; non-area shapes are ignored

    Returns:
        :class:`Resolution` carrying either the final candidate or the reason
        it was rejected. Inputs are never modified.

    Examples:
        >>> a = create_feature(Polygon([(0, 0), (1, 0), (1, 1), (0, 1)]), 'polygon')
        >>> b = create_feature(Polygon([(0.5, 0.5), (1.5, 0.5), (1.5, 1.5), (0.5, 1.5)]), 'polygon')
        >>> result = resolve_overlaps(b, [a])
        >>> round(result.feature.area, 2)
        0.75
    """
    if not candidate.is_area:
        return Resolution(feature=candidate)

    remaining = [f for f in existing if f.is_area and f.id != candidate.id]
    current = candidate
    trimmed_against: List[str] = []

    while remaining:
        conflicting = find_overlapping_feature(current, remaining)
        if conflicting is None:
            break

        kind = classify_conflict(current, conflicting)
        logger.debug(
            "Candidate %s conflicts with %s (%s)", candidate.id, conflicting.id, kind.value
        )

        if kind is ConflictKind.ENCLOSES:
            return Resolution(None, FullyEncloses(conflicting.id), trimmed_against)
        if kind is ConflictKind.ENCLOSED_BY:
            return Resolution(None, FullyEnclosedBy(conflicting.id), trimmed_against)

        trimmed = trim_overlapping_feature(current, conflicting)
        if trimmed is None:
            return Resolution(None, UnableToTrim(conflicting.id), trimmed_against)

        logger.debug(
            "Trimmed %s against %s: area %.6g -> %.6g",
            candidate.id, conflicting.id, current.area, trimmed.area,
        )
        current = trimmed
        trimmed_against.append(conflicting.id)
        remaining = [f for f in remaining if f.id != conflicting.id]

    return Resolution(feature=current, trimmed_against=trimmed_against)


__all__ = [
    'Resolution',
    'find_overlapping_feature',
    'is_fully_enclosed',
    'classify_conflict',
    'trim_overlapping_feature',
    'resolve_overlaps',
]
