"""Ordered store of accepted map shapes.

:class:`FeatureStore` is the only place shapes are admitted. Each call to
:meth:`FeatureStore.add` checks the per-type limit first, then, for area
shapes, runs :func:`polyfence.overlap.resolve_overlaps`. A rejected candidate
leaves the store untouched.

The store is not thread-safe: capacity check, overlap resolution and append
must happen as one step, so concurrent writers need their own lock around
:meth:`FeatureStore.add`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .core.errors import AdmissionError, CapacityExceeded, DuplicateFeatureError
from .core.types import FeatureType
from .export import export_geojson
from .features import Feature
from .limits import DEFAULT_SHAPE_LIMITS, ShapeLimits
from .overlap import resolve_overlaps

logger = logging.getLogger(__name__)


@dataclass
class AdmissionResult:
    """Outcome of :meth:`FeatureStore.add`.

    Attributes:
        feature: The stored feature with its final geometry, None on failure
        error: Why the candidate was refused, None on success
        trimmed_against: Ids of accepted shapes the candidate was clipped by
    """
    feature: Optional[Feature] = None
    error: Optional[AdmissionError] = None
    trimmed_against: Tuple[str, ...] = ()

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def trimmed(self) -> bool:
        return bool(self.trimmed_against)

    def unwrap(self) -> Feature:
        """Return the stored feature or raise the admission error."""
        if self.error is not None:
            raise self.error
        return self.feature


class FeatureStore:
    """Accepted shapes in insertion order, with per-type limits.

    No two accepted area shapes overlap, no type exceeds its limit, and ids
    are unique.

    Example:
        ```python
        store = FeatureStore(ShapeLimits(polygon=2))
        square = create_feature(create_rectangle((0, 0), (1, 1)), FeatureType.POLYGON)

        result = store.add(square)
        if not result.success:
            print(result.error)
        ```

    Attributes:
        limits: Current per-type limits
    """

    def __init__(self, limits: Optional[ShapeLimits] = None):
        self._limits = limits if limits is not None else DEFAULT_SHAPE_LIMITS
        self._features: List[Feature] = []

    @property
    def limits(self) -> ShapeLimits:
        return self._limits

    @property
    def features(self) -> Tuple[Feature, ...]:
        """Snapshot of the accepted features in store order."""
        return tuple(self._features)

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(tuple(self._features))

    def __contains__(self, feature_id: object) -> bool:
        return any(f.id == feature_id for f in self._features)

    def get(self, feature_id: str) -> Optional[Feature]:
        """Return the feature with ``feature_id``, or None."""
        for feature in self._features:
            if feature.id == feature_id:
                return feature
        return None

    def area_features(self) -> List[Feature]:
        """Accepted polygon, rectangle and circle features in store order."""
        return [f for f in self._features if f.is_area]

    def count_by_type(self, feature_type: FeatureType) -> int:
        """Number of accepted features of ``feature_type``."""
        feature_type = FeatureType(feature_type)
        return sum(1 for f in self._features if f.feature_type is feature_type)

    def counts(self) -> Dict[FeatureType, int]:
        """Accepted feature count for every type, including zeros."""
        return {t: self.count_by_type(t) for t in FeatureType}

    def remaining_capacity(self, feature_type: FeatureType) -> int:
        """How many more features of ``feature_type`` fit under the limit."""
        return max(0, self._limits.limit_for(feature_type) - self.count_by_type(feature_type))

    def update_limits(self, limits: ShapeLimits) -> None:
        """Replace the limits. Features already stored are kept even if over the new limit."""
        self._limits = limits
        logger.info("Shape limits updated: %s", limits.to_dict())

    def add(self, candidate: Feature, raise_on_failure: bool = False) -> AdmissionResult:
        """Try to admit ``candidate``.

        Args:
            candidate: New shape; area shapes may be stored clipped
            raise_on_failure: Raise the admission error instead of returning it

        Returns:
            :class:`AdmissionResult` with the stored feature or the error

        Raises:
            DuplicateFeatureError: If a feature with the same id is stored
            AdmissionError: Only when ``raise_on_failure`` is True
        """
        if candidate.id in self:
            raise DuplicateFeatureError(f"Feature {candidate.id} is already stored")

        result = self._admit(candidate)
        if result.success:
            self._features.append(result.feature)
            logger.info(
                "Added %s %s%s",
                candidate.feature_type.value,
                candidate.id,
                f" (trimmed against {', '.join(result.trimmed_against)})" if result.trimmed else "",
            )
        else:
            logger.info("Rejected %s %s: %s", candidate.feature_type.value, candidate.id, result.error)
            if raise_on_failure:
                raise result.error

        return result

    def _admit(self, candidate: Feature) -> AdmissionResult:
        feature_type = candidate.feature_type
        limit = self._limits.limit_for(feature_type)
        if self.count_by_type(feature_type) >= limit:
            return AdmissionResult(error=CapacityExceeded(feature_type, limit))

        if not feature_type.is_area:
            return AdmissionResult(feature=candidate)

        resolution = resolve_overlaps(candidate, self._features)
        return AdmissionResult(
            feature=resolution.feature,
            error=resolution.error,
            trimmed_against=tuple(resolution.trimmed_against),
        )

    def remove(self, feature_id: str) -> bool:
        """Remove the feature with ``feature_id``.

        Returns:
            True if a feature was removed, False if none matched
        """
        for index, feature in enumerate(self._features):
            if feature.id == feature_id:
                del self._features[index]
                logger.info("Removed %s %s", feature.feature_type.value, feature_id)
                return True
        return False

    def clear(self) -> None:
        """Remove every feature."""
        removed = len(self._features)
        self._features.clear()
        logger.info("Cleared %d features", removed)

    def export(self) -> Dict[str, Any]:
        """Return the accepted features as a GeoJSON FeatureCollection."""
        return export_geojson(self._features)


__all__ = [
    'AdmissionResult',
    'FeatureStore',
]
