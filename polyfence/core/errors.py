"""Exception hierarchy for polyfence.

Admission failures (:class:`AdmissionError` and subclasses) describe why a
single candidate shape was refused. They are returned as values by
:meth:`polyfence.store.FeatureStore.add` and only raised when the caller asks
for it. The remaining exceptions signal caller mistakes and are always raised.
"""

from typing import Optional


class PolyfenceError(Exception):
    """Base class for all polyfence exceptions."""
    pass


class AdmissionError(PolyfenceError):
    """A candidate shape was refused by the store.

    Attributes:
        reason: Short machine-friendly reason tag
    """
    reason = 'admission_failed'


class CapacityExceeded(AdmissionError):
    """The candidate's type already holds its configured maximum.

    Attributes:
        feature_type: The type whose limit was hit
        limit: The configured maximum
    """
    reason = 'capacity_exceeded'

    def __init__(self, feature_type, limit: int):
        self.feature_type = feature_type
        self.limit = limit
        name = getattr(feature_type, 'value', feature_type)
        super().__init__(f"Maximum limit of {limit} {name}s reached")


class OverlapRejected(AdmissionError):
    """The candidate conflicts geometrically with an accepted shape.

    Attributes:
        conflicting_id: Id of the accepted feature that caused the rejection
    """
    reason = 'overlap_rejected'
    message = 'Overlapping shape rejected'

    def __init__(self, conflicting_id: Optional[str] = None, message: Optional[str] = None):
        self.conflicting_id = conflicting_id
        super().__init__(message or self.message)


class FullyEncloses(OverlapRejected):
    """The candidate would swallow an accepted shape."""
    reason = 'fully_encloses'
    message = 'Cannot create a shape that fully encloses another shape'


class FullyEnclosedBy(OverlapRejected):
    """The candidate lies entirely inside an accepted shape."""
    reason = 'fully_enclosed_by'
    message = 'Cannot create a shape that is fully enclosed by another shape'


class UnableToTrim(OverlapRejected):
    """Clipping the candidate left nothing usable."""
    reason = 'unable_to_trim'
    message = 'Unable to trim overlapping shape. Please adjust your drawing.'


class DuplicateFeatureError(PolyfenceError, ValueError):
    """A feature with the same id is already stored."""
    pass


class InvalidGeometryError(PolyfenceError, ValueError):
    """Input cannot be turned into the requested geometry."""
    pass


class ConfigurationError(PolyfenceError, ValueError):
    """Shape limit configuration is malformed."""
    pass


__all__ = [
    'PolyfenceError',
    'AdmissionError',
    'CapacityExceeded',
    'OverlapRejected',
    'FullyEncloses',
    'FullyEnclosedBy',
    'UnableToTrim',
    'DuplicateFeatureError',
    'InvalidGeometryError',
    'ConfigurationError',
]
