"""Core types and utilities for polyfence.

This module provides type definitions, enums, exceptions, and core utilities
used throughout the library.
"""

from .types import (
    FeatureStyle,
    FeatureType,
    ConflictKind,
)

from .errors import (
    PolyfenceError,
    AdmissionError,
    CapacityExceeded,
    OverlapRejected,
    FullyEncloses,
    FullyEnclosedBy,
    UnableToTrim,
    DuplicateFeatureError,
    InvalidGeometryError,
    ConfigurationError,
)

__all__ = [
    # Enums and styles
    'FeatureStyle',
    'FeatureType',
    'ConflictKind',

    # Exceptions
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
