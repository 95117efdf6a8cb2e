"""Polyfence - non-overlapping map shape drawing core.

This library admits user-drawn map shapes (polygons, rectangles, circles and
line strings) into a store that enforces per-type limits and keeps area
shapes from overlapping by clipping new shapes against accepted ones, using
Shapely.
"""


# Geometry kernel
from .kernel import intersects, contains, difference

# Features and constructors
from .features import (
    Feature,
    generate_feature_id,
    create_feature,
    create_polygon,
    create_rectangle,
    create_circle,
    create_line_string,
    calculate_distance,
)

# Overlap resolution
from .overlap import (
    Resolution,
    find_overlapping_feature,
    is_fully_enclosed,
    classify_conflict,
    trim_overlapping_feature,
    resolve_overlaps,
)

# Store and configuration
from .store import AdmissionResult, FeatureStore
from .limits import (
    ShapeLimits,
    DEFAULT_SHAPE_LIMITS,
    load_shape_limits,
    save_shape_limits,
)

# Export
from .export import export_geojson, write_geojson, read_geojson

# Metrics
from .metrics import measure_feature, total_overlap_area, count_overlaps

# Core types (enums)
from .core import (
    FeatureType,
    FeatureStyle,
    ConflictKind,
)

# Core exceptions
from .core import (
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

    # Geometry kernel
    'intersects',
    'contains',
    'difference',

    # Features
    'Feature',
    'generate_feature_id',
    'create_feature',
    'create_polygon',
    'create_rectangle',
    'create_circle',
    'create_line_string',
    'calculate_distance',

    # Overlap resolution
    'Resolution',
    'find_overlapping_feature',
    'is_fully_enclosed',
    'classify_conflict',
    'trim_overlapping_feature',
    'resolve_overlaps',

    # Store and configuration
    'AdmissionResult',
    'FeatureStore',
    'ShapeLimits',
    'DEFAULT_SHAPE_LIMITS',
    'load_shape_limits',
    'save_shape_limits',

    # Export
    'export_geojson',
    'write_geojson',
    'read_geojson',

    # Metrics
    'measure_feature',
    'total_overlap_area',
    'count_overlaps',

    # Core types (enums)
    'FeatureType',
    'FeatureStyle',
    'ConflictKind',

    # Core exceptions
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
