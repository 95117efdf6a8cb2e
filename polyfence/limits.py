"""Per-type shape limits.

:class:`ShapeLimits` caps how many shapes of each type a store accepts. The
store receives a limits object at construction and never reads or writes
storage itself; :func:`load_shape_limits` and :func:`save_shape_limits` are
for whoever owns the persisted settings.
"""

from __future__ import annotations

import json
import logging
import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from .core.errors import ConfigurationError
from .core.types import FeatureType

logger = logging.getLogger(__name__)

_FIELD_BY_TYPE = {
    FeatureType.POLYGON: 'polygon',
    FeatureType.RECTANGLE: 'rectangle',
    FeatureType.CIRCLE: 'circle',
    FeatureType.LINE_STRING: 'line_string',
}


@dataclass(frozen=True)
class ShapeLimits:
    """Maximum number of shapes per type.

    Attributes:
        polygon: Maximum polygons (default: 10)
        rectangle: Maximum rectangles (default: 5)
        circle: Maximum circles (default: 5)
        line_string: Maximum line strings (default: 20)

    Examples:
        >>> limits = ShapeLimits(polygon=1)
        >>> limits.limit_for(FeatureType.POLYGON)
        1
        >>> ShapeLimits.from_dict({'lineString': 3}).line_string
        3
    """
    polygon: int = 10
    rectangle: int = 5
    circle: int = 5
    line_string: int = 20

    def __post_init__(self):
        for name in _FIELD_BY_TYPE.values():
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"Limit for {name} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigurationError(f"Limit for {name} must be non-negative, got {value}")

    def limit_for(self, feature_type: FeatureType) -> int:
        """Return the configured maximum for ``feature_type``."""
        return getattr(self, _FIELD_BY_TYPE[FeatureType(feature_type)])

    def replace(self, **changes: int) -> "ShapeLimits":
        """Return a copy with some limits changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, int]:
        """Return the limits keyed by wire type name (``lineString`` etc.)."""
        return {t.value: self.limit_for(t) for t in FeatureType}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShapeLimits":
        """Build limits from a mapping keyed by wire type name.

        Missing types keep their default; unknown keys are ignored.

        Raises:
            ConfigurationError: If ``data`` is not a mapping or a value is not
                a non-negative integer
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Shape limits must be a mapping, got {type(data).__name__}")

        changes = {}
        for feature_type, name in _FIELD_BY_TYPE.items():
            if feature_type.value in data:
                changes[name] = data[feature_type.value]
        return cls(**changes)


DEFAULT_SHAPE_LIMITS = ShapeLimits()


def load_shape_limits(path: Union[str, Path]) -> ShapeLimits:
    """Read limits from a JSON file.

    A missing file yields the defaults. A file that cannot be parsed or holds
    invalid limits also yields the defaults, with a warning logged.
    """
    path = Path(path)
    if not path.exists():
        return DEFAULT_SHAPE_LIMITS

    try:
        return ShapeLimits.from_dict(json.loads(path.read_text(encoding='utf-8')))
    # Covers JSONDecodeError, UnicodeDecodeError and ConfigurationError
    except ValueError as exc:
        logger.warning("Ignoring shape limits in %s: %s", path, exc)
        return DEFAULT_SHAPE_LIMITS


def save_shape_limits(limits: ShapeLimits, path: Union[str, Path]) -> None:
    """Write limits to a JSON file."""
    Path(path).write_text(json.dumps(limits.to_dict(), indent=2), encoding='utf-8')


__all__ = [
    'ShapeLimits',
    'DEFAULT_SHAPE_LIMITS',
    'load_shape_limits',
    'save_shape_limits',
]
