"""GeoJSON export and import of accepted features.

Exported documents are standard FeatureCollections. Each feature carries its
geometry plus exactly three properties: ``type``, ``id`` and ``createdAt``.
Internal fields kept in :attr:`Feature.properties` are left out.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from .core.errors import InvalidGeometryError
from .features import Feature

DEFAULT_EXPORT_FILENAME = 'map-features.geojson'


def export_geojson(features: Iterable[Feature]) -> Dict[str, Any]:
    """Build a FeatureCollection document from ``features``.

    Examples:
        >>> doc = export_geojson(store.features)
        >>> doc['type']
        'FeatureCollection'
        >>> sorted(doc['features'][0]['properties'])
        ['createdAt', 'id', 'type']
    """
    return {
        'type': 'FeatureCollection',
        'features': [feature.to_geojson() for feature in features],
    }


def write_geojson(
    features: Iterable[Feature],
    path: Union[str, Path] = DEFAULT_EXPORT_FILENAME,
    indent: int = 2,
) -> Path:
    """Write ``features`` as a FeatureCollection to ``path``.

    Returns:
        The path written to
    """
    path = Path(path)
    path.write_text(json.dumps(export_geojson(features), indent=indent), encoding='utf-8')
    return path


def read_geojson(source: Union[Mapping, str, Path]) -> List[Feature]:
    """Parse a FeatureCollection back into features.

    Args:
        source: Parsed document, JSON text, or path to a ``.geojson`` file

    Returns:
        Features in document order

    Raises:
        InvalidGeometryError: If the document is not a FeatureCollection or an
            entry has an unknown type or unsupported geometry
    """
    document = _load_document(source)
    if not isinstance(document, Mapping) or document.get('type') != 'FeatureCollection':
        raise InvalidGeometryError("Expected a GeoJSON FeatureCollection")

    return [Feature.from_geojson(entry) for entry in document.get('features') or []]


def _load_document(source):
    if isinstance(source, Mapping):
        return source
    if isinstance(source, Path):
        text = source.read_text(encoding='utf-8')
    elif source.lstrip().startswith('{'):
        text = source
    else:
        text = Path(source).read_text(encoding='utf-8')

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidGeometryError(f"Invalid GeoJSON document: {exc}") from exc


__all__ = [
    'DEFAULT_EXPORT_FILENAME',
    'export_geojson',
    'write_geojson',
    'read_geojson',
]
