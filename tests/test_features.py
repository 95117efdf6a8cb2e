"""Tests for feature records, constructors and type tags."""

import dataclasses
import re

import pytest
from shapely.geometry import LineString, Polygon

from polyfence import (
    Feature,
    FeatureType,
    InvalidGeometryError,
    calculate_distance,
    create_circle,
    create_feature,
    create_line_string,
    create_polygon,
    create_rectangle,
    generate_feature_id,
)


class TestFeatureType:
    """Tests for the FeatureType enum."""

    def test_wire_values(self):
        assert [t.value for t in FeatureType] == ['polygon', 'rectangle', 'circle', 'lineString']

    def test_area_types(self):
        assert FeatureType.area_types() == (
            FeatureType.POLYGON, FeatureType.RECTANGLE, FeatureType.CIRCLE,
        )
        assert not FeatureType.LINE_STRING.is_area

    def test_styles(self):
        assert FeatureType.POLYGON.style.color == '#3388ff'
        assert FeatureType.RECTANGLE.style.fill_color == '#ff7800'
        assert FeatureType.CIRCLE.style.fill_opacity == 0.3
        line_style = FeatureType.LINE_STRING.style
        assert not line_style.fill
        assert line_style.weight == 3


class TestFeatureIds:
    """Tests for generate_feature_id()."""

    def test_format(self):
        assert re.match(r'^feature_\d+_[0-9a-f]{9}$', generate_feature_id())

    def test_unique(self):
        ids = {generate_feature_id() for _ in range(1000)}
        assert len(ids) == 1000


class TestCreateFeature:
    """Tests for create_feature() and the Feature record."""

    def test_polygon_feature(self):
        poly = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        feature = create_feature(poly, FeatureType.POLYGON)

        assert feature.feature_type is FeatureType.POLYGON
        assert feature.geometry is poly
        assert feature.is_area
        assert feature.area == pytest.approx(1.0)
        assert feature.created_at > 0

    def test_string_type_and_mapping_geometry(self):
        feature = create_feature(
            {'type': 'LineString', 'coordinates': [[0, 0], [1, 1]]},
            'lineString',
        )
        assert feature.feature_type is FeatureType.LINE_STRING
        assert isinstance(feature.geometry, LineString)
        assert not feature.is_area

    def test_unknown_type(self):
        with pytest.raises(InvalidGeometryError, match="Unknown feature type"):
            create_feature(Polygon([(0, 0), (1, 0), (1, 1)]), 'hexagon')

    def test_area_type_needs_polygon(self):
        with pytest.raises(InvalidGeometryError, match="need a Polygon"):
            create_feature(LineString([(0, 0), (1, 1)]), FeatureType.CIRCLE)

    def test_line_type_needs_line(self):
        with pytest.raises(InvalidGeometryError, match="need a LineString"):
            create_feature(Polygon([(0, 0), (1, 0), (1, 1)]), FeatureType.LINE_STRING)

    def test_empty_geometry(self):
        with pytest.raises(InvalidGeometryError, match="Empty geometry"):
            create_feature(Polygon(), FeatureType.POLYGON)

    def test_frozen(self):
        feature = create_feature(Polygon([(0, 0), (1, 0), (1, 1)]), FeatureType.POLYGON)
        with pytest.raises(dataclasses.FrozenInstanceError):
            feature.geometry = Polygon()

    def test_with_geometry_keeps_identity(self):
        feature = create_feature(
            Polygon([(0, 0), (2, 0), (2, 2), (0, 2)]),
            FeatureType.RECTANGLE,
            properties={'label': 'field'},
        )
        smaller = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        clipped = feature.with_geometry(smaller)

        assert clipped.id == feature.id
        assert clipped.created_at == feature.created_at
        assert clipped.properties == {'label': 'field'}
        assert clipped.properties is not feature.properties
        assert feature.area == pytest.approx(4.0)

    def test_properties_ignored_by_equality(self):
        feature = create_feature(Polygon([(0, 0), (1, 0), (1, 1)]), FeatureType.POLYGON)
        assert dataclasses.replace(feature, properties={'x': 1}) == feature

    def test_properties_read_only(self):
        feature = create_feature(Polygon([(0, 0), (1, 0), (1, 1)]), FeatureType.POLYGON)
        with pytest.raises(TypeError):
            feature.properties['x'] = 1

    def test_properties_detached_from_caller(self):
        source = {'label': 'field'}
        feature = create_feature(
            Polygon([(0, 0), (1, 0), (1, 1)]), FeatureType.POLYGON, properties=source
        )
        source['label'] = 'changed'
        source['extra'] = True

        assert feature.properties == {'label': 'field'}

    def test_replace_properties_also_detached(self):
        feature = create_feature(Polygon([(0, 0), (1, 0), (1, 1)]), FeatureType.POLYGON)
        source = {'x': 1}
        copy = dataclasses.replace(feature, properties=source)
        source['x'] = 2

        assert copy.properties == {'x': 1}

    def test_from_geojson_unknown_type(self):
        data = {
            'type': 'Feature',
            'geometry': {'type': 'Polygon', 'coordinates': [[[0, 0], [1, 0], [1, 1], [0, 0]]]},
            'properties': {'type': 'triangle', 'id': 'x', 'createdAt': 1},
        }
        with pytest.raises(InvalidGeometryError):
            Feature.from_geojson(data)


class TestConstructors:
    """Tests for the polygon, rectangle, circle and line constructors."""

    def test_polygon_closes_ring(self):
        poly = create_polygon([(0, 0), (1, 0), (1, 1)])
        coords = list(poly.exterior.coords)
        assert coords[0] == coords[-1]
        assert poly.area == pytest.approx(0.5)

    def test_polygon_already_closed(self):
        poly = create_polygon([(0, 0), (1, 0), (1, 1), (0, 0)])
        assert len(poly.exterior.coords) == 4

    def test_polygon_too_few_points(self):
        with pytest.raises(InvalidGeometryError, match="at least 3"):
            create_polygon([(0, 0), (1, 1)])

    def test_rectangle_normalises_corners(self):
        rect = create_rectangle((2, 3), (0, 1))
        assert list(rect.exterior.coords) == [
            (0.0, 1.0), (2.0, 1.0), (2.0, 3.0), (0.0, 3.0), (0.0, 1.0),
        ]

    def test_rectangle_degenerate(self):
        with pytest.raises(InvalidGeometryError):
            create_rectangle((0, 0), (0, 5))

    def test_circle_vertices(self):
        center = (13.4, 52.5)
        circle = create_circle(center, 2.0)
        coords = list(circle.exterior.coords)

        assert len(coords) == 65
        assert coords[0] == coords[-1]
        for point in coords[:-1]:
            assert calculate_distance(center, point) == pytest.approx(2.0, rel=1e-6)

    def test_circle_starts_due_north(self):
        lng, lat = create_circle((10.0, 45.0), 5.0).exterior.coords[0]
        assert lng == pytest.approx(10.0)
        assert lat > 45.0

    def test_circle_steps(self):
        circle = create_circle((0, 0), 1.0, steps=8)
        assert len(circle.exterior.coords) == 9

    def test_circle_radius_must_be_positive(self):
        with pytest.raises(InvalidGeometryError, match="positive"):
            create_circle((0, 0), 0)

    def test_line_string(self):
        line = create_line_string([(0, 0), (1, 1), (2, 0)])
        assert len(line.coords) == 3

    def test_line_string_too_short(self):
        with pytest.raises(InvalidGeometryError):
            create_line_string([(1, 1), (1, 1)])


class TestCalculateDistance:
    """Tests for calculate_distance()."""

    def test_one_degree_at_equator(self):
        assert calculate_distance((0, 0), (1, 0)) == pytest.approx(111.195, rel=1e-4)

    def test_zero(self):
        assert calculate_distance((5, 5), (5, 5)) == 0.0

    def test_symmetric(self):
        a, b = (2.35, 48.85), (-0.13, 51.51)
        assert calculate_distance(a, b) == pytest.approx(calculate_distance(b, a))
