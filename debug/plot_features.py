"""Simple feature visualization helpers for debugging."""

import matplotlib.pyplot as plt
from shapely.geometry import LineString, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from polyfence import Feature, FeatureStyle


def plot_features(features, title: str = "Features"):
    """Plot features with their per-type styles.

    Args:
        features: Iterable of features (a FeatureStore works too)
        title: Plot title
    """
    fig, ax = plt.subplots(figsize=(7, 6))

    for feature in features:
        _plot_feature(ax, feature)

    ax.set_title(title)
    ax.set_aspect('equal')
    ax.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.show()


def plot_admission(candidate: Feature, features, result, title: str = "Admission"):
    """Plot the drawn candidate next to the store after ``add``.

    Args:
        candidate: Shape as drawn
        features: Accepted features after the add
        result: AdmissionResult returned by the add
        title: Plot title
    """
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    for feature in features:
        if feature.id != candidate.id:
            _plot_feature(ax1, feature)
    _plot_geometry(ax1, candidate.geometry, candidate.feature_type.style, dashed=True)
    ax1.set_title("Drawn")

    for feature in features:
        _plot_feature(ax2, feature)
    ax2.set_title("Stored" if result.success else f"Rejected: {result.error}")

    for ax in (ax1, ax2):
        ax.set_aspect('equal')
        ax.grid(True, alpha=0.3)

    fig.suptitle(title)
    plt.tight_layout()
    plt.show()


def _plot_feature(ax, feature: Feature):
    _plot_geometry(ax, feature.geometry, feature.feature_type.style)


def _plot_geometry(ax, geom: BaseGeometry, style: FeatureStyle, dashed: bool = False):
    """Plot a geometry on the given axes.

    Args:
        ax: Matplotlib axes
        geom: Geometry to plot
        style: Style of the feature type
        dashed: Draw the outline dashed (shape still being drawn)
    """
    linestyle = '--' if dashed else '-'
    if isinstance(geom, Polygon):
        _plot_polygon(ax, geom, style, linestyle)
    elif isinstance(geom, MultiPolygon):
        for poly in geom.geoms:
            _plot_polygon(ax, poly, style, linestyle)
    elif isinstance(geom, LineString):
        x, y = geom.xy
        ax.plot(x, y, color=style.color, linewidth=style.weight, linestyle=linestyle)


def _plot_polygon(ax, poly: Polygon, style: FeatureStyle, linestyle: str):
    # Plot exterior
    x, y = poly.exterior.xy
    if style.fill:
        ax.fill(x, y, color=style.fill_color, alpha=style.fill_opacity)
    ax.plot(x, y, color=style.color, linewidth=style.weight, linestyle=linestyle)

    # Plot holes (as white)
    for interior in poly.interiors:
        x, y = interior.xy
        ax.fill(x, y, color='white', edgecolor=style.color, linewidth=1)
