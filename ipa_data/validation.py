"""
Data quality checks for the IPA feature collection.

This module reports problems that do not stop the explorer from working but
are worth knowing about:
1. Features without usable coordinates (no marker, excluded from town search)
2. Features without a name
3. Missing or invalid polygon geometries
"""

import logging
from typing import List

from shapely.geometry import shape
from shapely.validation import explain_validity

from ipa_data.constants.authorities import UNNAMED_AREA
from ipa_data.models.features import IpaFeatureCollection
from ipa_data.models.protected_areas import ProtectedArea

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when a feature collection is unusable."""

    pass


def check_geometries(collection: IpaFeatureCollection) -> List[str]:
    """
    Check each feature geometry with shapely.

    Args:
        collection: Raw feature collection

    Returns:
        List of warnings, one per missing or invalid geometry
    """
    warnings = []

    for idx, feature in enumerate(collection.features):
        geometry = feature.geometry.to_geojson()
        if geometry is None:
            warnings.append(f"Feature {idx}: missing geometry")
            continue

        try:
            geom = shape(geometry)
        except Exception as e:
            warnings.append(f"Feature {idx}: unreadable geometry ({e})")
            continue

        if geom.is_empty:
            warnings.append(f"Feature {idx}: empty geometry")
        elif not geom.is_valid:
            warnings.append(f"Feature {idx}: {explain_validity(geom)}")

    return warnings


def check_areas(areas: List[ProtectedArea]) -> List[str]:
    """
    Check normalized areas for missing names and coordinates.

    Returns:
        List of summary warnings
    """
    warnings = []

    unnamed = [area.id for area in areas if area.name == UNNAMED_AREA]
    if unnamed:
        warnings.append(f"{len(unnamed)}/{len(areas)} areas have no name")

    without_coords = [area.id for area in areas if not area.has_coordinates]
    if without_coords:
        warnings.append(
            f"{len(without_coords)}/{len(areas)} areas have no coordinates "
            "and are excluded from the map and town search"
        )

    return warnings


def validate_feature_collection(
    collection: IpaFeatureCollection,
    areas: List[ProtectedArea],
    min_features: int = 1,
    max_invalid_fraction: float = 0.1,
) -> List[str]:
    """
    Validate a downloaded collection and its normalized areas.

    Args:
        collection: Raw feature collection
        areas: Areas normalized from the collection
        min_features: Minimum number of features expected
        max_invalid_fraction: Fail when more geometries than this are invalid

    Returns:
        List of warnings

    Raises:
        ValidationError: If there are too few features or too many bad geometries
    """
    if len(collection.features) < min_features:
        raise ValidationError(
            f"Feature collection has too few features: {len(collection.features)} "
            f"(expected at least {min_features})"
        )

    geometry_warnings = check_geometries(collection)
    if len(geometry_warnings) > len(collection.features) * max_invalid_fraction:
        raise ValidationError(
            f"Too many missing or invalid geometries: "
            f"{len(geometry_warnings)}/{len(collection.features)}"
        )

    warnings = check_areas(areas)
    if geometry_warnings:
        warnings.append(
            f"Some missing or invalid geometries: "
            f"{len(geometry_warnings)}/{len(collection.features)}"
        )

    for warning in warnings:
        logger.warning(warning)

    return warnings
