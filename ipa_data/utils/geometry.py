"""Geometry utilities for distances, centroids and bounding boxes.

Coordinates follow GeoJSON ordering: innermost pairs are ``[lng, lat]``.
All calculations are spherical approximations, adequate for ranking nearby
areas but not for survey-grade measurement.
"""

import math
from numbers import Real
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from ipa_data.models.features import Geometry, parse_geometry

# Mean Earth radius in kilometres
EARTH_RADIUS_KM = 6371.0

GeometryLike = Union[Geometry, Dict[str, Any], None]


def haversine_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points in kilometres.

    Inputs are decimal degrees. Non-finite inputs (NaN or infinity) produce
    NaN rather than raising.

    Args:
        lat1: Latitude of the first point
        lng1: Longitude of the first point
        lat2: Latitude of the second point
        lng2: Longitude of the second point

    Returns:
        Distance in kilometres.

    Examples:
        >>> haversine_distance_km(-32.2569, 148.6011, -32.2569, 148.6011)
        0.0
    """
    if not all(math.isfinite(v) for v in (lat1, lng1, lat2, lng2)):
        return math.nan

    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lng / 2) ** 2
    )
    # Rounding can push nearly antipodal points just past 1
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _walk_positions(value: Any) -> Iterator[Tuple[float, float]]:
    if isinstance(value, (list, tuple)):
        if len(value) >= 2 and _is_number(value[0]) and _is_number(value[1]):
            yield float(value[0]), float(value[1])
        else:
            for item in value:
                yield from _walk_positions(item)


def extract_positions(geometry: GeometryLike) -> List[Tuple[float, float]]:
    """Flatten a geometry into its ``(lng, lat)`` positions.

    Accepts a raw geometry dictionary (GeoJSON ``coordinates`` or Esri
    ``rings``) or an already parsed geometry.
    """
    parsed = parse_geometry(geometry)

    if parsed.kind == "geojson":
        return list(_walk_positions(parsed.coordinates))
    if parsed.kind == "esri":
        return list(_walk_positions(parsed.rings))
    return []


def compute_centroid(geometry: GeometryLike) -> Optional[Dict[str, float]]:
    """Unweighted mean of every position in a geometry.

    Closing ring vertices are counted like any other vertex, and no area
    weighting is applied, so the result is only a rough midpoint.

    Args:
        geometry: Raw or parsed geometry

    Returns:
        ``{"lat": ..., "lng": ...}`` or None for empty/absent geometry.

    Examples:
        >>> compute_centroid({"type": "Point", "coordinates": [133.0, -25.0]})
        {'lat': -25.0, 'lng': 133.0}
        >>> compute_centroid(None) is None
        True
    """
    positions = extract_positions(geometry)
    if not positions:
        return None

    sum_lng = sum(lng for lng, _ in positions)
    sum_lat = sum(lat for _, lat in positions)
    count = len(positions)

    return {"lat": sum_lat / count, "lng": sum_lng / count}


def get_geometry_bounds(
    geometry: GeometryLike,
) -> Optional[Tuple[float, float, float, float]]:
    """Bounding box of a geometry.

    Returns:
        Tuple of (swlat, swlng, nelat, nelng), or None for empty geometry.

    Examples:
        >>> get_geometry_bounds({"rings": [[[130.0, -12.0], [131.0, -11.0]]]})
        (-12.0, 130.0, -11.0, 131.0)
    """
    positions = extract_positions(geometry)
    if not positions:
        return None

    lngs = [lng for lng, _ in positions]
    lats = [lat for _, lat in positions]

    return (min(lats), min(lngs), max(lats), max(lngs))
