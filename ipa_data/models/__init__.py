"""Data models for Indigenous Protected Areas data."""

from ipa_data.models.features import (
    EsriRingsGeometry,
    GeoJSONGeometry,
    IpaFeature,
    IpaFeatureCollection,
    MissingGeometry,
    parse_geometry,
)
from ipa_data.models.geocoding import GeocodedPlace
from ipa_data.models.protected_areas import ProtectedArea

__all__ = [
    "EsriRingsGeometry",
    "GeoJSONGeometry",
    "GeocodedPlace",
    "IpaFeature",
    "IpaFeatureCollection",
    "MissingGeometry",
    "ProtectedArea",
    "parse_geometry",
]
