"""API clients for Indigenous Protected Areas data sources."""

from ipa_data.sources.base import BaseClient, DataSourceError, NetworkError
from ipa_data.sources.geocoding import NominatimClient
from ipa_data.sources.protected_areas import (
    IPAFeatureServiceClient,
    normalize_features,
    to_geodataframe,
)

__all__ = [
    "BaseClient",
    "DataSourceError",
    "IPAFeatureServiceClient",
    "NetworkError",
    "NominatimClient",
    "normalize_features",
    "to_geodataframe",
]
