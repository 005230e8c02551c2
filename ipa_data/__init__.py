"""Indigenous Protected Areas Data Library

A Python library for exploring Australia's Indigenous Protected Areas (IPAs).

This library provides:
- An API client for the national IPA feature service (DCCEEW)
- A geocoding client for Australian towns (OpenStreetMap Nominatim)
- Data models for validation and processing
- Name/state filtering and nearest-area search
- Selection state and map framing shared by list and map views
- Configuration management
"""

__version__ = "0.1.0"

# Configuration
from ipa_data.config import IPAConfig

# Constants
from ipa_data.constants.authorities import AUTHORITY_LABELS
from ipa_data.constants.regions import ALL_STATES, AUSTRALIAN_STATES

# Data models
from ipa_data.models.features import IpaFeature, IpaFeatureCollection
from ipa_data.models.geocoding import GeocodedPlace
from ipa_data.models.protected_areas import ProtectedArea

# Base classes
from ipa_data.sources.base import BaseClient, DataSourceError, NetworkError

# Clients
from ipa_data.sources.geocoding import NominatimClient
from ipa_data.sources.protected_areas import IPAFeatureServiceClient

# Selection and session
from ipa_data.selection import SelectionController, SelectionState
from ipa_data.explorer import LoadStatus, ProtectedAreaExplorer

# Utilities
from ipa_data.utils import (
    compute_centroid,
    filter_areas,
    haversine_distance_km,
    nearest_areas,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "IPAConfig",
    # Constants
    "ALL_STATES",
    "AUSTRALIAN_STATES",
    "AUTHORITY_LABELS",
    # Base classes
    "BaseClient",
    "DataSourceError",
    "NetworkError",
    # Clients
    "IPAFeatureServiceClient",
    "NominatimClient",
    # Data models
    "GeocodedPlace",
    "IpaFeature",
    "IpaFeatureCollection",
    "ProtectedArea",
    # Selection and session
    "LoadStatus",
    "ProtectedAreaExplorer",
    "SelectionController",
    "SelectionState",
    # Utilities
    "compute_centroid",
    "filter_areas",
    "haversine_distance_km",
    "nearest_areas",
]
