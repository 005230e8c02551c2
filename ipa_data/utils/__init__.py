"""Utility functions for Indigenous Protected Areas processing."""

from ipa_data.utils.geometry import (
    compute_centroid,
    get_geometry_bounds,
    haversine_distance_km,
)
from ipa_data.utils.search import (
    available_states,
    filter_areas,
    has_active_filter,
    nearest_areas,
    state_name,
)

__all__ = [
    "available_states",
    "compute_centroid",
    "filter_areas",
    "get_geometry_bounds",
    "has_active_filter",
    "haversine_distance_km",
    "nearest_areas",
    "state_name",
]
