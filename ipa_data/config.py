"""Configuration for the Indigenous Protected Areas data sources.

This module provides the configuration dataclass for service URLs, request
timeouts, rate limits and search settings.
"""

import os
from dataclasses import dataclass
from typing import Optional

from ipa_data.constants.data_sources import GEOCODING_URL, IPA_SERVICE_URL


@dataclass
class IPAConfig:
    """Configuration for IPA data sources.

    Attributes:
        ipa_service_url: Query endpoint of the IPA feature service
        geocoding_url: Nominatim search endpoint
        accept_language: Language requested from the geocoder (default: en-AU)
        user_agent: Identifying User-Agent sent to the geocoder
        request_timeout_seconds: Total timeout per HTTP request (default: 60)
        geocoding_rate_limit: Geocoder requests per minute (default: 60)
        nearest_limit: Number of nearby areas returned by a town search (default: 5)
        use_geometry_centroid_fallback: Derive coordinates from the geometry
            centroid when LATITUDE/LONGITUDE are missing (default: False)

    Examples:
        >>> config = IPAConfig()
        >>> config.nearest_limit
        5

        >>> config = IPAConfig(nearest_limit=10, request_timeout_seconds=30)
        >>> config.request_timeout_seconds
        30
    """

    ipa_service_url: str = IPA_SERVICE_URL
    geocoding_url: str = GEOCODING_URL
    accept_language: str = "en-AU"
    user_agent: str = "ipa-data/0.1 (Indigenous Protected Areas explorer)"
    request_timeout_seconds: float = 60
    geocoding_rate_limit: int = 60  # requests per minute
    nearest_limit: int = 5
    use_geometry_centroid_fallback: bool = False

    @classmethod
    def from_env(cls, **overrides) -> "IPAConfig":
        """Build a config, taking service URLs from the environment when set.

        Reads IPA_SERVICE_URL and IPA_GEOCODING_URL. Keyword arguments win
        over both the environment and the defaults.
        """
        env_values = {}

        ipa_service_url: Optional[str] = os.getenv("IPA_SERVICE_URL")
        if ipa_service_url:
            env_values["ipa_service_url"] = ipa_service_url

        geocoding_url: Optional[str] = os.getenv("IPA_GEOCODING_URL")
        if geocoding_url:
            env_values["geocoding_url"] = geocoding_url

        env_values.update(overrides)
        return cls(**env_values)
