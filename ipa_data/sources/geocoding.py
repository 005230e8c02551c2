"""Town/locality geocoding via OpenStreetMap Nominatim."""

import logging
import math
from typing import Any, Dict, List, Optional

from ipa_data.config import IPAConfig
from ipa_data.constants.regions import ALL_STATES, AUSTRALIA_COUNTRY_CODE
from ipa_data.models.geocoding import GeocodedPlace
from ipa_data.sources.base import BaseClient

logger = logging.getLogger(__name__)


def build_search_text(query: str, state: Optional[str] = None) -> str:
    """Bias a town query towards Australia and, optionally, one state.

    Examples:
        >>> build_search_text("Ballina", "NSW")
        'Ballina, NSW, Australia'
        >>> build_search_text("Ballina", "ALL")
        'Ballina, Australia'
    """
    if state and state != ALL_STATES:
        return f"{query}, {state}, Australia"
    return f"{query}, Australia"


def _parse_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


class NominatimClient(BaseClient):
    """Client for the Nominatim search API.

    Only the single best match is requested. Nominatim's usage policy allows
    at most one request per second and asks for an identifying User-Agent,
    both taken from IPAConfig.

    Base URL: https://nominatim.openstreetmap.org/
    """

    def __init__(self, config: Optional[IPAConfig] = None):
        """Initialize Nominatim client.

        Args:
            config: Service configuration (defaults to IPAConfig())
        """
        self.config = config or IPAConfig()
        super().__init__(
            rate_limit=self.config.geocoding_rate_limit,
            timeout=self.config.request_timeout_seconds,
        )

    async def geocode_town(
        self,
        query: str,
        state: Optional[str] = None,
    ) -> Optional[GeocodedPlace]:
        """Resolve a town or locality in Australia.

        Args:
            query: Free-text town/locality name
            state: State/territory code to bias the search, or "ALL"

        Returns:
            GeocodedPlace for the first result, or None when the query is
            blank, nothing matched, or the coordinates are not usable

        Raises:
            NetworkError: If Nominatim responds with a non-success status

        Example:
            >>> client = NominatimClient()
            >>> place = await client.geocode_town("Dubbo", "NSW")
        """
        trimmed = query.strip()
        if not trimmed:
            return None

        search_text = build_search_text(trimmed, state)
        logger.info(f"Geocoding '{search_text}'")

        params = {
            "format": "json",
            "limit": "1",
            "countrycodes": AUSTRALIA_COUNTRY_CODE,
            "q": search_text,
        }
        headers = {
            "Accept-Language": self.config.accept_language,
            "User-Agent": self.config.user_agent,
        }

        results = await self._get_json(
            self.config.geocoding_url,
            params=params,
            headers=headers,
            description="Failed to geocode town",
        )

        if not isinstance(results, list) or not results:
            logger.warning(f"No geocoding results for '{search_text}'")
            return None

        first = results[0]
        if not isinstance(first, dict):
            logger.warning(f"Unexpected geocoding result for '{search_text}'")
            return None

        lat = _parse_float(first.get("lat"))
        lng = _parse_float(first.get("lon"))

        if not (math.isfinite(lat) and math.isfinite(lng)):
            logger.warning(f"Geocoding result for '{search_text}' has no usable coordinates")
            return None
        if abs(lat) > 90 or abs(lng) > 180:
            logger.warning(f"Geocoding result for '{search_text}' is out of range")
            return None

        place = GeocodedPlace(
            display_name=str(first.get("display_name") or trimmed),
            lat=lat,
            lng=lng,
        )
        logger.info(f"Geocoded '{search_text}' to ({place.lat}, {place.lng})")
        return place

    async def fetch(self, query: str = "", state: Optional[str] = None, **kwargs) -> List[Dict]:
        """Geocode a town (implements BaseClient.fetch).

        Returns:
            A list with zero or one place dictionaries
        """
        place = await self.geocode_town(query, state=state)
        return [place.model_dump()] if place else []
