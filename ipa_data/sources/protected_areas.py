"""Indigenous Protected Areas feature service client.

Provides:
- One-shot download of the national IPA dataset (DCCEEW map service)
- Normalization of raw feature properties into ProtectedArea records
- GeoDataFrame conversion for analysis and export
"""

import logging
import math
from numbers import Real
from typing import Any, List, Optional

import geopandas as gpd
import pandas as pd
from pydantic import ValidationError
from shapely.geometry import Point

from ipa_data.config import IPAConfig
from ipa_data.constants.authorities import (
    AUTHORITY_LABELS,
    UNKNOWN_AUTHORITY,
    UNKNOWN_STATE,
    UNKNOWN_TYPE,
    UNNAMED_AREA,
)
from ipa_data.constants.data_sources import IPA_QUERY_PARAMS
from ipa_data.models.features import IpaFeature, IpaFeatureCollection
from ipa_data.models.protected_areas import ProtectedArea
from ipa_data.sources.base import BaseClient, DataSourceError
from ipa_data.utils.geometry import compute_centroid

logger = logging.getLogger(__name__)


def format_managing_body(authority: Any) -> str:
    """Resolve an AUTHORITY code to a display label.

    Examples:
        >>> format_managing_body("LALC")
        'Local Aboriginal Land Council (LALC)'
        >>> format_managing_body(" XYZ ")
        'XYZ'
        >>> format_managing_body(None)
        'Unknown'
    """
    code = authority.strip() if isinstance(authority, str) else ""

    if code and code in AUTHORITY_LABELS:
        return f"{AUTHORITY_LABELS[code]} ({code})"
    return code or UNKNOWN_AUTHORITY


def _coordinate(value: Any, limit: float) -> Optional[float]:
    # Only real numbers count; numeric strings are left as missing
    if not isinstance(value, Real) or isinstance(value, bool):
        return None
    value = float(value)
    if not math.isfinite(value) or abs(value) > limit:
        return None
    return value


def _text(value: Any, default: str) -> str:
    return default if value is None else str(value)


def _source_id(feature: IpaFeature) -> Optional[int]:
    candidates = (feature.properties.get("OBJECTID"), feature.properties.get("FID"), feature.id)
    for candidate in candidates:
        if isinstance(candidate, int) and not isinstance(candidate, bool):
            return candidate
    return None


def normalize_feature(
    feature: IpaFeature,
    index: int,
    centroid_fallback: bool = False,
) -> ProtectedArea:
    """Transform a raw feature into a ProtectedArea.

    Args:
        feature: Raw feature from the service
        index: Position of the feature in its collection (becomes ``id``)
        centroid_fallback: Use the geometry centroid when LATITUDE/LONGITUDE
            are not numeric

    Returns:
        Normalized ProtectedArea
    """
    props = feature.properties

    lat = _coordinate(props.get("LATITUDE"), 90)
    lng = _coordinate(props.get("LONGITUDE"), 180)

    if lat is None or lng is None:
        lat = lng = None
        if centroid_fallback:
            centroid = compute_centroid(feature.geometry)
            if centroid:
                lat = _coordinate(centroid["lat"], 90)
                lng = _coordinate(centroid["lng"], 180)
                if lat is None or lng is None:
                    lat = lng = None

    return ProtectedArea(
        id=index,
        source_id=_source_id(feature),
        name=_text(props.get("NAME"), UNNAMED_AREA),
        state=_text(props.get("STATE"), UNKNOWN_STATE),
        type=_text(props.get("TYPE"), UNKNOWN_TYPE),
        managing_body=format_managing_body(props.get("AUTHORITY")),
        lat=lat,
        lng=lng,
    )


def normalize_features(
    collection: IpaFeatureCollection,
    centroid_fallback: bool = False,
) -> List[ProtectedArea]:
    """Normalize every feature, assigning ids by position."""
    areas = [
        normalize_feature(feature, index, centroid_fallback=centroid_fallback)
        for index, feature in enumerate(collection.features)
    ]

    with_coords = sum(1 for area in areas if area.has_coordinates)
    logger.info(f"Normalized {len(areas)} protected areas ({with_coords} with coordinates)")
    return areas


def to_geodataframe(areas: List[ProtectedArea]) -> gpd.GeoDataFrame:
    """Convert areas with coordinates to a GeoDataFrame of points.

    Args:
        areas: Normalized areas

    Returns:
        GeoDataFrame in EPSG:4326 (areas without coordinates are dropped)
    """
    located = [area for area in areas if area.has_coordinates]
    if not located:
        return gpd.GeoDataFrame()

    df = pd.DataFrame([area.model_dump() for area in located])
    geometry = [Point(area.lng, area.lat) for area in located]

    return gpd.GeoDataFrame(df, geometry=geometry, crs="EPSG:4326")


class IPAFeatureServiceClient(BaseClient):
    """Client for the Indigenous Protected Areas map service.

    Data source: Department of Climate Change, Energy, the Environment and Water
    URL: https://gis.environment.gov.au/gispubmap/rest/services/ogc_services/Indigenous_Protected_Areas/MapServer

    The whole national dataset is requested in a single query; there is no
    pagination or incremental loading.
    """

    def __init__(self, config: Optional[IPAConfig] = None):
        """Initialize IPA feature service client.

        Args:
            config: Service configuration (defaults to IPAConfig())
        """
        self.config = config or IPAConfig()
        super().__init__(timeout=self.config.request_timeout_seconds)

    async def fetch_all(self) -> IpaFeatureCollection:
        """Fetch every IPA feature as a feature collection.

        Returns:
            Validated IpaFeatureCollection

        Raises:
            NetworkError: If the service responds with a non-success status
            DataSourceError: If the response is not a feature collection

        Example:
            >>> client = IPAFeatureServiceClient()
            >>> collection = await client.fetch_all()
        """
        logger.info("Fetching Indigenous Protected Areas from DCCEEW map service")

        data = await self._get_json(
            self.config.ipa_service_url,
            params=dict(IPA_QUERY_PARAMS),
            description="Failed to fetch Indigenous Protected Areas",
        )

        if not isinstance(data, dict) or "features" not in data:
            # ArcGIS reports query errors as 200 with an "error" object
            detail = data.get("error") if isinstance(data, dict) else type(data).__name__
            raise DataSourceError(f"Unexpected IPA service response: {detail}")

        try:
            collection = IpaFeatureCollection.model_validate(data)
        except ValidationError as e:
            raise DataSourceError(f"Malformed IPA feature collection: {e}") from e

        logger.info(f"Fetched {len(collection.features)} Indigenous Protected Areas")
        return collection

    async def fetch(self, **kwargs) -> List[ProtectedArea]:
        """Fetch and normalize all areas (implements BaseClient.fetch).

        Returns:
            List of ProtectedArea records in service order
        """
        collection = await self.fetch_all()
        return normalize_features(
            collection,
            centroid_fallback=self.config.use_geometry_centroid_fallback,
        )
