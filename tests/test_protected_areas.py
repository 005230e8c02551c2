"""Tests for the IPA feature service client and normalization."""

from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import geopandas as gpd
import pytest

from ipa_data.config import IPAConfig
from ipa_data.constants.data_sources import IPA_SERVICE_URL
from ipa_data.models.features import IpaFeature, IpaFeatureCollection
from ipa_data.sources.base import DataSourceError, NetworkError
from ipa_data.sources.protected_areas import (
    IPAFeatureServiceClient,
    format_managing_body,
    normalize_feature,
    normalize_features,
    to_geodataframe,
)


def mock_client_session(mock_session, response=None):
    """Wire a patched aiohttp.ClientSession so session.get() yields response.

    The session itself is a plain MagicMock: aiohttp's session.get() is a
    synchronous call returning an async context manager.

    Returns:
        The mock for session.get
    """
    session = MagicMock()
    session.get.return_value.__aenter__.return_value = response
    mock_session.return_value.__aenter__.return_value = session
    return session.get


def feature(properties, geometry=None):
    return IpaFeature.model_validate(
        {"type": "Feature", "properties": properties, "geometry": geometry}
    )


class TestFormatManagingBody:
    """Tests for AUTHORITY code resolution."""

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("LALC", "Local Aboriginal Land Council (LALC)"),
            ("IMG", "Indigenous Management Group (IMG)"),
            ("TSRA", "Torres Strait Regional Authority (TSRA)"),
            (" LALC ", "Local Aboriginal Land Council (LALC)"),
            ("XYZ", "XYZ"),
            ("  XYZ  ", "XYZ"),
            ("", "Unknown"),
            ("   ", "Unknown"),
            (None, "Unknown"),
            (42, "Unknown"),
        ],
    )
    def test_codes(self, code, expected):
        assert format_managing_body(code) == expected


class TestNormalizeFeature:
    """Tests for raw feature normalization."""

    def test_full_feature(self):
        """Test a feature with every property present."""
        area = normalize_feature(
            feature(
                {
                    "OBJECTID": 7,
                    "NAME": "Ngunya Jargoon IPA",
                    "STATE": "NSW",
                    "TYPE": "Dedicated",
                    "AUTHORITY": "LALC",
                    "LATITUDE": -28.95,
                    "LONGITUDE": 153.35,
                }
            ),
            index=3,
        )

        assert area.id == 3
        assert area.source_id == 7
        assert area.name == "Ngunya Jargoon IPA"
        assert area.state == "NSW"
        assert area.type == "Dedicated"
        assert area.managing_body == "Local Aboriginal Land Council (LALC)"
        assert area.lat == -28.95
        assert area.lng == 153.35
        assert area.distance_km is None

    def test_missing_properties_use_placeholders(self):
        """Test placeholder values for absent properties."""
        area = normalize_feature(feature({}), index=0)

        assert area.name == "Unnamed Area"
        assert area.state == "Unknown"
        assert area.type == "Unknown Type"
        assert area.managing_body == "Unknown"
        assert area.lat is None
        assert area.lng is None
        assert area.source_id is None

    def test_non_string_values_are_stringified(self):
        """Test that non-string names are converted like the source does."""
        area = normalize_feature(feature({"NAME": 123, "STATE": "WA"}), index=0)

        assert area.name == "123"

    @pytest.mark.parametrize(
        "lat,lng",
        [
            ("-28.95", "153.35"),  # strings are not numbers
            (-28.95, None),
            (None, 153.35),
            (True, 153.35),
            (float("nan"), 153.35),
            (-128.95, 153.35),  # out of range
        ],
    )
    def test_unusable_coordinates_are_none(self, lat, lng):
        """Test that only numeric, finite, in-range pairs are kept."""
        area = normalize_feature(feature({"LATITUDE": lat, "LONGITUDE": lng}), index=0)

        assert area.lat is None
        assert area.lng is None

    def test_integer_coordinates(self):
        """Test that integer coordinates are accepted."""
        area = normalize_feature(feature({"LATITUDE": -25, "LONGITUDE": 133}), index=0)

        assert area.lat == -25.0
        assert area.lng == 133.0

    def test_centroid_fallback_disabled_by_default(self):
        """Test that geometry is not used for coordinates by default."""
        geometry = {"type": "Point", "coordinates": [133.0, -25.0]}

        area = normalize_feature(feature({}, geometry), index=0)

        assert area.lat is None

    def test_centroid_fallback(self):
        """Test that the centroid fills in missing coordinates when enabled."""
        geometry = {"rings": [[[150.0, -30.0], [152.0, -30.0], [152.0, -28.0], [150.0, -28.0]]]}

        area = normalize_feature(feature({}, geometry), index=0, centroid_fallback=True)

        assert area.lat == -29.0
        assert area.lng == 151.0

    def test_centroid_fallback_prefers_properties(self):
        """Test that LATITUDE/LONGITUDE win over the centroid."""
        geometry = {"type": "Point", "coordinates": [133.0, -25.0]}

        area = normalize_feature(
            feature({"LATITUDE": -12.0, "LONGITUDE": 130.0}, geometry),
            index=0,
            centroid_fallback=True,
        )

        assert (area.lat, area.lng) == (-12.0, 130.0)

    def test_feature_id_used_as_source_id(self):
        """Test that the top-level GeoJSON id is used when OBJECTID is absent."""
        raw = IpaFeature.model_validate({"type": "Feature", "id": 99, "properties": {}})

        assert normalize_feature(raw, index=0).source_id == 99


class TestNormalizeFeatures:
    """Tests for normalize_features function."""

    def test_ids_are_positions(self, sample_collection):
        """Test that ids follow collection order."""
        areas = normalize_features(sample_collection)

        assert [area.id for area in areas] == [0, 1, 2, 3]
        assert [area.source_id for area in areas] == [11, 12, 13, 14]

    def test_sample_collection(self, sample_collection):
        """Test normalizing the sample service response."""
        areas = normalize_features(sample_collection)

        assert areas[0].managing_body == "Local Aboriginal Land Council (LALC)"
        assert areas[1].managing_body == "Indigenous Management Group (IMG)"
        assert areas[2].managing_body == "Torres Strait Regional Authority (TSRA)"
        assert areas[2].has_coordinates is False
        assert areas[3].name == "Unnamed Area"
        assert areas[3].state == "Unknown"
        assert areas[3].managing_body == "Unknown"

    def test_empty_collection(self):
        assert normalize_features(IpaFeatureCollection()) == []


class TestToGeoDataFrame:
    """Tests for to_geodataframe function."""

    def test_points_in_wgs84(self, sample_areas):
        """Test that located areas become points in EPSG:4326."""
        gdf = to_geodataframe(sample_areas)

        assert isinstance(gdf, gpd.GeoDataFrame)
        assert len(gdf) == 4
        assert gdf.crs == "EPSG:4326"
        assert gdf.geometry.iloc[0].x == 153.35
        assert gdf.geometry.iloc[0].y == -28.95
        assert "name" in gdf.columns

    def test_no_located_areas(self, area_factory):
        """Test that an empty GeoDataFrame is returned without coordinates."""
        gdf = to_geodataframe([area_factory(0)])

        assert isinstance(gdf, gpd.GeoDataFrame)
        assert gdf.empty


class TestIPAFeatureServiceClient:
    """Tests for IPAFeatureServiceClient."""

    @pytest.mark.asyncio
    async def test_fetch_all_success(self, sample_collection_data):
        """Test successful dataset fetching."""
        client = IPAFeatureServiceClient()

        mock_response = AsyncMock()
        mock_response.status = 200
        mock_response.json = AsyncMock(return_value=sample_collection_data)

        with patch("aiohttp.ClientSession") as mock_session:
            mock_get = mock_client_session(mock_session, mock_response)

            collection = await client.fetch_all()

            assert isinstance(collection, IpaFeatureCollection)
            assert len(collection.features) == 4

            # One request for the whole dataset
            assert mock_get.call_count == 1
            args, kwargs = mock_get.call_args
            assert args[0] == IPA_SERVICE_URL
            assert kwargs["params"] == {"f": "geojson", "where": "1=1", "outFields": "*"}

    @pytest.mark.asyncio
    async def test_fetch_all_uses_configured_url(self, sample_collection_data):
        """Test that the service URL comes from the config."""
        client = IPAFeatureServiceClient(IPAConfig(ipa_service_url="https://mirror.example.com/query"))

        mock_response = AsyncMock()
        mock_response.status = 200
        mock_response.json = AsyncMock(return_value=sample_collection_data)

        with patch("aiohttp.ClientSession") as mock_session:
            mock_get = mock_client_session(mock_session, mock_response)

            await client.fetch_all()

            assert mock_get.call_args[0][0] == "https://mirror.example.com/query"

    @pytest.mark.asyncio
    async def test_fetch_all_http_error(self):
        """Test that a non-success status raises NetworkError."""
        client = IPAFeatureServiceClient()

        mock_response = AsyncMock()
        mock_response.status = 503

        with patch("aiohttp.ClientSession") as mock_session:
            mock_client_session(mock_session, mock_response)

            with pytest.raises(NetworkError) as exc_info:
                await client.fetch_all()

            assert exc_info.value.status == 503
            assert "503" in str(exc_info.value)
            assert "Failed to fetch Indigenous Protected Areas" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_fetch_all_connection_error(self):
        """Test that transport failures raise NetworkError."""
        client = IPAFeatureServiceClient()

        with patch("aiohttp.ClientSession") as mock_session:
            mock_get = mock_client_session(mock_session)
            mock_get.side_effect = aiohttp.ClientConnectionError("connection refused")

            with pytest.raises(NetworkError):
                await client.fetch_all()

    @pytest.mark.asyncio
    async def test_fetch_all_service_error_payload(self):
        """Test that an ArcGIS error object is reported as a DataSourceError."""
        client = IPAFeatureServiceClient()

        mock_response = AsyncMock()
        mock_response.status = 200
        mock_response.json = AsyncMock(
            return_value={"error": {"code": 400, "message": "Invalid query"}}
        )

        with patch("aiohttp.ClientSession") as mock_session:
            mock_client_session(mock_session, mock_response)

            with pytest.raises(DataSourceError, match="Unexpected IPA service response"):
                await client.fetch_all()

    @pytest.mark.asyncio
    async def test_fetch_returns_normalized_areas(self, sample_collection_data):
        """Test that fetch() returns ProtectedArea records."""
        client = IPAFeatureServiceClient()

        mock_response = AsyncMock()
        mock_response.status = 200
        mock_response.json = AsyncMock(return_value=sample_collection_data)

        with patch("aiohttp.ClientSession") as mock_session:
            mock_client_session(mock_session, mock_response)

            areas = await client.fetch()

            assert len(areas) == 4
            assert areas[0].name == "Ngunya Jargoon IPA"
            assert areas[0].id == 0

    def test_client_initialization(self):
        """Test client initialization with default config."""
        client = IPAFeatureServiceClient()
        assert client.config.ipa_service_url == IPA_SERVICE_URL
        assert client.timeout == 60
