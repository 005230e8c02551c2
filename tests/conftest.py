"""Pytest configuration for async tests, markers and shared fixtures.

To run async tests, ensure pytest-asyncio is installed:
    pip install pytest-asyncio

Or use the dev dependencies:
    pip install -e ".[dev]"

Test markers:
    integration: Tests that make real API calls (slow, may fail due to network)

Run tests:
    pytest tests/                           # Run all tests except integration
    pytest tests/ -m integration           # Run only integration tests
    pytest tests/ -m "not integration"     # Explicitly skip integration tests
"""

import copy

import pytest

from ipa_data.models.features import IpaFeatureCollection
from ipa_data.models.protected_areas import ProtectedArea

SAMPLE_COLLECTION = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "id": 11,
            "properties": {
                "OBJECTID": 11,
                "NAME": "Ngunya Jargoon IPA",
                "TYPE": "Dedicated",
                "STATE": "NSW",
                "AUTHORITY": "LALC",
                "LATITUDE": -28.95,
                "LONGITUDE": 153.35,
            },
            "geometry": {
                "type": "Polygon",
                "coordinates": [[
                    [153.3, -29.0],
                    [153.4, -29.0],
                    [153.4, -28.9],
                    [153.3, -28.9],
                    [153.3, -29.0],
                ]],
            },
        },
        {
            "type": "Feature",
            "id": 12,
            "properties": {
                "OBJECTID": 12,
                "NAME": "Warddeken IPA",
                "TYPE": "Dedicated",
                "STATE": "NT",
                "AUTHORITY": "IMG",
                "LATITUDE": -12.8,
                "LONGITUDE": 133.6,
            },
            "geometry": {
                "type": "Polygon",
                "coordinates": [[
                    [133.0, -13.2],
                    [134.2, -13.2],
                    [134.2, -12.4],
                    [133.0, -12.4],
                    [133.0, -13.2],
                ]],
            },
        },
        {
            "type": "Feature",
            "id": 13,
            "properties": {
                "OBJECTID": 13,
                "NAME": "Warul Kawa IPA",
                "TYPE": "Declared",
                "STATE": "QLD",
                "AUTHORITY": "TSRA",
                "LATITUDE": None,
                "LONGITUDE": None,
            },
            "geometry": None,
        },
        {
            "type": "Feature",
            "id": 14,
            "properties": {
                "OBJECTID": 14,
                "TYPE": "Dedicated",
                "AUTHORITY": "",
                "LATITUDE": -23.5,
                "LONGITUDE": 133.5,
            },
            "geometry": {
                "rings": [[
                    [133.0, -24.0],
                    [134.0, -24.0],
                    [134.0, -23.0],
                    [133.0, -23.0],
                    [133.0, -24.0],
                ]],
            },
        },
    ],
}


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests that make real API calls (deselect with '-m \"not integration\"')",
    )


def pytest_collection_modifyitems(config, items):
    """Automatically skip integration tests unless explicitly requested.

    Integration tests are skipped by default because they:
    - Make real API calls
    - Are slower
    - May fail due to network issues or API changes
    """
    # Don't auto-skip if user explicitly selected integration tests
    if config.getoption("-m") == "integration":
        return

    # Skip integration tests by default
    skip_integration = pytest.mark.skip(
        reason="Integration test - skipped by default. Run with: pytest -m integration"
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(scope="session")
def event_loop_policy():
    """Set event loop policy for async tests."""
    import asyncio

    return asyncio.DefaultEventLoopPolicy()


@pytest.fixture
def sample_collection_data():
    """Raw GeoJSON as returned by the IPA map service."""
    return copy.deepcopy(SAMPLE_COLLECTION)


@pytest.fixture
def sample_collection(sample_collection_data):
    """Validated feature collection."""
    return IpaFeatureCollection.model_validate(sample_collection_data)


def make_area(area_id, name="Test IPA", state="NSW", lat=None, lng=None, **kwargs):
    """Build a ProtectedArea with sensible defaults."""
    return ProtectedArea(
        id=area_id,
        name=name,
        state=state,
        type=kwargs.pop("type", "Dedicated"),
        managing_body=kwargs.pop("managing_body", "Unknown"),
        lat=lat,
        lng=lng,
        **kwargs,
    )


@pytest.fixture
def sample_areas():
    """Normalized areas spread across Australia, one without coordinates."""
    return [
        make_area(0, "Ngunya Jargoon IPA", "NSW", -28.95, 153.35),
        make_area(1, "Warddeken IPA", "NT", -12.8, 133.6),
        make_area(2, "Warul Kawa IPA", "QLD"),
        make_area(3, "Katiti Petermann IPA", "NT", -25.2, 130.9),
        make_area(4, "Gumma IPA", "NSW", -30.7, 152.95),
    ]


@pytest.fixture
def area_factory():
    """Factory for ProtectedArea records."""
    return make_area
