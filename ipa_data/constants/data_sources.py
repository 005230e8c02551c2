"""External service endpoints used by the IPA clients."""

# Australian Government DCCEEW public map service, layer 0 = IPA boundaries
IPA_SERVICE_URL = (
    "https://gis.environment.gov.au/gispubmap/rest/services/ogc_services/"
    "Indigenous_Protected_Areas/MapServer/0/query"
)

# Query parameters for the full national dataset in one request
IPA_QUERY_PARAMS = {
    "f": "geojson",
    "where": "1=1",
    "outFields": "*",
}

# OpenStreetMap Nominatim search API
GEOCODING_URL = "https://nominatim.openstreetmap.org/search"
