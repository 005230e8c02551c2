"""Australian states/territories, map framing and reference towns."""

# Sentinel for "no state filter"
ALL_STATES = "ALL"

AUSTRALIAN_STATES = {
    "ACT": "Australian Capital Territory",
    "NSW": "New South Wales",
    "NT": "Northern Territory",
    "QLD": "Queensland",
    "SA": "South Australia",
    "TAS": "Tasmania",
    "VIC": "Victoria",
    "WA": "Western Australia",
}

# ISO country code used to restrict geocoding results
AUSTRALIA_COUNTRY_CODE = "au"

# Map framing (lat, lng) and zoom levels
DEFAULT_CENTER = (-25.0, 133.0)
DEFAULT_ZOOM = 4
SELECTED_ZOOM = 7
TOWN_ZOOM = 6

# Sample towns with known coordinates, handy for offline checks
REFERENCE_TOWNS = [
    {"id": 1, "name": "Dubbo", "state": "NSW", "lat": -32.2569, "lng": 148.6011},
    {"id": 2, "name": "Alice Springs", "state": "NT", "lat": -23.6980, "lng": 133.8807},
    {"id": 3, "name": "Cairns", "state": "QLD", "lat": -16.9186, "lng": 145.7781},
    {"id": 4, "name": "Broome", "state": "WA", "lat": -17.9614, "lng": 122.2359},
]
