"""Map framing and marker styling derived from the shared selection state.

The map widget itself is an external collaborator; this module only works
out what it should show: where to centre, how far to zoom, which markers to
draw and how to style them.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ipa_data.constants.regions import (
    DEFAULT_CENTER,
    DEFAULT_ZOOM,
    SELECTED_ZOOM,
    TOWN_ZOOM,
)
from ipa_data.models.features import IpaFeatureCollection
from ipa_data.models.geocoding import GeocodedPlace
from ipa_data.models.protected_areas import ProtectedArea
from ipa_data.selection import SelectionState
from ipa_data.utils.geometry import get_geometry_bounds

# =============================================================================
# STYLE CONSTANTS
# =============================================================================

MARKER_COLORS = {
    "default": "#f97316",   # Orange for other IPAs with coordinates
    "hovered": "#fde047",   # Amber glow for the hovered IPA
    "selected": "#0ea5e9",  # Sky blue for the selected IPA
    "town": "#22c55e",      # Green for the geocoded town
}

SELECTED_OUTLINE_STYLE = {
    "color": MARKER_COLORS["selected"],
    "weight": 2,
    "fillOpacity": 0.15,
}


@dataclass(frozen=True)
class MarkerStyle:
    """Circle marker appearance."""

    color: str
    radius: float
    weight: float
    fill_opacity: float

    def to_path_options(self) -> Dict:
        return {"color": self.color, "weight": self.weight, "fillOpacity": self.fill_opacity}


DEFAULT_MARKER = MarkerStyle(MARKER_COLORS["default"], radius=4, weight=1.5, fill_opacity=0.7)
HOVERED_MARKER = MarkerStyle(MARKER_COLORS["hovered"], radius=6, weight=2, fill_opacity=0.85)
SELECTED_MARKER = MarkerStyle(MARKER_COLORS["selected"], radius=7, weight=3, fill_opacity=0.9)
TOWN_MARKER = MarkerStyle(MARKER_COLORS["town"], radius=6, weight=2, fill_opacity=0.9)


@dataclass(frozen=True)
class Marker:
    """One marker to draw on the map."""

    area_id: Optional[int]
    lat: float
    lng: float
    label: str
    detail: str
    style: MarkerStyle


@dataclass(frozen=True)
class MapView:
    """Camera framing for the map.

    ``version`` follows the selection focus token; the widget reframes
    whenever ``version`` or ``camera_key`` differs from what it last applied.
    """

    center: Tuple[float, float]
    zoom: int
    version: int
    camera_key: str
    bounds: Optional[Tuple[float, float, float, float]] = None


def find_area(areas: Iterable[ProtectedArea], area_id: Optional[int]) -> Optional[ProtectedArea]:
    """Look up an area by id."""
    if area_id is None:
        return None
    return next((area for area in areas if area.id == area_id), None)


def marker_style(area_id: int, state: SelectionState) -> MarkerStyle:
    """Style for an area marker; selection takes precedence over hover."""
    if state.is_selected(area_id):
        return SELECTED_MARKER
    if state.is_hovered(area_id):
        return HOVERED_MARKER
    return DEFAULT_MARKER


def build_markers(
    areas: Iterable[ProtectedArea],
    state: SelectionState,
    town: Optional[GeocodedPlace] = None,
) -> List[Marker]:
    """Markers for every area with coordinates, plus the town if any."""
    markers = []

    if town is not None:
        markers.append(
            Marker(None, town.lat, town.lng, town.display_name, "Town / community", TOWN_MARKER)
        )

    for area in areas:
        if not area.has_coordinates:
            continue
        markers.append(
            Marker(
                area_id=area.id,
                lat=area.lat,
                lng=area.lng,
                label=area.name,
                detail=f"{area.state} · {area.type}",
                style=marker_style(area.id, state),
            )
        )

    return markers


def selected_feature_geojson(
    collection: Optional[IpaFeatureCollection],
    selected_area_id: Optional[int],
) -> Optional[Dict]:
    """Outline of the selected area's polygon as a GeoJSON Feature.

    Area ids are positions in the collection, so the feature is looked up by
    index. The outline style travels in ``properties["style"]``. Returns None
    when nothing is selected or there is no geometry.
    """
    if collection is None or selected_area_id is None:
        return None
    if not 0 <= selected_area_id < len(collection.features):
        return None

    geometry = collection.features[selected_area_id].geometry.to_geojson()
    if geometry is None:
        return None

    return {
        "type": "Feature",
        "geometry": geometry,
        "properties": {"id": selected_area_id, "style": dict(SELECTED_OUTLINE_STYLE)},
    }


def compute_map_view(
    areas: Sequence[ProtectedArea],
    state: SelectionState,
    town: Optional[GeocodedPlace] = None,
    collection: Optional[IpaFeatureCollection] = None,
) -> MapView:
    """Decide map centre and zoom.

    A selected area with coordinates wins, then the geocoded town, then the
    whole-of-Australia default.
    """
    selected = find_area(areas, state.selected_area_id)

    if selected is not None and selected.has_coordinates:
        center = (selected.lat, selected.lng)
        zoom = SELECTED_ZOOM
    elif town is not None:
        center = (town.lat, town.lng)
        zoom = TOWN_ZOOM
    else:
        center = DEFAULT_CENTER
        zoom = DEFAULT_ZOOM

    if state.selected_area_id is not None:
        camera_key = f"ipa-selected-{state.selected_area_id}-{state.focus_token}"
    elif town is not None:
        camera_key = f"town-{town.display_name}-{state.focus_token}"
    else:
        camera_key = f"ipa-default-{state.focus_token}"

    bounds = None
    outline = selected_feature_geojson(collection, state.selected_area_id)
    if outline is not None:
        bounds = get_geometry_bounds(outline["geometry"])

    return MapView(
        center=center,
        zoom=zoom,
        version=state.focus_token,
        camera_key=camera_key,
        bounds=bounds,
    )
