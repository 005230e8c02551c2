"""Filtering and proximity search over normalized protected areas.

All functions are pure: they never mutate or re-sort their input, so the
results can be recomputed from the latest state whenever it changes.
"""

from typing import Iterable, List, Optional

from ipa_data.constants.regions import ALL_STATES, AUSTRALIAN_STATES
from ipa_data.models.geocoding import GeocodedPlace
from ipa_data.models.protected_areas import ProtectedArea
from ipa_data.utils.geometry import haversine_distance_km

DEFAULT_NEAREST_LIMIT = 5


def filter_areas(
    areas: Iterable[ProtectedArea],
    name_substring: str = "",
    state: str = ALL_STATES,
) -> List[ProtectedArea]:
    """Filter areas by name substring and exact state/territory.

    Name matching is case-insensitive. State matching is exact unless
    ``state`` is the ``"ALL"`` sentinel. Source order is preserved.

    Args:
        areas: Normalized areas
        name_substring: Part of an area name; empty matches everything
        state: State/territory code or ``"ALL"``

    Returns:
        Matching areas in their original order (possibly empty).

    Examples:
        >>> areas = [
        ...     ProtectedArea(id=0, name="Ngunya Jargoon IPA", state="NSW",
        ...                   type="Dedicated", managing_body="Unknown"),
        ...     ProtectedArea(id=1, name="Warddeken IPA", state="NT",
        ...                   type="Dedicated", managing_body="Unknown"),
        ... ]
        >>> [a.id for a in filter_areas(areas, "NGU")]
        [0]
        >>> [a.id for a in filter_areas(areas, "", "NT")]
        [1]
    """
    search = name_substring.casefold()

    return [
        area
        for area in areas
        if (not search or search in area.name.casefold())
        and (state == ALL_STATES or area.state == state)
    ]


def available_states(areas: Iterable[ProtectedArea]) -> List[str]:
    """Sorted unique state values present in the dataset."""
    return sorted({area.state for area in areas})


def state_name(code: str) -> str:
    """Full state/territory name for a code, or the code itself if unknown."""
    return AUSTRALIAN_STATES.get(code, code)


def has_active_filter(name_substring: str, state: str) -> bool:
    """Whether the user has narrowed the list by name or state."""
    return name_substring.strip() != "" or state != ALL_STATES


def nearest_areas(
    town: Optional[GeocodedPlace],
    areas: Iterable[ProtectedArea],
    limit: int = DEFAULT_NEAREST_LIMIT,
) -> List[ProtectedArea]:
    """Closest areas to a town, annotated with ``distance_km``.

    Areas without both coordinates are skipped. Results are sorted by
    ascending distance; equal distances keep their source order.

    Args:
        town: Geocoded town, or None for no active search
        areas: Normalized areas
        limit: Maximum number of results

    Returns:
        Up to ``limit`` annotated copies of the nearest areas.
    """
    if town is None or limit <= 0:
        return []

    candidates = [
        area.with_distance(
            haversine_distance_km(town.lat, town.lng, area.lat, area.lng)
        )
        for area in areas
        if area.has_coordinates
    ]

    # sorted() is stable, which keeps ties in source order
    candidates = sorted(candidates, key=lambda area: area.distance_km)
    return candidates[:limit]
