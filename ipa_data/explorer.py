"""Page-level session for exploring Indigenous Protected Areas.

ProtectedAreaExplorer holds everything the list and map views render:
the loaded dataset, the name/state filters, the town search and the shared
SelectionController. Derived lists are recomputed from the current state on
every access rather than stored.

The async entry points (``load`` and ``search_town``) are the UI boundary:
they classify every failure into a user-facing message and never raise,
apart from task cancellation.
"""

import asyncio
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Set

from ipa_data.config import IPAConfig
from ipa_data.constants.regions import ALL_STATES
from ipa_data.map_view import (
    MapView,
    Marker,
    build_markers,
    compute_map_view,
    find_area,
    selected_feature_geojson,
)
from ipa_data.models.features import IpaFeatureCollection
from ipa_data.models.geocoding import GeocodedPlace
from ipa_data.models.protected_areas import ProtectedArea
from ipa_data.selection import SelectionController
from ipa_data.sources.base import DataSourceError, NetworkError
from ipa_data.sources.geocoding import NominatimClient
from ipa_data.sources.protected_areas import IPAFeatureServiceClient, normalize_features
from ipa_data.utils.search import (
    available_states,
    filter_areas,
    has_active_filter,
    nearest_areas,
)
from ipa_data.validation import check_areas

logger = logging.getLogger(__name__)

TOWN_NOT_FOUND_MESSAGE = (
    "We could not find that town in Australia. "
    "Try a nearby larger town name or check the spelling."
)
TOWN_SEARCH_FAILED_MESSAGE = "Something went wrong while looking up that town."
LOAD_FAILED_MESSAGE = "Failed to load dataset: {reason}"


class LoadStatus(str, Enum):
    """Dataset loading state."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class ProtectedAreaExplorer:
    """State and intents behind the IPA list and map views.

    Example:
        >>> explorer = ProtectedAreaExplorer()
        >>> await explorer.load()
        >>> explorer.set_search_term("ngu")
        >>> [area.name for area in explorer.filtered_areas]
        >>> await explorer.search_town("Ballina")
        >>> explorer.nearby_areas[0].distance_km
    """

    def __init__(
        self,
        config: Optional[IPAConfig] = None,
        data_client: Optional[IPAFeatureServiceClient] = None,
        geocoder: Optional[NominatimClient] = None,
        on_focus_request: Optional[Callable[[int], None]] = None,
    ):
        """Initialize the explorer.

        Args:
            config: Service configuration (defaults to IPAConfig())
            data_client: IPA feature service client
            geocoder: Town geocoding client
            on_focus_request: Called with the area id whenever an area is
                selected, so the view can scroll the map into sight
        """
        self.config = config or IPAConfig()
        self.data_client = data_client or IPAFeatureServiceClient(self.config)
        self.geocoder = geocoder or NominatimClient(self.config)
        self.selection = SelectionController(on_focus_request=on_focus_request)

        # Dataset
        self.status = LoadStatus.IDLE
        self.load_error: Optional[str] = None
        self.collection: Optional[IpaFeatureCollection] = None
        self.areas: List[ProtectedArea] = []

        # Name + state filters
        self.search_term = ""
        self.selected_state = ALL_STATES

        # Town search
        self.town_query = ""
        self.geocoded_town: Optional[GeocodedPlace] = None
        self.is_town_searching = False
        self.town_error: Optional[str] = None

        self._town_request = 0
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    # ------------------------------------------------------------------
    # Async entry points
    # ------------------------------------------------------------------

    async def load(self) -> bool:
        """Fetch and normalize the national dataset.

        Any failure leaves the explorer in the ERROR state with no areas.

        Returns:
            True if the dataset loaded
        """
        if self._closed:
            return False

        self.status = LoadStatus.LOADING
        self.load_error = None

        try:
            collection = await self.data_client.fetch_all()
            areas = normalize_features(
                collection,
                centroid_fallback=self.config.use_geometry_centroid_fallback,
            )
        except asyncio.CancelledError:
            raise
        except DataSourceError as e:
            return self._fail_load(str(e))
        except Exception as e:
            logger.exception("Unexpected error loading Indigenous Protected Areas")
            return self._fail_load(str(e) or type(e).__name__)

        if self._closed:
            logger.debug("Explorer closed during load; discarding dataset")
            return False

        for warning in check_areas(areas):
            logger.warning(warning)

        self.collection = collection
        self.areas = areas
        self.status = LoadStatus.READY
        logger.info(f"Loaded {len(areas)} Indigenous Protected Areas")
        return True

    async def search_town(self, query: Optional[str] = None) -> Optional[GeocodedPlace]:
        """Geocode a town and make its nearby areas available.

        Failures are scoped to the town search: they set ``town_error`` and
        leave the dataset, filters and selection untouched. When searches
        overlap, only the most recent one updates the state.

        Args:
            query: Town name; defaults to the current ``town_query``

        Returns:
            The geocoded place, or None
        """
        if query is not None:
            self.town_query = query

        trimmed = self.town_query.strip()
        self._town_request += 1
        request_id = self._town_request

        if not trimmed:
            self.is_town_searching = False
            self.geocoded_town = None
            self.town_error = None
            return None

        self.is_town_searching = True
        self.town_error = None
        self.geocoded_town = None

        place = None
        error = None
        try:
            place = await self.geocoder.geocode_town(trimmed, self.selected_state)
            if place is None:
                error = TOWN_NOT_FOUND_MESSAGE
        except asyncio.CancelledError:
            raise
        except NetworkError as e:
            error = str(e)
        except Exception:
            logger.exception(f"Unexpected error geocoding '{trimmed}'")
            error = TOWN_SEARCH_FAILED_MESSAGE
        finally:
            if request_id == self._town_request and not self._closed:
                self.is_town_searching = False

        if self._closed or request_id != self._town_request:
            logger.debug(f"Discarding stale geocoding result for '{trimmed}'")
            return None

        if error:
            logger.warning(f"Town search for '{trimmed}' failed: {error}")
            self.town_error = error
            return None

        self.geocoded_town = place
        self.town_query = place.display_name
        return place

    def start_load(self) -> asyncio.Task:
        """Schedule ``load`` as a task owned by the explorer."""
        return self._track(asyncio.create_task(self.load()))

    def start_town_search(self, query: Optional[str] = None) -> asyncio.Task:
        """Schedule ``search_town`` as a task owned by the explorer."""
        return self._track(asyncio.create_task(self.search_town(query)))

    async def close(self) -> None:
        """Cancel outstanding requests; later results are discarded."""
        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self.is_town_searching = False

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # User intents
    # ------------------------------------------------------------------

    def set_search_term(self, term: str) -> None:
        self.search_term = term

    def set_state_filter(self, state: str) -> None:
        self.selected_state = state

    def select_area(self, area_id: int) -> None:
        self.selection.select_area(area_id)

    def hover_area(self, area_id: Optional[int]) -> None:
        self.selection.hover_area(area_id)

    def clear_selection(self) -> None:
        self.selection.clear_selection()

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def states(self) -> List[str]:
        """State/territory options for the filter dropdown."""
        return available_states(self.areas)

    @property
    def has_filter(self) -> bool:
        """The filtered list is only shown once the user narrows it."""
        return has_active_filter(self.search_term, self.selected_state)

    @property
    def filtered_areas(self) -> List[ProtectedArea]:
        return filter_areas(self.areas, self.search_term, self.selected_state)

    @property
    def nearby_areas(self) -> List[ProtectedArea]:
        return nearest_areas(self.geocoded_town, self.areas, self.config.nearest_limit)

    @property
    def selected_area(self) -> Optional[ProtectedArea]:
        return find_area(self.areas, self.selection.selected_area_id)

    @property
    def selected_outline(self) -> Optional[Dict]:
        return selected_feature_geojson(self.collection, self.selection.selected_area_id)

    @property
    def map_view(self) -> MapView:
        return compute_map_view(
            self.areas,
            self.selection.state,
            town=self.geocoded_town,
            collection=self.collection,
        )

    @property
    def markers(self) -> List[Marker]:
        return build_markers(self.areas, self.selection.state, town=self.geocoded_town)

    # ------------------------------------------------------------------

    def _fail_load(self, reason: str) -> bool:
        if self._closed:
            return False
        self.load_error = LOAD_FAILED_MESSAGE.format(reason=reason)
        self.status = LoadStatus.ERROR
        self.collection = None
        self.areas = []
        logger.error(self.load_error)
        return False

    def _track(self, task: asyncio.Task) -> asyncio.Task:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task
