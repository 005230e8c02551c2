"""Selection, hover and focus state shared by the list and map views.

One SelectionController is owned by the page and handed to every view, so
the views never keep their own copy of which area is selected or hovered.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionState:
    """Snapshot of the selection state.

    Attributes:
        selected_area_id: Id of the selected area, or None
        hovered_area_id: Id of the hovered area, or None
        focus_token: Bumped on every explicit select/clear; views reframe the
            map whenever it changes, even if the same area is reselected
    """

    selected_area_id: Optional[int] = None
    hovered_area_id: Optional[int] = None
    focus_token: int = 0

    def is_selected(self, area_id: int) -> bool:
        return self.selected_area_id is not None and self.selected_area_id == area_id

    def is_hovered(self, area_id: int) -> bool:
        return self.hovered_area_id is not None and self.hovered_area_id == area_id


SelectionListener = Callable[[SelectionState], None]


class SelectionController:
    """Owns the selection state and notifies views of every change.

    Examples:
        >>> controller = SelectionController()
        >>> controller.select_area(3)
        >>> controller.select_area(3)
        >>> controller.state.focus_token
        2
        >>> controller.hover_area(5)
        >>> controller.state.selected_area_id
        3
    """

    def __init__(self, on_focus_request: Optional[Callable[[int], None]] = None):
        """Initialize the controller.

        Args:
            on_focus_request: Called with the selected id after every
                select_area, so the presentation layer can bring the map
                into view
        """
        self._state = SelectionState()
        self._listeners: List[SelectionListener] = []
        self._on_focus_request = on_focus_request

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def selected_area_id(self) -> Optional[int]:
        return self._state.selected_area_id

    @property
    def hovered_area_id(self) -> Optional[int]:
        return self._state.hovered_area_id

    @property
    def focus_token(self) -> int:
        return self._state.focus_token

    def focus_version(self) -> int:
        """Monotonic counter the map compares to decide when to reframe."""
        return self._state.focus_token

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def select_area(self, area_id: int) -> None:
        """Select an area, clear hover and request map focus."""
        self._set_state(
            replace(
                self._state,
                selected_area_id=area_id,
                hovered_area_id=None,
                focus_token=self._state.focus_token + 1,
            )
        )
        logger.debug(f"Selected area {area_id} (focus {self._state.focus_token})")

        if self._on_focus_request:
            self._on_focus_request(area_id)

    def hover_area(self, area_id: Optional[int]) -> None:
        """Set or clear the hovered area; selection and focus are untouched."""
        if area_id == self._state.hovered_area_id:
            return
        self._set_state(replace(self._state, hovered_area_id=area_id))

    def clear_selection(self) -> None:
        """Clear selection and hover, and reframe the map."""
        self._set_state(
            SelectionState(focus_token=self._state.focus_token + 1)
        )
        logger.debug(f"Cleared selection (focus {self._state.focus_token})")

    def _set_state(self, state: SelectionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
