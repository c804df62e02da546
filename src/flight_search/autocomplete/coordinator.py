"""
Autocomplete search coordinator.

Turns a stream of keystrokes into debounced location searches and applies
only the response to the most recently issued request. Runs on a single
asyncio event loop; every method except drain() and aclose() must be called
from that loop.

State flow::

    IDLE -> DEBOUNCING -> FETCHING -> SHOWING -> DISMISSED
      ^__________________________________________|  (input shorter than minimum)
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Set

import httpx
import structlog

from ..config import AutocompleteConfig
from ..types import SuggestionItem
from ..utils.validators import is_code_pattern
from .debounce import DebounceTimer
from .fetcher import HttpLocationFetcher, LocationFetcher


logger = structlog.get_logger(__name__)


class CoordinatorState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    FETCHING = "fetching"
    SHOWING = "showing"
    DISMISSED = "dismissed"


class PointerRegion(str, Enum):
    """Where a pointer-down landed relative to the autocomplete widget"""
    INPUT = "input"
    PANEL = "panel"
    OUTSIDE = "outside"


@dataclass(frozen=True)
class SearchQuery:
    keyword: str
    sequence_number: int


class SearchCoordinator:
    """
    Client-side state for one autocomplete field.

    ``value`` is the authoritative search parameter: a resolved location code
    or None. ``text`` is whatever the field currently displays.
    """

    def __init__(
        self,
        fetcher: LocationFetcher,
        debounce_delay: float = 0.3,
        min_length: int = 2,
        on_value_change: Optional[Callable[[Optional[str]], None]] = None,
    ):
        self.fetcher = fetcher
        self.min_length = min_length
        self.on_value_change = on_value_change

        self.state = CoordinatorState.IDLE
        self.text = ""
        self.value: Optional[str] = None
        self.suggestions: List[SuggestionItem] = []
        self.visible = False
        self.loading = False
        self.expanded_item: Optional[str] = None

        self._timer = DebounceTimer(debounce_delay)
        self._latest_sequence = 0
        self._in_flight: Set[asyncio.Task] = set()
        self._listeners: List[Callable[["SearchCoordinator"], None]] = []
        self._owned_fetcher: Optional[HttpLocationFetcher] = None

    @classmethod
    def from_config(
        cls,
        autocomplete_config: AutocompleteConfig,
        client: Optional[httpx.AsyncClient] = None,
        on_value_change: Optional[Callable[[Optional[str]], None]] = None,
    ) -> "SearchCoordinator":
        """Build a coordinator that searches the configured HTTP endpoint"""
        fetcher = HttpLocationFetcher(
            autocomplete_config.endpoint,
            client=client,
            timeout=autocomplete_config.timeout,
        )
        coordinator = cls(
            fetcher,
            debounce_delay=autocomplete_config.debounce_seconds,
            min_length=autocomplete_config.min_keyword_length,
            on_value_change=on_value_change,
        )
        coordinator._owned_fetcher = fetcher
        return coordinator

    @property
    def debounce_delay(self) -> float:
        return self._timer.delay

    @property
    def latest_sequence(self) -> int:
        return self._latest_sequence

    @property
    def has_pending_timer(self) -> bool:
        return self._timer.pending

    @property
    def has_no_results(self) -> bool:
        """Panel is open, nothing is loading and there is nothing to show"""
        return self.visible and not self.loading and not self.suggestions

    def subscribe(self, listener: Callable[["SearchCoordinator"], None]) -> Callable[[], None]:
        """Register a render callback; returns a function that removes it"""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def on_keystroke(self, text: str) -> None:
        """Handle a change to the input text"""
        self.text = text
        self.expanded_item = None
        self._set_value(text.upper() if is_code_pattern(text) else None)

        if len(text) < self.min_length:
            self._timer.cancel()
            self._invalidate_in_flight()
            self.suggestions = []
            self.visible = False
            self.loading = False
            self.state = CoordinatorState.IDLE
            self._notify()
            return

        self._timer.arm(self._fire)
        self.state = CoordinatorState.DEBOUNCING
        self._notify()

    def select(self, item: SuggestionItem) -> None:
        """Accept a suggestion as the field value"""
        self._timer.cancel()
        self._invalidate_in_flight()
        self.text = item.label
        self._set_value(item.code)
        self.visible = False
        self.loading = False
        self.expanded_item = None
        self.state = CoordinatorState.DISMISSED
        self._notify()

    def on_pointer_down(self, region: PointerRegion) -> None:
        """Dismiss the panel when the pointer goes down outside the widget"""
        if region is not PointerRegion.OUTSIDE:
            return
        self.visible = False
        self.expanded_item = None
        if self.state is not CoordinatorState.IDLE:
            self.state = CoordinatorState.DISMISSED
        self._notify()

    def toggle_details(self, item_id: str) -> None:
        self.expanded_item = None if self.expanded_item == item_id else item_id
        self._notify()

    def reset(self) -> None:
        """Clear the field entirely, as on form reset"""
        self._timer.cancel()
        self._invalidate_in_flight()
        self.text = ""
        self._set_value(None)
        self.suggestions = []
        self.visible = False
        self.loading = False
        self.expanded_item = None
        self.state = CoordinatorState.IDLE
        self._notify()

    async def drain(self) -> None:
        """Wait for every request already issued to finish"""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel the timer and any request still in flight, closing a fetcher built here"""
        self._timer.cancel()
        self._invalidate_in_flight()
        tasks = list(self._in_flight)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        if self._owned_fetcher is not None:
            await self._owned_fetcher.close()

    def _fire(self) -> None:
        self._latest_sequence += 1
        query = SearchQuery(keyword=self.text, sequence_number=self._latest_sequence)
        self.state = CoordinatorState.FETCHING
        self.loading = True
        self._notify()

        task = asyncio.get_running_loop().create_task(self._run_query(query))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _run_query(self, query: SearchQuery) -> None:
        try:
            items = await self.fetcher(query.keyword)
        except Exception as e:
            if self._is_stale(query):
                logger.debug("Discarding stale failure", keyword=query.keyword, sequence=query.sequence_number)
                return
            logger.warning("Location search failed", keyword=query.keyword, error=str(e))
            self.suggestions = []
            self.visible = False
            self.loading = False
            self.state = CoordinatorState.IDLE
            self._notify()
            return

        if self._is_stale(query):
            logger.debug(
                "Discarding stale suggestions",
                keyword=query.keyword,
                sequence=query.sequence_number,
                latest=self._latest_sequence,
            )
            return

        self.suggestions = list(items)
        self.visible = True
        self.loading = False
        self.state = CoordinatorState.SHOWING
        self._notify()

    def _is_stale(self, query: SearchQuery) -> bool:
        return query.sequence_number != self._latest_sequence

    def _invalidate_in_flight(self) -> None:
        # Bumping the counter makes every issued request stale
        if self._in_flight:
            self._latest_sequence += 1

    def _set_value(self, value: Optional[str]) -> None:
        if value == self.value:
            return
        self.value = value
        if self.on_value_change is not None:
            self.on_value_change(value)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
