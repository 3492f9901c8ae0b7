"""Search session: current query, loading/error flags, result set and active tab."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional, Union

from leadfinder.core.history import QueryHistory
from leadfinder.core.models import Business, SearchState, TabView
from leadfinder.etl import views
from leadfinder.etl.normalize import EmptyResponse, MalformedResponse
from leadfinder.vendors.gemini import TransportFailure, search_businesses

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_MESSAGE = "No data received from the search service. Please try again."
MALFORMED_RESPONSE_MESSAGE = "Failed to process business data. Please try again."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."

Searcher = Callable[[str], List[Business]]


class SearchInProgress(RuntimeError):
    """Raised when a search is submitted while another one is still running."""


class SearchSession:
    """Holds one user's search state. At most one search runs at a time."""

    def __init__(self, searcher: Searcher = search_businesses, history: Optional[QueryHistory] = None) -> None:
        self._searcher = searcher
        self._lock = threading.Lock()
        self.history = history
        self.state = SearchState()
        self.businesses: List[Business] = []
        self.active_tab = TabView.ALL

    def search(self, query: str) -> List[Business]:
        """Run a search, replacing the previous result set.

        Failures are recorded in ``state.error`` and leave the result set empty.
        """
        query = (query or "").strip()
        if not query:
            raise ValueError("query must not be empty")
        if not self._lock.acquire(blocking=False):
            raise SearchInProgress("A search is already in progress")

        try:
            self.state = SearchState(query=query, is_loading=True, error=None, has_searched=True)
            self.businesses = []
            self._remember(query)

            try:
                results = self._searcher(query)
            except EmptyResponse as exc:
                logger.warning("Search for %s returned no data: %s", query, exc)
                self.state.error = EMPTY_RESPONSE_MESSAGE
                return []
            except MalformedResponse as exc:
                logger.error("Search for %s returned malformed data: %s", query, exc)
                self.state.error = MALFORMED_RESPONSE_MESSAGE
                return []
            except TransportFailure as exc:
                logger.error("Search for %s failed: %s", query, exc)
                self.state.error = str(exc) or UNEXPECTED_ERROR_MESSAGE
                return []
            except Exception as exc:  # noqa: BLE001
                logger.exception("Unexpected error while searching for %s: %s", query, exc)
                self.state.error = UNEXPECTED_ERROR_MESSAGE
                return []

            self.businesses = list(results)
            self.active_tab = views.select_tab(self.businesses)
            logger.info(
                "Search for %s found %d businesses (%d without website); tab=%s",
                query,
                len(self.businesses),
                views.no_website_count(self.businesses),
                self.active_tab.value,
            )
            return self.businesses
        finally:
            self.state.is_loading = False
            self._lock.release()

    @property
    def is_loading(self) -> bool:
        return self._lock.locked()

    def set_tab(self, tab: Union[TabView, str]) -> TabView:
        self.active_tab = TabView(tab)
        return self.active_tab

    def filtered(self, tab: Union[TabView, str, None] = None) -> List[Business]:
        return views.filtered(self.businesses, tab or self.active_tab)

    def no_website_count(self) -> int:
        return views.no_website_count(self.businesses)

    def get(self, business_id: str) -> Optional[Business]:
        for business in self.businesses:
            if business.id == business_id:
                return business
        return None

    def snapshot(self) -> Dict[str, object]:
        """Serializable view of the session for the HTTP layer."""
        return {
            "state": self.state.to_dict(),
            "activeTab": self.active_tab.value,
            "total": len(self.businesses),
            "noWebsiteCount": self.no_website_count(),
            "businesses": [business.to_dict() for business in self.filtered()],
        }

    def _remember(self, query: str) -> None:
        if self.history is None:
            return
        try:
            self.history.add(query)
        except OSError as exc:
            logger.warning("Could not save query history: %s", exc)
