import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from typing import Callable, List, Optional

from recall_tracker.agents.curation_agent import CuratedDataset, CurationAgent, Clock
from recall_tracker.agents.data_collection_agent import DataCollectionAgent, FetchResult
from recall_tracker.agents.search_agent import SearchAgent
from recall_tracker.config import AppConfig
from recall_tracker.errors import RecallTrackerError
from recall_tracker.models.recall import Recall
from recall_tracker.state.pagination import PaginationWindow
from recall_tracker.state.saved_recalls import SavedRecallsStore
from recall_tracker.utils.storage import FileKeyValueStore, KeyValueStore

logger = logging.getLogger("Orchestrator")

StateListener = Callable[[str], None]


class RecallOrchestrator:
    """
    Orchestrator that wires the recall agents together and exposes the
    operations a presentation layer needs.

    Listeners registered with subscribe() are called with one of
    "recalls", "search", "saved" or "error" whenever that part of the state
    changes.
    """

    def __init__(self, config: Optional[AppConfig] = None,
                 collector: Optional[DataCollectionAgent] = None,
                 store: Optional[KeyValueStore] = None,
                 clock: Clock = datetime.now):
        """Initialize the Recall Orchestrator."""
        self.config = config or AppConfig()

        self.dataset = CuratedDataset()
        self.data_collection_agent = collector or DataCollectionAgent(
            api_url=self.config.api_url,
            timeout=self.config.request_timeout
        )
        self.curation_agent = CurationAgent(self.dataset, clock=clock, max_recalls=self.config.max_recalls)
        self.search_agent = SearchAgent(
            self.dataset,
            debounce=self.config.search_debounce,
            fuzzy_threshold=self.config.fuzzy_threshold
        )
        self.pagination = PaginationWindow(self.dataset, page_size=self.config.page_size)
        self.saved_recalls_store = SavedRecallsStore(store or FileKeyValueStore(self.config.data_dir))

        self.last_error: Optional[RecallTrackerError] = None
        self._lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._listeners: List[StateListener] = []
        self.search_agent.subscribe(lambda query, results: self._notify("search"))

        logger.info("Recall Orchestrator initialized")

    def subscribe(self, listener: StateListener) -> None:
        """
        Register a callback invoked with an event name on every state change.

        Args:
            listener: Receives "recalls", "search", "saved" or "error"
        """
        self._listeners.append(listener)

    def _notify(self, event: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"State listener failed for {event!r} event")

    def fetch_recalls(self) -> bool:
        """
        Fetch, curate and publish the session's recalls, then expose the first page.

        Does nothing once recalls have been published. A failed fetch leaves
        the dataset empty and records the error in last_error; it is not retried.

        Returns:
            True if recalls were published by this call
        """
        if not self.dataset.is_empty():
            logger.info("Recalls already loaded, skipping fetch")
            return False

        result: FetchResult = self.data_collection_agent.fetch_raw(self.curation_agent.fetch_since())
        if not result.ok:
            with self._lock:
                self.last_error = result.error
            self._notify("error")
            return False

        with self._lock:
            self.last_error = None
            published = self.curation_agent.run(result.recalls)
            if published:
                self.pagination.load_more()

        if published:
            self._notify("recalls")
        return published

    def fetch_recalls_in_background(self) -> "Future[bool]":
        """Run fetch_recalls on a background worker and return its future."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="recall-fetch")
        return self._executor.submit(self.fetch_recalls)

    def shutdown(self) -> None:
        """Stop the background fetch worker, waiting for a running fetch."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # Browsing

    def visible_recalls(self) -> List[Recall]:
        """Recalls exposed so far by the pagination window."""
        return self.pagination.visible

    def load_more(self) -> List[Recall]:
        """
        Expose the next page of curated recalls.

        Returns:
            The recalls added to the visible list; empty at the end
        """
        page = self.pagination.load_more()
        if page:
            self._notify("recalls")
        return page

    # Search

    def set_query(self, text: str) -> None:
        """
        Start a debounced search for the given text.

        Args:
            text: The search box contents; blank text clears the results
        """
        self.search_agent.search(text)

    def current_results(self) -> List[Recall]:
        """Results of the most recently published search."""
        return self.search_agent.results

    def is_searching(self) -> bool:
        """True while a search is waiting for its debounce delay to pass."""
        return self.search_agent.is_searching

    # Saved recalls

    def toggle_saved(self, recall_id: int) -> bool:
        """
        Flip the saved state of a recall and persist it.

        Args:
            recall_id: Id of the recall to toggle

        Returns:
            Whether the recall is saved after the toggle
        """
        saved = self.saved_recalls_store.toggle(recall_id)
        self._notify("saved")
        return saved

    def is_saved(self, recall_id: int) -> bool:
        """Check whether a recall id is in the saved set."""
        return self.saved_recalls_store.is_saved(recall_id)

    def saved_recalls(self) -> List[Recall]:
        """Saved recalls among those currently on screen, in display order."""
        return self.saved_recalls_store.filter_saved(self.pagination.visible)
