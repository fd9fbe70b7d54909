import logging
import threading
from typing import Callable, List, Optional, Sequence

from recall_tracker.agents.curation_agent import CuratedDataset
from recall_tracker.models.recall import Recall
from recall_tracker.utils.similarity import similarity

logger = logging.getLogger("SearchAgent")

SearchListener = Callable[[str, List[Recall]], None]


def _contains(text: Optional[str], query: str) -> bool:
    return bool(text) and query in text.lower()


def filter_recalls(query: str, recalls: Sequence[Recall], fuzzy_threshold: float = 0.7) -> List[Recall]:
    """
    Rank recalls against a query in three tiers.

    1. exact: the title contains the query
    2. related: the description, a product name/description or a hazard name contains it
    3. fuzzy: title similarity to the query is above the threshold

    Each recall lands in at most one tier; tiers keep the input order.

    Args:
        query: Search text; matching is case-insensitive
        recalls: Recalls to search, in display order
        fuzzy_threshold: Minimum (exclusive) title similarity for the fuzzy tier

    Returns:
        Exact matches, then related matches, then fuzzy matches
    """
    query = query.strip().lower()
    if not query:
        return []

    exact, related, fuzzy = [], [], []
    for recall in recalls:
        if _contains(recall.title, query):
            exact.append(recall)
        elif (_contains(recall.description, query)
              or any(_contains(p.name, query) or _contains(p.description, query) for p in recall.products)
              or any(_contains(h.name, query) for h in recall.hazards)):
            related.append(recall)
        elif similarity(recall.title or "", query) > fuzzy_threshold:
            fuzzy.append(recall)

    return exact + related + fuzzy


class SearchAgent:
    """
    Agent responsible for live search over the curated dataset.

    Queries are debounced: each call restarts a timer and only the result of
    the most recent query is ever published. A generation counter guards the
    publish step so a stale timer that still fires is dropped.
    """

    DEBOUNCE_SECONDS = 0.3

    def __init__(self, dataset: CuratedDataset, debounce: float = DEBOUNCE_SECONDS,
                 fuzzy_threshold: float = 0.7):
        """
        Initialize the Search Agent.

        Args:
            dataset: Curated dataset to search (read-only)
            debounce: Delay in seconds before a query is evaluated
            fuzzy_threshold: Title similarity needed for the fuzzy tier
        """
        self.dataset = dataset
        self.debounce = debounce
        self.fuzzy_threshold = fuzzy_threshold

        self._lock = threading.Lock()
        self._generation = 0
        self._timer: Optional[threading.Timer] = None
        self._idle = threading.Event()
        self._idle.set()

        self._query = ""
        self._results: List[Recall] = []
        self._is_searching = False
        self._listeners: List[SearchListener] = []

        logger.info("Search Agent initialized")

    @property
    def query(self) -> str:
        return self._query

    @property
    def results(self) -> List[Recall]:
        return list(self._results)

    @property
    def is_searching(self) -> bool:
        return self._is_searching

    def subscribe(self, listener: SearchListener) -> None:
        """Register a callback invoked with (query, results) on every publish."""
        self._listeners.append(listener)

    def search(self, query: str) -> None:
        """
        Start a debounced search. Returns immediately.

        Args:
            query: The current search text; blank text clears the results
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

            self._query = query
            if not query.strip():
                self._results = []
                self._is_searching = False
                self._idle.set()
                publish = True
            else:
                self._is_searching = True
                self._idle.clear()
                self._timer = threading.Timer(self.debounce, self._evaluate, args=(generation, query))
                self._timer.daemon = True
                self._timer.start()
                publish = False

        if publish:
            self._notify(query, [])

    def refresh(self) -> List[Recall]:
        """
        Re-run the current query against the latest dataset immediately.

        A pending debounced evaluation is superseded, so the refreshed
        result is published once.

        Returns:
            The refreshed results
        """
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1
            generation = self._generation
            query = self._query
        self._evaluate(generation, query)
        return self.results

    def wait_until_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until no search is pending. Returns False on timeout."""
        return self._idle.wait(timeout)

    def _evaluate(self, generation: int, query: str) -> None:
        results = filter_recalls(query, self.dataset.recalls, self.fuzzy_threshold)

        with self._lock:
            if generation != self._generation:
                logger.debug(f"Dropping stale results for {query!r}")
                return
            self._results = results
            self._is_searching = False
            self._timer = None
            self._idle.set()

        logger.info(f"Search for {query!r} matched {len(results)} recalls")
        self._notify(query, results)

    def _notify(self, query: str, results: List[Recall]) -> None:
        for listener in list(self._listeners):
            try:
                listener(query, list(results))
            except Exception:
                logger.exception(f"Search listener failed for {query!r}")
