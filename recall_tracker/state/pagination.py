import logging
import threading
from typing import List

from recall_tracker.agents.curation_agent import CuratedDataset
from recall_tracker.models.recall import Recall

logger = logging.getLogger("PaginationWindow")


class PaginationWindow:
    """
    Incrementally exposes the curated dataset in fixed-size pages.

    The cursor only moves forward and items already exposed are never
    removed or reordered.
    """

    PAGE_SIZE = 25

    def __init__(self, dataset: CuratedDataset, page_size: int = PAGE_SIZE):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.dataset = dataset
        self.page_size = page_size
        self._cursor = 0
        self._visible: List[Recall] = []
        self._lock = threading.Lock()

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def visible(self) -> List[Recall]:
        return list(self._visible)

    @property
    def has_more(self) -> bool:
        return self._cursor < len(self.dataset)

    def load_more(self) -> List[Recall]:
        """
        Expose the next page.

        Returns:
            The recalls added by this call; empty once the end is reached
        """
        with self._lock:
            recalls = self.dataset.recalls
            next_cursor = min(self._cursor + self.page_size, len(recalls))
            if next_cursor <= self._cursor:
                return []

            page = list(recalls[self._cursor:next_cursor])
            self._visible.extend(page)
            self._cursor = next_cursor

        logger.debug(f"Loaded {len(page)} recalls, cursor at {next_cursor}/{len(recalls)}")
        return page
