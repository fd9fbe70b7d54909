import logging
import threading
from typing import Iterable, List, Optional

from pydantic import StrictInt, TypeAdapter, ValidationError

from recall_tracker.errors import PersistenceCorrupt
from recall_tracker.models.recall import Recall
from recall_tracker.utils.storage import KeyValueStore

logger = logging.getLogger("SavedRecallsStore")

_ID_LIST = TypeAdapter(List[StrictInt])


class SavedRecallsStore:
    """
    The set of recall ids the user has saved.

    Every toggle is written straight through to the key-value store. Ids are
    stored as a JSON array in the order they were saved.
    """

    SAVE_KEY = "savedRecalls"

    def __init__(self, store: KeyValueStore, key: str = SAVE_KEY):
        self.store = store
        self.key = key
        self._saved: List[int] = []
        self._lock = threading.Lock()
        self.load()

    @property
    def saved_ids(self) -> List[int]:
        return list(self._saved)

    def _decode(self, data: bytes) -> List[int]:
        try:
            ids = _ID_LIST.validate_json(data)
        except ValidationError as e:
            raise PersistenceCorrupt(f"Saved recalls under {self.key!r} are unreadable: {e}") from e
        # Membership only; drop duplicates but keep first-saved order.
        return list(dict.fromkeys(ids))

    def _read(self) -> Optional[bytes]:
        try:
            return self.store.get_bytes(self.key)
        except OSError as e:
            raise PersistenceCorrupt(f"Saved recalls under {self.key!r} could not be read: {e}") from e

    def load(self) -> List[int]:
        """
        Read the saved ids from the store. Missing or corrupt data yields an empty set.

        Returns:
            The loaded ids
        """
        ids: List[int] = []
        try:
            data = self._read()
            if data is None:
                logger.info("No saved recalls found")
            else:
                ids = self._decode(data)
        except PersistenceCorrupt as e:
            logger.warning(f"{e}; starting with no saved recalls")
            ids = []

        with self._lock:
            self._saved = ids
        logger.info(f"Loaded {len(ids)} saved recalls")
        return list(ids)

    def _persist(self) -> bool:
        payload = _ID_LIST.dump_json(self._saved)
        try:
            self.store.set_bytes(self.key, payload)
        except OSError as e:
            logger.error(f"Error saving recalls: {e}")
            return False
        return True

    def save(self) -> bool:
        """
        Overwrite the stored ids with the current set.

        Returns:
            True if the write succeeded
        """
        with self._lock:
            return self._persist()

    def toggle(self, recall_id: int) -> bool:
        """
        Save the recall if it is not saved, otherwise unsave it, then persist.

        Args:
            recall_id: Id of the recall to toggle

        Returns:
            Whether the recall is saved after the toggle
        """
        with self._lock:
            if recall_id in self._saved:
                self._saved.remove(recall_id)
                saved = False
            else:
                self._saved.append(recall_id)
                saved = True
            self._persist()

        logger.info(f"Recall {recall_id} {'saved' if saved else 'removed from saved'}")
        return saved

    def is_saved(self, recall_id: int) -> bool:
        return recall_id in self._saved

    def filter_saved(self, recalls: Iterable[Recall]) -> List[Recall]:
        """Keep only the saved recalls, in the order given."""
        saved = set(self._saved)
        return [recall for recall in recalls if recall.recall_id in saved]
