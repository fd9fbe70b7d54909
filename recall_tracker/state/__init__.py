"""
Session state shared with the presentation layer: the paginated window over
the curated recalls and the saved-recalls set.
"""

from recall_tracker.state.pagination import PaginationWindow
from recall_tracker.state.saved_recalls import SavedRecallsStore

__all__ = [
    'PaginationWindow',
    'SavedRecallsStore'
]
