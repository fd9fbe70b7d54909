"""
Utility functions for the Recall Tracker.

Contains helper functions and utilities used across the system.
"""

from recall_tracker.utils.similarity import levenshtein_distance, similarity
from recall_tracker.utils.storage import (
    KeyValueStore,
    InMemoryKeyValueStore,
    FileKeyValueStore
)
from recall_tracker.utils.init import init_application, write_env_example

__all__ = [
    'levenshtein_distance',
    'similarity',
    'KeyValueStore',
    'InMemoryKeyValueStore',
    'FileKeyValueStore',
    'init_application',
    'write_env_example'
]
