"""
Agent module for the Recall Tracker.

Contains the agents behind the recall browsing pipeline:
- DataCollectionAgent: Fetches recall records from the CPSC recall API
- CurationAgent: Narrows a fetched batch down to a bounded, relevant subset
- SearchAgent: Debounced, tiered search over the curated recalls
"""

from recall_tracker.agents.data_collection_agent import DataCollectionAgent, FetchResult
from recall_tracker.agents.curation_agent import CurationAgent, CuratedDataset
from recall_tracker.agents.search_agent import SearchAgent, filter_recalls

__all__ = [
    'DataCollectionAgent',
    'FetchResult',
    'CurationAgent',
    'CuratedDataset',
    'SearchAgent',
    'filter_recalls'
]
