"""
Data models for the Recall Tracker.

Contains Pydantic models mirroring the CPSC recall API records.
"""

from recall_tracker.models.recall import (
    Recall,
    Product,
    Inconjunction,
    RecallImage,
    Injury,
    Company,
    Country,
    Hazard,
    Remedy,
    RemedyOption,
    ProductUPC,
    decode_recalls
)

__all__ = [
    'Recall',
    'Product',
    'Inconjunction',
    'RecallImage',
    'Injury',
    'Company',
    'Country',
    'Hazard',
    'Remedy',
    'RemedyOption',
    'ProductUPC',
    'decode_recalls'
]
