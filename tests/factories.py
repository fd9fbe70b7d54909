"""
Builders for wire-format recall payloads used across the tests.
"""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from recall_tracker.models.recall import Recall

NOW = datetime(2025, 3, 16, 12, 0, 0)


def recall_payload(
    recall_id: int,
    title: Optional[str] = None,
    description: Optional[str] = None,
    last_publish_date: Optional[str] = None,
    manufacturers: Optional[List[str]] = None,
    products: Optional[List[Dict[str, Any]]] = None,
    hazards: Optional[List[str]] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """Build a wire-format recall dict with every required array present."""
    payload = {
        "RecallID": recall_id,
        "RecallNumber": f"25-{recall_id:03d}",
        "RecallDate": "2025-03-06T00:00:00",
        "Description": description,
        "URL": f"https://www.cpsc.gov/Recalls/2025/recall-{recall_id}",
        "Title": title,
        "ConsumerContact": None,
        "LastPublishDate": last_publish_date,
        "Products": products or [],
        "Inconjunctions": [],
        "Images": [],
        "Injuries": [],
        "Manufacturers": [{"Name": name, "CompanyID": None} for name in (manufacturers or [])],
        "Retailers": [],
        "Importers": [],
        "Distributors": [],
        "SoldAtLabel": None,
        "ManufacturerCountries": [{"Country": "United States"}],
        "ProductUPCs": [],
        "Hazards": [{"Name": name} for name in (hazards or [])],
        "Remedies": [{"Name": "Refund"}],
        "RemedyOptions": [{"Option": "Refund"}],
    }
    payload.update(extra)
    return payload


def make_recall(recall_id: int, **kwargs: Any) -> Recall:
    return Recall.model_validate(recall_payload(recall_id, **kwargs))


def make_recalls(count: int, start: int = 1, **kwargs: Any) -> List[Recall]:
    return [make_recall(i, title=f"Recall {i}", **kwargs) for i in range(start, start + count)]


def to_json_bytes(payloads: List[Dict[str, Any]]) -> bytes:
    return json.dumps(payloads).encode("utf-8")
