import logging
from datetime import date
from typing import List, Optional
from urllib.parse import urlparse

import requests
from pydantic import BaseModel, ConfigDict

from recall_tracker.errors import DecodeFailure, MalformedURL, RecallTrackerError, TransportFailure
from recall_tracker.models.recall import Recall, decode_recalls

logger = logging.getLogger("DataCollectionAgent")


class FetchResult(BaseModel):
    """Outcome of one fetch attempt: either recalls or an error, never both."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    recalls: List[Recall] = []
    error: Optional[RecallTrackerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DataCollectionAgent:
    """
    Agent responsible for collecting recall records from the CPSC recall API.
    """

    # Source URL
    RECALLS_URL = "https://www.saferproducts.gov/RestWebServices/Recall"

    def __init__(self, api_url: Optional[str] = None, timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        """
        Initialize the Data Collection Agent.

        Args:
            api_url: Base URL of the recall endpoint
            timeout: Request timeout in seconds
            session: Optional requests session to reuse
        """
        self.api_url = api_url or self.RECALLS_URL
        self.timeout = timeout
        self.session = session or requests.Session()
        logger.info("Data Collection Agent initialized")

    def _validate_url(self) -> None:
        parsed = urlparse(self.api_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise MalformedURL(f"Invalid recall API URL: {self.api_url!r}")

    def _request(self, since: date) -> bytes:
        """
        Perform the HTTP request and return the raw body.

        Raises:
            MalformedURL: If the endpoint URL is unusable
            TransportFailure: On connection errors, timeouts or non-2xx responses
        """
        self._validate_url()
        params = {
            "format": "Json",
            "LastPublishDateStart": since.strftime("%Y-%m-%d"),
        }

        try:
            response = self.session.get(self.api_url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except (requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL) as e:
            raise MalformedURL(str(e)) from e
        except requests.RequestException as e:
            raise TransportFailure(str(e)) from e

        return response.content

    def fetch_raw(self, since: date) -> FetchResult:
        """
        Fetch every recall published on or after the given date.

        Args:
            since: Value for the LastPublishDateStart filter

        Returns:
            FetchResult holding the decoded recalls, or the error that ended the attempt
        """
        logger.info(f"Fetching recalls published since {since.isoformat()}")

        try:
            body = self._request(since)
            recalls = decode_recalls(body)
        except (MalformedURL, TransportFailure) as e:
            logger.error(f"Error fetching recalls: {e}")
            return FetchResult(error=e)
        except DecodeFailure as e:
            logger.error(f"Error decoding recalls: {e}")
            return FetchResult(error=e)

        logger.info(f"Fetched {len(recalls)} recalls")
        return FetchResult(recalls=recalls)
