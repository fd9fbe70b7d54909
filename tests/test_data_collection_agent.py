"""
Tests for the CPSC recall API client. The HTTP session is mocked.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from recall_tracker.agents.data_collection_agent import DataCollectionAgent
from recall_tracker.errors import DecodeFailure, MalformedURL, TransportFailure

from factories import recall_payload, to_json_bytes


def make_session(content=b"[]", status_code=200, exc=None):
    session = MagicMock(spec=requests.Session)
    if exc is not None:
        session.get.side_effect = exc
        return session

    response = MagicMock()
    response.content = content
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Server Error")
    session.get.return_value = response
    return session


def test_fetch_sends_date_filter():
    session = make_session(to_json_bytes([recall_payload(1, title="Crib")]))
    agent = DataCollectionAgent(session=session, timeout=5)

    result = agent.fetch_raw(date(2024, 12, 16))

    assert result.ok
    assert [r.recall_id for r in result.recalls] == [1]
    session.get.assert_called_once_with(
        DataCollectionAgent.RECALLS_URL,
        params={"format": "Json", "LastPublishDateStart": "2024-12-16"},
        timeout=5,
    )


@pytest.mark.parametrize("api_url", ["not a url", "ftp://example.com/recalls", "https://"])
def test_malformed_url(api_url):
    session = make_session()
    agent = DataCollectionAgent(api_url=api_url, session=session)

    result = agent.fetch_raw(date(2025, 1, 1))

    assert isinstance(result.error, MalformedURL)
    assert result.recalls == []
    session.get.assert_not_called()


def test_invalid_url_from_requests_maps_to_malformed():
    session = make_session(exc=requests.exceptions.InvalidURL("bad host"))
    result = DataCollectionAgent(session=session).fetch_raw(date(2025, 1, 1))

    assert isinstance(result.error, MalformedURL)


@pytest.mark.parametrize("exc", [
    requests.ConnectionError("connection refused"),
    requests.Timeout("timed out"),
])
def test_transport_failures(exc):
    result = DataCollectionAgent(session=make_session(exc=exc)).fetch_raw(date(2025, 1, 1))

    assert isinstance(result.error, TransportFailure)
    assert not result.ok


def test_http_error_status_is_transport_failure():
    result = DataCollectionAgent(session=make_session(b"oops", status_code=503)).fetch_raw(date(2025, 1, 1))

    assert isinstance(result.error, TransportFailure)


def test_decode_failure_publishes_nothing():
    bad = recall_payload(2)
    del bad["RecallID"]
    session = make_session(to_json_bytes([recall_payload(1), bad]))

    result = DataCollectionAgent(session=session).fetch_raw(date(2025, 1, 1))

    assert isinstance(result.error, DecodeFailure)
    assert result.recalls == []
