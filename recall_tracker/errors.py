"""
Error types for the Recall Tracker.

Failures are raised inside a component and converted into explicit result
states at its boundary, so callers never see these propagate from the
orchestrator.
"""


class RecallTrackerError(Exception):
    """Base class for all Recall Tracker errors."""


class MalformedURL(RecallTrackerError):
    """The recall API URL could not be built or is not a valid URL."""


class TransportFailure(RecallTrackerError):
    """Network-level failure while talking to the recall API."""


class DecodeFailure(RecallTrackerError):
    """The response body does not match the expected recall JSON shape."""


class PersistenceCorrupt(RecallTrackerError):
    """Persisted saved-recall bytes could not be read back."""
