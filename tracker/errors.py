"""
Error taxonomy shared by the store, the controllers and the API layer.

Each error carries the HTTP status the API answers with; the handlers in
``tracker.main`` render them as ``{"error": message}``.
"""


class TrackerError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """A required field is missing or a value is out of range."""

    status_code = 400


class NotFoundError(TrackerError):
    """The record addressed by id does not exist."""

    status_code = 404


class StorageError(TrackerError):
    """The underlying database failed."""

    status_code = 500
