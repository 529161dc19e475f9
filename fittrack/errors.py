class FitTrackError(Exception):
    """Base class for tracker errors."""


class InvalidInput(FitTrackError, ValueError):
    """User input rejected before any state was written."""


class CorruptStoredRecord(FitTrackError):
    """A persisted record could not be decoded."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Stored record '{key}' is unreadable: {reason}")
        self.key = key
        self.reason = reason
