"""Custom exception classes."""


class ValidationError(Exception):
    """Raised when user input fails validation."""
    pass


class FileWriteError(Exception):
    """Raised when unable to persist data to the local store."""
    pass


class BookingServiceError(Exception):
    """Raised when the remote booking service cannot be reached or answers badly."""

    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code
