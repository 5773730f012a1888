"""Exception hierarchy for the Flatcoin keeper."""

from typing import Any


class KeeperError(Exception):
    """Base exception for all keeper errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NetworkError(KeeperError):
    """Raised when network/connection issues occur."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class ValidationError(KeeperError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class GasEstimationError(KeeperError):
    """Raised when the node refuses to estimate gas for a limit order execution."""

    def __init__(
        self,
        message: str,
        token_id: int | None = None,
        error_name: str = "",
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.token_id = token_id
        self.error_name = error_name


class MaxRetriesExceededError(KeeperError):
    """Raised when a retried call keeps failing."""

    def __init__(self, message: str, attempts: int = 0, details: dict | None = None):
        super().__init__(message, details)
        self.attempts = attempts


class RevertDecodingError(KeeperError):
    """Raised when revert data does not match any known error signature."""

    def __init__(self, message: str, data: str | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.data = data
