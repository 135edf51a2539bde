"""errors.py : Exception types raised by the NBA client."""

from typing import Any, Dict, Optional


class NbaError(Exception):
    """Base class for every error raised by scrapernba."""


class ValidationInputError(NbaError, ValueError):
    """A caller-supplied identifier, date or season is malformed. Raised before any request."""


class NetworkError(NbaError):
    """Non-success HTTP status, timeout, transport failure, or an oversized/malformed body."""

    def __init__(self, message: str, url: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


class NotFoundError(NbaError, LookupError):
    """A singular-record lookup matched nothing."""

    def __init__(self, message: str, identifier: Any = None):
        super().__init__(message)
        self.identifier = identifier


class SchemaValidationError(NbaError):
    """Strict validation rejected a row."""

    def __init__(self, shape: str, index: int, row: Dict[str, Any], reasons: str):
        super().__init__(f"{shape} row {index} failed validation: {reasons}")
        self.shape = shape
        self.index = index
        self.row = row
