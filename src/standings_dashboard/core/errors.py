"""
Error taxonomy for the standings pipeline.

RemoteError and ParseError come out of the HTTP layer and abort a range
build. NotFoundError is terminal for a request (bad team identifier).
CacheError never leaves the cache layer: it is logged and turned into a
cache miss.
"""

from typing import Any, Optional


class StandingsError(Exception):
    """Base exception for standings errors."""

    def __init__(self, message: str, code: str = "STANDINGS_ERROR"):
        super().__init__(message)
        self.message = message
        self.code = code


class RemoteError(StandingsError):
    """The standings source answered with a non-success status (or not at all)."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message, code="REMOTE_ERROR")
        self.status = status

    @property
    def retryable(self) -> bool:
        # 4xx other than 429 means the request itself is wrong
        if self.status is None:
            return True
        return self.status >= 500 or self.status == 429


class ParseError(StandingsError):
    """A payload from the source or the cache is not valid JSON of the expected shape."""

    def __init__(self, message: str):
        super().__init__(message, code="PARSE_ERROR")


class NotFoundError(StandingsError):
    """A team id is absent from a snapshot."""

    def __init__(self, resource: str, identifier: Any, context: Optional[str] = None):
        message = f"{resource} {identifier} not found"
        if context:
            message = f"{message} in {context}"
        super().__init__(message, code="NOT_FOUND")
        self.resource = resource
        self.identifier = identifier
        self.context = context


class DataIntegrityError(StandingsError):
    """A snapshot violates an invariant, e.g. the same team id appears twice."""

    def __init__(self, message: str):
        super().__init__(message, code="DATA_INTEGRITY_ERROR")


class CacheError(StandingsError):
    """Storage read/write failure. Recovered inside the cache layer."""

    def __init__(self, message: str):
        super().__init__(message, code="CACHE_ERROR")
