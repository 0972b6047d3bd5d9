"""Exception types raised while archiving indices."""

from __future__ import annotations

from typing import Optional


class ArchiverError(Exception):
    """Base class for all archiver failures."""


class ConfigError(ArchiverError):
    """Raised when command-line arguments are missing or invalid."""


class ArchiveConnectionError(ArchiverError):
    """Raised when OpenSearch cannot be reached."""


class QueryError(ArchiverError):
    """Raised when OpenSearch answers a listing request with an error."""


class DecodeError(QueryError):
    """Raised when a response does not have the expected shape."""


class PerIndexError(ArchiverError):
    """Failure tied to a single index; the run continues past it."""

    def __init__(self, message: str, *, index: Optional[str] = None) -> None:
        super().__init__(message)
        self.index = index


class AnalysisError(PerIndexError):
    """Raised when the timestamp range of an index cannot be computed."""


class ExistenceCheckError(PerIndexError):
    """Raised when a snapshot lookup fails for reasons other than 404."""


class CreationError(PerIndexError):
    """Raised when a snapshot creation request fails."""
