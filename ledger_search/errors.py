"""Errors raised by the search client.

Transport and decode errors carry the ``TransportMetadata`` of the call when
one is available, so callers can still tell a 4xx from a 5xx.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ledger_search.transport.interface import TransportMetadata


class LedgerSearchError(Exception):
    """Base for every error raised by ledger_search."""


class RequestConstructionError(LedgerSearchError):
    """The transport could not build the outbound request."""


class TransportExecutionError(LedgerSearchError):
    """Network failure or non-success status from the search endpoint."""

    def __init__(self, message: str, metadata: TransportMetadata | None = None):
        super().__init__(message)
        self.metadata = metadata

    @property
    def status_code(self) -> int | None:
        return self.metadata.status_code if self.metadata else None


class DecodeError(LedgerSearchError):
    """Response body could not be decoded into a SearchResponse."""

    def __init__(self, message: str, metadata: TransportMetadata | None = None):
        super().__init__(message)
        self.metadata = metadata


class InvalidTimeFormat(LedgerSearchError, ValueError):
    """Timestamp was null, empty, or neither Unix seconds nor RFC3339."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"invalid time format: {value!r}")
