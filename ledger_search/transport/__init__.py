"""Transport boundary and the default httpx transport."""

from ledger_search.transport.interface import HTTP_POST, Transport, TransportMetadata
from ledger_search.transport.http import HttpxTransport

__all__ = [
    "HTTP_POST",
    "Transport",
    "TransportMetadata",
    "HttpxTransport",
]
