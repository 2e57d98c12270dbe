"""Client for a ledger platform's search API (transactions, ledgers, balances)."""

from ledger_search.client import LedgerSearchClient
from ledger_search.contracts.search_v1 import (
    FlexibleTime,
    GroupedHit,
    MetaDataShape,
    Resource,
    SearchDocument,
    SearchHit,
    SearchParams,
    SearchResponse,
)
from ledger_search.errors import (
    DecodeError,
    InvalidTimeFormat,
    LedgerSearchError,
    RequestConstructionError,
    TransportExecutionError,
)
from ledger_search.search.service import SearchResult, SearchService
from ledger_search.transport.http import HttpxTransport
from ledger_search.transport.interface import Transport, TransportMetadata

__all__ = [
    "LedgerSearchClient",
    "FlexibleTime",
    "GroupedHit",
    "MetaDataShape",
    "Resource",
    "SearchDocument",
    "SearchHit",
    "SearchParams",
    "SearchResponse",
    "DecodeError",
    "InvalidTimeFormat",
    "LedgerSearchError",
    "RequestConstructionError",
    "TransportExecutionError",
    "SearchResult",
    "SearchService",
    "HttpxTransport",
    "Transport",
    "TransportMetadata",
]
