"""Search invocation: builds search/{resource} requests and decodes responses."""

from ledger_search.search.service import SearchResult, SearchService, decode_response

__all__ = [
    "SearchResult",
    "SearchService",
    "decode_response",
]
