"""Search API contract v1: request body, response envelope, documents and flexible timestamps."""

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

__all__ = [
    "FlexibleTime",
    "GroupedHit",
    "MetaDataShape",
    "Resource",
    "SearchDocument",
    "SearchHit",
    "SearchParams",
    "SearchResponse",
]
