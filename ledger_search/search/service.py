"""Search service: POST search/{resource} through a Transport and decode the result."""

import time
from typing import NamedTuple

from pydantic import ValidationError

from ledger_search.contracts.search_v1 import Resource, SearchParams, SearchResponse
from ledger_search.core.logger import logger
from ledger_search.errors import DecodeError, LedgerSearchError
from ledger_search.observability import trace
from ledger_search.transport.interface import HTTP_POST, Transport, TransportMetadata

SEARCH_PATH_PREFIX = "search"


class SearchResult(NamedTuple):
    response: SearchResponse
    metadata: TransportMetadata


def decode_response(raw: bytes | str, metadata: TransportMetadata | None = None) -> SearchResponse:
    """Decode a raw body. One malformed field fails the whole response."""
    try:
        return SearchResponse.model_validate_json(raw)
    except ValidationError as e:
        raise DecodeError(f"could not decode search response: {e}", metadata=metadata) from e


class SearchService:
    """Runs searches against named collections.

    Holds only the transport, so one instance can be shared by concurrent
    tasks. The resource name is not checked locally; an unknown collection
    comes back as a TransportExecutionError from the server.
    """

    def __init__(self, transport: Transport):
        self._transport = transport

    async def search_document(
        self,
        params: SearchParams,
        resource: Resource | str,
    ) -> SearchResult:
        resource = str(resource)
        path = f"{SEARCH_PATH_PREFIX}/{resource}"
        body = params.to_body()
        logger.search_request(resource, body)

        t0 = time.monotonic()
        async with trace(
            "search_document",
            "retriever",
            inputs={"resource": resource, "params": body},
            metadata={"path": path},
        ) as run:
            try:
                request = self._transport.build_request(path, HTTP_POST, body)
                raw, metadata = await self._transport.execute(request)
                response = decode_response(raw, metadata)
            except LedgerSearchError as e:
                failed_meta: TransportMetadata | None = getattr(e, "metadata", None)
                logger.search_error(
                    resource,
                    e,
                    failed_meta.status_code if failed_meta else None,
                    time.monotonic() - t0,
                )
                raise

            logger.search_response(
                resource,
                metadata.status_code,
                found=response.found,
                hits=len(response.hits),
                groups=len(response.grouped_hits),
                duration_seconds=time.monotonic() - t0,
            )
            run.end(
                outputs={
                    "status_code": metadata.status_code,
                    "found": response.found,
                    "grouped": response.is_grouped,
                }
            )
        return SearchResult(response, metadata)
