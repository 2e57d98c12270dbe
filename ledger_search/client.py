"""Client facade: wires config, transport and search service together."""

from ledger_search.contracts.search_v1 import Resource, SearchParams
from ledger_search.core.config import Config, config
from ledger_search.search.service import SearchResult, SearchService
from ledger_search.transport.http import HttpxTransport
from ledger_search.transport.interface import Transport


class LedgerSearchClient:
    """Entry point for callers.

    Uses HttpxTransport built from config unless a transport is injected.
    Injected transports are not closed by the client.
    """

    def __init__(self, settings: Config | None = None, transport: Transport | None = None):
        self.settings = settings or config
        errors = self.settings.validate()
        if errors:
            raise ValueError("; ".join(errors))
        self._owns_transport = transport is None
        self.transport: Transport = transport or HttpxTransport(settings=self.settings)
        self.search_service = SearchService(self.transport)

    async def search(self, params: SearchParams, resource: Resource | str) -> SearchResult:
        return await self.search_service.search_document(params, resource)

    async def close(self) -> None:
        if self._owns_transport and isinstance(self.transport, HttpxTransport):
            await self.transport.close()

    async def __aenter__(self) -> "LedgerSearchClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()
