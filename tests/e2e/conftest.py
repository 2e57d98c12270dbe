from collections.abc import AsyncIterator

import pytest_asyncio

from ledger_search.client import LedgerSearchClient


@pytest_asyncio.fixture
async def client() -> AsyncIterator[LedgerSearchClient]:
    """Client against LEDGER_SEARCH_BASE_URL, for e2e/integration suites only."""
    instance = LedgerSearchClient()
    try:
        yield instance
    finally:
        await instance.close()
