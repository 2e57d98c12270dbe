import logging

import pytest

from ledger_search.client import LedgerSearchClient
from ledger_search.contracts.search_v1 import Resource, SearchParams
from ledger_search.errors import TransportExecutionError

logger = logging.getLogger(__name__)


@pytest.mark.asyncio
async def test_applied_transactions_newest_first(client: LedgerSearchClient):
    """
    Flat search: applied transactions sorted by created_at desc.
    Expectation: flat hits only, each with a decoded created_at.
    """
    params = SearchParams(
        q="*",
        query_by="transaction_id,reference,description",
        filter_by="status:APPLIED",
        sort_by="created_at:desc",
        page=1,
        per_page=10,
    )

    response, metadata = await client.search(params, Resource.TRANSACTIONS)
    logger.info(f"Found {response.found} transactions in {response.search_time_ms}ms")

    assert metadata.status_code == 200
    assert response.page == 1
    assert response.grouped_hits == []
    assert len(response.hits) <= 10
    assert all(not h.document.created_at.is_zero for h in response.hits)
    stamps = [h.document.created_at for h in response.hits]
    assert stamps == sorted(stamps, reverse=True)


@pytest.mark.asyncio
async def test_transactions_grouped_by_currency(client: LedgerSearchClient):
    """
    Grouped search: group_by currency with at most 5 hits per group.
    """
    params = SearchParams(
        q="*",
        query_by="balance_id,currency",
        sort_by="created_at:desc",
        page=1,
        per_page=50,
        group_by="currency",
        group_limit=5,
    )

    response, _ = await client.search(params, Resource.TRANSACTIONS)
    logger.info(f"Found {response.found} transactions in {len(response.grouped_hits)} groups")

    assert response.hits == []
    for group in response.grouped_hits:
        assert len(group.hits) <= 5
        assert all(h.document.currency == group.group_key[0] for h in group.hits)


@pytest.mark.asyncio
async def test_unknown_collection_is_a_transport_error(client: LedgerSearchClient):
    with pytest.raises(TransportExecutionError) as exc_info:
        await client.search(SearchParams(q="*", query_by="name"), "no_such_collection")

    assert exc_info.value.status_code is not None
    assert 400 <= exc_info.value.status_code < 500
