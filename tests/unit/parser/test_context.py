"""Tests for ReconciliationContext — lazy, single detail fetch."""

from unittest.mock import AsyncMock

from egldtax.domain.models.explorer import TransactionDetail
from egldtax.parser.utils.context import ReconciliationContext


class TestReconciliationContext:
    async def test_detail_fetched_once(self, wallet):
        loader = AsyncMock(return_value=TransactionDetail(operations=[]))
        context = ReconciliationContext(wallet, detail_loader=loader)

        assert not context.detail_fetched
        await context.detail("h1")
        await context.detail("h1")

        loader.assert_awaited_once_with("h1")
        assert context.detail_fetched

    async def test_no_loader_gives_empty_detail(self, wallet):
        context = ReconciliationContext(wallet)
        detail = await context.detail("h1")
        assert detail.results == []
        assert detail.all_events() == []

    def test_is_wallet(self, wallet, counterparty):
        context = ReconciliationContext(wallet)
        assert context.is_wallet(wallet)
        assert not context.is_wallet(counterparty)
        assert not context.is_wallet("")
        assert not context.is_wallet(None)
