"""Tests for MultiversXTxLoader — pagination, windows, truncation and cancellation."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from egldtax.exceptions import RequestCancelledError
from egldtax.infra.blockchain.multiversx.tx_loader import MultiversXTxLoader

ADDRESS = "erd1" + "q" * 58
DAY = 86_400


def _txs(*hashes: str) -> list[dict]:
    return [{"txHash": h, "timestamp": 1, "value": "0", "fee": "0"} for h in hashes]


def _transfers(*hashes: str) -> list[dict]:
    return [{"txHash": h, "value": "1"} for h in hashes]


@pytest.fixture()
def client():
    return AsyncMock()


def _loader(client, **kwargs) -> MultiversXTxLoader:
    params = dict(transactions_page_size=2, transfers_page_size=2, max_offset=10, transfer_window_seconds=DAY)
    params.update(kwargs)
    return MultiversXTxLoader(client, **params)


class TestLoadTransactions:
    async def test_stops_on_short_page(self, client):
        client.get_transactions.side_effect = [_txs("a", "b"), _txs("c")]
        result = await _loader(client).load_transactions(ADDRESS, 100, 200)

        assert [tx.tx_hash for tx in result.items] == ["a", "b", "c"]
        assert not result.truncated
        offsets = [call.kwargs["offset"] for call in client.get_transactions.call_args_list]
        assert offsets == [0, 2]
        assert client.get_transactions.call_args_list[0].kwargs["after"] == 100
        assert client.get_transactions.call_args_list[0].kwargs["before"] == 200

    async def test_ceiling_with_full_pages_warns(self, client):
        client.get_transactions.return_value = _txs("a", "b")
        result = await _loader(client, max_offset=4).load_transactions(ADDRESS, 0, 1)

        assert client.get_transactions.await_count == 2
        assert len(result.items) == 4
        assert result.truncated
        assert "truncated" in result.warnings[0]

    async def test_default_ceiling_allows_ten_pages(self, client):
        client.get_transactions.return_value = _txs(*[str(i) for i in range(1000)])
        loader = _loader(client, transactions_page_size=1000, max_offset=10_000)
        result = await loader.load_transactions(ADDRESS, 0, 1)
        assert client.get_transactions.await_count == 10
        assert result.truncated

    async def test_malformed_items_skipped(self, client):
        client.get_transactions.side_effect = [_txs("a") + [{"timestamp": 5}], []]
        result = await _loader(client).load_transactions(ADDRESS, 0, 1)
        assert [tx.tx_hash for tx in result.items] == ["a"]
        assert client.get_transactions.await_count == 2

    async def test_reports_progress(self, client):
        progress = MagicMock()
        client.get_transactions.return_value = _txs("a")
        await _loader(client, progress=progress).load_transactions(ADDRESS, 0, 1)
        progress.assert_called_with("Fetched 1 transactions from index 0")

    async def test_cancelled_before_first_page(self, client):
        should_stop = AsyncMock(return_value=True)
        with pytest.raises(RequestCancelledError):
            await _loader(client, should_stop=should_stop).load_transactions(ADDRESS, 0, 1)
        client.get_transactions.assert_not_awaited()


class TestLoadTransfers:
    async def test_day_windows(self, client):
        client.get_transfers.return_value = _transfers("t")
        result = await _loader(client).load_transfers(ADDRESS, 0, 2 * DAY - 1)

        windows = [(c.kwargs["after"], c.kwargs["before"]) for c in client.get_transfers.call_args_list]
        assert windows == [(0, DAY - 1), (DAY, 2 * DAY - 1)]
        assert len(result.items) == 2

    async def test_last_window_clamped_to_end(self, client):
        client.get_transfers.return_value = []
        await _loader(client).load_transfers(ADDRESS, 0, DAY + 10)
        windows = [(c.kwargs["after"], c.kwargs["before"]) for c in client.get_transfers.call_args_list]
        assert windows == [(0, DAY - 1), (DAY, DAY + 10)]

    async def test_paginates_within_window(self, client):
        client.get_transfers.side_effect = [_transfers("a", "b"), _transfers("c")]
        result = await _loader(client).load_transfers(ADDRESS, 0, 10)

        starts = [c.kwargs["start"] for c in client.get_transfers.call_args_list]
        assert starts == [0, 2]
        assert len(result.items) == 3

    async def test_window_ceiling_warns(self, client):
        client.get_transfers.return_value = _transfers("a", "b")
        result = await _loader(client, max_offset=2).load_transfers(ADDRESS, 0, 10)

        assert client.get_transfers.await_count == 1
        assert result.truncated
        assert "0-10" in result.warnings[0]

    async def test_reports_total(self, client):
        progress = MagicMock()
        client.get_transfers.return_value = _transfers("a")
        await _loader(client, progress=progress).load_transfers(ADDRESS, 0, 10)
        progress.assert_called_with("Fetched 1 transfers")
