"""Tests for TaxReportService — pipeline orchestration and progress lifecycle."""

from unittest.mock import AsyncMock

import pytest

from egldtax.config import Settings
from egldtax.exceptions import AccountNotFoundError, RequestCancelledError
from egldtax.infra.progress.registry import ProgressRegistry
from egldtax.infra.token.decimals import TokenDecimalsResolver
from egldtax.parser.registry import build_default_registry
from egldtax.report.service import TaxReportService

START = 1_700_000_000
END = START + 3600


def _tx(tx_hash: str, **fields) -> dict:
    data = {"txHash": tx_hash, "timestamp": START + 10, "value": "0", "fee": "0"}
    data.update(fields)
    return data


@pytest.fixture()
def client():
    mock = AsyncMock()
    mock.get_account.return_value = {}
    mock.get_transfers.return_value = []
    mock.get_transaction.return_value = {}
    return mock


@pytest.fixture()
def progress():
    return ProgressRegistry()


def _service(client, progress, settings: Settings) -> TaxReportService:
    decimals = TokenDecimalsResolver(client, settings.known_token_decimals)
    return TaxReportService(settings, client, decimals, build_default_registry(settings), progress)


def _drain(queue) -> list:
    events = []
    while not queue.empty():
        events.append(queue.get_nowait())
    return events


class TestBuildReport:
    async def test_happy_path(self, client, progress, paged_settings, wallet, counterparty):
        client.get_transactions.side_effect = [
            [
                _tx("h1", sender=counterparty, receiver=wallet, value=str(10**18)),
                _tx("h2", function="vote", sender=wallet, receiver=counterparty),
            ],
            [],
        ]
        report = await _service(client, progress, paged_settings).build_report(wallet, START, END)

        assert [tx.tx_hash for tx in report.all_transactions] == ["h1", "h2"]
        assert len(report.tax_relevant_transactions) == 1
        row = report.tax_relevant_transactions[0]
        assert (row.tx_hash, row.in_amount, row.in_currency) == ("h1", "1", "EGLD")
        assert report.warnings == []
        client.get_account.assert_awaited_once_with(wallet)

    async def test_transfer_correlation(self, client, progress, paged_settings, wallet, counterparty):
        client.get_transactions.return_value = [_tx("h1", function="someCall", sender=wallet, receiver=counterparty)]
        client.get_transfers.return_value = [
            {"txHash": "scr1", "originalTxHash": "h1", "sender": counterparty, "receiver": wallet,
             "identifier": "USDC-c76f1f", "value": "2500000"},
        ]
        report = await _service(client, progress, paged_settings).build_report(wallet, START, END)

        row = report.tax_relevant_transactions[0]
        assert (row.in_amount, row.in_currency) == ("2.5", "USDC-c76f1f")
        client.get_transaction.assert_not_awaited()

    async def test_truncation_surfaces_as_warning(self, client, progress, wallet, counterparty):
        settings = Settings(transactions_page_size=1, transfers_page_size=1, max_pagination_offset=1)
        client.get_transactions.return_value = [_tx("h1", sender=counterparty, receiver=wallet, value="1")]
        queue = progress.register("c1")

        report = await _service(client, progress, settings).build_report(wallet, START, END, client_id="c1")

        assert len(report.warnings) == 1
        messages = [e.message for e in _drain(queue)]
        assert any(m.startswith("Warning:") for m in messages)

    async def test_progress_ends_with_done(self, client, progress, paged_settings, wallet):
        client.get_transactions.return_value = []
        queue = progress.register("c1")

        await _service(client, progress, paged_settings).build_report(wallet, START, END, client_id="c1")

        events = _drain(queue)
        assert events[-1].done
        assert events[-1].message.startswith("Completed")
        assert not any(e.done for e in events[:-1])

    async def test_failure_sends_terminal_notice(self, client, progress, paged_settings, wallet):
        client.get_account.side_effect = AccountNotFoundError("Account not found", status_code=404)
        queue = progress.register("c1")

        with pytest.raises(AccountNotFoundError):
            await _service(client, progress, paged_settings).build_report(wallet, START, END, client_id="c1")

        events = _drain(queue)
        assert events[-1].done
        assert events[-1].message == "Error fetching transactions"
        client.get_transactions.assert_not_awaited()

    async def test_cancellation_stops_upstream_calls(self, client, progress, paged_settings, wallet):
        should_stop = AsyncMock(return_value=True)
        queue = progress.register("c1")

        with pytest.raises(RequestCancelledError):
            await _service(client, progress, paged_settings).build_report(
                wallet, START, END, client_id="c1", should_stop=should_stop,
            )

        client.get_transactions.assert_not_awaited()
        assert _drain(queue)[-1].message == "Request cancelled"
