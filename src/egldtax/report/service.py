"""TaxReportService — orchestrates fetch -> classify -> reconcile -> dedupe for one request."""

import logging
from collections.abc import Awaitable, Callable

from pydantic import BaseModel

from egldtax.accounting.deduplicator import dedupe_rows
from egldtax.config import Settings
from egldtax.domain.models.explorer import RawTransaction
from egldtax.domain.models.tax import TaxRow
from egldtax.exceptions import RequestCancelledError
from egldtax.infra.blockchain.multiversx.api_client import MultiversXClient
from egldtax.infra.blockchain.multiversx.tx_loader import MultiversXTxLoader
from egldtax.infra.progress.registry import ProgressRegistry
from egldtax.infra.token.decimals import TokenDecimalsResolver
from egldtax.parser.classifier import RelevanceClassifier
from egldtax.parser.engine import TransferReconciler, index_transfers
from egldtax.parser.registry import ExtractorRegistry

logger = logging.getLogger(__name__)

StopCheck = Callable[[], Awaitable[bool]]


class TaxReport(BaseModel):
    all_transactions: list[RawTransaction] = []
    tax_relevant_transactions: list[TaxRow] = []
    warnings: list[str] = []


class TaxReportService:
    """Builds the tax table for one wallet and date range.

    Progress milestones go to the registry under client_id; the last one for a
    request is always marked done, on success and on failure alike.
    """

    def __init__(
        self,
        settings: Settings,
        client: MultiversXClient,
        decimals: TokenDecimalsResolver,
        registry: ExtractorRegistry,
        progress: ProgressRegistry,
    ) -> None:
        self._settings = settings
        self._client = client
        self._progress = progress
        self._reconciler = TransferReconciler(registry, decimals, client)

    async def build_report(
        self,
        wallet: str,
        start: int,
        end: int,
        client_id: str | None = None,
        should_stop: StopCheck | None = None,
    ) -> TaxReport:
        def progress(message: str) -> None:
            self._progress.report_progress(client_id, message)

        try:
            report = await self._build(wallet, start, end, progress, should_stop)
        except RequestCancelledError:
            logger.info("Report for %s cancelled by client", wallet)
            self._progress.report_progress(client_id, "Request cancelled", done=True)
            raise
        except Exception:
            logger.exception("Report for %s failed", wallet)
            self._progress.report_progress(client_id, "Error fetching transactions", done=True)
            raise

        self._progress.report_progress(
            client_id,
            f"Completed: {len(report.tax_relevant_transactions)} tax rows",
            done=True,
        )
        return report

    async def _build(
        self,
        wallet: str,
        start: int,
        end: int,
        progress: Callable[[str], None],
        should_stop: StopCheck | None,
    ) -> TaxReport:
        s = self._settings

        logger.info("Verifying account %s", wallet)
        progress("Verifying account")
        await self._client.get_account(wallet)

        loader = MultiversXTxLoader(
            self._client,
            transactions_page_size=s.transactions_page_size,
            transfers_page_size=s.transfers_page_size,
            max_offset=s.max_pagination_offset,
            transfer_window_seconds=s.transfer_window_seconds,
            progress=progress,
            should_stop=should_stop,
        )
        transactions = await loader.load_transactions(wallet, start, end)
        transfers = await loader.load_transfers(wallet, start, end)

        warnings = transactions.warnings + transfers.warnings
        for warning in warnings:
            progress(f"Warning: {warning}")

        classifier = RelevanceClassifier.from_transfers(s.watched_functions, transfers.items)
        relevant = classifier.filter(transactions.items, start, end)
        logger.info("%d of %d transactions are tax relevant for %s", len(relevant), len(transactions.items), wallet)
        progress(f"Found {len(relevant)} tax relevant transactions")

        by_hash = index_transfers(transfers.items)
        rows: list[TaxRow] = []
        for i, tx in enumerate(relevant, start=1):
            if should_stop is not None and await should_stop():
                raise RequestCancelledError("Client disconnected during reconciliation")
            rows.extend(await self._reconciler.reconcile(tx, wallet, by_hash.get(tx.tx_hash)))
            progress(f"Processed transaction {i}/{len(relevant)}")

        return TaxReport(
            all_transactions=transactions.items,
            tax_relevant_transactions=dedupe_rows(rows),
            warnings=warnings,
        )
