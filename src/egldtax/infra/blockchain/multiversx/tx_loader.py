"""MultiversX history loader — offset-paginated transaction and transfer fetches."""

import logging
from collections.abc import Awaitable, Callable

from pydantic import ValidationError

from egldtax.domain.models.explorer import RawTransaction, RawTransfer
from egldtax.exceptions import RequestCancelledError
from egldtax.infra.blockchain.base import ChainTxLoader, TransactionFetchResult, TransferFetchResult
from egldtax.infra.blockchain.multiversx.api_client import MultiversXClient

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]
StopCheck = Callable[[], Awaitable[bool]]


def _noop_progress(message: str) -> None:
    return None


class MultiversXTxLoader(ChainTxLoader):
    """Serial pagination bounded by the API's maximum offset.

    Each loop stops on a short page, or when the next request would exceed
    max_offset. The second case means data may be missing and is reported as a
    warning rather than dropped silently.
    """

    def __init__(
        self,
        client: MultiversXClient,
        transactions_page_size: int = 1000,
        transfers_page_size: int = 500,
        max_offset: int = 10_000,
        transfer_window_seconds: int = 86_400,
        progress: ProgressCallback | None = None,
        should_stop: StopCheck | None = None,
    ) -> None:
        self._client = client
        self._tx_page_size = transactions_page_size
        self._transfer_page_size = transfers_page_size
        self._max_offset = max_offset
        self._window = transfer_window_seconds
        self._progress = progress or _noop_progress
        self._should_stop = should_stop

    async def _check_cancelled(self) -> None:
        if self._should_stop is not None and await self._should_stop():
            raise RequestCancelledError("Client disconnected during history fetch")

    async def load_transactions(self, address: str, start: int, end: int) -> TransactionFetchResult:
        result = TransactionFetchResult()
        offset = 0
        size = self._tx_page_size

        while True:
            if offset + size > self._max_offset:
                msg = (
                    f"Transaction list truncated at offset {offset}: the API pagination limit "
                    f"({self._max_offset}) was reached while pages were still full"
                )
                logger.warning("%s (wallet %s)", msg, address)
                result.warnings.append(msg)
                break

            await self._check_cancelled()
            batch = await self._client.get_transactions(address, after=start, before=end, offset=offset, size=size)
            result.items.extend(_parse_items(batch, RawTransaction))
            logger.info("Fetched %d transactions from index %d for %s", len(batch), offset, address)
            self._progress(f"Fetched {len(batch)} transactions from index {offset}")

            if len(batch) < size:
                break
            offset += size

        logger.info("Total transactions fetched for %s: %d", address, len(result.items))
        return result

    async def load_transfers(self, address: str, start: int, end: int) -> TransferFetchResult:
        """Fetch transfers one time window at a time to stay inside the API's result window."""
        result = TransferFetchResult()
        window_start = start

        while window_start <= end:
            window_end = min(window_start + self._window - 1, end)
            await self._load_transfer_window(address, window_start, window_end, result)
            window_start += self._window

        logger.info("Total transfers fetched for %s: %d", address, len(result.items))
        self._progress(f"Fetched {len(result.items)} transfers")
        return result

    async def _load_transfer_window(
        self, address: str, after: int, before: int, result: TransferFetchResult
    ) -> None:
        start_index = 0
        size = self._transfer_page_size

        while True:
            if start_index + size > self._max_offset:
                msg = (
                    f"Transfer list for window {after}-{before} truncated at index {start_index}: "
                    f"the API pagination limit ({self._max_offset}) was reached"
                )
                logger.warning("%s (wallet %s)", msg, address)
                result.warnings.append(msg)
                return

            await self._check_cancelled()
            batch = await self._client.get_transfers(address, after=after, before=before, start=start_index, size=size)
            result.items.extend(_parse_items(batch, RawTransfer))
            logger.debug(
                "Fetched %d transfers from %d-%d with start index %d", len(batch), after, before, start_index
            )

            if len(batch) < size:
                return
            start_index += size


def _parse_items(batch: list[dict], model: type) -> list:
    """Validate upstream items, skipping (and logging) the ones that don't fit the model."""
    items = []
    for raw in batch:
        try:
            items.append(model.model_validate(raw))
        except ValidationError as e:
            logger.warning("Skipping malformed %s item: %s", model.__name__, e.errors()[:1])
    return items
