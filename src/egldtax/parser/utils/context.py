"""ReconciliationContext — per-transaction working set shared by the extractors."""

from collections.abc import Awaitable, Callable

from egldtax.domain.models.explorer import RawTransfer, TransactionDetail

DetailLoader = Callable[[str], Awaitable[TransactionDetail]]


class ReconciliationContext:
    """Wallet, correlated transfers and a lazily fetched TransactionDetail for one transaction.

    The detail is requested at most once, and only when an extractor asks for it.
    """

    def __init__(
        self,
        wallet: str,
        transfers: list[RawTransfer] | None = None,
        detail_loader: DetailLoader | None = None,
    ) -> None:
        self._wallet = wallet
        self._transfers: list[RawTransfer] = list(transfers or [])
        self._detail_loader = detail_loader
        self._detail: TransactionDetail | None = None

    @property
    def wallet(self) -> str:
        return self._wallet

    @property
    def transfers(self) -> list[RawTransfer]:
        return list(self._transfers)

    @property
    def detail_fetched(self) -> bool:
        return self._detail is not None

    def is_wallet(self, address: str | None) -> bool:
        return bool(address) and address == self._wallet

    async def detail(self, tx_hash: str) -> TransactionDetail:
        if self._detail is None:
            if self._detail_loader is None:
                self._detail = TransactionDetail()
            else:
                self._detail = await self._detail_loader(tx_hash)
        return self._detail
