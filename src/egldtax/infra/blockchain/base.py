"""Abstract base for chain-specific history loaders."""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from egldtax.domain.models.explorer import RawTransaction, RawTransfer


class FetchResult(BaseModel):
    """Items collected by one paginated loop, plus truncation notices.

    A warning is recorded whenever the pagination ceiling was hit while pages
    were still full: the upstream may hold more items than were fetched.
    """

    items: list = []
    warnings: list[str] = []

    @property
    def truncated(self) -> bool:
        return bool(self.warnings)


class TransactionFetchResult(FetchResult):
    items: list[RawTransaction] = []


class TransferFetchResult(FetchResult):
    items: list[RawTransfer] = []


class ChainTxLoader(ABC):
    """Strategy interface for loading a wallet's history from a specific chain."""

    @abstractmethod
    async def load_transactions(self, address: str, start: int, end: int) -> TransactionFetchResult:
        """Load top-level transactions with timestamps in [start, end]."""

    @abstractmethod
    async def load_transfers(self, address: str, start: int, end: int) -> TransferFetchResult:
        """Load native and token movements with timestamps in [start, end]."""
