"""RelevanceClassifier — intentionally over-selects; the engine decides what actually moved."""

from collections.abc import Iterable

from egldtax.domain.models.explorer import RawTransaction, RawTransfer
from egldtax.parser.utils.call_data import starts_with_esdt_transfer


class RelevanceClassifier:
    """A transaction is tax relevant if ANY of:

    1. its function is a watched call name
    2. it carries a nonzero native value
    3. the transfer list has an entry correlated to its hash
    4. its payload opens with the ESDTTransfer selector (any encoding)
    """

    def __init__(self, watched_functions: Iterable[str], transfer_hashes: set[str] | None = None) -> None:
        self._watched = {f.lower() for f in watched_functions}
        self._transfer_hashes = set(transfer_hashes or ())

    @classmethod
    def from_transfers(cls, watched_functions: Iterable[str], transfers: Iterable[RawTransfer]) -> "RelevanceClassifier":
        return cls(watched_functions, {t.correlation_hash for t in transfers})

    def is_relevant(self, tx: RawTransaction) -> bool:
        if tx.function in self._watched:
            return True
        if tx.value_int != 0:
            return True
        if tx.tx_hash in self._transfer_hashes:
            return True
        return starts_with_esdt_transfer(tx.data)

    def filter(self, transactions: Iterable[RawTransaction], start: int, end: int) -> list[RawTransaction]:
        """Relevant transactions with start <= timestamp <= end, input order kept."""
        return [
            tx for tx in transactions
            if start <= tx.timestamp <= end and self.is_relevant(tx)
        ]
