"""Row deduplication — collapses re-derivations of the same movement."""

import logging
from collections.abc import Callable, Hashable, Iterable
from decimal import Decimal

from egldtax.domain.enums import Direction
from egldtax.domain.models.tax import ObservedAmount, TaxRow
from egldtax.parser.utils.amounts import format_amount, to_decimal

logger = logging.getLogger(__name__)

RowKey = Callable[[TaxRow], Hashable]


def asset_key(row: TaxRow) -> tuple[str, str, str, str]:
    """Default key: distinct asset legs of one transaction stay separate rows."""
    return (row.tx_hash, row.function.lower(), row.in_currency, row.out_currency)


def call_key(row: TaxRow) -> tuple[str, str]:
    """Narrow key: one row per transaction and function."""
    return (row.tx_hash, row.function.lower())


def _rank(row: TaxRow) -> tuple[Decimal, Decimal, Decimal, str, str, str]:
    in_amount = to_decimal(row.in_amount)
    out_amount = to_decimal(row.out_amount)
    # Full tuple so the winner never depends on input order
    return (max(in_amount, out_amount), in_amount, out_amount, row.in_currency, row.out_currency, row.source)


def _observed(row: TaxRow) -> set[ObservedAmount]:
    seen = set(row.observed)
    for direction, amount, currency in (
        (Direction.IN, row.in_amount, row.in_currency),
        (Direction.OUT, row.out_amount, row.out_currency),
    ):
        value = to_decimal(amount)
        if value != 0:
            seen.add(ObservedAmount(direction=direction, amount=format_amount(value), currency=currency))
    return seen


def _observed_order(entry: ObservedAmount) -> tuple[str, str, Decimal]:
    return (entry.direction.value, entry.currency, to_decimal(entry.amount))


def merge_group(rows: list[TaxRow]) -> TaxRow:
    """Merge rows sharing a key: largest amount wins, observed amounts are unioned, largest fee kept."""
    chosen = max(rows, key=_rank)
    observed: set[ObservedAmount] = set()
    for row in rows:
        observed |= _observed(row)
    fee = max(to_decimal(row.fee) for row in rows)
    return chosen.model_copy(update={
        "fee": format_amount(fee),
        "observed": sorted(observed, key=_observed_order),
    })


def dedupe_rows(rows: Iterable[TaxRow], key: RowKey = asset_key) -> list[TaxRow]:
    """Collapse rows sharing key. Output follows first-seen key order.

    Idempotent: dedupe_rows(dedupe_rows(x)) == dedupe_rows(x).
    """
    groups: dict[Hashable, list[TaxRow]] = {}
    total = 0
    for row in rows:
        groups.setdefault(key(row), []).append(row)
        total += 1

    merged = [merge_group(group) for group in groups.values()]
    if len(merged) != total:
        logger.info("Deduplicated %d rows into %d", total, len(merged))
    return merged
