"""TransferReconciler — turns one relevant transaction into tax rows.

Extractors are tried in precedence order. The first one whose legs survive the
call handler as a complete selection wins; a partial selection is remembered
and used only if nothing later completes it.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from itertools import zip_longest

from pydantic import ValidationError

from egldtax.domain.enums import NATIVE_DECIMALS, NATIVE_IDENTIFIER, Direction
from egldtax.domain.models.explorer import RawTransaction, RawTransfer, TransactionDetail
from egldtax.domain.models.tax import TaxRow
from egldtax.exceptions import UpstreamError
from egldtax.infra.blockchain.multiversx.api_client import MultiversXClient
from egldtax.infra.token.decimals import TokenDecimalsResolver
from egldtax.parser.registry import ExtractorRegistry
from egldtax.parser.utils.amounts import format_amount, format_units
from egldtax.parser.utils.context import ReconciliationContext
from egldtax.parser.utils.types import Leg, RawLeg, collection_of

logger = logging.getLogger(__name__)


def index_transfers(transfers: Iterable[RawTransfer]) -> dict[str, list[RawTransfer]]:
    """Group transfers by the top-level transaction hash they belong to."""
    by_hash: dict[str, list[RawTransfer]] = defaultdict(list)
    for transfer in transfers:
        by_hash[transfer.correlation_hash].append(transfer)
    return dict(by_hash)


def unique_legs(raw_legs: list[RawLeg]) -> list[RawLeg]:
    """Drop repeated (direction, identifier, raw_value) legs, keeping the first.

    One movement can surface twice in a single source: a transfer-list entry and
    its cross-shard twin, or an event logged on the transaction and again on the
    result that emitted it.
    """
    seen: set[tuple[Direction, str, int]] = set()
    unique: list[RawLeg] = []
    for leg in raw_legs:
        key = (leg.direction, leg.identifier, leg.raw_value)
        if key in seen:
            logger.debug("Dropping repeated %s leg %s %d from %s", leg.direction.value, leg.identifier, leg.raw_value, leg.source)
            continue
        seen.add(key)
        unique.append(leg)
    return unique


class TransferReconciler:
    def __init__(
        self,
        registry: ExtractorRegistry,
        decimals: TokenDecimalsResolver,
        client: MultiversXClient,
    ) -> None:
        self._registry = registry
        self._decimals = decimals
        self._client = client

    async def reconcile(
        self, tx: RawTransaction, wallet: str, transfers: list[RawTransfer] | None = None
    ) -> list[TaxRow]:
        context = ReconciliationContext(wallet, transfers, detail_loader=self._load_detail)
        handler = self._registry.handler_for(tx.function)

        chosen: list[Leg] = []
        partial: list[Leg] = []
        for extractor in self._registry.extractors:
            raw_legs = await extractor.attempt(tx, context)
            if not raw_legs:
                continue

            legs = await self._resolve(unique_legs(raw_legs))
            selected = handler.select(tx, legs, context)
            if not selected:
                logger.debug("%s dropped every %s leg for %s", handler.HANDLER_NAME, extractor.EXTRACTOR_NAME, tx.tx_hash)
                continue
            if handler.is_complete(selected):
                chosen = selected
                break
            if not partial:
                partial = selected
        else:
            chosen = partial

        rows = build_rows(tx, chosen)
        logger.debug("Tx %s -> %d rows (%s)", tx.tx_hash, len(rows), rows[0].source or "no movement")
        return rows

    async def _load_detail(self, tx_hash: str) -> TransactionDetail:
        """Detail for tx_hash. Permanent upstream errors degrade to an empty detail; transient ones propagate."""
        try:
            data = await self._client.get_transaction(tx_hash)
            return TransactionDetail.model_validate(data)
        except UpstreamError as e:
            logger.warning("No detail for tx %s, continuing without it: %s", tx_hash, e)
        except ValidationError as e:
            logger.warning("Malformed detail for tx %s, continuing without it: %s", tx_hash, e.errors()[:1])
        return TransactionDetail()

    async def _resolve(self, raw_legs: list[RawLeg]) -> list[Leg]:
        legs: list[Leg] = []
        for raw in raw_legs:
            decimals = await self._decimals.resolve(collection_of(raw.identifier))
            legs.append(Leg(**raw.model_dump(), decimals=decimals))
        return legs


def build_rows(tx: RawTransaction, legs: list[Leg]) -> list[TaxRow]:
    """Pair the i-th inbound leg with the i-th outbound leg. The fee lands on the first row only."""
    fee = format_units(tx.fee_int, NATIVE_DECIMALS)
    ins = [leg for leg in legs if leg.direction == Direction.IN]
    outs = [leg for leg in legs if leg.direction == Direction.OUT]

    if not ins and not outs:
        return [TaxRow(timestamp=tx.timestamp, function=tx.function, fee=fee, tx_hash=tx.tx_hash)]

    rows: list[TaxRow] = []
    for i, (leg_in, leg_out) in enumerate(zip_longest(ins, outs)):
        rows.append(TaxRow(
            timestamp=tx.timestamp,
            function=tx.function,
            in_amount=format_amount(leg_in.amount) if leg_in else "0",
            in_currency=leg_in.identifier if leg_in else NATIVE_IDENTIFIER,
            out_amount=format_amount(leg_out.amount) if leg_out else "0",
            out_currency=leg_out.identifier if leg_out else NATIVE_IDENTIFIER,
            fee=fee if i == 0 else "0",
            tx_hash=tx.tx_hash,
            source=(leg_in or leg_out).source,
        ))
    return rows
