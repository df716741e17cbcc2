"""TransferListExtractor — movements from /accounts/{addr}/transfers correlated by hash."""

import logging

from egldtax.domain.enums import NATIVE_IDENTIFIER
from egldtax.domain.models.explorer import RawTransaction
from egldtax.parser.extractors.base import BaseExtractor
from egldtax.parser.utils.call_data import decode_esdt_payments, parse_call_data
from egldtax.parser.utils.context import ReconciliationContext
from egldtax.parser.utils.types import RawLeg

logger = logging.getLogger(__name__)


class TransferListExtractor(BaseExtractor):
    """Highest-priority source. Needs no detail fetch.

    When a transfer's payload is itself an ESDT transfer descriptor, the token
    and amount are decoded from the payload: the entry's own identifier/value
    fields are not reliable in that case.
    """

    EXTRACTOR_NAME = "TransferListExtractor"

    async def attempt(self, tx: RawTransaction, context: ReconciliationContext) -> list[RawLeg]:
        legs: list[RawLeg] = []
        for transfer in context.transfers:
            if transfer.is_refund:
                continue
            payments = decode_esdt_payments(parse_call_data(transfer.data))
            if payments:
                for payment in payments:
                    legs.extend(self._legs(
                        context, transfer.sender, transfer.receiver, payment.identifier, payment.amount,
                    ))
                continue

            identifier = transfer.identifier or NATIVE_IDENTIFIER
            legs.extend(self._legs(context, transfer.sender, transfer.receiver, identifier, transfer.value_int))

        if legs:
            logger.debug("Transfer list gave %d legs for %s", len(legs), tx.tx_hash)
        return legs
