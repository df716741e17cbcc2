"""ScResultExtractor — ESDT transfers nested in smart-contract results."""

import logging

from egldtax.domain.enums import NATIVE_IDENTIFIER
from egldtax.domain.models.explorer import RawTransaction
from egldtax.parser.extractors.base import BaseExtractor
from egldtax.parser.utils.call_data import decode_esdt_payments, parse_call_data
from egldtax.parser.utils.context import ReconciliationContext
from egldtax.parser.utils.types import RawLeg

logger = logging.getLogger(__name__)


class ScResultExtractor(BaseExtractor):
    """Decodes each result's call descriptor (ESDTTransfer / ESDTNFTTransfer /
    MultiESDTNFTTransfer). A result that carries plain EGLD value is a native
    movement; gas refunds are not.
    """

    EXTRACTOR_NAME = "ScResultExtractor"
    NEEDS_DETAIL = True

    async def attempt(self, tx: RawTransaction, context: ReconciliationContext) -> list[RawLeg]:
        detail = await context.detail(tx.tx_hash)
        legs: list[RawLeg] = []

        for result in detail.results:
            if result.is_refund:
                continue

            descriptor = parse_call_data(result.data)
            payments = decode_esdt_payments(descriptor)
            if descriptor is not None and descriptor.selector is not None and not payments:
                logger.warning("Undecodable %s result in tx %s, skipping", descriptor.function, tx.tx_hash)

            for payment in payments:
                legs.extend(self._legs(context, result.sender, result.receiver, payment.identifier, payment.amount))

            if result.value_int > 0:
                legs.extend(self._legs(context, result.sender, result.receiver, NATIVE_IDENTIFIER, result.value_int))

        return legs
