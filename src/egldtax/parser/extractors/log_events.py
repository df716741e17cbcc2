"""LogEventExtractor — transfer events from the execution logs."""

import logging

from egldtax.domain.enums import Direction, TransferSelector
from egldtax.domain.models.explorer import LogEvent, RawTransaction
from egldtax.parser.extractors.base import BaseExtractor
from egldtax.parser.utils.address import topic_to_address
from egldtax.parser.utils.call_data import EsdtPayment, make_payment
from egldtax.parser.utils.codec import base64_to_int, base64_to_text
from egldtax.parser.utils.context import ReconciliationContext
from egldtax.parser.utils.types import RawLeg

logger = logging.getLogger(__name__)

TRANSFER_EVENTS = {s.value for s in TransferSelector}


def decode_transfer_topics(topics: list[str | None]) -> tuple[list[EsdtPayment], str] | None:
    """Split transfer-event topics into payments and the recipient address.

    Supported shapes (base64 topics, recipient always last):
        3 topics:    [token, amount, recipient]
        3k+1 topics: [token, nonce, amount]{k} + [recipient]
    Returns None for any other shape or an undecodable recipient.
    """
    n = len(topics)
    if n < 3:
        return None

    recipient = topic_to_address(topics[-1])
    if not recipient:
        return None

    if n == 3:
        payment = make_payment(base64_to_text(topics[0]), 0, base64_to_int(topics[1]))
        return ([payment] if payment else []), recipient

    if (n - 1) % 3 != 0:
        return None

    payments: list[EsdtPayment] = []
    for i in range(0, n - 1, 3):
        payment = make_payment(
            base64_to_text(topics[i]),
            base64_to_int(topics[i + 1]),
            base64_to_int(topics[i + 2]),
        )
        if payment is not None:
            payments.append(payment)
    return payments, recipient


class LogEventExtractor(BaseExtractor):
    """Inbound when the recipient topic is the wallet; outbound when the wallet emitted the event."""

    EXTRACTOR_NAME = "LogEventExtractor"
    NEEDS_DETAIL = True

    async def attempt(self, tx: RawTransaction, context: ReconciliationContext) -> list[RawLeg]:
        detail = await context.detail(tx.tx_hash)
        legs: list[RawLeg] = []
        for event in detail.all_events():
            if event.identifier not in TRANSFER_EVENTS:
                continue
            legs.extend(self._event_legs(tx, event, context))
        return legs

    def _event_legs(self, tx: RawTransaction, event: LogEvent, context: ReconciliationContext) -> list[RawLeg]:
        decoded = decode_transfer_topics(event.topics)
        if decoded is None:
            logger.warning(
                "Skipping %s event with %d topics in tx %s", event.identifier, len(event.topics), tx.tx_hash,
            )
            return []

        payments, recipient = decoded
        legs: list[RawLeg] = []
        for payment in payments:
            if payment.amount <= 0:
                continue
            if context.is_wallet(recipient):
                legs.append(RawLeg(
                    direction=Direction.IN,
                    identifier=payment.identifier,
                    raw_value=payment.amount,
                    source=self.EXTRACTOR_NAME,
                ))
            if context.is_wallet(event.address):
                legs.append(RawLeg(
                    direction=Direction.OUT,
                    identifier=payment.identifier,
                    raw_value=payment.amount,
                    source=self.EXTRACTOR_NAME,
                ))
        return legs
