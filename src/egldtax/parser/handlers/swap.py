"""SwapHandler — DEX swaps and aggregator routes."""

from egldtax.domain.enums import CallKind
from egldtax.domain.models.explorer import RawTransaction
from egldtax.parser.handlers.base import CallHandler, has_both_sides, inbound, outbound
from egldtax.parser.utils.context import ReconciliationContext
from egldtax.parser.utils.types import Leg


def largest(legs: list[Leg]) -> Leg | None:
    """Leg with the largest display amount; the earliest one on ties."""
    if not legs:
        return None
    return max(legs, key=lambda leg: leg.amount)


class SwapHandler(CallHandler):
    """One leg per side: the largest movement. Smaller ones (fee skims, dust) are ignored.

    Change returned in the token that was sold is not the bought side unless
    nothing else came back.
    """

    HANDLER_NAME = "SwapHandler"
    CALL_KIND = CallKind.SWAP

    def select(self, tx: RawTransaction, legs: list[Leg], context: ReconciliationContext) -> list[Leg]:
        sent = largest(outbound(legs))
        received_candidates = inbound(legs)
        if sent is not None:
            others = [leg for leg in received_candidates if leg.identifier != sent.identifier]
            if others:
                received_candidates = others
        received = largest(received_candidates)
        return [leg for leg in (received, sent) if leg is not None]

    def is_complete(self, legs: list[Leg]) -> bool:
        return has_both_sides(legs)
