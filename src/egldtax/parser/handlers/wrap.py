"""WrapHandler / UnwrapHandler — EGLD <-> WEGLD conversions."""

from egldtax.domain.enums import NATIVE_IDENTIFIER, CallKind, Direction
from egldtax.domain.models.explorer import RawTransaction
from egldtax.parser.handlers.base import CallHandler, has_both_sides, inbound, outbound
from egldtax.parser.utils.context import ReconciliationContext
from egldtax.parser.utils.types import Leg


def first_of(legs: list[Leg], identifier: str) -> Leg | None:
    return next((leg for leg in legs if leg.identifier == identifier), None)


class WrapHandler(CallHandler):
    """OUT native EGLD / IN wrapped token.

    The native amount of a wrap is the transaction value; when no extractor
    reported it as a leg it is taken from the transaction itself.
    """

    HANDLER_NAME = "WrapHandler"
    CALL_KIND = CallKind.WRAP

    def __init__(self, wrapped_identifier: str) -> None:
        self._wrapped = wrapped_identifier

    def select(self, tx: RawTransaction, legs: list[Leg], context: ReconciliationContext) -> list[Leg]:
        sent = first_of(outbound(legs), NATIVE_IDENTIFIER) or self._native_from_value(tx, legs, context)
        received = first_of(inbound(legs), self._wrapped)
        return [leg for leg in (received, sent) if leg is not None]

    def is_complete(self, legs: list[Leg]) -> bool:
        return has_both_sides(legs)

    @staticmethod
    def _native_from_value(tx: RawTransaction, legs: list[Leg], context: ReconciliationContext) -> Leg | None:
        if not context.is_wallet(tx.sender) or tx.value_int <= 0:
            return None
        source = legs[0].source if legs else ""
        return Leg(direction=Direction.OUT, identifier=NATIVE_IDENTIFIER, raw_value=tx.value_int, source=source)


class UnwrapHandler(WrapHandler):
    """OUT wrapped token / IN native EGLD."""

    HANDLER_NAME = "UnwrapHandler"
    CALL_KIND = CallKind.UNWRAP

    def select(self, tx: RawTransaction, legs: list[Leg], context: ReconciliationContext) -> list[Leg]:
        sent = first_of(outbound(legs), self._wrapped)
        received = first_of(inbound(legs), NATIVE_IDENTIFIER)
        return [leg for leg in (received, sent) if leg is not None]
