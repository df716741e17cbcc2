"""Call handlers — function-specific leg selection layered on the extractor chain."""

from abc import ABC, abstractmethod

from egldtax.domain.enums import CallKind, Direction
from egldtax.domain.models.explorer import RawTransaction
from egldtax.parser.utils.context import ReconciliationContext
from egldtax.parser.utils.types import Leg


class CallHandler(ABC):
    """Narrows the legs one extractor found down to the ones worth reporting.

    select() may return [] to send the engine on to the next extractor.
    is_complete() tells the engine whether to stop at this selection or keep it
    as a fallback while looking for a fuller one further down the chain.
    """

    HANDLER_NAME: str = "CallHandler"
    CALL_KIND: CallKind = CallKind.GENERIC

    @abstractmethod
    def select(self, tx: RawTransaction, legs: list[Leg], context: ReconciliationContext) -> list[Leg]:
        """Return the legs to report for tx."""

    def is_complete(self, legs: list[Leg]) -> bool:
        return bool(legs)


class GenericHandler(CallHandler):
    """Every leg the extractor saw is reported."""

    HANDLER_NAME = "GenericHandler"

    def select(self, tx: RawTransaction, legs: list[Leg], context: ReconciliationContext) -> list[Leg]:
        return list(legs)


def inbound(legs: list[Leg]) -> list[Leg]:
    return [leg for leg in legs if leg.direction == Direction.IN]


def outbound(legs: list[Leg]) -> list[Leg]:
    return [leg for leg in legs if leg.direction == Direction.OUT]


def has_both_sides(legs: list[Leg]) -> bool:
    return bool(inbound(legs)) and bool(outbound(legs))
