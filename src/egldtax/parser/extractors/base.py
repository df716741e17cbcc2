"""Base extractor interface."""

from abc import ABC, abstractmethod

from egldtax.domain.enums import Direction
from egldtax.domain.models.explorer import RawTransaction
from egldtax.parser.utils.context import ReconciliationContext
from egldtax.parser.utils.types import RawLeg


class BaseExtractor(ABC):
    """One data source of the reconciliation fallback chain.

    attempt() returns every wallet movement the source can see, or [] when the
    source has nothing usable; the engine then moves on to the next extractor.
    """

    EXTRACTOR_NAME: str = "BaseExtractor"
    NEEDS_DETAIL: bool = False

    @abstractmethod
    async def attempt(self, tx: RawTransaction, context: ReconciliationContext) -> list[RawLeg]:
        """Extract wallet legs for tx from this source."""

    def _legs(
        self,
        context: ReconciliationContext,
        sender: str | None,
        receiver: str | None,
        identifier: str,
        raw_value: int,
    ) -> list[RawLeg]:
        """IN if the wallet received, OUT if it sent; both for a self-transfer. Zero values yield nothing."""
        if raw_value <= 0:
            return []
        legs: list[RawLeg] = []
        if context.is_wallet(receiver):
            legs.append(RawLeg(
                direction=Direction.IN,
                identifier=identifier,
                raw_value=raw_value,
                source=self.EXTRACTOR_NAME,
            ))
        if context.is_wallet(sender):
            legs.append(RawLeg(
                direction=Direction.OUT,
                identifier=identifier,
                raw_value=raw_value,
                source=self.EXTRACTOR_NAME,
            ))
        return legs
