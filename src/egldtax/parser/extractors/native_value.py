"""NativeValueExtractor — last resort: the transaction's own EGLD value."""

from egldtax.domain.enums import NATIVE_IDENTIFIER
from egldtax.domain.models.explorer import RawTransaction
from egldtax.parser.extractors.base import BaseExtractor
from egldtax.parser.utils.context import ReconciliationContext
from egldtax.parser.utils.types import RawLeg


class NativeValueExtractor(BaseExtractor):
    EXTRACTOR_NAME = "NativeValueExtractor"

    async def attempt(self, tx: RawTransaction, context: ReconciliationContext) -> list[RawLeg]:
        return self._legs(context, tx.sender, tx.receiver, NATIVE_IDENTIFIER, tx.value_int)
