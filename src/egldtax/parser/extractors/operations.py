"""OperationExtractor — typed movement records from the detail endpoint."""

from egldtax.domain.enums import NATIVE_IDENTIFIER, OperationType
from egldtax.domain.models.explorer import RawTransaction
from egldtax.parser.extractors.base import BaseExtractor
from egldtax.parser.utils.context import ReconciliationContext
from egldtax.parser.utils.types import RawLeg

# esdt covers FungibleESDT and MetaESDT; nft covers NonFungible and SemiFungible
MOVEMENT_TYPES = {OperationType.EGLD.value, OperationType.ESDT.value, OperationType.NFT.value}


class OperationExtractor(BaseExtractor):
    EXTRACTOR_NAME = "OperationExtractor"
    NEEDS_DETAIL = True

    async def attempt(self, tx: RawTransaction, context: ReconciliationContext) -> list[RawLeg]:
        detail = await context.detail(tx.tx_hash)
        legs: list[RawLeg] = []
        for op in detail.operations:
            if op.action and op.action != "transfer":
                continue
            if op.type not in MOVEMENT_TYPES:
                continue
            identifier = NATIVE_IDENTIFIER if op.type == OperationType.EGLD.value else op.identifier
            if not identifier:
                continue
            legs.extend(self._legs(context, op.sender, op.receiver, identifier, op.value_int))
        return legs
