"""Core data types for the reconciliation engine."""

from decimal import Decimal

from pydantic import BaseModel

from egldtax.domain.enums import NATIVE_DECIMALS, Direction
from egldtax.parser.utils.amounts import shift_decimals


class RawLeg(BaseModel):
    """A movement found by an extractor, before decimals are known."""

    direction: Direction
    identifier: str  # token identifier, "EGLD" for native
    raw_value: int  # smallest unit
    source: str  # extractor name


class Leg(RawLeg):
    """A movement with its token decimals resolved."""

    decimals: int = NATIVE_DECIMALS

    @property
    def amount(self) -> Decimal:
        return shift_decimals(self.raw_value, self.decimals)

    @property
    def collection(self) -> str:
        """Identifier without the NFT/MetaESDT nonce suffix (XMEX-fda355-0b -> XMEX-fda355)."""
        return collection_of(self.identifier)


def collection_of(identifier: str) -> str:
    parts = identifier.split("-")
    if len(parts) >= 3:
        return "-".join(parts[:2])
    return identifier
