"""Output types of the reconciliation pipeline."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from egldtax.domain.enums import NATIVE_IDENTIFIER, Direction


class ObservedAmount(BaseModel):
    """One (amount, currency) seen for a row, kept for audit after merging."""

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    direction: Direction
    amount: str
    currency: str


class TaxRow(BaseModel):
    """One asset-movement line of the tax table.

    Amounts are display amounts (already divided by 10**decimals). "0" marks an
    absent side.
    """

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    timestamp: int
    function: str = ""
    in_amount: str = "0"
    in_currency: str = NATIVE_IDENTIFIER
    out_amount: str = "0"
    out_currency: str = NATIVE_IDENTIFIER
    fee: str = "0"  # EGLD
    tx_hash: str
    source: str = ""  # extractor that produced the legs
    observed: list[ObservedAmount] = []
