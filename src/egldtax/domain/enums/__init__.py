from egldtax.domain.enums.asset import NATIVE_DECIMALS, NATIVE_IDENTIFIER, OperationType
from egldtax.domain.enums.call import CallKind, TransferSelector
from egldtax.domain.enums.direction import Direction

__all__ = [
    "NATIVE_DECIMALS",
    "NATIVE_IDENTIFIER",
    "CallKind",
    "Direction",
    "OperationType",
    "TransferSelector",
]
