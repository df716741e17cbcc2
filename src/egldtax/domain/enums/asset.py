from enum import Enum

NATIVE_IDENTIFIER = "EGLD"
NATIVE_DECIMALS = 18


class OperationType(str, Enum):
    """Asset type tag on TransactionDetail.operations. Values match the explorer API."""

    EGLD = "egld"
    ESDT = "esdt"
    NFT = "nft"
    LOG = "log"
    ERROR = "error"

