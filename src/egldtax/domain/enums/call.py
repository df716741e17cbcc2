from enum import Enum


class CallKind(str, Enum):
    """Special-cased call semantics layered over the generic leg extraction."""

    GENERIC = "GENERIC"
    REWARD_CLAIM = "REWARD_CLAIM"
    SWAP = "SWAP"
    WRAP = "WRAP"
    UNWRAP = "UNWRAP"


class TransferSelector(str, Enum):
    """Built-in ESDT transfer functions that can open a call descriptor."""

    ESDT_TRANSFER = "ESDTTransfer"
    ESDT_NFT_TRANSFER = "ESDTNFTTransfer"
    MULTI_ESDT_NFT_TRANSFER = "MultiESDTNFTTransfer"
