"""Wallet address validation and bech32 <-> public key conversion (hrp "erd")."""

import re

from bip_utils.bech32 import Bech32Encoder

from egldtax.parser.utils.codec import base64_to_bytes

ADDRESS_HRP = "erd"
WALLET_ADDRESS_PATTERN = re.compile(r"^erd1[0-9a-z]{58}$")
PUBKEY_LENGTH = 32


def is_wallet_address(address: str | None) -> bool:
    return bool(address) and WALLET_ADDRESS_PATTERN.fullmatch(address) is not None  # type: ignore[arg-type]


def pubkey_to_address(pubkey: bytes) -> str:
    if len(pubkey) != PUBKEY_LENGTH:
        return ""
    return Bech32Encoder.Encode(ADDRESS_HRP, pubkey)


def topic_to_address(topic_b64: str | None) -> str:
    """Decode a base64 event topic holding a 32-byte public key. "" if it isn't one."""
    return pubkey_to_address(base64_to_bytes(topic_b64))
