"""Hex / base64 / text / integer conversions for on-chain payloads.

Every decoder is total: malformed input yields "" or 0 instead of raising, so
one bad field never aborts a whole transaction.
"""

import base64
import binascii
import re

_HEX_RE = re.compile(r"^(?:[0-9a-fA-F]{2})*$")


def is_hex(text: str | None) -> bool:
    return bool(text) and bool(_HEX_RE.match(text))  # type: ignore[arg-type]


def hex_to_bytes(hex_str: str | None) -> bytes:
    if not hex_str:
        return b""
    if hex_str.startswith(("0x", "0X")):
        hex_str = hex_str[2:]
    try:
        return bytes.fromhex(hex_str)
    except ValueError:
        return b""


def hex_to_text(hex_str: str | None) -> str:
    try:
        return hex_to_bytes(hex_str).decode("utf-8")
    except UnicodeDecodeError:
        return ""


def hex_to_int(hex_str: str | None) -> int:
    """Big-endian unsigned integer. Empty string is 0, as in the VM's encoding of zero."""
    if not hex_str:
        return 0
    if hex_str.startswith(("0x", "0X")):
        hex_str = hex_str[2:]
    try:
        return int(hex_str, 16) if hex_str else 0
    except ValueError:
        return 0


def base64_to_bytes(b64: str | None) -> bytes:
    if not b64:
        return b""
    padded = b64 + "=" * (-len(b64) % 4)
    try:
        return base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError):
        return b""


def base64_to_text(b64: str | None) -> str:
    try:
        return base64_to_bytes(b64).decode("utf-8")
    except UnicodeDecodeError:
        return ""


def base64_to_hex(b64: str | None) -> str:
    return base64_to_bytes(b64).hex()


def base64_to_int(b64: str | None) -> int:
    raw = base64_to_bytes(b64)
    return int.from_bytes(raw, "big") if raw else 0


def text_to_hex(text: str) -> str:
    return text.encode("utf-8").hex()


def hex_to_base64(hex_str: str) -> str:
    return base64.b64encode(hex_to_bytes(hex_str)).decode("ascii")


def text_to_base64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def int_to_hex(value: int) -> str:
    """Even-length lowercase hex; 0 encodes as "" like the VM does."""
    if value <= 0:
        return ""
    text = format(value, "x")
    return text if len(text) % 2 == 0 else "0" + text


def int_to_base64(value: int) -> str:
    return hex_to_base64(int_to_hex(value))
