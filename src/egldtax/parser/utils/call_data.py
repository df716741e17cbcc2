"""Call descriptors: "@"-delimited payloads naming a function and its hex arguments.

    ESDTTransfer@<token>@<amount>[@<function>@<args>...]
    ESDTNFTTransfer@<token>@<nonce>@<amount>@<receiver>[...]
    MultiESDTNFTTransfer[@<receiver>]@<count>(@<token>@<nonce>@<amount>){count}[...]

Payloads arrive base64-encoded from the detail endpoint and sometimes already
decoded from the transfer list; the selector itself may be plain text or hex.
"""

import logging
import re

from pydantic import BaseModel

from egldtax.domain.enums import NATIVE_IDENTIFIER, TransferSelector
from egldtax.parser.utils.codec import (
    base64_to_text,
    hex_to_int,
    hex_to_text,
    int_to_hex,
    is_hex,
    text_to_base64,
    text_to_hex,
)

logger = logging.getLogger(__name__)

ESDT_TRANSFER_TEXT = TransferSelector.ESDT_TRANSFER.value
ESDT_TRANSFER_BASE64 = text_to_base64(ESDT_TRANSFER_TEXT)  # "RVNEVFRyYW5zZmVy"
ESDT_TRANSFER_HEX = text_to_hex(ESDT_TRANSFER_TEXT)  # "455344545472616e73666572"

# MultiESDTNFTTransfer uses this pseudo-token for EGLD legs
NATIVE_IN_MULTI_TRANSFER = "EGLD-000000"

TOKEN_IDENTIFIER_PATTERN = re.compile(r"^[A-Z0-9]{3,10}-[a-f0-9]{6}$")

_SELECTORS: dict[str, TransferSelector] = {s.value.lower(): s for s in TransferSelector}


class CallDescriptor(BaseModel):
    function: str  # canonical selector name when it is a transfer selector
    args: list[str] = []  # hex-encoded arguments

    @property
    def selector(self) -> TransferSelector | None:
        return _SELECTORS.get(self.function.lower())


class EsdtPayment(BaseModel):
    identifier: str
    nonce: int = 0
    amount: int


def payload_text(raw: str | None) -> str:
    """Return the plain-text form of a payload given either encoding."""
    if not raw:
        return ""
    if "@" in raw:
        return raw
    decoded = base64_to_text(raw)
    if decoded and decoded.isprintable():
        return decoded
    return raw


def normalize_selector(part: str) -> str:
    """Canonical selector name for plain or hex-encoded transfer selectors; otherwise unchanged."""
    known = _SELECTORS.get(part.lower())
    if known is not None:
        return known.value
    if is_hex(part):
        known = _SELECTORS.get(hex_to_text(part).lower())
        if known is not None:
            return known.value
    return part


def starts_with_esdt_transfer(raw: str | None) -> bool:
    """True if the payload opens with ESDTTransfer in literal, base64 or hex form."""
    if not raw:
        return False
    if raw.startswith(ESDT_TRANSFER_TEXT) or raw.startswith(ESDT_TRANSFER_BASE64):
        return True
    if raw.lower().startswith(ESDT_TRANSFER_HEX):
        return True
    descriptor = parse_call_data(raw)
    return descriptor is not None and descriptor.selector is TransferSelector.ESDT_TRANSFER


def parse_call_data(raw: str | None) -> CallDescriptor | None:
    text = payload_text(raw)
    if not text:
        return None
    parts = text.split("@")
    function = normalize_selector(parts[0])
    if not function:
        return None
    return CallDescriptor(function=function, args=parts[1:])


def is_token_identifier(identifier: str) -> bool:
    return TOKEN_IDENTIFIER_PATTERN.match(identifier) is not None


def make_payment(token: str, nonce: int, amount: int) -> EsdtPayment | None:
    """Payment for a decoded (token, nonce, amount) triple; None if token is not an identifier."""
    if token == NATIVE_IN_MULTI_TRANSFER:
        return EsdtPayment(identifier=NATIVE_IDENTIFIER, amount=amount)
    if not is_token_identifier(token):
        logger.debug("Skipping undecodable token %r", token)
        return None
    identifier = f"{token}-{int_to_hex(nonce)}" if nonce > 0 else token
    return EsdtPayment(identifier=identifier, nonce=nonce, amount=amount)


def _payment(token_hex: str, nonce_hex: str, amount_hex: str) -> EsdtPayment | None:
    return make_payment(hex_to_text(token_hex), hex_to_int(nonce_hex), hex_to_int(amount_hex))


def decode_esdt_payments(descriptor: CallDescriptor | None) -> list[EsdtPayment]:
    """Token movements encoded in a transfer-selector descriptor. [] for anything else."""
    if descriptor is None:
        return []
    args = descriptor.args
    selector = descriptor.selector

    if selector is TransferSelector.ESDT_TRANSFER:
        if len(args) < 2:
            logger.debug("ESDTTransfer descriptor with %d args", len(args))
            return []
        payment = _payment(args[0], "", args[1])
        return [payment] if payment else []

    if selector is TransferSelector.ESDT_NFT_TRANSFER:
        if len(args) < 3:
            logger.debug("ESDTNFTTransfer descriptor with %d args", len(args))
            return []
        payment = _payment(args[0], args[1], args[2])
        return [payment] if payment else []

    if selector is TransferSelector.MULTI_ESDT_NFT_TRANSFER:
        return _decode_multi_transfer(args)

    return []


def _decode_multi_transfer(args: list[str]) -> list[EsdtPayment]:
    idx = 0
    # User-signed form carries the destination first; the result form does not
    if args and len(args[0]) == 64 and is_hex(args[0]):
        idx = 1
    if idx >= len(args):
        return []
    count = hex_to_int(args[idx])
    idx += 1

    payments: list[EsdtPayment] = []
    for _ in range(count):
        if idx + 3 > len(args):
            logger.debug("MultiESDTNFTTransfer truncated after %d of %d payments", len(payments), count)
            break
        payment = _payment(args[idx], args[idx + 1], args[idx + 2])
        if payment is not None:
            payments.append(payment)
        idx += 3
    return payments
