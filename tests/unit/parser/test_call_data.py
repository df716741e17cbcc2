"""Tests for call descriptor parsing and ESDT payment decoding."""

from egldtax.domain.enums import TransferSelector
from egldtax.parser.utils.call_data import (
    ESDT_TRANSFER_BASE64,
    ESDT_TRANSFER_HEX,
    decode_esdt_payments,
    make_payment,
    parse_call_data,
    payload_text,
    starts_with_esdt_transfer,
)
from egldtax.parser.utils.codec import int_to_hex, text_to_base64, text_to_hex

MEX = "MEX-455c57"
WEGLD = "WEGLD-bd4d79"
RECEIVER_HEX = (bytes([2]) * 32).hex()


def _esdt_transfer(token: str, amount: int, *extra: str) -> str:
    return "@".join(["ESDTTransfer", text_to_hex(token), int_to_hex(amount), *extra])


class TestPayloadText:
    def test_plain_text_kept(self):
        assert payload_text("ESDTTransfer@4d4558") == "ESDTTransfer@4d4558"

    def test_base64_decoded(self):
        assert payload_text(text_to_base64("claimRewards")) == "claimRewards"

    def test_empty(self):
        assert payload_text(None) == ""
        assert payload_text("") == ""

    def test_binary_base64_left_alone(self):
        assert payload_text("AAEC") == "AAEC"


class TestParseCallData:
    def test_plain(self):
        descriptor = parse_call_data(_esdt_transfer(MEX, 5 * 10**18))
        assert descriptor.function == "ESDTTransfer"
        assert descriptor.selector is TransferSelector.ESDT_TRANSFER
        assert len(descriptor.args) == 2

    def test_base64(self):
        descriptor = parse_call_data(text_to_base64(_esdt_transfer(MEX, 1)))
        assert descriptor.selector is TransferSelector.ESDT_TRANSFER

    def test_hex_selector_normalized(self):
        raw = "@".join([text_to_hex("MultiESDTNFTTransfer"), "01"])
        descriptor = parse_call_data(raw)
        assert descriptor.function == "MultiESDTNFTTransfer"

    def test_lowercase_selector_normalized(self):
        descriptor = parse_call_data("esdttransfer@4d4558@01")
        assert descriptor.function == "ESDTTransfer"

    def test_ordinary_call(self):
        descriptor = parse_call_data("claimRewards")
        assert descriptor.function == "claimRewards"
        assert descriptor.args == []
        assert descriptor.selector is None

    def test_empty(self):
        assert parse_call_data(None) is None


class TestStartsWithEsdtTransfer:
    def test_literal(self):
        assert starts_with_esdt_transfer(_esdt_transfer(MEX, 1))

    def test_base64(self):
        assert starts_with_esdt_transfer(text_to_base64(_esdt_transfer(MEX, 1)))
        assert ESDT_TRANSFER_BASE64 == "RVNEVFRyYW5zZmVy"

    def test_hex_selector(self):
        assert starts_with_esdt_transfer(ESDT_TRANSFER_HEX + "@4d4558@01")

    def test_other_calls(self):
        assert not starts_with_esdt_transfer("claimRewards")
        assert not starts_with_esdt_transfer(text_to_base64("wrapEgld"))
        assert not starts_with_esdt_transfer(None)


class TestDecodeEsdtPayments:
    def test_esdt_transfer(self):
        payments = decode_esdt_payments(parse_call_data(_esdt_transfer(MEX, 5 * 10**18)))
        assert len(payments) == 1
        assert payments[0].identifier == MEX
        assert payments[0].amount == 5 * 10**18

    def test_esdt_transfer_with_trailing_call(self):
        raw = _esdt_transfer(WEGLD, 10**18, text_to_hex("swapTokensFixedInput"), text_to_hex(MEX), "01")
        payments = decode_esdt_payments(parse_call_data(raw))
        assert [p.identifier for p in payments] == [WEGLD]

    def test_esdt_transfer_missing_amount(self):
        assert decode_esdt_payments(parse_call_data("ESDTTransfer@" + text_to_hex(MEX))) == []

    def test_nft_transfer_appends_nonce(self):
        raw = "@".join(["ESDTNFTTransfer", text_to_hex("XMEX-fda355"), int_to_hex(11), int_to_hex(7), RECEIVER_HEX])
        payments = decode_esdt_payments(parse_call_data(raw))
        assert payments[0].identifier == "XMEX-fda355-0b"
        assert payments[0].nonce == 11
        assert payments[0].amount == 7

    def test_multi_transfer_with_receiver(self):
        raw = "@".join([
            "MultiESDTNFTTransfer", RECEIVER_HEX, "02",
            text_to_hex(WEGLD), "", int_to_hex(3),
            text_to_hex("EGLD-000000"), "", int_to_hex(4),
        ])
        payments = decode_esdt_payments(parse_call_data(raw))
        assert [(p.identifier, p.amount) for p in payments] == [(WEGLD, 3), ("EGLD", 4)]

    def test_multi_transfer_without_receiver(self):
        raw = "@".join(["MultiESDTNFTTransfer", "01", text_to_hex(MEX), "", int_to_hex(9)])
        payments = decode_esdt_payments(parse_call_data(raw))
        assert [(p.identifier, p.amount) for p in payments] == [(MEX, 9)]

    def test_multi_transfer_truncated(self):
        raw = "@".join(["MultiESDTNFTTransfer", "02", text_to_hex(MEX), "", int_to_hex(9), text_to_hex(WEGLD)])
        payments = decode_esdt_payments(parse_call_data(raw))
        assert len(payments) == 1

    def test_undecodable_token_skipped(self):
        raw = "@".join(["ESDTTransfer", "zz", int_to_hex(1)])
        assert decode_esdt_payments(parse_call_data(raw)) == []

    def test_non_transfer_call(self):
        assert decode_esdt_payments(parse_call_data("claimRewards@01")) == []
        assert decode_esdt_payments(None) == []


class TestMakePayment:
    def test_native_pseudo_token(self):
        assert make_payment("EGLD-000000", 0, 5).identifier == "EGLD"

    def test_invalid_token(self):
        assert make_payment("not a token", 0, 5) is None
