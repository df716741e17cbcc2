"""Tests for dedupe_rows — merge policy, idempotence and order independence."""

from itertools import permutations

from egldtax.accounting.deduplicator import call_key, dedupe_rows
from egldtax.domain.enums import Direction
from egldtax.domain.models.tax import ObservedAmount, TaxRow

MEX = "MEX-455c57"


def _row(**fields) -> TaxRow:
    data = {
        "timestamp": 1_700_000_000,
        "function": "claimrewards",
        "in_amount": "1",
        "in_currency": MEX,
        "tx_hash": "h1",
        "fee": "0",
    }
    data.update(fields)
    return TaxRow(**data)


def _dump(rows: list[TaxRow]) -> list[dict]:
    return [r.model_dump() for r in rows]


class TestMergePolicy:
    def test_identical_rows_collapse(self):
        rows = dedupe_rows([_row(), _row()])
        assert len(rows) == 1
        assert rows[0].observed == [ObservedAmount(direction=Direction.IN, amount="1", currency=MEX)]

    def test_larger_amount_wins_numerically(self):
        rows = dedupe_rows([_row(in_amount="2"), _row(in_amount="10")])
        assert rows[0].in_amount == "10"

    def test_observed_union(self):
        rows = dedupe_rows([_row(in_amount="2"), _row(in_amount="10"), _row(in_amount="2.0")])
        assert [o.amount for o in rows[0].observed] == ["2", "10"]

    def test_fee_propagated_from_any_row(self):
        rows = dedupe_rows([_row(fee="0.00005", in_amount="1"), _row(fee="0", in_amount="5")])
        assert rows[0].in_amount == "5"
        assert rows[0].fee == "0.00005"

    def test_function_key_is_case_insensitive(self):
        assert len(dedupe_rows([_row(function="claimRewards"), _row(function="claimrewards")])) == 1

    def test_distinct_assets_stay_separate(self):
        rows = dedupe_rows([_row(), _row(in_currency="UTK-2f80e9")])
        assert [r.in_currency for r in rows] == [MEX, "UTK-2f80e9"]

    def test_narrow_key_merges_assets(self):
        rows = dedupe_rows([_row(in_amount="1"), _row(in_currency="UTK-2f80e9", in_amount="3")], key=call_key)
        assert len(rows) == 1
        assert rows[0].in_currency == "UTK-2f80e9"
        assert {o.currency for o in rows[0].observed} == {MEX, "UTK-2f80e9"}

    def test_zero_amounts_not_observed(self):
        rows = dedupe_rows([_row(in_amount="0", in_currency="EGLD")])
        assert rows[0].observed == []

    def test_first_seen_order(self):
        rows = dedupe_rows([_row(tx_hash="b"), _row(tx_hash="a"), _row(tx_hash="b"), _row(tx_hash="c")])
        assert [r.tx_hash for r in rows] == ["b", "a", "c"]


class TestProperties:
    def test_idempotent(self):
        rows = [
            _row(in_amount="2", fee="0.1"),
            _row(in_amount="10"),
            _row(tx_hash="h2", out_amount="3", out_currency="EGLD", in_amount="0", in_currency="EGLD"),
            _row(tx_hash="h2", out_amount="3", out_currency="EGLD", in_amount="0", in_currency="EGLD"),
        ]
        once = dedupe_rows(rows)
        assert _dump(dedupe_rows(once)) == _dump(once)

    def test_commutative_within_group(self):
        group = [
            _row(in_amount="2", fee="0"),
            _row(in_amount="10", fee="0.00005", source="TransferListExtractor"),
            _row(in_amount="10", fee="0", source="ScResultExtractor"),
        ]
        results = {repr(_dump(dedupe_rows(list(p)))) for p in permutations(group)}
        assert len(results) == 1

    def test_empty(self):
        assert dedupe_rows([]) == []
