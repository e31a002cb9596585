"""Tests for ExpenseParser per-operation expense records."""

from decimal import Decimal

from opguard.assets.registry import AssetLookup
from opguard.domain.enums import AssetType, DecodeErrorType, OperationKind
from opguard.domain.models.asset import ResolvedAsset
from opguard.domain.models.expense import count_expenses
from opguard.domain.models.request import OperationContent
from opguard.parser.expense_parser import ExpenseParser

ALICE = "tz1VSUr8wwNhLAzempoch5d6hLRiTh8Cjcjb"
BOB = "tz1aSkwEot3L2kmUvcoxzjMomb9mvBNuzFK6"
CAROL = "tz1burnburnburnburnburnburnburjAYjjX"
FA12_TOKEN = "KT1PWx2mnDueood7fEmfbBDKx1D9BAnnXitn"
FA2_TOKEN = "KT1RJ6PbjHpwc3M5rw5s2Nbmefwbuwbdxton"
UNKNOWN_TOKEN = "KT1XnTn74bUtxHfDtBmm2bGZAQfhPbvKWR8o"


def addr(a: str) -> dict:
    return {"string": a}


def nat(n: int) -> dict:
    return {"int": str(n)}


def pair(*args) -> dict:
    return {"prim": "Pair", "args": list(args)}


def _native_op(amount: str, to: str = BOB, **extra) -> dict:
    return {"kind": "transaction", "to": to, "amount": amount, **extra}


def _fa2_op(contract: str, sender: str, *txs: tuple[str, int, int]) -> dict:
    return {
        "kind": "transaction",
        "to": contract,
        "amount": "0",
        "parameter": {
            "entrypoint": "transfer",
            "value": [pair(addr(sender), [pair(addr(to), pair(nat(tid), nat(amt))) for to, tid, amt in txs])],
        },
    }


def _fa12_op(contract: str, sender: str, to: str, amount: int) -> dict:
    return {
        "kind": "transaction",
        "destination": contract,
        "amount": "0",
        "parameters": {"entrypoint": "transfer", "value": pair(addr(sender), pair(addr(to), nat(amount)))},
    }


class TestExpenseParser:
    def test_batch_transfer_resolved(self, expense_parser):
        records = expense_parser.parse([_fa2_op(FA2_TOKEN, ALICE, (BOB, 0, 5))], ALICE)
        assert len(records) == 1
        assert len(records[0].expenses) == 1
        expense = records[0].expenses[0]
        assert isinstance(expense.asset, ResolvedAsset)
        assert expense.asset.symbol == "TKN"
        assert expense.asset.decimals == 0
        assert expense.amount == Decimal(5)
        assert expense.display_amount() == Decimal(5)

    def test_native_then_unrecognized_entrypoint(self, expense_parser):
        ops = [
            _native_op("10"),
            {"kind": "transaction", "to": FA12_TOKEN, "amount": "0",
             "parameters": {"entrypoint": "approve", "value": pair(addr(BOB), nat(1))}},
        ]
        records = expense_parser.parse(ops, ALICE)
        assert len(records) == 2
        assert len(records[0].expenses) == 1
        native = records[0].expenses[0]
        assert native.asset.type == AssetType.XTZ
        assert native.amount == Decimal(10)
        assert records[1].expenses == []

    def test_unresolved_token_keeps_raw_address(self, expense_parser):
        records = expense_parser.parse([_fa12_op(UNKNOWN_TOKEN, ALICE, BOB, 300)], ALICE)
        expense = records[0].expenses[0]
        assert expense.asset == UNKNOWN_TOKEN
        assert not expense.is_resolved
        assert expense.amount == Decimal(300)
        # falls back to the native unit
        assert expense.decimals() == 6

    def test_fa2_other_token_id_is_a_miss(self, expense_parser):
        records = expense_parser.parse([_fa2_op(FA2_TOKEN, ALICE, (BOB, 7, 5))], ALICE)
        expense = records[0].expenses[0]
        assert expense.asset == FA2_TOKEN
        assert expense.token_id == 7

    def test_resolved_fa12_decimals(self, expense_parser):
        records = expense_parser.parse([_fa12_op(FA12_TOKEN, ALICE, BOB, 150_000_000)], ALICE)
        expense = records[0].expenses[0]
        assert expense.asset.symbol == "tzBTC"
        assert expense.display_amount() == Decimal("1.5")

    def test_expense_count_and_order(self, expense_parser):
        ops = [
            _native_op("1"),
            _fa2_op(FA2_TOKEN, ALICE, (BOB, 0, 2), (CAROL, 0, 3)),
            _fa2_op(FA2_TOKEN, CAROL, (BOB, 0, 100)),
            _fa12_op(FA12_TOKEN, ALICE, BOB, 4),
        ]
        records = expense_parser.parse(ops, ALICE)
        assert len(records) == 4
        assert count_expenses(records) == 4
        amounts = [e.amount for r in records for e in r.expenses]
        assert amounts == [Decimal(1), Decimal(2), Decimal(3), Decimal(4)]
        assert records[2].expenses == []

    def test_native_from_other_source_ignored(self, expense_parser):
        records = expense_parser.parse([_native_op("10", source=CAROL)], ALICE)
        assert records[0].expenses == []

    def test_zero_amount_skipped(self, expense_parser):
        records = expense_parser.parse([_native_op("0")], ALICE)
        assert records[0].expenses == []

    def test_zero_amount_token_transfer_skipped(self, expense_parser):
        records = expense_parser.parse([_fa12_op(FA12_TOKEN, ALICE, BOB, 0)], ALICE)
        assert records[0].is_entrypoint_interaction is True
        assert records[0].expenses == []

    def test_origination_balance(self, expense_parser):
        op = {"kind": "origination", "balance": "2500000", "script": {"code": []}}
        records = expense_parser.parse([op], ALICE)
        assert records[0].kind == OperationKind.ORIGINATION
        assert records[0].expenses[0].amount == Decimal(2_500_000)

    def test_delegation_has_no_expense(self, expense_parser):
        records = expense_parser.parse([{"kind": "delegation", "delegate": BOB}], ALICE)
        assert records[0].kind == OperationKind.DELEGATION
        assert records[0].expenses == []

    def test_malformed_operation_yields_empty_record(self, expense_parser):
        ops = ["garbage", {"kind": "transaction", "amount": "-5"}, {"amount": 1.5}, _native_op("3")]
        records = expense_parser.parse(ops, ALICE)
        assert len(records) == 4
        assert [len(r.expenses) for r in records] == [0, 0, 0, 1]

    def test_record_metadata(self, expense_parser):
        records = expense_parser.parse([_fa12_op(FA12_TOKEN, ALICE, BOB, 1), _native_op("1")], ALICE)
        assert records[0].contract_address == FA12_TOKEN
        assert records[0].entrypoint == "transfer"
        assert records[0].is_entrypoint_interaction is True
        assert records[1].is_entrypoint_interaction is False

    def test_accepts_operation_content_models(self, expense_parser):
        op = OperationContent(kind="transaction", destination=BOB, amount=Decimal(9))
        records = expense_parser.parse([op], ALICE)
        assert records[0].expenses[0].amount == Decimal(9)

    def test_deterministic(self, expense_parser):
        ops = [_native_op("1"), _fa2_op(FA2_TOKEN, ALICE, (BOB, 0, 2))]
        assert expense_parser.parse(ops, ALICE) == expense_parser.parse(ops, ALICE)

    def test_empty_input(self, expense_parser):
        assert expense_parser.parse([], ALICE) == []

    def test_conflicting_entrypoint_is_malformed(self, expense_parser):
        op = {**_fa12_op(FA12_TOKEN, ALICE, BOB, 1000), "entrypoint": "noop"}
        records = expense_parser.parse([op], ALICE)
        assert records[0].expenses == []
        assert expense_parser.diagnose([op], ALICE) == [DecodeErrorType.MALFORMED_OPERATION_ERROR]

    def test_matching_top_level_entrypoint(self, expense_parser):
        op = {**_fa12_op(FA12_TOKEN, ALICE, BOB, 1000), "entrypoint": "transfer"}
        records = expense_parser.parse([op], ALICE)
        assert records[0].entrypoint == "transfer"
        assert records[0].expenses[0].amount == Decimal(1000)


class _ExplodingLookup(AssetLookup):
    def lookup(self, address, token_id=None):
        raise RuntimeError("registry unavailable")


class TestExpenseParserFaults:
    def test_lookup_fault_is_contained_per_operation(self, matcher):
        parser = ExpenseParser(matcher, _ExplodingLookup())
        records = parser.parse([_fa12_op(FA12_TOKEN, ALICE, BOB, 1), _native_op("5")], ALICE)
        assert len(records) == 2
        assert records[0].expenses == []
        assert records[1].expenses[0].amount == Decimal(5)

    def test_with_assets_swaps_registry(self, expense_parser, registry):
        parser = expense_parser.with_assets(registry.with_assets([
            ResolvedAsset(type=AssetType.FA1_2, address=UNKNOWN_TOKEN, symbol="NEW", decimals=2),
        ]))
        records = parser.parse([_fa12_op(UNKNOWN_TOKEN, ALICE, BOB, 1)], ALICE)
        assert records[0].expenses[0].asset.symbol == "NEW"


class TestDiagnose:
    def test_reasons(self, expense_parser):
        ops = [
            _native_op("1"),
            "garbage",
            {"kind": "transaction", "to": FA12_TOKEN, "parameters": {"entrypoint": "approve", "value": {"prim": "Unit"}}},
            _fa12_op(FA12_TOKEN, ALICE, BOB, 1),
        ]
        assert expense_parser.diagnose(ops, ALICE) == [
            None,
            DecodeErrorType.MALFORMED_OPERATION_ERROR,
            DecodeErrorType.UNRECOGNIZED_SHAPE_ERROR,
            None,
        ]
