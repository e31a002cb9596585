"""Tests for payload classification and format availability."""

from decimal import Decimal

from opguard.domain.enums import OperationKind, PayloadType, ViewFormatKey
from opguard.domain.models.asset import XTZ_ASSET
from opguard.domain.models.expense import AssetExpense, ExpenseRecord
from opguard.domain.models.request import ConfirmOperationsRequest, ConnectRequest, SignRequest
from opguard.review.classifier import available_formats, classify_payload

OPS = [{"kind": "transaction", "to": "tz1aSkwEot3L2kmUvcoxzjMomb9mvBNuzFK6", "amount": "10"}]
WITH_EXPENSE = [ExpenseRecord(kind=OperationKind.TRANSACTION, expenses=[AssetExpense(asset=XTZ_ASSET, amount=Decimal(10))])]
NO_EXPENSE = [ExpenseRecord(kind=OperationKind.TRANSACTION)]


def _keys(formats) -> list[str]:
    return [f.key.value for f in formats]


class TestClassifyPayload:
    def test_connect(self):
        c = classify_payload(ConnectRequest(origin="https://dapp.example"))
        assert c.payload_type == PayloadType.CONNECT
        assert c.contents is None
        assert c.base_formats == []
        assert not c.parse_expenses

    def test_sign_with_preview(self):
        c = classify_payload(SignRequest(payload="05010000", preview=OPS))
        assert c.contents == OPS
        assert _keys(c.base_formats) == ["raw", "bytes"]
        assert c.raw_bytes == "05010000"
        assert c.parse_expenses

    def test_sign_without_preview(self):
        c = classify_payload(SignRequest(payload="05010000"))
        assert c.contents is None
        assert _keys(c.base_formats) == ["bytes"]
        assert not c.parse_expenses

    def test_sign_with_empty_preview_still_parses(self):
        c = classify_payload(SignRequest(payload="05", preview=[]))
        assert c.contents == []
        assert c.parse_expenses

    def test_confirm_operations(self):
        c = classify_payload(ConfirmOperationsRequest(operations=OPS))
        assert c.payload_type == PayloadType.CONFIRM_OPERATIONS
        assert c.contents == OPS
        assert _keys(c.base_formats) == ["raw"]
        assert c.raw_bytes is None


class TestAvailableFormats:
    def test_preview_when_expenses(self):
        c = classify_payload(ConfirmOperationsRequest(operations=OPS))
        assert _keys(available_formats(c, WITH_EXPENSE)) == ["preview", "raw"]

    def test_no_preview_without_expenses(self):
        c = classify_payload(ConfirmOperationsRequest(operations=OPS))
        assert _keys(available_formats(c, NO_EXPENSE)) == ["raw"]

    def test_sign_preview_formats(self):
        c = classify_payload(SignRequest(payload="05", preview=OPS))
        assert _keys(available_formats(c, WITH_EXPENSE)) == ["preview", "raw", "bytes"]

    def test_sign_without_preview_ignores_records(self):
        c = classify_payload(SignRequest(payload="05"))
        assert _keys(available_formats(c, WITH_EXPENSE)) == ["bytes"]

    def test_connect_never_has_formats(self):
        c = classify_payload(ConnectRequest())
        assert available_formats(c, WITH_EXPENSE) == []

    def test_first_format_is_preview_key(self):
        c = classify_payload(ConfirmOperationsRequest(operations=OPS))
        assert available_formats(c, WITH_EXPENSE)[0].key == ViewFormatKey.PREVIEW
