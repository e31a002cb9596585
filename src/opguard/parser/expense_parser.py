"""ExpenseParser — operation content -> per-operation expense records.

Total function: every input operation gets exactly one ExpenseRecord, in order.
Malformed or unrecognized content yields an empty record, never an exception.
"""

import logging
from typing import Any, Sequence

from opguard.assets.registry import AssetLookup
from opguard.domain.enums import DecodeErrorType, OperationKind
from opguard.domain.models.asset import XTZ_ASSET, ResolvedAsset
from opguard.domain.models.expense import AssetExpense, ExpenseRecord, RawExpense
from opguard.domain.models.request import OperationContent
from opguard.parser.matcher import ParameterShapeMatcher

logger = logging.getLogger(__name__)


class ExpenseParser:
    """Decodes debits leaving the reviewing account, resolving token assets via an AssetLookup."""

    def __init__(
        self,
        matcher: ParameterShapeMatcher,
        assets: AssetLookup,
        native: ResolvedAsset = XTZ_ASSET,
    ) -> None:
        self._matcher = matcher
        self._assets = assets
        self._native = native

    @property
    def native(self) -> ResolvedAsset:
        return self._native

    def with_assets(self, assets: AssetLookup) -> "ExpenseParser":
        """Same matcher and native asset against another registry snapshot."""
        return ExpenseParser(self._matcher, assets, self._native)

    def parse(self, operations: Sequence[OperationContent | dict[str, Any]], account: str) -> list[ExpenseRecord]:
        records: list[ExpenseRecord] = []
        for index, raw in enumerate(operations):
            try:
                records.append(self._parse_operation(raw, account))
            except Exception:
                logger.exception("Failed to decode expenses of operation #%d", index)
                records.append(ExpenseRecord())
        return records

    def diagnose(self, operations: Sequence[OperationContent | dict[str, Any]], account: str) -> list[DecodeErrorType | None]:
        """Why each operation produced no expenses (None = decoded fine or nothing to decode)."""
        result: list[DecodeErrorType | None] = []
        for raw in operations:
            op = OperationContent.from_raw(raw)
            if op is None:
                result.append(DecodeErrorType.MALFORMED_OPERATION_ERROR)
            elif not op.has_parameters:
                result.append(None)
            else:
                match = self._matcher.match(op.entrypoint, op.parameters, account, op.destination, op.source)
                result.append(match.error)
        return result

    def _parse_operation(self, raw: OperationContent | dict[str, Any], account: str) -> ExpenseRecord:
        op = OperationContent.from_raw(raw)
        if op is None:
            logger.debug("Skipping malformed operation content")
            return ExpenseRecord()

        record = ExpenseRecord(
            kind=op.kind,
            contract_address=op.destination,
            entrypoint=op.entrypoint,
            is_entrypoint_interaction=op.has_parameters,
        )

        if not op.has_parameters:
            record.expenses.extend(self._native_expenses(op, account))
            return record

        match = self._matcher.match(op.entrypoint, op.parameters, account, op.destination, op.source)
        for raw_expense in match.expenses:
            if raw_expense.amount == 0:
                continue
            record.expenses.append(self._resolve(raw_expense))
        return record

    def _native_expenses(self, op: OperationContent, account: str) -> list[AssetExpense]:
        source = op.source or account
        if source != account:
            return []
        amount = op.balance if op.kind == OperationKind.ORIGINATION else op.amount
        if amount is None or amount == 0:
            return []
        return [AssetExpense(asset=self._native, amount=amount, to_address=op.destination)]

    def _resolve(self, expense: RawExpense) -> AssetExpense:
        if expense.token_address is None:
            return AssetExpense(asset=self._native, amount=expense.amount, to_address=expense.to_address)

        asset = self._assets.lookup(expense.token_address, expense.token_id)
        if asset is None:
            logger.debug("Unknown token %s (id=%s)", expense.token_address, expense.token_id)
        return AssetExpense(
            asset=asset if asset is not None else expense.token_address,
            amount=expense.amount,
            to_address=expense.to_address,
            token_id=expense.token_id,
        )
