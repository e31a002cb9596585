"""Expense types produced by the expense parser."""

from decimal import Decimal

from pydantic import BaseModel, Field

from opguard.domain.enums import OperationKind, ViewFormatKey
from opguard.domain.models.asset import ResolvedAsset


class RawExpense(BaseModel):
    """A debit decoded from operation content, before asset resolution."""

    token_address: str | None = None  # None = native
    token_id: int | None = None
    from_address: str
    to_address: str | None = None
    amount: Decimal = Field(ge=0)  # smallest unit

    model_config = {"frozen": True}


class AssetExpense(BaseModel):
    """One debit shown to the user. A string asset is an unresolved token contract address."""

    asset: ResolvedAsset | str
    amount: Decimal = Field(ge=0)  # smallest unit
    to_address: str | None = None
    token_id: int | None = None

    model_config = {"frozen": True}

    @property
    def is_resolved(self) -> bool:
        return isinstance(self.asset, ResolvedAsset)

    def decimals(self, native_decimals: int = 6) -> int:
        if isinstance(self.asset, ResolvedAsset):
            return self.asset.decimals
        return native_decimals

    def display_amount(self, native_decimals: int = 6) -> Decimal:
        """Amount in whole units of the asset."""
        return self.amount / Decimal(10) ** self.decimals(native_decimals)


class ExpenseRecord(BaseModel):
    """All debits decoded from a single operation, in declaration order."""

    kind: OperationKind = OperationKind.OTHER
    contract_address: str | None = None
    entrypoint: str | None = None
    is_entrypoint_interaction: bool = False
    expenses: list[AssetExpense] = []


class ViewFormat(BaseModel):
    """A presentation the user can switch to while reviewing a request."""

    key: ViewFormatKey
    label: str
    icon: str

    model_config = {"frozen": True}


def count_expenses(records: list[ExpenseRecord]) -> int:
    return sum(len(r.expenses) for r in records)
