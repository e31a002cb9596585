from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel

from opguard.domain.enums import AssetType, DecodeErrorType, OperationKind, PayloadType, ViewFormatKey
from opguard.domain.models.asset import AssetInfo
from opguard.domain.models.expense import ViewFormat
from opguard.domain.models.request import SigningRequest


class ReviewRequest(BaseModel):
    request: SigningRequest
    account: str
    previous_format: Optional[ViewFormatKey] = None
    select_format: Optional[str] = None


class ExpenseResponse(BaseModel):
    asset_key: str
    asset_type: Optional[AssetType] = None  # None = unresolved token
    symbol: Optional[str] = None
    contract_address: Optional[str] = None
    token_id: Optional[int] = None
    resolved: bool
    decimals: int
    amount: Decimal  # smallest unit
    display_amount: Decimal
    to_address: Optional[str] = None


class OperationExpensesResponse(BaseModel):
    kind: OperationKind
    contract_address: Optional[str] = None
    entrypoint: Optional[str] = None
    is_entrypoint_interaction: bool
    expenses: list[ExpenseResponse]
    error: Optional[DecodeErrorType] = None


class ReviewResponse(BaseModel):
    payload_type: PayloadType
    formats: list[ViewFormat]
    active_format: Optional[ViewFormatKey] = None
    operations: list[OperationExpensesResponse]
    raw_operations: Optional[list[dict[str, Any]]] = None
    raw_bytes: Optional[str] = None
    decode_error: Optional[DecodeErrorType] = None


class AssetResponse(BaseModel):
    key: str
    type: AssetType
    symbol: str
    name: str
    decimals: int
    info: Optional[AssetInfo] = None
