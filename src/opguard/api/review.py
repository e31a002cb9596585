from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from opguard.api.deps import get_review_service
from opguard.api.schemas.review import ExpenseResponse, OperationExpensesResponse, ReviewRequest, ReviewResponse
from opguard.domain.models.asset import ResolvedAsset
from opguard.domain.models.expense import AssetExpense
from opguard.review.selector import UnknownViewFormatError, ViewFormatSelector
from opguard.review.service import OperationReviewService, ReviewState

router = APIRouter(prefix="/api/review", tags=["review"])

ServiceDep = Annotated[OperationReviewService, Depends(get_review_service)]


def _expense_response(e: AssetExpense, native_decimals: int) -> ExpenseResponse:
    if isinstance(e.asset, ResolvedAsset):
        info = e.asset.info()
        return ExpenseResponse(
            asset_key=e.asset.key,
            asset_type=e.asset.type,
            symbol=e.asset.symbol,
            contract_address=info.contract_address if info else None,
            token_id=info.token_id if info else None,
            resolved=True,
            decimals=e.decimals(native_decimals),
            amount=e.amount,
            display_amount=e.display_amount(native_decimals),
            to_address=e.to_address,
        )
    key = e.asset if e.token_id is None else f"{e.asset}_{e.token_id}"
    return ExpenseResponse(
        asset_key=key,
        contract_address=e.asset,
        token_id=e.token_id,
        resolved=False,
        decimals=e.decimals(native_decimals),
        amount=e.amount,
        display_amount=e.display_amount(native_decimals),
        to_address=e.to_address,
    )


def _to_response(state: ReviewState) -> ReviewResponse:
    operations = []
    for i, record in enumerate(state.expenses):
        error = state.operation_errors[i] if i < len(state.operation_errors) else None
        operations.append(OperationExpensesResponse(
            kind=record.kind,
            contract_address=record.contract_address,
            entrypoint=record.entrypoint,
            is_entrypoint_interaction=record.is_entrypoint_interaction,
            expenses=[_expense_response(e, state.native_decimals) for e in record.expenses],
            error=error,
        ))
    return ReviewResponse(
        payload_type=state.payload_type,
        formats=state.formats,
        active_format=state.active_format,
        operations=operations,
        raw_operations=state.raw_operations,
        raw_bytes=state.raw_bytes,
        decode_error=state.decode_error,
    )


@router.post("", response_model=ReviewResponse)
async def review_request(body: ReviewRequest, service: ServiceDep) -> ReviewResponse:
    """Decode a signing request into expenses and the views available for it."""
    state = service.review(body.request, body.account, body.previous_format)

    if body.select_format is not None:
        selector = ViewFormatSelector(state.formats)
        try:
            selector.select(body.select_format)
        except UnknownViewFormatError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        state = state.model_copy(update={"active_format": selector.active_key})

    return _to_response(state)
