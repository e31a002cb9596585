"""OperationReviewService — request -> presentation-ready review state.

SigningRequest -> classify_payload -> ExpenseParser -> available formats -> selection.
Decoding is best-effort: a decoding fault is caught here and the state falls
back to the raw views, which stay available no matter what.
"""

import logging

from pydantic import BaseModel

from opguard.assets.registry import AssetLookup
from opguard.domain.enums import DecodeErrorType, PayloadType, ViewFormatKey
from opguard.domain.models.expense import ExpenseRecord, ViewFormat
from opguard.domain.models.request import ConfirmOperationsRequest, ConnectRequest, RawOperation, SignRequest
from opguard.parser.expense_parser import ExpenseParser
from opguard.review.classifier import PayloadClassification, available_formats, classify_payload
from opguard.review.selector import ViewFormatSelector, reconcile_selection

logger = logging.getLogger(__name__)

AnyRequest = ConnectRequest | SignRequest | ConfirmOperationsRequest


class ReviewState(BaseModel):
    payload_type: PayloadType
    formats: list[ViewFormat] = []
    active_format: ViewFormatKey | None = None
    expenses: list[ExpenseRecord] = []
    raw_operations: list[RawOperation] | None = None
    raw_bytes: str | None = None
    decode_error: DecodeErrorType | None = None
    operation_errors: list[DecodeErrorType | None] = []  # per operation, parallel to expenses
    native_decimals: int = 6

    @property
    def has_expenses(self) -> bool:
        return any(r.expenses for r in self.expenses)


class OperationReviewService:
    """Builds the review state for one signing request."""

    def __init__(self, parser: ExpenseParser, native_decimals: int = 6) -> None:
        self._parser = parser
        self._native_decimals = native_decimals

    def with_assets(self, assets: AssetLookup) -> "OperationReviewService":
        """Same pipeline against another registry snapshot."""
        return OperationReviewService(self._parser.with_assets(assets), self._native_decimals)

    def review(
        self,
        request: AnyRequest,
        account: str,
        previous_format: ViewFormatKey | str | None = None,
    ) -> ReviewState:
        classification = classify_payload(request)
        records, operation_errors, decode_error = self._decode(classification, account)
        formats = available_formats(classification, records)
        return ReviewState(
            payload_type=classification.payload_type,
            formats=formats,
            active_format=reconcile_selection(previous_format, formats),
            expenses=records,
            raw_operations=classification.contents,
            raw_bytes=classification.raw_bytes,
            decode_error=decode_error,
            operation_errors=operation_errors,
            native_decimals=self._native_decimals,
        )

    def _decode(
        self, classification: PayloadClassification, account: str
    ) -> tuple[list[ExpenseRecord], list[DecodeErrorType | None], DecodeErrorType | None]:
        if not classification.parse_expenses:
            return [], [], None
        contents = classification.contents or []
        try:
            records = self._parser.parse(contents, account)
            operation_errors = self._parser.diagnose(contents, account)
        except Exception:
            logger.exception("Expense decoding failed for %s request", classification.payload_type.value)
            return [], [], DecodeErrorType.INTERNAL_DECODE_ERROR
        if len(records) != len(contents):
            logger.error("Expense decoding returned %d records for %d operations", len(records), len(contents))
            return [], [], DecodeErrorType.INTERNAL_DECODE_ERROR
        return records, operation_errors, None


class ReviewSession:
    """One user's review of one request: keeps the chosen view across recomputations."""

    def __init__(self, service: OperationReviewService, request: AnyRequest, account: str) -> None:
        self._service = service
        self._request = request
        self._account = account
        self._selector = ViewFormatSelector()
        self._state = self._recompute()

    @property
    def state(self) -> ReviewState:
        return self._state

    @property
    def selector(self) -> ViewFormatSelector:
        return self._selector

    def select_format(self, key: ViewFormatKey | str) -> ReviewState:
        """Raises UnknownViewFormatError (selection unchanged) for keys not on offer."""
        self._selector.select(key)
        self._state = self._state.model_copy(update={"active_format": self._selector.active_key})
        return self._state

    def refresh(self, assets: AssetLookup | None = None) -> ReviewState:
        """Recompute, e.g. after the asset registry was refreshed."""
        if assets is not None:
            self._service = self._service.with_assets(assets)
        self._state = self._recompute()
        return self._state

    def _recompute(self) -> ReviewState:
        state = self._service.review(self._request, self._account, self._selector.active_key)
        self._selector.update_formats(state.formats)
        return state.model_copy(update={"active_format": self._selector.active_key})
