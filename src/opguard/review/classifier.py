"""Payload classification: which content to decode and which raw views exist per request type.

Static and total over SigningRequest: field contents are never inspected beyond presence.
"""

from pydantic import BaseModel

from opguard.domain.enums import PayloadType
from opguard.domain.models.expense import ExpenseRecord, ViewFormat
from opguard.domain.models.request import (
    ConfirmOperationsRequest,
    ConnectRequest,
    RawOperation,
    SignRequest,
)
from opguard.review.formats import BYTES_FORMAT, RAW_FORMAT, with_preview


class PayloadClassification(BaseModel):
    payload_type: PayloadType
    contents: list[RawOperation] | None = None  # None = nothing to decode
    base_formats: list[ViewFormat] = []  # before the conditional preview
    raw_bytes: str | None = None

    @property
    def parse_expenses(self) -> bool:
        return self.contents is not None


def classify_payload(request: ConnectRequest | SignRequest | ConfirmOperationsRequest) -> PayloadClassification:
    if isinstance(request, ConnectRequest):
        return PayloadClassification(payload_type=PayloadType.CONNECT)

    if isinstance(request, SignRequest):
        if request.preview is not None:
            return PayloadClassification(
                payload_type=PayloadType.SIGN,
                contents=list(request.preview),
                base_formats=[RAW_FORMAT, BYTES_FORMAT],
                raw_bytes=request.payload,
            )
        return PayloadClassification(
            payload_type=PayloadType.SIGN,
            base_formats=[BYTES_FORMAT],
            raw_bytes=request.payload,
        )

    if isinstance(request, ConfirmOperationsRequest):
        return PayloadClassification(
            payload_type=PayloadType.CONFIRM_OPERATIONS,
            contents=list(request.operations),
            base_formats=[RAW_FORMAT],
        )

    raise TypeError(f"Unsupported signing request: {type(request).__name__}")


def available_formats(classification: PayloadClassification, records: list[ExpenseRecord]) -> list[ViewFormat]:
    if not classification.parse_expenses:
        return list(classification.base_formats)
    return with_preview(classification.base_formats, records)
