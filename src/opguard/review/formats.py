"""View formats offered while reviewing a signing request."""

from opguard.domain.enums import ViewFormatKey
from opguard.domain.models.expense import ExpenseRecord, ViewFormat, count_expenses

PREVIEW_FORMAT = ViewFormat(key=ViewFormatKey.PREVIEW, label="Preview", icon="eye")
RAW_FORMAT = ViewFormat(key=ViewFormatKey.RAW, label="Raw", icon="code-alt")
BYTES_FORMAT = ViewFormat(key=ViewFormatKey.BYTES, label="Bytes", icon="hash")


def with_preview(base_formats: list[ViewFormat], records: list[ExpenseRecord]) -> list[ViewFormat]:
    """Prepend the decoded preview iff at least one expense was decoded."""
    if not base_formats or count_expenses(records) == 0:
        return list(base_formats)
    return [PREVIEW_FORMAT, *base_formats]
