from enum import Enum


class ViewFormatKey(str, Enum):
    """Presentations offered for a signing request."""

    PREVIEW = "preview"  # decoded expenses
    RAW = "raw"  # operation list as sent by the dApp
    BYTES = "bytes"  # forged bytes to sign
