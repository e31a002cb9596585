from enum import Enum


class OperationKind(str, Enum):
    """Tezos manager operation kinds. Unknown kinds from the wire map to OTHER."""

    TRANSACTION = "transaction"
    DELEGATION = "delegation"
    ORIGINATION = "origination"
    REVEAL = "reveal"
    OTHER = "other"
