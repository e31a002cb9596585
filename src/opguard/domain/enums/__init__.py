from opguard.domain.enums.asset import AssetType
from opguard.domain.enums.decode_error import DecodeErrorType
from opguard.domain.enums.operation import OperationKind
from opguard.domain.enums.payload import PayloadType
from opguard.domain.enums.view_format import ViewFormatKey

__all__ = [
    "AssetType",
    "DecodeErrorType",
    "OperationKind",
    "PayloadType",
    "ViewFormatKey",
]
