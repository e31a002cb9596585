from enum import Enum


class DecodeErrorType(str, Enum):
    """Categorized reasons why an operation produced no decoded expenses."""

    UNRECOGNIZED_SHAPE_ERROR = "UnrecognizedShapeError"
    MALFORMED_PARAMETERS_ERROR = "MalformedParametersError"
    PARAMETER_LIMIT_ERROR = "ParameterLimitError"
    MALFORMED_OPERATION_ERROR = "MalformedOperationError"
    INTERNAL_DECODE_ERROR = "InternalDecodeError"
