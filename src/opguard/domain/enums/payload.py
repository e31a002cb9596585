from enum import Enum


class PayloadType(str, Enum):
    """Signing request kinds a connected dApp can send. Values match the wire tag."""

    CONNECT = "connect"
    SIGN = "sign"
    CONFIRM_OPERATIONS = "confirm_operations"
