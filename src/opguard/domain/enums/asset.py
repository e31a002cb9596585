from enum import Enum


class AssetType(str, Enum):
    """Asset standards known to the wallet."""

    XTZ = "XTZ"  # native
    FA1_2 = "FA1_2"  # single-asset token standard
    FA2 = "FA2"  # multi-asset token standard
