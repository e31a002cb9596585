"""Resolved asset identities used for expense display."""

from pydantic import BaseModel

from opguard.domain.enums import AssetType

NATIVE_ASSET_KEY = "tez"


class AssetInfo(BaseModel):
    """Contract details shown for a token asset."""

    contract_address: str
    token_id: int | None = None  # FA2 only


class ResolvedAsset(BaseModel):
    """A native or token asset matched against the registry."""

    type: AssetType
    address: str | None = None  # None = native
    token_id: int | None = None
    symbol: str
    name: str = ""
    decimals: int = 0

    model_config = {"frozen": True}

    @property
    def is_native(self) -> bool:
        return self.type == AssetType.XTZ

    @property
    def key(self) -> str:
        """Stable slug: 'tez', '<address>' or '<address>_<token_id>'."""
        if self.is_native:
            return NATIVE_ASSET_KEY
        if self.type == AssetType.FA2:
            return f"{self.address}_{self.token_id or 0}"
        return self.address or ""

    def info(self) -> AssetInfo | None:
        if self.is_native or self.address is None:
            return None
        token_id = self.token_id if self.type == AssetType.FA2 else None
        return AssetInfo(contract_address=self.address, token_id=token_id)


def native_asset(symbol: str = "XTZ", name: str = "Tezos", decimals: int = 6) -> ResolvedAsset:
    return ResolvedAsset(type=AssetType.XTZ, symbol=symbol, name=name, decimals=decimals)


XTZ_ASSET = native_asset()
