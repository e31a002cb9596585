"""Asset registry — contract address (+ token id) -> ResolvedAsset.

Registries are immutable snapshots: refreshing builds a new snapshot, so a
lookup never observes a half-updated registry.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from types import MappingProxyType

from pydantic import TypeAdapter

from opguard.domain.enums import AssetType
from opguard.domain.models.asset import ResolvedAsset

logger = logging.getLogger(__name__)

# Well-known mainnet tokens
DEFAULT_ASSETS: list[ResolvedAsset] = [
    ResolvedAsset(
        type=AssetType.FA1_2,
        address="KT1PWx2mnDueood7fEmfbBDKx1D9BAnnXitn",
        symbol="tzBTC",
        name="Tezos BTC",
        decimals=8,
    ),
    ResolvedAsset(
        type=AssetType.FA1_2,
        address="KT1K9gCRgaLRFKTErYt1wVxA3Frb9FjasjTV",
        symbol="kUSD",
        name="Kolibri USD",
        decimals=18,
    ),
    ResolvedAsset(
        type=AssetType.FA1_2,
        address="KT1LN4LPSqTMS7Sd2CJw4bbDGRkMv2t68Fy9",
        symbol="USDtz",
        name="USD Tez",
        decimals=6,
    ),
]

_assets_adapter = TypeAdapter(list[ResolvedAsset])


class AssetLookup(ABC):
    """Read-only asset resolution used by the expense parser."""

    @abstractmethod
    def lookup(self, address: str, token_id: int | None = None) -> ResolvedAsset | None:
        """Return the known asset for a token contract, or None."""


class InMemoryAssetRegistry(AssetLookup):
    """Snapshot of known token assets keyed by (address, token_id).

    FA1.2 assets are keyed with token_id None. FA2 lookups must carry the token id;
    a different token id of the same FA2 contract is a miss.
    """

    def __init__(self, assets: list[ResolvedAsset] | None = None) -> None:
        index: dict[tuple[str, int | None], ResolvedAsset] = {}
        for asset in assets or []:
            if asset.is_native or asset.address is None:
                continue
            token_id = (asset.token_id or 0) if asset.type == AssetType.FA2 else None
            index.setdefault((asset.address, token_id), asset)
        self._index = MappingProxyType(index)

    def lookup(self, address: str, token_id: int | None = None) -> ResolvedAsset | None:
        if token_id is not None:
            return self._index.get((address, token_id))
        return self._index.get((address, None))

    def assets(self) -> list[ResolvedAsset]:
        return list(self._index.values())

    def with_assets(self, assets: list[ResolvedAsset]) -> "InMemoryAssetRegistry":
        """New snapshot with extra assets; existing entries win on conflict."""
        return InMemoryAssetRegistry(self.assets() + list(assets))

    def __len__(self) -> int:
        return len(self._index)


def load_asset_registry(path: str = "", include_defaults: bool = True) -> InMemoryAssetRegistry:
    """Build a registry from DEFAULT_ASSETS and/or a JSON file holding a list of assets."""
    assets: list[ResolvedAsset] = list(DEFAULT_ASSETS) if include_defaults else []
    if path:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        loaded = _assets_adapter.validate_python(raw)
        logger.info("Loaded %d assets from %s", len(loaded), path)
        assets.extend(loaded)
    return InMemoryAssetRegistry(assets)
