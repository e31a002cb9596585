from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from opguard.api.deps import get_asset_registry
from opguard.api.schemas.review import AssetResponse
from opguard.assets.registry import AssetLookup

router = APIRouter(prefix="/api/assets", tags=["assets"])

RegistryDep = Annotated[AssetLookup, Depends(get_asset_registry)]


@router.get("/{address}", response_model=AssetResponse)
async def get_asset(
    address: str,
    registry: RegistryDep,
    token_id: Optional[int] = Query(None, ge=0),
) -> AssetResponse:
    asset = registry.lookup(address, token_id)
    if asset is None:
        raise HTTPException(status_code=404, detail="Asset not found")
    return AssetResponse(
        key=asset.key,
        type=asset.type,
        symbol=asset.symbol,
        name=asset.name,
        decimals=asset.decimals,
        info=asset.info(),
    )
