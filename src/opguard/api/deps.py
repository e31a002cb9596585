from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from opguard.assets.registry import AssetLookup
from opguard.container import Container
from opguard.review.service import OperationReviewService


@inject
def get_review_service(
    service: OperationReviewService = Depends(Provide[Container.review_service]),
) -> OperationReviewService:
    return service


@inject
def get_asset_registry(
    registry: AssetLookup = Depends(Provide[Container.asset_registry]),
) -> AssetLookup:
    return registry
