from dependency_injector import containers, providers

from opguard.assets.registry import load_asset_registry
from opguard.config import Settings
from opguard.domain.models.asset import native_asset
from opguard.parser.expense_parser import ExpenseParser
from opguard.parser.matcher import build_default_matcher
from opguard.review.service import OperationReviewService


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["opguard.api.deps"])

    settings = providers.Singleton(Settings)

    native = providers.Singleton(
        native_asset,
        symbol=settings.provided.native_symbol,
        name=settings.provided.native_name,
        decimals=settings.provided.native_decimals,
    )

    asset_registry = providers.Singleton(
        load_asset_registry,
        path=settings.provided.assets_file,
        include_defaults=settings.provided.include_default_assets,
    )

    shape_matcher = providers.Singleton(
        build_default_matcher,
        max_depth=settings.provided.max_parameter_depth,
        max_nodes=settings.provided.max_parameter_nodes,
    )

    expense_parser = providers.Factory(
        ExpenseParser,
        matcher=shape_matcher,
        assets=asset_registry,
        native=native,
    )

    review_service = providers.Factory(
        OperationReviewService,
        parser=expense_parser,
        native_decimals=settings.provided.native_decimals,
    )
