import pytest

from opguard.assets.registry import InMemoryAssetRegistry
from opguard.domain.enums import AssetType
from opguard.domain.models.asset import ResolvedAsset
from opguard.parser.expense_parser import ExpenseParser
from opguard.parser.matcher import build_default_matcher
from opguard.review.service import OperationReviewService

FA12_TOKEN = "KT1PWx2mnDueood7fEmfbBDKx1D9BAnnXitn"
FA2_TOKEN = "KT1RJ6PbjHpwc3M5rw5s2Nbmefwbuwbdxton"


@pytest.fixture()
def registry() -> InMemoryAssetRegistry:
    return InMemoryAssetRegistry([
        ResolvedAsset(type=AssetType.FA1_2, address=FA12_TOKEN, symbol="tzBTC", name="Tezos BTC", decimals=8),
        ResolvedAsset(type=AssetType.FA2, address=FA2_TOKEN, token_id=0, symbol="TKN", name="Token", decimals=0),
    ])


@pytest.fixture()
def matcher():
    return build_default_matcher()


@pytest.fixture()
def expense_parser(matcher, registry) -> ExpenseParser:
    return ExpenseParser(matcher, registry)


@pytest.fixture()
def review_service(expense_parser) -> OperationReviewService:
    return OperationReviewService(expense_parser)
