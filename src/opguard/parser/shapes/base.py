"""Base interface for recognized transfer shapes."""

from abc import ABC, abstractmethod

from opguard.domain.enums import AssetType
from opguard.domain.models.expense import RawExpense
from opguard.parser.parameters.tree import ParameterTree


class MatchContext:
    """Read-only facts about the operation being matched."""

    def __init__(self, account: str, destination: str | None, source: str | None = None) -> None:
        self.account = account
        self.destination = destination
        self.source = source

    @property
    def implicit_source(self) -> str:
        """Declared source, or the reviewing account when the dApp left it out."""
        return self.source or self.account

    def is_account(self, address: str) -> bool:
        return address == self.account


class BaseShape(ABC):
    """One whitelisted (entrypoint, parameter shape) pair."""

    SHAPE_NAME: str = "BaseShape"
    STANDARD: AssetType = AssetType.FA1_2
    ENTRYPOINTS: frozenset[str] = frozenset()

    def accepts(self, entrypoint: str) -> bool:
        return entrypoint in self.ENTRYPOINTS

    @abstractmethod
    def match(self, tree: ParameterTree, context: MatchContext) -> list[RawExpense] | None:
        """Debits from the reviewing account, or None if the tree is not this shape.

        An empty list means the shape matched but nothing leaves the account.
        """
