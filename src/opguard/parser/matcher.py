"""ParameterShapeMatcher — entrypoint + parameter tree -> whitelisted transfer shape."""

import logging
from typing import Any

from pydantic import BaseModel

from opguard.domain.enums import AssetType, DecodeErrorType
from opguard.domain.models.expense import RawExpense
from opguard.parser.parameters.tree import MalformedParametersError, ParameterLimitError, build_tree
from opguard.parser.shapes.base import BaseShape, MatchContext

logger = logging.getLogger(__name__)

# Bump whenever a shape is added to or removed from build_default_matcher().
WHITELIST_VERSION = "1"

DEFAULT_ENTRYPOINT = "default"


class ShapeMatch(BaseModel):
    """Outcome of matching one operation's parameters."""

    expenses: list[RawExpense] = []
    shape_name: str | None = None
    standard: AssetType | None = None
    error: DecodeErrorType | None = None

    @property
    def recognized(self) -> bool:
        return self.shape_name is not None


class ParameterShapeMatcher:
    """Ordered whitelist of shapes. First shape that recognizes the tree wins."""

    def __init__(
        self,
        shapes: list[BaseShape] | None = None,
        max_depth: int = 64,
        max_nodes: int = 4096,
    ) -> None:
        self._shapes: list[BaseShape] = list(shapes or [])
        self._max_depth = max_depth
        self._max_nodes = max_nodes

    def register(self, shape: BaseShape) -> None:
        self._shapes.append(shape)

    @property
    def shapes(self) -> list[BaseShape]:
        return list(self._shapes)

    def shapes_for(self, entrypoint: str) -> list[BaseShape]:
        return [s for s in self._shapes if s.accepts(entrypoint)]

    def match(
        self,
        entrypoint: str | None,
        parameters: Any,
        account: str,
        destination: str | None = None,
        source: str | None = None,
    ) -> ShapeMatch:
        entrypoint = entrypoint or DEFAULT_ENTRYPOINT
        candidates = self.shapes_for(entrypoint)
        if not candidates:
            logger.debug("No shape registered for entrypoint %r on %s", entrypoint, destination)
            return ShapeMatch(error=DecodeErrorType.UNRECOGNIZED_SHAPE_ERROR)

        try:
            tree = build_tree(parameters, self._max_depth, self._max_nodes)
        except ParameterLimitError as e:
            logger.debug("Parameters of %s rejected: %s", destination, e)
            return ShapeMatch(error=DecodeErrorType.PARAMETER_LIMIT_ERROR)
        except MalformedParametersError as e:
            logger.debug("Parameters of %s malformed: %s", destination, e)
            return ShapeMatch(error=DecodeErrorType.MALFORMED_PARAMETERS_ERROR)

        context = MatchContext(account=account, destination=destination, source=source)
        for shape in candidates:
            expenses = shape.match(tree, context)
            if expenses is not None:
                return ShapeMatch(expenses=expenses, shape_name=shape.SHAPE_NAME, standard=shape.STANDARD)

        logger.debug("Unrecognized %r parameters on %s", entrypoint, destination)
        return ShapeMatch(error=DecodeErrorType.UNRECOGNIZED_SHAPE_ERROR)


def build_default_matcher(max_depth: int = 64, max_nodes: int = 4096) -> ParameterShapeMatcher:
    """Create a matcher with the default transfer whitelist registered."""
    from opguard.parser.shapes.batch import FA2TransferShape
    from opguard.parser.shapes.single import FA12TransferShape, SingleTransferShape

    matcher = ParameterShapeMatcher(max_depth=max_depth, max_nodes=max_nodes)
    matcher.register(FA2TransferShape())
    matcher.register(FA12TransferShape())
    matcher.register(SingleTransferShape())
    return matcher
