"""Single-asset transfer shapes.

SingleTransferShape:  transfer (pair (address %to) (nat %value))
    debit is implicit, from the operation's source.
FA12TransferShape:    transfer (pair (address %from) (pair (address %to) (nat %value)))
    debit only when %from is the reviewing account.
"""

from decimal import Decimal

from opguard.domain.enums import AssetType
from opguard.domain.models.expense import RawExpense
from opguard.parser.parameters.patterns import as_address, as_nat, as_record, flatten_pair
from opguard.parser.parameters.tree import ParameterTree
from opguard.parser.shapes.base import BaseShape, MatchContext

TRANSFER_ENTRYPOINTS = frozenset({"transfer"})


class SingleTransferShape(BaseShape):
    SHAPE_NAME = "SingleTransfer"
    STANDARD = AssetType.FA1_2
    ENTRYPOINTS = TRANSFER_ENTRYPOINTS

    def match(self, tree: ParameterTree, context: MatchContext) -> list[RawExpense] | None:
        if context.destination is None:
            return None

        components = flatten_pair(tree)
        if components is not None:
            if len(components) != 2:
                return None
            to_tree, value_tree = components
        else:
            fields = as_record(tree, {"to": ("to", "to_"), "value": ("value", "amount")})
            if fields is None:
                return None
            to_tree, value_tree = fields["to"], fields["value"]

        to_addr = as_address(to_tree)
        value = as_nat(value_tree)
        if to_addr is None or value is None:
            return None

        source = context.implicit_source
        if not context.is_account(source):
            return []
        return [RawExpense(
            token_address=context.destination,
            from_address=source,
            to_address=to_addr,
            amount=Decimal(value),
        )]


class FA12TransferShape(BaseShape):
    SHAPE_NAME = "FA12Transfer"
    STANDARD = AssetType.FA1_2
    ENTRYPOINTS = TRANSFER_ENTRYPOINTS

    def match(self, tree: ParameterTree, context: MatchContext) -> list[RawExpense] | None:
        if context.destination is None:
            return None

        components = flatten_pair(tree)
        if components is not None:
            if len(components) != 3:
                return None
            from_tree, to_tree, value_tree = components
        else:
            fields = as_record(tree, {
                "from": ("from", "from_"),
                "to": ("to", "to_"),
                "value": ("value", "amount"),
            })
            if fields is None:
                return None
            from_tree, to_tree, value_tree = fields["from"], fields["to"], fields["value"]

        from_addr = as_address(from_tree)
        to_addr = as_address(to_tree)
        value = as_nat(value_tree)
        if from_addr is None or to_addr is None or value is None:
            return None

        if not context.is_account(from_addr):
            return []
        return [RawExpense(
            token_address=context.destination,
            from_address=from_addr,
            to_address=to_addr,
            amount=Decimal(value),
        )]
