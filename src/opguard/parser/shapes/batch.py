"""FA2 batch transfer shape.

transfer (list (pair (address %from_)
                     (list %txs (pair (address %to_) (pair (nat %token_id) (nat %amount))))))

One debit per inner transfer whose batch %from_ is the reviewing account.
Any malformed batch item makes the whole parameter unrecognized.
"""

from decimal import Decimal

from opguard.domain.enums import AssetType
from opguard.domain.models.expense import RawExpense
from opguard.parser.parameters.patterns import as_address, as_list, as_nat, as_record, flatten_pair
from opguard.parser.parameters.tree import ParameterTree
from opguard.parser.shapes.base import BaseShape, MatchContext

FA2_ENTRYPOINTS = frozenset({"transfer"})


def _split_batch(item: ParameterTree) -> tuple[ParameterTree, ParameterTree] | None:
    components = flatten_pair(item)
    if components is not None:
        if len(components) != 2:
            return None
        return components[0], components[1]
    fields = as_record(item, {"from": ("from", "from_"), "txs": ("txs",)})
    if fields is None:
        return None
    return fields["from"], fields["txs"]


def _split_tx(tx: ParameterTree) -> tuple[ParameterTree, ParameterTree, ParameterTree] | None:
    components = flatten_pair(tx)
    if components is not None:
        if len(components) != 3:
            return None
        return components[0], components[1], components[2]
    fields = as_record(tx, {"to": ("to", "to_"), "token_id": ("token_id",), "amount": ("amount",)})
    if fields is None:
        return None
    return fields["to"], fields["token_id"], fields["amount"]


class FA2TransferShape(BaseShape):
    SHAPE_NAME = "FA2Transfer"
    STANDARD = AssetType.FA2
    ENTRYPOINTS = FA2_ENTRYPOINTS

    def match(self, tree: ParameterTree, context: MatchContext) -> list[RawExpense] | None:
        if context.destination is None:
            return None
        batches = as_list(tree)
        if batches is None:
            return None

        expenses: list[RawExpense] = []
        for batch in batches:
            parts = _split_batch(batch)
            if parts is None:
                return None
            from_addr = as_address(parts[0])
            txs = as_list(parts[1])
            if from_addr is None or txs is None:
                return None

            for tx in txs:
                tx_parts = _split_tx(tx)
                if tx_parts is None:
                    return None
                to_addr = as_address(tx_parts[0])
                token_id = as_nat(tx_parts[1])
                amount = as_nat(tx_parts[2])
                if to_addr is None or token_id is None or amount is None:
                    return None
                if context.is_account(from_addr):
                    expenses.append(RawExpense(
                        token_address=context.destination,
                        token_id=token_id,
                        from_address=from_addr,
                        to_address=to_addr,
                        amount=Decimal(amount),
                    ))
        return expenses
