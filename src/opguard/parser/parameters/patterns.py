"""Structural pattern helpers shared by the transfer shapes.

Every helper returns None when the tree does not have the expected structure;
shapes treat None as "unrecognized".
"""

import re

from opguard.parser.parameters.tree import Literal, Node, ParameterTree, Record, Sequence

# Implicit accounts (tz1-tz4) and originated contracts (KT1), textual form only.
ADDRESS_RE = re.compile(r"(tz[1-4]|KT1)[1-9A-HJ-NP-Za-km-z]{33}")
NAT_RE = re.compile(r"[0-9]+")


def flatten_pair(tree: ParameterTree) -> list[ParameterTree] | None:
    """Right-comb pair -> flat list of components.

    Pair a (Pair b c) and Pair a b c both give [a, b, c].
    """
    if not isinstance(tree, Node) or tree.prim != "Pair" or len(tree.args) < 2:
        return None
    items = list(tree.args)
    last = items[-1]
    if isinstance(last, Node) and last.prim == "Pair":
        tail = flatten_pair(last)
        if tail is None:
            return None
        return items[:-1] + tail
    return items


def as_address(tree: ParameterTree | None) -> str | None:
    if not isinstance(tree, Literal) or tree.kind != "string":
        return None
    if not ADDRESS_RE.fullmatch(tree.value):
        return None
    return tree.value


def as_nat(tree: ParameterTree | None) -> int | None:
    if not isinstance(tree, Literal) or tree.kind not in ("int", "string"):
        return None
    if not NAT_RE.fullmatch(tree.value):
        return None
    return int(tree.value)


def as_list(tree: ParameterTree | None) -> list[ParameterTree] | None:
    if not isinstance(tree, Sequence):
        return None
    return list(tree.items)


def as_record(tree: ParameterTree | None, fields: dict[str, tuple[str, ...]]) -> dict[str, ParameterTree] | None:
    """Match a labeled node carrying exactly one alias of every field and nothing else.

    fields maps canonical name -> accepted labels, e.g. {"from": ("from", "from_")}.
    """
    if not isinstance(tree, Record):
        return None
    labels = tree.labels
    result: dict[str, ParameterTree] = {}
    used: set[str] = set()
    for name, aliases in fields.items():
        present = labels & set(aliases)
        if len(present) != 1:
            return None
        label = next(iter(present))
        value = tree.get(label)
        if value is None:
            return None
        result[name] = value
        used.add(label)
    if used != labels or len(tree.fields) != len(labels):
        return None
    return result
