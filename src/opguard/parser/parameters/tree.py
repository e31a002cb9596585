"""ParameterTree — bounded structural view of untrusted contract-call arguments.

Two raw encodings are accepted:
    Micheline JSON: {"prim": "Pair", "args": [...]}, {"int": "5"}, {"string": "tz1..."}, {"bytes": "00"}, [...]
    Decoded object form (wallet SDKs): {"from_": "tz1...", "txs": [{"to_": ..., "token_id": 0, "amount": 5}]}

The tree is never executed or type-checked against a contract interface.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

LITERAL_KEYS = ("int", "string", "bytes")


class ParameterDecodeError(Exception):
    """Raw parameters could not be turned into a ParameterTree."""


class MalformedParametersError(ParameterDecodeError):
    """Raw parameters do not follow either accepted encoding."""


class ParameterLimitError(ParameterDecodeError):
    """Raw parameters exceed the depth or node ceiling."""


@dataclass(frozen=True)
class Literal:
    kind: str  # int | string | bytes
    value: str


@dataclass(frozen=True)
class Node:
    """Micheline primitive application, e.g. Pair a b."""

    prim: str
    args: tuple[ParameterTree, ...] = ()
    annots: tuple[str, ...] = ()


@dataclass(frozen=True)
class Record:
    """Labeled node from the decoded object form."""

    fields: tuple[tuple[str, ParameterTree], ...]

    def get(self, *names: str) -> ParameterTree | None:
        for label, value in self.fields:
            if label in names:
                return value
        return None

    @property
    def labels(self) -> frozenset[str]:
        return frozenset(label for label, _ in self.fields)


@dataclass(frozen=True)
class Sequence:
    items: tuple[ParameterTree, ...]


ParameterTree = Union[Literal, Node, Record, Sequence]


class _Builder:
    def __init__(self, max_depth: int, max_nodes: int) -> None:
        self._max_depth = max_depth
        self._max_nodes = max_nodes
        self._nodes = 0

    def build(self, raw: Any, depth: int) -> ParameterTree:
        if depth > self._max_depth:
            raise ParameterLimitError(f"parameter tree deeper than {self._max_depth}")
        self._nodes += 1
        if self._nodes > self._max_nodes:
            raise ParameterLimitError(f"parameter tree larger than {self._max_nodes} nodes")

        if isinstance(raw, bool):
            raise MalformedParametersError("bare booleans are not a parameter value")
        if isinstance(raw, int):
            return Literal("int", str(raw))
        if isinstance(raw, str):
            return Literal("string", raw)
        if isinstance(raw, list):
            return Sequence(tuple(self.build(item, depth + 1) for item in raw))
        if isinstance(raw, dict):
            return self._build_mapping(raw, depth)
        raise MalformedParametersError(f"unsupported parameter value of type {type(raw).__name__}")

    def _build_mapping(self, raw: dict, depth: int) -> ParameterTree:
        for key in LITERAL_KEYS:
            if key in raw:
                if len(raw) != 1 or not isinstance(raw[key], str):
                    raise MalformedParametersError(f"malformed {key} literal")
                return Literal(key, raw[key])

        if "prim" in raw:
            prim = raw["prim"]
            args = raw.get("args", [])
            annots = raw.get("annots", [])
            if set(raw) - {"prim", "args", "annots"}:
                raise MalformedParametersError("unexpected keys in primitive node")
            if not isinstance(prim, str) or not isinstance(args, list) or not isinstance(annots, list):
                raise MalformedParametersError("malformed primitive node")
            if not all(isinstance(a, str) for a in annots):
                raise MalformedParametersError("annotations must be strings")
            return Node(prim, tuple(self.build(a, depth + 1) for a in args), tuple(annots))

        fields = []
        for label, value in raw.items():
            if not isinstance(label, str):
                raise MalformedParametersError("record labels must be strings")
            fields.append((label, self.build(value, depth + 1)))
        return Record(tuple(fields))


def build_tree(raw: Any, max_depth: int = 64, max_nodes: int = 4096) -> ParameterTree:
    """Convert raw JSON parameters into a ParameterTree, enforcing depth/size ceilings."""
    if raw is None:
        raise MalformedParametersError("no parameters")
    return _Builder(max_depth, max_nodes).build(raw, 0)
