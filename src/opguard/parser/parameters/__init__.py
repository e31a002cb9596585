from opguard.parser.parameters.tree import (
    Literal,
    MalformedParametersError,
    Node,
    ParameterDecodeError,
    ParameterLimitError,
    ParameterTree,
    Record,
    Sequence,
    build_tree,
)

__all__ = [
    "Literal",
    "MalformedParametersError",
    "Node",
    "ParameterDecodeError",
    "ParameterLimitError",
    "ParameterTree",
    "Record",
    "Sequence",
    "build_tree",
]
