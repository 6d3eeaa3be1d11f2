"""
Intermediate representation types: syntax tree nodes and plain values.
"""

from .nodes import TRIVIA, Branch, Leaf, Node, NodeType, Single, SourcePos
from .values import (
    UNDEFINED,
    ExtractionResult,
    PlainValue,
    Undefined,
    VariableRecord,
)

__all__ = [
    # Nodes
    "Branch",
    "Leaf",
    "Node",
    "NodeType",
    "Single",
    "SourcePos",
    "TRIVIA",
    # Values
    "ExtractionResult",
    "PlainValue",
    "UNDEFINED",
    "Undefined",
    "VariableRecord",
]
