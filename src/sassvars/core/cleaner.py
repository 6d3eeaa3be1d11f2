"""Strip parser metadata from syntax trees."""

from __future__ import annotations

from collections.abc import Sequence

from sassvars.core.ir.nodes import Branch, Leaf, Node, Single


def clean(node: Node) -> Node:
    """Return a copy of ``node`` keeping only ``type`` and ``value``, recursively."""
    if isinstance(node, Branch):
        return Branch(type=node.type, value=clean_all(node.value))
    if isinstance(node, Single):
        return Single(type=node.type, value=clean(node.value))
    return Leaf(type=node.type, value=node.value)


def clean_all(nodes: Sequence[Node]) -> list[Node]:
    """Clean each node, preserving order and length."""
    return [clean(n) for n in nodes]
