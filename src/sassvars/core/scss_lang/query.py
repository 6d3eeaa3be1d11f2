"""Tree walking helpers for selecting and replacing syntax tree nodes."""

from __future__ import annotations

from collections.abc import Iterator

from sassvars.core.ir.nodes import Branch, Node, Single


def _child_nodes(node: Node) -> list[Node]:
    if isinstance(node, Branch):
        return node.value
    if isinstance(node, Single):
        return [node.value]
    return []


def children(node: Node, node_type: str | None = None) -> list[Node]:
    """Direct children of ``node``, optionally filtered by type."""
    return [c for c in _child_nodes(node) if node_type is None or c.type == node_type]


def first_child(node: Node, node_type: str) -> Node | None:
    """First direct child of the given type, or None."""
    for child in _child_nodes(node):
        if child.type == node_type:
            return child
    return None


def find_all(node: Node, node_type: str) -> Iterator[Node]:
    """All descendants of the given type in document order (pre-order)."""
    for child in _child_nodes(node):
        if child.type == node_type:
            yield child
        yield from find_all(child, node_type)


def replace_child(parent: Node, old: Node, new: Node) -> int:
    """Replace ``old`` (by identity) with ``new`` under ``parent``.

    Returns:
        The index ``new`` now occupies.

    Raises:
        ValueError: If ``old`` is not a direct child of ``parent``.
    """
    if isinstance(parent, Single) and parent.value is old:
        parent.value = new
        return 0
    if isinstance(parent, Branch):
        for idx, child in enumerate(parent.value):
            if child is old:
                parent.value[idx] = new
                return idx
    raise ValueError(f"Node {old.type!r} is not a child of {parent.type!r}")
