"""
Serialize syntax trees back to SCSS source.

The inverse of ``parse``: each node prints as its delimiters wrapped
around its value, with children printed in order.
"""

from __future__ import annotations

from sassvars.core.ir.nodes import Branch, Leaf, Node, NodeType, Single

# Node type -> (opening, closing) text around the node's value
_DELIMITERS: dict[str, tuple[str, str]] = {
    NodeType.COMMENT_MULTILINE: ("/*", "*/"),
    NodeType.COMMENT_SINGLELINE: ("//", ""),
    NodeType.STRING_DOUBLE: ('"', '"'),
    NodeType.STRING_SINGLE: ("'", "'"),
    NodeType.COLOR_HEX: ("#", ""),
    NodeType.ID: ("#", ""),
    NodeType.VARIABLE: ("$", ""),
    NodeType.ATKEYWORD: ("@", ""),
    NodeType.ARGUMENTS: ("(", ")"),
    NodeType.PARENTHESES: ("(", ")"),
    NodeType.BRACKETS: ("[", "]"),
    NodeType.INTERPOLATION: ("#{", "}"),
    NodeType.BLOCK: ("{", "}"),
}


def stringify(node: Node) -> str:
    """Print a node and its descendants as SCSS source."""
    return "".join(_emit(node, []))


def _emit(node: Node, out: list[str]) -> list[str]:
    opening, closing = _DELIMITERS.get(node.type, ("", ""))
    out.append(opening)
    if isinstance(node, Leaf):
        out.append(node.value)
    elif isinstance(node, Single):
        _emit(node.value, out)
    elif isinstance(node, Branch):
        for child in node.value:
            _emit(child, out)
    else:
        raise TypeError(f"Cannot print {type(node).__name__}")
    out.append(closing)
    return out
