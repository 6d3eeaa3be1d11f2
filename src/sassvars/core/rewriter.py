"""
Wrap variable declarations in calls to the export hook.

``$name: <expr> !flags;`` becomes ``$name:export_var("name", <expr>) !flags;``
so that evaluating the stylesheet hands every resolved value to the hook.
Declarations without a ``$variable`` property (plain CSS properties such
as ``color: red``) are left untouched.
"""

from __future__ import annotations

import logging
import re

from sassvars.core.cleaner import clean
from sassvars.core.errors import RewriteError
from sassvars.core.ir.nodes import TRIVIA, Branch, Leaf, Node, NodeType
from sassvars.core.scss_lang.query import children, find_all, first_child, replace_child

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_FUNCTION = "export_var"

ASSIGNMENT_FLAGS = frozenset({"default", "global"})

_FUNCTION_NAME_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_\-]*")


def rewrite_declarations(
    tree: Node,
    *,
    export_function: str = DEFAULT_EXPORT_FUNCTION,
    nested: bool = False,
) -> Node:
    """Wrap variable declarations of ``tree`` in export calls, in place.

    Args:
        tree: Parsed stylesheet.
        export_function: Name of the hook function the calls invoke.
        nested: Also rewrite declarations inside blocks (rules, mixins,
            control directives). By default only direct children of the
            stylesheet are rewritten.

    Returns:
        The same ``tree``, mutated.

    Raises:
        RewriteError: If ``export_function`` is not a valid identifier.
    """
    if not _FUNCTION_NAME_RE.fullmatch(export_function):
        raise RewriteError(f"Invalid export function name: {export_function!r}")

    if nested:
        declarations = list(find_all(tree, NodeType.DECLARATION))
    else:
        declarations = children(tree, NodeType.DECLARATION)

    rewritten = sum(1 for decl in declarations if _wrap_declaration(decl, export_function))
    logger.debug("Rewrote %d of %d declarations", rewritten, len(declarations))
    return tree


def variable_name(declaration: Node) -> str | None:
    """Name of the variable a declaration assigns, or None for plain properties."""
    prop = first_child(declaration, NodeType.PROPERTY)
    if prop is None:
        return None
    variable = first_child(prop, NodeType.VARIABLE)
    if not isinstance(variable, Leaf):
        return None
    return variable.value


def split_flags(nodes: list[Node]) -> tuple[list[Node], list[Node]]:
    """Split trailing ``!default`` / ``!global`` flags off a value's children.

    Trailing whitespace and comments go with the flags, so nothing after
    the expression can swallow the closing parenthesis of the export call.

    Returns:
        ``(expression, tail)``
    """
    idx = len(nodes) - 1
    while True:
        while idx >= 0 and nodes[idx].type in TRIVIA:
            idx -= 1
        if (
            idx >= 1
            and nodes[idx].type == NodeType.IDENTIFIER
            and nodes[idx].value in ASSIGNMENT_FLAGS
            and nodes[idx - 1].type == NodeType.OPERATOR
            and nodes[idx - 1].value == "!"
        ):
            idx -= 2
            continue
        break
    return nodes[: idx + 1], nodes[idx + 1 :]


def build_export_call(export_function: str, name: str, expression: Node) -> Branch:
    """Build ``export_function("name", expression)`` as a function node."""
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return Branch(
        type=NodeType.FUNCTION,
        value=[
            Leaf(type=NodeType.IDENTIFIER, value=export_function),
            Branch(
                type=NodeType.ARGUMENTS,
                value=[
                    Leaf(type=NodeType.STRING_DOUBLE, value=escaped),
                    Leaf(type=NodeType.PUNCTUATION, value=","),
                    expression,
                ],
            ),
        ],
    )


def _wrap_declaration(declaration: Node, export_function: str) -> bool:
    name = variable_name(declaration)
    value = first_child(declaration, NodeType.VALUE)
    if name is None or not isinstance(declaration, Branch) or not isinstance(value, Branch):
        return False

    expression, tail = split_flags(value.value)
    if all(node.type in TRIVIA for node in expression):
        return False

    call = build_export_call(export_function, name, _export_argument(expression))
    try:
        idx = replace_child(declaration, value, call)
    except ValueError as exc:  # pragma: no cover - first_child returned a child
        raise RewriteError(f"Cannot rewrite declaration of ${name}: {exc}") from exc
    declaration.value[idx + 1 : idx + 1] = tail
    return True


def _export_argument(expression: list[Node]) -> Branch:
    """Cleaned copy of the expression as a single call argument.

    A top-level comma list is parenthesized; leading trivia stays outside.
    """
    cleaned = clean(Branch(type=NodeType.VALUE, value=expression))
    if any(n.type == NodeType.PUNCTUATION and n.value == "," for n in expression):
        lead = 0
        while cleaned.value[lead].type in TRIVIA:
            lead += 1
        cleaned.value = cleaned.value[:lead] + [
            Branch(type=NodeType.PARENTHESES, value=cleaned.value[lead:])
        ]
    return cleaned
