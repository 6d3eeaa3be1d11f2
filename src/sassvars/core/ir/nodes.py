"""
Stylesheet syntax tree types.

Every node is a ``{type, value}`` pair. The shape of ``value`` depends on
the node kind and is modelled as three variants:

- ``Leaf``: scalar text (identifiers, numbers, strings, whitespace, ...)
- ``Single``: exactly one child node
- ``Branch``: an ordered sequence of child nodes

Nodes produced by the parser also carry ``start`` (their source
position). That metadata is parser-specific and is dropped by
``sassvars.core.cleaner.clean`` before a subtree is re-emitted.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class NodeType(StrEnum):
    """Node kinds produced by the stylesheet parser."""

    # Containers
    STYLESHEET = "stylesheet"
    DECLARATION = "declaration"
    PROPERTY = "property"
    VALUE = "value"
    RULE = "rule"
    SELECTOR = "selector"
    BLOCK = "block"
    ATRULE = "atrule"
    FUNCTION = "function"
    ARGUMENTS = "arguments"
    PARENTHESES = "parentheses"
    BRACKETS = "brackets"
    INTERPOLATION = "interpolation"

    # Leaves
    SPACE = "space"
    COMMENT_MULTILINE = "comment_multiline"
    COMMENT_SINGLELINE = "comment_singleline"
    STRING_DOUBLE = "string_double"
    STRING_SINGLE = "string_single"
    NUMBER = "number"
    COLOR_HEX = "color_hex"
    ID = "id"
    VARIABLE = "variable"
    ATKEYWORD = "atkeyword"
    IDENTIFIER = "identifier"
    OPERATOR = "operator"
    PUNCTUATION = "punctuation"
    URL = "url"


TRIVIA = frozenset({NodeType.SPACE, NodeType.COMMENT_MULTILINE, NodeType.COMMENT_SINGLELINE})


class SourcePos(BaseModel):
    """Location of a node's first character in the parsed source."""

    cursor: int = Field(description="0-based character offset")
    line: int = Field(description="1-based line number")
    column: int = Field(description="1-based column number")

    model_config = ConfigDict(frozen=True)


class Leaf(BaseModel):
    """A node holding scalar text."""

    type: str
    value: str
    start: SourcePos | None = None


class Single(BaseModel):
    """A node wrapping exactly one child."""

    type: str
    value: Node
    start: SourcePos | None = None


class Branch(BaseModel):
    """A node holding an ordered list of children."""

    type: str
    value: list[Node] = Field(default_factory=list)
    start: SourcePos | None = None


Node = Leaf | Single | Branch

Single.model_rebuild()
Branch.model_rebuild()
