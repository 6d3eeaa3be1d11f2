"""
SCSS syntax support: tokenizer, parser, printer, and tree queries.

Usage:
    from sassvars.core.scss_lang import parse, stringify

    tree = parse("$x: 1 + 2;")
    assert stringify(tree) == "$x: 1 + 2;"
"""

from sassvars.core.scss_lang.parser import parse
from sassvars.core.scss_lang.printer import stringify
from sassvars.core.scss_lang.query import children, find_all, first_child, replace_child
from sassvars.core.scss_lang.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "Token",
    "TokenKind",
    "children",
    "find_all",
    "first_child",
    "parse",
    "replace_child",
    "stringify",
    "tokenize",
]
