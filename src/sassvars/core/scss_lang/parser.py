"""
Recursive descent parser for SCSS source.

The parser is lossless: every token ends up in the tree, so
``stringify(parse(text)) == text``. It recognises only as much structure
as the extractor needs.

Grammar:
    stylesheet  → statement* EOF
    block       → "{" statement* "}"
    statement   → trivia | ";" | atrule | declaration | rule
    atrule      → ATKEYWORD component* block?
    declaration → property trivia* ":" value
    property    → VARIABLE | component+
    value       → component*              (up to ";", "}" or EOF)
    rule        → selector block
    selector    → component+              (up to "{")
    component   → function | parentheses | brackets | interpolation | leaf
    function    → IDENTIFIER arguments
    arguments   → "(" component* ")"
    parentheses → "(" component* ")"
    brackets    → "[" component* "]"
    interpolation → "#{" component* "}"

A statement starting with a variable is always a declaration. Any other
statement is a declaration when ";", "}" or EOF is reached before "{"
(outside of nested groups), and a rule otherwise.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from sassvars.core.errors import ParseError, make_parse_error, make_snippet
from sassvars.core.ir.nodes import Branch, Leaf, Node, NodeType, SourcePos
from sassvars.core.scss_lang.tokenizer import Token, TokenKind, tokenize

_TRIVIA_KINDS = frozenset(
    {TokenKind.SPACE, TokenKind.COMMENT_MULTILINE, TokenKind.COMMENT_SINGLELINE}
)

# Opening token -> (closing token, node type)
_GROUPS: dict[TokenKind, tuple[TokenKind, NodeType]] = {
    TokenKind.LPAREN: (TokenKind.RPAREN, NodeType.PARENTHESES),
    TokenKind.LBRACKET: (TokenKind.RBRACKET, NodeType.BRACKETS),
    TokenKind.INTERPOLATION_START: (TokenKind.RBRACE, NodeType.INTERPOLATION),
}

_CLOSERS = frozenset({TokenKind.RPAREN, TokenKind.RBRACKET, TokenKind.RBRACE})


def _is_punct(tok: Token, char: str) -> bool:
    return tok.kind == TokenKind.PUNCTUATION and tok.value == char


class _Parser:
    """Recursive descent parser over a token list."""

    def __init__(self, tokens: list[Token], source: str, file: Path) -> None:
        self.tokens = tokens
        self.source = source
        self.file = file
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 0) -> Token:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]  # EOF

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def expect(self, kind: TokenKind, what: str) -> Token:
        tok = self.current
        if tok.kind != kind:
            raise self.error(f"Expected {what}, got {_describe(tok)}", tok)
        return self.advance()

    def error(self, message: str, tok: Token) -> ParseError:
        return make_parse_error(
            message,
            self.file,
            tok.line,
            tok.column,
            snippet=make_snippet(self.source, tok.line),
        )

    @staticmethod
    def start_of(tok: Token) -> SourcePos:
        return SourcePos(cursor=tok.pos, line=tok.line, column=tok.column)

    def leaf(self) -> Leaf:
        tok = self.advance()
        return Leaf(type=tok.kind.value, value=tok.value, start=self.start_of(tok))

    # -- Statements --

    def parse_stylesheet(self) -> Branch:
        start = self.start_of(self.current)
        children = self.parse_statements(TokenKind.EOF)
        return Branch(type=NodeType.STYLESHEET, value=children, start=start)

    def parse_statements(self, closing: TokenKind) -> list[Node]:
        nodes: list[Node] = []
        while self.current.kind != closing:
            tok = self.current
            if tok.kind == TokenKind.EOF:
                raise self.error("Unclosed block: expected '}'", tok)
            if tok.kind in _TRIVIA_KINDS or _is_punct(tok, ";"):
                nodes.append(self.leaf())
            elif tok.kind in _CLOSERS:
                raise self.error(f"Unexpected {_describe(tok)}", tok)
            elif tok.kind == TokenKind.ATKEYWORD:
                nodes.append(self.parse_atrule())
            elif self.at_declaration():
                nodes.append(self.parse_declaration())
            else:
                nodes.append(self.parse_rule())
        return nodes

    def at_declaration(self) -> bool:
        """Look ahead to decide between a declaration and a rule."""
        if self.current.kind == TokenKind.VARIABLE:
            return True
        closers: list[TokenKind] = []
        idx = self.pos
        while idx < len(self.tokens):
            tok = self.tokens[idx]
            if tok.kind == TokenKind.EOF:
                return True
            if tok.kind in _GROUPS:
                closers.append(_GROUPS[tok.kind][0])
            elif closers and tok.kind == closers[-1]:
                closers.pop()
            elif not closers:
                if tok.kind == TokenKind.LBRACE:
                    return False
                if tok.kind == TokenKind.RBRACE or _is_punct(tok, ";"):
                    return True
            idx += 1
        return True

    def parse_atrule(self) -> Branch:
        start = self.start_of(self.current)
        children: list[Node] = [self.leaf()]
        children.extend(self.parse_components(self._ends_atrule_prelude))
        if self.current.kind == TokenKind.LBRACE:
            children.append(self.parse_block())
        return Branch(type=NodeType.ATRULE, value=children, start=start)

    def parse_declaration(self) -> Branch:
        start = self.start_of(self.current)

        if self.current.kind == TokenKind.VARIABLE:
            prop_start = self.start_of(self.current)
            prop_children: list[Node] = [self.leaf()]
        else:
            prop_start = start
            prop_children = self.parse_components(self._ends_property)
        children: list[Node] = [
            Branch(type=NodeType.PROPERTY, value=prop_children, start=prop_start)
        ]

        while self.current.kind in _TRIVIA_KINDS:
            children.append(self.leaf())

        if not _is_punct(self.current, ":"):
            raise self.error(f"Expected ':' in declaration, got {_describe(self.current)}", self.current)
        children.append(self.leaf())

        value_start = self.start_of(self.current)
        value_children = self.parse_components(self._ends_value)
        children.append(Branch(type=NodeType.VALUE, value=value_children, start=value_start))
        return Branch(type=NodeType.DECLARATION, value=children, start=start)

    def parse_rule(self) -> Branch:
        start = self.start_of(self.current)
        selector = Branch(
            type=NodeType.SELECTOR,
            value=self.parse_components(self._ends_selector),
            start=start,
        )
        if self.current.kind != TokenKind.LBRACE:
            raise self.error(f"Expected '{{' after selector, got {_describe(self.current)}", self.current)
        return Branch(type=NodeType.RULE, value=[selector, self.parse_block()], start=start)

    def parse_block(self) -> Branch:
        start = self.start_of(self.current)
        self.expect(TokenKind.LBRACE, "'{'")
        children = self.parse_statements(TokenKind.RBRACE)
        self.expect(TokenKind.RBRACE, "'}'")
        return Branch(type=NodeType.BLOCK, value=children, start=start)

    # -- Stop conditions --

    @staticmethod
    def _ends_atrule_prelude(tok: Token) -> bool:
        return tok.kind in (TokenKind.LBRACE, TokenKind.RBRACE, TokenKind.EOF) or _is_punct(tok, ";")

    @staticmethod
    def _ends_property(tok: Token) -> bool:
        return (
            tok.kind in _TRIVIA_KINDS
            or tok.kind in (TokenKind.RBRACE, TokenKind.EOF)
            or _is_punct(tok, ":")
            or _is_punct(tok, ";")
        )

    @staticmethod
    def _ends_value(tok: Token) -> bool:
        return tok.kind in (TokenKind.RBRACE, TokenKind.EOF) or _is_punct(tok, ";")

    @staticmethod
    def _ends_selector(tok: Token) -> bool:
        return tok.kind in (TokenKind.LBRACE, TokenKind.EOF) or _is_punct(tok, ";")

    # -- Components --

    def parse_components(self, stop: Callable[[Token], bool]) -> list[Node]:
        nodes: list[Node] = []
        while not stop(self.current):
            nodes.append(self.parse_component())
        return nodes

    def parse_component(self) -> Node:
        tok = self.current
        if tok.kind in _GROUPS:
            closing, node_type = _GROUPS[tok.kind]
            return self.parse_group(closing, node_type)
        if tok.kind == TokenKind.IDENTIFIER and self.peek(1).kind == TokenKind.LPAREN:
            return self.parse_function()
        if tok.kind in _CLOSERS or tok.kind == TokenKind.LBRACE:
            raise self.error(f"Unexpected {_describe(tok)}", tok)
        if tok.kind == TokenKind.EOF:
            raise self.error("Unexpected end of input", tok)
        return self.leaf()

    def parse_group(self, closing: TokenKind, node_type: NodeType) -> Branch:
        opener = self.advance()
        children: list[Node] = []
        while self.current.kind != closing:
            if self.current.kind == TokenKind.EOF:
                raise self.error(f"Unclosed {_describe(opener)}", opener)
            children.append(self.parse_component())
        self.advance()
        return Branch(type=node_type, value=children, start=self.start_of(opener))

    def parse_function(self) -> Branch:
        start = self.start_of(self.current)
        name = self.leaf()
        arguments = self.parse_group(TokenKind.RPAREN, NodeType.ARGUMENTS)
        return Branch(type=NodeType.FUNCTION, value=[name, arguments], start=start)


def _describe(tok: Token) -> str:
    if tok.kind == TokenKind.EOF:
        return "end of input"
    return f"{tok.value!r}"


def parse(source: str, file: Path | None = None) -> Branch:
    """Parse SCSS source into a ``stylesheet`` node.

    Args:
        source: Stylesheet text.
        file: Source path, used only for error locations.

    Raises:
        ParseError: On malformed syntax.
    """
    file = file or Path("<input>")
    tokens = tokenize(source, file)
    return _Parser(tokens, source, file).parse_stylesheet()
