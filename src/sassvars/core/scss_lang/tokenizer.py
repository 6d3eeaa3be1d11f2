"""
Tokenizer for SCSS source.

Converts stylesheet text into a lossless sequence of typed tokens:
concatenating the printed form of every token reproduces the input.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from enum import StrEnum
from pathlib import Path

from sassvars.core.errors import ParseError, make_parse_error, make_snippet


class TokenKind(StrEnum):
    """Token types for SCSS source. Leaf kinds share names with node types."""

    # Trivia
    SPACE = "space"
    COMMENT_MULTILINE = "comment_multiline"
    COMMENT_SINGLELINE = "comment_singleline"

    # Literals
    STRING_DOUBLE = "string_double"
    STRING_SINGLE = "string_single"
    NUMBER = "number"
    COLOR_HEX = "color_hex"
    URL = "url"

    # Names
    ID = "id"
    VARIABLE = "variable"
    ATKEYWORD = "atkeyword"
    IDENTIFIER = "identifier"

    # Symbols
    OPERATOR = "operator"
    PUNCTUATION = "punctuation"

    # Grouping
    INTERPOLATION_START = "interpolation_start"  # #{
    LBRACE = "lbrace"
    RBRACE = "rbrace"
    LPAREN = "lparen"
    RPAREN = "rparen"
    LBRACKET = "lbracket"
    RBRACKET = "rbracket"

    # End of input
    EOF = "eof"


class Token:
    """A single token with its source location."""

    __slots__ = ("kind", "value", "pos", "line", "column")

    def __init__(self, kind: TokenKind, value: str, pos: int, line: int, column: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos
        self.line = line
        self.column = column

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, {self.line}:{self.column})"


_SPACE_RE = re.compile(r"[ \t\r\n\f]+")
_NUMBER_RE = re.compile(r"(?:\d+(?:\.\d+)?|\.\d+)(?:[eE][+-]?\d+)?")
# Identifier: optional leading dashes, a name-start char, then name chars.
# Non-ASCII characters and backslash escapes are allowed anywhere.
_NAME_CHARS = r"(?:[a-zA-Z0-9_\-]|[^\x00-\x7f]|\\.)"
_IDENT_RE = re.compile(r"-*(?:[a-zA-Z_]|[^\x00-\x7f]|\\.)" + _NAME_CHARS + "*")
_HASH_NAME_RE = re.compile(_NAME_CHARS + "+")
_HEX_COLOR_RE = re.compile(r"[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8}")

_TWO_CHAR_OPERATORS = frozenset({"==", "!=", "<=", ">="})
_OPERATOR_CHARS = frozenset("+-*/%=!<>&~|^?.")
_PUNCTUATION_CHARS = frozenset(",;:")
_GROUPING: dict[str, TokenKind] = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
}


class _Scanner:
    """Cursor over the source text with line/column lookup."""

    def __init__(self, source: str, file: Path) -> None:
        self.source = source
        self.file = file
        self.tokens: list[Token] = []
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", source)]

    def location(self, pos: int) -> tuple[int, int]:
        line = bisect_right(self._line_starts, pos)
        return line, pos - self._line_starts[line - 1] + 1

    def emit(self, kind: TokenKind, value: str, pos: int) -> None:
        line, column = self.location(pos)
        self.tokens.append(Token(kind, value, pos, line, column))

    def error(self, message: str, pos: int) -> ParseError:
        line, column = self.location(pos)
        return make_parse_error(
            message, self.file, line, column, snippet=make_snippet(self.source, line)
        )


def tokenize(source: str, file: Path | None = None) -> list[Token]:
    """Tokenize SCSS source into a list of tokens ending with EOF."""
    scanner = _Scanner(source, file or Path("<input>"))
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        m = _SPACE_RE.match(source, i)
        if m:
            scanner.emit(TokenKind.SPACE, m.group(0), i)
            i = m.end()
            continue

        if source.startswith("/*", i):
            end = source.find("*/", i + 2)
            if end == -1:
                raise scanner.error("Unterminated comment", i)
            scanner.emit(TokenKind.COMMENT_MULTILINE, source[i + 2 : end], i)
            i = end + 2
            continue

        if source.startswith("//", i):
            end = source.find("\n", i)
            end = n if end == -1 else end
            scanner.emit(TokenKind.COMMENT_SINGLELINE, source[i + 2 : end], i)
            i = end
            continue

        if c in ('"', "'"):
            i = _read_string(scanner, i)
            continue

        if source.startswith("#{", i):
            scanner.emit(TokenKind.INTERPOLATION_START, "#{", i)
            i += 2
            continue

        if c == "#":
            m = _HASH_NAME_RE.match(source, i + 1)
            if m:
                name = m.group(0)
                kind = TokenKind.COLOR_HEX if _HEX_COLOR_RE.fullmatch(name) else TokenKind.ID
                scanner.emit(kind, name, i)
                i = m.end()
                continue
            raise scanner.error("Unexpected character: '#'", i)

        if c in ("$", "@"):
            m = _IDENT_RE.match(source, i + 1)
            if m is None:
                raise scanner.error(f"Expected a name after {c!r}", i)
            kind = TokenKind.VARIABLE if c == "$" else TokenKind.ATKEYWORD
            scanner.emit(kind, m.group(0), i)
            i = m.end()
            continue

        m = _NUMBER_RE.match(source, i)
        if m:
            scanner.emit(TokenKind.NUMBER, m.group(0), i)
            i = m.end()
            continue

        m = _IDENT_RE.match(source, i)
        if m:
            end = m.end()
            raw_url = _match_raw_url(source, i, end)
            if raw_url is not None:
                scanner.emit(TokenKind.URL, raw_url, i)
                i += len(raw_url)
            else:
                scanner.emit(TokenKind.IDENTIFIER, m.group(0), i)
                i = end
            continue

        if c in _GROUPING:
            scanner.emit(_GROUPING[c], c, i)
            i += 1
            continue

        two = source[i : i + 2]
        if two in _TWO_CHAR_OPERATORS:
            scanner.emit(TokenKind.OPERATOR, two, i)
            i += 2
            continue

        if c in _OPERATOR_CHARS:
            scanner.emit(TokenKind.OPERATOR, c, i)
            i += 1
            continue

        if c in _PUNCTUATION_CHARS:
            scanner.emit(TokenKind.PUNCTUATION, c, i)
            i += 1
            continue

        raise scanner.error(f"Unexpected character: {c!r}", i)

    scanner.emit(TokenKind.EOF, "", n)
    return scanner.tokens


def _read_string(scanner: _Scanner, start: int) -> int:
    """Read a quoted string, keeping escapes verbatim. Returns the end offset."""
    source = scanner.source
    quote = source[start]
    i = start + 1
    n = len(source)

    while i < n:
        c = source[i]
        if c == "\\":
            i += 2
            continue
        if c == quote:
            kind = TokenKind.STRING_DOUBLE if quote == '"' else TokenKind.STRING_SINGLE
            scanner.emit(kind, source[start + 1 : i], start)
            return i + 1
        i += 1

    raise scanner.error("Unterminated string literal", start)


def _match_raw_url(source: str, start: int, ident_end: int) -> str | None:
    """Return the raw ``url(...)`` text if the identifier opens an unquoted URL."""
    if source[start:ident_end].lower() != "url" or not source.startswith("(", ident_end):
        return None
    close = source.find(")", ident_end)
    if close == -1:
        return None
    content = source[ident_end + 1 : close]
    if any(marker in content for marker in ('"', "'", "$", "#{", "(")):
        return None
    return source[start : close + 1]
