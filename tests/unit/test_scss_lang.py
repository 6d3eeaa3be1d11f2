"""Tests for the SCSS tokenizer, parser, printer, and tree queries.

Covers:
- Tokenizer: token kinds, locations, errors
- Parser: declarations vs rules, at-rules, nested groups, error handling
- Printer: lossless round-trip of parsed source
- Queries: child selection, document-order search, replacement
"""

from __future__ import annotations

from pathlib import Path

import pytest

from sassvars.core.errors import ParseError
from sassvars.core.ir.nodes import Branch, Leaf, NodeType
from sassvars.core.scss_lang import (
    TokenKind,
    children,
    find_all,
    first_child,
    parse,
    replace_child,
    stringify,
    tokenize,
)

# ============================================================================
# Tokenizer tests
# ============================================================================


class TestTokenizer:
    """Tokenizer produces correct token sequences."""

    def _kinds(self, source: str) -> list[TokenKind]:
        return [t.kind for t in tokenize(source) if t.kind != TokenKind.SPACE]

    def test_variable_declaration(self) -> None:
        tokens = tokenize("$x: 1;")
        assert [t.kind for t in tokens] == [
            TokenKind.VARIABLE,
            TokenKind.PUNCTUATION,
            TokenKind.SPACE,
            TokenKind.NUMBER,
            TokenKind.PUNCTUATION,
            TokenKind.EOF,
        ]
        assert tokens[0].value == "x"

    def test_hyphenated_variable(self) -> None:
        tokens = tokenize("$imported-var")
        assert tokens[0].kind == TokenKind.VARIABLE
        assert tokens[0].value == "imported-var"

    def test_number_and_unit(self) -> None:
        tokens = tokenize("1.5em")
        assert tokens[0].kind == TokenKind.NUMBER
        assert tokens[0].value == "1.5"
        assert tokens[1].kind == TokenKind.IDENTIFIER
        assert tokens[1].value == "em"

    def test_strings_keep_escapes(self) -> None:
        tokens = tokenize(r'"a\"b" ' + "'c'")
        assert tokens[0].kind == TokenKind.STRING_DOUBLE
        assert tokens[0].value == r"a\"b"
        assert tokens[2].kind == TokenKind.STRING_SINGLE
        assert tokens[2].value == "c"

    def test_hex_color_vs_id(self) -> None:
        tokens = tokenize("#fff #header")
        assert tokens[0].kind == TokenKind.COLOR_HEX
        assert tokens[2].kind == TokenKind.ID
        assert tokens[2].value == "header"

    def test_comments(self) -> None:
        tokens = tokenize("/* a */// b\n")
        assert tokens[0].kind == TokenKind.COMMENT_MULTILINE
        assert tokens[0].value == " a "
        assert tokens[1].kind == TokenKind.COMMENT_SINGLELINE
        assert tokens[1].value == " b"

    def test_atkeyword(self) -> None:
        tokens = tokenize("@import")
        assert tokens[0].kind == TokenKind.ATKEYWORD
        assert tokens[0].value == "import"

    def test_operators(self) -> None:
        assert self._kinds("== != <= >= + - * / % !") == [TokenKind.OPERATOR] * 10 + [
            TokenKind.EOF
        ]

    def test_negative_number_is_operator_then_number(self) -> None:
        assert self._kinds("-1") == [TokenKind.OPERATOR, TokenKind.NUMBER, TokenKind.EOF]

    def test_vendor_identifier(self) -> None:
        tokens = tokenize("-webkit-box")
        assert tokens[0].kind == TokenKind.IDENTIFIER
        assert tokens[0].value == "-webkit-box"

    def test_raw_url(self) -> None:
        tokens = tokenize("url(http://example.com/a.png)")
        assert tokens[0].kind == TokenKind.URL
        assert tokens[0].value == "url(http://example.com/a.png)"

    def test_quoted_url_is_function_call(self) -> None:
        assert self._kinds('url("a.png")')[:3] == [
            TokenKind.IDENTIFIER,
            TokenKind.LPAREN,
            TokenKind.STRING_DOUBLE,
        ]

    def test_interpolation_start(self) -> None:
        assert self._kinds("#{$a}") == [
            TokenKind.INTERPOLATION_START,
            TokenKind.VARIABLE,
            TokenKind.RBRACE,
            TokenKind.EOF,
        ]

    def test_locations(self) -> None:
        tokens = tokenize("$a: 1;\n  $b: 2;")
        b = next(t for t in tokens if t.value == "b")
        assert (b.line, b.column) == (2, 3)

    def test_unterminated_string(self) -> None:
        with pytest.raises(ParseError, match="Unterminated string"):
            tokenize('$a: "oops;')

    def test_unterminated_comment(self) -> None:
        with pytest.raises(ParseError, match="Unterminated comment"):
            tokenize("/* never closed")

    def test_unexpected_character(self) -> None:
        with pytest.raises(ParseError, match="Unexpected character"):
            tokenize("$a: `x`;")


# ============================================================================
# Parser tests
# ============================================================================


class TestParser:
    """Parser builds the expected node structure."""

    def test_variable_declaration_shape(self) -> None:
        tree = parse("$x: 1 + 2;")
        assert tree.type == NodeType.STYLESHEET
        decl = tree.value[0]
        assert decl.type == NodeType.DECLARATION
        prop = first_child(decl, NodeType.PROPERTY)
        variable = first_child(prop, NodeType.VARIABLE)
        assert isinstance(variable, Leaf)
        assert variable.value == "x"
        value = first_child(decl, NodeType.VALUE)
        assert [n.type for n in value.value] == [
            NodeType.SPACE,
            NodeType.NUMBER,
            NodeType.SPACE,
            NodeType.OPERATOR,
            NodeType.SPACE,
            NodeType.NUMBER,
        ]
        assert tree.value[1].type == NodeType.PUNCTUATION
        assert tree.value[1].value == ";"

    def test_plain_declaration_has_no_variable(self) -> None:
        tree = parse("a { color: red; }")
        rule = tree.value[0]
        assert rule.type == NodeType.RULE
        block = first_child(rule, NodeType.BLOCK)
        decl = first_child(block, NodeType.DECLARATION)
        prop = first_child(decl, NodeType.PROPERTY)
        assert first_child(prop, NodeType.VARIABLE) is None
        assert first_child(prop, NodeType.IDENTIFIER).value == "color"

    def test_top_level_plain_declaration(self) -> None:
        tree = parse("color: red;")
        assert tree.value[0].type == NodeType.DECLARATION

    def test_pseudo_selector_is_rule(self) -> None:
        tree = parse("a:hover { color: blue }")
        assert tree.value[0].type == NodeType.RULE
        selector = first_child(tree.value[0], NodeType.SELECTOR)
        assert stringify(selector) == "a:hover "

    def test_last_declaration_without_semicolon(self) -> None:
        tree = parse("a { color: blue }")
        block = first_child(tree.value[0], NodeType.BLOCK)
        decl = first_child(block, NodeType.DECLARATION)
        assert stringify(first_child(decl, NodeType.VALUE)) == " blue "

    def test_function_call(self) -> None:
        tree = parse("$c: rgba(1, 2, 3, 0.5);")
        value = first_child(tree.value[0], NodeType.VALUE)
        func = first_child(value, NodeType.FUNCTION)
        assert func is not None
        assert first_child(func, NodeType.IDENTIFIER).value == "rgba"
        args = first_child(func, NodeType.ARGUMENTS)
        assert len(children(args, NodeType.NUMBER)) == 4

    def test_map_value(self) -> None:
        tree = parse("$m: (a: 1, b: (c: 2));")
        value = first_child(tree.value[0], NodeType.VALUE)
        outer = first_child(value, NodeType.PARENTHESES)
        assert first_child(outer, NodeType.PARENTHESES) is not None

    def test_import_atrule(self) -> None:
        tree = parse('@import "other";')
        atrule = tree.value[0]
        assert atrule.type == NodeType.ATRULE
        assert first_child(atrule, NodeType.ATKEYWORD).value == "import"
        assert first_child(atrule, NodeType.STRING_DOUBLE).value == "other"

    def test_atrule_with_block(self) -> None:
        tree = parse("@mixin m($a: 1) { width: $a; }")
        atrule = tree.value[0]
        block = first_child(atrule, NodeType.BLOCK)
        assert first_child(block, NodeType.DECLARATION) is not None
        # Default arguments are not declarations
        assert len(list(find_all(tree, NodeType.DECLARATION))) == 1

    def test_interpolated_property(self) -> None:
        tree = parse("a { #{$side}-width: 1px; }")
        decls = list(find_all(tree, NodeType.DECLARATION))
        assert len(decls) == 1
        prop = first_child(decls[0], NodeType.PROPERTY)
        assert first_child(prop, NodeType.INTERPOLATION) is not None

    def test_flags_stay_in_value(self) -> None:
        tree = parse("$a: 1 !default;")
        value = first_child(tree.value[0], NodeType.VALUE)
        assert stringify(value) == " 1 !default"

    def test_start_positions(self) -> None:
        tree = parse("\n$a: 1;")
        decl = tree.value[1]
        assert decl.start is not None
        assert (decl.start.line, decl.start.column) == (2, 1)

    def test_unclosed_block(self) -> None:
        with pytest.raises(ParseError, match="Unclosed block"):
            parse("a { color: red;")

    def test_stray_closing_brace(self) -> None:
        with pytest.raises(ParseError, match="Unexpected '}'"):
            parse("$a: 1; }")

    def test_unclosed_parenthesis(self) -> None:
        with pytest.raises(ParseError, match=r"Unclosed '\('"):
            parse("$a: (1, 2;")

    def test_missing_colon(self) -> None:
        with pytest.raises(ParseError, match="Expected ':'"):
            parse("$a 1;")

    def test_error_location(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("$a: 1;\n$b: (2;", file=Path("theme.scss"))
        context = exc_info.value.context
        assert context is not None
        assert context.file == Path("theme.scss")
        assert (context.line, context.column) == (2, 5)
        assert "theme.scss:2:5" in str(exc_info.value)


# ============================================================================
# Printer tests
# ============================================================================


SAMPLE = """\
@use "sass:math";
@import 'base', "theme";
// Palette
$primary: #ff0000 !default;
$secondary: darken($primary, 10%);
$sizes: (small: 10px, large: math.div(40px, 2));
$list: [a b c];
/* Layout */
.card > .title:not(.muted), #main::before {
  color: $primary;
  &:hover { background: url(data:image/png;base64,AAA=); }
  margin: -$gap auto;
  #{$side}-width: 1px !important;
}
@media (min-width: 10px) and (max-width: 20px) {
  a { b: c }
}
@each $name, $size in $sizes {
  .#{$name} { font-size: $size * 1.5; }
}
@function double($n) { @return $n * 2; }
"""


class TestPrinter:
    """stringify is the exact inverse of parse."""

    def test_round_trip_sample(self) -> None:
        assert stringify(parse(SAMPLE)) == SAMPLE

    @pytest.mark.parametrize(
        "source",
        [
            "",
            "   \n",
            "$x:1",
            "$x : 1 ;",
            "a{b:c}",
            "$s: 'it\\'s';",
            "$e: 1e3 + .5;",
            "@charset \"UTF-8\";\n",
            "%placeholder { x: y } .a { @extend %placeholder; }",
        ],
    )
    def test_round_trip_small(self, source: str) -> None:
        assert stringify(parse(source)) == source

    def test_prints_constructed_nodes(self) -> None:
        node = Branch(
            type=NodeType.FUNCTION,
            value=[
                Leaf(type=NodeType.IDENTIFIER, value="f"),
                Branch(
                    type=NodeType.ARGUMENTS,
                    value=[
                        Leaf(type=NodeType.STRING_DOUBLE, value="x"),
                        Leaf(type=NodeType.PUNCTUATION, value=","),
                        Leaf(type=NodeType.VARIABLE, value="y"),
                    ],
                ),
            ],
        )
        assert stringify(node) == 'f("x",$y)'


# ============================================================================
# Query tests
# ============================================================================


class TestQuery:
    """Tree queries select and replace nodes."""

    def test_children_filters_direct_children(self) -> None:
        tree = parse("$a: 1; a { $b: 2; }")
        assert len(children(tree, NodeType.DECLARATION)) == 1
        assert len(children(tree)) == len(tree.value)

    def test_find_all_document_order(self) -> None:
        tree = parse("$a: 1; a { $b: 2; c { $d: 3; } } $e: 4;")
        names = [
            first_child(first_child(d, NodeType.PROPERTY), NodeType.VARIABLE).value
            for d in find_all(tree, NodeType.DECLARATION)
        ]
        assert names == ["a", "b", "d", "e"]

    def test_first_child_missing(self) -> None:
        leaf = Leaf(type=NodeType.NUMBER, value="1")
        assert first_child(leaf, NodeType.NUMBER) is None
        assert children(leaf) == []

    def test_replace_child(self) -> None:
        tree = parse("$a: 1;")
        decl = tree.value[0]
        new = Leaf(type=NodeType.IDENTIFIER, value="x")
        assert replace_child(tree, decl, new) == 0
        assert tree.value[0] is new

    def test_replace_child_not_found(self) -> None:
        tree = parse("$a: 1;")
        stranger = Leaf(type=NodeType.NUMBER, value="1")
        with pytest.raises(ValueError):
            replace_child(tree, stranger, stranger)
