"""Tests for the stylesheet tokenizer and parser."""

from __future__ import annotations

import gc

import pytest

from csslsp.lsp.parser import (
    TokenType,
    function_name,
    is_closed,
    parse_stylesheet,
    tokenize_stylesheet,
)
from csslsp.lsp.types import NodeKind, SyntaxNode, SyntaxTree


def _kinds(node: SyntaxNode) -> list[NodeKind]:
    return [child.kind for child in node.children]


def _only(tree: SyntaxTree, kind: NodeKind) -> SyntaxNode:
    nodes = [node for node in tree.root.walk() if node.kind == kind]
    assert len(nodes) == 1, nodes
    return nodes[0]


class TestTokenize:
    """Tests for tokenize_stylesheet function."""

    def test_simple_rule(self) -> None:
        tokens = tokenize_stylesheet("a{color:red}")
        assert [(t.type, t.text) for t in tokens] == [
            (TokenType.IDENT, "a"),
            (TokenType.DELIM, "{"),
            (TokenType.IDENT, "color"),
            (TokenType.DELIM, ":"),
            (TokenType.IDENT, "red"),
            (TokenType.DELIM, "}"),
        ]

    def test_offsets_match_text(self) -> None:
        text = "body { margin: 10px 5% }"
        for token in tokenize_stylesheet(text):
            assert text[token.start : token.end] == token.text

    @pytest.mark.parametrize("text", ["10", "10px", "1.5em", "-2rem", ".5s", "50%"])
    def test_numbers(self, text: str) -> None:
        tokens = tokenize_stylesheet(text)
        assert [(t.type, t.text) for t in tokens] == [(TokenType.NUMBER, text)]

    def test_function_token_includes_paren(self) -> None:
        tokens = tokenize_stylesheet("rgb(")
        assert tokens[0].type == TokenType.FUNCTION
        assert tokens[0].text == "rgb"
        assert tokens[0].end == 4

    def test_custom_property_is_ident(self) -> None:
        tokens = tokenize_stylesheet("--main-color")
        assert [(t.type, t.text) for t in tokens] == [
            (TokenType.IDENT, "--main-color")
        ]

    def test_at_keyword_and_hash(self) -> None:
        tokens = tokenize_stylesheet("@media #fff")
        assert tokens[0].type == TokenType.AT_KEYWORD
        assert tokens[0].text == "@media"
        assert tokens[2].type == TokenType.HASH
        assert tokens[2].text == "#fff"

    def test_comment_is_one_token(self) -> None:
        tokens = tokenize_stylesheet("/* a { */b")
        assert [(t.type, t.text) for t in tokens] == [
            (TokenType.COMMENT, "/* a { */"),
            (TokenType.IDENT, "b"),
        ]

    def test_unterminated_comment(self) -> None:
        tokens = tokenize_stylesheet("a /* never closed")
        assert tokens[-1] == (TokenType.COMMENT, "/* never closed", 2, 17)

    def test_strings(self) -> None:
        tokens = tokenize_stylesheet("'a;b' \"c\"")
        strings = [t.text for t in tokens if t.type == TokenType.STRING]
        assert strings == ["'a;b'", '"c"']


class TestParseRuleset:
    """Tests for rulesets and declarations."""

    def test_ruleset_structure(self) -> None:
        tree = parse_stylesheet("body { color: red; }")
        root = tree.root
        assert root.kind == NodeKind.STYLESHEET
        assert (root.start, root.end) == (0, 20)
        assert _kinds(root) == [NodeKind.RULESET]

        ruleset = root.children[0]
        assert _kinds(ruleset) == [NodeKind.SELECTOR, NodeKind.BLOCK]
        assert tree.text_of(ruleset.children[0]) == "body"

        block = ruleset.children[1]
        assert (block.start, block.end) == (5, 20)
        assert _kinds(block) == [NodeKind.DECLARATION]

    def test_declaration_ranges(self) -> None:
        tree = parse_stylesheet("body { color: red; }")
        declaration = _only(tree, NodeKind.DECLARATION)
        prop = declaration.find_child(NodeKind.PROPERTY)
        value = declaration.find_child(NodeKind.VALUE)
        assert prop is not None and value is not None

        assert tree.text_of(prop) == "color"
        assert tree.text_of(value) == " red"
        assert tree.text_of(declaration) == "color: red;"
        assert _kinds(value) == [NodeKind.IDENTIFIER]

    def test_value_term_kinds(self) -> None:
        tree = parse_stylesheet("a { x: 10px #fff 'f' auto; }")
        value = _only(tree, NodeKind.VALUE)
        assert _kinds(value) == [
            NodeKind.NUMERIC_LITERAL,
            NodeKind.HASH,
            NodeKind.STRING,
            NodeKind.IDENTIFIER,
        ]

    def test_declaration_without_colon(self) -> None:
        tree = parse_stylesheet("body { col")
        declaration = _only(tree, NodeKind.DECLARATION)
        assert _kinds(declaration) == [NodeKind.PROPERTY]
        assert tree.text_of(declaration) == "col"

    def test_unclosed_block_runs_to_end(self) -> None:
        text = "body { color: "
        tree = parse_stylesheet(text)
        block = _only(tree, NodeKind.BLOCK)
        value = _only(tree, NodeKind.VALUE)
        assert block.end == len(text)
        assert value.end == len(text)
        assert not is_closed(tree, block, "}")

    def test_closed_block(self) -> None:
        tree = parse_stylesheet("a { }")
        assert is_closed(tree, _only(tree, NodeKind.BLOCK), "}")

    def test_multiple_rulesets(self) -> None:
        tree = parse_stylesheet(".foo { color: red; } .bar { color: blue; }")
        selectors = [
            tree.text_of(node)
            for node in tree.root.walk()
            if node.kind == NodeKind.SELECTOR
        ]
        assert selectors == [".foo", ".bar"]

    def test_comment_inside_block(self) -> None:
        tree = parse_stylesheet("a { /* color: red; */ margin: 0 }")
        declaration = _only(tree, NodeKind.DECLARATION)
        prop = declaration.find_child(NodeKind.PROPERTY)
        assert prop is not None
        assert tree.text_of(prop) == "margin"

    def test_comment_spans(self) -> None:
        text = "/* head */ a { color: /* mid */ red } /* tail"
        tree = parse_stylesheet(text)
        assert [c.text for c in tree.comments] == [
            "/* head */",
            "/* mid */",
            "/* tail",
        ]
        for comment in tree.comments:
            assert text[comment.start : comment.end] == comment.text
        value = _only(tree, NodeKind.VALUE)
        assert [tree.text_of(c) for c in value.children] == ["red"]


class TestParseAtRules:
    """Tests for at-rules."""

    def test_statement_at_rule(self) -> None:
        tree = parse_stylesheet('@import "theme.css"; a {}')
        at_rule = tree.root.children[0]
        assert at_rule.kind == NodeKind.AT_RULE
        assert tree.text_of(at_rule) == '@import "theme.css";'
        assert _kinds(at_rule) == [NodeKind.IDENTIFIER]
        assert tree.root.children[1].kind == NodeKind.RULESET

    def test_conditional_at_rule_holds_rules(self) -> None:
        tree = parse_stylesheet("@media screen { a { color: red } }")
        at_rule = tree.root.children[0]
        assert _kinds(at_rule) == [NodeKind.IDENTIFIER, NodeKind.BLOCK]
        name = at_rule.children[0]
        assert tree.text_of(name) == "@media"

        block = at_rule.children[1]
        assert _kinds(block) == [NodeKind.RULESET]
        assert _only(tree, NodeKind.DECLARATION).parent is not None

    def test_at_rule_with_declarations(self) -> None:
        tree = parse_stylesheet("@font-face { font-family: x; }")
        block = _only(tree, NodeKind.BLOCK)
        assert _kinds(block) == [NodeKind.DECLARATION]

    def test_bare_at_keyword(self) -> None:
        tree = parse_stylesheet("@")
        at_rule = tree.root.children[0]
        assert at_rule.kind == NodeKind.AT_RULE
        assert (at_rule.start, at_rule.end) == (0, 1)


class TestParseFunctions:
    """Tests for function calls in values."""

    def test_closed_function(self) -> None:
        tree = parse_stylesheet("a { color: rgb(1, 2, 3) }")
        function = _only(tree, NodeKind.FUNCTION_CALL)
        assert tree.text_of(function) == "rgb(1, 2, 3)"
        assert function_name(tree, function) == "rgb"
        assert is_closed(tree, function, ")")
        assert _kinds(function) == [NodeKind.NUMERIC_LITERAL] * 3

    def test_unclosed_function(self) -> None:
        text = "a { color: var(--x"
        tree = parse_stylesheet(text)
        function = _only(tree, NodeKind.FUNCTION_CALL)
        assert function.end == len(text)
        assert not is_closed(tree, function, ")")
        assert _kinds(function) == [NodeKind.IDENTIFIER]

    def test_nested_functions(self) -> None:
        tree = parse_stylesheet("a { width: calc(var(--w) + 1px) }")
        outer, inner = [
            node for node in tree.root.walk() if node.kind == NodeKind.FUNCTION_CALL
        ]
        assert function_name(tree, outer) == "calc"
        assert function_name(tree, inner) == "var"
        assert inner.parent is outer


class TestSyntaxNode:
    """Tests for node navigation."""

    def test_parent_links(self) -> None:
        tree = parse_stylesheet("body { color: red; }")
        value = _only(tree, NodeKind.VALUE)
        declaration = value.parent
        assert declaration is not None
        assert declaration.kind == NodeKind.DECLARATION
        assert tree.root.parent is None

    def test_parent_link_does_not_keep_parent_alive(self) -> None:
        parent = SyntaxNode(NodeKind.BLOCK, 0, 10)
        child = parent.add_child(SyntaxNode(NodeKind.DECLARATION, 1, 5))
        del parent
        gc.collect()
        assert child.parent is None

    def test_contains_is_inclusive(self) -> None:
        node = SyntaxNode(NodeKind.IDENTIFIER, 3, 6)
        assert node.contains(3)
        assert node.contains(6)
        assert not node.contains(2)
        assert not node.contains(7)

    def test_walk_in_document_order(self) -> None:
        tree = parse_stylesheet("a { b: c; } d { }")
        starts = [node.start for node in tree.root.walk()]
        assert starts == sorted(starts)


class TestParseTolerance:
    """The parser never raises and always yields a tree over the whole text."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "}",
            "{",
            ";;;",
            "@",
            "#",
            "a { : }",
            "a { b c d }",
            "a { color: ; }",
            "a { color: rgb(1, 2",
            "'unterminated",
            "a { b { c: d } }",
            "@media { @media { a { b: (c",
        ],
    )
    def test_never_raises(self, text: str) -> None:
        tree = parse_stylesheet(text)
        assert tree.source == text
        assert (tree.root.start, tree.root.end) == (0, len(text))
        for node in tree.root.walk():
            assert 0 <= node.start <= node.end <= len(text)
