"""Tolerant stylesheet parser for CSS completion.

Scans the text into tokens and builds a SyntaxTree of rulesets, at-rules,
declarations and value terms. Never raises: unfinished input (an open
block, a declaration without a value, an unclosed function) is closed at
the end of the text.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from csslsp.css.selectors import RULE_LIST_AT_RULES
from csslsp.lsp.types import NodeKind, SyntaxNode, SyntaxTree, TokenSpan


class TokenType(str, Enum):
    IDENT = "ident"
    FUNCTION = "function"  # ident immediately followed by "("
    AT_KEYWORD = "at-keyword"
    HASH = "hash"
    NUMBER = "number"  # includes dimensions and percentages
    STRING = "string"
    COMMENT = "comment"
    DELIM = "delim"
    WHITESPACE = "whitespace"


class Token(NamedTuple):
    type: TokenType
    text: str
    start: int
    end: int


def _is_name_char(char: str) -> bool:
    return char.isalnum() or char in "-_" or ord(char) > 127


def _is_name_start(text: str, i: int) -> bool:
    char = text[i]
    if char.isalpha() or char == "_" or ord(char) > 127:
        return True
    if char == "-" and i + 1 < len(text):
        nxt = text[i + 1]
        return nxt.isalpha() or nxt in "-_" or ord(nxt) > 127
    return False


def _is_number_start(text: str, i: int) -> bool:
    n = len(text)
    char = text[i]
    if char.isdigit():
        return True
    if char == "." and i + 1 < n and text[i + 1].isdigit():
        return True
    if char in "+-" and i + 1 < n:
        if text[i + 1].isdigit():
            return True
        return text[i + 1] == "." and i + 2 < n and text[i + 2].isdigit()
    return False


def tokenize_stylesheet(text: str) -> list[Token]:
    """
    Split stylesheet text into tokens. An unterminated comment or string
    runs to the end of the text (strings also stop at a newline).

    Args:
        text: The full document text.

    Returns:
        List of Token with offsets into ``text``.
    """
    tokens: list[Token] = []
    i = 0
    n = len(text)

    while i < n:
        start = i
        char = text[i]

        if char.isspace():
            while i < n and text[i].isspace():
                i += 1
            tokens.append(Token(TokenType.WHITESPACE, text[start:i], start, i))
        elif char == "/" and i + 1 < n and text[i + 1] == "*":
            end = text.find("*/", i + 2)
            i = n if end < 0 else end + 2
            tokens.append(Token(TokenType.COMMENT, text[start:i], start, i))
        elif char in "\"'":
            i += 1
            while i < n and text[i] != char and text[i] != "\n":
                if text[i] == "\\" and i + 1 < n:
                    i += 1
                i += 1
            if i < n and text[i] == char:
                i += 1
            tokens.append(Token(TokenType.STRING, text[start:i], start, i))
        elif char in "@#":
            i += 1
            while i < n and _is_name_char(text[i]):
                i += 1
            token_type = TokenType.AT_KEYWORD if char == "@" else TokenType.HASH
            tokens.append(Token(token_type, text[start:i], start, i))
        elif _is_number_start(text, i):
            i += 1
            while i < n and text[i].isdigit():
                i += 1
            if i + 1 < n and text[i] == "." and text[i + 1].isdigit():
                i += 1
                while i < n and text[i].isdigit():
                    i += 1
            if i < n and text[i] == "%":
                i += 1
            elif i < n and _is_name_start(text, i):
                while i < n and _is_name_char(text[i]):
                    i += 1
            tokens.append(Token(TokenType.NUMBER, text[start:i], start, i))
        elif _is_name_start(text, i):
            while i < n and _is_name_char(text[i]):
                i += 1
            if i < n and text[i] == "(":
                tokens.append(Token(TokenType.FUNCTION, text[start:i], start, i + 1))
                i += 1
            else:
                tokens.append(Token(TokenType.IDENT, text[start:i], start, i))
        else:
            i += 1
            tokens.append(Token(TokenType.DELIM, char, start, i))

    return tokens


_TRIVIA = frozenset({TokenType.WHITESPACE, TokenType.COMMENT})


def _is_delim(token: Token | None, chars: str) -> bool:
    return token is not None and token.type == TokenType.DELIM and token.text in chars


class _StylesheetParser:
    """Recursive descent over the token list."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._tokens = tokenize_stylesheet(text)
        self._pos = 0

    @property
    def comments(self) -> tuple[TokenSpan, ...]:
        return tuple(
            TokenSpan(text=token.text, start=token.start, end=token.end)
            for token in self._tokens
            if token.type == TokenType.COMMENT
        )

    def parse(self) -> SyntaxNode:
        root = SyntaxNode(NodeKind.STYLESHEET, 0, len(self._text))
        self._parse_rule_list(root, nested=False)
        return root

    # Token cursor

    def _peek(self) -> Token | None:
        """Next token that is not whitespace or a comment, without consuming it."""
        while self._pos < len(self._tokens):
            token = self._tokens[self._pos]
            if token.type not in _TRIVIA:
                return token
            self._pos += 1
        return None

    def _next(self) -> Token:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    # Rules

    def _parse_rule_list(self, parent: SyntaxNode, *, nested: bool) -> None:
        while True:
            token = self._peek()
            if token is None:
                return
            if _is_delim(token, "}"):
                if nested:
                    return
                self._next()  # stray
            elif _is_delim(token, ";"):
                self._next()
            elif token.type == TokenType.AT_KEYWORD:
                parent.add_child(self._parse_at_rule())
            else:
                parent.add_child(self._parse_ruleset())

    def _parse_ruleset(self) -> SyntaxNode:
        first = self._peek()
        assert first is not None
        ruleset = SyntaxNode(NodeKind.RULESET, first.start, first.start)
        selector = SyntaxNode(NodeKind.SELECTOR, first.start, first.start)

        while True:
            token = self._peek()
            if token is None or _is_delim(token, "{};"):
                break
            selector.end = self._next().end

        ruleset.add_child(selector)
        ruleset.end = selector.end

        token = self._peek()
        if _is_delim(token, "{"):
            block = ruleset.add_child(self._parse_declaration_block())
            ruleset.end = block.end
        elif _is_delim(token, ";") and token is not None:
            self._next()
        return ruleset

    def _parse_at_rule(self) -> SyntaxNode:
        keyword = self._next()
        at_rule = SyntaxNode(NodeKind.AT_RULE, keyword.start, keyword.end)
        at_rule.add_child(SyntaxNode(NodeKind.IDENTIFIER, keyword.start, keyword.end))

        while True:
            token = self._peek()
            if token is None or _is_delim(token, "{};"):
                break
            at_rule.end = self._next().end

        token = self._peek()
        if token is None or _is_delim(token, "}"):
            return at_rule
        if _is_delim(token, ";"):
            at_rule.end = self._next().end
            return at_rule

        if keyword.text.lower() in RULE_LIST_AT_RULES:
            block = self._parse_rule_block()
        else:
            block = self._parse_declaration_block()
        at_rule.add_child(block)
        at_rule.end = block.end
        return at_rule

    def _parse_rule_block(self) -> SyntaxNode:
        opening = self._next()
        block = SyntaxNode(NodeKind.BLOCK, opening.start, len(self._text))
        self._parse_rule_list(block, nested=True)
        self._close_block(block)
        return block

    def _parse_declaration_block(self) -> SyntaxNode:
        opening = self._next()
        block = SyntaxNode(NodeKind.BLOCK, opening.start, len(self._text))

        while True:
            token = self._peek()
            if token is None or _is_delim(token, "}"):
                break
            if _is_delim(token, ";"):
                self._next()
            elif token.type == TokenType.IDENT:
                block.add_child(self._parse_declaration())
            elif token.type == TokenType.AT_KEYWORD:
                block.add_child(self._parse_at_rule())
            elif self._starts_nested_rule():
                block.add_child(self._parse_ruleset())
            else:
                self._skip_to_statement_end()

        self._close_block(block)
        return block

    def _close_block(self, block: SyntaxNode) -> None:
        token = self._peek()
        if _is_delim(token, "}") and token is not None:
            block.end = self._next().end
        else:
            block.end = len(self._text)

    def _starts_nested_rule(self) -> bool:
        """True when a "{" comes before the next ";" or "}"."""
        for token in self._tokens[self._pos :]:
            if _is_delim(token, "{"):
                return True
            if _is_delim(token, ";}"):
                return False
        return False

    def _skip_to_statement_end(self) -> None:
        while True:
            token = self._peek()
            if token is None or _is_delim(token, "}"):
                return
            self._next()
            if _is_delim(token, ";"):
                return

    # Declarations

    def _parse_declaration(self) -> SyntaxNode:
        name = self._next()
        declaration = SyntaxNode(NodeKind.DECLARATION, name.start, name.end)
        declaration.add_child(SyntaxNode(NodeKind.PROPERTY, name.start, name.end))

        if not _is_delim(self._peek(), ":"):
            return declaration

        colon = self._next()
        value = SyntaxNode(NodeKind.VALUE, colon.end, len(self._text))
        self._parse_terms(value, closing="")

        token = self._peek()
        if token is not None:
            value.end = token.start
        declaration.add_child(value)
        declaration.end = value.end
        if _is_delim(token, ";") and token is not None:
            declaration.end = self._next().end
        return declaration

    def _parse_terms(self, parent: SyntaxNode, *, closing: str) -> None:
        """Collect value terms until ``;``, ``{``, ``}`` or ``closing``."""
        while True:
            token = self._peek()
            if token is None or _is_delim(token, ";{}"):
                return
            if closing and _is_delim(token, closing):
                return
            self._next()
            if token.type == TokenType.NUMBER:
                parent.add_child(
                    SyntaxNode(NodeKind.NUMERIC_LITERAL, token.start, token.end)
                )
            elif token.type == TokenType.IDENT:
                parent.add_child(
                    SyntaxNode(NodeKind.IDENTIFIER, token.start, token.end)
                )
            elif token.type == TokenType.HASH:
                parent.add_child(SyntaxNode(NodeKind.HASH, token.start, token.end))
            elif token.type == TokenType.STRING:
                parent.add_child(SyntaxNode(NodeKind.STRING, token.start, token.end))
            elif token.type == TokenType.FUNCTION:
                parent.add_child(self._parse_function(token))
            elif _is_delim(token, "("):
                # Bare parenthesized group: terms are kept flat
                self._parse_terms(parent, closing=")")
                if _is_delim(self._peek(), ")"):
                    self._next()

    def _parse_function(self, name: Token) -> SyntaxNode:
        function = SyntaxNode(NodeKind.FUNCTION_CALL, name.start, len(self._text))
        self._parse_terms(function, closing=")")
        token = self._peek()
        if _is_delim(token, ")") and token is not None:
            function.end = self._next().end
        elif token is not None:
            function.end = token.start
        return function


def parse_stylesheet(text: str) -> SyntaxTree:
    """
    Parse stylesheet text into a SyntaxTree.

    Args:
        text: The full document text.

    Returns:
        SyntaxTree whose root spans the whole text, with the comment spans.
    """
    parser = _StylesheetParser(text)
    root = parser.parse()
    return SyntaxTree(source=text, root=root, comments=parser.comments)


def function_name(tree: SyntaxTree, node: SyntaxNode) -> str:
    """Name of a function-call node, without the opening parenthesis."""
    return tree.text_of(node).split("(", 1)[0]


def is_closed(tree: SyntaxTree, node: SyntaxNode, closing: str) -> bool:
    """Whether a block or function node ends with its closing character."""
    return node.end - node.start >= 2 and tree.source[node.end - 1] == closing
