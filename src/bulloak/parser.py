"""Parser for tree notation.

Turns the token stream of one tree into a single ``Root``. Nesting is
driven by the column of each branch glyph: an explicit stack holds the
open ancestors, and every new branch pops until the top of the stack sits
strictly left of it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bulloak.ast_nodes import Action, Ast, Condition, Root
from bulloak.errors import Diagnostic, ParseError
from bulloak.source import Span
from bulloak.tokens import (
    ACTION_KEYWORDS,
    CONDITION_KEYWORDS,
    CONNECTORS,
    Token,
    TokenKind,
)

logger = logging.getLogger(__name__)

_CONNECTOR_KINDS = frozenset(CONNECTORS.values())
_KEYWORD_KINDS = CONDITION_KEYWORDS | ACTION_KEYWORDS


@dataclass
class _Open:
    """An ancestor that can still receive children."""

    column: int
    node: Ast
    closed: bool = False  # a `└` child has been attached


class Parser:
    """Parses the tokens of one tree into a ``Root``."""

    def __init__(self, tokens: list[Token], filename: str = "<stdin>") -> None:
        self.tokens = tokens
        self.pos = 0
        self.filename = filename

    # ── Token access ─────────────────────────────────────────────

    def _current(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.tokens[-1]  # EOF

    def _at(self, kind: TokenKind) -> bool:
        return self._current().kind == kind

    def _at_any(self, kinds: frozenset[TokenKind]) -> bool:
        return self._current().kind in kinds

    def _advance(self) -> Token:
        tok = self._current()
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def _skip_comments(self) -> None:
        """Skip comments and the newlines of comment-only lines."""
        while self._at(TokenKind.COMMENT) or self._at(TokenKind.NEWLINE):
            self._advance()

    def _end_line(self) -> None:
        if self._at(TokenKind.COMMENT):
            self._advance()
        if self._at(TokenKind.NEWLINE):
            self._advance()

    def _error(self, code: str, message: str, span: Span, label: str = "") -> ParseError:
        return ParseError([Diagnostic.error(code, message, span, label)])

    @staticmethod
    def _describe(tok: Token) -> str:
        if tok.kind == TokenKind.EOF:
            return "end of input"
        if tok.kind in _CONNECTOR_KINDS:
            return f"branch {tok.value!r}"
        if tok.kind in _KEYWORD_KINDS:
            return f"keyword {tok.value!r}"
        return repr(tok.value)

    # ── Tree ─────────────────────────────────────────────────────

    def parse(self) -> Root:
        """Parse the entire token stream into a Root."""
        self._skip_comments()
        root = self._parse_root()
        stack = [_Open(column=0, node=root)]

        self._skip_comments()
        while not self._at(TokenKind.EOF):
            self._parse_branch(stack)
            self._skip_comments()

        logger.debug("parsed tree %r with %d top-level branch(es)",
                     root.contract_name, len(root.children))
        return root

    def _parse_root(self) -> Root:
        tok = self._current()
        if tok.kind == TokenKind.EOF:
            raise self._error("E201", "expected a contract identifier, found end of input", tok.span)
        if tok.kind in _CONNECTOR_KINDS:
            raise self._error(
                "E201",
                f"expected a contract identifier, found {self._describe(tok)}",
                tok.span,
                "a tree must start with its root",
            )
        if tok.kind in _KEYWORD_KINDS:
            raise self._error(
                "E206",
                f"expected a contract identifier, found {self._describe(tok)}",
                tok.span,
                "the root names the contract; conditions and actions hang below it",
            )
        self._advance()
        self._end_line()
        return Root(contract_name=tok.value, children=[], span=tok.span)

    def _parse_branch(self, stack: list[_Open]) -> None:
        connector = self._current()
        if connector.kind not in _CONNECTOR_KINDS:
            raise self._error(
                "E202",
                f"expected a branch, found {self._describe(connector)}",
                connector.span,
                "only the first line of a tree may be a root",
            )
        self._advance()

        column = connector.span.start_col
        while stack[-1].column >= column:
            stack.pop()
        parent = stack[-1]

        if isinstance(parent.node, Action):
            raise self._error(
                "E204",
                f"unexpected branch under action {parent.node.description!r}",
                connector.span,
                "actions are leaves and cannot have children",
            )
        if parent.closed:
            raise self._error(
                "E205",
                "unexpected sibling after the last branch",
                connector.span,
                "the previous sibling was drawn with '└'",
            )

        node = self._parse_node(connector)
        parent.node.children.append(node)
        if connector.kind == TokenKind.CORNER:
            parent.closed = True
        stack.append(_Open(column=column, node=node))
        self._end_line()

    def _parse_node(self, connector: Token) -> Condition | Action:
        keyword = self._current()
        if keyword.kind not in _KEYWORD_KINDS:
            raise self._error(
                "E203",
                "expected a condition ('when', 'given') or an action ('it'), "
                f"found {self._describe(keyword)}",
                keyword.span,
            )
        self._advance()
        text = self._advance()
        description = (keyword.value + text.value).rstrip()
        span = connector.span.to(text.span)

        if keyword.kind in CONDITION_KEYWORDS:
            return Condition(description=description, children=[], span=span)
        return Action(description=description, span=span)
