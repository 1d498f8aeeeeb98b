"""Lexer for tree notation.

Works line by line. The leading run of spaces and vertical glyphs is
alignment only and produces no tokens; the branch glyph that follows it is
the only structural token, and its column is what the parser nests on.
"""

from __future__ import annotations

import logging
import re

from bulloak.errors import Diagnostic, LexError
from bulloak.source import Span
from bulloak.tokens import (
    BOX_DRAWING_RANGE,
    CONNECTORS,
    HORIZONTAL,
    KEYWORDS,
    VERTICAL,
    Token,
    TokenKind,
)

logger = logging.getLogger(__name__)

# A keyword is a whole leading word: "It's" is not the `it` keyword.
_KEYWORD_RE = re.compile(r"(when|given|it)(?=\s|$)", re.IGNORECASE)


def _is_box_glyph(ch: str) -> bool:
    return ord(ch) in BOX_DRAWING_RANGE


class Lexer:
    """Tokenizes the text of a single tree."""

    def __init__(self, source: str, filename: str = "<stdin>",
                 line_offset: int = 0) -> None:
        self.source = source
        self.filename = filename
        self.line_offset = line_offset
        self.line = line_offset
        self.tokens: list[Token] = []

    def lex(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        for index, text in enumerate(self.source.split("\n")):
            self.line = self.line_offset + index + 1
            self._lex_line(text)

        end_col = len(self.source.split("\n")[-1]) + 1
        self._emit(TokenKind.EOF, "", end_col, end_col - 1)
        logger.debug("lexed %d token(s) from %s", len(self.tokens), self.filename)
        return self.tokens

    # ── Helpers ───────────────────────────────────────────────────

    def _emit(self, kind: TokenKind, value: str, start: int, end: int) -> Token:
        """Append a token; ``start`` is a 1-based column, ``end`` inclusive."""
        span = Span(self.filename, self.line, start, self.line, max(start, end))
        tok = Token(kind, value, span)
        self.tokens.append(tok)
        return tok

    def _error(self, code: str, message: str, col: int, label: str = "") -> LexError:
        span = Span(self.filename, self.line, col, self.line, col)
        return LexError([Diagnostic.error(code, message, span, label)])

    # ── Lines ─────────────────────────────────────────────────────

    def _lex_line(self, text: str) -> None:
        if not text.strip():
            return

        pos = self._skip_alignment(text)
        if pos >= len(text):
            # A line of vertical glyphs only.
            return

        ch = text[pos]
        if ch in CONNECTORS:
            pos = self._lex_connector(text, pos)
        elif _is_box_glyph(ch):
            raise self._error(
                "E102", f"unrecognized connector glyph {ch!r}", pos + 1,
                "expected '├' or '└' after the alignment",
            )

        self._lex_text(text, pos)
        self._emit(TokenKind.NEWLINE, "\n", len(text) + 1, len(text) + 1)

    def _skip_alignment(self, text: str) -> int:
        pos = 0
        while pos < len(text):
            ch = text[pos]
            if ch == "\t":
                raise self._error("E101", "tabs are not allowed; use spaces", pos + 1)
            if ch != " " and ch != VERTICAL:
                break
            pos += 1
        return pos

    def _lex_connector(self, text: str, pos: int) -> int:
        start = pos
        kind = CONNECTORS[text[pos]]
        pos += 1
        while pos < len(text) and text[pos] == HORIZONTAL:
            pos += 1
        self._emit(kind, text[start:pos], start + 1, pos)

        while pos < len(text) and text[pos] == " ":
            pos += 1
        if pos < len(text) and text[pos] == "\t":
            raise self._error("E101", "tabs are not allowed; use spaces", pos + 1)
        if pos >= len(text) or text[pos:].strip() == "" or text.startswith("//", pos):
            raise self._error(
                "E104", "expected a condition or an action after the branch",
                start + 1, "this branch leads nowhere",
            )
        if _is_box_glyph(text[pos]):
            raise self._error(
                "E102", f"unrecognized connector glyph {text[pos]!r}", pos + 1,
                "a branch takes exactly one '├' or '└' glyph",
            )
        return pos

    def _lex_text(self, text: str, pos: int) -> None:
        comment_at = self._find_comment(text, pos)
        body_end = comment_at if comment_at is not None else len(text)
        body = text[pos:body_end].rstrip()
        end = pos + len(body)

        if body:
            match = _KEYWORD_RE.match(body)
            if match is not None:
                kw_end = pos + match.end()
                self._emit(KEYWORDS[match.group(1).lower()], match.group(1), pos + 1, kw_end)
                self._emit(TokenKind.DESCRIPTION, text[kw_end:end], kw_end + 1, end)
            else:
                self._emit(TokenKind.IDENTIFIER, body, pos + 1, end)

        if comment_at is not None:
            comment = text[comment_at + 2:].strip()
            self._emit(TokenKind.COMMENT, comment, comment_at + 1, len(text.rstrip()))

    def _find_comment(self, text: str, pos: int) -> int | None:
        """Return the index of a `//` comment outside backtick code spans."""
        tick_at: int | None = None
        while pos < len(text):
            ch = text[pos]
            if ch == "`":
                tick_at = pos if tick_at is None else None
            elif tick_at is None and text.startswith("//", pos):
                return pos
            pos += 1
        if tick_at is not None:
            raise self._error(
                "E103", "unterminated code span in description", tick_at + 1,
                "this backtick is never closed",
            )
        return None
