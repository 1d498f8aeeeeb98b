"""Shared test helpers for the bulloak test suite."""

from __future__ import annotations

import pytest

from bulloak.ast_nodes import Root
from bulloak.errors import CompileError
from bulloak.lexer import Lexer
from bulloak.parser import Parser
from bulloak.tokens import TokenKind


def lex(source: str) -> list[tuple[TokenKind, str]]:
    """Lex source and return (kind, value) pairs, excluding EOF and newlines."""
    tokens = Lexer(source, "<test>").lex()
    return [
        (t.kind, t.value) for t in tokens
        if t.kind not in (TokenKind.EOF, TokenKind.NEWLINE)
    ]


def kinds(source: str) -> list[TokenKind]:
    """Lex source and return just the token kinds, excluding EOF."""
    tokens = Lexer(source, "<test>").lex()
    return [t.kind for t in tokens if t.kind != TokenKind.EOF]


def parse_tree(source: str) -> Root:
    """Lex and parse a single tree without semantic analysis."""
    tokens = Lexer(source, "<test>").lex()
    return Parser(tokens, "<test>").parse()


def fails_with(fn, error_type: type[CompileError], code: str) -> CompileError:
    """Call fn, asserting it raises error_type with the given diagnostic code."""
    with pytest.raises(error_type) as info:
        fn()
    err = info.value
    assert err.code == code, (
        f"Expected error {code} but got: "
        f"{[f'{d.code}: {d.message}' for d in err.diagnostics]}"
    )
    return err
