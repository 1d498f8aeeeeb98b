"""Token kinds and token representation for the tree lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bulloak.source import Span


class TokenKind(Enum):
    # Connectors
    TEE = auto()      # ├ (more siblings follow)
    CORNER = auto()   # └ (last sibling)

    # Condition keywords
    WHEN = auto()
    GIVEN = auto()

    # Action keyword
    IT = auto()

    # Text
    IDENTIFIER = auto()   # line text not introduced by a keyword
    DESCRIPTION = auto()  # text following a keyword

    # Comments
    COMMENT = auto()

    # Special
    NEWLINE = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    span: Span


KEYWORDS: dict[str, TokenKind] = {
    "when": TokenKind.WHEN,
    "given": TokenKind.GIVEN,
    "it": TokenKind.IT,
}

CONNECTORS: dict[str, TokenKind] = {
    "├": TokenKind.TEE,
    "└": TokenKind.CORNER,
}

CONDITION_KEYWORDS: frozenset[TokenKind] = frozenset({
    TokenKind.WHEN,
    TokenKind.GIVEN,
})

ACTION_KEYWORDS: frozenset[TokenKind] = frozenset({
    TokenKind.IT,
})

# Glyphs that only draw the tree and carry no structure of their own.
VERTICAL = "│"
HORIZONTAL = "─"

# Unicode "Box Drawing" block.
BOX_DRAWING_RANGE = range(0x2500, 0x2580)
