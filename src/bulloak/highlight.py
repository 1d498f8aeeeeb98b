"""Pygments lexer for tree notation."""

from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Comment,
    Keyword,
    Name,
    Operator,
    Punctuation,
    String,
    Text,
)


class TreeLexer(RegexLexer):
    """Pygments lexer for Branching Tree Technique ``.tree`` files."""

    name = "BTT Tree"
    aliases = ["tree", "btt"]
    filenames = ["*.tree"]
    mimetypes = ["text/x-btt-tree"]

    tokens = {
        "root": [
            # Line comments (// ...)
            (r"//.*$", Comment.Single),
            # Root line: contract, optionally Contract::function
            (
                r"^([^\s│├└─/][^:\n/]*)(::)?([^\n/]*)",
                bygroups(Name.Class, Operator, Name.Function),
            ),
            # Branch glyph followed by a condition keyword
            (
                r"(?i)([├└]─*)(\s*)(when|given)\b",
                bygroups(Punctuation, Text.Whitespace, Keyword),
            ),
            # Branch glyph followed by the action keyword
            (
                r"(?i)([├└]─*)(\s*)(it)\b",
                bygroups(Punctuation, Text.Whitespace, Keyword.Pseudo),
            ),
            # Remaining tree glyphs
            (r"[│├└─]+", Punctuation),
            # Inline code in descriptions
            (r"`[^`\n]*`", String.Backtick),
            (r"\s+", Text.Whitespace),
            (r"[^\s`/│├└─]+", Text),
            (r"[/`]", Text),
        ],
    }
