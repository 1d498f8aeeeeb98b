"""Splits a text holding several trees into one slice per tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bulloak.errors import Diagnostic, ParseError
from bulloak.source import Span

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeSlice:
    """The text of one tree and where it starts in the full source."""

    text: str
    offset: int  # character offset into the normalized source
    line: int    # number of lines preceding the slice

    def root_line(self) -> tuple[int, str]:
        """Return the absolute 1-based line number and text of the root line."""
        for index, text in enumerate(self.text.split("\n")):
            if text.strip() and not _is_comment(text):
                return self.line + index + 1, text
        return self.line + 1, ""


def _is_comment(line: str) -> bool:
    return line.strip().startswith("//")


def normalize(text: str) -> str:
    """Unify line endings to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_trees(text: str, filename: str = "<stdin>") -> list[TreeSlice]:
    """Split normalized text on runs of blank lines.

    Raises ParseError when the text holds no tree at all.
    """
    slices: list[TreeSlice] = []
    block: list[str] = []
    block_offset = block_line = 0
    offset = 0

    def flush() -> None:
        # Comment-only blocks, such as a license header, are not trees.
        if any(not _is_comment(line) for line in block):
            slices.append(TreeSlice("\n".join(block), block_offset, block_line))

    for index, line in enumerate(text.split("\n")):
        if line.strip():
            if not block:
                block_offset, block_line = offset, index
            block.append(line)
        elif block:
            flush()
            block = []
        offset += len(line) + 1

    if block:
        flush()

    if not slices:
        span = Span(filename, 1, 1, 1, 1)
        raise ParseError([Diagnostic.error("E200", "no tree found in input", span)])

    logger.debug("found %d tree(s) in %s", len(slices), filename)
    return slices
