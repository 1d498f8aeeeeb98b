"""Entry points: text to ASTs, and text to a single ``Hir``."""

from __future__ import annotations

import logging

from bulloak.ast_nodes import Root
from bulloak.checker import SemanticAnalyzer
from bulloak.combiner import Combiner
from bulloak.config import Config
from bulloak.errors import ConfigError, Diagnostic
from bulloak.hir import Hir
from bulloak.lexer import Lexer
from bulloak.modifiers import ModifierDiscoverer
from bulloak.parser import Parser
from bulloak.splitter import normalize, split_trees
from bulloak.translator import Translator
from bulloak.utils import CONTRACT_IDENTIFIER_SEPARATOR, separator_count

logger = logging.getLogger(__name__)


def parse(text: str, filename: str = "<stdin>") -> list[Root]:
    """Parse every tree in ``text``, in source order.

    Raises the first LexError, ParseError or SemanticError encountered.
    """
    normalized = normalize(text)
    return [
        parse_one(tree.text, filename, line_offset=tree.line)
        for tree in split_trees(normalized, filename)
    ]


def parse_one(text: str, filename: str = "<stdin>", line_offset: int = 0) -> Root:
    """Lex, parse and analyze the text of a single tree."""
    tokens = Lexer(text, filename, line_offset).lex()
    ast = Parser(tokens, filename).parse()
    return SemanticAnalyzer().analyze(ast)


def check_separators(forest: list[Root]) -> None:
    """Reject any root identifier with more than one module separator."""
    for index, root in enumerate(forest, start=1):
        if separator_count(root.contract_name) > 1:
            raise ConfigError([Diagnostic.error(
                "E401",
                "an error occurred while parsing the tree: too many separators "
                f"at tree root #{index}. Expected to find at most one "
                f"`{CONTRACT_IDENTIFIER_SEPARATOR}` between the contract name "
                "and the function name",
                root.span,
            )], root_index=index)


def translate(text: str, cfg: Config | None = None, filename: str = "<stdin>") -> Hir:
    """Translate the contents of a ``.tree`` file into one Hir.

    Several trees in one text are translated one by one and combined.
    """
    cfg = cfg or Config()
    forest = parse(text, filename)
    check_separators(forest)

    if len(forest) == 1:
        return translate_one(forest[0], cfg)

    logger.debug("combining %d trees from %s", len(forest), filename)
    hirs = (translate_one(ast, cfg) for ast in forest)
    return Combiner(filename).combine(text, hirs)


def translate_one(ast: Root, cfg: Config) -> Hir:
    """Generate the Hir for a single tree."""
    modifiers = ModifierDiscoverer().discover(ast)
    return Translator().translate(ast, modifiers, cfg)
