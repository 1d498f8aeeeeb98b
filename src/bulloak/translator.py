"""Translation of one tree AST into a ``Hir``."""

from __future__ import annotations

import logging

from bulloak.ast_nodes import Root
from bulloak.config import Config
from bulloak.hir import FunctionEntry, Hir, ModifierGroup
from bulloak.modifiers import Modifiers
from bulloak.utils import parse_root_name

logger = logging.getLogger(__name__)


class Translator:
    """Turns each discovered modifier into one group of function entries.

    Expects a tree that already passed semantic analysis; never fails.
    """

    def translate(self, ast: Root, modifiers: Modifiers, cfg: Config) -> Hir:
        module, submodule = parse_root_name(ast.contract_name)
        groups = [
            ModifierGroup(
                preconditions=chain,
                functions=[FunctionEntry(action.description, chain) for action in actions],
                submodule=submodule,
            )
            for chain, actions in modifiers.items()
        ]
        hir = Hir(module=module, submodule=submodule, groups=groups, config=cfg)
        logger.debug("translated %r into %d group(s), %d function(s)",
                     ast.contract_name, len(groups), hir.function_count)
        return hir
