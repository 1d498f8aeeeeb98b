"""Compiler front end for Branching Tree Technique ``.tree`` files."""

from bulloak.syntax import parse, translate

__version__ = "0.1.0"

__all__ = ["parse", "translate", "__version__"]
