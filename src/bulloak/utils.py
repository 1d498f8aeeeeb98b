"""Helpers for contract identifiers."""

from __future__ import annotations

CONTRACT_IDENTIFIER_SEPARATOR = "::"


def separator_count(contract_name: str) -> int:
    return contract_name.count(CONTRACT_IDENTIFIER_SEPARATOR)


def sanitize_module_name(title: str) -> str:
    """Keep letters, digits and single underscores; whitespace becomes ``_``.

    Case is kept, so ``"It's working!"`` becomes ``"Its_working"``.
    """
    chars = []
    for ch in title.strip():
        if ch.isalnum() or ch == "_":
            chars.append(ch)
        elif ch.isspace():
            chars.append("_")
    return "_".join(part for part in "".join(chars).split("_") if part)


def parse_root_name(contract_name: str) -> tuple[str, str | None]:
    """Split a root identifier into sanitized ``(module, submodule)``.

    Raises ValueError when the identifier holds more than one separator.
    """
    if separator_count(contract_name) > 1:
        raise ValueError(
            f'invalid root "{contract_name}": expected at most one '
            f"'{CONTRACT_IDENTIFIER_SEPARATOR}' separator"
        )
    module, sep, submodule = contract_name.partition(CONTRACT_IDENTIFIER_SEPARATOR)
    return sanitize_module_name(module), sanitize_module_name(submodule) if sep else None
