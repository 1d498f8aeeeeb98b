"""Translation options and TOML loading for bulloak.toml.

The core never interprets these values. They ride along on every ``Hir``
so code generators downstream can read them.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "bulloak.toml"


@dataclass
class Config:
    backend: str = "foundry"
    skip_modifiers: bool = False
    format_descriptions: bool = False
    options: dict[str, Any] = field(default_factory=dict)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find bulloak.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_FILENAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_FILENAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> Config:
    """Parse a bulloak.toml file into a Config."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = Config()

    if "translate" in data:
        tr = dict(data["translate"])
        options = tr.pop("options", {})
        config = Config(
            backend=tr.get("backend", "foundry"),
            skip_modifiers=tr.get("skip_modifiers", False),
            format_descriptions=tr.get("format_descriptions", False),
            options=dict(options),
        )

    return config
