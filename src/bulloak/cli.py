"""bulloak command line."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from bulloak import __version__
from bulloak.config import Config, find_config, load_config
from bulloak.errors import CompileError, DiagnosticRenderer
from bulloak.hir import Hir
from bulloak.source import SourceText
from bulloak.syntax import translate

logger = logging.getLogger(__name__)


def _load_project_config(path: Path) -> Config:
    try:
        config_path = find_config(path)
    except FileNotFoundError:
        return Config()
    logger.debug("using config %s", config_path)
    return load_config(config_path)


def _translate_file(path: Path, cfg: Config, *, color: bool) -> Hir | None:
    """Translate one .tree file, rendering diagnostics on failure."""
    source = SourceText.from_path(path)
    try:
        return translate(source.content, cfg, source.filename)
    except CompileError as e:
        renderer = DiagnosticRenderer(color=color, sources={source.filename: source.content})
        for diag in e.diagnostics:
            click.echo(renderer.render(diag), err=True)
        return None


def _format_hir(hir: Hir) -> str:
    lines = [f"module {hir.module}"]
    for submodule, groups in hir.contexts().items():
        indent = "  "
        if submodule is not None:
            lines.append(f"  submodule {submodule}")
            indent = "    "
        for group in groups:
            label = "<unconditional>" if group.is_unconditional else group.functions[0].chain_text
            lines.append(f"{indent}modifier {label}")
            for fn in group.functions:
                lines.append(f"{indent}  - {fn.description}")
    return "\n".join(lines)


@click.group()
@click.version_option(__version__, prog_name="bulloak")
@click.option("-v", "--verbose", is_flag=True, help="Log every pipeline stage.")
def main(verbose: bool) -> None:
    """Compile Branching Tree Technique .tree files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--no-color", is_flag=True, help="Disable colored diagnostics.")
def check(paths: tuple[str, ...], no_color: bool) -> None:
    """Check that .tree files parse and translate cleanly."""
    had_errors = False
    for raw in paths:
        path = Path(raw)
        cfg = _load_project_config(path)
        if _translate_file(path, cfg, color=not no_color) is None:
            had_errors = True

    if had_errors:
        raise SystemExit(1)
    click.echo(f"checked {len(paths)} file(s), no errors")


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--backend", default=None, help="Override the configured backend.")
@click.option("--no-color", is_flag=True, help="Disable colored diagnostics.")
def hir(path: str, backend: str | None, no_color: bool) -> None:
    """Print the intermediate representation of a .tree file."""
    tree_path = Path(path)
    cfg = _load_project_config(tree_path)
    if backend is not None:
        cfg.backend = backend

    result = _translate_file(tree_path, cfg, color=not no_color)
    if result is None:
        raise SystemExit(1)
    click.echo(f"backend {result.config.backend}")
    click.echo(_format_hir(result))
