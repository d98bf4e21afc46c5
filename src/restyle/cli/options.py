"""Options shared by the CLI commands that run the transform."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterator

import click

from restyle.config import TransformConfig

SOURCE_SUFFIXES = (".js", ".jsx")
SKIP_DIRS = {"node_modules", ".git"}


def config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the transform configuration options to a click command."""
    options = [
        click.option(
            "--styles-name", default="styles", show_default=True, help="Identifier of the style table"
        ),
        click.option(
            "--enhancer", default="Radium", show_default=True, help="Enhancer wrapper to remove"
        ),
        click.option(
            "--enhancer-module",
            default="radium",
            show_default=True,
            help="Module the enhancer is imported from",
        ),
        click.option(
            "--identity-helper",
            default="prefixStyles",
            show_default=True,
            help="Pass-through helper to unwrap",
        ),
        click.option(
            "--inline-literals/--no-inline-literals",
            default=True,
            help="Convert constant inline style objects",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_config(
    styles_name: str,
    enhancer: str,
    enhancer_module: str,
    identity_helper: str,
    inline_literals: bool,
) -> TransformConfig:
    return TransformConfig(
        table_identifier=styles_name,
        enhancer_identifier=enhancer,
        enhancer_module=enhancer_module,
        identity_helper=identity_helper,
        convert_inline_literals=inline_literals,
    )


def configure_logging(verbose: bool) -> None:
    # Diagnostics are echoed by the commands; logging only adds detail.
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )


def iter_source_files(paths: tuple[str, ...]) -> Iterator[Path]:
    """Expand files and directories into JS/JSX source files, sorted per directory."""
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            for candidate in sorted(path.rglob("*")):
                if SKIP_DIRS.intersection(candidate.relative_to(path).parts):
                    continue
                if candidate.is_file() and candidate.suffix in SOURCE_SUFFIXES:
                    yield candidate
        else:
            yield path
