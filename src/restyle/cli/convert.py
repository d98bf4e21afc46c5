"""CLI command: restyle convert -- migrate style tables in JS/JSX files."""

from __future__ import annotations

import difflib
import sys

import click

from restyle.cli.options import build_config, config_options, configure_logging, iter_source_files
from restyle.engine import StyleMigrationEngine
from restyle.events import ComponentSynthesized, EventBus
from restyle.parser import ParseError


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--write", is_flag=True, help="Rewrite changed files in place")
@click.option("--check", is_flag=True, help="Exit with code 1 if any file would change")
@click.option("--diff", "show_diff", is_flag=True, help="Print a unified diff for each changed file")
@click.option("--verbose", "-v", is_flag=True, help="Report each synthesized component")
@config_options
def convert(
    paths: tuple[str, ...],
    write: bool,
    check: bool,
    show_diff: bool,
    verbose: bool,
    **options: object,
) -> None:
    """Convert Radium style tables in PATHS to styled-components.

    Directories are searched recursively for .js and .jsx files.  Without
    --write nothing is modified on disk.
    """
    configure_logging(verbose)
    bus = EventBus()
    if verbose:
        bus.subscribe(
            ComponentSynthesized,
            lambda e: click.echo(f"  + {e.name} <{e.element_tag}>"),
        )
    engine = StyleMigrationEngine(build_config(**options), bus)  # type: ignore[arg-type]

    failed = False
    changed = 0
    total = 0
    for path in iter_source_files(paths):
        total += 1
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            click.echo(f"{path}: cannot read: {exc}", err=True)
            failed = True
            continue
        try:
            result = engine.run(source)
        except ParseError as exc:
            click.echo(f"{path}: parse error: {exc}", err=True)
            failed = True
            continue

        for diag in result.diagnostics:
            location = f"{path}:{diag.line}" if diag.line else str(path)
            click.echo(f"{location}: {diag.message}", err=True)

        if not result.changed:
            if verbose:
                click.echo(f"unchanged {path}")
            continue

        changed += 1
        click.echo(f"converted {path}: {len(result.components)} component(s)")
        if show_diff:
            diff = difflib.unified_diff(
                source.splitlines(keepends=True),
                result.source.splitlines(keepends=True),
                fromfile=f"a/{path}",
                tofile=f"b/{path}",
            )
            click.echo("".join(diff), nl=False)
        if write:
            path.write_text(result.source, encoding="utf-8")

    click.echo(f"Summary: {changed} of {total} file(s) {'converted' if write else 'would change'}")
    if failed or (check and changed):
        sys.exit(1)
