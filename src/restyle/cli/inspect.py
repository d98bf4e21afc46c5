"""CLI command: restyle inspect -- show what the transform would do to a file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from restyle.cli.options import build_config, config_options, configure_logging
from restyle.engine import StyleMigrationEngine, render_components
from restyle.model.style_table import StyleTable, UnparsedTable
from restyle.parser import ParseError


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


@click.command()
@click.argument("jsfile", type=click.Path(exists=True, dir_okay=False))
@config_options
def inspect(jsfile: str, **options: object) -> None:
    """Show the style table, usage state and planned components of a file.

    Nothing is written.
    """
    configure_logging(False)
    config = build_config(**options)  # type: ignore[arg-type]
    path = Path(jsfile)
    try:
        result = StyleMigrationEngine(config).run(path.read_text(encoding="utf-8"))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as exc:
        click.echo(f"Cannot read {path}: {exc}", err=True)
        sys.exit(1)

    table = result.table
    if isinstance(table, StyleTable):
        click.echo(f"Table: {table.identifier} ({len(table)} entries)")
        for entry in table.entries:
            marker = "" if entry.style is not None else "  (not declarative)"
            click.echo(f"  {entry.name}{marker}")
    elif isinstance(table, UnparsedTable):
        click.echo(f"Table: {table.identifier} (not converted: {table.reason})")
    else:
        click.echo("Table: none")
    click.echo()

    usage = result.usage
    click.echo("Usage:")
    click.echo(f"  preserve wrapper:    {_yes_no(usage.preserve_wrapper)}")
    click.echo(f"  preserve all styles: {_yes_no(usage.preserve_all_styles)}")
    kept = ", ".join(sorted(usage.kept_names)) or "-"
    click.echo(f"  kept names:          {kept}")
    click.echo()

    click.echo(f"Components: {len(result.components)}")
    for declaration in render_components(result, config):
        click.echo(declaration)

    if result.diagnostics:
        click.echo()
        for diag in result.diagnostics:
            click.echo(str(diag))
