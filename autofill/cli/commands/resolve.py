"""Fill fields marked with the trigger token from a resolved values file."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from autofill.sources.resolvers import StaticValueResolver
from autofill.workflow import fill_marked_fields

from ..documents import default_output_path, fields_table, load_document

console = Console()


@click.command(name="resolve")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--values", "values_path", required=True, type=click.Path(exists=True, dir_okay=False),
              help="JSON object mapping field ids to values")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Where to write the filled HTML")
@click.option("--token", help="Trigger token (defaults to AUTOFILL_TRIGGER_TOKEN)")
def resolve_command(source: str, values_path: str, output: Optional[str], token: Optional[str]):
    """
    Fill the fields of SOURCE whose value is the trigger token.

    Values come from a JSON file, either a plain object or a
    {"fields": {...}} response envelope.
    """
    resolver = StaticValueResolver.from_path(values_path)
    document = load_document(source)

    report = fill_marked_fields(document, resolver, token=token)

    target = Path(output) if output else default_output_path(Path(source))
    document.write(target)

    console.print(fields_table(report.fields, title="Marked fields"))
    console.print(f"[green]✓[/green] {report.summary()}")
    console.print(f"[green]✓[/green] Saved to {target}")
