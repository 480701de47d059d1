"""Scan a page and list the form fields found on it."""
from __future__ import annotations

import json
from typing import Optional

import click
from rich.console import Console

from autofill.config import get_settings
from autofill.forms.extraction import extract_fields, scan_marked_fields
from autofill.models import Extraction

from ..documents import fields_table, load_document, open_browser_surface

console = Console()


@click.command(name="scan")
@click.argument("source", required=False)
@click.option("--url", help="Scan a live page in a Playwright browser instead of a file")
@click.option("--marked", is_flag=True, help="Only list fields holding the trigger token")
@click.option("--token", help="Trigger token (defaults to AUTOFILL_TRIGGER_TOKEN)")
@click.option("--json", "as_json", is_flag=True, help="Print the field payload as JSON")
def scan_command(source: Optional[str], url: Optional[str], marked: bool, token: Optional[str], as_json: bool):
    """
    Scan an HTML file (or a live page with --url) for fillable fields.

    Prints one row per field with its generated id, kind and label.
    """
    if not source and not url:
        raise click.UsageError("Provide an HTML file or --url")

    token = token or get_settings().trigger_token

    if url:
        with open_browser_surface(url) as surface:
            extraction = _scan(surface, marked, token)
    else:
        extraction = _scan(load_document(source), marked, token)

    if as_json:
        click.echo(json.dumps(extraction.to_payload(), indent=2))
        return

    title = f"Fields marked with {token!r}" if marked else "Fields"
    console.print(fields_table(extraction.fields, title=title))
    console.print(f"[green]✓[/green] {len(extraction)} field(s)")


def _scan(surface, marked: bool, token: str) -> Extraction:
    if marked:
        return scan_marked_fields(surface, token)
    return extract_fields(surface)
