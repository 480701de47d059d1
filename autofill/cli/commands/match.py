"""Preview which constants would be used for which fields."""
from __future__ import annotations

from typing import Optional

import click
from rich.console import Console

from autofill.config import get_settings
from autofill.forms.extraction import empty_fields, extract_fields
from autofill.forms.matching import explain_matches
from autofill.sources.constants import load_constants

from ..documents import load_document, matches_table, resolve_constants_path

console = Console()


@click.command(name="match")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--constants", "constants_path", help="Constants JSON file (defaults to AUTOFILL_CONSTANTS_PATH)")
@click.option("--threshold", type=float, help="Minimum similarity score a match must exceed")
@click.option("--all", "include_filled", is_flag=True, help="Also match fields that already have a value")
def match_command(source: str, constants_path: Optional[str], threshold: Optional[float], include_filled: bool):
    """
    Show how the fields of SOURCE match the known constants without filling.
    """
    if threshold is None:
        threshold = get_settings().match_threshold

    constants = load_constants(resolve_constants_path(constants_path))
    extraction = extract_fields(load_document(source))
    fields = extraction.fields if include_filled else empty_fields(extraction.fields)

    matches = explain_matches(fields, constants, threshold)
    console.print(matches_table(matches))

    matched = {match.field_id for match in matches}
    unmatched = [descriptor.id for descriptor in fields if descriptor.id not in matched]
    console.print(f"[green]✓[/green] {len(matches)}/{len(fields)} field(s) matched (threshold {threshold:.2f})")
    if unmatched:
        console.print(f"[dim]Unmatched: {', '.join(unmatched)}[/dim]")
