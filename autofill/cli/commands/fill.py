"""Fill empty fields of an HTML file from the constants store."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from autofill.forms.extraction import collect_filled_values, extract_fields
from autofill.sources.constants import load_constants
from autofill.workflow import fill_with_constants

from ..documents import default_output_path, load_document, resolve_constants_path

console = Console()


@click.command(name="fill")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--constants", "constants_path", help="Constants JSON file (defaults to AUTOFILL_CONSTANTS_PATH)")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Where to write the filled HTML")
@click.option("--threshold", type=float, help="Minimum similarity score a match must exceed")
def fill_command(source: str, constants_path: Optional[str], output: Optional[str], threshold: Optional[float]):
    """
    Fill the empty fields of SOURCE with matching constants and save the result.

    The filled document goes to --output, or next to SOURCE as
    <name>.filled.html.
    """
    constants = load_constants(resolve_constants_path(constants_path))
    document = load_document(source)

    report = fill_with_constants(document, constants, threshold=threshold)

    target = Path(output) if output else default_output_path(Path(source))
    document.write(target)

    values = collect_filled_values(extract_fields(document))
    lines = [f"{key}: {'***' if key.lower() == 'password' else value}" for key, value in values.items()]
    console.print(Panel(
        "\n".join(lines) or "[dim]No values[/dim]",
        title=report.summary(),
        border_style="green",
        expand=False,
    ))
    console.print(f"[green]✓[/green] Saved to {target}")
