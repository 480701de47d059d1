#!/usr/bin/env python3
"""Main CLI entry point for form autofill."""
from __future__ import annotations

import logging
import sys
from typing import Optional

import click
from dotenv import load_dotenv
from rich.console import Console

from autofill.config import get_settings

from .commands import fill, match, resolve, scan

console = Console()


@click.group()
@click.option("--log-level", help="Logging level (defaults to AUTOFILL_LOG_LEVEL)")
@click.version_option(version="0.1.0", prog_name="autofill")
def cli(log_level: Optional[str]):
    """
    Autofill - scan HTML forms and fill them from known values.

    Scan pages for fields, preview constant matches, fill empty fields
    from a constants file, or fill token-marked fields from resolved values.
    """
    level = (log_level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


# Register all commands
cli.add_command(scan.scan_command)
cli.add_command(match.match_command)
cli.add_command(fill.fill_command)
cli.add_command(resolve.resolve_command)


def main():
    """Entry point for the CLI."""
    load_dotenv()
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
