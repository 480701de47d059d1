"""Shared helpers for CLI commands: loading surfaces and rendering results."""
from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence

from rich.table import Table

from autofill.config import get_settings
from autofill.models import FieldDescriptor, FieldMatch
from autofill.surface.browser import PlaywrightSurface
from autofill.surface.html import HtmlDocument


def default_output_path(source: Path) -> Path:
    return source.with_name(f"{source.stem}.filled{source.suffix or '.html'}")


def load_document(source: str) -> HtmlDocument:
    return HtmlDocument.from_path(source, parser=get_settings().html_parser)


@contextmanager
def open_browser_surface(url: str) -> Iterator[PlaywrightSurface]:
    """Open ``url`` in a Playwright browser and yield a surface over the page."""

    from playwright.sync_api import sync_playwright

    settings = get_settings()
    with sync_playwright() as playwright:
        browser_type = getattr(playwright, settings.playwright_browser)
        browser = browser_type.launch(headless=settings.playwright_headless)
        try:
            page = browser.new_page()
            page.goto(url, wait_until="domcontentloaded")
            yield PlaywrightSurface(page)
        finally:
            browser.close()


def _truncate(text: str, limit: int = 40) -> str:
    text = " ".join(text.split())
    if len(text) > limit:
        return f"{text[: limit - 1]}…"
    return text


def fields_table(fields: Sequence[FieldDescriptor], *, title: str = "Fields") -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan", border_style="blue")
    table.add_column("ID", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Label", style="yellow")
    table.add_column("Name")
    table.add_column("Req", justify="center")
    table.add_column("Value")
    table.add_column("Options", justify="right")

    for descriptor in fields:
        table.add_row(
            descriptor.id,
            descriptor.kind.value,
            _truncate(descriptor.label),
            descriptor.name,
            "✓" if descriptor.required else "",
            _truncate(descriptor.value, 24),
            str(len(descriptor.options)) if descriptor.options else "",
        )
    return table


def matches_table(matches: Sequence[FieldMatch], *, title: str = "Matches") -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan", border_style="green")
    table.add_column("Field", style="cyan")
    table.add_column("Term", style="yellow")
    table.add_column("Key", style="magenta")
    table.add_column("Score", justify="right")
    table.add_column("Value")

    for match in matches:
        table.add_row(
            match.field_id,
            _truncate(match.term, 30),
            match.key,
            f"{match.score:.2f}",
            "***" if match.key.lower() == "password" else _truncate(str(match.value), 30),
        )
    return table


def resolve_constants_path(path: Optional[str]) -> Path:
    if path:
        return Path(path)
    return get_settings().resolved_constants_path()


__all__ = [
    "default_output_path",
    "load_document",
    "open_browser_surface",
    "fields_table",
    "matches_table",
    "resolve_constants_path",
]
