"""Environment-driven settings for extraction, matching and the CLI."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

DEFAULT_TRIGGER_TOKEN = "##"
DEFAULT_MATCH_THRESHOLD = 0.5


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


@dataclass
class Settings:
    """Container for environment-driven settings."""

    trigger_token: str = field(default_factory=lambda: os.getenv("AUTOFILL_TRIGGER_TOKEN", DEFAULT_TRIGGER_TOKEN))
    match_threshold: float = field(
        default_factory=lambda: _env_float("AUTOFILL_MATCH_THRESHOLD", DEFAULT_MATCH_THRESHOLD)
    )
    constants_path: str = field(default_factory=lambda: os.getenv("AUTOFILL_CONSTANTS_PATH", "constants.json"))
    html_parser: str = field(default_factory=lambda: os.getenv("AUTOFILL_HTML_PARSER", "lxml"))
    log_level: str = field(default_factory=lambda: os.getenv("AUTOFILL_LOG_LEVEL", "INFO"))
    playwright_browser: str = field(default_factory=lambda: os.getenv("PLAYWRIGHT_BROWSER", "chromium"))
    playwright_headless: bool = field(default_factory=lambda: _env_flag("PLAYWRIGHT_HEADLESS", default=True))

    def resolved_constants_path(self) -> Path:
        """Return the constants file as an absolute path."""

        path = Path(self.constants_path).expanduser()
        if not path.is_absolute():
            path = Path.cwd() / path
        return path


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


__all__ = [
    "DEFAULT_TRIGGER_TOKEN",
    "DEFAULT_MATCH_THRESHOLD",
    "Settings",
    "get_settings",
]
