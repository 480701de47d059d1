"""Exceptions raised by the autofill package."""
from __future__ import annotations

from typing import Any, Dict, Optional


class AutofillError(RuntimeError):
    """Base class for every error surfaced to an orchestrator or the CLI."""

    def __init__(self, message: str, *, data: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.data = data or {}


class NoInteractiveControls(AutofillError):
    """Raised when a scan surface holds no eligible form controls."""

    def __init__(self, message: str = "No form controls found on this page") -> None:
        super().__init__(message)


class AllFieldsAlreadyFilled(AutofillError):
    """Raised by the constants flow when every candidate field already has a value."""

    def __init__(self, total: int = 0) -> None:
        super().__init__("All fields are already filled", data={"total": total})
        self.total = total


class NoMarkedFields(AutofillError):
    """Raised by the marked-field flow when no control carries the trigger token."""

    def __init__(self, token: str) -> None:
        super().__init__(
            f'No fields marked with "{token}" found. '
            f'Type "{token}" in any field you want resolved externally.',
            data={"token": token},
        )
        self.token = token


class ConstantsError(AutofillError):
    """Raised when a constants file cannot be read or has the wrong shape."""


__all__ = [
    "AutofillError",
    "NoInteractiveControls",
    "AllFieldsAlreadyFilled",
    "NoMarkedFields",
    "ConstantsError",
]
