"""Protocols every scan surface implements.

A scan surface owns the controls; the extraction, matching and filling passes
only hold references handed out by :meth:`ScanSurface.controls`. Change
notification is an explicit capability (:meth:`Control.dispatch`) rather than
a side effect of assignment, so the core can run against a static document
with no rendering engine behind it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol

from autofill.models import FieldOption

INPUT_EVENT = "input"
CHANGE_EVENT = "change"


@dataclass(slots=True, frozen=True)
class ChangeNotification:
    """Record of a bubbling notification dispatched on a control."""

    event_type: str
    field_name: str
    bubbles: bool = True


class Control(Protocol):
    """One interactive ``input``, ``textarea`` or ``select`` element."""

    @property
    def tag(self) -> str:
        ...

    def attribute(self, name: str) -> Optional[str]:
        ...

    @property
    def value(self) -> str:
        ...

    def set_value(self, value: str) -> None:
        ...

    @property
    def checked(self) -> bool:
        ...

    def set_checked(self, checked: bool) -> None:
        ...

    def options(self) -> List[FieldOption]:
        ...

    def select_option(self, value: str) -> None:
        ...

    def explicit_label_text(self) -> Optional[str]:
        """Text of a ``<label for=...>`` pointing at this control's id."""
        ...

    def ancestor_label_text(self) -> Optional[str]:
        """Text of the closest ``<label>`` wrapping this control."""
        ...

    def previous_sibling_text(self) -> Optional[str]:
        """Text of the element immediately preceding this control."""
        ...

    def dispatch(self, event_type: str) -> None:
        """Dispatch a notification that bubbles to ancestor listeners."""
        ...


class ScanSurface(Protocol):
    """Container of controls, yielded in document order."""

    def controls(self) -> Iterable[Control]:
        ...


__all__ = [
    "INPUT_EVENT",
    "CHANGE_EVENT",
    "ChangeNotification",
    "Control",
    "ScanSurface",
]
