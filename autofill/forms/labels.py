"""Human-readable label resolution for a single control."""
from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

from autofill.surface.base import Control


def _explicit_label(control: Control) -> Optional[str]:
    text = control.explicit_label_text()
    return text.strip() if text else None


def _ancestor_label(control: Control) -> Optional[str]:
    text = control.ancestor_label_text()
    if not text:
        return None
    own_value = control.value
    if own_value:
        # Drop the control's own text so a wrapped textarea is not echoed back.
        text = text.replace(own_value, "", 1)
    return text.strip()


def _previous_sibling(control: Control) -> Optional[str]:
    text = control.previous_sibling_text()
    return text.strip() if text else None


def _aria_label(control: Control) -> Optional[str]:
    text = control.attribute("aria-label")
    return text.strip() if text else None


def _fallback(control: Control) -> Optional[str]:
    return control.attribute("placeholder") or control.attribute("name") or ""


LABEL_RULES: Sequence[Tuple[str, Callable[[Control], Optional[str]]]] = (
    ("label_for", _explicit_label),
    ("ancestor_label", _ancestor_label),
    ("previous_sibling", _previous_sibling),
    ("aria_label", _aria_label),
    ("fallback", _fallback),
)
"""Ordered rules; the first non-empty result wins."""


def resolve_label_with_source(control: Control) -> Tuple[str, str]:
    """Return ``(label, rule_name)`` for ``control``.

    ``rule_name`` is ``"none"`` when every rule came back empty.
    """

    for rule_name, rule in LABEL_RULES:
        label = rule(control)
        if label:
            return label, rule_name
    return "", "none"


def resolve_label(control: Control) -> str:
    """Return the human-readable label for ``control`` (possibly empty)."""

    label, _ = resolve_label_with_source(control)
    return label


__all__ = ["LABEL_RULES", "resolve_label", "resolve_label_with_source"]
