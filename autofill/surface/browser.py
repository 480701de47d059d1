"""Live browser scan surface built on Playwright's sync API.

Each control wraps an ``ElementHandle`` and talks to the DOM through short
``evaluate`` scripts, so values are assigned directly and the ``input`` /
``change`` notifications are real bubbling DOM events that framework
listeners (React, Vue, ...) pick up.
"""
from __future__ import annotations

import logging
from typing import Any, Iterator, List, Optional

from playwright.sync_api import ElementHandle, Error as PlaywrightError, Page

from autofill.models import FieldOption

logger = logging.getLogger(__name__)

CONTROL_SELECTOR = "input, textarea, select"
"""CSS selector for the controls a form can own."""

_IS_FORM_OWNED_SCRIPT = "(el) => el.form !== null && el.form !== undefined"
_TAG_SCRIPT = "(el) => el.tagName.toLowerCase()"
_VALUE_SCRIPT = "(el) => (el.value === undefined || el.value === null) ? '' : String(el.value)"
_SET_VALUE_SCRIPT = "(el, value) => { el.value = value; }"
_CHECKED_SCRIPT = "(el) => !!el.checked"
_SET_CHECKED_SCRIPT = "(el, checked) => { el.checked = checked; }"
_OPTIONS_SCRIPT = """
(el) => Array.from(el.options || []).map(option => ({
    value: option.value,
    text: option.text,
}))
"""
_LABEL_FOR_SCRIPT = """
(el) => {
    if (!el.id) {
        return null;
    }
    const label = document.querySelector(`label[for="${CSS.escape(el.id)}"]`);
    return label ? label.textContent : null;
}
"""
_ANCESTOR_LABEL_SCRIPT = """
(el) => {
    const label = el.closest("label");
    return label ? label.textContent : null;
}
"""
_PREVIOUS_SIBLING_SCRIPT = """
(el) => {
    const previous = el.previousElementSibling;
    return previous ? previous.textContent : null;
}
"""
_DISPATCH_SCRIPT = "(el, type) => el.dispatchEvent(new Event(type, { bubbles: true }))"


class PlaywrightSurface:
    """Scan surface over a Playwright :class:`Page`."""

    def __init__(self, page: Page, *, selector: str = CONTROL_SELECTOR) -> None:
        self._page = page
        self._selector = selector

    @property
    def page(self) -> Page:
        return self._page

    def controls(self) -> Iterator["PlaywrightControl"]:
        for handle in self._page.query_selector_all(self._selector):
            try:
                owned = handle.evaluate(_IS_FORM_OWNED_SCRIPT)
            except PlaywrightError as exc:
                # Element detached between the query and the probe.
                logger.debug(f"Skipping detached control: {exc}")
                continue
            if owned:
                yield PlaywrightControl(handle)


class PlaywrightControl:
    """Control wrapper around one Playwright element handle."""

    def __init__(self, handle: ElementHandle) -> None:
        self._handle = handle
        self._tag: Optional[str] = None

    def __repr__(self) -> str:
        return f"PlaywrightControl(<{self.tag} name={self.attribute('name')!r}>)"

    @property
    def handle(self) -> ElementHandle:
        return self._handle

    @property
    def tag(self) -> str:
        if self._tag is None:
            self._tag = str(self._handle.evaluate(_TAG_SCRIPT) or "").lower()
        return self._tag

    def attribute(self, name: str) -> Optional[str]:
        return self._handle.get_attribute(name)

    @property
    def value(self) -> str:
        return str(self._handle.evaluate(_VALUE_SCRIPT) or "")

    def set_value(self, value: str) -> None:
        self._handle.evaluate(_SET_VALUE_SCRIPT, value)

    @property
    def checked(self) -> bool:
        return bool(self._handle.evaluate(_CHECKED_SCRIPT))

    def set_checked(self, checked: bool) -> None:
        self._handle.evaluate(_SET_CHECKED_SCRIPT, checked)

    def options(self) -> List[FieldOption]:
        if self.tag != "select":
            return []
        raw: Any = self._handle.evaluate(_OPTIONS_SCRIPT) or []
        options: List[FieldOption] = []
        for entry in raw:
            if not isinstance(entry, dict):
                continue
            options.append(FieldOption(value=str(entry.get("value") or ""), text=str(entry.get("text") or "")))
        return options

    def select_option(self, value: str) -> None:
        self._handle.evaluate(_SET_VALUE_SCRIPT, value)

    def explicit_label_text(self) -> Optional[str]:
        return self._text_or_none(_LABEL_FOR_SCRIPT)

    def ancestor_label_text(self) -> Optional[str]:
        return self._text_or_none(_ANCESTOR_LABEL_SCRIPT)

    def previous_sibling_text(self) -> Optional[str]:
        return self._text_or_none(_PREVIOUS_SIBLING_SCRIPT)

    def dispatch(self, event_type: str) -> None:
        self._handle.evaluate(_DISPATCH_SCRIPT, event_type)

    def _text_or_none(self, script: str) -> Optional[str]:
        result = self._handle.evaluate(script)
        if result is None:
            return None
        return str(result)


__all__ = ["CONTROL_SELECTOR", "PlaywrightSurface", "PlaywrightControl"]
