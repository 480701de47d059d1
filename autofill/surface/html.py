"""Static HTML scan surface backed by BeautifulSoup.

``HtmlDocument`` lets the extraction and fill passes run against a saved page
(or any markup string) without a browser. Mutations are written back into the
parsed tree, so :meth:`HtmlDocument.to_html` returns the filled document.
Bubbling notifications are recorded on the document, which plays the part of
the ancestor every event bubbles up to.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Union

from bs4 import BeautifulSoup, Tag

from autofill.config import get_settings
from autofill.models import FieldOption

from .base import ChangeNotification

logger = logging.getLogger(__name__)

CONTROL_TAGS = ("input", "textarea", "select")
"""Tags enumerated by :meth:`HtmlDocument.controls`."""

_CHOICE_TYPES = ("checkbox", "radio")

NotificationListener = Callable[[ChangeNotification], None]


def _collapse(text: str) -> str:
    return " ".join(text.split())


def _option_value(option: Tag) -> str:
    value = option.get("value")
    if value is None:
        return _collapse(option.get_text())
    return str(value)


def _option_text(option: Tag) -> str:
    return _collapse(option.get_text())


class HtmlDocument:
    """Scan surface over a parsed HTML document."""

    def __init__(self, markup: str, *, parser: Optional[str] = None) -> None:
        self._soup = BeautifulSoup(markup, parser or get_settings().html_parser)
        self._listeners: List[NotificationListener] = []
        self.notifications: List[ChangeNotification] = []

    @classmethod
    def from_path(
        cls,
        path: Union[str, Path],
        *,
        parser: Optional[str] = None,
        encoding: str = "utf-8",
    ) -> "HtmlDocument":
        markup = Path(path).read_text(encoding=encoding)
        return cls(markup, parser=parser)

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup

    def controls(self) -> Iterator["HtmlControl"]:
        """Yield form-owned ``input``/``textarea``/``select`` controls in document order."""

        form_ids = {str(form["id"]) for form in self._soup.find_all("form") if form.get("id")}
        for tag in self._soup.find_all(list(CONTROL_TAGS)):
            if tag.find_parent("form") is None and tag.get("form") not in form_ids:
                continue
            yield HtmlControl(self, tag)

    def add_listener(self, listener: NotificationListener) -> None:
        self._listeners.append(listener)

    def to_html(self) -> str:
        return str(self._soup)

    def write(self, path: Union[str, Path], *, encoding: str = "utf-8") -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.to_html(), encoding=encoding)
        return target

    def _form_of(self, tag: Tag) -> Optional[Tag]:
        form = tag.find_parent("form")
        if form is not None:
            return form
        owner = tag.get("form")
        if owner:
            return self._soup.find("form", attrs={"id": owner})
        return None

    def _label_for(self, control_id: str) -> Optional[Tag]:
        return self._soup.find("label", attrs={"for": control_id})

    def _notify(self, notification: ChangeNotification) -> None:
        self.notifications.append(notification)
        for listener in self._listeners:
            listener(notification)


class HtmlControl:
    """Control wrapper around one BeautifulSoup tag."""

    __slots__ = ("_document", "_tag")

    def __init__(self, document: HtmlDocument, tag: Tag) -> None:
        self._document = document
        self._tag = tag

    def __repr__(self) -> str:
        return f"HtmlControl(<{self.tag} name={self.attribute('name')!r} id={self.attribute('id')!r}>)"

    @property
    def element(self) -> Tag:
        return self._tag

    @property
    def tag(self) -> str:
        return (self._tag.name or "").lower()

    @property
    def input_type(self) -> str:
        return (self.attribute("type") or "text").strip().lower()

    def attribute(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    @property
    def value(self) -> str:
        if self.tag == "textarea":
            return self._tag.get_text()
        if self.tag == "select":
            options = self._tag.find_all("option")
            selected = [option for option in options if option.has_attr("selected")]
            if selected:
                return _option_value(selected[0])
            if options and not self._tag.has_attr("multiple"):
                return _option_value(options[0])
            return ""
        value = self._tag.get("value")
        if value is None:
            # Browsers report "on" for choice inputs without a value attribute.
            return "on" if self.input_type in _CHOICE_TYPES else ""
        return str(value)

    def set_value(self, value: str) -> None:
        if self.tag == "textarea":
            self._tag.string = value
        elif self.tag == "select":
            self.select_option(value)
        else:
            self._tag["value"] = value

    @property
    def checked(self) -> bool:
        return self._tag.has_attr("checked")

    def set_checked(self, checked: bool) -> None:
        if not checked:
            if self._tag.has_attr("checked"):
                del self._tag["checked"]
            return
        self._tag["checked"] = ""
        name = self.attribute("name")
        if self.input_type != "radio" or not name:
            return
        scope = self._document._form_of(self._tag) or self._document.soup
        for other in scope.find_all("input"):
            if other is self._tag or other.get("name") != name:
                continue
            if str(other.get("type") or "").lower() == "radio" and other.has_attr("checked"):
                del other["checked"]

    def options(self) -> List[FieldOption]:
        if self.tag != "select":
            return []
        return [
            FieldOption(value=_option_value(option), text=_option_text(option))
            for option in self._tag.find_all("option")
        ]

    def select_option(self, value: str) -> None:
        options = self._tag.find_all("option")
        chosen = next((option for option in options if _option_value(option) == value), None)
        if chosen is None:
            logger.debug(f"No option with value {value!r} in {self!r}")
            return
        for option in options:
            if option is chosen:
                option["selected"] = ""
            elif option.has_attr("selected"):
                del option["selected"]

    def explicit_label_text(self) -> Optional[str]:
        control_id = self.attribute("id")
        if not control_id:
            return None
        label = self._document._label_for(control_id)
        return label.get_text() if label is not None else None

    def ancestor_label_text(self) -> Optional[str]:
        label = self._tag.find_parent("label")
        return label.get_text() if label is not None else None

    def previous_sibling_text(self) -> Optional[str]:
        for sibling in self._tag.previous_siblings:
            if isinstance(sibling, Tag):
                return sibling.get_text()
        return None

    def dispatch(self, event_type: str) -> None:
        field_name = self.attribute("name") or self.attribute("id") or self.tag
        self._document._notify(ChangeNotification(event_type=event_type, field_name=field_name))


__all__ = ["CONTROL_TAGS", "HtmlDocument", "HtmlControl"]
