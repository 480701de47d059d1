"""Scan surfaces: the documents the autofill passes read from and write to."""

from .base import CHANGE_EVENT, INPUT_EVENT, ChangeNotification, Control, ScanSurface
from .browser import PlaywrightControl, PlaywrightSurface
from .html import HtmlControl, HtmlDocument

__all__ = [
    "CHANGE_EVENT",
    "INPUT_EVENT",
    "ChangeNotification",
    "Control",
    "ScanSurface",
    "HtmlControl",
    "HtmlDocument",
    "PlaywrightControl",
    "PlaywrightSurface",
]
