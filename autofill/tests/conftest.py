from __future__ import annotations

import pytest

from autofill.config import get_settings
from autofill.surface.html import HtmlDocument

_SETTINGS_ENV = (
    "AUTOFILL_TRIGGER_TOKEN",
    "AUTOFILL_MATCH_THRESHOLD",
    "AUTOFILL_CONSTANTS_PATH",
    "AUTOFILL_HTML_PARSER",
    "AUTOFILL_LOG_LEVEL",
    "PLAYWRIGHT_BROWSER",
    "PLAYWRIGHT_HEADLESS",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_document():
    def factory(markup: str) -> HtmlDocument:
        return HtmlDocument(markup, parser="lxml")

    return factory


SIGNUP_FORM = """
<html><body>
<form id="signup">
  <label for="first">First Name</label>
  <input id="first" name="first_name" required>
  <input type="email" name="email" placeholder="you@example.com" value="a@b.c">
  <select name="country">
    <option value="">Choose</option>
    <option value="us">United States</option>
    <option value="ca">Canada</option>
  </select>
  <label><input type="radio" name="plan" value="basic"> Basic</label>
  <label><input type="radio" name="plan" value="pro"> Pro</label>
  <input type="checkbox" name="terms" value="agree">
  <input type="submit" value="Go">
  <input type="hidden" name="csrf" value="x">
  <input type="reset">
  <input type="image" src="go.png">
  <button>Send</button>
</form>
<input name="outside">
</body></html>
"""


@pytest.fixture
def signup_document(make_document):
    return make_document(SIGNUP_FORM)
