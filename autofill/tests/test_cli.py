import json
import sys

import pytest
from click.testing import CliRunner

from autofill.cli.main import cli, main
from autofill.errors import AllFieldsAlreadyFilled

FORM = """
<html><body>
<form>
  <label for="first">First Name</label>
  <input id="first" name="first_name">
  <label for="city">City</label>
  <input id="city" name="city" value="##">
  <input type="checkbox" name="newsletter">
</form>
</body></html>
"""


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "form.html"
    path.write_text(FORM, encoding="utf-8")
    return path


@pytest.fixture
def constants(tmp_path):
    path = tmp_path / "constants.json"
    path.write_text(json.dumps({"first_name": "Jane", "newsletter": True}), encoding="utf-8")
    return path


def test_scan_prints_json_payload(page):
    result = CliRunner().invoke(cli, ["scan", str(page), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert [field["id"] for field in payload] == ["first_name", "city", "newsletter"]
    assert payload[0]["label"] == "First Name"


def test_scan_marked_only(page):
    result = CliRunner().invoke(cli, ["scan", str(page), "--marked", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert [field["id"] for field in payload] == ["city"]
    assert payload[0]["value"] == ""


def test_scan_requires_a_source():
    result = CliRunner().invoke(cli, ["scan"])

    assert result.exit_code == 2


def test_match_lists_matches(page, constants):
    result = CliRunner().invoke(cli, ["match", str(page), "--constants", str(constants)])

    assert result.exit_code == 0, result.output
    assert "field(s) matched" in result.output


def test_fill_writes_filled_document(page, constants, tmp_path):
    output = tmp_path / "out.html"

    result = CliRunner().invoke(cli, ["fill", str(page), "--constants", str(constants), "--output", str(output)])

    assert result.exit_code == 0, result.output
    html = output.read_text(encoding="utf-8")
    assert 'value="Jane"' in html
    assert "checked" in html


def test_fill_defaults_output_next_to_source(page, constants):
    result = CliRunner().invoke(cli, ["fill", str(page), "--constants", str(constants)])

    assert result.exit_code == 0, result.output
    assert (page.parent / "form.filled.html").exists()


def test_resolve_fills_marked_fields(page, tmp_path):
    values = tmp_path / "values.json"
    values.write_text(json.dumps({"fields": {"city": "Austin"}}), encoding="utf-8")
    output = tmp_path / "resolved.html"

    result = CliRunner().invoke(cli, ["resolve", str(page), "--values", str(values), "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert 'value="Austin"' in output.read_text(encoding="utf-8")


def test_fill_error_propagates_from_group(tmp_path, constants):
    filled = tmp_path / "filled.html"
    filled.write_text("<form><input name='first_name' value='Ann'></form>", encoding="utf-8")

    result = CliRunner().invoke(cli, ["fill", str(filled), "--constants", str(constants)])

    assert result.exit_code == 1
    assert isinstance(result.exception, AllFieldsAlreadyFilled)


def test_main_reports_errors(tmp_path, constants, monkeypatch, capsys):
    filled = tmp_path / "filled.html"
    filled.write_text("<form><input name='first_name' value='Ann'></form>", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "argv", ["autofill", "fill", str(filled), "--constants", str(constants)])

    with pytest.raises(SystemExit) as excinfo:
        main()

    assert excinfo.value.code == 1
    assert "All fields are already filled" in capsys.readouterr().out
