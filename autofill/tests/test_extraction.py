import re

import pytest

from autofill.errors import NoInteractiveControls
from autofill.forms.extraction import (
    all_fields_filled,
    collect_filled_values,
    empty_fields,
    extract_fields,
    scan_marked_fields,
    slugify_label,
)
from autofill.models import FieldKind


def test_extract_fields_in_document_order(signup_document):
    extraction = extract_fields(signup_document)

    assert [field.id for field in extraction.fields] == ["first_name", "email", "country", "plan", "terms"]
    assert set(extraction.elements) == {"first_name", "email", "country", "plan", "terms"}


def test_extract_fields_reads_descriptor_attributes(signup_document):
    extraction = extract_fields(signup_document)

    first = extraction.get("first_name")
    assert first.label == "First Name"
    assert first.kind is FieldKind.TEXT
    assert first.required is True

    email = extraction.get("email")
    assert email.kind is FieldKind.EMAIL
    assert email.value == "a@b.c"
    assert email.label == "you@example.com"
    assert email.required is False

    country = extraction.get("country")
    assert country.kind is FieldKind.SELECT
    assert [(option.value, option.text) for option in country.options] == [
        ("", "Choose"),
        ("us", "United States"),
        ("ca", "Canada"),
    ]


def test_radio_buttons_fold_into_one_field(signup_document):
    extraction = extract_fields(signup_document)

    plan = extraction.get("plan")
    assert plan.kind is FieldKind.RADIO
    assert [(option.value, option.text) for option in plan.options] == [("basic", "Basic"), ("pro", "Pro")]
    assert len(plan.bound_elements) == 2
    assert plan.value == ""


def test_radios_without_name_are_not_folded(make_document):
    document = make_document(
        "<form><input type='radio' id='r1' value='a'><input type='radio' id='r2' value='b'></form>"
    )

    extraction = extract_fields(document)

    assert [field.id for field in extraction.fields] == ["r1", "r2"]


def test_action_and_hidden_inputs_are_excluded(signup_document):
    ids = [field.id for field in extract_fields(signup_document).fields]

    assert "csrf" not in ids
    assert "outside" not in ids
    assert all(field.kind is not FieldKind.FILE for field in extract_fields(signup_document).fields)


def test_controls_owned_by_form_attribute_are_included(make_document):
    document = make_document("<form id='f'></form><input name='remote' form='f'><input name='stray'>")

    extraction = extract_fields(document)

    assert [field.id for field in extraction.fields] == ["remote"]


def test_field_id_falls_back_to_element_id_then_label_slug(make_document):
    document = make_document(
        "<form>"
        "<input id='phone-1'>"
        "<label>Zip Code <input></label>"
        "</form>"
    )

    extraction = extract_fields(document)

    assert [field.id for field in extraction.fields] == ["phone-1", "zip_code"]


def test_field_id_uses_random_token_without_any_hint(make_document):
    document = make_document("<form><input type='text'></form>")

    (field,) = extract_fields(document).fields

    assert re.fullmatch(r"field_[0-9a-f]{9}", field.id)


def test_duplicate_ids_get_suffixes(make_document):
    document = make_document("<form><input name='dup'><input name='dup'><input name='dup'></form>")

    extraction = extract_fields(document)

    assert [field.id for field in extraction.fields] == ["dup", "dup_2", "dup_3"]
    assert len(extraction.elements) == 3


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Zip Code", "zip_code"),
        ("E-mail  Address!", "e_mail_address_"),
        ("***", ""),
        ("", ""),
    ],
)
def test_slugify_label(label, expected):
    assert slugify_label(label) == expected


def test_extract_fields_raises_without_controls(make_document):
    with pytest.raises(NoInteractiveControls):
        extract_fields(make_document("<form><input type='submit'><button>Go</button></form>"))

    with pytest.raises(NoInteractiveControls):
        extract_fields(make_document("<p>No forms here</p>"))


def test_scan_marked_fields_keeps_only_token_holders(make_document):
    document = make_document(
        "<form>"
        "<input name='city' value='##'>"
        "<input name='state' value='TX'>"
        "<textarea name='bio'> ## </textarea>"
        "</form>"
    )

    extraction = scan_marked_fields(document, "##")

    assert [field.id for field in extraction.fields] == ["city", "bio"]
    assert all(field.value == "" for field in extraction.fields)


def test_scan_marked_fields_uses_configured_token(make_document, monkeypatch):
    monkeypatch.setenv("AUTOFILL_TRIGGER_TOKEN", "@@")
    document = make_document("<form><input name='a' value='##'><input name='b' value='@@'></form>")

    extraction = scan_marked_fields(document)

    assert [field.id for field in extraction.fields] == ["b"]


def test_scan_marked_fields_without_marks_is_empty(make_document):
    extraction = scan_marked_fields(make_document("<form><input name='a' value='x'></form>"), "##")

    assert len(extraction) == 0

    with pytest.raises(NoInteractiveControls):
        scan_marked_fields(make_document("<form></form>"), "##")


def test_empty_fields_always_include_choices(signup_document):
    fields = extract_fields(signup_document).fields

    candidates = [field.id for field in empty_fields(fields)]

    assert candidates == ["first_name", "country", "plan", "terms"]
    assert all_fields_filled(fields) is False


def test_all_fields_filled_for_prefilled_text(make_document):
    fields = extract_fields(make_document("<form><input name='a' value='x'><textarea name='b'>y</textarea></form>")).fields

    assert all_fields_filled(fields) is True


def test_collect_filled_values_snapshot(make_document):
    document = make_document(
        "<form>"
        "<input name='name' value='Jane'>"
        "<input name='blank' value='  '>"
        "<input type='checkbox' name='news' checked>"
        "<input type='radio' name='size' value='s'>"
        "<input type='radio' name='size' value='m' checked>"
        "<input type='radio' name='color' value='red'>"
        "</form>"
    )

    values = collect_filled_values(extract_fields(document))

    assert values == {"name": "Jane", "news": True, "size": "m"}


def test_marked_radio_options_omit_the_token(make_document):
    document = make_document(
        "<form>"
        "<label><input type='radio' name='plan' value='##'> Basic</label>"
        "<label><input type='radio' name='plan' value='##'> Pro</label>"
        "<input type='radio' name='plan' value='team'>"
        "</form>"
    )

    extraction = scan_marked_fields(document, "##")

    (plan,) = extraction.fields
    assert plan.options == []
    assert len(plan.bound_elements) == 2
    assert "##" not in str(extraction.to_payload())
