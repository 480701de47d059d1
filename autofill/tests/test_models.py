import pytest

from autofill.models import Extraction, FieldDescriptor, FieldKind, FieldOption


@pytest.mark.parametrize(
    ("tag", "input_type", "expected"),
    [
        ("select", None, FieldKind.SELECT),
        ("TEXTAREA", "email", FieldKind.TEXTAREA),
        ("input", None, FieldKind.TEXT),
        ("input", " Email ", FieldKind.EMAIL),
        ("input", "datetime-local", FieldKind.DATETIME_LOCAL),
        ("input", "made-up", FieldKind.TEXT),
    ],
)
def test_field_kind_from_control(tag, input_type, expected):
    assert FieldKind.from_control(tag, input_type) is expected


def test_payload_includes_options_only_for_choices():
    select = FieldDescriptor(
        id="country",
        name="country",
        kind=FieldKind.SELECT,
        label="Country",
        options=[FieldOption(value="us", text="United States")],
    )
    text = FieldDescriptor(id="city", name="city", kind=FieldKind.TEXT, required=True)

    assert select.to_payload() == {
        "id": "country",
        "name": "country",
        "type": "select",
        "label": "Country",
        "placeholder": "",
        "required": False,
        "value": "",
        "options": [{"value": "us", "text": "United States"}],
    }
    assert "options" not in text.to_payload()
    assert text.to_payload()["required"] is True


def test_terms_skip_blank_attributes():
    field = FieldDescriptor(id="zip", name="", kind=FieldKind.TEXT, label="Zip Code", placeholder="")

    assert field.terms() == ["zip code", "zip"]


def test_extraction_subset_keeps_matching_elements():
    first = FieldDescriptor(id="a", name="a", kind=FieldKind.TEXT)
    second = FieldDescriptor(id="b", name="b", kind=FieldKind.TEXT)
    extraction = Extraction(fields=[first, second], elements={"a": object(), "b": object()})

    scoped = extraction.subset([second])

    assert scoped.fields == [second]
    assert list(scoped.elements) == ["b"]
    assert extraction.get("missing") is None
