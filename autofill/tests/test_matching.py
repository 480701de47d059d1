import pytest

from autofill.forms.matching import (
    best_match,
    explain_matches,
    match_fields_to_constants,
    normalize_key,
    similarity_score,
)
from autofill.models import FieldDescriptor, FieldKind


def _field(field_id: str, label: str = "", name: str = "", placeholder: str = "") -> FieldDescriptor:
    return FieldDescriptor(id=field_id, name=name, kind=FieldKind.TEXT, label=label, placeholder=placeholder)


def test_normalize_key_turns_underscores_into_spaces():
    assert normalize_key("First_Name") == "first name"


@pytest.mark.parametrize(
    ("term", "key", "expected"),
    [
        ("first name", "first name", 1.0),
        ("email address", "email", 0.9),
        ("zip", "zip code", 0.9),
        ("phone number", "mobile phone", 0.35),
        ("ab", "ba", 0.5),
        ("", "", 1.0),
    ],
)
def test_similarity_score_rules(term, key, expected):
    assert similarity_score(term, key) == pytest.approx(expected)


def test_character_overlap_never_exceeds_half():
    assert similarity_score("abcdef", "fedcba") == pytest.approx(0.5)
    assert similarity_score("xyz", "abc") == 0.0


def test_label_match_scores_exact():
    match = best_match(_field("first_name", label="First Name", name="first_name"), {"first_name": "Jane"})

    assert match is not None
    assert match.key == "first_name"
    assert match.term == "first name"
    assert match.score == pytest.approx(1.0)
    assert match.value == "Jane"


def test_score_equal_to_threshold_is_rejected():
    field = _field("x", label="ab")

    assert best_match(field, {"ba": "value"}, threshold=0.5) is None
    accepted = best_match(field, {"ba": "value"}, threshold=0.4)
    assert accepted is not None and accepted.score == pytest.approx(0.5)


def test_ties_keep_first_key():
    field = _field("mail", label="Email")

    match = best_match(field, {"email": "first@example.com", "EMAIL": "second@example.com"})

    assert match.value == "first@example.com"


def test_blank_keys_are_ignored():
    assert best_match(_field("zip", label="Zip"), {"": "x", "___": "y"}) is None


def test_field_without_terms_never_matches():
    assert best_match(FieldDescriptor(id="", name="", kind=FieldKind.TEXT), {"email": "x"}) is None


def test_match_fields_to_constants_omits_unmatched():
    fields = [
        _field("first_name", label="First Name", name="first_name"),
        _field("email", label="Email Address", name="email"),
        _field("custom_xyz", label="CustomXYZ123", name="custom_xyz"),
    ]
    known = {"first_name": "Jane", "email": "jane@example.com", "phone": "555-0100"}

    result = match_fields_to_constants(fields, known)

    assert result == {"first_name": "Jane", "email": "jane@example.com"}


def test_explain_matches_reports_winning_pairs():
    fields = [_field("home_phone", label="Home phone number")]

    (match,) = explain_matches(fields, {"phone": "555-0100", "first_name": "Jane"})

    assert match.field_id == "home_phone"
    assert match.key == "phone"
    assert match.score == pytest.approx(0.9)
