"""Data models shared by the extraction, matching and filling passes."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

if TYPE_CHECKING:
    from autofill.surface.base import Control

FillValue = Union[str, bool]


class FieldKind(str, enum.Enum):
    """Closed set of control kinds the fill executor knows how to write."""

    TEXT = "text"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    PASSWORD = "password"
    EMAIL = "email"
    TEL = "tel"
    NUMBER = "number"
    DATE = "date"
    URL = "url"
    SEARCH = "search"
    TIME = "time"
    DATETIME_LOCAL = "datetime-local"
    MONTH = "month"
    WEEK = "week"
    COLOR = "color"
    RANGE = "range"
    FILE = "file"

    @classmethod
    def from_control(cls, tag: str, input_type: Optional[str]) -> "FieldKind":
        """Derive the kind from a tag name and its ``type`` attribute.

        Unknown or missing input types behave like ``text``, as browsers do.
        """

        tag = (tag or "").lower()
        if tag == "select":
            return cls.SELECT
        if tag == "textarea":
            return cls.TEXTAREA
        try:
            return cls((input_type or "text").strip().lower())
        except ValueError:
            return cls.TEXT


@dataclass(slots=True)
class FieldOption:
    value: str
    text: str

    def to_dict(self) -> Dict[str, str]:
        return {"value": self.value, "text": self.text}


@dataclass(slots=True)
class FieldDescriptor:
    """Document-independent record of one logical form field."""

    id: str
    name: str
    kind: FieldKind
    label: str = ""
    placeholder: str = ""
    required: bool = False
    value: str = ""
    options: List[FieldOption] = field(default_factory=list)
    bound_elements: List["Control"] = field(default_factory=list, repr=False, compare=False)

    @property
    def is_choice(self) -> bool:
        return self.kind in (FieldKind.CHECKBOX, FieldKind.RADIO)

    def terms(self) -> List[str]:
        """Lower-cased, non-empty strings that describe this field's intent."""

        return [term.lower() for term in (self.label, self.name, self.placeholder, self.id) if term]

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-safe projection handed to value collaborators."""

        payload: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.kind.value,
            "label": self.label,
            "placeholder": self.placeholder,
            "required": self.required,
            "value": self.value,
        }
        if self.kind in (FieldKind.SELECT, FieldKind.RADIO):
            payload["options"] = [option.to_dict() for option in self.options]
        return payload


ElementMap = Dict[str, "Control"]
ValueMap = Mapping[str, FillValue]
MatchResult = Dict[str, FillValue]


@dataclass(slots=True)
class Extraction:
    """Descriptors plus the primary control behind each descriptor id."""

    fields: List[FieldDescriptor] = field(default_factory=list)
    elements: ElementMap = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.fields)

    def get(self, field_id: str) -> Optional[FieldDescriptor]:
        for descriptor in self.fields:
            if descriptor.id == field_id:
                return descriptor
        return None

    def subset(self, fields: List[FieldDescriptor]) -> "Extraction":
        """Return a new extraction restricted to ``fields``."""

        return Extraction(
            fields=list(fields),
            elements={item.id: self.elements[item.id] for item in fields if item.id in self.elements},
        )

    def to_payload(self) -> List[Dict[str, Any]]:
        return [descriptor.to_payload() for descriptor in self.fields]


@dataclass(slots=True)
class FieldMatch:
    """Winning ``(term, key)`` pair for one field."""

    field_id: str
    key: str
    term: str
    score: float
    value: FillValue


__all__ = [
    "FillValue",
    "FieldKind",
    "FieldOption",
    "FieldDescriptor",
    "ElementMap",
    "ValueMap",
    "MatchResult",
    "Extraction",
    "FieldMatch",
]
