"""Field extraction and trigger-token scanning over a scan surface.

Both passes walk the same controls in document order and build
:class:`~autofill.models.FieldDescriptor` records:

* :func:`extract_fields` keeps every eligible control and folds radio buttons
  that share a ``name`` into a single descriptor.
* :func:`scan_marked_fields` keeps only the controls whose current value is the
  trigger token, so a user can flag individual fields for external resolution.

Controls are only read here; nothing is written back to the surface.
"""
from __future__ import annotations

import logging
import re
import uuid
from typing import Dict, List, Optional, Sequence

from autofill.config import get_settings
from autofill.errors import NoInteractiveControls
from autofill.models import Extraction, FieldDescriptor, FieldKind, FieldOption, FillValue
from autofill.surface.base import Control, ScanSurface

from .labels import resolve_label

logger = logging.getLogger(__name__)

CONTROL_TAGS = frozenset({"input", "textarea", "select"})
EXCLUDED_INPUT_TYPES = frozenset({"submit", "button", "reset", "image", "hidden"})
"""Pure action controls and hidden inputs never become fields."""

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


def is_eligible(control: Control) -> bool:
    tag = control.tag
    if tag not in CONTROL_TAGS:
        return False
    if tag == "input":
        input_type = (control.attribute("type") or "").strip().lower()
        if input_type in EXCLUDED_INPUT_TYPES:
            return False
    return True


def slugify_label(label: str) -> str:
    """Lower-case ``label`` and collapse every non ``[a-z0-9]`` run into ``_``.

    A slug made only of underscores carries no information and is returned
    as an empty string.
    """

    slug = _SLUG_PATTERN.sub("_", label.lower())
    return slug if slug.strip("_") else ""


def generate_field_id(control: Control, label: str) -> str:
    """Return the id for a new descriptor: name, element id, label slug, random token."""

    name = control.attribute("name")
    if name:
        return name
    element_id = control.attribute("id")
    if element_id:
        return element_id
    slug = slugify_label(label)
    if slug:
        return slug
    return f"field_{uuid.uuid4().hex[:9]}"


class _ExtractionBuilder:
    def __init__(self) -> None:
        self.extraction = Extraction()
        self._radio_groups: Dict[str, FieldDescriptor] = {}

    def add(self, control: Control, *, marked: bool = False) -> FieldDescriptor:
        kind = FieldKind.from_control(control.tag, control.attribute("type"))
        name = control.attribute("name") or ""
        label = resolve_label(control)

        if kind is FieldKind.RADIO and name in self._radio_groups:
            group = self._radio_groups[name]
            if not marked:
                group.options.append(self._radio_option(control, label))
            group.bound_elements.append(control)
            return group

        descriptor = FieldDescriptor(
            id=self._unique_id(generate_field_id(control, label)),
            name=name,
            kind=kind,
            label=label,
            placeholder=control.attribute("placeholder") or "",
            required=control.attribute("required") is not None,
            value="" if marked or kind in (FieldKind.CHECKBOX, FieldKind.RADIO) else control.value,
        )
        if kind is FieldKind.SELECT:
            descriptor.options = control.options()
        elif kind is FieldKind.RADIO:
            # A marked member holds the token as its value; keep it out of the options.
            descriptor.options = [] if marked else [self._radio_option(control, label)]
            descriptor.bound_elements = [control]
            if name:
                self._radio_groups[name] = descriptor

        self.extraction.fields.append(descriptor)
        self.extraction.elements[descriptor.id] = control
        return descriptor

    def _unique_id(self, candidate: str) -> str:
        taken = self.extraction.elements
        if candidate not in taken:
            return candidate
        suffix = 2
        while f"{candidate}_{suffix}" in taken:
            suffix += 1
        return f"{candidate}_{suffix}"

    @staticmethod
    def _radio_option(control: Control, label: str) -> FieldOption:
        value = control.value
        return FieldOption(value=value, text=label or value)


def extract_fields(surface: ScanSurface) -> Extraction:
    """Collect a descriptor for every eligible control on ``surface``.

    Raises
    ------
    NoInteractiveControls
        When the surface holds no eligible control at all.
    """

    builder = _ExtractionBuilder()
    eligible = 0
    for control in surface.controls():
        if not is_eligible(control):
            continue
        eligible += 1
        builder.add(control)

    if not eligible:
        raise NoInteractiveControls()

    logger.info(f"Collected {len(builder.extraction.fields)} fields from {eligible} controls")
    return builder.extraction


def scan_marked_fields(surface: ScanSurface, token: Optional[str] = None) -> Extraction:
    """Collect descriptors only for controls whose trimmed value equals ``token``.

    The marker never leaks downstream: every emitted descriptor has an empty
    ``value``. An empty result is returned when controls exist but none is
    marked; :class:`NoInteractiveControls` is raised when there are no
    controls at all.
    """

    if token is None:
        token = get_settings().trigger_token

    builder = _ExtractionBuilder()
    eligible = 0
    for control in surface.controls():
        if not is_eligible(control):
            continue
        eligible += 1
        if control.value.strip() != token:
            continue
        descriptor = builder.add(control, marked=True)
        logger.debug(f"Found marked field {descriptor.label!r} ({descriptor.id})")

    if not eligible:
        raise NoInteractiveControls()

    logger.info(f"Found {len(builder.extraction.fields)} fields marked with {token!r}")
    return builder.extraction


def empty_fields(fields: Sequence[FieldDescriptor]) -> List[FieldDescriptor]:
    """Return the fields still needing a value; checkboxes and radios always qualify."""

    return [field for field in fields if field.is_choice or not field.value.strip()]


def all_fields_filled(fields: Sequence[FieldDescriptor]) -> bool:
    return not empty_fields(fields)


def collect_filled_values(extraction: Extraction) -> Dict[str, FillValue]:
    """Snapshot the current non-blank value of every extracted field.

    Checkboxes report their checked state; radio groups report the value of
    their checked member, if any.
    """

    snapshot: Dict[str, FillValue] = {}
    for descriptor in extraction.fields:
        control = extraction.elements.get(descriptor.id)
        if control is None:
            continue
        if descriptor.kind is FieldKind.CHECKBOX:
            snapshot[descriptor.id] = control.checked
            continue
        if descriptor.kind is FieldKind.RADIO:
            members = descriptor.bound_elements or [control]
            checked = next((member for member in members if member.checked), None)
            if checked is not None:
                snapshot[descriptor.id] = checked.value
            continue
        value = control.value
        if value and value.strip():
            snapshot[descriptor.id] = value
    return snapshot


__all__ = [
    "CONTROL_TAGS",
    "EXCLUDED_INPUT_TYPES",
    "is_eligible",
    "slugify_label",
    "generate_field_id",
    "extract_fields",
    "scan_marked_fields",
    "empty_fields",
    "all_fields_filled",
    "collect_filled_values",
]
