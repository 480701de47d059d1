"""Type-aware application of a value map to extracted controls."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Mapping, Optional, Sequence

from autofill.models import ElementMap, FieldDescriptor, FieldKind, FillValue
from autofill.surface.base import CHANGE_EVENT, INPUT_EVENT, Control

logger = logging.getLogger(__name__)

PASSWORD_KEY = "password"
CHECKBOX_TRUE_STRINGS = ("true", "yes")
"""Case-sensitive strings that check a checkbox, alongside boolean ``True``."""

Handler = Callable[[Control, FillValue, Optional[FieldDescriptor]], Optional[Control]]


def _as_text(target: FillValue) -> str:
    if target is True:
        return "true"
    return str(target)


def _is_blank(target: Optional[FillValue]) -> bool:
    return target is None or target is False or target == ""


def _apply_select(control: Control, target: FillValue, descriptor: Optional[FieldDescriptor]) -> Optional[Control]:
    text = _as_text(target)
    needle = text.lower()
    for option in control.options():
        option_text = option.text or ""
        if option.value == text or needle in option_text.lower():
            control.select_option(option.value)
            return control
    return None


def _apply_checkbox(control: Control, target: FillValue, descriptor: Optional[FieldDescriptor]) -> Optional[Control]:
    control.set_checked(target is True or target in CHECKBOX_TRUE_STRINGS)
    return control


def _apply_radio(control: Control, target: FillValue, descriptor: Optional[FieldDescriptor]) -> Optional[Control]:
    members = descriptor.bound_elements if descriptor is not None and descriptor.bound_elements else [control]
    text = _as_text(target)
    needle = text.lower()
    for member in members:
        member_value = member.value or ""
        if member_value == text or needle in member_value.lower():
            member.set_checked(True)
            return member
    return None


def _apply_file(control: Control, target: FillValue, descriptor: Optional[FieldDescriptor]) -> Optional[Control]:
    # Browsers reject programmatic values on file inputs.
    return None


def _apply_value(control: Control, target: FillValue, descriptor: Optional[FieldDescriptor]) -> Optional[Control]:
    control.set_value(_as_text(target))
    return control


HANDLERS: Dict[FieldKind, Handler] = {kind: _apply_value for kind in FieldKind}
HANDLERS.update(
    {
        FieldKind.SELECT: _apply_select,
        FieldKind.CHECKBOX: _apply_checkbox,
        FieldKind.RADIO: _apply_radio,
        FieldKind.FILE: _apply_file,
    }
)


def find_password_key(values: Mapping[str, FillValue]) -> Optional[str]:
    for key in values:
        if isinstance(key, str) and key.lower() == PASSWORD_KEY:
            return key
    return None


def notify_change(control: Control) -> None:
    """Emit the live-input and committed-change notifications for ``control``."""

    control.dispatch(INPUT_EVENT)
    control.dispatch(CHANGE_EVENT)


def fill_fields(
    elements: ElementMap,
    values: Mapping[str, FillValue],
    fields: Sequence[FieldDescriptor],
) -> int:
    """Write ``values`` into the controls of ``elements`` and return how many changed.

    ``values`` is keyed by descriptor id. A password control always takes the
    value stored under a key spelled ``password`` (any case) when one exists.
    Missing, empty and ``False`` values are skipped, as are selects and radio
    groups without a matching option.
    """

    descriptors = {descriptor.id: descriptor for descriptor in fields}
    password_key = find_password_key(values)
    filled = 0

    for field_id, control in elements.items():
        descriptor = descriptors.get(field_id)
        if descriptor is not None:
            kind = descriptor.kind
        else:
            kind = FieldKind.from_control(control.tag, control.attribute("type"))

        target = values.get(field_id)
        if kind is FieldKind.PASSWORD and password_key is not None:
            target = values[password_key]
            logger.debug(f"Password field {field_id!r} filled from {password_key!r}")

        if _is_blank(target):
            logger.debug(f"Skipping {field_id!r} - no value")
            continue

        mutated = HANDLERS[kind](control, target, descriptor)
        if mutated is None:
            logger.debug(f"No {kind.value} choice of {field_id!r} matches the value")
            continue

        notify_change(mutated)
        filled += 1
        logger.debug(f"Filled {kind.value} {field_id!r}")

    logger.info(f"Filled {filled} fields total")
    return filled


__all__ = [
    "PASSWORD_KEY",
    "CHECKBOX_TRUE_STRINGS",
    "HANDLERS",
    "find_password_key",
    "notify_change",
    "fill_fields",
]
