"""Orchestration flows tying extraction, matching and filling together.

The descriptor list and element map travel as return values and arguments;
nothing is held between calls, so every flow is one complete
extract -> resolve -> fill cycle against a single surface.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from autofill.config import get_settings
from autofill.errors import AllFieldsAlreadyFilled, NoMarkedFields
from autofill.forms.extraction import empty_fields, extract_fields, scan_marked_fields
from autofill.forms.filling import fill_fields
from autofill.forms.matching import match_fields_to_constants
from autofill.models import FieldDescriptor, FillValue
from autofill.sources.resolvers import ValueResolver, merge_value_maps
from autofill.surface.base import ScanSurface

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FillReport:
    """Outcome of one orchestration flow."""

    filled: int
    candidates: int
    source: str
    fields: List[FieldDescriptor] = field(default_factory=list)
    values: Dict[str, FillValue] = field(default_factory=dict)

    def summary(self) -> str:
        return f"Filled {self.filled}/{self.candidates} fields with {self.source}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filled": self.filled,
            "candidates": self.candidates,
            "source": self.source,
            "fields": [descriptor.to_payload() for descriptor in self.fields],
        }


def fill_with_constants(
    surface: ScanSurface,
    constants: Mapping[str, FillValue],
    *,
    threshold: Optional[float] = None,
) -> FillReport:
    """Fill every still-empty field whose intent matches a known constant.

    Raises
    ------
    NoInteractiveControls
        When the surface has no eligible control.
    AllFieldsAlreadyFilled
        When every field already has a value (checkboxes and radios never
        count as filled).
    """

    if threshold is None:
        threshold = get_settings().match_threshold

    extraction = extract_fields(surface)
    candidates = empty_fields(extraction.fields)
    if not candidates:
        raise AllFieldsAlreadyFilled(total=len(extraction.fields))

    matches = match_fields_to_constants(candidates, constants, threshold)
    values = merge_value_maps(constants, matches)
    scoped = extraction.subset(candidates)
    filled = fill_fields(scoped.elements, values, scoped.fields)

    report = FillReport(
        filled=filled,
        candidates=len(candidates),
        source="constants",
        fields=scoped.fields,
        values=dict(matches),
    )
    logger.info(report.summary())
    return report


def fill_marked_fields(
    surface: ScanSurface,
    resolver: ValueResolver,
    *,
    token: Optional[str] = None,
    context: Optional[Mapping[str, Any]] = None,
) -> FillReport:
    """Resolve and fill only the fields the user marked with the trigger token.

    Raises
    ------
    NoInteractiveControls
        When the surface has no eligible control.
    NoMarkedFields
        When no control currently holds the token.
    """

    if token is None:
        token = get_settings().trigger_token

    extraction = scan_marked_fields(surface, token)
    if not extraction.fields:
        raise NoMarkedFields(token)

    values = dict(resolver.resolve(extraction.to_payload(), context))
    filled = fill_fields(extraction.elements, values, extraction.fields)

    report = FillReport(
        filled=filled,
        candidates=len(extraction.fields),
        source="resolver",
        fields=extraction.fields,
        values=values,
    )
    logger.info(report.summary())
    return report


__all__ = ["FillReport", "fill_with_constants", "fill_marked_fields"]
