"""Extraction, matching and filling passes over a scan surface."""

from .extraction import (
    all_fields_filled,
    collect_filled_values,
    empty_fields,
    extract_fields,
    generate_field_id,
    scan_marked_fields,
    slugify_label,
)
from .filling import fill_fields
from .labels import resolve_label, resolve_label_with_source
from .matching import best_match, explain_matches, match_fields_to_constants, similarity_score

__all__ = [
    "all_fields_filled",
    "collect_filled_values",
    "empty_fields",
    "extract_fields",
    "generate_field_id",
    "scan_marked_fields",
    "slugify_label",
    "fill_fields",
    "resolve_label",
    "resolve_label_with_source",
    "best_match",
    "explain_matches",
    "match_fields_to_constants",
    "similarity_score",
]
