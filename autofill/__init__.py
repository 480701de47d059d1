"""Form field extraction, fuzzy constant matching and type-aware filling."""

from .errors import (
    AllFieldsAlreadyFilled,
    AutofillError,
    ConstantsError,
    NoInteractiveControls,
    NoMarkedFields,
)
from .forms import (
    all_fields_filled,
    collect_filled_values,
    empty_fields,
    extract_fields,
    fill_fields,
    match_fields_to_constants,
    resolve_label,
    scan_marked_fields,
)
from .models import Extraction, FieldDescriptor, FieldKind, FieldMatch, FieldOption
from .sources import ConstantsStore, StaticValueResolver, ValueResolver, load_constants, merge_value_maps
from .surface import HtmlDocument, PlaywrightSurface
from .workflow import FillReport, fill_marked_fields, fill_with_constants

__all__ = [
    "AllFieldsAlreadyFilled",
    "AutofillError",
    "ConstantsError",
    "NoInteractiveControls",
    "NoMarkedFields",
    "all_fields_filled",
    "collect_filled_values",
    "empty_fields",
    "extract_fields",
    "fill_fields",
    "match_fields_to_constants",
    "resolve_label",
    "scan_marked_fields",
    "Extraction",
    "FieldDescriptor",
    "FieldKind",
    "FieldMatch",
    "FieldOption",
    "ConstantsStore",
    "StaticValueResolver",
    "ValueResolver",
    "load_constants",
    "merge_value_maps",
    "HtmlDocument",
    "PlaywrightSurface",
    "FillReport",
    "fill_marked_fields",
    "fill_with_constants",
]
