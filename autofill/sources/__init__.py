"""Value sources feeding the fill executor."""

from .constants import ConstantsStore, constant_to_text, load_constants, parse_constants
from .resolvers import StaticValueResolver, ValueResolver, merge_value_maps

__all__ = [
    "ConstantsStore",
    "constant_to_text",
    "load_constants",
    "parse_constants",
    "StaticValueResolver",
    "ValueResolver",
    "merge_value_maps",
]
