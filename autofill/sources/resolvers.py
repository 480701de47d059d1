"""Value resolvers: collaborators that turn field payloads into a value map."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, Union

from autofill.errors import ConstantsError
from autofill.forms.filling import find_password_key
from autofill.models import FillValue

logger = logging.getLogger(__name__)


class ValueResolver(Protocol):
    """Protocol describing any external source of field values (AI backend, fixture, ...)."""

    def resolve(
        self,
        fields: Sequence[Mapping[str, Any]],
        context: Mapping[str, Any] | None = None,
    ) -> Mapping[str, FillValue]:
        ...


def merge_value_maps(*maps: Optional[Mapping[str, FillValue]]) -> Dict[str, FillValue]:
    """Merge value maps left to right; later sources win."""

    merged: Dict[str, FillValue] = {}
    for values in maps:
        if values:
            merged.update(values)
    return merged


class StaticValueResolver:
    """Resolver answering from a fixed mapping, e.g. a saved AI response."""

    def __init__(self, values: Mapping[str, FillValue]) -> None:
        self._values = dict(values)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "StaticValueResolver":
        source = Path(path)
        try:
            payload = json.loads(source.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConstantsError(f"Cannot load values from {source}: {exc}", data={"path": str(source)}) from exc
        # Accept both a bare mapping and the {"fields": {...}} response envelope.
        if isinstance(payload, dict) and isinstance(payload.get("fields"), dict):
            payload = payload["fields"]
        if not isinstance(payload, dict):
            raise ConstantsError(f"Values file {source} must contain a JSON object")
        values: Dict[str, FillValue] = {}
        for key, value in payload.items():
            if isinstance(value, (str, bool)):
                values[str(key)] = value
            elif value is not None:
                values[str(key)] = str(value)
        return cls(values)

    def resolve(
        self,
        fields: Sequence[Mapping[str, Any]],
        context: Mapping[str, Any] | None = None,
    ) -> Dict[str, FillValue]:
        requested = {str(field.get("id")) for field in fields}
        resolved = {key: value for key, value in self._values.items() if key in requested}
        password_key = find_password_key(self._values)
        if password_key is not None:
            resolved[password_key] = self._values[password_key]
        logger.debug(f"Resolved {len(resolved)} of {len(requested)} requested fields")
        return resolved


__all__ = ["ValueResolver", "StaticValueResolver", "merge_value_maps"]
