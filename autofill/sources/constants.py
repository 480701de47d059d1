"""Read-only store of the known key/value facts used for constant filling."""
from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from autofill.config import get_settings
from autofill.errors import ConstantsError

logger = logging.getLogger(__name__)


def constant_to_text(key: str, value: Any) -> str:
    """Render one JSON scalar the way form controls expect it.

    Booleans become ``"yes"``/``"no"``, whole numbers drop their decimal
    part and ``null`` becomes an empty string.
    """

    if isinstance(value, bool):
        return "yes" if value else "no"
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    raise ConstantsError(f"Constant {key!r} must be a string, number or boolean", data={"key": key})


def split_full_name(constants: Dict[str, str]) -> Dict[str, str]:
    """Fill in missing ``first_name``/``last_name`` from a full ``name`` constant.

    The first word becomes the first name; the last word becomes the last
    name only when the full name has at least two words. Existing entries
    are never replaced.
    """

    parts = constants.get("name", "").split()
    if parts and "first_name" not in constants:
        constants["first_name"] = parts[0]
    if len(parts) >= 2 and "last_name" not in constants:
        constants["last_name"] = parts[-1]
    return constants


def parse_constants(payload: Any) -> Dict[str, str]:
    if not isinstance(payload, dict):
        raise ConstantsError("Constants file must contain a JSON object")
    constants = {str(key): constant_to_text(str(key), value) for key, value in payload.items()}
    return split_full_name(constants)


def load_constants(path: Union[str, Path]) -> Dict[str, str]:
    """Load and normalize the constants JSON object stored at ``path``."""

    source = Path(path)
    try:
        raw = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConstantsError(f"Cannot read constants file {source}: {exc}", data={"path": str(source)}) from exc
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConstantsError(f"Invalid JSON in {source}: {exc}", data={"path": str(source)}) from exc
    constants = parse_constants(payload)
    logger.info(f"Loaded {len(constants)} constants from {source}")
    return constants


class ConstantsStore:
    """Lazily loaded, cached view of a constants file."""

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self._path = Path(path) if path is not None else get_settings().resolved_constants_path()
        self._cache: Optional[Dict[str, str]] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Dict[str, str]:
        with self._lock:
            if self._cache is None:
                self._cache = load_constants(self._path)
            return dict(self._cache)

    def reload(self) -> Dict[str, str]:
        with self._lock:
            self._cache = load_constants(self._path)
            return dict(self._cache)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.load().get(key, default)


__all__ = [
    "constant_to_text",
    "parse_constants",
    "split_full_name",
    "load_constants",
    "ConstantsStore",
]
