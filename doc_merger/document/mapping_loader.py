"""
Loading of the placeholder → value mapping from JSON.
"""

import json
from collections.abc import Mapping as MappingABC
from typing import Dict, Iterator, Optional

from ..core.config import Config
from ..core.errors import MappingError
from ..utils.logging_config import get_module_logger


def normalize_key(key: str) -> str:
    """Normalize a placeholder or field name for lookup."""
    return key.strip().lower()


class Mapping(MappingABC):
    """Read-only, case-insensitive string mapping."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = {}
        for key, value in (values or {}).items():
            self._values[normalize_key(key)] = value

    def __getitem__(self, key: str) -> str:
        return self._values[normalize_key(key)]

    def __contains__(self, key) -> bool:
        return isinstance(key, str) and normalize_key(key) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Mapping({self._values!r})"

    def is_true(self, key: str) -> bool:
        """True if the key is present with value "true" (any case)."""
        value = self.get(key)
        return value is not None and value.strip().lower() == Config.CHECKBOX_TRUE_VALUE


def parse_mapping(data) -> Mapping:
    """
    Build a Mapping from decoded JSON.

    Raises:
        MappingError: If data is not a flat object of string values
    """
    if not isinstance(data, dict):
        raise MappingError(f"mapping must be a JSON object, got {type(data).__name__}")

    for key, value in data.items():
        if not isinstance(value, str):
            raise MappingError(f"value for '{key}' must be a string, got {type(value).__name__}")

    return Mapping(data)


def load_mapping(json_path: str) -> Mapping:
    """
    Read a flat string-to-string mapping from a JSON file.

    Args:
        json_path: Path to the JSON file

    Returns:
        Case-insensitive Mapping

    Raises:
        OSError: If the file cannot be read
        MappingError: If the content is not valid JSON or not a flat object
    """
    logger = get_module_logger(__name__)

    with open(json_path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise MappingError(f"invalid JSON in {json_path}: {e}") from e

    mapping = parse_mapping(data)
    logger.debug("Loaded %d mapping entries from %s", len(mapping), json_path)
    return mapping
