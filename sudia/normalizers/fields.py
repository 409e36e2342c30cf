"""
Fuzzy field access for backend records.

The backend renames columns between endpoints and deployments (a site name
may be ``site_name`` on one and ``name`` on another), so every read goes
through a list of candidate keys.
"""

from collections.abc import Mapping, Sequence
from typing import Any

# Raw record as returned by the backend, no shape guaranteed
RawRecord = Mapping[str, Any]


def is_present(value: Any) -> bool:
    """None and empty string count as missing."""
    return value is not None and not (isinstance(value, str) and value == "")


def get_prop(record: Any, keys: Sequence[str], default: Any = None) -> Any:
    """Return the value of the first candidate key that is present."""
    if not isinstance(record, Mapping):
        return default

    for key in keys:
        value = record.get(key)
        if is_present(value):
            return value
    return default


def key_of(record: Any, keys: Sequence[str]) -> str | None:
    """Resolve a join key as a trimmed string, or None when absent."""
    value = get_prop(record, keys)
    if value is None:
        return None

    key = str(value).strip()
    return key or None


def same_id(left: Any, right: Any) -> bool:
    """Compare identifiers loosely (``12 == "12"``), absent never matches."""
    if left is None or right is None:
        return False
    return str(left).strip() == str(right).strip()
