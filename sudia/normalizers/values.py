"""
Total parse functions for loosely typed backend values.

None of these raise: unparseable input comes back as None (or the
documented default) so mappers never need their own try/except.
"""

import json
import math
import re
from typing import Any, Optional

from sudia.config import INFO_FALLBACK_KEY

LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")

VIDEO_MEDIA_TYPES = {"video", "youtube"}


def parse_float(value: Any) -> Optional[float]:
    """Parse a finite number from a number or numeric string."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_coordinate(value: Any) -> float:
    """Parse a latitude/longitude, defaulting to 0.0 (unmapped)."""
    number = parse_float(value)
    return number if number is not None else 0.0


def parse_year(value: Any) -> Optional[int]:
    """Parse a year from a number or a string with a leading integer."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        # "1890 TCN" -> 1890, "khoảng 1890" -> None
        match = LEADING_INT_PATTERN.match(value)
        if match:
            return int(match.group(1))
    return None


def parse_additional_info(value: Any) -> Optional[dict[str, Any]]:
    """Parse an additional_info field that should hold a JSON object."""
    if value is None or value == "":
        return None
    if isinstance(value, dict):
        return dict(value)

    raw = str(value)
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return {INFO_FALLBACK_KEY: raw}

    if isinstance(parsed, dict):
        return parsed
    return {INFO_FALLBACK_KEY: raw}


def normalize_media_type(value: Any) -> str:
    """Collapse raw media type variants into "image" or "video"."""
    if isinstance(value, str) and value.strip().lower() in VIDEO_MEDIA_TYPES:
        return "video"
    return "image"


def to_date_string(value: Any) -> Optional[str]:
    """Stringify a raw date so regex-based year extraction never fails."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_id_string(value: Any) -> Optional[str]:
    """Stringify an identifier, keeping absence as None."""
    if value is None or value == "":
        return None
    return str(value)
