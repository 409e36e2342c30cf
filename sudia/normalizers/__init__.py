"""
Data normalization utilities.

These modules handle reading loosely shaped backend records and
converting their values into our typed schema.
"""

from .fields import RawRecord, get_prop, is_present, key_of, same_id
from .values import (
    normalize_media_type,
    parse_additional_info,
    parse_coordinate,
    parse_float,
    parse_year,
    to_date_string,
    to_id_string,
)

__all__ = [
    'RawRecord',
    'get_prop',
    'is_present',
    'key_of',
    'same_id',
    'parse_float',
    'parse_coordinate',
    'parse_year',
    'parse_additional_info',
    'normalize_media_type',
    'to_date_string',
    'to_id_string',
]
