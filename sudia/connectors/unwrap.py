"""
Response unwrapping.

Backend endpoints, and the proxies in front of them, return the same
records in several envelopes. ``extract_data`` flattens all of them into a
plain list of records so mappers never care which shape arrived.
"""

import json
from typing import Any

from sudia.normalizers.fields import RawRecord


def _records_only(items: list[Any]) -> list[RawRecord]:
    return [item for item in items if isinstance(item, dict)]


def extract_data(response: Any) -> list[RawRecord]:
    """
    Normalize a successful response into a list of raw records.

    Shapes tried in order:
    1. ``{"data": [...]}`` (FastAPI list envelope)
    2. bare list
    3. ``{"contents": ...}`` proxy envelope, recursively; string contents
       are JSON-decoded
    4. any other non-empty object, treated as a single record

    Anything else yields an empty list.
    """
    if not response:
        return []

    if isinstance(response, dict) and isinstance(response.get("data"), list):
        return _records_only(response["data"])

    if isinstance(response, list):
        return _records_only(response)

    if isinstance(response, dict) and response.get("contents"):
        inner = response["contents"]
        if isinstance(inner, str):
            try:
                inner = json.loads(inner)
            except ValueError:
                return []
        return extract_data(inner)

    if isinstance(response, dict):
        return [response]

    return []


def unwrap_proxy_envelope(payload: Any) -> Any:
    """Strip a ``{"contents": ...}`` wrapper added by some CORS proxies."""
    if isinstance(payload, dict) and payload.get("contents"):
        contents = payload["contents"]
        if isinstance(contents, str):
            try:
                return json.loads(contents)
            except ValueError:
                return contents
        return contents
    return payload
