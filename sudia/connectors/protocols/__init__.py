"""
Protocol handlers for talking to remote services.

Protocols:
- REST: GET + JSON with a hard timeout and 404-as-empty semantics
- Race: run interchangeable strategies, first success wins
"""

from sudia.connectors.protocols.race import AllStrategiesFailed, first_success, summarize_errors
from sudia.connectors.protocols.rest import FetchError, RestProtocol

__all__ = [
    # REST
    "RestProtocol",
    "FetchError",
    # Race
    "first_success",
    "AllStrategiesFailed",
    "summarize_errors",
]
