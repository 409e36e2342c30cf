"""
OSRM routing connector.

Translates OSRM route responses into RouteData with Vietnamese turn
instructions. When the engine is unreachable or finds no route, a
straight line between the two points is returned instead so the map can
still draw something.

API: http://project-osrm.org/docs/v5.24.0/api/#route-service
"""

from typing import Any

import httpx
from loguru import logger

from sudia.config import RoutingSettings, settings
from sudia.connectors.base import BaseConnector
from sudia.connectors.protocols.rest import FetchError
from sudia.connectors.types import RouteData, RouteStep, RouteSummary
from sudia.normalizers.values import parse_float

OFFLINE_MESSAGE = "Chế độ offline hoặc lỗi dịch vụ."
NOT_AVAILABLE = "N/A"


class NoRouteError(Exception):
    """The routing engine answered but found no usable route."""


def format_distance(distance_meters: float) -> str:
    """Format meters as "850 m" or "12.3 km"; sub-meter distances are blank."""
    if distance_meters < 1:
        return ""
    if distance_meters >= 1000:
        return f"{distance_meters / 1000:.1f} km"
    return f"{round(distance_meters)} m"


def format_duration(duration_seconds: float) -> str:
    return f"{round(duration_seconds / 60)} phút"


def instruction_text(maneuver: dict[str, Any], street_name: str | None) -> str:
    """Build a Vietnamese instruction from an OSRM maneuver."""
    maneuver_type = maneuver.get("type")
    modifier = maneuver.get("modifier")
    if not isinstance(modifier, str):
        modifier = ""

    if maneuver_type == "arrive":
        return "Bạn đã đến đích"

    if maneuver_type == "depart":
        action = "Khởi hành"
    elif maneuver_type in ("turn", "fork", "end of road"):
        if "left" in modifier:
            action = "Rẽ trái"
        elif "right" in modifier:
            action = "Rẽ phải"
        else:
            action = "Rẽ"
    elif maneuver_type == "roundabout":
        action = f"Đi vào vòng xuyến (lối ra {maneuver.get('exit') or 1})"
    else:
        action = "Đi tiếp"

    if street_name:
        return f"{action} vào {street_name}"
    return action


def straight_line_route(start: tuple[float, float], end: tuple[float, float]) -> RouteData:
    """Fallback route used when the routing engine is unavailable."""
    return RouteData(
        summary=RouteSummary(total_distance=NOT_AVAILABLE, total_duration=NOT_AVAILABLE),
        steps=[RouteStep(instruction=OFFLINE_MESSAGE, distance="")],
        route_geometry=[[start[0], start[1]], [end[0], end[1]]],
        available=False,
    )


def _first_dict(items: Any) -> dict[str, Any]:
    """First element of a list when it is a mapping, else an empty dict."""
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _lat_lon(coord: Any) -> list[float] | None:
    # GeoJSON is [lon, lat]; the map wants [lat, lon]
    if not isinstance(coord, (list, tuple)) or len(coord) < 2:
        return None
    lon, lat = parse_float(coord[0]), parse_float(coord[1])
    if lat is None or lon is None:
        return None
    return [lat, lon]


def _route_step(step: dict[str, Any]) -> RouteStep:
    maneuver = step.get("maneuver")
    name = step.get("name")
    return RouteStep(
        instruction=instruction_text(
            maneuver if isinstance(maneuver, dict) else {},
            name if isinstance(name, str) else None,
        ),
        distance=format_distance(parse_float(step.get("distance")) or 0),
    )


def parse_route(data: Any) -> RouteData:
    """
    Convert an OSRM route response into RouteData.

    Steps and coordinates of the wrong shape are skipped. A response without
    a usable first route raises NoRouteError.
    """
    if not isinstance(data, dict) or data.get("code") != "Ok":
        raise NoRouteError("No route found")

    route = _first_dict(data.get("routes"))
    if not route:
        raise NoRouteError("No route found")

    leg = _first_dict(route.get("legs"))
    geometry = route.get("geometry")
    coordinates = geometry.get("coordinates") if isinstance(geometry, dict) else None
    points = (_lat_lon(coord) for coord in _as_list(coordinates))

    return RouteData(
        summary=RouteSummary(
            total_distance=format_distance(parse_float(route.get("distance")) or 0),
            total_duration=format_duration(parse_float(route.get("duration")) or 0),
        ),
        steps=[_route_step(step) for step in _as_list(leg.get("steps")) if isinstance(step, dict)],
        route_geometry=[point for point in points if point is not None],
    )


class OSRMConnector(BaseConnector):
    """Connector for an OSRM routing engine."""

    connector_id = "osrm"
    connector_name = "OSRM routing engine"
    description = "Driving directions"

    def __init__(
        self,
        config: RoutingSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        config = config or settings.routing
        self.profile = config.profile
        super().__init__(
            base_url=config.base_url,
            timeout=config.timeout,
            http_client=http_client,
        )

    def route_path(self, start: tuple[float, float], end: tuple[float, float]) -> str:
        start_lat, start_lon = start
        end_lat, end_lon = end
        return f"/route/v1/{self.profile}/{start_lon},{start_lat};{end_lon},{end_lat}"

    async def fetch_directions(
        self,
        start: tuple[float, float],
        end: tuple[float, float],
    ) -> RouteData:
        """
        Get driving directions between two (lat, lon) points.

        Never raises: any failure yields a straight-line route flagged as
        unavailable.
        """
        try:
            data = await self.rest.get_json(
                self.route_path(start, end),
                params={"steps": "true", "geometries": "geojson", "overview": "full"},
            )
            return parse_route(data)
        except (FetchError, NoRouteError, LookupError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Directions unavailable, using straight line: {e}")
            return straight_line_route(start, end)
