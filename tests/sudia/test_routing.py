# SPDX-License-Identifier: MIT
"""Tests for the OSRM routing connector."""

import httpx
import pytest

from sudia.connectors.routing import (
    OFFLINE_MESSAGE,
    OSRMConnector,
    format_distance,
    format_duration,
    instruction_text,
)

pytestmark = pytest.mark.anyio

HANOI = (21.0285, 105.8542)
HUE = (16.4637, 107.5909)

OSRM_RESPONSE = {
    "code": "Ok",
    "routes": [
        {
            "distance": 658400.0,
            "duration": 30540.0,
            "geometry": {"coordinates": [[105.8542, 21.0285], [106.5, 19.0], [107.5909, 16.4637]]},
            "legs": [
                {
                    "steps": [
                        {"maneuver": {"type": "depart"}, "name": "Tràng Tiền", "distance": 420.4},
                        {"maneuver": {"type": "turn", "modifier": "slight left"}, "name": "QL1A", "distance": 657000},
                        {"maneuver": {"type": "roundabout", "exit": 2}, "name": "", "distance": 979.6},
                        {"maneuver": {"type": "arrive"}, "name": "Lê Lợi", "distance": 0},
                    ]
                }
            ],
        }
    ],
}


def _connector(handler, routing_settings) -> OSRMConnector:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OSRMConnector(config=routing_settings, http_client=client)


class TestFormatting:
    """Test human-readable formatting."""

    @pytest.mark.parametrize("meters,expected", [
        (0.4, ""),
        (1, "1 m"),
        (850.4, "850 m"),
        (999.6, "1000 m"),
        (1000, "1.0 km"),
        (12345, "12.3 km"),
    ])
    def test_distance(self, meters, expected):
        assert format_distance(meters) == expected

    def test_duration(self):
        assert format_duration(30540) == "509 phút"
        assert format_duration(20) == "0 phút"

    @pytest.mark.parametrize("maneuver,name,expected", [
        ({"type": "depart"}, "Tràng Tiền", "Khởi hành vào Tràng Tiền"),
        ({"type": "arrive"}, "Lê Lợi", "Bạn đã đến đích"),
        ({"type": "turn", "modifier": "left"}, None, "Rẽ trái"),
        ({"type": "fork", "modifier": "slight right"}, "QL1A", "Rẽ phải vào QL1A"),
        ({"type": "end of road", "modifier": "straight"}, None, "Rẽ"),
        ({"type": "roundabout"}, None, "Đi vào vòng xuyến (lối ra 1)"),
        ({"type": "new name"}, "Hùng Vương", "Đi tiếp vào Hùng Vương"),
    ])
    def test_instructions(self, maneuver, name, expected):
        assert instruction_text(maneuver, name) == expected


class TestFetchDirections:
    """Test route requests."""

    async def test_route(self, routing_settings):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=OSRM_RESPONSE)

        route = await _connector(handler, routing_settings).fetch_directions(HANOI, HUE)

        assert requests[0].url.path == "/route/v1/driving/105.8542,21.0285;107.5909,16.4637"
        assert requests[0].url.params["steps"] == "true"
        assert requests[0].url.params["geometries"] == "geojson"
        assert requests[0].url.params["overview"] == "full"

        assert route.available
        assert route.summary.total_distance == "658.4 km"
        assert route.summary.total_duration == "509 phút"
        assert route.route_geometry[0] == [21.0285, 105.8542]
        assert route.route_geometry[-1] == [16.4637, 107.5909]
        assert [s.instruction for s in route.steps] == [
            "Khởi hành vào Tràng Tiền",
            "Rẽ trái vào QL1A",
            "Đi vào vòng xuyến (lối ra 2)",
            "Bạn đã đến đích",
        ]
        assert route.steps[0].distance == "420 m"
        assert route.steps[-1].distance == ""

    async def test_no_route_falls_back(self, routing_settings):
        handler = lambda r: httpx.Response(200, json={"code": "NoRoute", "routes": []})
        route = await _connector(handler, routing_settings).fetch_directions(HANOI, HUE)

        assert not route.available
        assert route.summary.total_distance == "N/A"
        assert route.summary.total_duration == "N/A"
        assert route.steps[0].instruction == OFFLINE_MESSAGE
        assert route.route_geometry == [[21.0285, 105.8542], [16.4637, 107.5909]]

    async def test_engine_down_falls_back(self, routing_settings):
        route = await _connector(lambda r: httpx.Response(502), routing_settings).fetch_directions(HANOI, HUE)
        assert not route.available

    @pytest.mark.parametrize("body", [
        {"code": "Ok", "routes": ["broken"]},
        {"code": "Ok", "routes": {"distance": 10}},
        {"code": "Ok", "routes": []},
        ["Ok"],
    ])
    async def test_malformed_route_falls_back(self, routing_settings, body):
        connector = _connector(lambda r: httpx.Response(200, json=body), routing_settings)
        route = await connector.fetch_directions(HANOI, HUE)

        assert not route.available
        assert route.route_geometry == [[21.0285, 105.8542], [16.4637, 107.5909]]

    async def test_malformed_steps_and_points_skipped(self, routing_settings):
        body = {
            "code": "Ok",
            "routes": [{
                "distance": "1500",
                "duration": None,
                "geometry": {"coordinates": [[105.8542, 21.0285], "x", [1], [107.5909, 16.4637]]},
                "legs": [{"steps": [
                    "x",
                    {"maneuver": "turn", "name": 7, "distance": "abc"},
                    {"maneuver": {"type": "turn", "modifier": 3}, "name": "QL1A", "distance": 250},
                ]}],
            }],
        }
        connector = _connector(lambda r: httpx.Response(200, json=body), routing_settings)
        route = await connector.fetch_directions(HANOI, HUE)

        assert route.available
        assert route.summary.total_distance == "1.5 km"
        assert route.summary.total_duration == "0 phút"
        assert route.route_geometry == [[21.0285, 105.8542], [16.4637, 107.5909]]
        assert [(s.instruction, s.distance) for s in route.steps] == [
            ("Đi tiếp", ""),
            ("Rẽ vào QL1A", "250 m"),
        ]

    async def test_serialized_keys(self, routing_settings):
        route = await _connector(lambda r: httpx.Response(502), routing_settings).fetch_directions(HANOI, HUE)
        data = route.to_dict()

        assert set(data["summary"]) == {"totalDistance", "totalDuration"}
        assert data["routeGeometry"][0] == [21.0285, 105.8542]
