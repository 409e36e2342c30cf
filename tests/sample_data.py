# SPDX-License-Identifier: MIT
"""Sample heritage backend records shared by the tests."""

import copy


HUE_CITADEL = {
    "site_id": 1,
    "site_key": "S1",
    "site_name": "Đại Nội Huế",
    "site_type": "Di tích",
    "latitude": "16.4698",
    "longitude": 107.5786,
    "city_id": 10,
    "address": "Thuận Hòa, Huế",
    "description": "Hoàng thành [1] được khởi công năm 1804 dưới triều Gia Long. Nơi ở của vua.",
    "additional_info": '{"UNESCO": "1993"}',
}

TEMPLE_OF_LITERATURE = {
    "id": 2,
    "name": "Văn Miếu",
    "type": "Di tích",
    "lat": 21.0293,
    "lng": 105.8355,
    "city_id": 20,
}

UNMAPPED_SITE = {"site_id": 3, "site_name": "Chưa định vị", "latitude": 0, "longitude": "abc"}

# City-shaped row inside /locations
HUE_CITY_ROW = {"id": 10, "city_name": "Huế", "lat": 16.4637, "lng": 107.5909}

CITIES = [
    {"city_id": 10, "city_name": "Huế", "lat": 16.4637, "lng": 107.5909},
    {"city_id": 20, "city_name": "Hà Nội", "lat": 21.0285, "lng": 105.8542},
    {"city_id": 30, "city_name": "Thừa Thiên Huế", "lat": 16.3, "lng": 107.5},
    {"city_id": 40, "city_name": "Chưa rõ"},
]

NGUYEN_HUE = {
    "person_id": 100,
    "person_key": "P100",
    "full_name": "Nguyễn Huệ",
    "birth_year": "1753",
    "death_year": 1792.0,
    "birthplace": "Bình Định",
    "biography": "Ông sinh tại Thừa Thiên Huế[2] năm 1753.",
    "additional_info": '{"Niên hiệu": "Quang Trung"}',
}

CHU_VAN_AN = {
    "person_id": 101,
    "person_key": "P101",
    "full_name": "Chu Văn An",
    "hometown": "Thanh Trì, Hà Nội",
}

UNKNOWN_PERSON = {"person_id": 102, "person_key": "P102", "full_name": "Vô Danh"}

GIA_LONG = {"person_id": 103, "person_key": "P103", "name": "Gia Long", "birth": 1762}

EVENTS = [
    {
        "event_key": "E1",
        "event_id": 500,
        "event_name": "Xây Hoàng thành",
        "event_date": 1804,
        "site_key": "S1",
        "site_id": 1,
        "description": "Khởi công [3] xây dựng",
        "main_person_key": "P103",
    },
    {
        "event_key": "E2",
        "event_id": 501,
        "event_name": "Trận Ngọc Hồi",
        "event_date": "1789-01-30",
        "site_id": 2,
    },
    {
        "event_key": "E3",
        "event_id": 502,
        "name": "Lên ngôi",
        "date": "1788",
        "site_id": 1,
    },
]

MEDIA = [
    {
        "media_key": "M1",
        "media_id": 900,
        "media_url": "https://img.test/ngo-mon.jpg",
        "media_type": "image",
        "caption": "Ngọ Môn",
    },
    {
        "media_key": "M2",
        "media_id": 901,
        "url": "https://youtu.be/dQw4w9WgXcQ",
        "type": "YouTube",
        "title": "Ngọc Hồi",
    },
]

EVENT_MEDIA = [
    {"event_key": "E1", "media_key": "M1"},
    {"event_key": "E1", "media_key": "M404"},
    {"event_key": "E2", "media_key": "M2"},
]

PERSON_EVENT = [
    {"person_key": "P100", "event_key": "E2"},
    {"person_key": "P100", "event_key": "E3"},
    {"person_key": "P103", "event_key": "E1"},
]


def backend_routes() -> dict:
    """Fresh copy of every endpoint the service reads."""
    routes = {
        "/locations": {"data": [HUE_CITADEL, TEMPLE_OF_LITERATURE, UNMAPPED_SITE, HUE_CITY_ROW]},
        "/cities": CITIES,
        "/persons": [NGUYEN_HUE, CHU_VAN_AN, UNKNOWN_PERSON, GIA_LONG],
        "/media": MEDIA,
        "/event": {"data": EVENTS},
        "/event_media": EVENT_MEDIA,
        "/person_event": PERSON_EVENT,
        "/locations/1": {"data": [HUE_CITADEL]},
        "/locations/2": TEMPLE_OF_LITERATURE,
        "/event/location/1": [EVENTS[0], EVENTS[2]],
        "/event/location/2": [],
        "/persons/100": NGUYEN_HUE,
    }
    return copy.deepcopy(routes)

