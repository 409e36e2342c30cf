# SPDX-License-Identifier: MIT
"""Tests for entity mappers."""

from sudia.config import CITY_SITE_TYPE
from sudia.mappers import is_city_record, map_city, map_media, map_person, map_site
from tests.sample_data import CITIES, HUE_CITADEL, HUE_CITY_ROW, TEMPLE_OF_LITERATURE, UNMAPPED_SITE


class TestMapSite:
    """Test /locations row mapping."""

    def test_primary_keys(self):
        site = map_site(HUE_CITADEL)

        assert site.site_id == 1
        assert site.site_name == "Đại Nội Huế"
        assert site.site_type == "Di tích"
        assert site.latitude == 16.4698
        assert site.longitude == 107.5786
        assert site.city_id == 10
        assert site.additional_info == {"UNESCO": "1993"}
        assert "[1]" not in site.description
        assert site.is_mapped

    def test_alternate_keys(self):
        site = map_site(TEMPLE_OF_LITERATURE)

        assert site.site_id == 2
        assert site.site_name == "Văn Miếu"
        assert site.latitude == 21.0293
        assert site.longitude == 105.8355

    def test_defaults(self):
        site = map_site({"id": 9})

        assert site.site_name == "Không tên"
        assert site.site_type == "Di tích"
        assert site.description == ""
        assert site.address == ""
        assert site.additional_info == {}

    def test_unparseable_coordinates_are_unmapped(self):
        site = map_site(UNMAPPED_SITE)
        assert site.latitude == 0.0
        assert site.longitude == 0.0
        assert not site.is_mapped

    def test_one_zero_coordinate_is_unmapped(self):
        assert not map_site({"id": 1, "lat": 16.0, "lng": 0}).is_mapped

    def test_description_alternates(self):
        assert map_site({"id": 1, "summary": "Tóm tắt [4]"}).description == "Tóm tắt"
        assert map_site({"id": 1, "content": "Nội dung"}).description == "Nội dung"

    def test_plain_text_info(self):
        site = map_site({"id": 1, "info": "Di tích quốc gia đặc biệt"})
        assert site.additional_info == {"Thông tin": "Di tích quốc gia đặc biệt"}

    def test_city_shaped_row(self):
        assert is_city_record(HUE_CITY_ROW)
        site = map_site(HUE_CITY_ROW)
        assert site.site_type == CITY_SITE_TYPE
        assert site.site_id == 10
        assert site.is_city

    def test_typed_row_with_city_name_is_not_city(self):
        row = {"id": 5, "city_name": "Huế", "site_type": "Chùa"}
        assert not is_city_record(row)
        assert map_site(row).site_type == "Chùa"


class TestMapCity:
    """Test /cities row mapping."""

    def test_city_fields(self):
        city = map_city(CITIES[1])

        assert city.site_id == 20
        assert city.site_name == "Hà Nội"
        assert city.site_type == CITY_SITE_TYPE
        assert city.latitude == 21.0285
        assert city.longitude == 105.8542
        assert city.additional_info == {"City ID": "20"}
        assert city.address == ""
        assert city.description == ""

    def test_city_without_coordinates(self):
        assert not map_city(CITIES[3]).is_mapped


class TestMapPerson:
    """Test /persons row mapping."""

    def test_years(self):
        person = map_person({"person_id": 1, "full_name": "A", "birth_year": "1753", "death_year": 1792.0})
        assert person.birth_year == 1753
        assert person.death_year == 1792

    def test_alternates_and_defaults(self):
        person = map_person({"id": 2, "person_name": "B", "birth": "khoảng 1400"})
        assert person.person_id == 2
        assert person.full_name == "B"
        assert person.birth_year is None
        assert person.related_city_ids == []
        assert not person.has_location

    def test_unnamed(self):
        assert map_person({"id": 3}).full_name == "Không tên"


class TestMapMedia:
    """Test media mapping."""

    def test_alternates(self):
        media = map_media({"id": 7, "link": "https://youtu.be/x", "type": "youtube", "event_name": "Trận"})
        assert media.media_id == 7
        assert media.media_url == "https://youtu.be/x"
        assert media.media_type == "video"
        assert media.caption == "Trận"

    def test_defaults(self):
        media = map_media({"media_id": 8})
        assert media.media_type == "image"
        assert media.media_url == ""
        assert media.caption == ""
