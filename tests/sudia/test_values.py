# SPDX-License-Identifier: MIT
"""Tests for total value parsers."""

import math

import pytest

from sudia.normalizers.values import (
    normalize_media_type,
    parse_additional_info,
    parse_coordinate,
    parse_float,
    parse_year,
    to_date_string,
    to_id_string,
)


class TestParseFloat:
    """Test numeric parsing."""

    def test_numbers_and_strings(self):
        assert parse_float(16.5) == 16.5
        assert parse_float("107.59") == 107.59
        assert parse_float(" 3 ") == 3.0

    @pytest.mark.parametrize("value", [None, "", "abc", True, float("nan"), math.inf, [], {}])
    def test_rejects_non_numbers(self, value):
        assert parse_float(value) is None

    def test_coordinate_defaults_to_zero(self):
        assert parse_coordinate("abc") == 0.0
        assert parse_coordinate(None) == 0.0
        assert parse_coordinate("21.03") == 21.03


class TestParseYear:
    """Test year parsing."""

    def test_int_and_float(self):
        assert parse_year(1753) == 1753
        assert parse_year(1792.0) == 1792

    def test_leading_integer_of_string(self):
        assert parse_year("1890") == 1890
        assert parse_year("1890 TCN") == 1890
        assert parse_year("-257") == -257

    def test_unparseable(self):
        assert parse_year("khoảng 1890") is None
        assert parse_year(None) is None
        assert parse_year(float("nan")) is None


class TestParseAdditionalInfo:
    """Test additional_info parsing."""

    def test_json_object(self):
        assert parse_additional_info('{"UNESCO": "1993"}') == {"UNESCO": "1993"}

    def test_dict_passthrough(self):
        assert parse_additional_info({"a": 1}) == {"a": 1}

    def test_invalid_json_becomes_info_entry(self):
        assert parse_additional_info("Di tích quốc gia") == {"Thông tin": "Di tích quốc gia"}

    def test_json_non_object_becomes_info_entry(self):
        assert parse_additional_info("[1, 2]") == {"Thông tin": "[1, 2]"}

    def test_empty(self):
        assert parse_additional_info(None) is None
        assert parse_additional_info("") is None


class TestSmallConverters:
    """Test media type and string converters."""

    @pytest.mark.parametrize("raw,expected", [
        ("video", "video"),
        ("YouTube", "video"),
        ("image", "image"),
        (None, "image"),
        ("audio", "image"),
    ])
    def test_media_type(self, raw, expected):
        assert normalize_media_type(raw) == expected

    def test_date_string(self):
        assert to_date_string(1804) == "1804"
        assert to_date_string(1804.0) == "1804"
        assert to_date_string("1789-01-30") == "1789-01-30"
        assert to_date_string(None) is None

    def test_id_string(self):
        assert to_id_string(5) == "5"
        assert to_id_string("") is None
