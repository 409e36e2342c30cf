"""
Entity mappers.

Pure functions converting one raw backend record into a typed entity. Each
field is read through a list of alternate key names, because the backend
is not consistent about them.
"""

from sudia.config import (
    CITY_ID_INFO_KEY,
    CITY_SITE_TYPE,
    DEFAULT_SITE_TYPE,
    UNNAMED,
)
from sudia.connectors.types import Media, Person, Site
from sudia.normalizers.fields import RawRecord, get_prop
from sudia.normalizers.values import (
    normalize_media_type,
    parse_additional_info,
    parse_coordinate,
    parse_year,
)
from sudia.utils.text import clean_text

SITE_DESCRIPTION_KEYS = ["site_description", "description", "desc", "summary", "content"]
PERSON_NAME_KEYS = ["full_name", "person_name", "name"]


def is_city_record(item: RawRecord) -> bool:
    """A city row has a city name and no site type."""
    return get_prop(item, ["city_name"]) is not None and get_prop(item, ["site_type"]) is None


def map_city(item: RawRecord) -> Site:
    """Map a /cities row (or a city-shaped location row) to a city site."""
    city_id = get_prop(item, ["city_id", "id"])
    return Site(
        site_id=city_id,
        site_name=str(get_prop(item, ["city_name", "name"], UNNAMED)),
        site_type=CITY_SITE_TYPE,
        latitude=parse_coordinate(get_prop(item, ["lat", "latitude"])),
        longitude=parse_coordinate(get_prop(item, ["lng", "longitude"])),
        address="",
        description="",
        additional_info={CITY_ID_INFO_KEY: str(city_id)},
        city_id=city_id,
    )


def map_site(item: RawRecord) -> Site:
    """Map a /locations row to a Site, detecting city-shaped rows."""
    if is_city_record(item):
        return map_city(item)

    info = parse_additional_info(get_prop(item, ["additional_info", "info"])) or {}

    return Site(
        site_id=get_prop(item, ["site_id", "id"]),
        site_name=str(get_prop(item, ["site_name", "name"], UNNAMED)),
        site_type=str(get_prop(item, ["site_type", "type"], DEFAULT_SITE_TYPE)),
        latitude=parse_coordinate(get_prop(item, ["latitude", "lat"])),
        longitude=parse_coordinate(get_prop(item, ["longitude", "lng", "long"])),
        address=str(get_prop(item, ["address", "addr"], "")),
        description=clean_text(get_prop(item, SITE_DESCRIPTION_KEYS)),
        established_year=get_prop(item, ["established_year", "year"]),
        status=get_prop(item, ["status"]),
        city_id=get_prop(item, ["city_id"]),
        additional_info=info,
    )


def map_person(item: RawRecord) -> Person:
    """Map a /persons row to a Person; years that don't parse are left out."""
    return Person(
        person_id=get_prop(item, ["person_id", "id"]),
        full_name=str(get_prop(item, PERSON_NAME_KEYS, UNNAMED)),
        birth_year=parse_year(get_prop(item, ["birth_year", "birth"])),
        death_year=parse_year(get_prop(item, ["death_year", "death"])),
    )


def map_media(item: RawRecord) -> Media:
    return Media(
        media_id=get_prop(item, ["media_id", "id"]),
        media_url=str(get_prop(item, ["media_url", "url", "link"], "")),
        media_type=normalize_media_type(get_prop(item, ["media_type", "type"])),
        caption=str(get_prop(item, ["caption", "event_name", "title"], "")),
    )
