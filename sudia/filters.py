"""
List filtering and search over fetched sites and persons.

These back the sidebar list, the city and type dropdowns, the global search
box and the person markers shown in persons mode.
"""

from dataclasses import dataclass, field

from sudia.config import PERSON_MARKER_TYPE
from sudia.connectors.types import Person, Site
from sudia.normalizers.fields import same_id
from sudia.utils.text import fold_for_match

ALL = "all"

GLOBAL_SEARCH_SITE_LIMIT = 5
GLOBAL_SEARCH_PERSON_LIMIT = 3


@dataclass
class SearchResults:
    sites: list[Site] = field(default_factory=list)
    persons: list[Person] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "sites": [s.to_dict() for s in self.sites],
            "persons": [p.to_dict() for p in self.persons],
        }


def _is_any(value) -> bool:
    return value is None or value == "" or value == ALL


def site_in_city(site: Site, city_id) -> bool:
    """A site matches its own city, and a city marker matches itself."""
    return same_id(site.city_id, city_id) or same_id(site.site_id, city_id)


def filter_sites(
    sites: list[Site],
    search: str = "",
    site_type: str | None = None,
    city_id=None,
) -> list[Site]:
    """Sites whose name contains ``search`` and that match type and city."""
    term = fold_for_match(search)
    return [
        site for site in sites
        if (not term or term in fold_for_match(site.site_name))
        and (_is_any(site_type) or site.site_type == site_type)
        and (_is_any(city_id) or site_in_city(site, city_id))
    ]


def filter_persons(persons: list[Person], search: str = "", city_id=None) -> list[Person]:
    """Persons whose name contains ``search`` and who relate to the city.

    With a city selected, persons without any related city are excluded.
    """
    term = fold_for_match(search)
    return [
        person for person in persons
        if (not term or term in fold_for_match(person.full_name))
        and (_is_any(city_id) or any(same_id(c, city_id) for c in person.related_city_ids))
    ]


def site_types(sites: list[Site]) -> list[str]:
    """Distinct site types in first-seen order, prefixed with "all"."""
    return [ALL, *dict.fromkeys(site.site_type for site in sites)]


def global_search(sites: list[Site], persons: list[Person], term: str) -> SearchResults:
    """Top name matches for the search box; blank terms find nothing."""
    if not term or not term.strip():
        return SearchResults()

    return SearchResults(
        sites=filter_sites(sites, term)[:GLOBAL_SEARCH_SITE_LIMIT],
        persons=filter_persons(persons, term)[:GLOBAL_SEARCH_PERSON_LIMIT],
    )


def person_markers(persons: list[Person]) -> list[Site]:
    """Located persons as virtual sites so the map can render them."""
    markers = []
    for person in persons:
        if not person.has_location:
            continue
        markers.append(
            Site(
                site_id=f"p-{person.person_id}",
                site_name=person.full_name,
                site_type=PERSON_MARKER_TYPE,
                latitude=person.latitude,
                longitude=person.longitude,
                address=person.location_name or "",
                description=(
                    f"Sinh/Quê quán: {person.location_name}. "
                    f"Năm sinh: {person.birth_year or '?'}"
                ),
                additional_info={"person_id": person.person_id},
            )
        )
    return markers
