"""
Person location inference.

The backend has no person -> place field, so a person's related cities and
map pin are inferred from two independent heuristics:

Strategy A (event linkage)
    Every event linked to the person, through the person-event join table
    or the event's main person, contributes the city of the site it took
    place at (or the site itself when that site is a city).

Strategy B (free text)
    Site names are searched for in the person's birthplace/hometown/address
    text, and in the biography right after phrases such as "sinh tại" or
    "quê". Sites are scanned longest name first so "Thừa Thiên Huế" wins
    over "Huế"; the first hit becomes the map pin, every hit adds a city.

When no text match exists the first related city from Strategy A provides
the coordinates. Persons with neither stay off the map but remain listed.

Ties in name length keep site cache order; no confidence score is kept.
"""

from dataclasses import dataclass, field

from sudia.config import BIRTHPLACE_PHRASES, MIN_PLACE_NAME_LENGTH
from sudia.connectors.reference import ReferenceDataStore
from sudia.connectors.types import Person, Site
from sudia.normalizers.fields import RawRecord, get_prop, key_of
from sudia.utils.text import fold_for_match

PERSON_KEY_KEYS = ["person_key", "id"]
PERSON_ID_KEYS = ["person_id", "id"]
BIRTHPLACE_KEYS = ["birthplace", "birth_place", "place_of_birth", "hometown"]
HOMETOWN_KEYS = ["address", "que_quan"]
BIOGRAPHY_KEYS = ["biography", "bio", "description"]

EVENT_KEY_KEYS = ["event_key", "id"]
EVENT_LOCATION_KEYS = ["site_id", "site_key", "location_id"]
MAIN_PERSON_KEYS = ["main_person_key"]


@dataclass
class PersonLocation:
    """Outcome of locating one person."""

    related_city_ids: list[str] = field(default_factory=list)
    map_location: Site | None = None
    latitude: float | None = None
    longitude: float | None = None
    location_name: str | None = None


class _OrderedIdSet:
    """Insertion-ordered set of string ids."""

    def __init__(self):
        self._ids: dict[str, None] = {}

    def add(self, value) -> None:
        if value is None or value == "":
            return
        self._ids.setdefault(str(value).strip(), None)

    def __bool__(self) -> bool:
        return bool(self._ids)

    def to_list(self) -> list[str]:
        return list(self._ids)


def _site_city_id(site: Site):
    """City a site belongs to, a city site being its own city."""
    if site.is_city:
        return site.site_id
    return site.city_id


class PersonLocator:
    """Locates persons against a fixed site collection and reference store."""

    def __init__(self, sites: list[Site], store: ReferenceDataStore):
        self.sites = sites
        self.store = store

        self._sites_by_id: dict[str, Site] = {}
        self._cities_by_id: dict[str, Site] = {}
        for site in sites:
            if site.site_id is None:
                continue
            site_key = str(site.site_id).strip()
            self._sites_by_id.setdefault(site_key, site)
            if site.is_city:
                self._cities_by_id.setdefault(site_key, site)

        # Longest names first; sorted() is stable so ties keep cache order
        searchable = [(fold_for_match(site.site_name), site) for site in sites]
        self._searchable = sorted(
            [(name, site) for name, site in searchable if len(name) >= MIN_PLACE_NAME_LENGTH],
            key=lambda pair: len(pair[0]),
            reverse=True,
        )

    def find_site(self, site_id) -> Site | None:
        if site_id is None:
            return None
        return self._sites_by_id.get(str(site_id).strip())

    def find_city(self, city_id: str) -> Site | None:
        """City site by id, falling back to any site with that id."""
        return self._cities_by_id.get(city_id) or self._sites_by_id.get(city_id)

    def _event_cities(self, raw_person: RawRecord, related: _OrderedIdSet) -> None:
        """Strategy A: cities of sites where linked events happened."""
        person_key = key_of(raw_person, PERSON_KEY_KEYS)
        person_id = key_of(raw_person, PERSON_ID_KEYS)
        linked = set(self.store.linked_event_keys(person_key, person_id))

        for event in self.store.events_cache:
            event_key = key_of(event, EVENT_KEY_KEYS)
            main_person = key_of(event, MAIN_PERSON_KEYS)
            is_linked = (event_key is not None and event_key in linked) or (
                main_person is not None and main_person == person_key
            )
            if not is_linked:
                continue

            site = self.find_site(get_prop(event, EVENT_LOCATION_KEYS))
            if site is None:
                continue
            related.add(site.city_id)
            if site.is_city:
                related.add(site.site_id)

    def _text_match(self, raw_person: RawRecord, related: _OrderedIdSet) -> Site | None:
        """Strategy B: place names in hometown fields and biography phrases."""
        place_text = fold_for_match(
            " ".join(
                str(value)
                for value in (get_prop(raw_person, BIRTHPLACE_KEYS), get_prop(raw_person, HOMETOWN_KEYS))
                if value is not None
            )
        )
        biography = fold_for_match(get_prop(raw_person, BIOGRAPHY_KEYS))
        if not place_text and not biography:
            return None

        map_location = None
        for name, site in self._searchable:
            matched = name in place_text if place_text else False
            if not matched and biography:
                matched = any(f"{phrase} {name}" in biography for phrase in BIRTHPLACE_PHRASES)
            if not matched:
                continue

            related.add(_site_city_id(site))
            if map_location is None:
                map_location = site
        return map_location

    def locate(self, raw_person: RawRecord) -> PersonLocation:
        """Infer related cities and a map pin for one raw person record."""
        related = _OrderedIdSet()
        self._event_cities(raw_person, related)
        map_location = self._text_match(raw_person, related)

        location = PersonLocation(related_city_ids=related.to_list(), map_location=map_location)

        anchor = map_location
        if anchor is None and related:
            anchor = self.find_city(location.related_city_ids[0])

        if anchor is not None:
            location.latitude = anchor.latitude
            location.longitude = anchor.longitude
            location.location_name = anchor.site_name
        return location

    def apply(self, person: Person, raw_person: RawRecord) -> Person:
        """Write the inferred location onto a mapped person."""
        location = self.locate(raw_person)
        person.related_city_ids = location.related_city_ids
        person.latitude = location.latitude
        person.longitude = location.longitude
        person.location_name = location.location_name
        return person
