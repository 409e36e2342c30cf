"""
Fetch orchestrators.

MapDataService is the public entry point for the map UI: it sequences
backend fetches, runs the mappers, hydrator and person locator, and keeps
the site and person caches those steps depend on.

No public method raises. Failures are logged and come back as an empty
list, None, or a partially filled detail object, so callers cannot tell a
network failure from legitimately missing data.
"""

import asyncio
import dataclasses
from urllib.parse import quote

from loguru import logger

from sudia.config import HOMETOWN_INFO_KEY
from sudia.connectors.backend import BackendConnector
from sudia.connectors.reference import ReferenceDataStore
from sudia.connectors.types import Person, PersonDetail, Site, SiteDetail
from sudia.hydration import EVENT_KEY_KEYS, hydrate_events
from sudia.mappers import map_city, map_person, map_site
from sudia.normalizers.fields import RawRecord, get_prop, key_of, same_id
from sudia.normalizers.values import parse_additional_info
from sudia.person_locator import BIOGRAPHY_KEYS, PersonLocator
from sudia.utils.text import clean_text

SITE_ID_KEYS = ["site_id", "id"]
PERSON_ID_KEYS = ["person_id", "id"]
PERSON_KEY_KEYS = ["person_key", "id"]
DETAIL_BIRTHPLACE_KEYS = ["birthplace", "birth_place", "place_of_birth"]


def _path_id(value) -> str:
    return quote(str(value).strip(), safe="")


def _pick_record(records: list[RawRecord], wanted_id, id_keys: list[str]) -> RawRecord | None:
    """Record matching the requested id, else the first one."""
    if not records:
        return None
    for record in records:
        if same_id(get_prop(record, id_keys), wanted_id):
            return record
    return records[0]


class MapDataService:
    """
    Orchestrates fetching and reconciling map data.

    Attributes:
        connector: backend connector used for every request
        store: reference data store shared by hydration and location
        site_cache: last result of fetch_sites()
        person_cache: last result of fetch_persons()
    """

    def __init__(
        self,
        connector: BackendConnector | None = None,
        store: ReferenceDataStore | None = None,
    ):
        self.connector = connector or BackendConnector()
        self.store = store or ReferenceDataStore(self.connector)
        self.site_cache: list[Site] = []
        self.person_cache: list[Person] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self.connector.aclose()

    async def reload(self) -> None:
        """Drop every cache and load sites, reference data and persons again."""
        self.site_cache = []
        self.person_cache = []
        await self.store.reload()
        await self.fetch_sites()
        await self.fetch_persons()

    # =========================================================================
    # Collections
    # =========================================================================

    async def fetch_sites(self) -> list[Site]:
        """Mapped locations plus cities, refreshing the site cache."""
        try:
            sites_data, cities_data = await asyncio.gather(
                self.connector.fetch_records("/locations"),
                self.connector.fetch_records("/cities"),
            )

            mapped_sites = [site for site in map(map_site, sites_data) if site.is_mapped]

            for item in cities_data:
                city = map_city(item)
                if not city.is_mapped:
                    continue
                already_present = any(
                    site.is_city and same_id(site.site_id, city.site_id) for site in mapped_sites
                )
                if not already_present:
                    mapped_sites.append(city)

            self.site_cache = mapped_sites
            logger.info(f"Loaded {len(mapped_sites)} mapped sites")
            return mapped_sites
        except Exception as e:
            logger.warning(f"fetch_sites failed: {e}")
            return []

    async def fetch_cities_list(self) -> list[Site]:
        """Mapped cities only, e.g. for a city filter dropdown."""
        try:
            cities_data = await self.connector.fetch_records("/cities")
            return [city for city in map(map_city, cities_data) if city.is_mapped]
        except Exception as e:
            logger.warning(f"fetch_cities_list failed: {e}")
            return []

    async def _sites_for_matching(self) -> list[Site]:
        if self.site_cache:
            return self.site_cache
        return [map_site(item) for item in await self.connector.fetch_records("/locations")]

    async def fetch_persons(self) -> list[Person]:
        """Every known person, located where possible, refreshing the person cache."""
        try:
            await self.store.ensure_loaded()
            locator = PersonLocator(await self._sites_for_matching(), self.store)

            persons = [
                locator.apply(map_person(raw_person), raw_person)
                for raw_person in self.store.person_map.values()
            ]

            self.person_cache = persons
            located = sum(1 for p in persons if p.has_location)
            logger.info(f"Loaded {len(persons)} persons ({located} on the map)")
            return persons
        except Exception as e:
            logger.warning(f"fetch_persons failed: {e}")
            return []

    # =========================================================================
    # Details
    # =========================================================================

    def _cached_site(self, site_id) -> Site | None:
        return next((s for s in self.site_cache if same_id(s.site_id, site_id)), None)

    def _cached_person(self, person_id) -> Person | None:
        return next((p for p in self.person_cache if same_id(p.person_id, person_id)), None)

    def _events_at_site(self, site_id, raw_site: RawRecord | None) -> list[RawRecord]:
        """Client-side fallback: cached events whose site key or id matches."""
        site_key = key_of(raw_site, ["site_key"]) if raw_site else None
        site_id_str = str(site_id).strip()

        matches = []
        for event in self.store.events_cache:
            event_site_key = key_of(event, ["site_key"])
            if site_key is not None and event_site_key == site_key:
                matches.append(event)
                continue
            if key_of(event, ["site_id"]) == site_id_str:
                matches.append(event)
        return matches

    async def fetch_site_detail(self, site_id) -> SiteDetail | None:
        """
        A site and its hydrated events.

        Returns:
            SiteDetail, with no events if they could not be loaded, or None
            when the site is unknown
        """
        records = await self.connector.fetch_records(f"/locations/{_path_id(site_id)}")
        raw_site = _pick_record(records, site_id, SITE_ID_KEYS)
        if raw_site is not None:
            site = map_site(raw_site)
        else:
            logger.debug(f"Direct fetch for site {site_id} gave nothing, using cache")
            site = self._cached_site(site_id)

        if site is None:
            return None

        try:
            await self.store.ensure_loaded()

            site_events = await self.connector.fetch_records(f"/event/location/{_path_id(site_id)}")
            if not site_events and self.store.events_cache:
                site_events = self._events_at_site(site_id, raw_site)

            return SiteDetail(site=site, events=hydrate_events(site_events, self.store))
        except Exception as e:
            logger.warning(f"fetch_site_detail failed to load events for {site_id}: {e}")
            return SiteDetail(site=site, events=[])

    def _stored_person(self, person_id) -> RawRecord | None:
        for raw_person in self.store.person_map.values():
            if same_id(get_prop(raw_person, PERSON_ID_KEYS), person_id):
                return raw_person
        return None

    async def fetch_person_detail(self, person_id) -> PersonDetail | None:
        """
        A person with biography, events, aggregated media and extra info.

        Returns:
            PersonDetail, possibly without events/media, or None when the
            person is unknown everywhere
        """
        person = None
        cached = self._cached_person(person_id)

        records = await self.connector.fetch_records(f"/persons/{_path_id(person_id)}")
        raw_person = _pick_record(records, person_id, PERSON_ID_KEYS)
        if raw_person is not None:
            person = map_person(raw_person)
            if cached is not None:
                # Location is inferred, the detail endpoint never carries it
                person.related_city_ids = list(cached.related_city_ids)
                person.latitude = cached.latitude
                person.longitude = cached.longitude
                person.location_name = cached.location_name
        elif cached is not None:
            person = dataclasses.replace(cached, related_city_ids=list(cached.related_city_ids))

        try:
            await self.store.ensure_loaded()

            if raw_person is None:
                raw_person = self._stored_person(person_id)
            if person is None and raw_person is not None:
                person = map_person(raw_person)
            if person is None:
                return None
            if raw_person is None:
                return PersonDetail(person=person)

            person_key = key_of(raw_person, PERSON_KEY_KEYS)
            linked = set(self.store.linked_event_keys(person_key))
            person_events = [
                event for event in self.store.events_cache
                if key_of(event, EVENT_KEY_KEYS) in linked
            ]
            events = hydrate_events(person_events, self.store)

            additional_info = {}
            birthplace = get_prop(raw_person, DETAIL_BIRTHPLACE_KEYS)
            if birthplace is not None:
                additional_info[HOMETOWN_INFO_KEY] = birthplace
            extra_info = parse_additional_info(get_prop(raw_person, ["additional_info", "info"]))
            if extra_info:
                additional_info.update(extra_info)

            return PersonDetail(
                person=person,
                biography=clean_text(get_prop(raw_person, BIOGRAPHY_KEYS)),
                events=events,
                media=[media for event in events for media in event.media],
                additional_info=additional_info,
            )
        except Exception as e:
            logger.warning(f"fetch_person_detail failed for {person_id}: {e}")
            if person is None:
                return None
            return PersonDetail(person=person)
