"""
Reference data store.

Holds the joinable collections needed to hydrate events and persons:
media, the event-media and person-event join tables, persons and the full
raw event list. They are loaded together once, then only read.

Loading is single-flight: callers that arrive while a load is running wait
on the same lock and see the finished data instead of racing a second load.
"""

import asyncio
from collections import defaultdict

from loguru import logger

from sudia.connectors.backend import BackendConnector
from sudia.connectors.unwrap import extract_data
from sudia.normalizers.fields import RawRecord, key_of

MEDIA_KEYS = ["media_key", "media_id"]
PERSON_KEYS = ["person_key", "person_id"]
RELATION_EVENT_KEYS = ["event_key", "event_id"]
RELATION_MEDIA_KEYS = ["media_key", "media_id"]
RELATION_PERSON_KEYS = ["person_key", "person_id"]

REFERENCE_ENDPOINTS = ("/media", "/event_media", "/person_event", "/persons", "/event")


def _index_keys(records: list[RawRecord], keys: list[str]) -> dict[str, RawRecord]:
    """Index records by a resolved key; later duplicates win, absent keys skipped."""
    index: dict[str, RawRecord] = {}
    for record in records:
        key = key_of(record, keys)
        if key is not None:
            index[key] = record
    return index


def _group_relations(
    relations: list[RawRecord],
    by_keys: list[str],
    value_keys: list[str],
) -> dict[str, list[str]]:
    """Group a join table: by-key -> ordered list of value keys."""
    grouped: dict[str, list[str]] = defaultdict(list)
    for relation in relations:
        by = key_of(relation, by_keys)
        value = key_of(relation, value_keys)
        if by is None or value is None:
            continue
        grouped[by].append(value)
    return dict(grouped)


class ReferenceDataStore:
    """
    Explicitly owned cache of reference collections.

    Attributes:
        media_map: media records keyed by trimmed media key
        event_media_relations: raw event-media join rows
        person_event_relations: raw person-event join rows
        person_map: person records keyed by trimmed person key
        events_cache: every raw event, for client-side filtering
    """

    def __init__(self, connector: BackendConnector):
        self.connector = connector
        self._lock = asyncio.Lock()
        self._clear()

    def _clear(self) -> None:
        self.media_map: dict[str, RawRecord] = {}
        self.event_media_relations: list[RawRecord] = []
        self.person_event_relations: list[RawRecord] = []
        self.person_map: dict[str, RawRecord] = {}
        self.events_cache: list[RawRecord] = []

        # Join indexes derived from the relation tables
        self.media_keys_by_event: dict[str, list[str]] = {}
        self.person_keys_by_event: dict[str, list[str]] = {}
        self.event_keys_by_person: dict[str, list[str]] = {}

        self.is_loaded = False

    @property
    def is_loading(self) -> bool:
        return self._lock.locked()

    async def ensure_loaded(self) -> None:
        """Load the reference collections unless already loaded."""
        if self.is_loaded:
            return

        async with self._lock:
            # Another caller may have finished the load while we waited
            if self.is_loaded:
                return
            await self._load()

    async def reload(self) -> None:
        """Drop everything and load again."""
        async with self._lock:
            self._clear()
            await self._load()

    async def _load(self) -> None:
        payloads = await asyncio.gather(
            *(self.connector.fetch_payload(endpoint) for endpoint in REFERENCE_ENDPOINTS),
            return_exceptions=True,
        )
        failures = {
            endpoint: payload
            for endpoint, payload in zip(REFERENCE_ENDPOINTS, payloads)
            if isinstance(payload, BaseException)
        }

        # Nothing answered: stay unloaded so the next caller retries
        if len(failures) == len(REFERENCE_ENDPOINTS):
            logger.warning(f"[RefData] Load failed, no reference endpoint answered: {payloads[0]}")
            return

        for endpoint, error in failures.items():
            logger.warning(f"[RefData] {endpoint} unavailable, using an empty collection: {error}")

        media, event_media, person_event, persons, events = (
            [] if isinstance(payload, BaseException) else extract_data(payload)
            for payload in payloads
        )

        self.media_map = _index_keys(media, MEDIA_KEYS)
        self.event_media_relations = event_media
        self.person_event_relations = person_event
        self.person_map = _index_keys(persons, PERSON_KEYS)
        self.events_cache = events

        self.media_keys_by_event = _group_relations(event_media, RELATION_EVENT_KEYS, RELATION_MEDIA_KEYS)
        self.person_keys_by_event = _group_relations(person_event, RELATION_EVENT_KEYS, RELATION_PERSON_KEYS)
        self.event_keys_by_person = _group_relations(person_event, RELATION_PERSON_KEYS, RELATION_EVENT_KEYS)

        self.is_loaded = True
        logger.info(
            f"[RefData] Loaded {len(self.media_map)} media, {len(self.person_map)} persons, "
            f"{len(self.events_cache)} events, {len(event_media)} event-media and "
            f"{len(person_event)} person-event links"
        )

    def linked_event_keys(self, *person_keys: str | None) -> list[str]:
        """Event keys joined to any of the given person keys, first-seen order."""
        seen: dict[str, None] = {}
        for person_key in person_keys:
            if person_key is None:
                continue
            for event_key in self.event_keys_by_person.get(person_key, []):
                seen.setdefault(event_key, None)
        return list(seen)
