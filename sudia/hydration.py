"""
Event hydration.

Joins raw event records to their media and participants through the
reference data store. Join keys that don't resolve are dropped silently;
an event never carries a dangling reference.
"""

from loguru import logger

from sudia.config import DEFAULT_EVENT_NAME
from sudia.connectors.reference import ReferenceDataStore
from sudia.connectors.types import Event, Media, Person
from sudia.mappers import map_media, map_person
from sudia.normalizers.fields import RawRecord, get_prop, key_of
from sudia.normalizers.values import to_date_string, to_id_string
from sudia.utils.text import clean_text

EVENT_KEY_KEYS = ["event_key", "id"]
EVENT_ID_KEYS = ["event_id", "id"]
EVENT_NAME_KEYS = ["event_name", "name", "title"]
EVENT_DATE_KEYS = ["event_date", "date", "start_date"]
EVENT_DESCRIPTION_KEYS = ["event_description", "description", "desc", "summary"]
EVENT_SITE_KEYS = ["site_key", "site_id"]
MAIN_PERSON_KEYS = ["main_person_key"]


def resolve_media(event_key: str | None, store: ReferenceDataStore) -> list[Media]:
    """Media linked to an event, in join-table order."""
    if event_key is None:
        return []

    media = []
    for media_key in store.media_keys_by_event.get(event_key, []):
        record = store.media_map.get(media_key)
        if record is None:
            logger.debug(f"Dropping dangling media {media_key} of event {event_key}")
            continue
        media.append(map_media(record))
    return media


def resolve_persons(event: RawRecord, event_key: str | None, store: ReferenceDataStore) -> list[Person]:
    """Participants from the person-event join plus the main person, de-duplicated."""
    person_keys = list(store.person_keys_by_event.get(event_key, [])) if event_key else []
    main_person_key = key_of(event, MAIN_PERSON_KEYS)
    if main_person_key is not None:
        person_keys.append(main_person_key)

    persons: list[Person] = []
    seen_ids: set[str] = set()
    for person_key in dict.fromkeys(person_keys):
        record = store.person_map.get(person_key)
        if record is None:
            continue
        person = map_person(record)
        # Two keys can resolve to the same person record
        identity = str(person.person_id) if person.person_id is not None else f"key:{person_key}"
        if identity in seen_ids:
            continue
        seen_ids.add(identity)
        persons.append(person)
    return persons


def hydrate_event(event: RawRecord, store: ReferenceDataStore) -> Event:
    """Hydrate a single raw event."""
    event_key = key_of(event, EVENT_KEY_KEYS)

    return Event(
        event_id=get_prop(event, EVENT_ID_KEYS),
        event_name=str(get_prop(event, EVENT_NAME_KEYS, DEFAULT_EVENT_NAME)),
        start_date=to_date_string(get_prop(event, EVENT_DATE_KEYS)),
        description=clean_text(get_prop(event, EVENT_DESCRIPTION_KEYS)),
        media=resolve_media(event_key, store),
        persons=resolve_persons(event, event_key, store),
        related_site_id=to_id_string(get_prop(event, EVENT_SITE_KEYS)),
    )


def hydrate_events(raw_events: list[RawRecord], store: ReferenceDataStore) -> list[Event]:
    """
    Hydrate raw events, preserving input order.

    Args:
        raw_events: Raw event records from /event or /event/location/{id}
        store: Loaded reference data store

    Returns:
        Hydrated events; not sorted
    """
    return [hydrate_event(event, store) for event in raw_events]
