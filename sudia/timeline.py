"""
Timeline assembly for detail views.

Backend events are merged with events mined from the site description
("Năm 1527, ...") and ordered by the first four-digit year in their date.
Also splits media into the image and video galleries.
"""

import math
import re

from sudia.connectors.types import Event, Media, Person, SiteDetail
from sudia.utils.text import extract_year, youtube_embed_url

SENTENCE_SPLIT_PATTERN = re.compile(r"(?<=[.!?])\s+|\n+")
YEAR_MENTION_PATTERN = re.compile(r"(?:năm|Năm)\s+(\d{4})")

MIN_SENTENCE_LENGTH = 10
DUPLICATE_PREFIX_LENGTH = 20


def extract_events_from_description(description: str | None) -> list[Event]:
    """Turn each sentence mentioning "năm YYYY" into an extracted event."""
    if not description:
        return []

    events = []
    for index, sentence in enumerate(SENTENCE_SPLIT_PATTERN.split(description)):
        sentence = sentence.strip()
        if len(sentence) < MIN_SENTENCE_LENGTH:
            continue

        match = YEAR_MENTION_PATTERN.search(sentence)
        if not match:
            continue

        year = match.group(1)
        events.append(
            Event(
                event_id=f"extracted-desc-{index}-{year}",
                event_name=f"Sự kiện năm {year}",
                start_date=year,
                description=sentence,
                is_extracted=True,
            )
        )
    return events


def _sort_key(event: Event) -> float:
    year = extract_year(event.start_date)
    return year if year is not None else -math.inf


def _is_duplicate(candidate: Event, events: list[Event]) -> bool:
    year = extract_year(candidate.start_date)
    prefix = candidate.description[:DUPLICATE_PREFIX_LENGTH]
    return any(
        extract_year(event.start_date) == year and prefix in event.description
        for event in events
    )


def build_timeline(detail: SiteDetail) -> list[Event]:
    """Backend events plus non-duplicate extracted ones, oldest first.

    Events without a year sort first; equal years keep their merge order.
    """
    events = list(detail.events)
    for extracted in extract_events_from_description(detail.site.description):
        if not _is_duplicate(extracted, detail.events):
            events.append(extracted)
    return sorted(events, key=_sort_key)


def split_media(media: list[Media]) -> tuple[list[Media], list[Media]]:
    """(images, videos)"""
    images = [m for m in media if m.media_type == "image"]
    videos = [m for m in media if m.media_type == "video"]
    return images, videos


def event_media(events: list[Event]) -> list[Media]:
    return [media for event in events for media in event.media]


def related_persons(events: list[Event]) -> list[Person]:
    """Participants across events, first occurrence per person id."""
    persons: dict[str, Person] = {}
    for event in events:
        for person in event.persons:
            persons.setdefault(str(person.person_id), person)
    return list(persons.values())


def media_gallery(media: list[Media]) -> dict[str, list[dict]]:
    """Serialized image and video galleries; videos carry an embeddable URL."""
    images, videos = split_media(media)
    return {
        "images": [m.to_dict() for m in images],
        "videos": [{**m.to_dict(), "embed_url": youtube_embed_url(m.media_url)} for m in videos],
    }
