# SPDX-License-Identifier: MIT
"""Tests for event hydration."""

import pytest

from sudia.connectors.reference import ReferenceDataStore
from sudia.hydration import hydrate_event, hydrate_events

pytestmark = pytest.mark.anyio


@pytest.fixture
async def store(connector):
    store = ReferenceDataStore(connector)
    await store.ensure_loaded()
    return store


class TestHydrateEvents:
    """Test joining events to media and persons."""

    async def test_media_resolved_and_dangling_dropped(self, store):
        event = hydrate_event(store.events_cache[0], store)

        assert [m.media_id for m in event.media] == [900]
        assert event.media[0].caption == "Ngọ Môn"

    async def test_video_media(self, store):
        event = hydrate_event(store.events_cache[1], store)
        assert event.media[0].media_type == "video"

    async def test_main_person_not_duplicated(self, store):
        """A person linked by join row and main_person_key appears once."""
        event = hydrate_event(store.events_cache[0], store)
        assert [p.full_name for p in event.persons] == ["Gia Long"]

    async def test_same_person_under_two_keys(self, store):
        store.person_map["P100-old"] = store.person_map["P100"]
        store.person_keys_by_event["E3"] = ["P100", "P100-old"]

        event = hydrate_event(store.events_cache[2], store)
        assert [p.person_id for p in event.persons] == [100]

    async def test_fields(self, store):
        first, second, third = hydrate_events(store.events_cache, store)

        assert first.event_id == 500
        assert first.event_name == "Xây Hoàng thành"
        assert first.start_date == "1804"
        assert first.description == "Khởi công xây dựng"
        assert first.related_site_id == "S1"
        assert second.start_date == "1789-01-30"
        assert second.related_site_id == "2"
        assert third.event_name == "Lên ngôi"
        assert third.start_date == "1788"

    async def test_order_preserved(self, store):
        """Hydration never sorts."""
        events = hydrate_events(list(reversed(store.events_cache)), store)
        assert [e.event_id for e in events] == [502, 501, 500]

    async def test_defaults_for_bare_event(self, store):
        event = hydrate_event({"id": "X"}, store)

        assert event.event_name == "Sự kiện"
        assert event.start_date is None
        assert event.description == ""
        assert event.media == []
        assert event.persons == []
        assert event.related_site_id is None

    async def test_event_without_key_has_no_joins(self, store):
        """Events lacking a key never pick up rows keyed on a missing key."""
        store.media_keys_by_event["None"] = ["M1"]
        event = hydrate_event({"event_name": "Không khóa"}, store)
        assert event.media == []
