"""
Entity types for the data client.

Defines the typed Site, Person, Event and Media dataclasses that the
mappers and hydrator produce, the detail types served to the map UI,
and the routing/geocoding result types.
"""

from dataclasses import dataclass, field
from typing import Any

from sudia.config import CITY_SITE_TYPE

# Identifiers arrive as ints from some endpoints and strings from others
EntityId = str | int | None


@dataclass
class Media:
    """An image or video attached to an event."""

    media_id: EntityId
    media_url: str = ""
    media_type: str = "image"  # "image" or "video"
    caption: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "media_id": self.media_id,
            "media_url": self.media_url,
            "media_type": self.media_type,
            "caption": self.caption,
        }


@dataclass
class Site:
    """
    A point of interest on the map.

    Cities are also represented as sites, with ``site_type`` set to the
    city sentinel. Coordinates default to 0 when the backend gives nothing
    parseable; such sites are unmapped and never rendered.
    """

    site_id: EntityId
    site_name: str
    site_type: str
    latitude: float = 0.0
    longitude: float = 0.0
    address: str = ""
    description: str = ""
    established_year: Any = None
    status: Any = None
    city_id: EntityId = None
    additional_info: dict[str, Any] | None = None

    @property
    def is_city(self) -> bool:
        return self.site_type == CITY_SITE_TYPE

    @property
    def is_mapped(self) -> bool:
        """Whether the site has usable coordinates."""
        return bool(self.latitude) and bool(self.longitude)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            "site_id": self.site_id,
            "site_name": self.site_name,
            "site_type": self.site_type,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "address": self.address,
            "description": self.description,
        }

        optional_fields = ["established_year", "status", "city_id", "additional_info"]
        for field_name in optional_fields:
            value = getattr(self, field_name, None)
            if value is not None:
                result[field_name] = value

        return result


@dataclass
class Person:
    """A historical figure, optionally geolocated by inference."""

    person_id: EntityId
    full_name: str
    birth_year: int | None = None
    death_year: int | None = None
    related_city_ids: list[str] = field(default_factory=list)
    latitude: float | None = None
    longitude: float | None = None
    location_name: str | None = None

    @property
    def has_location(self) -> bool:
        return bool(self.latitude) and bool(self.longitude)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            "person_id": self.person_id,
            "full_name": self.full_name,
            "related_city_ids": list(self.related_city_ids),
        }

        optional_fields = ["birth_year", "death_year", "latitude", "longitude", "location_name"]
        for field_name in optional_fields:
            value = getattr(self, field_name, None)
            if value is not None:
                result[field_name] = value

        return result


@dataclass
class Event:
    """A historical event with its media and participants resolved."""

    event_id: EntityId
    event_name: str
    description: str = ""
    start_date: str | None = None
    media: list[Media] = field(default_factory=list)
    persons: list[Person] = field(default_factory=list)
    related_site_id: str | None = None

    # Set on events extracted from free-text descriptions rather than the backend
    is_extracted: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "event_id": self.event_id,
            "event_name": self.event_name,
            "start_date": self.start_date,
            "description": self.description,
            "media": [m.to_dict() for m in self.media],
            "persons": [p.to_dict() for p in self.persons],
            "related_site_id": self.related_site_id,
            "is_extracted": self.is_extracted,
        }


@dataclass
class SiteDetail:
    """A site together with its hydrated events."""

    site: Site
    events: list[Event] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            **self.site.to_dict(),
            "events": [e.to_dict() for e in self.events],
        }


@dataclass
class PersonDetail:
    """A person together with biography, events and aggregated media."""

    person: Person
    biography: str = ""
    events: list[Event] = field(default_factory=list)
    media: list[Media] = field(default_factory=list)
    additional_info: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            **self.person.to_dict(),
            "biography": self.biography,
            "events": [e.to_dict() for e in self.events],
            "media": [m.to_dict() for m in self.media],
            "additional_info": dict(self.additional_info),
        }


@dataclass
class RouteStep:
    """One turn-by-turn instruction."""

    instruction: str
    distance: str = ""


@dataclass
class RouteSummary:
    """Human-readable route totals."""

    total_distance: str
    total_duration: str


@dataclass
class RouteData:
    """Driving directions between two points, geometry as [lat, lon] pairs."""

    summary: RouteSummary
    steps: list[RouteStep] = field(default_factory=list)
    route_geometry: list[list[float]] = field(default_factory=list)

    # False when the routing engine failed and a straight line was substituted
    available: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "summary": {
                "totalDistance": self.summary.total_distance,
                "totalDuration": self.summary.total_duration,
            },
            "steps": [
                {"instruction": s.instruction, "distance": s.distance}
                for s in self.steps
            ],
            "routeGeometry": [list(point) for point in self.route_geometry],
            "available": self.available,
        }


@dataclass
class AddressSearchResult:
    """A forward-geocoding hit."""

    name: str
    address: str
    coordinates: tuple[float, float]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "address": self.address,
            "coordinates": list(self.coordinates),
        }
