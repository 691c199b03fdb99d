"""
Domain models for the observations API.

Pydantic models mirroring the provider's JSON. Response models are frozen and
map wire names through field aliases; option models are mutable and track
which fields the caller explicitly set (``model_fields_set``), which is what
decides whether a field is transmitted.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from naturalist.dates import format_timestamp, try_parse_observed_on

# =============================================================================
# Shared config / validators
# =============================================================================

RESPONSE_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")
OPTIONS_CONFIG = ConfigDict(populate_by_name=True, validate_assignment=True, extra="forbid")


def _coordinate_from_wire(value: Any) -> Any:
    """Coordinates arrive as numeric strings; blank means "not set"."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"coordinate is not numeric: {value!r}") from None
    return value


def _blank_as_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _none_as_empty(value: Any) -> Any:
    return [] if value is None else value


# =============================================================================
# Geographic
# =============================================================================


class Location(BaseModel):
    """A (longitude, latitude) point in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    longitude: float = Field(..., ge=-180, le=180)
    latitude: float = Field(..., ge=-90, le=90)


class Rectangle(BaseModel):
    """Bounding box used as a list filter; never persisted."""

    model_config = ConfigDict(frozen=True)

    southwest: Location
    northeast: Location


# =============================================================================
# Paging
# =============================================================================


class PageInfo(BaseModel):
    """Paging metadata reported by the provider. Missing headers stay ``None``."""

    model_config = ConfigDict(frozen=True)

    total_entries: int | None = None
    page: int | None = None
    per_page: int | None = None

    @property
    def last_page(self) -> int | None:
        """Last page number, if the provider reported enough to know it."""
        if self.total_entries is None or not self.per_page:
            return None
        return max(1, -(-self.total_entries // self.per_page))


# =============================================================================
# Observations (responses)
# =============================================================================


class SimpleObservation(BaseModel):
    """Summary view of an observation, as returned by list endpoints."""

    model_config = RESPONSE_CONFIG

    id: int
    uuid: str | None = None
    uri: str | None = None
    user_id: int | None = None
    user_login: str | None = None
    site_id: int | None = None
    taxon_id: int | None = None
    species_guess: str | None = None
    description: str | None = None
    place_guess: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    positional_accuracy: int | None = None
    public_positional_accuracy: int | None = None
    time_zone: str | None = None
    observed_on: date | None = None
    observed_on_string: str | None = None
    created_at: datetime | None = Field(default=None, alias="created_at_utc")
    updated_at: datetime | None = Field(default=None, alias="updated_at_utc")
    time_observed_at: datetime | None = Field(default=None, alias="time_observed_at_utc")

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _parse_coordinate(cls, value: Any) -> Any:
        return _coordinate_from_wire(value)

    @field_validator("observed_on", mode="before")
    @classmethod
    def _blank_observed_on(cls, value: Any) -> Any:
        return _blank_as_none(value)

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def try_parse_observed_on(self) -> datetime:
        """Parse ``observed_on_string``; raises ``ParseError`` on failure."""
        return try_parse_observed_on(self.observed_on_string or "")


class SimpleUser(BaseModel):
    model_config = RESPONSE_CONFIG

    id: int
    login: str | None = None
    name: str | None = None


class Comment(BaseModel):
    """A comment on an observation; ``parent_id`` links threaded replies."""

    model_config = RESPONSE_CONFIG

    id: int
    body: str = ""
    user_id: int | None = None
    user: SimpleUser | None = None
    parent_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Photo(BaseModel):
    """Photo with its derived image URLs, largest to smallest."""

    model_config = RESPONSE_CONFIG

    id: int
    large_url: str | None = None
    medium_url: str | None = None
    small_url: str | None = None
    square_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ObservationPhoto(BaseModel):
    model_config = RESPONSE_CONFIG

    id: int
    photo_id: int | None = None
    observation_id: int | None = None
    photo: Photo | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProjectObservation(BaseModel):
    """Link between an observation and a project."""

    model_config = RESPONSE_CONFIG

    id: int
    observation_id: int | None = None
    project_id: int | None = None
    tracking_code: str | None = None
    curator_identification_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FullObservation(BaseModel):
    """Detail view of an observation with its nested collections."""

    model_config = RESPONSE_CONFIG

    id: int
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    observed_on_string: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    photos: list[ObservationPhoto] = Field(default_factory=list, alias="observation_photos")
    comments: list[Comment] = Field(default_factory=list)
    projects: list[ProjectObservation] = Field(
        default_factory=list, alias="project_observations"
    )

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _parse_coordinate(cls, value: Any) -> Any:
        return _coordinate_from_wire(value)

    @field_validator("photos", "comments", "projects", mode="before")
    @classmethod
    def _null_collection(cls, value: Any) -> Any:
        return _none_as_empty(value)

    def try_parse_observed_on(self) -> datetime:
        """Parse ``observed_on_string``; raises ``ParseError`` on failure."""
        return try_parse_observed_on(self.observed_on_string or "")


class ObservationsPage(BaseModel):
    """One page of list results plus the provider's paging metadata."""

    model_config = ConfigDict(frozen=True)

    observations: list[SimpleObservation] = Field(default_factory=list)
    paging: PageInfo = Field(default_factory=PageInfo)


# =============================================================================
# Options (requests)
# =============================================================================


class GetObservationsOpt(BaseModel):
    """Filters for the list endpoint. Only fields set to non-None are sent."""

    model_config = OPTIONS_CONFIG

    page: int | None = None
    per_page: int | None = None
    rectangle: Rectangle | None = None
    on: date | None = None
    updated_since: datetime | None = None
    order_by: str | None = None
    # True = ascending, False = descending
    order_ascending: bool | None = None
    # Presence alone requests geo-tagged results; the value is ignored.
    has_geo: bool | None = None


class AddObservationOpt(BaseModel):
    """Body of a create request. Fields the caller never set are omitted."""

    model_config = OPTIONS_CONFIG

    species_guess: str | None = None
    # A date semantically, but the provider takes a full timestamp here.
    observed_on: datetime | None = Field(default=None, alias="observed_on_string")
    description: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    positional_accuracy: int | None = None
    tags: str | None = Field(default=None, alias="tag_list")
    geoprivacy: str | None = None

    @field_validator("observed_on")
    @classmethod
    def _naive_as_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_serializer("observed_on", when_used="json")
    def _observed_on_timestamp(self, value: datetime | None) -> str | None:
        return None if value is None else format_timestamp(value)


class UpdateObservationOpt(AddObservationOpt):
    """Partial update; ``id`` selects the resource and is never in the body."""

    id: int = Field(..., exclude=True)
