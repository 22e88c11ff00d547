# app/ticket/schemas.py
from datetime import date, datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

RescueOrProtect = Literal["yes", "no", "unknown"]
HasDocumentation = Literal["yes", "no"]


class CamelModel(BaseModel):
    # camelCase on the wire, snake_case accepted too
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


class TicketBase(CamelModel):
    # Animal
    species: str | None = None
    nickname: str | None = None
    physical_description: str | None = None
    approximate_age: str | None = None

    # Original location
    original_location: str | None = None
    community: str | None = None
    date_last_seen: datetime | None = None

    # Removal
    date_of_relocation: datetime | None = None
    taken_by: str | None = None
    organization_or_individual: str | None = None
    affiliation: str | None = None
    witnesses: list[str] = Field(default_factory=list)
    removal_description: str | None = None

    # Current location
    current_facility: str | None = None
    facility_website: str | None = None
    facility_address: str | None = None
    facility_contact: str | None = None
    facility_phone: str | None = None
    facility_email: str | None = None
    facility_social: str | None = None
    rescue_or_protect: RescueOrProtect = "unknown"

    # Evidence
    photo_urls: list[str] = Field(default_factory=list)
    video_urls: list[str] = Field(default_factory=list)
    social_links: list[str] = Field(default_factory=list)
    news_links: list[str] = Field(default_factory=list)

    # Personal statement
    full_story: str | None = None
    why_unjust: str | None = None

    # Documentation
    has_documentation: HasDocumentation = "no"
    documentation_urls: list[str] = Field(default_factory=list)
    documentation_description: str | None = None

    # Submitter
    submitter_name: str | None = None
    submitter_email: str | None = None
    affirmed: bool = False

    # Legacy
    animal: str | None = None
    description: str | None = None

    laws_violated: list[str] = Field(default_factory=list)


class TicketCreate(TicketBase):
    @field_validator("date_last_seen", "date_of_relocation", mode="before")
    @classmethod
    def _parse_loose_date(cls, v: object) -> object:
        """Accept what HTML date inputs send: '' for unset, bare YYYY-MM-DD."""
        if v is None:
            return None
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return None
            try:
                d = date.fromisoformat(s)
            except ValueError:
                return s
            return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
        return v


class VoterOut(CamelModel):
    user_id: str
    vote: str | None = None


class TicketOut(TicketBase):
    id: str
    status: str
    upvotes: int
    downvotes: int
    voters: list[VoterOut] = Field(default_factory=list)
    created_at: datetime


class VoteRequest(CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    vote: str | None = None
    user_id: str | None = None


class ReviewRequest(CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    status: str | None = None
