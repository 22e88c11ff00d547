# app/ticket/models.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    TypeDecorator,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.core.database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes, also on backends that store them naive (SQLite)."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        # naive input is taken to be UTC already
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(String(32), primary_key=True, default=_new_id)

    # Animal
    species = Column(String, index=True)
    nickname = Column(String)
    physical_description = Column(Text)
    approximate_age = Column(String)

    # Original location
    original_location = Column(String)
    community = Column(String)
    date_last_seen = Column(UTCDateTime())

    # Removal
    date_of_relocation = Column(UTCDateTime())
    taken_by = Column(String)
    organization_or_individual = Column(String)
    affiliation = Column(String)
    witnesses = Column(JSON, nullable=False, default=list)
    removal_description = Column(Text)

    # Current location
    current_facility = Column(String)
    facility_website = Column(String)
    facility_address = Column(String)
    facility_contact = Column(String)
    facility_phone = Column(String)
    facility_email = Column(String)
    facility_social = Column(String)
    rescue_or_protect = Column(String, nullable=False, default="unknown")  # 'yes' | 'no' | 'unknown'

    # Evidence
    photo_urls = Column(JSON, nullable=False, default=list)
    video_urls = Column(JSON, nullable=False, default=list)
    social_links = Column(JSON, nullable=False, default=list)
    news_links = Column(JSON, nullable=False, default=list)

    # Personal statement
    full_story = Column(Text)
    why_unjust = Column(Text)

    # Documentation
    has_documentation = Column(String, nullable=False, default="no")  # 'yes' | 'no'
    documentation_urls = Column(JSON, nullable=False, default=list)
    documentation_description = Column(Text)

    # Submitter
    submitter_name = Column(String)
    submitter_email = Column(String)
    affirmed = Column(Boolean, nullable=False, default=False)

    # Legacy readers still look at these
    animal = Column(String)
    description = Column(Text)

    # Moderation
    laws_violated = Column(JSON, nullable=False, default=list)
    status = Column(String, nullable=False, default="pending", index=True)
    upvotes = Column(Integer, nullable=False, default=0, index=True)
    downvotes = Column(Integer, nullable=False, default=0)
    created_at = Column(UTCDateTime(), nullable=False, default=_utcnow, index=True)

    voters = relationship(
        "TicketVote",
        back_populates="ticket",
        order_by="TicketVote.id",
        lazy="selectin",
        cascade="all, delete-orphan",
    )


class TicketVote(Base):
    __tablename__ = "ticket_votes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ticket_id = Column(String(32), ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String, nullable=False)
    vote = Column(String)  # 'up' | 'down', anything else counts for nothing
    created_at = Column(UTCDateTime(), nullable=False, default=_utcnow)

    ticket = relationship("Ticket", back_populates="voters")

    __table_args__ = (
        UniqueConstraint("ticket_id", "user_id", name="uq_ticket_votes_ticket_user"),
    )
