# app/ticket/store.py
"""Thin persistence layer for tickets: the only place that issues queries."""
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.ticket.models import Ticket, TicketVote


class DuplicateVote(Exception):
    """The (ticket, user) pair already has a vote recorded."""


def insert_ticket(db: Session, fields: dict[str, Any]) -> Ticket:
    db_ticket = Ticket(**fields)
    db.add(db_ticket)
    db.commit()
    db.refresh(db_ticket)
    return db_ticket


def find_all_sorted(db: Session) -> list[Ticket]:
    stmt = select(Ticket).order_by(Ticket.upvotes.desc(), Ticket.created_at.desc())
    return list(db.scalars(stmt))


def find_by_id(db: Session, ticket_id: str) -> Ticket | None:
    return db.get(Ticket, ticket_id)


def update_by_id(db: Session, ticket_id: str, fields: dict[str, Any]) -> Ticket | None:
    db_ticket = find_by_id(db, ticket_id)
    if db_ticket is None:
        return None
    for field, value in fields.items():
        setattr(db_ticket, field, value)
    db.commit()
    db.refresh(db_ticket)
    return db_ticket


def add_vote(db: Session, ticket_id: str, user_id: str, vote: str | None) -> None:
    """Record a vote and bump the matching counter in one transaction.

    The unique constraint on (ticket_id, user_id) is the duplicate check, so
    two racing requests from the same user cannot both be recorded.
    """
    db.add(TicketVote(ticket_id=ticket_id, user_id=user_id, vote=vote))
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateVote(user_id) from exc

    counter = {"up": "upvotes", "down": "downvotes"}.get(vote)
    if counter is not None:
        db.execute(
            update(Ticket)
            .where(Ticket.id == ticket_id)
            .values({counter: getattr(Ticket, counter) + 1})
            .execution_options(synchronize_session=False)
        )
    db.commit()
