# app/ticket/services.py
import logging

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.ticket import store
from app.ticket.models import Ticket
from app.ticket.schemas import ReviewRequest, TicketCreate, VoteRequest

logger = logging.getLogger(__name__)


def submit_ticket(db: Session, payload: TicketCreate) -> Ticket:
    db_ticket = store.insert_ticket(db, payload.model_dump())
    logger.info("Ticket %s submitted (species=%s)", db_ticket.id, db_ticket.species)
    return db_ticket


def list_tickets(db: Session) -> list[Ticket]:
    return store.find_all_sorted(db)


def get_ticket(db: Session, ticket_id: str) -> Ticket:
    db_ticket = store.find_by_id(db, ticket_id)
    if db_ticket is None:
        raise NotFoundError("Ticket", ticket_id)
    return db_ticket


def vote_on_ticket(db: Session, ticket_id: str, payload: VoteRequest) -> Ticket:
    """Record one vote per user per ticket.

    A direction other than 'up' or 'down' still uses up the user's vote
    without touching either counter.
    """
    if not payload.user_id:
        raise ValidationError("userId required", field="userId")

    db_ticket = get_ticket(db, ticket_id)
    try:
        store.add_vote(db, db_ticket.id, payload.user_id, payload.vote)
    except store.DuplicateVote:
        logger.info("Rejected duplicate vote on ticket %s by %s", ticket_id, payload.user_id)
        raise ConflictError("User already voted", context={"ticket_id": ticket_id}) from None

    db.refresh(db_ticket)
    logger.info(
        "Vote %r on ticket %s by %s (up=%d down=%d)",
        payload.vote,
        db_ticket.id,
        payload.user_id,
        db_ticket.upvotes,
        db_ticket.downvotes,
    )
    return db_ticket


def review_ticket(db: Session, ticket_id: str, payload: ReviewRequest) -> Ticket:
    # no transition rules: the last status written wins
    fields = payload.model_dump(exclude_none=True)
    db_ticket = store.update_by_id(db, ticket_id, fields)
    if db_ticket is None:
        raise NotFoundError("Ticket", ticket_id)
    logger.info("Ticket %s reviewed, status=%s", db_ticket.id, db_ticket.status)
    return db_ticket
