# tests/test_services.py
import pytest

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.ticket import services as ticket_service
from app.ticket import store
from app.ticket.models import TicketVote
from app.ticket.schemas import ReviewRequest, TicketCreate, VoteRequest


def _ticket(db, **fields):
    return ticket_service.submit_ticket(db, TicketCreate(**fields))


def test_submit_sets_identity_and_timestamp(db):
    ticket = _ticket(db, species="elephant")
    assert ticket.id
    assert ticket.created_at is not None
    assert ticket.status == "pending"
    assert ticket.witnesses == []


def test_vote_missing_user_id_is_validation_error(db):
    with pytest.raises(ValidationError):
        ticket_service.vote_on_ticket(db, "nope", VoteRequest(vote="up"))

    with pytest.raises(ValidationError):
        ticket_service.vote_on_ticket(db, "nope", VoteRequest(vote="up", user_id=""))


def test_vote_unknown_ticket_is_not_found(db):
    with pytest.raises(NotFoundError):
        ticket_service.vote_on_ticket(db, "nope", VoteRequest(vote="up", user_id="u1"))


def test_duplicate_vote_leaves_counts_alone(db):
    ticket = _ticket(db, species="lynx")
    ticket_service.vote_on_ticket(db, ticket.id, VoteRequest(vote="up", user_id="u1"))

    with pytest.raises(ConflictError):
        ticket_service.vote_on_ticket(db, ticket.id, VoteRequest(vote="down", user_id="u1"))

    db.refresh(ticket)
    assert ticket.upvotes == 1
    assert ticket.downvotes == 0
    assert [(v.user_id, v.vote) for v in ticket.voters] == [("u1", "up")]


def test_add_vote_relies_on_unique_constraint(db):
    ticket = _ticket(db, species="otter")
    # a vote that landed from a concurrent request after our lookup
    db.add(TicketVote(ticket_id=ticket.id, user_id="u1", vote="up"))
    db.commit()

    with pytest.raises(store.DuplicateVote):
        store.add_vote(db, ticket.id, "u1", "up")

    db.refresh(ticket)
    assert ticket.upvotes == 0
    assert len(ticket.voters) == 1


def test_vote_without_direction_records_voter(db):
    ticket = _ticket(db, species="hare")
    updated = ticket_service.vote_on_ticket(db, ticket.id, VoteRequest(user_id="u1"))
    assert updated.upvotes == 0
    assert updated.downvotes == 0
    assert [(v.user_id, v.vote) for v in updated.voters] == [("u1", None)]


def test_list_orders_by_upvotes_then_created_at(db):
    first = _ticket(db, species="first")
    second = _ticket(db, species="second")
    third = _ticket(db, species="third")
    ticket_service.vote_on_ticket(db, second.id, VoteRequest(vote="up", user_id="u1"))

    tickets = ticket_service.list_tickets(db)
    assert [t.id for t in tickets] == [second.id, third.id, first.id]
    for a, b in zip(tickets, tickets[1:]):
        assert a.upvotes >= b.upvotes
        if a.upvotes == b.upvotes:
            assert a.created_at >= b.created_at


def test_review_overwrites_status(db):
    ticket = _ticket(db, species="crane")
    ticket_service.review_ticket(db, ticket.id, ReviewRequest(status="approved"))
    reviewed = ticket_service.review_ticket(db, ticket.id, ReviewRequest(status="denied"))
    assert reviewed.status == "denied"

    # open string, nothing is rejected
    reviewed = ticket_service.review_ticket(db, ticket.id, ReviewRequest(status="escalated"))
    assert reviewed.status == "escalated"


def test_review_unknown_ticket_is_not_found(db):
    with pytest.raises(NotFoundError):
        ticket_service.review_ticket(db, "nope", ReviewRequest(status="approved"))
