# app/ticket/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.ticket import services as ticket_service
from app.ticket.schemas import ReviewRequest, TicketCreate, TicketOut, VoteRequest

router = APIRouter(prefix="/api/tickets", tags=["Tickets"])


@router.post("", response_model=TicketOut, status_code=201)
def submit(ticket: TicketCreate, db: Session = Depends(get_db)):
    return ticket_service.submit_ticket(db, ticket)


@router.get("", response_model=list[TicketOut])
def list_all(db: Session = Depends(get_db)):
    """Every ticket, most upvoted first, newest first among ties."""
    return ticket_service.list_tickets(db)


@router.post("/{ticket_id}/vote", response_model=TicketOut)
def vote(ticket_id: str, body: VoteRequest | None = None, db: Session = Depends(get_db)):
    return ticket_service.vote_on_ticket(db, ticket_id, body or VoteRequest())


@router.patch("/{ticket_id}/review", response_model=TicketOut)
def review(ticket_id: str, body: ReviewRequest | None = None, db: Session = Depends(get_db)):
    return ticket_service.review_ticket(db, ticket_id, body or ReviewRequest())
