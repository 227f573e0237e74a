# ticketdesk/api/routes/tickets.py
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import PlainTextResponse
from typing import Any, Dict, Optional
from ticketdesk.api.deps import require_rights
from ticketdesk.models.common import TicketPriority, TicketStatus
from ticketdesk.models.ticket import BlockingTickets, PaginatedTickets, TicketCreate, TicketOut
from ticketdesk.repositories import users_repo
from ticketdesk.services import ticket_service as svc

router = APIRouter()


@router.post("", response_model=TicketOut, status_code=status.HTTP_201_CREATED)
async def create_ticket(payload: TicketCreate, current=Depends(require_rights("manageTickets"))):
    if not await users_repo.find_by_id(payload.assignedTo):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Assigned user not found")
    return await svc.create_ticket(payload.title, payload.assignedTo, priority=payload.priority)

@router.get("", response_model=PaginatedTickets)
async def get_tickets_by_filter(
    current=Depends(require_rights("getTickets")),
    ticket_id: Optional[str] = Query(None, alias="ticketId"),
    title: Optional[str] = None,
    status_: Optional[TicketStatus] = Query(None, alias="status"),
    priority: Optional[TicketPriority] = None,
    assigned_to: Optional[str] = Query(None, alias="assignedTo"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    limit: int = Query(10, ge=1),
    page: int = Query(1, ge=1),
):
    filt: Dict[str, Any] = {}
    if ticket_id: filt["id"] = ticket_id
    if title: filt["title"] = title
    if status_: filt["status"] = status_
    if priority: filt["priority"] = priority
    if assigned_to: filt["assignedTo"] = assigned_to
    return await svc.list_tickets(filt, sort_by=sort_by, limit=limit, page=page)

@router.get("/all", response_model=PaginatedTickets)
async def get_all_tickets(
    current=Depends(require_rights("getTickets")),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    limit: int = Query(10, ge=1),
    page: int = Query(1, ge=1),
):
    return await svc.list_tickets({}, sort_by=sort_by, limit=limit, page=page)

@router.patch(
    "/markAsClosed/{ticket_id}",
    response_class=PlainTextResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": BlockingTickets}},
)
async def close_ticket(ticket_id: str, current=Depends(require_rights("editTickets"))):
    await svc.close_ticket(ticket_id, current)
    return "Ticket closed successfully"

@router.get("/{ticket_id}", response_model=TicketOut)
async def get_ticket(ticket_id: str, current=Depends(require_rights("getTickets"))):
    ticket = await svc.get_ticket(ticket_id)
    if not ticket:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Ticket not found")
    return ticket

@router.delete("/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ticket(ticket_id: str, current=Depends(require_rights("manageTickets"))):
    await svc.delete_ticket(ticket_id, current)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
