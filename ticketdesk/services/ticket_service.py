# ticketdesk/services/ticket_service.py
"""
Ticket lifecycle: create -> open -> close, with soft delete as an
independent flag. Nothing moves a ticket from ``close`` back to ``open``.
"""
import logging
from typing import Any, Dict, List, Optional
from ticketdesk.core.errors import BlockingTicketsError, NotAllowedError, NotFoundError, TicketNotCreatedError
from ticketdesk.models.common import PRIORITY_HIGH
from ticketdesk.repositories import tickets_repo as repo
from ticketdesk.repositories import users_repo

logger = logging.getLogger(__name__)

ASSIGNEE_FIELDS = ("id", "username", "role")


async def populate_assigned(tickets: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Replace each ``assignedTo`` id with the assignee's public record."""
    users = await users_repo.find_many(t["assignedTo"] for t in tickets if t.get("assignedTo"))
    by_id = {u["id"]: {k: u.get(k) for k in ASSIGNEE_FIELDS} for u in users}
    out = []
    for t in tickets:
        t = dict(t)
        t["assignedTo"] = by_id.get(t.get("assignedTo"), t.get("assignedTo"))
        out.append(t)
    return out

async def create_ticket(title: str, assigned_to: str, priority: Optional[str] = None):
    created = await repo.create(title, assigned_to, priority=priority)
    if not created:
        raise TicketNotCreatedError()
    ticket = await get_ticket(created["id"])
    if not ticket:
        raise TicketNotCreatedError()
    logger.info("ticket %s created for %s (priority=%s)", ticket["id"], assigned_to, ticket["priority"])
    return ticket

async def list_tickets(filt: Dict[str, Any], sort_by: Optional[str] = None, limit: Any = None, page: Any = None):
    return await repo.query(filt, sort_by=sort_by, limit=limit, page=page, populate=populate_assigned)

async def get_ticket(ticket_id: str):
    ticket = await repo.find_by_id(ticket_id)
    if not ticket:
        return None
    return (await populate_assigned([ticket]))[0]

async def close_ticket(ticket_id: str, actor: Dict[str, Any]):
    ticket = await repo.find_by_id(ticket_id)
    if not ticket:
        raise NotFoundError("Ticket not found")

    if actor.get("role") != "admin" and ticket["assignedTo"] != actor.get("id"):
        logger.warning("user %s may not close ticket %s", actor.get("id"), ticket_id)
        raise NotAllowedError()

    # Any high priority ticket in the assignee's queue blocks the close. The
    # lookup ignores status and includes this ticket, so closed high priority
    # tickets and the ticket itself both count.
    blocking = await repo.find_all({"assignedTo": ticket["assignedTo"], "priority": PRIORITY_HIGH})
    if blocking:
        logger.warning("close of ticket %s blocked by %d high priority ticket(s)", ticket_id, len(blocking))
        raise BlockingTicketsError(blocking)

    closed = await repo.close(ticket_id, actor["id"])
    logger.info("ticket %s closed by %s", ticket_id, actor["id"])
    return closed

async def delete_ticket(ticket_id: str, actor: Dict[str, Any]):
    deleted = await repo.soft_delete(ticket_id, actor["id"])
    logger.info("ticket %s deleted by %s", ticket_id, actor["id"])
    return deleted
