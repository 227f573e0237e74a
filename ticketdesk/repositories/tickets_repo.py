# ticketdesk/repositories/tickets_repo.py
"""
Ticket persistence. Soft-deleted tickets are invisible through every
function here: ``isDeleted == False`` is always conjoined with the caller's
filter and there is no way around it.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from ticketdesk.core.db import get_db
from ticketdesk.core.errors import NotFoundError
from ticketdesk.models.common import SORTABLE_FIELDS, STATUS_CLOSED
from ticketdesk.models.ticket import TicketInDB
from ticketdesk.utils.mongo_helpers import to_public
from ticketdesk.utils.pagination import Populate, paginate


def _visible(filt: Dict[str, Any] | None) -> Dict[str, Any]:
    return {**(filt or {}), "isDeleted": False}

async def create(title: str, assigned_to: str, priority: str | None = None) -> dict | None:
    # new tickets are always open; only close() sets the closed status and closedBy
    fields = {"title": title, "assignedTo": assigned_to}
    if priority is not None:
        fields["priority"] = priority
    doc = TicketInDB(**fields).model_dump()
    await get_db().tickets.insert_one(doc)
    return to_public(doc)

async def find_by_id(ticket_id: str) -> dict | None:
    return to_public(await get_db().tickets.find_one(_visible({"id": ticket_id})))

async def find_all(filt: Dict[str, Any]) -> List[dict]:
    cur = get_db().tickets.find(_visible(filt)).sort([("createdAt", 1), ("_id", 1)])
    return to_public(await cur.to_list(length=None)) or []

async def query(filt: Dict[str, Any], sort_by: Optional[str] = None, limit: Any = None, page: Any = None,
                populate: Optional[Populate] = None) -> Dict[str, Any]:
    result = await paginate(get_db().tickets, _visible(filt), sort_by=sort_by, limit=limit, page=page,
                            allowed_sort=SORTABLE_FIELDS, populate=populate)
    result["results"] = to_public(result["results"]) or []
    return result

async def count(filt: Dict[str, Any]) -> int:
    return await get_db().tickets.count_documents(_visible(filt))

async def update_by_id(ticket_id: str, fields: Dict[str, Any]) -> dict:
    # read-modify-write without a version check: last writer wins
    ticket = await find_by_id(ticket_id)
    if not ticket:
        raise NotFoundError("Ticket not found")
    changes = {**fields, "updatedAt": datetime.now(timezone.utc)}
    await get_db().tickets.update_one({"id": ticket_id}, {"$set": changes})
    ticket.update(changes)
    return ticket

async def soft_delete(ticket_id: str, by: str) -> dict:
    return await update_by_id(ticket_id, {"isDeleted": True, "deletedBy": by})

async def close(ticket_id: str, by: str) -> dict:
    return await update_by_id(ticket_id, {"status": STATUS_CLOSED, "closedBy": by})
