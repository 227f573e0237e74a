# ticketdesk/models/common.py
from typing import Literal

TicketStatus = Literal["open", "close"]
TicketPriority = Literal["low", "medium", "high"]
Role = Literal["employee", "admin"]

STATUS_OPEN = "open"
STATUS_CLOSED = "close"
PRIORITY_HIGH = "high"

DEFAULT_STATUS: TicketStatus = STATUS_OPEN
DEFAULT_PRIORITY: TicketPriority = "low"

SORTABLE_FIELDS = {"title", "status", "priority", "assignedTo", "closedBy", "createdAt", "updatedAt", "id"}
