# ticketdesk/models/ticket.py
from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Literal, Optional, List, Union
import uuid
from ticketdesk.models.common import TicketStatus, TicketPriority, DEFAULT_STATUS, DEFAULT_PRIORITY
from ticketdesk.models.user import AssignedUser


class TicketInDB(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str = Field(min_length=1)
    status: TicketStatus = DEFAULT_STATUS
    priority: TicketPriority = DEFAULT_PRIORITY
    assignedTo: str
    closedBy: Optional[str] = None
    isDeleted: bool = False
    deletedBy: Optional[str] = None
    createdAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updatedAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class TicketCreate(BaseModel):
    title: str = Field(min_length=1)
    assignedTo: str = Field(min_length=1)
    # tickets are born open; closing goes through markAsClosed
    status: Optional[Literal["open"]] = None
    priority: Optional[TicketPriority] = None


class TicketOut(BaseModel):
    id: str
    title: str
    status: TicketStatus
    priority: TicketPriority
    # populated with the user record, raw id when the user no longer exists
    assignedTo: Union[AssignedUser, str]
    closedBy: Optional[str] = None
    isDeleted: bool
    deletedBy: Optional[str] = None
    createdAt: datetime
    updatedAt: datetime


class PaginatedTickets(BaseModel):
    results: List[TicketOut]
    page: int
    limit: int
    totalPages: int
    totalResults: int


class BlockingTickets(BaseModel):
    error: str
    result: List[TicketOut]
