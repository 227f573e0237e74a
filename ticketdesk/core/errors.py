# ticketdesk/core/errors.py
"""
Typed failures raised by services and repositories.

Handlers registered in ticketdesk/main.py turn them into HTTP responses,
so business code never builds responses itself.
"""
from typing import Any, Dict, List

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ticketdesk.models.ticket import BlockingTickets


class ApiError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class NotFoundError(ApiError):
    status_code = 404
    message = "Not found"


class NotAllowedError(ApiError):
    status_code = 401
    message = "Not Allowed"


class AuthenticationError(ApiError):
    status_code = 401
    message = "Please authenticate"


class DuplicateUsernameError(ApiError):
    status_code = 400
    message = "Username already registered"


class TooManyAttemptsError(ApiError):
    status_code = 429
    message = "Too many failed attempts, try again later"


class TicketNotCreatedError(ApiError):
    status_code = 500
    message = "Ticket not created"


class BlockingTicketsError(ApiError):
    status_code = 400
    message = "A higher priority task remains to be closed"

    def __init__(self, tickets: List[Dict[str, Any]]):
        super().__init__()
        self.tickets = tickets


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def blocking_tickets_handler(request: Request, exc: BlockingTicketsError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=BlockingTickets(error=exc.message, result=exc.tickets).model_dump(mode="json"),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # malformed input is a 400, not FastAPI's default 422
    return JSONResponse(status_code=400, content=jsonable_encoder({"detail": exc.errors()}))
