# ticketdesk/api/router.py
from fastapi import APIRouter
from ticketdesk.api.routes import auth, tickets

api_router = APIRouter()
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(tickets.router, prefix="/tickets", tags=["tickets"])
