# ticketdesk/main.py
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi.errors import RateLimitExceeded

from ticketdesk.api.router import api_router
from ticketdesk.core.config import settings
from ticketdesk.core.db import close_db, get_db
from ticketdesk.core.errors import (
    ApiError, BlockingTicketsError, api_error_handler, blocking_tickets_handler, validation_error_handler,
)
from ticketdesk.core.indexes import startup_tasks
from ticketdesk.core.logging import setup_logging
from ticketdesk.core.rate_limit import limiter, rate_limit_handler

APP_NAME = os.getenv("APP_NAME", "Ticketdesk API")
APP_VERSION = os.getenv("APP_VERSION", "0.1.0")

setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # indexes and admin seed are idempotent
    await startup_tasks(get_db())
    yield
    await close_db()


app = FastAPI(title=APP_NAME, version=APP_VERSION, lifespan=lifespan)

# --- CORS first ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1024)

# SlowAPI: limiter used by the login endpoint
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

# Business failures -> HTTP
app.add_exception_handler(BlockingTicketsError, blocking_tickets_handler)
app.add_exception_handler(ApiError, api_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

app.include_router(api_router, prefix="")
app.include_router(api_router, prefix="/v1", include_in_schema=False)

@app.get("/health")
async def health():
    return {"ok": True}

@app.get("/ready")
async def ready():
    return {"ready": True}

# Local runner
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("ticketdesk.main:app", reload=True, host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
