# ticketdesk/core/db.py
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from ticketdesk.core.config import settings
import certifi

_client: Optional[AsyncIOMotorClient] = None
_db: Optional[AsyncIOMotorDatabase] = None


def get_client() -> AsyncIOMotorClient:
    """
    Build a single Motor client for the process.
    With MONGO_TLS enabled it uses the certifi CA bundle (needed for Atlas / mongodb+srv).
    """
    global _client
    if _client is None:
        options = {"serverSelectionTimeoutMS": 20000}
        if settings.mongo_tls:
            options.update(tls=True, tlsCAFile=certifi.where())
        _client = AsyncIOMotorClient(settings.mongo_url, **options)
    return _client


def get_db() -> AsyncIOMotorDatabase:
    global _db
    if _db is None:
        _db = get_client()[settings.db_name]
    return _db


def set_db(db) -> None:
    """Install an already built database handle (used by the test suite)."""
    global _db
    _db = db


async def close_db() -> None:
    """
    Close the global client. Called from ticketdesk/main.py on shutdown.
    """
    global _client, _db
    if _client:
        _client.close()
    _client = None
    _db = None
