# ticketdesk/repositories/tokens_repo.py
from datetime import datetime, timedelta, timezone
from ticketdesk.core.db import get_db
from ticketdesk.core.security import REFRESH

async def save(token: str, user_id: str, expires: datetime, token_type: str = REFRESH) -> dict:
    doc = {"token": token, "user": user_id, "type": token_type, "expires": expires, "blacklisted": False}
    await get_db().tokens.insert_one(doc)
    return doc

async def find(token: str, token_type: str = REFRESH, user_id: str | None = None) -> dict | None:
    filt = {"token": token, "type": token_type, "blacklisted": False}
    if user_id is not None:
        filt["user"] = user_id
    return await get_db().tokens.find_one(filt)

async def delete(token: str) -> None:
    await get_db().tokens.delete_one({"token": token})

async def record_failed_login(key: str, window_min: int) -> None:
    now = datetime.now(timezone.utc)
    await get_db().failed_logins.insert_one({
        "key": key,
        "createdAt": now,
        "expireAt": now + timedelta(minutes=window_min),
    })

async def count_failed_logins(key: str, window_min: int) -> int:
    since = datetime.now(timezone.utc) - timedelta(minutes=window_min)
    return await get_db().failed_logins.count_documents({"key": key, "createdAt": {"$gte": since}})
