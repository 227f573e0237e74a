# ticketdesk/repositories/users_repo.py
from datetime import datetime, timezone
from typing import Iterable, List
import uuid
from ticketdesk.core.db import get_db

async def find_by_id(user_id: str) -> dict | None:
    return await get_db().users.find_one({"id": user_id})

async def find_by_username(username: str) -> dict | None:
    return await get_db().users.find_one({"username": username})

async def find_many(user_ids: Iterable[str]) -> List[dict]:
    ids = list(set(user_ids))
    if not ids:
        return []
    return await get_db().users.find({"id": {"$in": ids}}).to_list(length=len(ids))

async def exists_with_role(role: str) -> bool:
    return await get_db().users.find_one({"role": role}) is not None

async def create(username: str, password_hash: str, role: str) -> dict:
    doc = {
        "id": uuid.uuid4().hex,
        "username": username,
        "role": role,
        "password_hash": password_hash,
        "createdAt": datetime.now(timezone.utc),
    }
    await get_db().users.insert_one(doc)
    return doc
