# ticketdesk/core/indexes.py
import logging
from ticketdesk.core.config import settings
from ticketdesk.core.security import hash_password
from ticketdesk.repositories import users_repo

logger = logging.getLogger(__name__)

async def ensure_core_indexes(db):
    try:
        # tickets
        await db.tickets.create_index([("id", 1)], unique=True)
        await db.tickets.create_index([("assignedTo", 1)])
        await db.tickets.create_index([("assignedTo", 1), ("priority", 1)])
        await db.tickets.create_index([("isDeleted", 1)])
        await db.tickets.create_index([("createdAt", -1)])

        # users
        await db.users.create_index([("id", 1)], unique=True)
        await db.users.create_index([("username", 1)], unique=True)

        # refresh tokens and login lockout (TTL)
        await db.tokens.create_index("token")
        await db.tokens.create_index("expires", expireAfterSeconds=0)
        await db.failed_logins.create_index("key")
        await db.failed_logins.create_index("expireAt", expireAfterSeconds=0)
        logger.info("ensure_core_indexes: indexes ready")
    except Exception as e:
        logger.exception("Error in ensure_core_indexes: %s", e)

async def seed_admin():
    if not (settings.admin_username and settings.admin_password):
        return None
    if await users_repo.exists_with_role("admin"):
        return None
    user = await users_repo.create(settings.admin_username, hash_password(settings.admin_password), "admin")
    logger.info("seed_admin: created admin %s", user["username"])
    return user

async def startup_tasks(db):
    await ensure_core_indexes(db)
    await seed_admin()
