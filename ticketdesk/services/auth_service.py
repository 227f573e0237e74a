# ticketdesk/services/auth_service.py
import logging
from typing import Any, Dict
from ticketdesk.core.config import settings
from ticketdesk.core.errors import AuthenticationError, DuplicateUsernameError, NotFoundError, TooManyAttemptsError
from ticketdesk.core.security import (
    ACCESS, REFRESH, access_expiry, create_token, decode_token, hash_password, refresh_expiry, verify_password,
)
from ticketdesk.repositories import tokens_repo, users_repo
from ticketdesk.utils.mongo_helpers import to_public

logger = logging.getLogger(__name__)


async def register_user(username: str, password: str, role: str) -> Dict[str, Any]:
    if await users_repo.find_by_username(username):
        raise DuplicateUsernameError()
    user = await users_repo.create(username, hash_password(password), role)
    logger.info("user %s registered with role %s", username, role)
    return user

async def login_user(username: str, password: str, ip: str) -> Dict[str, Any]:
    key = f"{username}|{ip}"
    attempts = await tokens_repo.count_failed_logins(key, settings.login_lock_window_min)
    if attempts >= settings.login_lock_threshold:
        raise TooManyAttemptsError()

    user = await users_repo.find_by_username(username)
    if not user or not verify_password(password, user["password_hash"]):
        await tokens_repo.record_failed_login(key, settings.login_lock_window_min)
        logger.warning("failed login for %s from %s", username, ip)
        raise AuthenticationError("Incorrect username or password")
    return user

async def generate_auth_tokens(user: Dict[str, Any]) -> Dict[str, Any]:
    access_expires = access_expiry()
    refresh_expires = refresh_expiry()
    access = create_token(user["id"], ACCESS, access_expires)
    refresh = create_token(user["id"], REFRESH, refresh_expires)
    await tokens_repo.save(refresh, user["id"], refresh_expires)
    return {
        "access": {"token": access, "expires": access_expires},
        "refresh": {"token": refresh, "expires": refresh_expires},
        "token_type": "bearer",
    }

async def auth_payload(user: Dict[str, Any]) -> Dict[str, Any]:
    return {"user": to_public(user), "tokens": await generate_auth_tokens(user)}

async def logout(refresh_token: str) -> None:
    doc = await tokens_repo.find(refresh_token)
    if not doc:
        raise NotFoundError("Not found")
    await tokens_repo.delete(refresh_token)

async def refresh_auth(refresh_token: str) -> Dict[str, Any]:
    try:
        payload = decode_token(refresh_token, REFRESH)
        doc = await tokens_repo.find(refresh_token, user_id=payload["sub"])
        if not doc:
            raise ValueError("unknown_token")
        user = await users_repo.find_by_id(payload["sub"])
        if not user:
            raise ValueError("unknown_user")
    except ValueError as e:
        raise AuthenticationError() from e
    await tokens_repo.delete(refresh_token)
    return await generate_auth_tokens(user)
