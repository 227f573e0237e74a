# ticketdesk/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from passlib.context import CryptContext
import jwt
import uuid
from ticketdesk.core.config import settings

ACCESS = "access"
REFRESH = "refresh"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def create_token(sub: str, token_type: str, expires: datetime) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": sub,
        "type": token_type,
        "jti": uuid.uuid4().hex,
        "iat": int(now.timestamp()),
        "exp": int(expires.timestamp()),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)

def access_expiry(minutes: int | None = None) -> datetime:
    return datetime.now(timezone.utc) + timedelta(minutes=minutes or settings.access_token_expire_minutes)

def refresh_expiry(days: int | None = None) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days or settings.refresh_token_expire_days)

def decode_token(token: str, expected_type: str = ACCESS) -> Dict[str, Any]:
    try:
        data = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except jwt.PyJWTError as e:
        raise ValueError("invalid_token") from e
    if data.get("type") != expected_type or not data.get("sub"):
        raise ValueError("invalid_token_payload")
    return data
