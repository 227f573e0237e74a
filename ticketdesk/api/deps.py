# ticketdesk/api/deps.py
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
from ticketdesk.core.roles import ALL_RIGHTS, permissions_for
from ticketdesk.core.security import ACCESS, decode_token
from ticketdesk.repositories import users_repo

security = HTTPBearer(auto_error=False)

async def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)):
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Please authenticate")
    try:
        payload = decode_token(credentials.credentials, ACCESS)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Please authenticate")

    user = await users_repo.find_by_id(payload["sub"])
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Please authenticate")
    return user  # dict

def require_rights(*rights: str):
    unknown = set(rights) - ALL_RIGHTS
    if unknown:
        raise ValueError(f"rights not granted to any role: {sorted(unknown)}")
    required = frozenset(rights)

    async def checker(user=Depends(get_current_user)):
        if not required <= permissions_for(user.get("role")):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return user
    return checker
