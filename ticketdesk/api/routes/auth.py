# ticketdesk/api/routes/auth.py
from fastapi import APIRouter, Depends, Request, Response, status
from slowapi.util import get_remote_address
from ticketdesk.api.deps import get_current_user
from ticketdesk.core.rate_limit import limiter, LOGIN_LIMIT
from ticketdesk.models.user import AuthResponse, AuthTokens, RefreshTokenBody, UserCreate, UserLogin, UserOut
from ticketdesk.services import auth_service
from ticketdesk.utils.mongo_helpers import to_public

router = APIRouter(prefix="/auth")

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: UserCreate):
    user = await auth_service.register_user(payload.username, payload.password, payload.role)
    return await auth_service.auth_payload(user)

@router.post("/login", response_model=AuthResponse)
@limiter.limit(LOGIN_LIMIT)
async def login(request: Request, payload: UserLogin):
    user = await auth_service.login_user(payload.username, payload.password, get_remote_address(request))
    return await auth_service.auth_payload(user)

@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(payload: RefreshTokenBody):
    await auth_service.logout(payload.refreshToken)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/refresh-tokens", response_model=AuthTokens)
async def refresh_tokens(payload: RefreshTokenBody):
    return await auth_service.refresh_auth(payload.refreshToken)

@router.get("/me", response_model=UserOut)
async def me(current_user=Depends(get_current_user)):
    return to_public(current_user)
