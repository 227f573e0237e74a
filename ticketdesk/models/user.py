# ticketdesk/models/user.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from ticketdesk.models.common import Role


class AssignedUser(BaseModel):
    id: str
    username: str
    role: Role


class UserOut(BaseModel):
    id: str
    username: str
    role: Role
    createdAt: Optional[datetime] = None


class UserCreate(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=8)
    role: Role = "employee"


class UserLogin(BaseModel):
    username: str
    password: str


class RefreshTokenBody(BaseModel):
    refreshToken: str


class TokenOut(BaseModel):
    token: str
    expires: datetime


class AuthTokens(BaseModel):
    access: TokenOut
    refresh: TokenOut
    token_type: str = "bearer"


class AuthResponse(BaseModel):
    user: UserOut
    tokens: AuthTokens
