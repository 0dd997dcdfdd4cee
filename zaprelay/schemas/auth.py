from typing import Optional
from uuid import UUID

from zaprelay.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None
    bot_number: Optional[str] = None


class RegisterResponse(CamelModel):
    message: str
    user_id: UUID


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(CamelModel):
    token: str
