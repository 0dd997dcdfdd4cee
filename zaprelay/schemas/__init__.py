from zaprelay.schemas.auth import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse
from zaprelay.schemas.bot import BotSettingsResponse, BotSettingsUpdate

__all__ = [
    "RegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "TokenResponse",
    "BotSettingsResponse",
    "BotSettingsUpdate",
]
