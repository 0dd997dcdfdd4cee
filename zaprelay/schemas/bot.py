from typing import Optional
from uuid import UUID

from zaprelay.schemas.base import CamelModel


class BotSettingsResponse(CamelModel):
    id: UUID
    tenant_id: UUID
    personality: str
    language: str
    auto_jokes: bool
    auto_time: bool
    auto_greeting: bool


class BotSettingsUpdate(CamelModel):
    personality: Optional[str] = None
    language: Optional[str] = None
    auto_jokes: Optional[bool] = None
    auto_time: Optional[bool] = None
    auto_greeting: Optional[bool] = None
