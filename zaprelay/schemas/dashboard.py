from datetime import datetime
from typing import Optional
from uuid import UUID

from zaprelay.schemas.base import CamelModel


class ContactResponse(CamelModel):
    id: UUID
    tenant_id: UUID
    phone_number: str
    name: Optional[str] = None
    created_at: datetime


class MessageResponse(CamelModel):
    id: UUID
    contact_id: UUID
    tenant_id: UUID
    sender: str
    content: str
    timestamp: datetime


class MessageWithContactResponse(MessageResponse):
    contact: Optional[ContactResponse] = None


class ActivityLogResponse(CamelModel):
    id: UUID
    contact_id: UUID
    tenant_id: UUID
    action_type: str
    message: str
    timestamp: datetime
    contact: Optional[ContactResponse] = None


class MessageFeedItem(CamelModel):
    id: UUID
    message: str
    user: str
    is_bot: bool
    time: str


class ContactSummary(CamelModel):
    id: UUID
    name: str
    last_message: str
    time: Optional[datetime] = None


class DeleteContactResponse(CamelModel):
    success: bool
    message: str


class SendRequest(CamelModel):
    number: Optional[str] = None
    text: Optional[str] = None
