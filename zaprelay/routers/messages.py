from datetime import datetime, timezone
from uuid import UUID
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from zaprelay.config import Settings
from zaprelay.database import get_db
from zaprelay.deps import CurrentTenant, get_current_tenant, get_gateway, get_settings
from zaprelay.logging_config import get_logger
from zaprelay.models import ActionType, ActivityLog, Message, MessageSender
from zaprelay.schemas.dashboard import (
    ActivityLogResponse,
    MessageFeedItem,
    MessageResponse,
    MessageWithContactResponse,
    SendRequest,
)
from zaprelay.services.conversation_service import get_contact, get_or_create_contact, log_activity, save_message
from zaprelay.services.errors import RelayError
from zaprelay.services.gateway_service import GatewayClient
from zaprelay.services.payload_normalizer import normalize_number

logger = get_logger("messages")

router = APIRouter(tags=["messages"])

RECENT_LIMIT = 5
UNKNOWN_USER = "Desconhecido"


def format_clock(value: datetime, tz_name: str) -> str:
    """HH:MM in the dashboard's timezone; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(ZoneInfo(tz_name)).strftime("%H:%M")


@router.post("/send")
async def send_message(
    request: SendRequest,
    tenant: CurrentTenant = Depends(get_current_tenant),
    db: Session = Depends(get_db),
    gateway: GatewayClient = Depends(get_gateway),
):
    """Manual send from the dashboard; returns the gateway response as-is."""
    number = normalize_number(request.number)
    if not number or not (request.text or "").strip():
        raise RelayError("Número e texto são obrigatórios", status_code=400)

    contact = get_or_create_contact(db, tenant.id, number)
    data = await gateway.send_text(number, request.text)

    save_message(db, contact, MessageSender.BOT, request.text)
    log_activity(db, contact, ActionType.SENT_MESSAGE, f"Mensagem enviada manualmente: {request.text}")
    logger.info("Manual message sent", extra={"context": {"tenant_id": str(tenant.id), "number": number}})
    return data


@router.get("/conversations", response_model=list[MessageWithContactResponse])
def list_conversations(tenant: CurrentTenant = Depends(get_current_tenant), db: Session = Depends(get_db)):
    return (
        db.query(Message)
        .options(joinedload(Message.contact))
        .filter(Message.tenant_id == tenant.id)
        .order_by(Message.timestamp.desc())
        .limit(RECENT_LIMIT)
        .all()
    )


@router.get("/messages", response_model=list[MessageFeedItem])
def list_messages(
    tenant: CurrentTenant = Depends(get_current_tenant),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    messages = (
        db.query(Message)
        .options(joinedload(Message.contact))
        .filter(Message.tenant_id == tenant.id)
        .order_by(Message.timestamp.desc())
        .all()
    )
    return [
        MessageFeedItem(
            id=m.id,
            message=m.content,
            user=(m.contact.name if m.contact else None) or m.sender or UNKNOWN_USER,
            is_bot=m.sender == MessageSender.BOT.value,
            time=format_clock(m.timestamp, settings.display_timezone),
        )
        for m in messages
    ]


@router.get("/messages/{contact_id}", response_model=list[MessageResponse])
def list_contact_messages(
    contact_id: UUID,
    tenant: CurrentTenant = Depends(get_current_tenant),
    db: Session = Depends(get_db),
):
    if not get_contact(db, tenant.id, contact_id):
        raise HTTPException(status_code=404, detail="Contato não encontrado")

    return (
        db.query(Message)
        .filter(Message.contact_id == contact_id, Message.tenant_id == tenant.id)
        .order_by(Message.timestamp.asc())
        .all()
    )


@router.get("/logs", response_model=list[ActivityLogResponse])
def list_logs(tenant: CurrentTenant = Depends(get_current_tenant), db: Session = Depends(get_db)):
    return (
        db.query(ActivityLog)
        .options(joinedload(ActivityLog.contact))
        .filter(ActivityLog.tenant_id == tenant.id)
        .order_by(ActivityLog.timestamp.desc())
        .limit(RECENT_LIMIT)
        .all()
    )
