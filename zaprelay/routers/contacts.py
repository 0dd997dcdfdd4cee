from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from zaprelay.database import get_db
from zaprelay.deps import CurrentTenant, get_current_tenant
from zaprelay.logging_config import get_logger
from zaprelay.models import Contact, Message
from zaprelay.schemas.dashboard import ContactSummary, DeleteContactResponse
from zaprelay.services.conversation_service import delete_contact

logger = get_logger("contacts")

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("", response_model=list[ContactSummary])
def list_contacts(tenant: CurrentTenant = Depends(get_current_tenant), db: Session = Depends(get_db)):
    """Contacts with their latest message, in one query."""
    latest = (
        db.query(Message.contact_id, func.max(Message.timestamp).label("last_at"))
        .filter(Message.tenant_id == tenant.id)
        .group_by(Message.contact_id)
        .subquery()
    )
    rows = (
        db.query(Contact, Message)
        .outerjoin(latest, latest.c.contact_id == Contact.id)
        .outerjoin(
            Message,
            and_(
                Message.contact_id == Contact.id,
                Message.tenant_id == tenant.id,
                Message.timestamp == latest.c.last_at,
            ),
        )
        .filter(Contact.tenant_id == tenant.id)
        .order_by(Contact.created_at.desc(), Message.id)
        .all()
    )

    summaries = {}
    for contact, last in rows:
        # Messages sharing the latest timestamp yield extra rows; keep the first.
        if contact.id in summaries:
            continue
        summaries[contact.id] = ContactSummary(
            id=contact.id,
            name=contact.name or contact.phone_number,
            last_message=last.content if last else "",
            time=last.timestamp if last else None,
        )
    return list(summaries.values())


@router.delete("/{contact_id}", response_model=DeleteContactResponse)
def remove_contact(
    contact_id: UUID,
    tenant: CurrentTenant = Depends(get_current_tenant),
    db: Session = Depends(get_db),
):
    if not delete_contact(db, tenant.id, contact_id):
        raise HTTPException(status_code=404, detail="Contato não encontrado ou não pertence ao usuário")

    logger.info("Contact deleted", extra={"context": {"tenant_id": str(tenant.id), "contact_id": str(contact_id)}})
    return DeleteContactResponse(success=True, message="Contato e mensagens excluídos com sucesso")
