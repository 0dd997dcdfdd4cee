"""Persistence helpers for contacts, messages, activity logs and bot settings.

Every helper takes the tenant explicitly and commits its own write. The relay
pipeline does not wrap several writes in one transaction, so a run that fails
half way leaves the rows written so far in place.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from zaprelay.logging_config import get_logger
from zaprelay.models import (
    DEFAULT_BOT_SETTINGS,
    ActionType,
    ActivityLog,
    BotSettings,
    Contact,
    Message,
    MessageSender,
)
from zaprelay.services.errors import PersistenceError

logger = get_logger("conversation_service")

BOT_SETTINGS_FIELDS = tuple(DEFAULT_BOT_SETTINGS)


def _persistence_error(db: Session, action: str, exc: SQLAlchemyError) -> PersistenceError:
    db.rollback()
    logger.error("Persistence failed", extra={"context": {"action": action, "error": str(exc)}})
    return PersistenceError(f"Falha ao salvar ({action}): {exc}")


def commit_or_raise(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        raise _persistence_error(db, action, exc) from exc


def get_or_create_contact(db: Session, tenant_id: UUID, phone_number: str) -> Contact:
    """Find contact by (tenant, phone number) or create a new one."""
    contact = (
        db.query(Contact)
        .filter(Contact.tenant_id == tenant_id, Contact.phone_number == phone_number)
        .first()
    )

    if not contact:
        contact = Contact(tenant_id=tenant_id, phone_number=phone_number, created_at=datetime.now(timezone.utc))
        db.add(contact)
        commit_or_raise(db, "create_contact")
        db.refresh(contact)

    return contact


def _find_bot_settings(db: Session, tenant_id: UUID) -> Optional[BotSettings]:
    return db.query(BotSettings).filter(BotSettings.tenant_id == tenant_id).first()


def get_or_create_bot_settings(db: Session, tenant_id: UUID) -> BotSettings:
    """Tenant settings, created with defaults on first use.

    A concurrent request may insert the row between our lookup and our
    insert; the unique tenant_id then rejects ours and the stored row wins.
    """
    settings = _find_bot_settings(db, tenant_id)
    if settings:
        return settings

    settings = BotSettings(tenant_id=tenant_id, **DEFAULT_BOT_SETTINGS)
    db.add(settings)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        existing = _find_bot_settings(db, tenant_id)
        if existing is None:
            raise _persistence_error(db, "create_bot_settings", exc) from exc
        logger.info(
            "Bot settings created concurrently, reusing stored row",
            extra={"context": {"tenant_id": str(tenant_id)}},
        )
        return existing
    except SQLAlchemyError as exc:
        raise _persistence_error(db, "create_bot_settings", exc) from exc

    commit_or_raise(db, "create_bot_settings")
    db.refresh(settings)
    return settings


def update_bot_settings(db: Session, tenant_id: UUID, changes: dict) -> BotSettings:
    """Upsert tenant settings; only keys present in ``changes`` are written."""
    settings = get_or_create_bot_settings(db, tenant_id)

    for field in BOT_SETTINGS_FIELDS:
        if field in changes and changes[field] is not None:
            setattr(settings, field, changes[field])

    commit_or_raise(db, "update_bot_settings")
    db.refresh(settings)
    return settings


def save_message(db: Session, contact: Contact, sender: MessageSender, content: str) -> Message:
    message = Message(
        contact_id=contact.id,
        tenant_id=contact.tenant_id,
        sender=sender.value,
        content=content,
        timestamp=datetime.now(timezone.utc),
    )
    db.add(message)
    commit_or_raise(db, "save_message")
    return message


def log_activity(db: Session, contact: Contact, action_type: ActionType, message: str) -> ActivityLog:
    entry = ActivityLog(
        contact_id=contact.id,
        tenant_id=contact.tenant_id,
        action_type=action_type.value,
        message=message,
        timestamp=datetime.now(timezone.utc),
    )
    db.add(entry)
    commit_or_raise(db, "log_activity")
    return entry


def get_contact(db: Session, tenant_id: UUID, contact_id: UUID) -> Optional[Contact]:
    return db.query(Contact).filter(Contact.id == contact_id, Contact.tenant_id == tenant_id).first()


def delete_contact(db: Session, tenant_id: UUID, contact_id: UUID) -> bool:
    """Delete a contact with its messages and activity logs. False if not owned by tenant."""
    contact = get_contact(db, tenant_id, contact_id)
    if not contact:
        return False

    db.query(Message).filter(Message.contact_id == contact_id, Message.tenant_id == tenant_id).delete(
        synchronize_session=False
    )
    db.query(ActivityLog).filter(
        ActivityLog.contact_id == contact_id, ActivityLog.tenant_id == tenant_id
    ).delete(synchronize_session=False)
    db.delete(contact)
    commit_or_raise(db, "delete_contact")
    return True
