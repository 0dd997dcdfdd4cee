from typing import Optional

from sqlalchemy.orm import Session

from zaprelay.models import TenantUser
from zaprelay.services.errors import UnknownTenantError
from zaprelay.services.payload_normalizer import normalize_number


def find_tenant_by_bot_number(db: Session, bot_number: Optional[str]) -> Optional[TenantUser]:
    normalized = normalize_number(bot_number)
    if not normalized:
        return None
    return db.query(TenantUser).filter(TenantUser.bot_number == normalized).first()


def resolve_tenant(db: Session, owner: Optional[str]) -> TenantUser:
    """Find the tenant owning the bot number claimed by the payload."""
    tenant = find_tenant_by_bot_number(db, owner)
    if not tenant:
        raise UnknownTenantError()
    return tenant
