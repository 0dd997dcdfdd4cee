from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from zaprelay.database import get_db
from zaprelay.deps import CurrentTenant, get_current_tenant
from zaprelay.schemas.bot import BotSettingsResponse, BotSettingsUpdate
from zaprelay.services.conversation_service import get_or_create_bot_settings, update_bot_settings

router = APIRouter(prefix="/bot", tags=["bot"])


@router.get("/settings", response_model=BotSettingsResponse)
def read_settings(tenant: CurrentTenant = Depends(get_current_tenant), db: Session = Depends(get_db)):
    return get_or_create_bot_settings(db, tenant.id)


@router.post("/settings", response_model=BotSettingsResponse)
def save_settings(
    request: BotSettingsUpdate,
    tenant: CurrentTenant = Depends(get_current_tenant),
    db: Session = Depends(get_db),
):
    return update_bot_settings(db, tenant.id, request.model_dump(exclude_unset=True))
