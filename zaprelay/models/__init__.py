from zaprelay.models.activity_log import ActionType, ActivityLog
from zaprelay.models.bot_settings import DEFAULT_BOT_SETTINGS, BotSettings
from zaprelay.models.contact import Contact
from zaprelay.models.message import Message, MessageSender
from zaprelay.models.tenant_user import TenantUser

__all__ = [
    "TenantUser",
    "Contact",
    "Message",
    "MessageSender",
    "ActivityLog",
    "ActionType",
    "BotSettings",
    "DEFAULT_BOT_SETTINGS",
]
