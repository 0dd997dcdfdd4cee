from zaprelay.services.conversation_service import (
    get_or_create_bot_settings,
    get_or_create_contact,
    log_activity,
    save_message,
)
from zaprelay.services.echo_classifier import is_echo
from zaprelay.services.payload_normalizer import normalize_number, normalize_payload
from zaprelay.services.tenant_service import resolve_tenant

__all__ = [
    "get_or_create_contact",
    "get_or_create_bot_settings",
    "save_message",
    "log_activity",
    "is_echo",
    "normalize_number",
    "normalize_payload",
    "resolve_tenant",
]
