"""Inbound webhook relay: classify a gateway event, record it, relay the bot reply."""

from typing import Any

from sqlalchemy.orm import Session

from zaprelay.logging_config import LoggerAdapter, get_logger
from zaprelay.models import ActionType, BotSettings, Contact, MessageSender
from zaprelay.schemas.bot import BotSettingsResponse
from zaprelay.services.automation_service import AutomationEngineClient, extract_reply
from zaprelay.services.conversation_service import (
    get_or_create_bot_settings,
    get_or_create_contact,
    log_activity,
    save_message,
)
from zaprelay.services.echo_classifier import is_echo
from zaprelay.services.errors import EmptyMessageError, UpstreamTransportError
from zaprelay.services.gateway_service import GatewayClient
from zaprelay.services.payload_normalizer import NormalizedMessage, normalize_payload
from zaprelay.services.tenant_service import resolve_tenant

logger = get_logger("relay_pipeline")

EMPTY_ECHO_PLACEHOLDER = "[mensagem sem texto]"
MSG_BOT_SENT = "Bot enviou: {content}"
MSG_USER_RECEIVED = "Mensagem recebida do usuário"
MSG_BOT_REPLIED = "Bot respondeu: {content}"


def build_forward_payload(payload: dict, bot_settings: BotSettings, text: str, phone_number: str) -> dict:
    """Original webhook body enriched with the tenant's settings and the normalized message."""
    settings_data = BotSettingsResponse.model_validate(bot_settings).model_dump(mode="json", by_alias=True)
    return {
        **payload,
        "botSettings": settings_data,
        "messageText": text,
        "phoneNumber": phone_number,
    }


class RelayPipeline:
    """One instance per inbound request. Steps run strictly in order."""

    def __init__(self, db: Session, automation: AutomationEngineClient, gateway: GatewayClient):
        self.db = db
        self.automation = automation
        self.gateway = gateway

    async def handle(self, payload: Any) -> dict:
        normalized = normalize_payload(payload)
        tenant = resolve_tenant(self.db, normalized.owner)

        log = LoggerAdapter(
            logger,
            {"tenant_id": str(tenant.id), "phone_number": normalized.sender_number},
        )

        contact = get_or_create_contact(self.db, tenant.id, normalized.sender_number)
        bot_settings = get_or_create_bot_settings(self.db, tenant.id)

        if is_echo(normalized.from_me, normalized.sender_number, tenant.bot_number):
            return self._record_echo(contact, normalized, log)

        return await self._relay(payload, normalized, contact, bot_settings, log)

    def _record_echo(self, contact: Contact, normalized: NormalizedMessage, log: LoggerAdapter) -> dict:
        content = normalized.text.strip() or EMPTY_ECHO_PLACEHOLDER
        save_message(self.db, contact, MessageSender.BOT, content)
        log_activity(self.db, contact, ActionType.BOT_MESSAGE, MSG_BOT_SENT.format(content=content))
        log.info("Bot echo recorded", context={"from_me": normalized.from_me})
        return {"saved": True, "from": "BOT"}

    async def _relay(
        self,
        payload: dict,
        normalized: NormalizedMessage,
        contact: Contact,
        bot_settings: BotSettings,
        log: LoggerAdapter,
    ) -> dict:
        text = normalized.text.strip()
        if not text:
            log.info("Inbound message without text rejected")
            raise EmptyMessageError()

        save_message(self.db, contact, MessageSender.USER, text)
        log_activity(self.db, contact, ActionType.RECEIVED_MESSAGE, MSG_USER_RECEIVED)

        forward = build_forward_payload(payload, bot_settings, text, normalized.sender_number)
        engine_response = await self.automation.invoke(forward)

        reply = extract_reply(engine_response)
        if not reply:
            log.info("Automation engine returned no reply")
            return {"ok": True}

        try:
            await self.gateway.send_text(normalized.sender_number, reply)
        except UpstreamTransportError as exc:
            # Delivery is best-effort; the reply is still recorded.
            log.warning("Reply relay failed", context={"error": exc.message})

        save_message(self.db, contact, MessageSender.BOT, reply)
        log_activity(self.db, contact, ActionType.AUTO_REPLY, MSG_BOT_REPLIED.format(content=reply))
        log.info("Reply relayed", context={"reply_length": len(reply)})
        return {"ok": True}
