from typing import Any

import httpx

from zaprelay.logging_config import get_logger
from zaprelay.services.errors import UpstreamTransportError

logger = get_logger("gateway_service")


class GatewayClient:
    """Sends outbound WhatsApp text through the UAZAPI gateway."""

    def __init__(self, base_url: str, token: str, timeout: float = 30.0):
        self.base_url = base_url
        self.token = token
        self.timeout = timeout

    @property
    def send_text_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/send/text"

    async def send_text(self, number: str, text: str) -> Any:
        """Send text to number; returns the gateway's decoded response body."""
        if not self.base_url:
            logger.error("Gateway URL is missing (UAZAPI_URL env var not set)")
            raise UpstreamTransportError("gateway", "UAZAPI_URL não configurado")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.send_text_url,
                    json={"number": number, "text": text},
                    headers={"token": self.token},
                )
        except httpx.HTTPError as exc:
            logger.error("Gateway unreachable", extra={"context": {"number": number, "error": str(exc)}})
            raise UpstreamTransportError("gateway", f"Falha ao enviar mensagem: {exc}") from exc

        logger.info(
            "Gateway responded",
            extra={"context": {"status": response.status_code, "number": number, "body": response.text[:200]}},
        )
        try:
            return response.json()
        except ValueError:
            return response.text
