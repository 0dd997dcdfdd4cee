"""Client for the n8n automation webhook that computes bot replies."""

from typing import Any, Optional

import httpx

from zaprelay.logging_config import get_logger
from zaprelay.services.errors import UpstreamTransportError

logger = get_logger("automation_service")


def parse_reply_body(response: httpx.Response) -> Any:
    """Decode the engine response; a non-JSON body becomes ``{"reply": <text>}``."""
    try:
        return response.json()
    except ValueError:
        return {"reply": response.text}


def extract_reply(value: Any) -> Optional[str]:
    if isinstance(value, str):
        reply = value
    elif isinstance(value, dict):
        reply = value.get("reply")
        if isinstance(reply, (int, float)) and not isinstance(reply, bool):
            reply = str(reply)
    else:
        return None

    if not isinstance(reply, str) or not reply.strip():
        return None
    return reply


class AutomationEngineClient:
    def __init__(self, url: str, timeout: float = 30.0):
        self.url = url
        self.timeout = timeout

    async def invoke(self, payload: dict) -> Any:
        """POST the enriched payload and return the decoded response body.

        The HTTP status is not inspected; n8n answers with whatever the
        workflow's respond node produced.
        """
        if not self.url:
            logger.error("Automation engine URL is missing (N8N_WEBHOOK_URL env var not set)")
            raise UpstreamTransportError("automation", "N8N_WEBHOOK_URL não configurado")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.url, json=payload)
        except httpx.HTTPError as exc:
            logger.error("Automation engine unreachable", extra={"context": {"url": self.url, "error": str(exc)}})
            raise UpstreamTransportError("automation", f"Falha ao contatar o n8n: {exc}") from exc

        logger.info(
            "Automation engine responded",
            extra={"context": {"status": response.status_code, "body": response.text[:200]}},
        )
        return parse_reply_body(response)
