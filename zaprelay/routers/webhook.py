from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.requests import ClientDisconnect

from zaprelay.database import get_db
from zaprelay.deps import get_automation_engine, get_gateway
from zaprelay.logging_config import get_logger
from zaprelay.services.automation_service import AutomationEngineClient
from zaprelay.services.errors import RelayError
from zaprelay.services.gateway_service import GatewayClient
from zaprelay.services.relay_pipeline import RelayPipeline

logger = get_logger("webhook")

router = APIRouter(tags=["webhook"])

MSG_INVALID_PAYLOAD = "Payload inválido"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/webhook")
async def handle_webhook(
    request: Request,
    db: Session = Depends(get_db),
    automation: AutomationEngineClient = Depends(get_automation_engine),
    gateway: GatewayClient = Depends(get_gateway),
):
    """Gateway message event: record bot echoes, relay user messages through n8n."""
    try:
        payload = await request.json()
    except ClientDisconnect:
        logger.info("Webhook client disconnected during read")
        return _error(status.HTTP_400_BAD_REQUEST, MSG_INVALID_PAYLOAD)
    except ValueError as exc:
        raw = await request.body()
        logger.warning(
            "Webhook payload is not valid JSON",
            extra={"context": {"error": str(exc), "body_preview": raw[:200].decode("utf-8", "ignore")}},
        )
        return _error(status.HTTP_400_BAD_REQUEST, MSG_INVALID_PAYLOAD)

    pipeline = RelayPipeline(db, automation, gateway)
    try:
        return await pipeline.handle(payload)
    except RelayError as exc:
        logger.info(
            "Webhook rejected",
            extra={"context": {"status": exc.status_code, "error": exc.message, "type": type(exc).__name__}},
        )
        return _error(exc.status_code, exc.message)
    except Exception as exc:
        logger.exception("Webhook processing failed", extra={"context": {"error": str(exc)}})
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
