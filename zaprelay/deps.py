from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from zaprelay.config import Settings
from zaprelay.services.auth_service import MSG_TOKEN_INVALID, decode_access_token
from zaprelay.services.automation_service import AutomationEngineClient
from zaprelay.services.errors import AuthError
from zaprelay.services.gateway_service import GatewayClient

MSG_TOKEN_MISSING = "Token ausente"

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentTenant:
    id: UUID
    email: Optional[str] = None


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_automation_engine(settings: Settings = Depends(get_settings)) -> AutomationEngineClient:
    return AutomationEngineClient(settings.n8n_webhook_url, timeout=settings.n8n_timeout_seconds)


def get_gateway(settings: Settings = Depends(get_settings)) -> GatewayClient:
    return GatewayClient(settings.uazapi_url, settings.uazapi_token, timeout=settings.uazapi_timeout_seconds)


def get_current_tenant(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> CurrentTenant:
    """Tenant identity from the bearer token. Never taken from the request body."""
    if not credentials or not credentials.credentials:
        raise AuthError(MSG_TOKEN_MISSING)

    claims = decode_access_token(credentials.credentials, settings.jwt_secret)
    try:
        tenant_id = UUID(str(claims["id"]))
    except ValueError as exc:
        raise AuthError(MSG_TOKEN_INVALID) from exc
    return CurrentTenant(id=tenant_id, email=claims.get("email"))
