from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from zaprelay.config import Settings
from zaprelay.database import get_db
from zaprelay.deps import get_settings
from zaprelay.logging_config import get_logger
from zaprelay.models import TenantUser
from zaprelay.schemas.auth import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse
from zaprelay.services.auth_service import create_access_token, hash_password, verify_password
from zaprelay.services.conversation_service import commit_or_raise
from zaprelay.services.errors import AuthError, RelayError
from zaprelay.services.payload_normalizer import normalize_number
from zaprelay.services.tenant_service import find_tenant_by_bot_number

logger = get_logger("auth")

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    bot_number = normalize_number(request.bot_number)
    if not request.email or not request.password or not bot_number:
        raise RelayError("Email, senha e número do bot são obrigatórios", status_code=400)

    if db.query(TenantUser).filter(TenantUser.email == request.email).first():
        raise RelayError("Usuário já existe", status_code=400)
    if find_tenant_by_bot_number(db, bot_number):
        raise RelayError("Número do bot já cadastrado", status_code=400)

    tenant = TenantUser(email=request.email, password_hash=hash_password(request.password), bot_number=bot_number)
    db.add(tenant)
    commit_or_raise(db, "register_tenant")
    db.refresh(tenant)

    logger.info("Tenant registered", extra={"context": {"tenant_id": str(tenant.id), "bot_number": bot_number}})
    return RegisterResponse(message="Usuário criado", user_id=tenant.id)


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    tenant = db.query(TenantUser).filter(TenantUser.email == request.email).first() if request.email else None
    if not tenant:
        raise AuthError("Usuário não encontrado")
    if not request.password or not verify_password(request.password, tenant.password_hash):
        raise AuthError("Senha incorreta")

    token = create_access_token(tenant, settings.jwt_secret, settings.jwt_expires_days)
    return TokenResponse(token=token)
