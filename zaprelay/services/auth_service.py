"""Password hashing and access tokens for dashboard users."""

from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from zaprelay.models import TenantUser
from zaprelay.services.errors import AuthError

JWT_ALGORITHM = "HS256"
MSG_TOKEN_INVALID = "Token inválido ou expirado"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=10)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(tenant: TenantUser, secret: str, expires_days: int = 7) -> str:
    payload = {
        "id": str(tenant.id),
        "email": tenant.email,
        "exp": datetime.now(timezone.utc) + timedelta(days=expires_days),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, secret: str) -> dict:
    try:
        claims = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError as exc:
        raise AuthError(MSG_TOKEN_INVALID) from exc
    if not claims.get("id"):
        raise AuthError(MSG_TOKEN_INVALID)
    return claims
