"""
Hash de senhas (bcrypt) e tokens de sessão (JWT).
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from ..config import get_settings
from .exceptions import InvalidToken

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


def _password_bytes(password: str) -> bytes:
    # bcrypt só considera os primeiros 72 bytes
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    if not password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed_password.encode("utf-8"))
    except ValueError:
        # Hash gravado em formato inválido
        logger.warning("Hash de senha inválido encontrado no banco")
        return False


def _encode(auth_user, token_type: str, expires_at: datetime, issued_at: datetime) -> str:
    payload = {
        "sub": auth_user.id,
        "email": auth_user.email,
        "type": token_type,
        "iat": issued_at,
        "exp": expires_at,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, get_settings().jwt_secret_key, algorithm=JWT_ALGORITHM)


def create_session(auth_user) -> dict:
    """
    Gera o par de tokens devolvido no login.

    O formato segue o objeto de sessão que o frontend já consome:
    access_token, refresh_token, expires_in (segundos) e expires_at (epoch).
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    access_expires = now + timedelta(minutes=settings.jwt_access_token_expires_minutes)
    refresh_expires = now + timedelta(days=settings.jwt_refresh_token_expires_days)

    return {
        "access_token": _encode(auth_user, ACCESS_TOKEN, access_expires, now),
        "refresh_token": _encode(auth_user, REFRESH_TOKEN, refresh_expires, now),
        "token_type": "bearer",
        "expires_in": int((access_expires - now).total_seconds()),
        "expires_at": int(access_expires.timestamp()),
        "user": {
            "id": auth_user.id,
            "email": auth_user.email,
            "user_metadata": auth_user.user_metadata or {},
        },
    }


def decode_token(token: str, expected_type: str = ACCESS_TOKEN) -> dict:
    try:
        payload = jwt.decode(token, get_settings().jwt_secret_key, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise InvalidToken("Token expirado")
    except jwt.PyJWTError:
        raise InvalidToken("Token inválido")

    if payload.get("type") != expected_type:
        raise InvalidToken("Tipo de token inválido")
    return payload
