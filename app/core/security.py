import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from app.core.config import settings
from app.core.errors import AuthError

logger = logging.getLogger(__name__)


def create_access_token(user_id, email: Optional[str] = None, expires_minutes: Optional[int] = None) -> str:
    # crée un token d'accès JWT (JWT_EXPIRE_MIN par défaut)
    minutes = settings.JWT_EXPIRE_MIN if expires_minutes is None else expires_minutes
    payload = {
        "user_id": str(user_id),
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
        "type": "access",
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: Optional[str]) -> dict:
    """Vérifie le token et retourne son payload.

    Lève AuthError avec un kind distinct: missing, expired, invalid, failed.
    """
    if not token:
        raise AuthError("missing")
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise AuthError("expired")
    except JWTClaimsError as e:
        logger.warning(f"Token claims rejected: {e}")
        raise AuthError("failed")
    except JWTError:
        raise AuthError("invalid")

    if payload.get("type", "access") != "access" or not payload.get("user_id"):
        raise AuthError("failed")
    return payload


def decode_token(token: Optional[str]) -> str:
    # identifiant du principal authentifié (owner des tâches)
    return str(verify_token(token)["user_id"])
