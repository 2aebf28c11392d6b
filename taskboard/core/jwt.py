# taskboard/core/jwt.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from taskboard.core.config import get_settings


def create_access_token(
    user_id: str,
    session_id: Optional[str] = None,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Issue an access token for ``user_id``.
    The auth provider owns issuance; this is its integration point (and the tests').
    """
    settings = get_settings()
    now = datetime.now(tz=timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload: Dict[str, Any] = {
        "sub": user_id,
        "typ": "access",
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    if session_id:
        payload["sid"] = session_id
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> Dict[str, Any]:
    """
    Return the payload of a valid access token.
    Raises JWTError on bad signature, expiry or wrong token type.
    """
    settings = get_settings()
    payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    if payload.get("typ") != "access":
        raise JWTError("Invalid token type")
    return payload


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    try:
        return verify_access_token(token)
    except JWTError:
        return None
