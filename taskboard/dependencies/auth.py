import logging

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from taskboard.core.config import get_settings
from taskboard.core.errors import UnauthorizedError
from taskboard.core.jwt import decode_access_token
from taskboard.core.timeutil import as_utc, utcnow
from taskboard.db.session import get_session
from taskboard.models.auth import AuthSession
from taskboard.models.user import User

log = logging.getLogger(__name__)

# Tokens are issued by the auth provider; tokenUrl only feeds the OpenAPI docs.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def _extract_jwt(request: Request, token: str | None) -> str | None:
    return token or request.cookies.get(get_settings().session_cookie_name)


def _session_is_live(db: Session, session_id: str, user_id: str) -> bool:
    row = db.get(AuthSession, session_id)
    if row is None or row.user_id != user_id:
        return False
    return as_utc(row.expires_at) > utcnow()


def get_current_user(
    request: Request,
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_session),
) -> User:
    """Strict auth dependency; raises UnauthorizedError when no valid session."""
    jwt_token = _extract_jwt(request, token)
    if not jwt_token:
        raise UnauthorizedError("Authentication required")

    payload = decode_access_token(jwt_token)
    if payload is None or not payload.get("sub"):
        log.warning("rejected token path=%s", request.url.path)
        raise UnauthorizedError("Invalid or expired token")

    user_id = str(payload["sub"])
    session_id = payload.get("sid")
    if session_id and not _session_is_live(db, str(session_id), user_id):
        log.warning("revoked session sid=%s path=%s", session_id, request.url.path)
        raise UnauthorizedError("Session expired or revoked")

    user = db.get(User, user_id)
    if user is None:
        log.warning("token for unknown user sub=%s", user_id)
        raise UnauthorizedError("Invalid or expired token")
    return user


def get_current_user_id(user: User = Depends(get_current_user)) -> str:
    return user.id
