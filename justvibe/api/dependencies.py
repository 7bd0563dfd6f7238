# ============================================================================
# FILE: justvibe/api/dependencies.py
# ============================================================================
from fastapi import Depends, Header, status
from sqlalchemy.orm import Session
from typing import Optional
from justvibe.db.session import get_db
from justvibe.core.errors import AuthError
from justvibe.core.security import TokenError, decode_access_token
from justvibe.schemas.user import CurrentUser
from justvibe.services.identity_provider import identity_provider
from justvibe.services.user_service import email_local_part, user_service
import logging

logger = logging.getLogger(__name__)

INVALID_TOKEN = "Invalid or expired token"

def get_current_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> CurrentUser:
    """
    Resolve the caller from the raw token in the Authorization header

    Every way a present token can fail (bad signature, expired, no user id,
    unknown identity) produces the same 403 so callers cannot tell which
    check rejected it.
    """
    token = (authorization or "").strip()
    if token.lower().startswith("bearer "):
        token = token[7:].strip()
    if not token:
        raise AuthError("Access token required", status_code=status.HTTP_401_UNAUTHORIZED)

    try:
        payload = decode_access_token(token)
    except TokenError:
        logger.info("Rejected token: failed verification")
        raise AuthError(INVALID_TOKEN)

    user_id = payload.get("userId")
    if not user_id:
        logger.info("Rejected token: no user id")
        raise AuthError(INVALID_TOKEN)

    identity = identity_provider.get_user_by_id(db, user_id)
    if not identity:
        logger.info(f"Rejected token: identity {user_id} not found")
        raise AuthError(INVALID_TOKEN)

    profile = user_service.get_profile(db, identity.id)
    username = (
        (profile.username if profile else None)
        or payload.get("username")
        or email_local_part(identity.email)
    )
    return CurrentUser(id=identity.id, email=identity.email, username=username)
