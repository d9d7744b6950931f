from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from briklyst.core.database import get_db
from briklyst.core.errors import AuthenticationError
from briklyst.models.user import User
from briklyst.services.auth import decode_access_token, user_id_from_payload

# Swagger "Authorize" posts to this endpoint
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)

logger = logging.getLogger(__name__)


def _user_from_token(token: Optional[str], db: Session) -> Optional[User]:
    if not token:
        return None
    try:
        payload = decode_access_token(token)
    except ValueError:
        logger.info("Rejected invalid or expired token")
        return None

    user_id = user_id_from_payload(payload)
    if user_id is None:
        return None
    return db.query(User).filter(User.id == user_id).first()


def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    user = _user_from_token(token, db)
    if user is None:
        raise AuthenticationError()
    request.state.user_id = user.id
    return user


def get_optional_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Session user when a valid token is sent, otherwise None."""
    user = _user_from_token(token, db)
    if user is not None:
        request.state.user_id = user.id
    return user
