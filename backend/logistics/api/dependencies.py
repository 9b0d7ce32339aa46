"""
Authentication dependencies shared by the routers.
"""
import logging
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from logistics.core.security import decode_access_token
from logistics.db.session import get_db
from logistics.models.user import User, UserToken

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Please authenticate",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_token(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> str:
    """Bearer token from the Authorization header."""
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise _unauthorized()
    return credentials.credentials.strip()


async def get_current_user(
    token: str = Depends(get_current_token),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to a user.

    The token must decode, be unexpired, and still be one of the user's
    issued tokens (logout removes it).
    """
    payload = decode_access_token(token)
    if not payload or "user_id" not in payload:
        logger.info("Rejected malformed or expired token")
        raise _unauthorized()

    issued = db.query(UserToken).filter(
        UserToken.user_id == payload["user_id"],
        UserToken.token == token
    ).first()
    if not issued:
        logger.info(f"Rejected revoked token for user {payload['user_id']}")
        raise _unauthorized()

    return issued.user


async def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    """Current user, who must be an admin."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required"
        )
    return current_user
