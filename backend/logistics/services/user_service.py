"""
User account creation and access-token bookkeeping.
"""
import logging
from datetime import timedelta
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from logistics.core.config import settings
from logistics.core.exceptions import InvalidInputError
from logistics.core.security import create_access_token, get_password_hash
from logistics.core.utils import normalize_email, utcnow
from logistics.models.user import User, UserToken

logger = logging.getLogger(__name__)


def create_user(
    db: Session,
    email: str,
    password: str,
    first_name: str = None,
    last_name: str = None,
    home_location: str = None,
    is_admin: bool = False,
    is_verified: bool = False,
    verification_token: str = None
) -> User:
    """
    Create a user with a unique, lowercased email.

    The unique index on email settles concurrent registrations; the loser
    gets the same InvalidInputError as a plain duplicate.
    """
    email = normalize_email(email)
    if db.query(User).filter(User.email == email).first():
        raise InvalidInputError("User with this email already exists")

    user = User(
        email=email,
        hashed_password=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        home_location=home_location,
        is_admin=is_admin,
        is_verified=is_verified,
        verification_token=verification_token
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidInputError("User with this email already exists")
    db.refresh(user)
    logger.info(f"Created user {user.id}")
    return user


def issue_token(db: Session, user: User) -> str:
    """Issue an access token, record it, and drop the user's expired tokens."""
    now = utcnow()
    expires_delta = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    purged = db.query(UserToken).filter(
        UserToken.user_id == user.id,
        UserToken.expires_at < now
    ).delete(synchronize_session=False)
    if purged:
        logger.info(f"Purged {purged} expired tokens for user {user.id}")

    access_token = create_access_token(
        data={"sub": user.email, "user_id": user.id},
        expires_delta=expires_delta
    )
    db.add(UserToken(user_id=user.id, token=access_token, expires_at=now + expires_delta))
    db.commit()
    return access_token
