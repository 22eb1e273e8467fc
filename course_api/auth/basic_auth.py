import logging

from fastapi.security import HTTPBasicCredentials
from sqlalchemy.orm import Session

from course_api.auth.passwords import verify_password
from course_api.core.errors import AuthenticationFailure
from course_api.models.user import User

logger = logging.getLogger(__name__)


def authenticate(credentials: HTTPBasicCredentials | None, db: Session) -> User:
    """Resolve the user named by Basic credentials.

    Raises ``AuthenticationFailure`` when no credentials were sent, when no
    user has that email address, or when the password does not match.
    """
    if credentials is None:
        _deny("Auth header not found")

    user = db.query(User).filter(User.email_address == credentials.username).first()
    if user is None:
        _deny(f"User not found for username: {credentials.username}")

    if not verify_password(credentials.password, user.password):
        _deny(f"Authentication failure for username: {user.email_address}")

    logger.info("Authentication successful for username: %s", user.email_address)
    return user


def _deny(reason: str):
    logger.warning(reason)
    raise AuthenticationFailure(reason)
