import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from course_api.auth.dependencies import get_current_user
from course_api.auth.passwords import hash_password
from course_api.core.errors import ValidationFailure
from course_api.core.validation import USER_RULES, collect_violations, error_messages
from course_api.database import get_db
from course_api.models.user import User

router = APIRouter(tags=['users'])

logger = logging.getLogger(__name__)

EMAIL_IN_USE_MESSAGE = 'Email address is already in use.'


class UserResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email_address: str

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


def find_user_by_email(email_address: Any, db: Session) -> User | None:
    if not isinstance(email_address, str) or not email_address:
        return None
    return db.query(User).filter(User.email_address == email_address).first()


@router.get('/users', response_model=UserResponse)
def get_current_user_details(current_user: User = Depends(get_current_user)):
    return UserResponse.model_validate(current_user)


@router.post('/users', status_code=status.HTTP_201_CREATED)
def create_user(
    payload: dict[str, Any] | None = Body(default=None),
    db: Session = Depends(get_db),
):
    payload = payload or {}
    errors = error_messages(collect_violations(USER_RULES, payload))

    if find_user_by_email(payload.get('emailAddress'), db) is not None:
        errors.append(EMAIL_IN_USE_MESSAGE)

    if errors:
        raise ValidationFailure(errors)

    user = User(
        first_name=payload['firstName'],
        last_name=payload['lastName'],
        email_address=payload['emailAddress'],
        password=hash_password(str(payload['password'])),
    )
    db.add(user)
    db.commit()
    logger.info('Registered user %s', user.email_address)

    return Response(status_code=status.HTTP_201_CREATED, headers={'Location': '/'})
