import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from course_api.auth.dependencies import get_current_user
from course_api.core.errors import AuthorizationFailure, CourseNotFound, ValidationFailure
from course_api.core.validation import COURSE_RULES, DELETE_COURSE_RULES, collect_violations, error_messages
from course_api.database import Store, get_db, get_store
from course_api.models.course import Course
from course_api.models.user import User

router = APIRouter(tags=['courses'])

logger = logging.getLogger(__name__)

MISSING_INSTRUCTOR_LABEL = '(Instructor Information Not Available)'
INVALID_USER_ID_MESSAGE = 'Please provide a numeric value for "userId"'

# Integer primary keys are signed 64-bit on every supported backend.
MAX_ID = 2 ** 63 - 1

# Request body key -> Course column.
COURSE_FIELDS = {
    'title': 'title',
    'description': 'description',
    'estimatedTime': 'estimated_time',
    'materialsNeeded': 'materials_needed',
    'userId': 'user_id',
}


class CourseResponse(BaseModel):
    id: int
    title: str
    description: str
    estimated_time: str | None = None
    materials_needed: str | None = None
    user_id: int | None = None
    user: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True


def instructor_label(owner: User | None) -> str:
    if owner is None:
        return MISSING_INSTRUCTOR_LABEL
    return owner.display_name


def serialize_course(course: Course, owner: User | None) -> CourseResponse:
    return CourseResponse(
        id=course.id,
        title=course.title,
        description=course.description,
        estimated_time=course.estimated_time,
        materials_needed=course.materials_needed,
        user_id=course.user_id,
        user=instructor_label(owner),
    )


def is_storable_id(value: int) -> bool:
    return -MAX_ID - 1 <= value <= MAX_ID


def parse_user_id(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError('userId must be an integer')
    if isinstance(value, int):
        user_id = value
    elif isinstance(value, str) and value.strip().lstrip('-').isdigit():
        user_id = int(value)
    else:
        raise ValueError('userId must be an integer')
    if not is_storable_id(user_id):
        raise ValueError('userId is out of range')
    return user_id


def course_errors(rules, payload: dict[str, Any]) -> list[str]:
    errors = error_messages(collect_violations(rules, payload))
    if 'userId' in payload:
        try:
            parse_user_id(payload['userId'])
        except ValueError:
            errors.append(INVALID_USER_ID_MESSAGE)
    return errors


def course_attributes(payload: dict[str, Any]) -> dict[str, Any]:
    """Map the known course keys present in ``payload`` onto column names."""
    attributes = {
        column: payload[key]
        for key, column in COURSE_FIELDS.items()
        if key in payload
    }
    if 'user_id' in attributes:
        attributes['user_id'] = parse_user_id(attributes['user_id'])
    return attributes


def find_course(course_id: Any, db: Session) -> Course | None:
    try:
        primary_key = int(course_id)
    except (TypeError, ValueError):
        return None
    if not is_storable_id(primary_key):
        return None
    return db.get(Course, primary_key)


def find_owner(user_id: int | None, db: Session) -> User | None:
    if user_id is None:
        return None
    return db.get(User, user_id)


def ensure_course_owner(course: Course, current_user: User) -> None:
    if course.user_id != current_user.id:
        logger.warning(
            'User %s attempted to modify course %s owned by user %s',
            current_user.id,
            course.id,
            course.user_id,
        )
        raise AuthorizationFailure()


def fetch_courses(store: Store) -> list[Course]:
    with store.session() as db:
        return db.query(Course).order_by(Course.created_at.desc(), Course.id.desc()).all()


def fetch_owner(store: Store, user_id: int | None) -> User | None:
    if user_id is None:
        return None
    with store.session() as db:
        return find_owner(user_id, db)


@router.get('/courses', response_model=list[CourseResponse])
async def list_courses(store: Store = Depends(get_store)):
    courses = await run_in_threadpool(fetch_courses, store)
    owners = await asyncio.gather(
        *(run_in_threadpool(fetch_owner, store, course.user_id) for course in courses)
    )
    return [serialize_course(course, owner) for course, owner in zip(courses, owners)]


@router.get('/courses/{course_id}', response_model=CourseResponse)
def get_course(course_id: str, db: Session = Depends(get_db)):
    course = find_course(course_id, db)
    if course is None:
        raise CourseNotFound()

    return serialize_course(course, find_owner(course.user_id, db))


@router.post('/courses', status_code=status.HTTP_201_CREATED)
def create_course(
    payload: dict[str, Any] | None = Body(default=None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    payload = payload or {}
    errors = course_errors(COURSE_RULES, payload)
    if errors:
        raise ValidationFailure(errors)

    # userId comes from the body as sent; it is not forced to current_user.id.
    course = Course(**course_attributes(payload))
    db.add(course)
    db.commit()
    db.refresh(course)
    logger.info('User %s created course %s', current_user.id, course.id)

    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={'Location': f'/api/courses/{course.id}'},
    )


@router.put('/courses/{course_id}', status_code=status.HTTP_204_NO_CONTENT)
def update_course(
    course_id: str,
    payload: dict[str, Any] | None = Body(default=None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    payload = payload or {}
    course = find_course(course_id, db)
    if course is None:
        raise CourseNotFound()

    ensure_course_owner(course, current_user)

    errors = course_errors(COURSE_RULES, payload)
    if errors:
        raise ValidationFailure(errors)

    for column, value in course_attributes(payload).items():
        setattr(course, column, value)
    db.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete('/courses/{course_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_course(
    course_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    course = find_course(course_id, db)
    if course is None:
        raise CourseNotFound()

    ensure_course_owner(course, current_user)

    errors = error_messages(collect_violations(DELETE_COURSE_RULES, {}))
    if errors:
        raise ValidationFailure(errors)

    db.delete(course)
    db.commit()
    logger.info('User %s deleted course %s', current_user.id, course_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
