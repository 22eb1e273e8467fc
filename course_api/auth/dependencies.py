from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.orm import Session

from course_api.auth.basic_auth import authenticate
from course_api.database import get_db
from course_api.models.user import User

# HTTP Basic authentication scheme
security = HTTPBasic(auto_error=False)


async def get_basic_credentials(request: Request) -> HTTPBasicCredentials | None:
    # HTTPBasic still raises its own 401 for an undecodable header; treat that
    # like a missing header so the response body stays "Access Denied".
    try:
        return await security(request)
    except HTTPException:
        return None


def get_current_user(
    credentials: HTTPBasicCredentials | None = Depends(get_basic_credentials),
    db: Session = Depends(get_db),
) -> User:
    return authenticate(credentials, db)
