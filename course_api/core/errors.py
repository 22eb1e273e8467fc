"""Domain failures raised by the request handlers.

Each one is an ``HTTPException`` whose ``detail`` is the exact JSON body sent
back to the client; ``course_api.main`` renders them without the usual
``{"detail": ...}`` wrapper.
"""

from fastapi import HTTPException, status


ACCESS_DENIED_MESSAGE = 'Access Denied'
COURSE_NOT_FOUND_MESSAGE = 'No course exists with the given ID.'
NOT_COURSE_OWNER_MESSAGE = (
    'The current user is not permitted to delete this course. '
    'Users may only modify or delete courses for which they are listed as the instructor.'
)


class ApiError(HTTPException):
    default_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, body: dict, status_code: int | None = None) -> None:
        super().__init__(status_code=status_code or self.default_status_code, detail=body)

    @property
    def body(self) -> dict:
        return self.detail


class AuthenticationFailure(ApiError):
    """Raised when Basic credentials are missing, unknown or wrong.

    ``reason`` is for the server log only; the client always gets the same
    generic body.
    """

    default_status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, reason: str) -> None:
        super().__init__({'message': ACCESS_DENIED_MESSAGE})
        self.reason = reason


class ValidationFailure(ApiError):
    default_status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[str]) -> None:
        super().__init__({'errors': list(errors)})
        self.errors = list(errors)


class AuthorizationFailure(ApiError):
    default_status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = NOT_COURSE_OWNER_MESSAGE) -> None:
        super().__init__({'message': message})


class CourseNotFound(ApiError):
    # Reported as 400 rather than 404; clients already depend on it.
    default_status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self) -> None:
        super().__init__({'error': COURSE_NOT_FOUND_MESSAGE})
