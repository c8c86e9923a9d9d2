from fastapi import HTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)

class BadRequest(HTTPException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=HTTP_400_BAD_REQUEST, detail=detail)

class NotFound(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=HTTP_404_NOT_FOUND, detail=detail)

class InternalServerError(HTTPException):
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)

class ServiceUnavailable(HTTPException):
    def __init__(self, detail="Service temporarily unavailable"):
        super().__init__(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail=detail)

class Unauthorized(HTTPException):
    def __init__(self, detail: str = "Unauthorized access"):
        super().__init__(status_code=HTTP_401_UNAUTHORIZED, detail=detail)

class Forbidden(HTTPException):
    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=HTTP_403_FORBIDDEN, detail=detail)

class DuplicateRecordError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(
            status_code=HTTP_409_CONFLICT,
            detail=detail
        )
class WeakPasswordError(BadRequest):
    def __init__(self, detail: str = "The provided password is weak. Password must be at least 6 characters long."):
        super().__init__(detail=detail)

class DuplicateUserError(DuplicateRecordError):
    def __init__(self, identifier: str = None):
        detail = f"User '{identifier}' already exists." if identifier else "User already exists."
        super().__init__(detail=detail)
class UserNotFound(NotFound):
    def __init__(self, identifier: str = None):
        super().__init__(detail="User not found.")
class InterviewNotFound(NotFound):
    def __init__(self, detail: str = "Interview not found"):
        super().__init__(detail=detail)
class QuestionNotFound(NotFound):
    def __init__(self, detail: str = "Question not found in this interview"):
        super().__init__(detail=detail)
class ValidationError(BadRequest):
    def __init__(self, detail: str = "Validation error"):
        super().__init__(detail=detail)

class AIServiceError(RuntimeError):
    """Raised when the AI inference server cannot produce a usable result."""

class ModelUnavailableError(RuntimeError):
    """Raised when the speech-to-text model cannot be loaded."""
