from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_409_CONFLICT, HTTP_500_INTERNAL_SERVER_ERROR
from sqlalchemy.exc import IntegrityError

def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )

def generic_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred."},
    )

def database_integrity_handler(request: Request, exc: IntegrityError):
    """
    Handle SQLAlchemy integrity constraint violations.

    Duplicate key violations become 409 responses naming the conflicting
    record; every other constraint violation becomes a generic 400.

    Args:
        request: FastAPI request instance
        exc: IntegrityError from SQLAlchemy

    Returns:
        JSONResponse with a user-friendly error message
    """
    error_msg = str(exc.orig).lower()
    logger.warning(f"Integrity error on {request.url.path}: {error_msg}")

    if "duplicate key" in error_msg or "unique constraint" in error_msg:
        if "users" in error_msg or "user_profile" in error_msg or "firebase_uid" in error_msg:
            detail = "User already exists."
        elif "interviews" in error_msg:
            detail = "Interview already exists."
        else:
            detail = "Record already exists."
        return JSONResponse(status_code=HTTP_409_CONFLICT, content={"detail": detail})

    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "error": "Database error",
            "message": "Data constraint violation",
            "hint": "Please check your data and try again"
        }
    )
