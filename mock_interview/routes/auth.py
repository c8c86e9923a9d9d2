"""Authentication Routes Module

This module defines FastAPI routes for user registration and management of the
authenticated user's profile. Sign-in itself happens in the client with the
Firebase SDK; these routes receive the resulting ID token as a Bearer token.

Dependencies:
- fastapi: For API routing and dependency injection.
- loguru: For logging operations.
- mock_interview.core.route_limiters: For rate limiting middleware.
- mock_interview.services.auth.firebase_auth: For Firebase authentication services.
- mock_interview.errors.exceptions: For custom exception handling.
- mock_interview.schemas.auth.user_auth_schemas: For user authentication data models.
"""

from fastapi import APIRouter, Depends, Request
from loguru import logger
from sqlalchemy.orm import Session
from starlette.status import HTTP_201_CREATED
from mock_interview.core.route_limiters import limiter
from mock_interview.services.auth.firebase_auth import create_user, delete_user, update_user, get_user_profile, get_current_user_uid
from mock_interview.errors.exceptions import DuplicateUserError, InternalServerError, WeakPasswordError, UserNotFound
from mock_interview.database import get_db_session
from mock_interview.schemas.auth.user_auth_schemas import RegisterRequest, PartialProfileData, UserProfileResponse

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={404: {"description": "Not found"}}
)

@router.post("/register", status_code=HTTP_201_CREATED)
@limiter.limit("5/minute")  # Custom limit for this endpoint
async def register_user_route(request: Request, registration: RegisterRequest, session: Session = Depends(get_db_session)):
    """Register a new user with Firebase authentication and database storage.

    Creates a new user account in both Firebase Auth and the application database.
    If the database write fails the Firebase user is deleted again.

    Raises:
        DuplicateUserError: If user with email already exists
        WeakPasswordError: If password doesn't meet requirements
        InternalServerError: If registration fails

    Rate Limit:
        5 requests per minute per client
    """
    try:
        user = await create_user(registration, session)
        return {
            "message": "User created successfully",
            "user": user.model_dump(by_alias=True, mode="json")
        }
    except (DuplicateUserError, WeakPasswordError, InternalServerError):
        raise
    except Exception as e:
        logger.exception("Unhandled exception in auth endpoint")
        raise InternalServerError("An unexpected error occurred in the auth endpoint.") from e

@router.get("/user", response_model=UserProfileResponse)
@limiter.limit("10/minute")  # Custom limit for this endpoint
async def get_user_route(request: Request, current_uid: str = Depends(get_current_user_uid), session: Session = Depends(get_db_session)):
    """Retrieve the current authenticated user's profile.

    Authentication:
        Requires Bearer token in Authorization header
    """
    try:
        return await get_user_profile(current_uid, session)
    except UserNotFound:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in get user endpoint")
        raise InternalServerError("An unexpected error occurred while retrieving the user.") from e

@router.put("/user")
@limiter.limit("5/minute")  # Custom limit for this endpoint
async def update_user_route(request: Request, user_updates: PartialProfileData, current_uid: str = Depends(get_current_user_uid), session: Session = Depends(get_db_session)):
    """Update the current user's profile. Only provided fields are updated."""
    try:
        return await update_user(current_uid, user_updates, session)
    except (UserNotFound, InternalServerError):
        raise
    except Exception as e:
        logger.exception("Unhandled exception in update user endpoint")
        raise InternalServerError("An unexpected error occurred while updating the user.") from e

@router.delete("/user")
@limiter.limit("5/minute")  # Custom limit for this endpoint
async def delete_user_route(request: Request, current_uid: str = Depends(get_current_user_uid), session: Session = Depends(get_db_session)):
    """Delete the current user from Firebase and the application database."""
    try:
        return await delete_user(current_uid, session)
    except (UserNotFound, InternalServerError):
        raise
    except Exception as e:
        logger.exception("Unhandled exception in delete user endpoint")
        raise InternalServerError("An unexpected error occurred while deleting the user.") from e
