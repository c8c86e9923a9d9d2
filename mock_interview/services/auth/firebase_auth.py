"""Firebase Authentication Service Module

This module provides Firebase authentication services including user creation,
token verification, and profile management. It integrates Firebase Auth with the
application's database to maintain user records and profiles.

The Firebase Admin SDK is initialised on first use from the service account file
named by FIREBASE_CREDENTIALS_PATH, so the application (and its tests) can be
imported without credentials present.

Dependencies:
- firebase_admin: For Firebase authentication and user management.
- sqlalchemy: For database operations and session management.
- loguru: For logging operations.
- mock_interview.schemas.auth.user_auth_schemas: For user authentication data models.
- mock_interview.models.user_models: For User and Profile database models.
- mock_interview.errors.exceptions: For custom exception handling.
"""

import os
import threading
import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import InvalidArgumentError
from fastapi import Request, WebSocket
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, DataError, OperationalError
from loguru import logger
from mock_interview.schemas.auth.user_auth_schemas import RegisterRequest, PartialProfileData, UserProfileResponse
from mock_interview.models.user_models import User, Profile
from mock_interview.errors.exceptions import (
    DuplicateUserError,
    WeakPasswordError,
    InternalServerError,
    Unauthorized,
    UserNotFound
)

_init_lock = threading.Lock()


def _initialize_firebase():
    """Initialise the default Firebase app once per process.

    Raises:
        FileNotFoundError: If FIREBASE_CREDENTIALS_PATH does not point at a file
    """
    if firebase_admin._apps:
        return
    with _init_lock:
        if firebase_admin._apps:
            return
        file_path = os.getenv("FIREBASE_CREDENTIALS_PATH")
        if not file_path or not os.path.exists(file_path):
            logger.error(f"Firebase credentials file not found at {file_path}")
            raise FileNotFoundError(f"Firebase credentials file not found at {file_path}")
        firebase_admin.initialize_app(credentials.Certificate(file_path))
        logger.info("Firebase Admin SDK initialized")


def verify_id_token(id_token: str):
    """Verify Firebase ID token and extract user information.

    Args:
        id_token (str): Firebase ID token to verify

    Returns:
        tuple: (decoded_token, uid) if valid, (None, None) if invalid

    Note:
        Checks if token is revoked using check_revoked=True parameter
    """
    _initialize_firebase()
    try:
        decoded_token = auth.verify_id_token(id_token, check_revoked=True)
        return decoded_token, decoded_token['uid']
    except (auth.InvalidIdTokenError, auth.ExpiredIdTokenError, auth.RevokedIdTokenError, ValueError):
        # Token is malformed, invalid, expired or revoked.
        return None, None


def get_current_user_uid(request: Request) -> str:
    """Extract and verify Firebase ID token from request headers.

    This function serves as a FastAPI dependency to authenticate users
    by verifying their Firebase ID token from the Authorization header.

    Args:
        request (Request): FastAPI request object containing headers

    Returns:
        str: Firebase UID of the authenticated user

    Raises:
        Unauthorized: If authorization header is missing, invalid, or token is expired

    Example:
        Used as FastAPI dependency:
        @router.get("/protected")
        async def protected_route(uid: str = Depends(get_current_user_uid)):
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise Unauthorized("Missing or invalid authorization header")

    token = auth_header.split(" ", 1)[1].strip()
    if not token:
        raise Unauthorized("Missing or invalid authorization header")

    _, uid = verify_id_token(token)
    if not uid:
        raise Unauthorized("Invalid or expired token")

    return uid


def get_websocket_user_uid(websocket: WebSocket) -> Optional[str]:
    """Verify the Firebase ID token passed as the ``token`` query parameter.

    Browsers cannot set headers on a websocket handshake, so the token travels
    in the URL instead.

    Returns:
        Optional[str]: The UID, or None when the token is missing or invalid.
    """
    token = websocket.query_params.get("token")
    if not token:
        return None
    _, uid = verify_id_token(token)
    return uid


def _profile_response(user: User) -> UserProfileResponse:
    return UserProfileResponse(
        id=user.id,
        firebase_uid=user.firebase_uid,
        name=user.profile.name,
        email=user.profile.email,
        last_login=user.profile.last_login,
        created_at=user.created_at
    )


async def create_user(registration: RegisterRequest, session: Session) -> UserProfileResponse:
    """Create a new user in both Firebase and the application database.

    This function performs atomic user creation by:
    1. Checking for existing users with the same email
    2. Creating the user in Firebase Auth
    3. Creating corresponding database records (User and Profile)
    4. Deleting the Firebase user again if the database commit fails

    Raises:
        DuplicateUserError: If user with email already exists
        WeakPasswordError: If password doesn't meet Firebase requirements
        InternalServerError: If database operations fail
    """
    db_user = session.query(User).join(Profile).filter(Profile.email == registration.email).first()
    if db_user:
        raise DuplicateUserError(registration.email)

    _initialize_firebase()
    try:
        auth_user = auth.create_user(
            email=registration.email,
            password=registration.password,
            display_name=registration.name,
            email_verified=False,
        )
    except auth.EmailAlreadyExistsError as e:
        raise DuplicateUserError(registration.email) from e
    except InvalidArgumentError as e:
        error_msg = str(e)
        if "EMAIL_EXISTS" in error_msg:
            raise DuplicateUserError(registration.email) from e
        elif "PASSWORD_DOES_NOT_MEET_REQUIREMENTS" in error_msg or "password" in error_msg.lower():
            raise WeakPasswordError() from e
        logger.error(f"Error creating user in Firebase: {error_msg}")
        raise
    except ValueError as e:
        # The Admin SDK validates password length locally before calling Firebase
        raise WeakPasswordError() from e

    new_user = User(firebase_uid=auth_user.uid)
    session.add(new_user)
    try:
        session.flush()  # to get new_user.id
        session.add(Profile(user_id=new_user.id, name=registration.name, email=registration.email))
        session.commit()
    except (IntegrityError, DataError, OperationalError) as e:
        session.rollback()
        # cleanup orphaned Firebase user
        auth.delete_user(auth_user.uid)
        logger.error(f"Database commit failed, cleaned up Firebase user: {e}")
        raise InternalServerError("Failed to create user due to database error.") from e

    session.refresh(new_user)
    logger.info(f"Registered user {new_user.id} with UID {new_user.firebase_uid}")
    return _profile_response(new_user)


async def get_user_profile(uid: str, session: Session) -> UserProfileResponse:
    """Return the stored profile of the authenticated user.

    Raises:
        UserNotFound: If the user never registered through this API
    """
    user = session.query(User).filter(User.firebase_uid == uid).first()
    if not user or not user.profile:
        raise UserNotFound(uid)
    return _profile_response(user)


async def delete_user(uid: str, session: Session):
    """Delete a user from both Firebase and the application database.

    A user already missing from Firebase is still removed from the database.

    Raises:
        UserNotFound: If user with given UID doesn't exist in database
        InternalServerError: If deletion operations fail
    """
    user = session.query(User).filter(User.firebase_uid == uid).first()
    if not user:
        raise UserNotFound(uid)
    _initialize_firebase()
    try:
        auth.delete_user(uid)
    except auth.UserNotFoundError:
        logger.warning(f"Firebase user {uid} not found during deletion.")
    except Exception as e:
        logger.error(f"Error deleting Firebase user {uid}: {e}")
        raise InternalServerError(f"Failed to delete Firebase user {uid}.") from e
    try:
        session.delete(user)
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Error deleting user {uid} from database: {e}")
        raise InternalServerError(f"Failed to delete user {uid} from database.") from e
    return {"message": "User deleted successfully."}


async def update_user(uid: str, user_updates: PartialProfileData, session: Session):
    """Update user profile information in the database.

    Updates only the fields provided in user_updates (partial update).

    Raises:
        UserNotFound: If user with given UID doesn't exist
        InternalServerError: If database update fails
    """
    user = session.query(User).filter(User.firebase_uid == uid).first()
    if not user:
        raise UserNotFound(uid)
    try:
        update_data = {k: v for k, v in user_updates.model_dump().items() if v is not None}
        session.query(Profile).filter(Profile.user_id == user.id).update(update_data)
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating user {uid}: {e}")
        raise InternalServerError(f"Failed to update user {uid}.") from e
    return {"message": "User updated successfully."}
