"""User Models Module

This module defines the SQLAlchemy declarative base shared by every model and the
user entities that link Firebase authentication with application data.

Dependencies:
- sqlalchemy: For ORM functionality and database modeling.
- datetime: For timestamp handling.
- typing: For type annotations and optional fields.
"""

from typing import Optional
from sqlalchemy import ForeignKey, String, DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from datetime import datetime

class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass

class User(Base):
    """Core user entity that links Firebase authentication with application data.

    Interviews reference users by ``firebase_uid`` so that a user who signs in
    with the Firebase client SDK can create interviews before (or without)
    registering a profile through this API.

    Attributes:
        id (int): Primary key, auto-incrementing
        firebase_uid (str): Unique Firebase user identifier
        profile (Profile): One-to-one relationship with user profile
        created_at (datetime): Timestamp when user was created
        updated_at (datetime): Timestamp when user was last updated
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    firebase_uid: Mapped[str] = mapped_column(String(128), unique=True)
    profile: Mapped["Profile"] = relationship("Profile", back_populates="user", cascade="all, delete-orphan", uselist=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())

    def __repr__(self):
        profile_name = self.profile.name if self.profile else "No Profile"
        return f"User(name={profile_name})"

class Profile(Base):
    """User profile information.

    Attributes:
        id (int): Primary key, auto-incrementing
        name (str, optional): User's display name
        email (str): User's email address (unique)
        last_login (datetime): Timestamp of last login, auto-updated
        user_id (int): Foreign key to User table
    """
    __tablename__ = "user_profile"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    email: Mapped[str] = mapped_column(String(50), unique=True)
    last_login: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    user: Mapped["User"] = relationship("User", back_populates="profile")

    def __repr__(self):
        return f"Profile(name={self.name}, email={self.email})"
