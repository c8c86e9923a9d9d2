"""Interview Models Module

This module defines the SQLAlchemy models for interview sessions: the interview
itself, the questions generated for it, and the append-only log of scored
answers.

Dependencies:
- sqlalchemy: For ORM functionality and database modeling.
- uuid: For UUID generation for primary keys.
- mock_interview.models.user_models: For the shared declarative base.
"""

import uuid
from typing import List
from datetime import datetime, timezone
from sqlalchemy import ForeignKey, String, Text, DateTime, Float, Integer, JSON, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from mock_interview.models.user_models import Base

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

class Interview(Base):
    """Interview session created by a user around a set of topics.

    Attributes:
        id (UUID): Primary key, auto-generated UUID
        creator_uid (str): Firebase UID of the user who created the interview
        title (str): Interview title
        topics (List[str]): Topics the questions were generated for
        domains (List[str]): Optional focus domains
        difficulty (str): easy, medium or hard
        questions (List[InterviewQuestion]): Generated questions, in order
        feedbacks (List[InterviewFeedback]): Scored answers, oldest first
    """
    __tablename__ = "interviews"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    creator_uid: Mapped[str] = mapped_column(String(128), index=True)
    title: Mapped[str] = mapped_column(String(200))
    topics: Mapped[List[str]] = mapped_column(JSON)
    domains: Mapped[List[str]] = mapped_column(JSON, default=list)
    difficulty: Mapped[str] = mapped_column(String(10), default="medium")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    questions: Mapped[List["InterviewQuestion"]] = relationship(
        "InterviewQuestion", back_populates="interview", cascade="all, delete-orphan", order_by="InterviewQuestion.position"
    )
    feedbacks: Mapped[List["InterviewFeedback"]] = relationship(
        "InterviewFeedback", back_populates="interview", cascade="all, delete-orphan", order_by="InterviewFeedback.created_at"
    )

    def __repr__(self):
        return f"Interview(id={self.id}, title={self.title}, difficulty={self.difficulty})"

class InterviewQuestion(Base):
    """Question generated for a specific interview.

    Attributes:
        position (int): Zero-based order within the interview
        text (str): The question text
        ideal_answer (str): Reference answer
        key_points (List[str]): Points a good answer mentions
        category (str): Main topic category
    """
    __tablename__ = "interview_questions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    interview_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("interviews.id", ondelete="CASCADE"))
    position: Mapped[int] = mapped_column(Integer, default=0)
    text: Mapped[str] = mapped_column(Text)
    difficulty: Mapped[str] = mapped_column(String(10))
    ideal_answer: Mapped[str] = mapped_column(Text, default="")
    key_points: Mapped[List[str]] = mapped_column(JSON, default=list)
    category: Mapped[str] = mapped_column(String(100))

    interview: Mapped["Interview"] = relationship("Interview", back_populates="questions")

    def __repr__(self):
        return f"InterviewQuestion(id={self.id}, text={self.text})"

class InterviewFeedback(Base):
    """Scored answer appended to an interview's feedback log. Never updated.

    Attributes:
        question (str): Text of the answered question
        user_answer (str): The candidate's answer
        feedback (str): Feedback text
        score (int): Score between 0 and 100
        points_covered (List[str]): Key points found in the answer
        points_missed (List[str]): Key points absent from the answer
        coverage (float): Percentage of key points covered
        source (str): "ai" or "fallback"
    """
    __tablename__ = "interview_feedbacks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    interview_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("interviews.id", ondelete="CASCADE"))
    question: Mapped[str] = mapped_column(Text)
    user_answer: Mapped[str] = mapped_column(Text)
    feedback: Mapped[str] = mapped_column(Text)
    score: Mapped[int] = mapped_column(Integer)
    points_covered: Mapped[List[str]] = mapped_column(JSON, default=list)
    points_missed: Mapped[List[str]] = mapped_column(JSON, default=list)
    coverage: Mapped[float] = mapped_column(Float, default=0.0)
    source: Mapped[str] = mapped_column(String(10))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    interview: Mapped["Interview"] = relationship("Interview", back_populates="feedbacks")

    def __repr__(self):
        return f"InterviewFeedback(id={self.id}, score={self.score}, source={self.source})"
