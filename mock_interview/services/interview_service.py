"""Interview Service Module

This module implements the interview workflow behind the REST routes: creating
interviews with generated questions, looking up and deleting a user's
interviews, scoring submitted answers into the feedback log, and answering
follow-up doubts.

Every lookup is scoped to the authenticated user's Firebase UID. An interview
that exists but belongs to someone else is reported as not found, except on
delete where the caller is told they are not allowed.

Dependencies:
- sqlalchemy: For database operations and session management.
- loguru: For logging operations.
- mock_interview.services.ai: For question generation, answer scoring and doubts.
- mock_interview.errors.exceptions: For HTTP-facing errors.
"""

import uuid
from typing import List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from loguru import logger
from mock_interview.models.interview_models import Interview, InterviewQuestion, InterviewFeedback, utc_now
from mock_interview.schemas.interview import (
    CreateInterviewRequest,
    DoubtRequest,
    DoubtResponse,
    QuestionSchema,
    SubmitAnswerRequest,
    SubmitAnswerResponse
)
from mock_interview.services.ai import QuestionGenerator, AnswerAnalyzer, DoubtResolver
from mock_interview.errors.exceptions import (
    Forbidden,
    InterviewNotFound,
    InternalServerError,
    QuestionNotFound,
    ValidationError
)


def is_interview_complete(interview: Interview) -> bool:
    """True once every question has at least one feedback entry."""
    answered = {entry.question for entry in interview.feedbacks}
    return bool(interview.questions) and all(question.text in answered for question in interview.questions)


class InterviewService:
    """
    Interview workflow for a single request.

    Attributes:
        session (Session): SQLAlchemy database session
        question_generator (QuestionGenerator): Produces questions for new interviews
        answer_analyzer (AnswerAnalyzer): Scores submitted answers
        doubt_resolver (DoubtResolver): Explains feedback on request
    """

    def __init__(
        self,
        session: Session,
        question_generator: QuestionGenerator,
        answer_analyzer: AnswerAnalyzer,
        doubt_resolver: DoubtResolver
    ):
        self.session = session
        self.question_generator = question_generator
        self.answer_analyzer = answer_analyzer
        self.doubt_resolver = doubt_resolver

    def _commit(self, action: str):
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database commit failed while trying to {action}: {e}")
            raise InternalServerError(f"Failed to {action} due to database error.") from e

    def list_interviews(self, uid: str) -> List[Interview]:
        """Return the user's interviews, newest first."""
        return (
            self.session.query(Interview)
            .filter(Interview.creator_uid == uid)
            .order_by(Interview.created_at.desc())
            .all()
        )

    def get_interview(self, interview_id: uuid.UUID, uid: str) -> Interview:
        """
        Return one of the user's interviews.

        Raises:
            InterviewNotFound: If the interview does not exist or is not the user's
        """
        interview = (
            self.session.query(Interview)
            .filter(Interview.id == interview_id, Interview.creator_uid == uid)
            .first()
        )
        if not interview:
            raise InterviewNotFound()
        return interview

    async def create_interview(self, uid: str, request: CreateInterviewRequest) -> Interview:
        """
        Create an interview and its questions.

        Question generation never fails the request; when the AI service is
        unavailable the templated questions are stored instead.

        Raises:
            ValidationError: If the title is blank or no topic is given
        """
        title = (request.title or "").strip()
        topics = [topic.strip() for topic in (request.topics or []) if topic and topic.strip()]
        if not title:
            raise ValidationError("Title is required")
        if not topics:
            raise ValidationError("At least one topic is required")

        questions = await self.question_generator.generate_questions(topics, request.difficulty, request.domains)

        interview = Interview(
            creator_uid=uid,
            title=title,
            topics=topics,
            domains=list(request.domains),
            difficulty=request.difficulty.value
        )
        interview.questions = [
            InterviewQuestion(
                position=position,
                text=question.text,
                difficulty=question.difficulty.value,
                ideal_answer=question.ideal_answer,
                key_points=list(question.key_points),
                category=question.category
            )
            for position, question in enumerate(questions)
        ]
        self.session.add(interview)
        self._commit("create interview")
        self.session.refresh(interview)
        logger.info(f"Created interview {interview.id} with {len(interview.questions)} questions for user {uid}")
        return interview

    def delete_interview(self, interview_id: uuid.UUID, uid: str) -> None:
        """
        Delete an interview together with its questions and feedback.

        Raises:
            InterviewNotFound: If the interview does not exist
            Forbidden: If the interview belongs to another user
        """
        interview = self.session.get(Interview, interview_id)
        if not interview:
            raise InterviewNotFound()
        if interview.creator_uid != uid:
            raise Forbidden("Not authorized to delete this interview")
        self.session.delete(interview)
        self._commit("delete interview")
        logger.info(f"Deleted interview {interview_id} for user {uid}")

    async def submit_answer(self, interview_id: uuid.UUID, uid: str, request: SubmitAnswerRequest) -> SubmitAnswerResponse:
        """
        Score an answer and append it to the interview's feedback log.

        Raises:
            ValidationError: If the answer or question text is missing
            InterviewNotFound: If the interview is not the user's
            QuestionNotFound: If no question in the interview has that exact text
        """
        if not request.answer or not request.question_text:
            raise ValidationError("Answer and question text are required")

        interview = self.get_interview(interview_id, uid)
        question_row = next((q for q in interview.questions if q.text == request.question_text), None)
        if question_row is None:
            raise QuestionNotFound()

        question = QuestionSchema.model_validate(question_row)
        result, source = await self.answer_analyzer.score_answer(request.answer, question)

        interview.feedbacks.append(InterviewFeedback(
            question=question.text,
            user_answer=request.answer,
            feedback=result.feedback,
            score=result.score,
            points_covered=list(result.points_covered),
            points_missed=list(result.points_missed),
            coverage=result.coverage,
            source=source
        ))
        interview.updated_at = utc_now()
        self._commit("save feedback")
        logger.info(f"Scored answer for interview {interview_id}: score={result.score} source={source}")

        return SubmitAnswerResponse(
            feedback=result.feedback,
            score=result.score,
            points_covered=result.points_covered,
            points_missed=result.points_missed,
            coverage=result.coverage,
            source=source,
            is_complete=is_interview_complete(interview)
        )

    async def ask_doubt(self, request: DoubtRequest) -> DoubtResponse:
        if not request.doubt.strip():
            raise ValidationError("Doubt is required")
        return await self.doubt_resolver.resolve_doubt(request)
