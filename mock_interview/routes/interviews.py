"""Interview Routes Module

This module defines the FastAPI routes for interview sessions: listing,
creating and deleting a user's interviews, submitting answers for scoring, and
asking follow-up doubts about the feedback. Every route requires a Firebase ID
token.

Dependencies:
- fastapi: For API routing and dependency injection.
- loguru: For logging operations.
- mock_interview.core.route_limiters: For rate limiting.
- mock_interview.core.ai_client_manager: For the AI clients behind the services.
- mock_interview.services.interview_service: For the interview workflow.
"""

import uuid
from typing import List
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.orm import Session
from starlette.status import HTTP_201_CREATED, HTTP_503_SERVICE_UNAVAILABLE
from mock_interview.core.route_limiters import limiter
from mock_interview.core.ai_client_manager import AIClientManager, get_ai_client_manager
from mock_interview.database import get_db_session
from mock_interview.services.auth.firebase_auth import get_current_user_uid
from mock_interview.services.interview_service import InterviewService
from mock_interview.services.ai import QuestionGenerator, AnswerAnalyzer, DoubtResolver
from mock_interview.schemas.interview import (
    CreateInterviewRequest,
    CreateInterviewResponse,
    DeleteInterviewResponse,
    DoubtRequest,
    DoubtResponse,
    InterviewResponse,
    SubmitAnswerRequest,
    SubmitAnswerResponse
)
from mock_interview.errors.exceptions import (
    Forbidden,
    InternalServerError,
    InterviewNotFound,
    QuestionNotFound,
    ValidationError
)

router = APIRouter(
    prefix="/api",
    tags=["interviews"],
    responses={404: {"description": "Not found"}}
)

KNOWN_ERRORS = (ValidationError, InterviewNotFound, QuestionNotFound, Forbidden, InternalServerError)


def get_interview_service(
    session: Session = Depends(get_db_session),
    ai_manager: AIClientManager = Depends(get_ai_client_manager)
) -> InterviewService:
    """Build the interview service for one request."""
    return InterviewService(
        session=session,
        question_generator=QuestionGenerator(ai_manager.get_question_generation_client()),
        answer_analyzer=AnswerAnalyzer(ai_manager.get_answer_analysis_client()),
        doubt_resolver=DoubtResolver(ai_manager.get_doubt_resolution_client())
    )


@router.get("/interviews", response_model=List[InterviewResponse])
@limiter.limit("30/minute")
async def list_interviews_route(
    request: Request,
    current_uid: str = Depends(get_current_user_uid),
    service: InterviewService = Depends(get_interview_service)
):
    """List the caller's interviews, newest first."""
    try:
        return [InterviewResponse.model_validate(interview) for interview in service.list_interviews(current_uid)]
    except Exception as e:
        logger.exception("Unhandled exception in list interviews endpoint")
        raise InternalServerError("An unexpected error occurred while fetching interviews.") from e


@router.post("/interviews/create", response_model=CreateInterviewResponse, status_code=HTTP_201_CREATED)
@limiter.limit("10/minute")  # Question generation calls the AI service
async def create_interview_route(
    request: Request,
    interview_request: CreateInterviewRequest,
    current_uid: str = Depends(get_current_user_uid),
    service: InterviewService = Depends(get_interview_service)
):
    """
    Create an interview with generated questions.

    Returns 400 when the title is blank or no topics are given. Questions fall
    back to templates when the AI service is unavailable, so creation succeeds
    either way.
    """
    try:
        interview = await service.create_interview(current_uid, interview_request)
        return CreateInterviewResponse(
            success=True,
            message="Interview created successfully",
            interview=InterviewResponse.model_validate(interview)
        )
    except KNOWN_ERRORS:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in create interview endpoint")
        raise InternalServerError("An unexpected error occurred while creating the interview.") from e


@router.post("/interviews/ask-doubt", response_model=DoubtResponse, response_model_exclude_none=True)
@limiter.limit("10/minute")  # Doubt resolution calls the AI service
async def ask_doubt_route(
    request: Request,
    doubt_request: DoubtRequest,
    current_uid: str = Depends(get_current_user_uid),
    service: InterviewService = Depends(get_interview_service)
):
    """
    Explain the candidate's doubt about their feedback.

    When the AI service fails the body still carries a fallback response, with
    status 503 so the client can tell the two apart.
    """
    try:
        result = await service.ask_doubt(doubt_request)
    except KNOWN_ERRORS:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in ask doubt endpoint")
        raise InternalServerError("An unexpected error occurred while processing the doubt.") from e

    if not result.success:
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
            content=result.model_dump(by_alias=True, exclude_none=True)
        )
    return result


@router.get("/interviews/{interview_id}", response_model=InterviewResponse)
@limiter.limit("30/minute")
async def get_interview_route(
    request: Request,
    interview_id: uuid.UUID,
    current_uid: str = Depends(get_current_user_uid),
    service: InterviewService = Depends(get_interview_service)
):
    try:
        return InterviewResponse.model_validate(service.get_interview(interview_id, current_uid))
    except KNOWN_ERRORS:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in get interview endpoint")
        raise InternalServerError("An unexpected error occurred while fetching the interview.") from e


@router.delete("/interviews/{interview_id}", response_model=DeleteInterviewResponse)
@limiter.limit("10/minute")
async def delete_interview_route(
    request: Request,
    interview_id: uuid.UUID,
    current_uid: str = Depends(get_current_user_uid),
    service: InterviewService = Depends(get_interview_service)
):
    """Delete an interview with its questions and feedback. Only the creator may delete it."""
    try:
        service.delete_interview(interview_id, current_uid)
        return DeleteInterviewResponse(message="Interview deleted successfully")
    except KNOWN_ERRORS:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in delete interview endpoint")
        raise InternalServerError("An unexpected error occurred while deleting the interview.") from e


@router.post("/interviews/{interview_id}/submit", response_model=SubmitAnswerResponse)
@limiter.limit("20/minute")  # Answer analysis calls the AI service
async def submit_answer_route(
    request: Request,
    interview_id: uuid.UUID,
    answer_request: SubmitAnswerRequest,
    current_uid: str = Depends(get_current_user_uid),
    service: InterviewService = Depends(get_interview_service)
):
    """
    Score an answer to one of the interview's questions.

    The question is matched by its exact text. Scoring falls back to keyword
    coverage when the AI service is unavailable; `source` says which one ran.
    """
    try:
        return await service.submit_answer(interview_id, current_uid, answer_request)
    except KNOWN_ERRORS:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in submit answer endpoint")
        raise InternalServerError("An unexpected error occurred while submitting the answer.") from e
