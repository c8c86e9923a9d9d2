from .question import QuestionSchema
from .create_interview_request import CreateInterviewRequest
from .interview_response import (
    FeedbackEntry,
    InterviewResponse,
    CreateInterviewResponse,
    DeleteInterviewResponse
)
from .submit_answer import SubmitAnswerRequest, SubmitAnswerResponse
from .doubt import DoubtRequest, DoubtResponse

__all__ = [
    "QuestionSchema",
    "CreateInterviewRequest",
    "FeedbackEntry",
    "InterviewResponse",
    "CreateInterviewResponse",
    "DeleteInterviewResponse",
    "SubmitAnswerRequest",
    "SubmitAnswerResponse",
    "DoubtRequest",
    "DoubtResponse"
]
