"""
Answer Analysis Module

This module scores a candidate's answer. The AI inference server is asked first;
if it fails, times out, or returns something that cannot be turned into a
score, the deterministic keyword-coverage scorer is used instead. The AI failure
is logged and never reaches the candidate.

Dependencies:
- openai: For the AsyncOpenAI client pointed at the inference server.
- asyncio: For bounding the analysis call with a timeout.
- loguru: For logging analysis outcomes and fallbacks.
- mock_interview.services.scoring.answer_scorer: For the fallback scorer.
- mock_interview.helper: For JSON recovery, validation and regex extraction.
"""

import asyncio
import time
from typing import Any, Dict, Sequence, Tuple
from openai import AsyncOpenAI
from loguru import logger
from mock_interview.core.ai_client_manager import ANALYSIS_MODEL, AI_TIMEOUT_SECONDS
from mock_interview.core.secure_prompt_manager import secure_prompt_manager
from mock_interview.errors.exceptions import AIServiceError
from mock_interview.helper.clean_ai_response import parse_ai_json, validate_ai_response
from mock_interview.helper.extract_regex_feedback import extract_regex_feedback
from mock_interview.schemas.interview import QuestionSchema
from mock_interview.schemas.scoring import ScoreResult
from mock_interview.services.scoring.answer_scorer import round_half_up, score as keyword_score

SOURCE_AI = "ai"
SOURCE_FALLBACK = "fallback"


def _clamp(value: Any, upper: float = 100) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return max(0, min(upper, number))


def _string_list(value: Any) -> list:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if str(item).strip()]


def _partition_key_points(named_covered: list, key_points: Sequence[str]) -> Tuple[list, list]:
    """Split the question's key points into covered/missed using the points the model named."""
    named = {point.strip().lower() for point in named_covered}
    covered, missed = [], []
    for point in key_points or []:
        if point.strip() and point.strip().lower() in named:
            covered.append(point)
        else:
            missed.append(point)
    return covered, missed


def build_score_result(analysis: Dict[str, Any], key_points: Sequence[str] = ()) -> ScoreResult:
    """
    Convert a parsed analysis payload into a ScoreResult, applying defaults.

    The model's pointsCovered is matched case-insensitively against the
    question's key points. Names that match no key point are dropped, and every
    key point the model did not name is reported as missed.
    """
    points_covered, points_missed = _partition_key_points(_string_list(analysis.get("pointsCovered")), key_points)
    return ScoreResult(
        score=round_half_up(_clamp(analysis.get("score") or 0)),
        feedback=str(analysis.get("feedback") or "No specific feedback available."),
        points_covered=points_covered,
        points_missed=points_missed,
        coverage=_clamp(analysis.get("coverage") or 0)
    )


class AnswerAnalyzer:
    """
    Scores interview answers, preferring the AI service over keyword coverage.

    Attributes:
        client (AsyncOpenAI): Client for the answer analysis service.
        model (str): Model name served by the inference server.
        timeout (float): Seconds to wait for the AI before falling back.
    """

    def __init__(self, client: AsyncOpenAI, model: str = ANALYSIS_MODEL, timeout: float = AI_TIMEOUT_SECONDS):
        self.client = client
        self.model = model
        self.timeout = timeout

    async def analyze_response(self, user_answer: str, question: QuestionSchema) -> ScoreResult:
        """
        Score an answer with the AI service.

        Args:
            user_answer (str): The candidate's answer.
            question (QuestionSchema): The question being answered.

        Returns:
            ScoreResult: The model's assessment.

        Raises:
            AIServiceError: If the service is unreachable, times out, or its
                output cannot be interpreted.
        """
        try:
            prompt = secure_prompt_manager.get_answer_analysis_prompt(question, user_answer)
        except ValueError as e:
            raise AIServiceError(f"Unable to build analysis prompt: {e}") from e

        start_time = time.time()
        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    temperature=0.3,
                    max_tokens=2000,
                    response_format={"type": "json_object"},
                    messages=[{"role": "user", "content": prompt}]
                ),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise AIServiceError(f"Answer analysis timed out after {self.timeout}s") from e
        except Exception as e:
            raise AIServiceError(f"Failed to analyze response with AI: {e}") from e

        logger.info(f"Answer analysis call completed in {time.time() - start_time:.3f}s")

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise AIServiceError("AI service returned an unexpected response shape") from e

        if not validate_ai_response(content):
            raise AIServiceError("AI analysis failed validation")

        analysis = parse_ai_json(content)
        if not isinstance(analysis, dict):
            analysis = extract_regex_feedback(content)
            if analysis is None:
                raise AIServiceError("AI analysis could not be parsed")

        return build_score_result(analysis, question.key_points)

    async def score_answer(self, user_answer: str, question: QuestionSchema) -> Tuple[ScoreResult, str]:
        """
        Score an answer, falling back to keyword coverage if the AI path fails.

        Returns:
            Tuple[ScoreResult, str]: The result and its source, "ai" or "fallback".
        """
        try:
            return await self.analyze_response(user_answer, question), SOURCE_AI
        except Exception as e:
            logger.warning(f"Error analyzing response with AI, falling back to keyword coverage: {e}")
            return keyword_score(user_answer, question.key_points, question.difficulty), SOURCE_FALLBACK
