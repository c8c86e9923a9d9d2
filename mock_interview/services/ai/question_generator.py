"""
Question Generator Module

This module generates interview questions for a set of topics using the local AI
inference server, and falls back to a fixed set of templated questions whenever
the server is unreachable, slow, or returns something unusable. Interview
creation therefore never fails because of the AI service.

Dependencies:
- openai: For the AsyncOpenAI client pointed at the inference server.
- asyncio: For bounding the generation call with a timeout.
- loguru: For logging generation outcomes and fallbacks.
- mock_interview.core.secure_prompt_manager: For the sanitized generation prompt.
- mock_interview.helper.clean_ai_response: For JSON recovery and validation.
"""

import asyncio
import time
from typing import Any, List, Optional, Sequence
from openai import AsyncOpenAI
from loguru import logger
from mock_interview.core.ai_client_manager import QUESTION_MODEL, AI_TIMEOUT_SECONDS
from mock_interview.core.secure_prompt_manager import secure_prompt_manager
from mock_interview.errors.exceptions import AIServiceError
from mock_interview.helper.clean_ai_response import parse_ai_json, validate_ai_response
from mock_interview.schemas.interview import QuestionSchema
from mock_interview.schemas.scoring import Difficulty

QUESTION_COUNT = 3


def fallback_questions(topics: Sequence[str], difficulty: Difficulty = Difficulty.MEDIUM) -> List[QuestionSchema]:
    """Return the deterministic questions used when generation fails."""
    topic = topics[0] if topics else None
    category = topic or "general"
    return [
        QuestionSchema(
            text=f"Explain what {topic or 'this topic'} is and its main use cases.",
            ideal_answer=f"{topic or 'This topic'} is a technology used for...",
            key_points=[
                f"Definition of {topic or 'the topic'}",
                "Key concepts and features",
                "Common use cases",
                "Benefits and advantages"
            ],
            difficulty=difficulty,
            category=category
        ),
        QuestionSchema(
            text=f"What are the main differences between {topic or 'this technology'} and similar technologies?",
            ideal_answer="The main differences are...",
            key_points=[
                "Key features comparison",
                "Performance considerations",
                "Use case suitability",
                "Community and ecosystem"
            ],
            difficulty=difficulty,
            category=category
        ),
        QuestionSchema(
            text=f"How would you implement a basic example of {topic or 'this technology'}?",
            ideal_answer="Here is a basic implementation...",
            key_points=[
                "Setup and installation",
                "Basic code structure",
                "Key functions/methods",
                "Testing and validation"
            ],
            difficulty=difficulty,
            category=category
        )
    ]


def _question_items(parsed: Any) -> List[dict]:
    """Accept either a bare JSON array or an object wrapping it."""
    if isinstance(parsed, dict):
        for key in ("questions", "items", "data"):
            if isinstance(parsed.get(key), list):
                parsed = parsed[key]
                break
        else:
            # A single question object
            parsed = [parsed] if "question" in parsed else []
    if not isinstance(parsed, list):
        return []
    return [item for item in parsed if isinstance(item, dict)]


class QuestionGenerator:
    """
    Generates interview questions with the AI service.

    Attributes:
        client (AsyncOpenAI): Client for the question generation service.
        model (str): Model name served by the inference server.
        timeout (float): Seconds to wait before falling back.
    """

    def __init__(self, client: AsyncOpenAI, model: str = QUESTION_MODEL, timeout: float = AI_TIMEOUT_SECONDS):
        self.client = client
        self.model = model
        self.timeout = timeout

    async def _request_questions(self, topics: Sequence[str], difficulty: Difficulty, domains: Sequence[str]) -> List[QuestionSchema]:
        prompt = secure_prompt_manager.get_question_generation_prompt(topics, difficulty, domains, count=QUESTION_COUNT)

        start_time = time.time()
        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    temperature=0.7,
                    max_tokens=2000,
                    response_format={"type": "json_object"},
                    messages=[{"role": "user", "content": prompt}]
                ),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise AIServiceError(f"Question generation timed out after {self.timeout}s") from e
        except Exception as e:
            raise AIServiceError(f"Failed to connect to AI service: {e}") from e

        logger.info(f"Question generation call completed in {time.time() - start_time:.3f}s")

        content = response.choices[0].message.content if response.choices else None
        if not validate_ai_response(content):
            raise AIServiceError("AI service returned an invalid question payload")

        parsed = parse_ai_json(content)
        if parsed is None:
            raise AIServiceError("AI service returned non-JSON questions")

        category = topics[0] if topics else "general"
        questions = []
        for item in _question_items(parsed):
            text = item.get("question") or item.get("text")
            if not text or not isinstance(text, str):
                continue
            key_points = item.get("keyPoints") or []
            questions.append(QuestionSchema(
                text=text.strip(),
                ideal_answer=str(item.get("idealAnswer") or ""),
                key_points=[str(point) for point in key_points if str(point).strip()] if isinstance(key_points, list) else [],
                difficulty=difficulty,
                category=category
            ))

        if not questions:
            raise AIServiceError("AI service returned no usable questions")
        return questions

    async def generate_questions(
        self,
        topics: Sequence[str],
        difficulty: Difficulty = Difficulty.MEDIUM,
        domains: Optional[Sequence[str]] = None
    ) -> List[QuestionSchema]:
        """
        Generate questions for the given topics.

        Args:
            topics: Interview topics; the first one names the category.
            difficulty: Difficulty applied to every question.
            domains: Optional focus domains mentioned in the prompt.

        Returns:
            List[QuestionSchema]: Generated questions, or the fallback set if
                generation fails for any reason.
        """
        domains = list(domains or [])
        try:
            logger.info(f"Generating questions for topics={list(topics)} difficulty={difficulty.value}")
            questions = await self._request_questions(topics, difficulty, domains)
            logger.info(f"Generated {len(questions)} questions with the AI service")
            return questions
        except Exception as e:
            logger.warning(f"Error generating questions with AI service, using fallback questions: {e}")
            return fallback_questions(topics, difficulty)
