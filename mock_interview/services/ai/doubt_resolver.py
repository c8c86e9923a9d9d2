"""
Doubt Resolver Module

Answers a candidate's follow-up question ("doubt") about the feedback they
received. When the AI service is unavailable the caller gets a templated
fallback response instead of an error.

Dependencies:
- openai: For the AsyncOpenAI client pointed at the inference server.
- loguru: For logging.
"""

import asyncio
import time
from openai import AsyncOpenAI
from loguru import logger
from mock_interview.core.ai_client_manager import DOUBT_MODEL, AI_DOUBT_TIMEOUT_SECONDS
from mock_interview.core.secure_prompt_manager import secure_prompt_manager
from mock_interview.errors.exceptions import AIServiceError
from mock_interview.helper.clean_ai_response import validate_ai_response
from mock_interview.schemas.interview import DoubtRequest, DoubtResponse

DOUBT_FAILURE_MESSAGE = "Failed to process your doubt. Please make sure the AI service is running."


def fallback_doubt_response(doubt: str) -> str:
    return (
        f'I can see you have a doubt about: "{doubt}". This is a great question! '
        "While I can't provide a detailed response right now, I recommend reviewing the feedback "
        "provided and researching this topic further. Would you like me to suggest some resources "
        "for learning more about this topic?"
    )


class DoubtResolver:
    def __init__(self, client: AsyncOpenAI, model: str = DOUBT_MODEL, timeout: float = AI_DOUBT_TIMEOUT_SECONDS):
        self.client = client
        self.model = model
        self.timeout = timeout

    async def _explain(self, request: DoubtRequest) -> str:
        prompt = secure_prompt_manager.get_doubt_resolution_prompt(
            question=request.question,
            user_answer=request.user_answer,
            doubt=request.doubt,
            context=request.context
        )

        start_time = time.time()
        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    temperature=0.7,
                    max_tokens=1000,
                    messages=[{"role": "user", "content": prompt}]
                ),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise AIServiceError(f"Doubt resolution timed out after {self.timeout}s") from e
        except Exception as e:
            raise AIServiceError(f"Failed to reach AI service: {e}") from e

        logger.info(f"Doubt resolution call completed in {time.time() - start_time:.3f}s")

        content = response.choices[0].message.content if response.choices else None
        if not validate_ai_response(content, check_suspicious=False):
            raise AIServiceError("AI service returned an empty or unsafe explanation")
        return content.strip()

    async def resolve_doubt(self, request: DoubtRequest) -> DoubtResponse:
        """
        Explain a candidate's doubt about their feedback.

        Returns:
            DoubtResponse: success with the explanation, or failure with a
                message and a fallback response. Never raises.
        """
        try:
            explanation = await self._explain(request)
            return DoubtResponse(success=True, response=explanation)
        except Exception as e:
            logger.error(f"Error handling doubt: {e}")
            return DoubtResponse(
                success=False,
                message=DOUBT_FAILURE_MESSAGE,
                fallback_response=fallback_doubt_response(request.doubt)
            )
