"""
Secure Prompt Manager Module

This module provides a secure way to manage AI prompts by isolating them from user data
to prevent injection attacks. It implements a template-based system with explicit
placeholders and comprehensive sanitization.

The module contains:
- PromptTemplate: A dataclass for secure prompt templates with placeholders
- SecurePromptManager: Main class for managing secure prompts
- sanitize_text: Utility function for text sanitization

Dependencies:
- dataclasses: For template data structures
- typing: For type hints
- re: For regex-based sanitization
- html: For HTML entity encoding
- loguru: For logging truncation and unknown placeholder warnings
"""

from typing import Dict, Sequence
from dataclasses import dataclass
import re
import html
from loguru import logger

def sanitize_text(text: str, max_length: int = 1000, escape_html: bool = True) -> str:
    """
    Sanitize text input to prevent injection attacks and ensure data safety.

    This function performs multiple sanitization steps:
    1. Optional HTML entity encoding to prevent XSS
    2. Strips leading/trailing whitespace
    3. Removes null bytes and other control characters
    4. Configurable length limiting to prevent DoS attacks
    5. Normalizes unicode characters

    Args:
        text (str): The text to sanitize
        max_length (int): Maximum allowed length (default: 1000)
        escape_html (bool): Whether to HTML escape the text (default: True)

    Returns:
        str: The sanitized text

    Raises:
        ValueError: If text is None or empty after sanitization
    """
    if text is None:
        raise ValueError("Text cannot be None")

    text = str(text)

    if escape_html:
        text = html.escape(text)

    text = text.strip()

    # Remove null bytes and other control characters (except newlines and tabs)
    text = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', text)

    if len(text) > max_length:
        text = text[:max_length]
        logger.warning(f"Text truncated to {max_length} characters for security")

    text = text.encode('utf-8', errors='ignore').decode('utf-8')

    if not text:
        raise ValueError("Text cannot be empty after sanitization")

    return text

@dataclass
class PromptTemplate:
    """Secure prompt template with placeholders for safe data injection."""
    template: str
    placeholders: Dict[str, str]
    sanitization_config: Dict[str, Dict] = None  # Per-placeholder sanitization config

    def render(self, **kwargs) -> str:
        """
        Safely render the template with provided data.

        Args:
            **kwargs: Data to inject into placeholders

        Returns:
            str: Rendered prompt with sanitized data

        Raises:
            ValueError: If required placeholders are missing or data is invalid
        """
        missing_placeholders = set(self.placeholders.keys()) - set(kwargs.keys())
        if missing_placeholders:
            raise ValueError(f"Missing required placeholders: {missing_placeholders}")

        sanitized_data = {}
        for key, value in kwargs.items():
            if key in self.placeholders:
                config = self.sanitization_config.get(key, {}) if self.sanitization_config else {}
                max_length = config.get('max_length', 1000)
                escape_html = config.get('escape_html', True)

                sanitized_data[key] = sanitize_text(str(value), max_length=max_length, escape_html=escape_html)
            else:
                # Skip unknown keys to prevent injection
                logger.warning(f"Unknown placeholder key: {key}")
                continue

        try:
            return self.template.format(**sanitized_data)
        except KeyError as e:
            raise ValueError(f"Template rendering error: {e}") from e

class SecurePromptManager:
    """
    Secure prompt manager that isolates prompts from user data to prevent injection attacks.

    Every prompt the service sends to the inference server is rendered here,
    so user-controlled text only ever reaches the model through a sanitized
    placeholder.
    """

    def __init__(self):
        self._templates = self._initialize_templates()

    def _initialize_templates(self) -> Dict[str, PromptTemplate]:
        """Initialize secure prompt templates with explicit placeholders."""
        return {
            "question_generation": PromptTemplate(
                template="""<role>
You are a senior technical interviewer preparing a mock interview.
</role>

<task>
Generate {count} interview questions about {topics} at {difficulty} difficulty level.
Focus domains: {domains}.
</task>

<output_format>
Return ONLY valid JSON with this exact structure - no commentary and no markdown:
{{
  "questions": [
    {{
      "question": "The question text",
      "idealAnswer": "The ideal answer",
      "keyPoints": ["3-5 short key points the answer should cover"],
      "category": "The main topic category"
    }}
  ]
}}
</output_format>
""",
                placeholders={
                    "count": "Number of questions to generate",
                    "topics": "Comma separated interview topics",
                    "difficulty": "Interview difficulty level",
                    "domains": "Comma separated focus domains"
                },
            ),
            "answer_analysis": PromptTemplate(
                template="""<role>
You are an interview coach. Analyze this interview answer and provide feedback.
</role>

<interview>
Question: {question}
Difficulty: {difficulty}
Ideal Answer: {ideal_answer}
Key Points: {key_points}
User's Answer: {answer}
</interview>

<output_format>
Return ONLY valid JSON with this exact structure - no commentary and no markdown:
{{
  "score": 0,
  "feedback": "Detailed feedback",
  "pointsCovered": ["Key points covered"],
  "pointsMissed": ["Key points missed"],
  "coverage": 0
}}
"score" is an integer from 0 to 100 and "coverage" is the percentage of key points covered.
</output_format>
""",
                placeholders={
                    "question": "The interview question",
                    "difficulty": "Question difficulty level",
                    "ideal_answer": "The ideal answer",
                    "key_points": "Key points separated by semicolons",
                    "answer": "The candidate's answer"
                },
                sanitization_config={
                    "ideal_answer": {"max_length": 2000},
                    "key_points": {"max_length": 2000},
                    "answer": {"max_length": 4000}
                }
            ),
            "doubt_resolution": PromptTemplate(
                template="""You are an AI interview assistant. A user was asked: "{question}"
Their answer was: "{user_answer}"
They received this feedback: "{context}"

Now they have a doubt: "{doubt}"

Please provide a helpful and detailed response to their doubt, explaining any concepts they might be confused about.""",
                placeholders={
                    "question": "The interview question",
                    "user_answer": "The candidate's answer",
                    "context": "The feedback the candidate received",
                    "doubt": "The candidate's follow-up doubt"
                },
                sanitization_config={
                    "user_answer": {"max_length": 4000},
                    "context": {"max_length": 2000},
                    "doubt": {"max_length": 2000}
                }
            )
        }

    def get_question_generation_prompt(self, topics: Sequence[str], difficulty: str, domains: Sequence[str], count: int = 3) -> str:
        """
        Get a secure question generation prompt.

        Args:
            topics: Interview topics, at least one
            difficulty: Difficulty level value
            domains: Optional focus domains
            count: Number of questions requested

        Returns:
            str: Secure prompt with sanitized data
        """
        template = self._templates["question_generation"]

        return template.render(
            count=count,
            topics=", ".join(topics),
            difficulty=getattr(difficulty, "value", difficulty),
            domains=", ".join(domains) if domains else "none specified"
        )

    def get_answer_analysis_prompt(self, question, answer: str) -> str:
        """
        Get a secure answer analysis prompt.

        Args:
            question: The question being answered (text, difficulty,
                ideal answer and key points are used)
            answer: The candidate's answer

        Returns:
            str: Secure prompt with sanitized data

        Raises:
            ValueError: If the answer is empty after sanitization
        """
        template = self._templates["answer_analysis"]

        return template.render(
            question=question.text,
            difficulty=getattr(question.difficulty, "value", question.difficulty),
            ideal_answer=question.ideal_answer or "Not provided",
            key_points="; ".join(question.key_points) if question.key_points else "None",
            answer=answer
        )

    def get_doubt_resolution_prompt(self, question: str, user_answer: str, doubt: str, context: str) -> str:
        """Get a secure doubt resolution prompt."""
        template = self._templates["doubt_resolution"]

        return template.render(
            question=question or "Not provided",
            user_answer=user_answer or "No answer given",
            context=context or "No feedback given",
            doubt=doubt
        )


# Global instance for reuse across the application
secure_prompt_manager = SecurePromptManager()
