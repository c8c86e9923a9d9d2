"""
AI Response Cleaning Module

Utilities shared by every AI-backed service for turning raw model output into
parseable JSON and rejecting output that should never reach a user.

Small local models routinely wrap JSON in markdown fences, prepend reasoning
("Okay, let me think...") or emit <think> blocks despite instructions, so the
cleaner removes all of that and keeps only the first complete JSON object or
array.

Dependencies:
- json: For parsing the cleaned content.
- re: For leakage pattern detection.
- loguru: For logging cleaning and validation results.
- mock_interview.constants.regex_patterns: For the precompiled cleanup patterns.
"""

import json
import re
from typing import Any, Optional
from loguru import logger
from mock_interview.constants.regex_patterns import REGEX_PATTERNS

MAX_RESPONSE_LENGTH = 8000

LEAK_PATTERNS = [
    r"<role>",
    r"<task>",
    r"<interview>",
    r"<output_format>",
    r"Return ONLY valid JSON",
    r"You are a senior technical interviewer",
    r"You are an interview coach",
]

SUSPICIOUS_PATTERNS = [
    r"my instructions.*are",
    r"according to.*(?:prompt|system|instructions)",
    r"as per.*system",
    r"based on.*(?:system|prompt).*instructions",
]


def _matching_bracket_end(content: str, start: int) -> int:
    """Return the index just past the bracket closing the one at start, or -1."""
    opening = content[start]
    closing = "}" if opening == "{" else "]"
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(content)):
        char = content[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == opening:
            depth += 1
        elif char == closing:
            depth -= 1
            if depth == 0:
                return i + 1
    return -1


def clean_ai_response(content: str) -> str:
    """
    Clean AI response by removing thinking content and extracting only JSON.

    Args:
        content (str): The raw AI response content

    Returns:
        str: Cleaned content, reduced to the first complete JSON value when
            one is present

    Example:
        >>> clean_ai_response('<think>reasoning...</think>{"score": 7}')
        '{"score": 7}'
        >>> clean_ai_response('```json\\n[1, 2]\\n```')
        '[1, 2]'
    """
    if not content or not isinstance(content, str):
        return content

    original_length = len(content)

    content = REGEX_PATTERNS['think_block'].sub('', content)
    content = REGEX_PATTERNS['think_tag'].sub('', content)
    content = REGEX_PATTERNS['code_fence'].sub('', content)
    content = content.strip()

    starts = [index for index in (content.find('{'), content.find('[')) if index != -1]
    if starts:
        json_start = min(starts)
        json_end = _matching_bracket_end(content, json_start)
        if json_end != -1:
            content = content[json_start:json_end]
        else:
            content = content[json_start:]

    if len(content) != original_length:
        logger.debug(f"AI response cleaned: {original_length} -> {len(content)} chars")

    return content


def parse_ai_json(content: str) -> Optional[Any]:
    """
    Parse model output as JSON, cleaning it first if the raw text is not JSON.

    Returns:
        The parsed value, or None when no JSON could be recovered.
    """
    if not content or not isinstance(content, str):
        return None
    try:
        return json.loads(content.strip())
    except json.JSONDecodeError:
        pass
    try:
        return json.loads(clean_ai_response(content))
    except json.JSONDecodeError:
        logger.warning(f"Unable to parse AI response as JSON: {content[:200]}")
        return None


def validate_ai_response(content: str, max_length: int = MAX_RESPONSE_LENGTH, check_suspicious: bool = True) -> bool:
    """
    Validate AI response to prevent system prompt leakage.

    Args:
        content (str): The AI response content to validate
        max_length (int): Longest acceptable response
        check_suspicious (bool): Also reject text that talks about its own
            instructions. Free-text explanations skip this check.

    Returns:
        bool: True if the response is safe to use, False if it is empty,
              oversized or echoes the prompt's instructions

    Example:
        >>> validate_ai_response('{"score": 70, "feedback": "Good response"}')
        True
        >>> validate_ai_response('<output_format>Return ONLY valid JSON</output_format>')
        False
    """
    if not content or not isinstance(content, str):
        return False

    if not content.strip():
        return False

    for pattern in LEAK_PATTERNS:
        if re.search(pattern, content, re.IGNORECASE | re.DOTALL):
            logger.warning(f"Potential system prompt leakage detected: {pattern}")
            return False

    if len(content) > max_length:
        logger.warning("AI response exceeds reasonable length limit")
        return False

    if not check_suspicious:
        return True

    for pattern in SUSPICIOUS_PATTERNS:
        if re.search(pattern, content, re.IGNORECASE):
            logger.warning(f"Suspicious content detected: {pattern}")
            return False

    return True
