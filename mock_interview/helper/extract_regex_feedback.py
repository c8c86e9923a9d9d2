"""
Description:
Extract answer analysis fields from content using regex patterns.
This module recovers the score, feedback and key point lists from model output
that looks like the requested JSON but does not parse as JSON.

Arguments:
- content: The text content from which to extract feedback.

Returns:
- A dictionary with the recovered fields, or None when no score can be found.

Dependencies:
- mock_interview.constants.regex_patterns: For accessing precompiled regex patterns.
- loguru: For logging the extraction outcome.
"""
from typing import Any, Dict, List, Optional
from mock_interview.constants.regex_patterns import REGEX_PATTERNS
from loguru import logger

def extract_regex_feedback(content: str) -> Optional[Dict[str, Any]]:
    if not content or not isinstance(content, str):
        return None

    def extract_list(pattern: str, text: str) -> List[str]:
        match = REGEX_PATTERNS[pattern].search(text)
        if match:
            # Split by comma, strip whitespace and quotes
            return [item.strip().strip('"\'') for item in match.group(1).split(',') if item.strip().strip('"\'')]
        return []
    def extract_number(pattern: str, text: str) -> Optional[float]:
        match = REGEX_PATTERNS[pattern].search(text)
        if match:
            return float(match.group(1))
        return None
    def extract_str(pattern: str, text: str) -> str:
        match = REGEX_PATTERNS[pattern].search(text)
        if match:
            return match.group(1).strip()
        return "No specific feedback available."

    score = extract_number('score', content)
    if score is None:
        logger.warning("Regex extraction found no score in AI response")
        return None

    extracted = {
        "score": score,
        "feedback": extract_str('feedback', content),
        "pointsCovered": extract_list('points_covered', content),
        "pointsMissed": extract_list('points_missed', content),
        "coverage": extract_number('coverage', content) or 0,
    }
    logger.info(f"Recovered answer analysis with regex fallback: score={score}")
    return extracted
