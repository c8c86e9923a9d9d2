"""
Description: 
This module contains precompiled regex patterns for extracting answer analysis
fields from model output that is JSON-like but not valid JSON.

Dependencies:
- re: Python's built-in regular expression module for pattern matching.
"""

import re

# Compile regex patterns once for better performance
REGEX_PATTERNS = {
    'score': re.compile(r"[\"']score[\"']\s*:\s*(\d+(?:\.\d+)?)"),
    'feedback': re.compile(r"[\"']feedback[\"']\s*:\s*[\"'](.*?)[\"']\s*[,}\n]", re.DOTALL),
    'points_covered': re.compile(r"[\"']pointsCovered[\"']\s*:\s*\[(.*?)\]", re.DOTALL),
    'points_missed': re.compile(r"[\"']pointsMissed[\"']\s*:\s*\[(.*?)\]", re.DOTALL),
    'coverage': re.compile(r"[\"']coverage[\"']\s*:\s*(\d+(?:\.\d+)?)"),
    'think_block': re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE),
    'think_tag': re.compile(r"</?think[^>]*>", re.IGNORECASE),
    'code_fence': re.compile(r"```(?:json)?", re.IGNORECASE),
}
