"""
Test AI Response Cleaning Module

This module tests cleaning, parsing and validation of raw model output before
any AI-backed service uses it.

Dependencies:
- pytest: For testing framework
- mock_interview.helper.clean_ai_response: The module being tested
"""

import pytest
from mock_interview.helper.clean_ai_response import clean_ai_response, parse_ai_json, validate_ai_response


class TestCleanAIResponse:
    """Test the clean_ai_response function for the usual small-model noise."""

    def test_plain_json_is_unchanged(self):
        content = '{"score": 70, "feedback": "Good"}'
        assert clean_ai_response(content) == content

    def test_removes_think_block(self):
        content = '<think>Let me weigh the answer first...</think>{"score": 70}'
        assert clean_ai_response(content) == '{"score": 70}'

    def test_removes_markdown_fence(self):
        content = '```json\n{"questions": []}\n```'
        assert clean_ai_response(content) == '{"questions": []}'

    def test_drops_leading_and_trailing_commentary(self):
        content = 'Okay, here is the analysis: {"score": 50, "nested": {"a": 1}} Hope this helps!'
        assert clean_ai_response(content) == '{"score": 50, "nested": {"a": 1}}'

    def test_braces_inside_strings_do_not_end_the_object(self):
        content = 'Result: {"feedback": "Use {curly} braces}", "score": 1} trailing'
        assert clean_ai_response(content) == '{"feedback": "Use {curly} braces}", "score": 1}'

    def test_extracts_array(self):
        content = 'Here you go:\n[{"question": "What is a closure?"}]\nDone.'
        assert clean_ai_response(content) == '[{"question": "What is a closure?"}]'

    def test_non_string_input_is_returned_as_is(self):
        assert clean_ai_response(None) is None
        assert clean_ai_response("") == ""


class TestParseAIJson:
    def test_parses_clean_json(self):
        assert parse_ai_json('{"score": 7}') == {"score": 7}

    def test_parses_after_cleaning(self):
        assert parse_ai_json('<think>hmm</think>```json\n{"score": 7}\n```') == {"score": 7}

    @pytest.mark.parametrize("content", [None, "", "no json here", '{"score": 7,', 42])
    def test_returns_none_when_nothing_parses(self, content):
        assert parse_ai_json(content) is None


class TestValidateAIResponse:
    """Test the validate_ai_response function for various scenarios."""

    def test_valid_json_response(self):
        """Test that valid JSON responses pass validation."""
        valid_responses = [
            '{"score": 70, "feedback": "Good response", "pointsCovered": ["Definition"]}',
            '{"score": 35, "feedback": "Average response", "pointsMissed": ["Use cases"]}',
            '{"questions": [{"question": "What is React?", "keyPoints": ["Components"]}]}'
        ]

        for response in valid_responses:
            assert validate_ai_response(response) == True

    def test_system_prompt_leakage_detection(self):
        """Test that echoes of the prompt are blocked."""
        leak_responses = [
            '<role>You are a senior technical interviewer</role>',
            '<task>Generate 3 interview questions</task>',
            '<interview>Question: What is React?</interview>',
            '<output_format>Return ONLY valid JSON</output_format>',
            'Return ONLY valid JSON with this exact structure',
            'You are an interview coach. Analyze this interview answer.'
        ]

        for response in leak_responses:
            assert validate_ai_response(response) == False

    def test_suspicious_content_detection(self):
        """Test that content talking about its own instructions is detected."""
        suspicious_responses = [
            'I am an AI assistant and my instructions are to...',
            'According to my prompt, I should...',
            'As per the system instructions...',
            'Based on my system prompt instructions, I need to...'
        ]

        for response in suspicious_responses:
            assert validate_ai_response(response) == False

    def test_suspicious_check_can_be_skipped(self):
        """Test that free-text explanations may discuss instructions."""
        explanation = "According to the React docs, the prompt you render is a controlled input."
        assert validate_ai_response(explanation) == False
        assert validate_ai_response(explanation, check_suspicious=False) == True

    def test_leakage_is_blocked_even_without_suspicious_check(self):
        assert validate_ai_response("<role>leaked</role>", check_suspicious=False) == False

    def test_excessive_length_detection(self):
        """Test that responses exceeding the length limit are blocked."""
        long_response = '{"score": 7, "feedback": "' + 'x' * 8000 + '"}'
        assert validate_ai_response(long_response) == False
        assert validate_ai_response('{"feedback": "' + 'x' * 100 + '"}', max_length=50) == False

    def test_invalid_input_handling(self):
        """Test that invalid inputs are properly handled."""
        invalid_inputs = [None, "", "   ", 123, [], {}, True]

        for invalid_input in invalid_inputs:
            assert validate_ai_response(invalid_input) == False
