"""
Test Question Generator Module

Tests question generation against a fake AI client, including every path that
falls back to the templated questions.

Dependencies:
- pytest, pytest-asyncio: For testing framework
- mock_interview.services.ai.question_generator: The module being tested
"""

import asyncio
import json
import pytest
from mock_interview.schemas.scoring import Difficulty
from mock_interview.services.ai.question_generator import QuestionGenerator, fallback_questions

GENERATED = {
    "questions": [
        {
            "question": "What problem does the virtual DOM solve?",
            "idealAnswer": "It batches and diffs UI updates.",
            "keyPoints": ["Diffing", "Batching updates", "Reconciliation"],
            "category": "React"
        },
        {
            "question": "When would you use useMemo?",
            "idealAnswer": "To memoize expensive computations.",
            "keyPoints": ["Memoization", "Dependency array"]
        }
    ]
}


class TestFallbackQuestions:
    def test_three_templated_questions(self):
        questions = fallback_questions(["React"], Difficulty.HARD)

        assert [q.text for q in questions] == [
            "Explain what React is and its main use cases.",
            "What are the main differences between React and similar technologies?",
            "How would you implement a basic example of React?"
        ]
        assert all(len(q.key_points) == 4 for q in questions)
        assert all(q.difficulty == Difficulty.HARD for q in questions)
        assert all(q.category == "React" for q in questions)

    def test_without_topics(self):
        questions = fallback_questions([])
        assert questions[0].text == "Explain what this topic is and its main use cases."
        assert questions[0].key_points[0] == "Definition of the topic"
        assert questions[0].category == "general"


class TestQuestionGenerator:
    @pytest.mark.asyncio
    async def test_generates_questions_from_ai(self, ai_manager):
        client = ai_manager.question_client
        client.reply_with(json.dumps(GENERATED))
        generator = QuestionGenerator(client, model="test-model", timeout=1)

        questions = await generator.generate_questions(["React"], Difficulty.EASY, ["frontend"])

        assert [q.text for q in questions] == [
            "What problem does the virtual DOM solve?",
            "When would you use useMemo?"
        ]
        assert questions[0].key_points == ["Diffing", "Batching updates", "Reconciliation"]
        assert questions[1].ideal_answer == "To memoize expensive computations."
        assert all(q.difficulty == Difficulty.EASY for q in questions)
        assert all(q.category == "React" for q in questions)

        call = client.completions.calls[0]
        assert call["model"] == "test-model"
        assert call["temperature"] == 0.7
        assert "React" in call["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_accepts_bare_array_wrapped_in_noise(self, ai_manager):
        client = ai_manager.question_client
        client.reply_with("<think>planning</think>```json\n" + json.dumps(GENERATED["questions"]) + "\n```")
        generator = QuestionGenerator(client, timeout=1)

        questions = await generator.generate_questions(["React"])
        assert len(questions) == 2

    @pytest.mark.asyncio
    async def test_falls_back_when_service_is_down(self, ai_manager):
        client = ai_manager.question_client
        client.reply_with(ConnectionError("connection refused"))
        generator = QuestionGenerator(client, timeout=1)

        questions = await generator.generate_questions(["SQL"], Difficulty.MEDIUM)
        assert questions == fallback_questions(["SQL"], Difficulty.MEDIUM)

    @pytest.mark.asyncio
    async def test_falls_back_on_timeout(self, ai_manager):
        client = ai_manager.question_client

        async def slow_create(**kwargs):
            await asyncio.sleep(1)

        client.completions.create = slow_create
        generator = QuestionGenerator(client, timeout=0.01)

        questions = await generator.generate_questions(["SQL"])
        assert questions == fallback_questions(["SQL"])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [
        "I cannot help with that.",
        '{"questions": []}',
        '{"questions": [{"idealAnswer": "no question text"}]}',
        "<output_format>Return ONLY valid JSON</output_format>"
    ])
    async def test_falls_back_on_unusable_output(self, ai_manager, reply):
        client = ai_manager.question_client
        client.reply_with(reply)
        generator = QuestionGenerator(client, timeout=1)

        questions = await generator.generate_questions(["Docker"])
        assert questions == fallback_questions(["Docker"])
