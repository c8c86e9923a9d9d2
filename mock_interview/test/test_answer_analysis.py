"""
Test Answer Analysis Module

Tests AI answer scoring and the keyword-coverage fallback behind it.

Dependencies:
- pytest, pytest-asyncio: For testing framework
- mock_interview.services.ai.answer_analysis: The module being tested
"""

import json
import pytest
from mock_interview.errors.exceptions import AIServiceError
from mock_interview.schemas.interview import QuestionSchema
from mock_interview.schemas.scoring import Difficulty
from mock_interview.services.ai.answer_analysis import AnswerAnalyzer, build_score_result, SOURCE_AI, SOURCE_FALLBACK

QUESTION = QuestionSchema(
    text="Explain what React is and its main use cases.",
    difficulty=Difficulty.MEDIUM,
    ideal_answer="React is a library for building user interfaces.",
    key_points=["Components", "Virtual DOM", "Single page applications"],
    category="React"
)

ANSWER = "React is built around components and renders through a virtual DOM."


class TestBuildScoreResult:
    def test_clamps_and_rounds(self):
        result = build_score_result({"score": 142.5, "coverage": -3, "feedback": "Great"})
        assert result.score == 100
        assert result.coverage == 0
        assert result.feedback == "Great"

    def test_defaults_for_missing_fields(self):
        result = build_score_result({"score": "not a number", "pointsCovered": "Components"})
        assert result.score == 0
        assert result.feedback == "No specific feedback available."
        assert result.points_covered == []
        assert result.points_missed == []

    def test_half_scores_round_up(self):
        assert build_score_result({"score": 72.5}).score == 73

    def test_points_are_reconciled_with_key_points(self):
        """Test that invented points are dropped and unnamed key points are missed."""
        result = build_score_result(
            {"score": 60, "pointsCovered": ["invented point", "virtual dom "], "pointsMissed": []},
            ["Components", "Virtual DOM", "Single page applications"]
        )
        assert result.points_covered == ["Virtual DOM"]
        assert result.points_missed == ["Components", "Single page applications"]


class TestAnswerAnalyzer:
    @pytest.mark.asyncio
    async def test_analyze_response(self, ai_manager):
        client = ai_manager.analysis_client
        client.reply_with(json.dumps({
            "score": 82,
            "feedback": "Clear and accurate; mention SPAs.",
            "pointsCovered": ["Components", "Virtual DOM"],
            "pointsMissed": ["Single page applications"],
            "coverage": 66.7
        }))
        analyzer = AnswerAnalyzer(client, model="test-model", timeout=1)

        result = await analyzer.analyze_response(ANSWER, QUESTION)

        assert result.score == 82
        assert result.points_missed == ["Single page applications"]
        assert result.coverage == 66.7
        call = client.completions.calls[0]
        assert call["temperature"] == 0.3
        assert ANSWER in call["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_analyze_response_recovers_broken_json(self, ai_manager):
        client = ai_manager.analysis_client
        client.reply_with('Sure! "score": 55, "feedback": "Decent", "pointsCovered": ["Components"], "coverage": 33')
        analyzer = AnswerAnalyzer(client, timeout=1)

        result = await analyzer.analyze_response(ANSWER, QUESTION)
        assert result.score == 55
        assert result.points_covered == ["Components"]

    @pytest.mark.asyncio
    async def test_analyze_response_raises_when_unparseable(self, ai_manager):
        client = ai_manager.analysis_client
        client.reply_with("I think this answer is fine.")
        analyzer = AnswerAnalyzer(client, timeout=1)

        with pytest.raises(AIServiceError):
            await analyzer.analyze_response(ANSWER, QUESTION)

    @pytest.mark.asyncio
    async def test_analyze_response_raises_when_unreachable(self, ai_manager):
        analyzer = AnswerAnalyzer(ai_manager.analysis_client, timeout=1)

        with pytest.raises(AIServiceError):
            await analyzer.analyze_response(ANSWER, QUESTION)

    @pytest.mark.asyncio
    async def test_score_answer_prefers_ai(self, ai_manager):
        client = ai_manager.analysis_client
        client.reply_with('{"score": 90, "feedback": "Excellent", "pointsCovered": [], "pointsMissed": [], "coverage": 100}')
        analyzer = AnswerAnalyzer(client, timeout=1)

        result, source = await analyzer.score_answer(ANSWER, QUESTION)
        assert source == SOURCE_AI
        assert result.score == 90

    @pytest.mark.asyncio
    async def test_score_answer_falls_back_to_keyword_coverage(self, ai_manager):
        client = ai_manager.analysis_client
        client.reply_with(TimeoutError("model is loading"))
        analyzer = AnswerAnalyzer(client, timeout=1)

        result, source = await analyzer.score_answer(ANSWER, QUESTION)

        assert source == SOURCE_FALLBACK
        assert result.points_covered == ["Components", "Virtual DOM"]
        assert result.points_missed == ["Single page applications"]
        assert result.score == 47
        assert result.feedback == "You've covered 67% of the key points."

    @pytest.mark.asyncio
    async def test_empty_answer_falls_back(self, ai_manager):
        client = ai_manager.analysis_client
        client.reply_with('{"score": 90}')
        analyzer = AnswerAnalyzer(client, timeout=1)

        result, source = await analyzer.score_answer("   ", QUESTION)
        assert source == SOURCE_FALLBACK
        assert result.score == 0
        # The prompt is never built for an empty answer, so the AI is not called
        assert client.completions.calls == []

    @pytest.mark.asyncio
    async def test_ai_points_partition_the_key_points(self, ai_manager):
        """Test that points the model invents never reach the stored result."""
        client = ai_manager.analysis_client
        client.reply_with(json.dumps({
            "score": 75,
            "feedback": "Good start.",
            "pointsCovered": ["invented point", "components"],
            "pointsMissed": [],
            "coverage": 100
        }))
        analyzer = AnswerAnalyzer(client, timeout=1)

        result, source = await analyzer.score_answer(ANSWER, QUESTION)

        assert source == SOURCE_AI
        assert result.points_covered == ["Components"]
        assert result.points_missed == ["Virtual DOM", "Single page applications"]
        assert sorted(result.points_covered + result.points_missed) == sorted(QUESTION.key_points)
