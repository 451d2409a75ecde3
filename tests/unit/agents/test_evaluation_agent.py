"""Tests for the transcription evaluation agent."""

from unittest.mock import AsyncMock, Mock

import pytest

from agents.common.utils import parse_json_response
from agents.evaluation.agent import EvaluationError, TranscriptionEvaluationAgent


def fake_client(text):
    client = Mock()
    client.aio.models.generate_content = AsyncMock(return_value=Mock(text=text))
    return client


ANSWER = {
    "question": "Tell me about a conflict.",
    "question_type": "behavioral",
    "transcription": "We disagreed on the schema and I set up a review.",
}


class TestTranscriptionEvaluationAgent:
    """Test answer evaluation."""

    async def test_evaluates_answer(self):
        client = fake_client(
            '{"score": 7, "summary": "Clear", "strengths": ["ownership"], "improvements": ["metrics"]}'
        )
        agent = TranscriptionEvaluationAgent(client=client, model="gemini-test")

        result = await agent.process(ANSWER)

        assert result == {
            "score": 7,
            "summary": "Clear",
            "strengths": ["ownership"],
            "improvements": ["metrics"],
            "model": "gemini-test",
        }
        call = client.aio.models.generate_content.await_args
        assert call.kwargs["model"] == "gemini-test"
        assert "Tell me about a conflict." in call.kwargs["contents"]
        assert "(behavioral)" in call.kwargs["contents"]
        assert call.kwargs["config"].response_mime_type == "application/json"

    @pytest.mark.parametrize("raw,expected", [("15", 10), ("-3", 0), ("6", 6)])
    async def test_score_clamped(self, raw, expected):
        agent = TranscriptionEvaluationAgent(client=fake_client(f'{{"score": {raw}}}'))

        result = await agent.process(ANSWER)

        assert result["score"] == expected
        assert result["strengths"] == []

    async def test_unusable_response(self):
        agent = TranscriptionEvaluationAgent(client=fake_client("I cannot help with that"))

        with pytest.raises(EvaluationError):
            await agent.process(ANSWER)

    async def test_invalid_score(self):
        agent = TranscriptionEvaluationAgent(client=fake_client('{"score": "great"}'))

        with pytest.raises(EvaluationError):
            await agent.process(ANSWER)

    async def test_missing_api_key(self, monkeypatch):
        from core.config import settings

        monkeypatch.setattr(settings, "google_api_key", None)
        agent = TranscriptionEvaluationAgent()

        with pytest.raises(RuntimeError):
            await agent.process(ANSWER)


class TestParseJsonResponse:
    """Test JSON extraction from model output."""

    def test_bare_json(self):
        assert parse_json_response('{"score": 3}') == {"score": 3}

    def test_code_fence(self):
        assert parse_json_response('```json\n{"score": 3}\n```') == {"score": 3}

    def test_surrounding_text(self):
        assert parse_json_response('Here you go: {"score": 3} thanks') == {"score": 3}

    @pytest.mark.parametrize("text", ["", "no json here", "[1, 2]", None])
    def test_unparseable(self, text):
        assert parse_json_response(text) is None
