"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from core.config import Settings


class TestQuestionCounts:
    """Test the sample sizes of the two question endpoints."""

    def test_defaults_differ_per_endpoint(self, monkeypatch):
        monkeypatch.delenv("NUMBER_OF_QUESTIONS_IN_INTERVIEW", raising=False)
        settings = Settings(_env_file=None)

        assert settings.random_question_count == 3
        assert settings.skill_question_count == 5

    def test_override_applies_to_both(self, monkeypatch):
        monkeypatch.setenv("NUMBER_OF_QUESTIONS_IN_INTERVIEW", "4")
        settings = Settings(_env_file=None)

        assert settings.random_question_count == 4
        assert settings.skill_question_count == 4

    def test_non_positive_override_rejected(self, monkeypatch):
        monkeypatch.setenv("NUMBER_OF_QUESTIONS_IN_INTERVIEW", "0")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestDefaults:
    """Test feature defaults."""

    def test_post_processing_disabled(self, monkeypatch):
        monkeypatch.delenv("POST_PROCESSING_ENABLED", raising=False)
        settings = Settings(_env_file=None)

        assert settings.post_processing_enabled is False
        assert settings.post_processing_delay_seconds == 30
        assert settings.max_attempts == 5

    def test_jwt_secret_required(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET_KEY", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)
