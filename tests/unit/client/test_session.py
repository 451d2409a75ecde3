"""
Tests for the candidate interview session.

Tests:
- One-shot question fetch and interview creation
- Navigation gated by the recorder timer
- Submission flow
- Degenerate empty question sets
"""

from unittest.mock import AsyncMock, Mock

import pytest

from candidate_client.api import ApiError, InterviewApiClient
from candidate_client.session import InterviewSession

QUESTIONS = [
    {"_id": 1, "question": "First?", "type": "technical"},
    {"_id": 2, "question": "Second?", "type": "behavioral"},
    {"_id": 3, "question": "Third?", "type": "technical"},
]


@pytest.fixture
def api():
    client = Mock(spec=InterviewApiClient)
    client.fetch_questions = AsyncMock(return_value=list(QUESTIONS))
    client.create_interview = AsyncMock(return_value={"_id": 10})
    client.submit_interview = AsyncMock(return_value="Interview submitted successfully")
    return client


@pytest.fixture
def navigate():
    return Mock()


@pytest.fixture
def session(api, navigate):
    return InterviewSession(api, token="tok", navigate=navigate, user_id=4, job_id=7)


class TestLoading:
    """Test question fetch and interview creation."""

    async def test_load_creates_interview_once(self, session, api):
        await session.load_questions()
        await session.load_questions()
        await session.ensure_interview()

        api.fetch_questions.assert_awaited_once_with("tok")
        api.create_interview.assert_awaited_once_with("tok", 4, 7, [1, 2, 3])
        assert session.questions_fetched is True
        assert session.interview_created is True

    async def test_fetch_failure_redirects_to_login(self, session, api, navigate):
        api.fetch_questions.side_effect = ApiError("Unauthorized", status_code=401)

        questions = await session.load_questions()

        assert questions == []
        navigate.assert_called_once_with("/login")
        api.create_interview.assert_not_awaited()

    async def test_creation_waits_for_user(self, api, navigate):
        session = InterviewSession(api, token="tok", navigate=navigate, job_id=7)

        await session.load_questions()
        assert session.interview_created is False

        await session.set_user(4)

        api.create_interview.assert_awaited_once_with("tok", 4, 7, [1, 2, 3])

    async def test_no_job_id_never_persists(self, api, navigate):
        session = InterviewSession(api, token="tok", navigate=navigate, user_id=4)

        await session.load_questions()

        assert session.can_persist is False
        api.create_interview.assert_not_awaited()
        assert session.current_question == QUESTIONS[0]

    async def test_creation_failure_is_logged_only(self, session, api, navigate):
        api.create_interview.side_effect = ApiError("Interview already exists for this user and job", 400)

        await session.load_questions()
        await session.ensure_interview()

        assert session.interview_created is True
        api.create_interview.assert_awaited_once()
        navigate.assert_not_called()


class TestNavigation:
    """Test question navigation."""

    async def test_next_blocked_while_recording(self, session):
        await session.load_questions()

        assert session.timer_active is True
        assert session.primary_action is None
        assert session.next_question() is False
        assert session.current_index == 0

    async def test_next_advances_until_last(self, session):
        await session.load_questions()
        session.on_timer_active_change(False)

        assert session.primary_action == "next"
        assert session.next_question() is True
        assert session.next_question() is True
        assert session.next_question() is False
        assert session.current_index == 2
        assert session.is_last_question is True
        assert session.primary_action == "submit"
        assert session.progress_label == "3/3"

    async def test_current_question_id_follows_index(self, session):
        await session.load_questions()
        session.on_timer_active_change(False)
        session.next_question()

        assert session.current_question_id == 2

    def test_empty_question_set(self, session):
        assert session.progress_label == "1/0"
        assert session.current_question is None
        assert session.current_question_id is None
        assert session.is_last_question is False
        assert session.next_question() is False


class TestSubmission:
    """Test the submit flow."""

    async def finish(self, session):
        await session.load_questions()
        session.on_timer_active_change(False)
        while session.next_question():
            pass

    async def test_submit_only_on_last_question(self, session):
        await session.load_questions()
        session.on_timer_active_change(False)

        assert session.request_submit() is False
        assert session.submit_modal_open is False

    async def test_confirmed_submit_navigates(self, session, api, navigate):
        await self.finish(session)

        assert session.request_submit() is True
        assert session.submit_modal_open is True
        assert await session.confirm_submit() is True

        api.submit_interview.assert_awaited_once_with("tok", 4, 7)
        navigate.assert_called_once_with("/thank-you")
        assert session.submit_modal_open is False

    async def test_cancel_submit(self, session, api):
        await self.finish(session)
        session.request_submit()

        session.cancel_submit()

        assert session.submit_modal_open is False
        api.submit_interview.assert_not_awaited()

    async def test_submit_failure_stays_on_page(self, session, api, navigate):
        api.submit_interview.side_effect = ApiError("No interview found!", 400)
        await self.finish(session)
        session.request_submit()

        assert await session.confirm_submit() is False
        navigate.assert_not_called()


class TestAttentionLifecycle:
    """Test that the session drives the attention policy."""

    async def test_start_and_close(self, api, navigate):
        attention = Mock()
        attention.stop = AsyncMock()
        session = InterviewSession(api, token="tok", navigate=navigate, attention=attention)

        session.start()
        await session.close()

        attention.start.assert_called_once()
        attention.stop.assert_awaited_once()

    async def test_without_policy(self, session):
        session.start()
        await session.close()
