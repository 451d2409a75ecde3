"""Candidate-side interview session."""

import logging
from typing import Any, Callable, Dict, List, Optional

from candidate_client.api import ApiError, InterviewApiClient
from candidate_client.attention import AttentionPolicy

logger = logging.getLogger(__name__)

LOGIN_VIEW = "/login"
THANK_YOU_VIEW = "/thank-you"

Navigate = Callable[[str], None]


class InterviewSession:
    """
    Walks a candidate through a question set.

    One instance lives for one visit to the interview page. The questions
    are fetched once and the server interview is created once; both one-shot
    guards live on the instance as ``questions_fetched`` and
    ``interview_created``. Without a job id the session still runs but is
    never persisted.
    """

    def __init__(
        self,
        api: InterviewApiClient,
        token: str,
        navigate: Navigate,
        user_id: Optional[int] = None,
        job_id: Optional[int] = None,
        attention: Optional[AttentionPolicy] = None,
    ):
        self.api = api
        self.token = token
        self.navigate = navigate
        self.user_id = user_id
        self.job_id = job_id
        self.attention = attention

        self.questions: List[Dict[str, Any]] = []
        self.questions_fetched = False
        self.interview_created = False
        self.current_index = 0
        # The recorder starts its countdown as soon as the page opens
        self.timer_active = True
        self.submit_modal_open = False

    @property
    def can_persist(self) -> bool:
        return self.job_id is not None

    @property
    def current_question(self) -> Optional[Dict[str, Any]]:
        if self.current_index < len(self.questions):
            return self.questions[self.current_index]
        return None

    @property
    def current_question_id(self) -> Optional[int]:
        """Question the recorder should tag its chunks with."""
        question = self.current_question
        return question["_id"] if question else None

    @property
    def is_last_question(self) -> bool:
        return self.current_index == len(self.questions) - 1

    @property
    def progress_label(self) -> str:
        return f"{self.current_index + 1}/{len(self.questions)}"

    @property
    def primary_action(self) -> Optional[str]:
        """``"next"`` or ``"submit"``; None while the recorder timer runs."""
        if self.timer_active:
            return None
        return "submit" if self.is_last_question else "next"

    def start(self) -> None:
        if self.attention is not None:
            self.attention.start()

    async def close(self) -> None:
        if self.attention is not None:
            await self.attention.stop()

    async def load_questions(self) -> List[Dict[str, Any]]:
        """Fetch the question set once; send the candidate to login on failure."""
        if self.questions_fetched:
            return self.questions
        self.questions_fetched = True

        try:
            self.questions = await self.api.fetch_questions(self.token)
        except ApiError as e:
            logger.error(f"Error fetching questions: {e.message}")
            self.navigate(LOGIN_VIEW)
            return self.questions

        await self.ensure_interview()
        return self.questions

    async def set_user(self, user_id: int) -> None:
        """Record the user id once the auth context has loaded it."""
        self.user_id = user_id
        await self.ensure_interview()

    async def ensure_interview(self) -> bool:
        """
        Create the server-side interview once everything it needs is known.

        Returns:
            True if creation was attempted by this call
        """
        if self.interview_created:
            return False
        if not (self.token and self.user_id is not None and self.can_persist and self.questions):
            return False

        self.interview_created = True
        question_ids = [question["_id"] for question in self.questions]
        try:
            await self.api.create_interview(self.token, self.user_id, self.job_id, question_ids)
        except ApiError as e:
            logger.error(f"Error creating interview: {e.message}")
        return True

    def on_timer_active_change(self, active: bool) -> None:
        self.timer_active = active

    def next_question(self) -> bool:
        """Advance to the next question unless recording or on the last one."""
        if self.timer_active or self.current_index >= len(self.questions) - 1:
            return False
        self.current_index += 1
        return True

    def request_submit(self) -> bool:
        """Open the confirmation modal; only offered on the last question."""
        if self.primary_action != "submit":
            return False
        self.submit_modal_open = True
        return True

    def cancel_submit(self) -> None:
        self.submit_modal_open = False

    async def confirm_submit(self) -> bool:
        """Submit the interview and move to the thank-you view."""
        self.submit_modal_open = False
        try:
            await self.api.submit_interview(self.token, self.user_id, self.job_id)
        except ApiError as e:
            logger.error(f"Error submitting interview: {e.message}")
            return False

        self.navigate(THANK_YOU_VIEW)
        return True
