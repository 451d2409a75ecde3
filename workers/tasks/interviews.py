"""Interview post-processing tasks."""

import asyncio
import logging

from celery import Task

from api.services.post_processing import run_post_processing
from database.engine import standalone_session_factory
from workers.celery_app import celery_app

logger = logging.getLogger(__name__)


async def _process(user_id: int, job_id: int) -> dict:
    async with standalone_session_factory() as session_factory:
        return await run_post_processing(user_id, job_id, session_factory=session_factory)


@celery_app.task(name="workers.tasks.interviews.process_interview", bind=True)
def process_interview(self: Task, user_id: int, job_id: int) -> dict:
    """Process videos and evaluate transcriptions for a submitted interview.

    Args:
        user_id: Candidate user ID
        job_id: Job ID

    Returns:
        Summary with the counts of processed videos and evaluations
    """
    logger.info(
        f"Task {self.request.id}: post-processing user {user_id} job {job_id}",
        extra={"task_id": self.request.id},
    )
    # Failures propagate so the task is recorded as failed; no retries here
    return asyncio.run(_process(user_id, job_id))
