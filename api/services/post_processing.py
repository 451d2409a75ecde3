"""Post-submission processing of an interview.

After a submission the candidate's browser may still be uploading the last
media chunks, so processing is scheduled with a delay on the Celery worker.
Videos are assembled first; transcriptions are evaluated afterwards. Nothing
here retries: the media and model services own their retry policies.
"""

import logging
from typing import Any, Callable, Dict, Optional

from kombu.exceptions import OperationalError as BrokerError
from sqlalchemy.ext.asyncio import AsyncSession

from agents.evaluation.agent import TranscriptionEvaluationAgent
from api.services.errors import InterviewNotFoundError
from api.services.interviews import find_interview
from core.config import settings
from core.integrations.media import VideoProcessingService
from database.models.interviews import Interview
from database.models.questions import Question

logger = logging.getLogger(__name__)


class PostProcessingError(Exception):
    """Raised when any stage of post-processing fails."""


def schedule_post_processing(
    user_id: int,
    job_id: int,
    delay_seconds: Optional[int] = None,
) -> Optional[str]:
    """
    Enqueue post-processing for an interview, fire-and-forget.

    Returns:
        Celery task ID, or None when the broker could not be reached
    """
    from workers.tasks.interviews import process_interview

    countdown = settings.post_processing_delay_seconds if delay_seconds is None else delay_seconds
    try:
        result = process_interview.apply_async(
            kwargs={"user_id": user_id, "job_id": job_id},
            countdown=countdown,
        )
    except (BrokerError, OSError) as e:
        logger.error(f"Could not schedule post-processing for user {user_id} job {job_id}: {e}")
        return None

    logger.info(
        f"Scheduled post-processing for user {user_id} job {job_id} "
        f"in {countdown}s (task {result.id})"
    )
    return result.id


async def _question_context(db: AsyncSession, question_id: int) -> Optional[Dict[str, Any]]:
    """Question text for an answer, whether from the bank or the job's own set."""
    question = await db.get(Question, question_id)
    if question is None:
        return None
    return {"question": question.question, "question_type": question.type}


async def process_videos(
    db: AsyncSession,
    interview: Interview,
    media: VideoProcessingService,
) -> int:
    """Assemble the recording of every question. Returns the number processed."""
    processed = 0
    for answer in interview.answers:
        result = await media.process_video(
            user_id=interview.user_id,
            job_id=interview.job_id,
            question_id=answer.question_id,
            number_of_chunks=answer.number_of_chunks,
        )
        if result.get("video_url"):
            answer.video_url = result["video_url"]
        processed += 1
    await db.commit()
    return processed


async def evaluate_transcriptions(
    db: AsyncSession,
    interview: Interview,
    evaluator: TranscriptionEvaluationAgent,
) -> int:
    """Evaluate every transcribed answer. Returns the number evaluated."""
    evaluated = 0
    for answer in interview.answers:
        if not answer.transcription:
            logger.info(
                f"Interview {interview.id} question {answer.question_id} has no transcription"
            )
            continue

        context = await _question_context(db, answer.question_id)
        if context is None:
            logger.warning(
                f"Interview {interview.id} references unknown question {answer.question_id}"
            )
            continue

        answer.evaluation = await evaluator.process(
            {**context, "transcription": answer.transcription}
        )
        await db.commit()
        evaluated += 1
    return evaluated


async def run_post_processing(
    user_id: int,
    job_id: int,
    session_factory: Callable[[], AsyncSession],
    media: Optional[VideoProcessingService] = None,
    evaluator: Optional[TranscriptionEvaluationAgent] = None,
) -> Dict[str, Any]:
    """
    Process videos, then evaluate transcriptions, for one interview.

    Raises:
        PostProcessingError: If the interview is missing or any stage fails
    """
    media = media or VideoProcessingService()
    evaluator = evaluator or TranscriptionEvaluationAgent()

    logger.info(f"Starting post-processing for user {user_id} and job {job_id}")
    try:
        async with session_factory() as db:
            interview = await find_interview(db, user_id, job_id)
            if interview is None:
                raise InterviewNotFoundError()

            logger.info(f"Processing videos for interview {interview.id}")
            videos = await process_videos(db, interview, media)

            logger.info(f"Evaluating transcriptions for interview {interview.id}")
            evaluations = await evaluate_transcriptions(db, interview, evaluator)
    except Exception as e:
        logger.error(
            f"Post-processing failed for user {user_id} and job {job_id}: {e}",
            exc_info=True,
        )
        raise PostProcessingError(f"Post-processing failed: {e}") from e

    logger.info(f"Post-processing completed for interview {interview.id}")
    return {
        "status": "success",
        "interview_id": interview.id,
        "videos_processed": videos,
        "transcriptions_evaluated": evaluations,
    }
