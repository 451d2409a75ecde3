"""Interview lifecycle service functions.

Every operation locates the interview by (user, job) and works on the
answer record for one question. Uniqueness is backed by table constraints:
the read-before-write checks only exist to return a precise error, and the
constraint or the conditional update decides when two requests race.
"""

from datetime import datetime, timezone
import logging
from typing import Iterable, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.services.errors import (
    AnswerAlreadyExistsError,
    InterviewAlreadyExistsError,
    InterviewNotFoundError,
    QuestionNotFoundError,
)
from database.models.interviews import Interview, InterviewAnswer

logger = logging.getLogger(__name__)


async def find_interview(
    db: AsyncSession,
    user_id: int,
    job_id: int,
    reload: bool = False,
) -> Optional[Interview]:
    """Get the interview for a (user, job) pair, with its answers."""
    query = select(Interview).where(
        Interview.user_id == user_id,
        Interview.job_id == job_id,
    )
    if reload:
        query = query.execution_options(populate_existing=True)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def _require_interview(db: AsyncSession, user_id: int, job_id: int) -> Interview:
    interview = await find_interview(db, user_id, job_id)
    if interview is None:
        raise InterviewNotFoundError()
    return interview


def build_answer_records(question_ids: Iterable[int]) -> list[InterviewAnswer]:
    """One empty answer record per distinct question, in the given order."""
    return [
        InterviewAnswer(
            question_id=question_id,
            position=position,
            number_of_chunks=0,
            transcription=None,
            video_url=None,
            evaluation=None,
        )
        for position, question_id in enumerate(dict.fromkeys(question_ids))
    ]


async def create_interview(
    db: AsyncSession,
    user_id: int,
    job_id: int,
    question_ids: Iterable[int],
) -> Interview:
    """
    Create the interview for a (user, job) pair.

    Raises:
        InterviewAlreadyExistsError: If the pair already has an interview
    """
    if await find_interview(db, user_id, job_id) is not None:
        raise InterviewAlreadyExistsError()

    interview = Interview(
        user_id=user_id,
        job_id=job_id,
        is_completed=False,
        completed_at=None,
        answers=build_answer_records(question_ids),
    )
    db.add(interview)

    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent create for the same pair
        await db.rollback()
        raise InterviewAlreadyExistsError()

    logger.info(
        f"Created interview {interview.id} for user {user_id} and job {job_id} "
        f"with {len(interview.answers)} questions"
    )
    return await find_interview(db, user_id, job_id, reload=True)


async def save_chunk_count(
    db: AsyncSession,
    user_id: int,
    job_id: int,
    question_id: int,
    number_of_chunks: int,
) -> InterviewAnswer:
    """
    Record the number of media chunks uploaded for one question.

    Raises:
        InterviewNotFoundError: If no interview exists for the pair
        QuestionNotFoundError: If the question is not part of the interview
    """
    interview = await _require_interview(db, user_id, job_id)

    answer = interview.find_answer(question_id)
    if answer is None:
        raise QuestionNotFoundError()

    answer.number_of_chunks = number_of_chunks
    await db.commit()

    logger.debug(
        f"Interview {interview.id} question {question_id}: {number_of_chunks} chunks"
    )
    return answer


async def update_answer(
    db: AsyncSession,
    user_id: int,
    job_id: int,
    question_id: int,
    transcription: str,
) -> None:
    """
    Set the transcription for one question. A transcription is written once.

    Raises:
        InterviewNotFoundError: If no interview exists for the pair
        QuestionNotFoundError: If the question is not part of the interview
        AnswerAlreadyExistsError: If the question already has a transcription
    """
    interview = await _require_interview(db, user_id, job_id)

    answer = interview.find_answer(question_id)
    if answer is None:
        raise QuestionNotFoundError()

    if answer.transcription is not None:
        raise AnswerAlreadyExistsError()

    result = await db.execute(
        update(InterviewAnswer)
        .where(
            InterviewAnswer.id == answer.id,
            InterviewAnswer.transcription.is_(None),
        )
        .values(transcription=transcription)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise AnswerAlreadyExistsError()

    await db.commit()
    logger.info(f"Stored transcription for interview {interview.id} question {question_id}")


async def submit_interview(db: AsyncSession, user_id: int, job_id: int) -> Interview:
    """
    Mark an interview completed. Submitting again keeps it completed.

    Raises:
        InterviewNotFoundError: If no interview exists for the pair
    """
    interview = await _require_interview(db, user_id, job_id)

    if not interview.is_completed:
        interview.completed_at = datetime.now(timezone.utc)
    interview.is_completed = True

    await db.commit()
    logger.info(f"Interview {interview.id} submitted by user {user_id}")
    return interview


async def count_interviews(db: AsyncSession, user_id: int) -> int:
    """Number of interviews owned by a user."""
    result = await db.execute(
        select(func.count(Interview.id)).where(Interview.user_id == user_id)
    )
    return result.scalar() or 0
