"""Question selection service functions."""

import logging
import random
from typing import List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.interviews import QuestionResponse, SelectedQuestion
from api.services.errors import JobNotFoundError
from database.models.jobs import Job
from database.models.questions import Question, QuestionSkill

logger = logging.getLogger(__name__)


async def get_random_questions(db: AsyncSession, size: int) -> List[QuestionResponse]:
    """Sample ``size`` questions uniformly from the shared bank."""
    result = await db.execute(
        select(Question)
        .where(Question.job_id.is_(None))
        .order_by(func.random())
        .limit(size)
    )
    questions = result.scalars().all()

    return [
        QuestionResponse(
            id=q.id,
            question=q.question,
            type=q.type,
            category=q.category,
            skills=q.skill_names,
        )
        for q in questions
    ]


async def get_questions_by_skills(
    db: AsyncSession,
    job_id: int,
    size: int,
    rng: Optional[random.Random] = None,
) -> List[SelectedQuestion]:
    """
    Select questions for a job.

    Job-specific questions win when the job has any; otherwise questions
    whose skill tags intersect the job's required skills are sampled from
    the bank.

    Args:
        db: Database session
        job_id: Job to select questions for
        size: Maximum number of questions returned
        rng: Random source for sampling job-specific questions

    Raises:
        JobNotFoundError: If the job does not exist
    """
    job = await db.get(Job, job_id)
    if job is None:
        raise JobNotFoundError()

    if job.questions:
        picked = (rng or random).sample(list(job.questions), min(size, len(job.questions)))
        return [
            SelectedQuestion(id=q.id, type=q.type, question=q.question, category=q.category)
            for q in picked
        ]

    skills: Sequence[str] = job.skills_required or []
    if not skills:
        logger.info(f"Job {job_id} has no required skills; no questions selected")
        return []

    matching_ids = select(QuestionSkill.question_id).where(QuestionSkill.skill.in_(skills))
    result = await db.execute(
        select(Question)
        .where(Question.job_id.is_(None), Question.id.in_(matching_ids))
        .order_by(func.random())
        .limit(size)
    )

    return [
        SelectedQuestion(id=q.id, type=q.type, question=q.question, category=q.category)
        for q in result.scalars().all()
    ]
