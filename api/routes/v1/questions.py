"""Question selection endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_authenticated_user
from api.schemas.interviews import (
    QuestionsBySkillsRequest,
    RandomQuestionsResponse,
    SelectedQuestion,
)
from api.services import questions as question_service
from api.services.errors import JobNotFoundError
from core.config import settings
from database.engine import get_db

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/questions",
    tags=["Questions"],
    dependencies=[Depends(require_authenticated_user)],
)

FETCH_ERROR = "Error fetching questions"


@router.get(
    "",
    response_model=RandomQuestionsResponse,
    summary="Get random question set",
    description="Sample a random set of questions from the question bank",
)
async def get_questions(db: AsyncSession = Depends(get_db)) -> RandomQuestionsResponse:
    """Return ``NUMBER_OF_QUESTIONS_IN_INTERVIEW`` random questions (default 3)."""
    try:
        questions = await question_service.get_random_questions(
            db, settings.random_question_count
        )
    except SQLAlchemyError:
        logger.error("Failed to sample random questions", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=FETCH_ERROR)

    return RandomQuestionsResponse(questions=questions)


@router.post(
    "/by-skills",
    response_model=List[SelectedQuestion],
    summary="Get questions for a job",
    description="Job-specific questions when present, otherwise bank questions matching the job's skills",
)
async def get_questions_by_skills(
    request: QuestionsBySkillsRequest,
    db: AsyncSession = Depends(get_db),
) -> List[SelectedQuestion]:
    """Return up to ``NUMBER_OF_QUESTIONS_IN_INTERVIEW`` questions (default 5)."""
    try:
        return await question_service.get_questions_by_skills(
            db, request.job_id, settings.skill_question_count
        )
    except JobNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except SQLAlchemyError:
        logger.error(f"Failed to select questions for job {request.job_id}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=FETCH_ERROR)
