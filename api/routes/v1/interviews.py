"""
Interview lifecycle endpoints.

Provides REST API for creating an interview, recording per-question
progress, and submitting it for processing.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_authenticated_user
from api.schemas.interviews import (
    CreateInterviewRequest,
    CreateInterviewResponse,
    InterviewCountResponse,
    InterviewResponse,
    MessageResponse,
    SaveChunksRequest,
    SubmitInterviewRequest,
    UpdateAnswerRequest,
)
from api.services import interviews as interview_service
from api.services.errors import (
    AnswerAlreadyExistsError,
    InterviewAlreadyExistsError,
    InterviewNotFoundError,
    QuestionNotFoundError,
)
from api.services.post_processing import schedule_post_processing
from core.config import settings
from core.security import AuthenticatedUser
from database.engine import get_db

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/interview",
    tags=["Interviews"],
    dependencies=[Depends(require_authenticated_user)],
)


def _server_error(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.post(
    "",
    response_model=CreateInterviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Interview",
    description="Create the interview for a user and job with one answer slot per question.",
)
async def create_interview(
    request: CreateInterviewRequest,
    db: AsyncSession = Depends(get_db),
) -> CreateInterviewResponse:
    """Create an interview; a (user, job) pair can only have one."""
    try:
        interview = await interview_service.create_interview(
            db, request.user_id, request.job_id, request.question_ids
        )
    except InterviewAlreadyExistsError as e:
        logger.warning(f"Duplicate interview for user {request.user_id} job {request.job_id}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except SQLAlchemyError:
        logger.error("Error creating interview", exc_info=True)
        raise _server_error("Error creating interview")

    return CreateInterviewResponse(
        message="Interview created successfully",
        interview=InterviewResponse.model_validate(interview),
    )


@router.post(
    "/chunks",
    response_model=MessageResponse,
    summary="Save Chunk Count",
    description="Record the number of uploaded media chunks for one question.",
)
async def save_chunk_number(
    request: SaveChunksRequest,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Update the chunk count of a question's answer record."""
    try:
        await interview_service.save_chunk_count(
            db,
            request.user_id,
            request.job_id,
            request.question_id,
            request.number_of_chunks,
        )
    except InterviewNotFoundError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No Interview Exists!")
    except QuestionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Question doesn't exist in the interview!",
        )
    except SQLAlchemyError:
        logger.error("Error saving number of chunks", exc_info=True)
        raise _server_error("Error saving number of chunks")

    return MessageResponse(message="Number of chunks saved successfully!")


@router.post(
    "/answer",
    response_model=MessageResponse,
    summary="Update Answer",
    description="Store the transcription of one answer. A transcription cannot be replaced.",
)
async def update_answer(
    request: UpdateAnswerRequest,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Set a question's transcription once."""
    try:
        await interview_service.update_answer(
            db,
            request.user_id,
            request.job_id,
            request.question_id,
            request.transcription,
        )
    except (InterviewNotFoundError, QuestionNotFoundError) as e:
        logger.warning(f"Error updating answer: {e.message}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except AnswerAlreadyExistsError:
        logger.warning(
            f"Answer already exists for user {request.user_id} "
            f"job {request.job_id} question {request.question_id}"
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Answer already exists and cannot be updated.",
        )
    except SQLAlchemyError:
        logger.error("Error updating answer", exc_info=True)
        raise _server_error("Failed to update answer. Please try again.")

    return MessageResponse(message="Answer updated successfully.")


@router.post(
    "/submit",
    response_model=MessageResponse,
    summary="Submit Interview",
    description="Mark the interview completed and, when enabled, schedule post-processing.",
)
async def submit_interview(
    request: SubmitInterviewRequest,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Complete an interview."""
    try:
        await interview_service.submit_interview(db, request.user_id, request.job_id)
    except InterviewNotFoundError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No interview found!")
    except SQLAlchemyError:
        logger.error("Error in interview submission", exc_info=True)
        raise _server_error("Internal server error")

    if settings.post_processing_enabled:
        # Publishing to the broker blocks; keep it off the event loop
        await asyncio.to_thread(schedule_post_processing, request.user_id, request.job_id)

    return MessageResponse(message="Interview submitted successfully")


@router.get(
    "/count",
    response_model=InterviewCountResponse,
    summary="Count Interviews",
    description="Number of interviews taken by the authenticated user.",
)
async def get_current_count_of_interviews(
    current_user: AuthenticatedUser = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
) -> InterviewCountResponse:
    try:
        count = await interview_service.count_interviews(db, current_user.id)
    except SQLAlchemyError:
        logger.error(f"Failed to count interviews for user {current_user.id}", exc_info=True)
        raise _server_error("Failed to get the count data. Please try again")

    return InterviewCountResponse(count=count)
