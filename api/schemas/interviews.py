"""Interview and question API schemas.

Request field names follow the wire format the candidate client already
speaks (``userID``, ``jobId``, ``user_id`` ...); every model also accepts the
snake_case field name.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class APIModel(BaseModel):
    """Base model accepting both aliases and field names."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# ==================== Questions ==================== #

class QuestionResponse(APIModel):
    """A question from the shared bank."""

    id: int = Field(..., alias="_id")
    question: str
    type: Optional[str] = None
    category: Optional[str] = None
    skills: list[str] = Field(default_factory=list)


class RandomQuestionsResponse(APIModel):
    """Random question set."""

    questions: list[QuestionResponse] = Field(default_factory=list, alias="Questions")


class QuestionsBySkillsRequest(APIModel):
    """Request for a job-specific question set."""

    job_id: int = Field(..., alias="jobId", description="Job whose questions or skills drive selection")


class SelectedQuestion(APIModel):
    """Question selected for a job, either job-specific or from the bank."""

    id: int = Field(..., alias="_id")
    type: Optional[str] = None
    question: str
    category: Optional[str] = None


# ==================== Interviews ==================== #

class CreateInterviewRequest(APIModel):
    """Create the interview record for a (user, job) pair."""

    user_id: int = Field(..., description="Candidate user ID")
    job_id: int = Field(..., description="Job ID")
    question_ids: list[int] = Field(default_factory=list, description="Ordered question IDs")


class SaveChunksRequest(APIModel):
    """Record how many media chunks were uploaded for one question."""

    user_id: int = Field(..., alias="userID")
    job_id: int = Field(..., alias="jobID")
    question_id: int = Field(..., alias="questionID")
    number_of_chunks: int = Field(..., ge=0, alias="numberOfChunks")


class UpdateAnswerRequest(APIModel):
    """Set the transcription for one question."""

    user_id: int
    job_id: int
    question_id: int
    # May be empty when the recording was silent
    transcription: str


class SubmitInterviewRequest(APIModel):
    """Mark an interview as completed."""

    user_id: int = Field(..., alias="userId")
    job_id: int = Field(..., alias="jobId")


class AnswerResponse(APIModel):
    """Answer record embedded in an interview."""

    question_id: int
    number_of_chunks: int = 0
    transcription: Optional[str] = None
    video_url: Optional[str] = None
    evaluation: Optional[dict[str, Any]] = None


class InterviewResponse(APIModel):
    """Interview with its ordered answer records."""

    id: int = Field(..., alias="_id")
    user_id: int
    job_id: int
    is_completed: bool = Field(..., alias="isCompleted")
    completed_at: Optional[datetime] = None
    answers: list[AnswerResponse] = Field(default_factory=list)


class CreateInterviewResponse(APIModel):
    message: str
    interview: InterviewResponse


class MessageResponse(APIModel):
    message: str


class InterviewCountResponse(APIModel):
    count: int = Field(..., ge=0)
