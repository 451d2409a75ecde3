"""
Interview Module

One interview per (user, job) pair with an ordered set of answer records.
Uniqueness of the interview and of each answer's question is enforced by
table constraints rather than by application checks alone.
"""

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
    func,
    Index,
    UniqueConstraint,
)
from database.engine import Base
from datetime import datetime
from typing import Any


class Interview(Base):
    """A candidate's attempt at a job's question set."""

    __tablename__ = "interviews"

    id: Mapped[int] = mapped_column(primary_key=True, nullable=False, autoincrement=True)
    # Users and jobs are owned by other services; these are plain references
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    job_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    answers: Mapped[list["InterviewAnswer"]] = relationship(
        back_populates="interview",
        cascade="all, delete-orphan",
        order_by="InterviewAnswer.position",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("user_id", "job_id", name="uq_interview_user_job"),
    )

    def find_answer(self, question_id: int) -> "InterviewAnswer | None":
        for answer in self.answers:
            if answer.question_id == question_id:
                return answer
        return None


class InterviewAnswer(Base):
    """Recorded answer data for one question within one interview."""

    __tablename__ = "interview_answers"

    id: Mapped[int] = mapped_column(primary_key=True, nullable=False, autoincrement=True)
    interview_id: Mapped[int] = mapped_column(
        ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False
    )
    question_id: Mapped[int] = mapped_column(Integer, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    number_of_chunks: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    transcription: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Populated by post-processing
    video_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    evaluation: Mapped[dict[str, Any] | None] = mapped_column(
        JSON(none_as_null=True), nullable=True
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    interview: Mapped[Interview] = relationship(back_populates="answers")

    __table_args__ = (
        UniqueConstraint("interview_id", "question_id", name="uq_answer_interview_question"),
        Index("idx_answers_interview_position", "interview_id", "position"),
    )
