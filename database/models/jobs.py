"""
Jobs Module

Job postings as seen by the interview flow: the skills a job requires and an
optional list of job-specific questions that take precedence over the shared
question bank. Job-specific questions are rows of the question table, so a
question id names exactly one question whichever set it came from.
"""

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, JSON, func
from database.engine import Base
from database.models.questions import Question
from datetime import datetime
from typing import Any


class Job(Base):
    """Job posting. Read-only from the interview flow."""

    __tablename__ = "jobs"

    id: Mapped[int] = mapped_column(primary_key=True, nullable=False, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    skills_required: Mapped[list[Any]] = mapped_column(JSON, default=list, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    questions: Mapped[list[Question]] = relationship(
        cascade="all, delete-orphan",
        order_by=Question.id,
        lazy="selectin",
    )
