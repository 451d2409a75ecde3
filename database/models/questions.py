"""
Question bank.

Questions are immutable once created and carry a set of skill tags used to
match them against a job's required skills. A question with a job_id was
written for that job alone and is not part of the shared bank.
"""

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Text, DateTime, ForeignKey, func, Index, UniqueConstraint
from database.engine import Base
from datetime import datetime


class Question(Base):
    """A shared bank question, or one written for a single job."""

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(primary_key=True, nullable=False, autoincrement=True)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )  # behavioral, technical, situational
    category: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    # NULL for shared bank questions
    job_id: Mapped[int | None] = mapped_column(
        ForeignKey("jobs.id", ondelete="CASCADE"), nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    skills: Mapped[list["QuestionSkill"]] = relationship(
        back_populates="question",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def skill_names(self) -> list[str]:
        return [s.skill for s in self.skills]


class QuestionSkill(Base):
    """Skill tag attached to a question."""

    __tablename__ = "question_skills"

    id: Mapped[int] = mapped_column(primary_key=True, nullable=False, autoincrement=True)
    question_id: Mapped[int] = mapped_column(
        ForeignKey("questions.id", ondelete="CASCADE"), nullable=False
    )
    skill: Mapped[str] = mapped_column(String(100), nullable=False)

    question: Mapped[Question] = relationship(back_populates="skills")

    __table_args__ = (
        UniqueConstraint("question_id", "skill", name="uq_question_skill"),
        Index("idx_question_skills_skill", "skill"),
    )
