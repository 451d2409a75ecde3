"""
API Services Layer.

Direct database operations for the question and interview endpoints,
plus the post-submission processing pipeline.
"""

from api.services.errors import (
    InterviewServiceError,
    JobNotFoundError,
    InterviewAlreadyExistsError,
    InterviewNotFoundError,
    QuestionNotFoundError,
    AnswerAlreadyExistsError,
)

from api.services.questions import (
    get_random_questions,
    get_questions_by_skills,
)

from api.services.interviews import (
    find_interview,
    create_interview,
    save_chunk_count,
    update_answer,
    submit_interview,
    count_interviews,
)

from api.services.post_processing import (
    PostProcessingError,
    schedule_post_processing,
    run_post_processing,
)

__all__ = [
    # Errors
    "InterviewServiceError",
    "JobNotFoundError",
    "InterviewAlreadyExistsError",
    "InterviewNotFoundError",
    "QuestionNotFoundError",
    "AnswerAlreadyExistsError",
    # Questions
    "get_random_questions",
    "get_questions_by_skills",
    # Interviews
    "find_interview",
    "create_interview",
    "save_chunk_count",
    "update_answer",
    "submit_interview",
    "count_interviews",
    # Post-processing
    "PostProcessingError",
    "schedule_post_processing",
    "run_post_processing",
]
