"""Domain errors raised by the service layer.

Routes translate these into HTTP responses; the status code differs per
operation (a missing interview is a 400 on chunk updates but a 404 on
answer updates), so no status is attached here.
"""


class InterviewServiceError(Exception):
    """Base exception for interview flow errors."""

    message = "Interview service error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class JobNotFoundError(InterviewServiceError):
    message = "Job not found"


class InterviewAlreadyExistsError(InterviewServiceError):
    message = "Interview already exists for this user and job"


class InterviewNotFoundError(InterviewServiceError):
    message = "Interview not found"


class QuestionNotFoundError(InterviewServiceError):
    message = "Question not found"


class AnswerAlreadyExistsError(InterviewServiceError):
    message = "Answer already exists"
