"""HTTP client for the interview lifecycle API."""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class ApiError(Exception):
    """Raised when the interview API fails or returns a non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    """Pull the message out of an error envelope, falling back to the raw body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if body.get("message"):
            return str(body["message"])
    return response.text


class InterviewApiClient:
    """
    Async client for the question and interview endpoints.

    ``base_url`` includes the API prefix, e.g. ``http://localhost:8000/api/v1``.
    Every call takes the candidate's bearer token explicitly since the token
    belongs to the auth context, not to the client.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "InterviewApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        token: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method,
                path,
                json=json,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            raise ApiError(f"{method} {path} failed: {e}") from e

        if response.is_error:
            message = _error_message(response)
            logger.debug(f"{method} {path} returned {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        return response.json()

    async def fetch_questions(self, token: str) -> List[Dict[str, Any]]:
        """Random question set for a new interview."""
        data = await self._request("GET", "/questions", token)
        return data["Questions"]

    async def fetch_questions_by_skills(self, token: str, job_id: int) -> List[Dict[str, Any]]:
        """Question set tailored to a job."""
        return await self._request("POST", "/questions/by-skills", token, json={"jobId": job_id})

    async def create_interview(
        self,
        token: str,
        user_id: int,
        job_id: int,
        question_ids: List[int],
    ) -> Dict[str, Any]:
        data = await self._request(
            "POST",
            "/interview",
            token,
            json={"user_id": user_id, "job_id": job_id, "question_ids": question_ids},
        )
        return data["interview"]

    async def save_chunk_count(
        self,
        token: str,
        user_id: int,
        job_id: int,
        question_id: int,
        number_of_chunks: int,
    ) -> str:
        data = await self._request(
            "POST",
            "/interview/chunks",
            token,
            json={
                "userID": user_id,
                "jobID": job_id,
                "questionID": question_id,
                "numberOfChunks": number_of_chunks,
            },
        )
        return data["message"]

    async def update_answer(
        self,
        token: str,
        user_id: int,
        job_id: int,
        question_id: int,
        transcription: str,
    ) -> str:
        data = await self._request(
            "POST",
            "/interview/answer",
            token,
            json={
                "user_id": user_id,
                "job_id": job_id,
                "question_id": question_id,
                "transcription": transcription,
            },
        )
        return data["message"]

    async def submit_interview(self, token: str, user_id: int, job_id: int) -> str:
        data = await self._request(
            "POST",
            "/interview/submit",
            token,
            json={"userId": user_id, "jobId": job_id},
        )
        return data["message"]

    async def count_interviews(self, token: str) -> int:
        """Interviews taken by the token's owner."""
        data = await self._request("GET", "/interview/count", token)
        return data["count"]
