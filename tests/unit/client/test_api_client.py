"""Tests for the interview API client."""

import json

import httpx
import pytest

from candidate_client.api import ApiError, InterviewApiClient


def make_client(handler):
    return InterviewApiClient("http://api.test/api/v1", transport=httpx.MockTransport(handler))


class TestInterviewApiClient:
    """Test requests and error mapping."""

    async def test_fetch_questions_sends_token(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers["authorization"]
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"Questions": [{"_id": 1, "question": "Q"}]})

        async with make_client(handler) as client:
            questions = await client.fetch_questions("tok")

        assert questions == [{"_id": 1, "question": "Q"}]
        assert seen == {"auth": "Bearer tok", "url": "http://api.test/api/v1/questions"}

    async def test_wire_field_names(self):
        bodies = {}

        def handler(request):
            bodies[request.url.path] = json.loads(request.content)
            if request.url.path.endswith("/interview"):
                return httpx.Response(201, json={"message": "ok", "interview": {"_id": 3}})
            return httpx.Response(200, json={"message": "ok"})

        async with make_client(handler) as client:
            interview = await client.create_interview("t", 1, 2, [5, 6])
            await client.save_chunk_count("t", 1, 2, 5, 3)
            await client.update_answer("t", 1, 2, 5, "answer")
            await client.submit_interview("t", 1, 2)

        assert interview == {"_id": 3}
        assert bodies["/api/v1/interview"] == {"user_id": 1, "job_id": 2, "question_ids": [5, 6]}
        assert bodies["/api/v1/interview/chunks"] == {
            "userID": 1, "jobID": 2, "questionID": 5, "numberOfChunks": 3,
        }
        assert bodies["/api/v1/interview/answer"]["transcription"] == "answer"
        assert bodies["/api/v1/interview/submit"] == {"userId": 1, "jobId": 2}

    async def test_count_and_by_skills(self):
        def handler(request):
            if request.url.path.endswith("/count"):
                return httpx.Response(200, json={"count": 4})
            assert json.loads(request.content) == {"jobId": 8}
            return httpx.Response(200, json=[{"_id": 1}])

        async with make_client(handler) as client:
            assert await client.count_interviews("t") == 4
            assert await client.fetch_questions_by_skills("t", 8) == [{"_id": 1}]

    async def test_error_envelope_message(self):
        def handler(request):
            return httpx.Response(
                409,
                json={"error": {"code": "HTTP_EXCEPTION", "message": "Answer already exists and cannot be updated."}},
            )

        async with make_client(handler) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.update_answer("t", 1, 2, 3, "again")

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "Answer already exists and cannot be updated."

    async def test_plain_text_error(self):
        async with make_client(lambda request: httpx.Response(502, text="Bad gateway")) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.count_interviews("t")

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "Bad gateway"

    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused")

        async with make_client(handler) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.fetch_questions("t")

        assert exc_info.value.status_code is None
