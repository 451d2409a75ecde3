"""Client for the external video-processing service.

Recorded answers arrive as numbered chunks in cloud storage; the media
service stitches and transcodes them and returns the final video location.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from core.config import settings

logger = logging.getLogger(__name__)


class MediaServiceError(Exception):
    """Raised when the media service rejects or fails a request."""


class VideoProcessingService:
    """Async wrapper around the media service HTTP API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the media client.

        Args:
            base_url: Media service base URL (defaults to MEDIA_SERVICE_URL)
            timeout: Request timeout in seconds
            transport: Custom httpx transport, used in tests
        """
        self.base_url = (base_url or settings.media_service_url).rstrip("/")
        self.timeout = timeout or settings.media_service_timeout
        self._transport = transport

    async def process_video(
        self,
        user_id: int,
        job_id: int,
        question_id: int,
        number_of_chunks: int,
    ) -> Dict[str, Any]:
        """
        Ask the media service to assemble the recording for one question.

        Returns:
            Service response; ``video_url`` is present when the video is ready
        """
        payload = {
            "user_id": user_id,
            "job_id": job_id,
            "question_id": question_id,
            "number_of_chunks": number_of_chunks,
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post("/process-video", json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise MediaServiceError(
                f"Media service returned {e.response.status_code} for question {question_id}"
            ) from e
        except httpx.HTTPError as e:
            raise MediaServiceError(f"Media service unreachable: {e}") from e

        logger.info(f"Processed video for user {user_id} job {job_id} question {question_id}")
        return response.json() if response.content else {}
