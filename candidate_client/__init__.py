"""
Candidate-side interview client.

- InterviewApiClient: async HTTP client for the interview API
- InterviewSession: question navigation and submission for one visit
- AttentionPolicy: fullscreen, tab-switch and keyboard policy
"""

from candidate_client.api import ApiError, InterviewApiClient
from candidate_client.attention import (
    AttentionPolicy,
    FullscreenError,
    FullscreenState,
    PageAdapter,
)
from candidate_client.session import InterviewSession

__all__ = [
    "ApiError",
    "InterviewApiClient",
    "AttentionPolicy",
    "FullscreenError",
    "FullscreenState",
    "PageAdapter",
    "InterviewSession",
]
