"""Base agent class for Gemini-backed agents."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from google.genai import types


class BaseAgent(ABC):
    """Base class for all AI agents using Google Gemini."""

    def __init__(
        self,
        name: str,
        instructions: str,
        model: Optional[str] = None,
        client: Any = None,
    ):
        """Initialize the agent.

        Args:
            name: Agent name
            instructions: System instructions for the agent
            model: Gemini model to use (defaults to EVALUATION_MODEL)
            client: Pre-built ``genai.Client``; created lazily when omitted
        """
        from core.config import settings

        self.name = name
        self.instructions = instructions
        self.model = model or settings.evaluation_model
        self._client = client

    def _get_client(self):
        """Get or create the Gemini client."""
        if self._client is None:
            from google import genai
            from core.config import settings

            if not settings.google_api_key:
                raise RuntimeError("GOOGLE_API_KEY is not configured")
            self._client = genai.Client(api_key=settings.google_api_key)
        return self._client

    @abstractmethod
    async def process(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """Process input data and return results."""

    async def run(self, prompt: str, json_output: bool = True) -> str:
        """Run the agent with a prompt.

        Args:
            prompt: User prompt
            json_output: Ask the model for a JSON response

        Returns:
            Model response text
        """
        client = self._get_client()

        response = await client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=self.instructions,
                response_mime_type="application/json" if json_output else None,
                temperature=0.2,
            ),
        )

        return response.text or ""
