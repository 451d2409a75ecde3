"""Evaluation agent scoring transcribed interview answers."""

import logging
from typing import Any, Dict

from agents.base import BaseAgent
from agents.common.utils import parse_json_response
from agents.evaluation.prompts import (
    TRANSCRIPTION_EVALUATION_SYSTEM_PROMPT,
    TRANSCRIPTION_EVALUATION_PROMPT,
)

logger = logging.getLogger(__name__)


class EvaluationError(Exception):
    """Raised when the model response cannot be turned into an evaluation."""


class TranscriptionEvaluationAgent(BaseAgent):
    """Scores one transcribed answer against its question."""

    def __init__(self, **kwargs: Any):
        super().__init__(
            name="transcription_evaluation",
            instructions=TRANSCRIPTION_EVALUATION_SYSTEM_PROMPT,
            **kwargs,
        )

    async def process(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """Evaluate an answer.

        Args:
            input_data: Dictionary with 'question', 'transcription' and
                optional 'question_type'

        Returns:
            Evaluation with score (0-10), summary, strengths and improvements
        """
        prompt = TRANSCRIPTION_EVALUATION_PROMPT.format(
            question=input_data["question"],
            question_type=input_data.get("question_type") or "general",
            transcription=input_data["transcription"],
        )

        response = await self.run(prompt)
        parsed = parse_json_response(response)
        if parsed is None or "score" not in parsed:
            raise EvaluationError("Model returned no usable evaluation")

        try:
            score = max(0, min(10, int(parsed["score"])))
        except (TypeError, ValueError) as exc:
            raise EvaluationError(f"Invalid score: {parsed['score']!r}") from exc

        return {
            "score": score,
            "summary": str(parsed.get("summary") or ""),
            "strengths": list(parsed.get("strengths") or []),
            "improvements": list(parsed.get("improvements") or []),
            "model": self.model,
        }
