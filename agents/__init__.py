"""
Agents package for Gemini-backed AI agents.

Each agent follows a consistent structure with agent.py and prompts.py.
"""

from agents.base import BaseAgent
from agents.evaluation.agent import TranscriptionEvaluationAgent, EvaluationError

__all__ = [
    "BaseAgent",
    "TranscriptionEvaluationAgent",
    "EvaluationError",
]
