"""Answer generation module."""

from docchat.llm.client import GeminiClient, LLMClient
from docchat.llm.generator import FALLBACK_ANSWER, AnswerGenerator
from docchat.llm.models import AnswerOutcome, GenerationResult, Message, Role
from docchat.llm.prompts import PromptTemplate, RAGPromptTemplate

__all__ = [
    "FALLBACK_ANSWER",
    "AnswerGenerator",
    "AnswerOutcome",
    "GeminiClient",
    "GenerationResult",
    "LLMClient",
    "Message",
    "PromptTemplate",
    "RAGPromptTemplate",
    "Role",
]
