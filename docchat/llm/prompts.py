"""Prompt templates for RAG."""

from abc import ABC, abstractmethod
from typing import Any


class PromptTemplate(ABC):
    """Abstract base class for prompt templates."""

    @abstractmethod
    def format(self, **kwargs: Any) -> str:
        """Format the template with provided variables.

        Args:
            **kwargs: Template variables.

        Returns:
            Formatted prompt string.
        """
        ...


class RAGPromptTemplate(PromptTemplate):
    """Prompt template for RAG queries.

    Puts the retrieved context and the question into one user prompt.
    """

    DEFAULT_USER_TEMPLATE = "Context:\n{context}\n\nQuestion: {question}\nAnswer:"

    def __init__(
        self,
        system_prompt: str | None = None,
        user_template: str | None = None,
    ) -> None:
        """Initialize the RAG prompt template.

        Args:
            system_prompt: Optional system instruction; none by default.
            user_template: Custom user message template.
        """
        self.system_prompt = system_prompt
        self.user_template = user_template or self.DEFAULT_USER_TEMPLATE

    def format(self, **kwargs: Any) -> str:
        """Format the user template.

        Args:
            **kwargs: Must include 'context' and 'question'.

        Returns:
            Formatted user prompt.
        """
        return self.user_template.format(**kwargs)

    def build_prompt(self, question: str, context: str) -> tuple[str | None, str]:
        """Build complete prompt from question and context.

        Args:
            question: User question.
            context: Retrieved context text.

        Returns:
            Tuple of (system_prompt, user_prompt).
        """
        return self.system_prompt, self.format(context=context, question=question)
