"""Answer generation with failures converted to values."""

from docchat.exceptions import GenerationError
from docchat.llm.client import LLMClient
from docchat.llm.models import AnswerOutcome
from docchat.llm.prompts import RAGPromptTemplate
from docchat.logging_config import get_logger

logger = get_logger(__name__)

FALLBACK_ANSWER = (
    "Sorry, I couldn't process your request. "
    "Please check your API key and network connection."
)


class AnswerGenerator:
    """Answers a question from retrieved context.

    Generation failures never propagate: they come back as a failed
    AnswerOutcome so the conversation can carry on.
    """

    def __init__(
        self,
        llm_client: LLMClient,
        prompt_template: RAGPromptTemplate | None = None,
    ) -> None:
        self._llm_client = llm_client
        self._prompt_template = prompt_template or RAGPromptTemplate()

    async def generate(self, query: str, context: str) -> AnswerOutcome:
        """Generate an answer for `query` grounded in `context`.

        Args:
            query: The user's question.
            context: Retrieved context text (may be empty).

        Returns:
            Successful outcome with the answer, or a failed outcome.
        """
        system_prompt, user_prompt = self._prompt_template.build_prompt(
            question=query,
            context=context,
        )

        try:
            result = await self._llm_client.generate_text(
                prompt=user_prompt,
                system_prompt=system_prompt,
            )
        except GenerationError as e:
            logger.error(
                f"Answer generation failed: {e.message}",
                extra={"error_code": e.code.value, "details": e.details},
            )
            return AnswerOutcome.failure(e)

        logger.debug(
            "Answer generated",
            extra={"model": result.model, "tokens_used": result.total_tokens},
        )
        return AnswerOutcome.success(result.content)
