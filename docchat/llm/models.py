"""LLM data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from docchat.exceptions import DocChatError


class Role(str, Enum):
    """Message role in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A message in a conversation.

    Attributes:
        role: The role of the message sender.
        content: The message content.
    """

    role: Role = Field(description="Message role")
    content: str = Field(description="Message content")


class GenerationResult(BaseModel):
    """Result from LLM generation.

    Attributes:
        content: The generated text.
        model: Model used for generation.
        prompt_tokens: Number of tokens in the prompt.
        completion_tokens: Number of tokens in the completion.
        total_tokens: Total tokens used.
    """

    content: str = Field(description="Generated text")
    model: str = Field(description="Model used")
    prompt_tokens: int = Field(default=0, description="Prompt token count")
    completion_tokens: int = Field(default=0, description="Completion token count")
    total_tokens: int = Field(default=0, description="Total token count")


class AnswerOutcome(BaseModel):
    """Outcome of answering one question.

    Either carries the generated answer, or the code and message of the
    generation failure. Collapse to a printable string with `display_text`.
    """

    model_config = ConfigDict(frozen=True)

    answer: str | None = Field(default=None, description="Generated answer")
    error_code: str | None = Field(default=None, description="Failure error code")
    error_message: str | None = Field(default=None, description="Failure message")

    @classmethod
    def success(cls, answer: str) -> "AnswerOutcome":
        return cls(answer=answer)

    @classmethod
    def failure(cls, error: DocChatError) -> "AnswerOutcome":
        return cls(error_code=error.code.value, error_message=error.message)

    @property
    def succeeded(self) -> bool:
        return self.answer is not None

    def display_text(self, fallback: str) -> str:
        """Answer text, or `fallback` when generation failed."""
        return self.answer if self.answer is not None else fallback
