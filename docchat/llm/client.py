"""LLM client interface and Gemini implementation."""

from abc import ABC, abstractmethod
from typing import Any

import httpx

from docchat.config import GeminiSettings
from docchat.exceptions import ErrorCode, GenerationError
from docchat.llm.models import GenerationResult, Message, Role
from docchat.logging_config import get_logger

logger = get_logger(__name__)

HTTP_TOO_MANY_REQUESTS = 429

# Gemini calls the assistant side of a conversation "model".
_GEMINI_ROLES = {Role.USER: "user", Role.ASSISTANT: "model"}


class LLMClient(ABC):
    """Abstract base class for LLM clients.

    Defines the interface for generating text with LLMs.
    """

    @abstractmethod
    async def generate(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> GenerationResult:
        """Generate text from messages.

        Args:
            messages: Conversation messages.
            temperature: Sampling temperature override.
            max_tokens: Maximum tokens override.

        Returns:
            GenerationResult with generated text.

        Raises:
            GenerationError: If generation fails.
        """
        ...

    @abstractmethod
    async def list_models(self) -> list[str]:
        """List the models the provider exposes.

        Used as a lightweight connectivity check.

        Raises:
            GenerationError: If the provider cannot be reached.
        """
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name."""
        ...

    async def generate_text(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> GenerationResult:
        """Generate text from a simple prompt."""
        messages: list[Message] = []

        if system_prompt:
            messages.append(Message(role=Role.SYSTEM, content=system_prompt))

        messages.append(Message(role=Role.USER, content=prompt))

        return await self.generate(
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    async def close(self) -> None:
        """Release any held resources."""


class GeminiClient(LLMClient):
    """LLM client for the Gemini generateContent API."""

    def __init__(
        self,
        settings: GeminiSettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            settings: Gemini configuration.
            client: HTTP client (for testing).
        """
        self._settings = settings
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._settings.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self._settings.generation_model

    def _headers(self) -> dict[str, str]:
        return {"x-goog-api-key": self._settings.api_key.get_secret_value()}

    def _build_payload(
        self,
        messages: list[Message],
        temperature: float | None,
        max_tokens: int | None,
    ) -> dict[str, Any]:
        system_parts = [
            {"text": msg.content} for msg in messages if msg.role == Role.SYSTEM
        ]
        payload: dict[str, Any] = {
            "contents": [
                {"role": _GEMINI_ROLES[msg.role], "parts": [{"text": msg.content}]}
                for msg in messages
                if msg.role != Role.SYSTEM
            ],
        }
        if system_parts:
            payload["systemInstruction"] = {"parts": system_parts}

        generation_config: dict[str, Any] = {}
        if temperature is None:
            temperature = self._settings.temperature
        if temperature is not None:
            generation_config["temperature"] = temperature
        max_tokens = max_tokens or self._settings.max_output_tokens
        if max_tokens:
            generation_config["maxOutputTokens"] = max_tokens
        if generation_config:
            payload["generationConfig"] = generation_config

        return payload

    async def generate(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> GenerationResult:
        """Generate text using the generateContent API."""
        client = await self._get_client()
        model = self._settings.generation_model
        url = f"{self._settings.base_url}/models/{model}:generateContent"
        payload = self._build_payload(messages, temperature, max_tokens)

        try:
            response = await client.post(url, json=payload, headers=self._headers())
            response.raise_for_status()

        except httpx.TimeoutException as e:
            logger.error(f"Generation request timed out: {e!r}")
            raise GenerationError(
                "Generation request timed out",
                code=ErrorCode.GENERATION_TIMEOUT,
                details={"timeout": self._settings.timeout},
            ) from e

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"Generation request failed: {status}")

            if status == HTTP_TOO_MANY_REQUESTS:
                raise GenerationError(
                    "Rate limit exceeded",
                    code=ErrorCode.GENERATION_RATE_LIMIT,
                    details={"status_code": status},
                ) from e

            raise GenerationError(
                f"Generation service returned {status}",
                code=ErrorCode.GENERATION_SERVICE_ERROR,
                details={"status_code": status},
            ) from e

        except httpx.RequestError as e:
            logger.error(f"Generation connection error: {e!r}")
            raise GenerationError(
                f"Failed to connect to generation service: {e!r}",
                code=ErrorCode.GENERATION_SERVICE_ERROR,
                details={"model": model},
            ) from e

        # Parse response
        try:
            data = response.json()
            text = data["candidates"][0]["content"]["parts"][0]["text"]
            if not isinstance(text, str) or not text:
                raise ValueError("empty answer text")
            usage = data.get("usageMetadata") or {}
            model_version = data.get("modelVersion")
            return GenerationResult(
                content=text,
                model=model_version if isinstance(model_version, str) else model,
                prompt_tokens=usage.get("promptTokenCount") or 0,
                completion_tokens=usage.get("candidatesTokenCount") or 0,
                total_tokens=usage.get("totalTokenCount") or 0,
            )
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Invalid generation response: {e!r}")
            raise GenerationError(
                f"Invalid response from generation service: {e!r}",
                code=ErrorCode.GENERATION_PROTOCOL_ERROR,
                details={"error": str(e)},
            ) from e

    async def list_models(self) -> list[str]:
        """List available models (startup connectivity check)."""
        client = await self._get_client()
        url = f"{self._settings.base_url}/models"

        try:
            response = await client.get(url, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise GenerationError(
                f"Generation service connection failed: status {status}",
                code=ErrorCode.GENERATION_SERVICE_ERROR,
                details={"status_code": status},
            ) from e
        except httpx.RequestError as e:
            raise GenerationError(
                f"Generation service connection failed: {e!r}",
                code=ErrorCode.GENERATION_SERVICE_ERROR,
            ) from e

        try:
            models = response.json().get("models", [])
            return [entry["name"] for entry in models]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise GenerationError(
                f"Invalid model listing from generation service: {e!r}",
                code=ErrorCode.GENERATION_PROTOCOL_ERROR,
                details={"error": str(e)},
            ) from e
