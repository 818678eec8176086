"""Application configuration using Pydantic Settings.

All configuration is loaded from environment variables (or a local .env file).
No secrets are hardcoded. Settings are frozen once loaded and passed
explicitly into each client.
"""

from enum import Enum
from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from docchat.exceptions import ConfigurationError


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


def _section_config(env_prefix: str) -> SettingsConfigDict:
    return SettingsConfigDict(
        env_prefix=env_prefix,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )


class GeminiSettings(BaseSettings):
    """Gemini API configuration.

    One API key serves both embedding and generation.
    """

    model_config = _section_config("GEMINI_")

    api_key: SecretStr = Field(description="Gemini API key")
    base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Gemini REST API base URL",
    )
    embedding_model: str = Field(
        default="embedding-001",
        description="Model used for embeddings",
    )
    generation_model: str = Field(
        default="gemini-1.5-flash",
        description="Model used for answer generation",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Request timeout in seconds",
    )
    temperature: float | None = Field(
        default=None,
        description="Sampling temperature (provider default when unset)",
    )
    max_output_tokens: int | None = Field(
        default=None,
        description="Maximum tokens in response (provider default when unset)",
    )


class QdrantSettings(BaseSettings):
    """Qdrant vector database configuration."""

    model_config = SettingsConfigDict(
        **_section_config("QDRANT_"),
        populate_by_name=True,
    )

    host: str = Field(description="Qdrant server URL")
    api_key: SecretStr = Field(description="Qdrant API key")
    collection_name: str = Field(
        validation_alias=AliasChoices("COLLECTION_NAME", "QDRANT_COLLECTION_NAME"),
        description="Collection holding the document chunks",
    )
    dimensions: int = Field(
        default=768,
        gt=0,
        description="Vector dimensions of the collection",
    )
    timeout: int = Field(
        default=30,
        gt=0,
        description="Request timeout in seconds",
    )


class PipelineSettings(BaseSettings):
    """Indexing and retrieval parameters."""

    model_config = _section_config("PIPELINE_")

    document_path: str = Field(
        default="text.txt",
        description="Plain-text document to index",
    )
    chunk_size: int = Field(default=500, gt=0, description="Characters per chunk")
    top_k: int = Field(default=3, ge=1, description="Chunks retrieved per question")


class Settings(BaseSettings):
    """Main application settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    # Nested settings
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    qdrant: QdrantSettings = Field(default_factory=QdrantSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)


_SECTIONS: dict[str, type[BaseSettings]] = {
    "gemini": GeminiSettings,
    "qdrant": QdrantSettings,
    "pipeline": PipelineSettings,
}


def _describe_errors(
    error: PydanticValidationError,
    model: type[BaseSettings],
) -> list[str]:
    """Name each problem by the environment variable that sets it."""
    prefix = model.model_config.get("env_prefix", "")
    problems: list[str] = []
    for item in error.errors():
        location = "_".join(str(part) for part in item["loc"])
        # Aliased fields report their alias, which is already the variable name.
        if item["loc"] and item["loc"][0] in model.model_fields:
            location = prefix + location
        problems.append(f"{location.upper()}: {item['msg']}")
    return problems


def _configuration_error(problems: list[str]) -> ConfigurationError:
    return ConfigurationError(
        "Missing or invalid configuration: " + "; ".join(problems),
        details={"problems": problems},
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Every section is loaded before reporting, so one error lists all the
    missing or invalid variables.

    Returns:
        Settings instance loaded from environment.

    Raises:
        ConfigurationError: If a required value is missing or invalid.
    """
    sections: dict[str, BaseSettings] = {}
    problems: list[str] = []
    for name, section in _SECTIONS.items():
        try:
            sections[name] = section()
        except PydanticValidationError as e:
            problems.extend(_describe_errors(e, section))

    if problems:
        raise _configuration_error(problems)

    try:
        return Settings(**sections)
    except PydanticValidationError as e:
        raise _configuration_error(_describe_errors(e, Settings)) from e
