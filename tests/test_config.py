"""Tests for application configuration."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from docchat.config import (
    Environment,
    GeminiSettings,
    PipelineSettings,
    QdrantSettings,
    Settings,
    get_settings,
)
from docchat.exceptions import ConfigurationError, ErrorCode

REQUIRED_ENV = {
    "GEMINI_API_KEY": "gemini-secret",
    "QDRANT_API_KEY": "qdrant-secret",
    "QDRANT_HOST": "https://qdrant.example:6333",
    "COLLECTION_NAME": "my_docs",
}


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run each test away from any local .env file."""
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()


class TestGeminiSettings:
    """Tests for Gemini configuration."""

    def test_default_values(self) -> None:
        """Defaults point at the public Gemini API."""
        settings = GeminiSettings(api_key="key")
        assert settings.base_url == "https://generativelanguage.googleapis.com/v1beta"
        assert settings.embedding_model == "embedding-001"
        assert settings.generation_model == "gemini-1.5-flash"
        assert settings.timeout == 30.0
        assert settings.temperature is None

    def test_api_key_is_secret(self) -> None:
        """API key should be masked when printed."""
        settings = GeminiSettings(api_key="super-secret")
        assert "super-secret" not in str(settings.api_key)
        assert "super-secret" not in repr(settings)
        assert settings.api_key.get_secret_value() == "super-secret"

    def test_api_key_required(self) -> None:
        """Missing API key is rejected."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(PydanticValidationError):
                GeminiSettings()

    def test_env_override(self) -> None:
        """Environment variables override defaults."""
        env = {"GEMINI_API_KEY": "k", "GEMINI_GENERATION_MODEL": "gemini-2.0-flash"}
        with patch.dict(os.environ, env, clear=True):
            settings = GeminiSettings()
            assert settings.generation_model == "gemini-2.0-flash"
            assert settings.api_key.get_secret_value() == "k"

    def test_reads_dotenv_file(self, tmp_path: Path) -> None:
        """Values can come from a .env file in the working directory."""
        (tmp_path / ".env").write_text("GEMINI_API_KEY=from-dotenv\n", encoding="utf-8")
        with patch.dict(os.environ, {}, clear=True):
            settings = GeminiSettings()
        assert settings.api_key.get_secret_value() == "from-dotenv"

    def test_frozen(self) -> None:
        """Settings cannot be mutated after loading."""
        settings = GeminiSettings(api_key="key")
        with pytest.raises(PydanticValidationError):
            settings.timeout = 5.0


class TestQdrantSettings:
    """Tests for Qdrant configuration."""

    def test_loaded_from_env(self) -> None:
        """Host, key and collection are read from QDRANT_HOST, QDRANT_API_KEY and COLLECTION_NAME."""
        with patch.dict(os.environ, REQUIRED_ENV, clear=True):
            settings = QdrantSettings()
        assert settings.host == "https://qdrant.example:6333"
        assert settings.api_key.get_secret_value() == "qdrant-secret"
        assert settings.collection_name == "my_docs"
        assert settings.dimensions == 768
        assert settings.timeout == 30

    def test_prefixed_collection_alias(self) -> None:
        """QDRANT_COLLECTION_NAME is accepted as well."""
        env = {
            "QDRANT_API_KEY": "k",
            "QDRANT_HOST": "http://localhost:6333",
            "QDRANT_COLLECTION_NAME": "aliased",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = QdrantSettings()
        assert settings.collection_name == "aliased"

    def test_missing_host_rejected(self) -> None:
        """Host is required."""
        env = {k: v for k, v in REQUIRED_ENV.items() if k != "QDRANT_HOST"}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(PydanticValidationError):
                QdrantSettings()


class TestPipelineSettings:
    """Tests for pipeline configuration."""

    def test_default_values(self) -> None:
        """Defaults match the fixed document path, chunk size and top-k."""
        settings = PipelineSettings()
        assert settings.document_path == "text.txt"
        assert settings.chunk_size == 500
        assert settings.top_k == 3

    def test_chunk_size_must_be_positive(self) -> None:
        """Zero chunk size is rejected."""
        with pytest.raises(PydanticValidationError):
            PipelineSettings(chunk_size=0)


class TestSettings:
    """Tests for main application settings."""

    def test_nested_settings_loaded(self) -> None:
        """Nested settings are initialized from the environment."""
        with patch.dict(os.environ, REQUIRED_ENV, clear=True):
            settings = Settings()
        assert isinstance(settings.gemini, GeminiSettings)
        assert isinstance(settings.qdrant, QdrantSettings)
        assert isinstance(settings.pipeline, PipelineSettings)
        assert settings.environment == Environment.DEVELOPMENT
        assert settings.log_level == "INFO"

    def test_environment_enum(self) -> None:
        """Environment can be set via string."""
        with patch.dict(os.environ, {**REQUIRED_ENV, "ENVIRONMENT": "production"}, clear=True):
            settings = Settings()
        assert settings.environment == Environment.PRODUCTION


class TestGetSettings:
    """Tests for settings loading at process entry."""

    def test_returns_settings_instance(self) -> None:
        """get_settings returns a Settings instance."""
        with patch.dict(os.environ, REQUIRED_ENV, clear=True):
            settings = get_settings()
        assert isinstance(settings, Settings)

    def test_caching(self) -> None:
        """Settings are cached."""
        with patch.dict(os.environ, REQUIRED_ENV, clear=True):
            settings1 = get_settings()
            settings2 = get_settings()
        assert settings1 is settings2

    @pytest.mark.parametrize("missing", sorted(REQUIRED_ENV))
    def test_missing_required_value(self, missing: str) -> None:
        """Any missing required value is a configuration error."""
        env = {k: v for k, v in REQUIRED_ENV.items() if k != missing}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                get_settings()

        assert exc_info.value.code == ErrorCode.CONFIGURATION_ERROR
        assert exc_info.value.details["problems"]
        assert any(
            problem.startswith(f"{missing}:")
            for problem in exc_info.value.details["problems"]
        )

    def test_all_missing_values_reported(self) -> None:
        """Problems from every section are reported together."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                get_settings()

        reported = {
            problem.split(":")[0] for problem in exc_info.value.details["problems"]
        }
        assert reported == set(REQUIRED_ENV)

    def test_invalid_environment_reported(self) -> None:
        """Top-level values are named by their variable."""
        env = {**REQUIRED_ENV, "ENVIRONMENT": "moon"}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                get_settings()

        assert exc_info.value.details["problems"][0].startswith("ENVIRONMENT:")
