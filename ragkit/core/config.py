"""Global configuration (12-factor style).

Environment variables (all optional, see `.env.example`):

* ``OPENAI_API_KEY``  - enables the OpenAI chat model and embeddings
* ``CHAT_MODEL``      - default: ``"gpt-3.5-turbo"``
* ``TEMPERATURE``     - default: ``0.7``
* ``MAX_TOKENS``      - default: ``1000``
* ``EMBEDDING_MODEL`` - default: ``"text-embedding-3-small"``
* ``EMBEDDING_DIM``   - default: ``384`` (offline embeddings only)
* ``CHUNK_SIZE``      - default: ``200``
* ``CHUNK_OVERLAP``   - default: ``20``
* ``RETRIEVER_K``     - default: ``2``
* ``SOURCE_URL``      - page loaded by the RAG scripts
* ``LOG_LEVEL``       - default: ``"INFO"``

Usage:

    from ragkit.core.config import Settings
    settings = Settings()  # auto-loads env vars and .env
    splitter_config = settings.splitter_config()
"""

from __future__ import annotations

from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from ragkit.utils.text_splitter import DEFAULT_SEPARATORS
from ragkit.utils.text_splitter import SplitterConfig


class Settings(BaseSettings):
    """Typed view over process environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openai_api_key: str | None = None

    chat_model: str = "gpt-3.5-turbo"
    temperature: float = 0.7
    max_tokens: int = 1_000

    embedding_model: str = "text-embedding-3-small"
    embedding_dim: int = 384

    # Splitting & retrieval
    chunk_size: int = 200
    chunk_overlap: int = 20
    retriever_k: int = 2

    source_url: str = "https://python.langchain.com/v0.1/docs/expression_language/"

    log_level: str = "INFO"

    @property
    def openai_configured(self) -> bool:
        return bool(self.openai_api_key)

    def splitter_config(self, **overrides) -> SplitterConfig:
        """Build a validated :class:`SplitterConfig` from these settings.

        Keyword overrides win over the environment, e.g. values passed on
        the command line. Raises ``ConfigurationError`` for invalid values.
        """
        params = {
            "chunk_size": self.chunk_size,
            "chunk_overlap": self.chunk_overlap,
            "separators": DEFAULT_SEPARATORS,
        }
        params.update({k: v for k, v in overrides.items() if v is not None})
        return SplitterConfig(**params)
